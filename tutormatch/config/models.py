"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from tutormatch.matching.models import MatchOptions


class StoreBackend(str, Enum):
    """Where learner and tutor profiles are read from."""

    SQL = "sql"
    REST = "rest"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class MatchingConfig(BaseModel):
    """Default matcher behaviour for discovery requests."""

    require_subject_overlap: bool = Field(
        True, description="Only list tutors sharing a subject with the learner"
    )
    max_distance_km: Optional[float] = Field(
        None,
        gt=0,
        allow_inf_nan=False,
        description="Drop tutors farther than this many kilometres",
    )
    default_limit: Optional[int] = Field(
        None, ge=1, description="Maximum number of tutors returned per listing"
    )

    def to_options(self) -> MatchOptions:
        """Build the MatchOptions these settings describe."""
        return MatchOptions(
            require_subject_overlap=self.require_subject_overlap,
            max_distance_km=self.max_distance_km,
            limit=self.default_limit,
        )


class StoreConfig(BaseModel):
    """Profile store selection."""

    backend: StoreBackend = Field(StoreBackend.SQL, description="Profile store backend")

    model_config = {"use_enum_values": True}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AdvancedConfig(BaseModel):
    """Advanced runtime settings."""

    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Request timeout for backend API calls (seconds)"
    )
    user_agent: str = Field(
        "TutorMatch/1.0",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """Strip whitespace from user agent."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object for Tutor Match.

    Every section is optional; an empty mapping yields the defaults.
    """

    matching: MatchingConfig = Field(
        default_factory=MatchingConfig, description="Matcher defaults"
    )
    store: StoreConfig = Field(default_factory=StoreConfig, description="Profile store")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    advanced: AdvancedConfig = Field(
        default_factory=AdvancedConfig, description="Advanced runtime settings"
    )

    model_config = {"extra": "forbid"}
