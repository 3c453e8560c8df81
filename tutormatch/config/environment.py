"""Environment variable loading and validation."""

import os
from typing import Optional
from urllib.parse import urlparse

from .exceptions import ConfigurationError

DEFAULT_DATABASE_URL = "sqlite:///./data/tutormatch.db"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        backend_url: Optional[str] = None,
        backend_api_key: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.database_url = database_url or DEFAULT_DATABASE_URL
        self.backend_url = backend_url.rstrip("/") if backend_url else None
        self.backend_api_key = backend_api_key
        self.log_level = log_level
        self.environment = environment or "local"


def load_environment_config(require_backend: bool = False) -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - DATABASE_URL: SQLAlchemy URL of the local profile store
      (default: sqlite:///./data/tutormatch.db)
    - BACKEND_URL: Base URL of the hosted backend (required for the rest store)
    - BACKEND_API_KEY: API key for the hosted backend (required for the rest store)
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label for logs (default: local)

    Args:
        require_backend: Whether BACKEND_URL and BACKEND_API_KEY must be set

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If variables are missing or invalid
    """
    errors = []

    database_url = os.getenv("DATABASE_URL")
    backend_url = os.getenv("BACKEND_URL")
    backend_api_key = os.getenv("BACKEND_API_KEY")
    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")

    if require_backend:
        if not backend_url:
            errors.append("Missing required environment variable: BACKEND_URL")
        if not backend_api_key:
            errors.append("Missing required environment variable: BACKEND_API_KEY")

    if backend_url:
        parsed = urlparse(backend_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append(
                f"Invalid BACKEND_URL: '{backend_url}'. Must be an http(s) URL."
            )

    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        else:
            log_level = log_level.upper()

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=["Copy .env.example to .env and fill in your credentials"],
            store_backend="rest" if require_backend else None,
        )

    return EnvironmentConfig(
        database_url=database_url,
        backend_url=backend_url,
        backend_api_key=backend_api_key,
        log_level=log_level,
        environment=environment,
    )
