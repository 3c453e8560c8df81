"""Configuration management module for Tutor Match."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_app_config
from .models import (
    AdvancedConfig,
    AppConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    MatchingConfig,
    StoreBackend,
    StoreConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "parse_app_config",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "MatchingConfig",
    "StoreConfig",
    "LoggingConfig",
    "AdvancedConfig",
    "EnvironmentConfig",
    # Enums
    "StoreBackend",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
