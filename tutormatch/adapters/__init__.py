"""Adapters for reading profiles from the hosted backend."""

from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)
from .rest_store import RestProfileStore

__all__ = [
    "RestProfileStore",
    "AdapterError",
    "AdapterHTTPError",
    "AdapterTimeoutError",
    "AdapterResponseError",
    "AdapterConfigurationError",
]
