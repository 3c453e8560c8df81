"""Custom exceptions for backend adapters."""


class AdapterError(Exception):
    """Base exception for all adapter errors.

    Catching this catches any failure talking to the hosted backend.
    """

    pass


class AdapterHTTPError(AdapterError):
    """HTTP request failed or returned a 4xx/5xx status.

    A status_code of 0 means no response was received (connection refused,
    DNS failure, and so on).
    """

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url

    @property
    def is_retryable(self) -> bool:
        """True for server errors and failures with no response."""
        return self.status_code == 0 or self.status_code >= 500


class AdapterTimeoutError(AdapterError):
    """HTTP request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class AdapterResponseError(AdapterError):
    """Response could not be parsed or had an unexpected shape."""

    pass


class AdapterConfigurationError(AdapterError):
    """Invalid adapter configuration (bad URL, empty key, timeout out of range)."""

    pass
