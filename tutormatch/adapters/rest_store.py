"""Profile store backed by the hosted backend's REST (PostgREST) API.

API Details:
    Tutors:   GET {base_url}/rest/v1/teachers?approved=eq.true&select=*
    Learner:  GET {base_url}/rest/v1/students?id=eq.{id}&select=*
    Auth:     ``apikey`` header plus ``Authorization: Bearer <key>``
    Response: JSON array of rows
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

import requests

from tutormatch.domain.models import Learner, Tutor
from tutormatch.logging import get_logger

from .exceptions import (
    AdapterConfigurationError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)

logger = get_logger(__name__, component="adapter")


class RestProfileStore:
    """Reads learner and tutor snapshots from the hosted backend.

    Rows that cannot be turned into domain models are skipped with a
    warning, so one bad profile never hides the rest of the roster.
    Transport and HTTP failures raise AdapterError subclasses.

    Attributes:
        base_url: Backend root URL without trailing slash
        timeout: HTTP request timeout in seconds
    """

    ADAPTER_NAME = "rest"
    TUTORS_PATH = "/rest/v1/teachers"
    LEARNERS_PATH = "/rest/v1/students"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: int = 30,
        user_agent: str = "TutorMatch/1.0",
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the store.

        Args:
            base_url: Backend root URL (e.g. https://project.example.co)
            api_key: Backend API key
            timeout: HTTP request timeout in seconds (5-300)
            user_agent: User-Agent header for requests
            session: Optional preconfigured session (tests inject a fake)

        Raises:
            AdapterConfigurationError: If any argument is invalid
        """
        if not base_url or not base_url.strip():
            raise AdapterConfigurationError("base_url cannot be empty")
        if not api_key or not api_key.strip():
            raise AdapterConfigurationError("api_key cannot be empty")
        if not 5 <= timeout <= 300:
            raise AdapterConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )

        self.base_url = base_url.strip().rstrip("/")
        self.timeout = timeout

        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "User-Agent": user_agent,
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            }
        )

    def get_learner(self, learner_id: str) -> Optional[Learner]:
        """Fetch one learner by id.

        Returns:
            Learner, or None if no row matches or the row is unusable

        Raises:
            AdapterError: On transport, HTTP or response format failures
        """
        rows = self._get_rows(
            self.LEARNERS_PATH, params={"id": f"eq.{learner_id}", "select": "*"}
        )
        if not rows:
            return None

        try:
            return Learner.from_record(_flatten_profile(rows[0]))
        except (ValueError, TypeError) as e:
            logger.warning(
                "Failed to transform learner row",
                extra={
                    "event": "adapter.transform_failed",
                    "learner_id": learner_id,
                    "error": str(e),
                },
            )
            return None

    def list_approved_tutors(self) -> List[Tutor]:
        """Fetch every approved tutor.

        Raises:
            AdapterError: On transport, HTTP or response format failures
        """
        rows = self._get_rows(
            self.TUTORS_PATH, params={"approved": "eq.true", "select": "*"}
        )

        tutors = []
        for row in rows:
            try:
                tutors.append(Tutor.from_record(_flatten_profile(row)))
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning(
                    "Failed to transform tutor row",
                    extra={
                        "event": "adapter.transform_failed",
                        "tutor_id": row.get("id") if isinstance(row, dict) else None,
                        "error": str(e),
                    },
                )

        logger.info(
            "Fetched approved tutors",
            extra={
                "event": "adapter.fetch.completed",
                "adapter": self.ADAPTER_NAME,
                "rows": len(rows),
                "count": len(tutors),
            },
        )
        return tutors

    def _get_rows(self, path: str, params: Dict[str, str]) -> List[Any]:
        data = self._make_request(f"{self.base_url}{path}", params=params)
        if not isinstance(data, list):
            raise AdapterResponseError(
                f"Expected JSON array response from {path}, got {type(data).__name__}"
            )
        return data

    def _make_request(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            AdapterHTTPError: On 4xx or 5xx status, or when the request fails outright
            AdapterTimeoutError: On request timeout
            AdapterResponseError: On invalid JSON
        """
        logger.debug(
            f"HTTP GET request to {url}",
            extra={"event": "adapter.fetch.request", "url": url, "timeout": self.timeout},
        )

        try:
            response = self._session.request(
                method="GET",
                url=url,
                params=params,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={"event": "adapter.fetch.retryable_error", "error_type": "Timeout"},
            )
            raise AdapterTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds", url=url
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={"event": "adapter.fetch.error", "error_type": type(e).__name__},
            )
            raise AdapterHTTPError(f"Request to {url} failed: {e}", status_code=0, url=url) from e

        if response.status_code >= 400:
            is_retryable = response.status_code >= 500
            logger.log(
                logging.WARNING if is_retryable else logging.ERROR,
                f"HTTP {response.status_code} error from {url}",
                extra={
                    "event": "adapter.fetch.retryable_error" if is_retryable else "adapter.fetch.error",
                    "status_code": response.status_code,
                },
            )
            raise AdapterHTTPError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )

        try:
            return response.json()
        except ValueError as e:
            # requests' JSONDecodeError subclasses ValueError
            logger.error(
                f"Failed to parse JSON response from {url}",
                extra={"event": "adapter.fetch.error", "error_type": "JSONDecodeError"},
            )
            raise AdapterResponseError(f"Failed to parse JSON response from {url}: {e}") from e


def _flatten_profile(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Lift display fields from an embedded ``profiles`` object onto the row.

    The teachers endpoint can embed the joined profile row; fields already
    present on the row win.
    """
    flat = dict(row)
    profile = flat.pop("profiles", None)
    if isinstance(profile, list):
        profile = profile[0] if profile else None
    if isinstance(profile, Mapping):
        for key in ("full_name",):
            if flat.get(key) is None and profile.get(key) is not None:
                flat[key] = profile[key]
    return flat
