"""Upload quotas for tutor library content (videos and notes).

Each tutor has a count limit per content type and a total storage limit.
check_quota decides whether one more upload fits; validate_upload also
enforces the per-file size cap first.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class QuotaError(Exception):
    """Raised for an unknown content type or invalid quota inputs."""

    pass


class ContentType(str, Enum):
    VIDEO = "video"
    NOTE = "note"


DEFAULT_MAX_FILE_SIZE_MB = 100


@dataclass
class UploadQuota:
    """A tutor's current usage and limits.

    Attributes:
        videos_count: Videos uploaded so far
        notes_count: Notes uploaded so far
        total_storage_mb: Storage used so far in MB
        videos_limit: Maximum number of videos
        notes_limit: Maximum number of notes
        storage_limit_mb: Maximum total storage in MB
    """

    videos_count: int = 0
    notes_count: int = 0
    total_storage_mb: float = 0.0
    videos_limit: int = 10
    notes_limit: int = 20
    storage_limit_mb: float = 500

    def usage(self, content_type: ContentType):
        """(count, limit) for a content type."""
        if content_type == ContentType.VIDEO:
            return self.videos_count, self.videos_limit
        return self.notes_count, self.notes_limit


@dataclass(frozen=True)
class QuotaCheck:
    """Outcome of a quota check.

    When allowed is False, reason explains why; current and limit are set
    when a count or storage limit was hit. When allowed is True, the
    remaining_* fields describe what is left before this upload.
    """

    allowed: bool
    reason: Optional[str] = None
    current: Optional[float] = None
    limit: Optional[float] = None
    remaining_videos: Optional[int] = None
    remaining_notes: Optional[int] = None
    remaining_storage_mb: Optional[float] = None


def check_quota(
    quota: UploadQuota,
    content_type: Union[ContentType, str],
    file_size_mb: float,
) -> QuotaCheck:
    """Check whether one more upload of the given type and size fits.

    Args:
        quota: Current usage and limits
        content_type: "video" or "note"
        file_size_mb: Size of the file to upload in MB

    Returns:
        QuotaCheck

    Raises:
        QuotaError: If content_type is unknown or file_size_mb is negative
    """
    content_type = _parse_content_type(content_type)
    if file_size_mb < 0:
        raise QuotaError(f"file_size_mb must be non-negative, got: {file_size_mb}")

    count, limit = quota.usage(content_type)
    if count >= limit:
        return QuotaCheck(
            allowed=False,
            reason=f"{content_type.value.capitalize()} limit reached ({count}/{limit})",
            current=count,
            limit=limit,
        )

    if quota.total_storage_mb + file_size_mb > quota.storage_limit_mb:
        return QuotaCheck(
            allowed=False,
            reason=(
                f"Storage limit exceeded ({quota.total_storage_mb:.2f} MB used, "
                f"{file_size_mb:.2f} MB requested, {quota.storage_limit_mb} MB allowed)"
            ),
            current=quota.total_storage_mb,
            limit=quota.storage_limit_mb,
        )

    return QuotaCheck(
        allowed=True,
        remaining_videos=max(0, quota.videos_limit - quota.videos_count),
        remaining_notes=max(0, quota.notes_limit - quota.notes_count),
        remaining_storage_mb=max(0.0, quota.storage_limit_mb - quota.total_storage_mb),
    )


def validate_upload(
    quota: UploadQuota,
    content_type: Union[ContentType, str],
    file_size_mb: float,
    max_size_mb: float = DEFAULT_MAX_FILE_SIZE_MB,
) -> QuotaCheck:
    """Check the per-file size cap, then the quota."""
    if file_size_mb > max_size_mb:
        return QuotaCheck(
            allowed=False,
            reason=(
                f"File size ({file_size_mb:.2f} MB) exceeds the maximum "
                f"allowed size of {max_size_mb} MB"
            ),
            current=file_size_mb,
            limit=max_size_mb,
        )
    return check_quota(quota, content_type, file_size_mb)


def _parse_content_type(value: Union[ContentType, str]) -> ContentType:
    try:
        return ContentType(value)
    except ValueError as e:
        raise QuotaError(f"Unknown content type: {value!r} (expected 'video' or 'note')") from e
