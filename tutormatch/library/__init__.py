"""Tutor content library helpers."""

from .quota import (
    ContentType,
    QuotaCheck,
    QuotaError,
    UploadQuota,
    check_quota,
    validate_upload,
)

__all__ = [
    "UploadQuota",
    "QuotaCheck",
    "ContentType",
    "QuotaError",
    "check_quota",
    "validate_upload",
]
