"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

# Roughly the diameter of Zimbabwe; larger radii make the distance filter a no-op
LARGE_RADIUS_KM = 1000


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for settings that are valid but probably unintended.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    matching = config_dict.get("matching", {})
    if isinstance(matching, dict):
        max_distance = matching.get("max_distance_km")
        if isinstance(max_distance, (int, float)) and max_distance > LARGE_RADIUS_KM:
            warning_messages.append(
                f"max_distance_km ({max_distance}) is larger than {LARGE_RADIUS_KM} km "
                "and will rarely exclude anyone"
            )

        if matching.get("require_subject_overlap") is False and "default_limit" not in matching:
            warning_messages.append(
                "require_subject_overlap is false and no default_limit is set; "
                "listings will include every approved tutor"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
