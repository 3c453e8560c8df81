"""Structured logging helpers for Tutor Match."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that stamps a component name on every record.

    Fields passed in a call's ``extra`` take precedence over the adapter's.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Get a logger, optionally bound to a component.

    Args:
        name: Logger name (typically __name__)
        component: Component label added to every record (e.g. "discovery")

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="discovery")
        >>> logger.info("Listing tutors", extra={"event": "discovery.started"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
