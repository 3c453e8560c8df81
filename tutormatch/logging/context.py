"""Context propagation for structured logging.

Fields pushed here are added to every log record emitted inside the scope,
for example the learner a discovery request is serving. Context lives in a
ContextVar, so concurrent requests in threads or tasks do not see each
other's fields.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("tutormatch_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active logging context."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the logging context.

    Args:
        **kwargs: Fields to add; existing keys are overwritten

    Returns:
        Token for pop_log_context()

    Example:
        >>> token = push_log_context(learner_id="stu-42")
        >>> pop_log_context(token)
    """
    current = LogContextVar.get()
    return LogContextVar.set({**current, **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the context saved by push_log_context()."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop all context fields. Used by tests."""
    LogContextVar.set({})


class log_context:
    """Context manager that scopes logging fields to a block.

    Example:
        >>> with log_context(learner_id="stu-42", listing="matching"):
        ...     logger.info("Ranking tutors")
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
