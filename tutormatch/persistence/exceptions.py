"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError so callers can
catch every database failure with a single except clause.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when database connection or initialization fails.

    Examples:
    - Invalid database URL
    - Database file not accessible
    - Database used before init_database() was called
    """

    pass


class RecordNotFoundError(PersistenceError):
    """Raised when an operation needs a record that does not exist.

    Lookups return None instead; this is for updates such as approving a
    tutor that was never registered.
    """

    pass


class DataIntegrityError(PersistenceError):
    """Raised when a database constraint is violated."""

    pass
