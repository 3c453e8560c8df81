"""Persistence layer for learner and tutor profiles using SQLAlchemy.

Public API:
    # Database initialization and session management
    - init_database(database_url: str) -> None
    - get_session() -> ContextManager[Session]
    - close_database() -> None
    - get_engine() -> Engine

    # Repositories and store
    - LearnerRepository: learner profile CRUD
    - TutorRepository: tutor profile CRUD and approval
    - SqlProfileStore: ProfileStore implementation over the repositories

    # Exceptions
    - PersistenceError, DatabaseConnectionError, RecordNotFoundError, DataIntegrityError

Example usage:
    >>> from tutormatch.persistence import init_database, get_session, TutorRepository
    >>> init_database("sqlite:///./data/tutormatch.db")
    >>> with get_session() as session:
    ...     tutors = TutorRepository(session).list_approved()
"""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import (
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
    RecordNotFoundError,
)
from .repositories import LearnerRepository, TutorRepository
from .store import SqlProfileStore

__all__ = [
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    "LearnerRepository",
    "TutorRepository",
    "SqlProfileStore",
    "PersistenceError",
    "DatabaseConnectionError",
    "RecordNotFoundError",
    "DataIntegrityError",
]
