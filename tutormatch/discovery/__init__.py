"""Tutor discovery for learners.

Public API:
    - DiscoveryService: "matching your subjects" and "all tutors" listings
    - ProfileStore: protocol the service reads profiles through
    - DiscoveryError, LearnerNotFoundError
"""

from .exceptions import DiscoveryError, LearnerNotFoundError
from .service import DiscoveryService
from .store import ProfileStore

__all__ = [
    "DiscoveryService",
    "ProfileStore",
    "DiscoveryError",
    "LearnerNotFoundError",
]
