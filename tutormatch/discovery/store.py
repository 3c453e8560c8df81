"""Read contract between discovery and whatever holds the profiles."""

from typing import List, Optional, Protocol, runtime_checkable

from tutormatch.domain.models import Learner, Tutor


@runtime_checkable
class ProfileStore(Protocol):
    """Supplies learner and tutor snapshots to the discovery service.

    Implementations: SqlProfileStore (local database) and RestProfileStore
    (hosted backend). Failures are raised in the implementation's own
    exception hierarchy.
    """

    def get_learner(self, learner_id: str) -> Optional[Learner]:
        """Return the learner, or None if unknown."""
        ...

    def list_approved_tutors(self) -> List[Tutor]:
        """Return every tutor visible in the marketplace."""
        ...
