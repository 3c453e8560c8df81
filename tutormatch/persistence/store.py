"""Profile store backed by the local database."""

from typing import List, Optional

from sqlalchemy.orm import Session

from tutormatch.domain.models import Learner, Tutor

from .repositories import LearnerRepository, TutorRepository


class SqlProfileStore:
    """Read learner and tutor snapshots through the repositories.

    Bound to the caller's session; open one per unit of work:

        >>> with get_session() as session:
        ...     service = DiscoveryService(SqlProfileStore(session))
    """

    def __init__(self, session: Session):
        self.learners = LearnerRepository(session)
        self.tutors = TutorRepository(session)

    def get_learner(self, learner_id: str) -> Optional[Learner]:
        return self.learners.get_by_id(learner_id)

    def list_approved_tutors(self) -> List[Tutor]:
        return self.tutors.list_approved()
