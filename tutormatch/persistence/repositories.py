"""Data access layer (repositories) for learner and tutor profiles.

Repositories encapsulate database operations and return domain models
rather than ORM models. They work inside the caller's session and never
commit; get_session() owns the transaction.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tutormatch.domain.models import Learner, Tutor
from tutormatch.utils.timestamps import format_timestamp, utc_now

from .exceptions import DataIntegrityError, PersistenceError, RecordNotFoundError
from .schema import LearnerModel, TutorModel

logger = logging.getLogger(__name__)


class LearnerRepository:
    """Repository for learner profile operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, learner_id: str) -> Optional[Learner]:
        """Retrieve a learner by primary key.

        Returns:
            Learner domain model if found, None otherwise

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            learner_model = self.session.get(LearnerModel, learner_id)
            if learner_model is None:
                return None
            return learner_model.to_domain()

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving learner {learner_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve learner: {e}") from e

    def upsert(self, learner: Learner) -> Learner:
        """Insert a new learner or update an existing one.

        Args:
            learner: Learner domain model to persist

        Returns:
            Persisted Learner domain model

        Raises:
            DataIntegrityError: On constraint violation
            PersistenceError: If database error occurs
        """
        try:
            existing = self.session.get(LearnerModel, learner.id)

            if existing:
                existing.apply(learner)
                self.session.flush()
                return existing.to_domain()

            learner_model = LearnerModel.from_domain(learner)
            self.session.add(learner_model)
            self.session.flush()
            return learner_model.to_domain()

        except IntegrityError as e:
            logger.error(f"Integrity error upserting learner {learner.id}: {e}", exc_info=True)
            raise DataIntegrityError(
                f"Failed to upsert learner due to constraint violation: {e}"
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Error upserting learner {learner.id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to upsert learner: {e}") from e


class TutorRepository:
    """Repository for tutor profile and approval operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, tutor_id: str) -> Optional[Tutor]:
        """Retrieve a tutor by primary key.

        Returns:
            Tutor domain model if found, None otherwise

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            tutor_model = self.session.get(TutorModel, tutor_id)
            if tutor_model is None:
                return None
            return tutor_model.to_domain()

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving tutor {tutor_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve tutor: {e}") from e

    def list_approved(self) -> List[Tutor]:
        """List approved tutors in insertion order.

        Tutors without a location are included; the matcher decides what
        to do with them.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = (
                select(TutorModel)
                .where(TutorModel.approved.is_(True))
                .order_by(TutorModel.created_at.asc(), TutorModel.id.asc())
            )
            tutor_models = self.session.execute(stmt).scalars().all()
            return [tutor_model.to_domain() for tutor_model in tutor_models]

        except SQLAlchemyError as e:
            logger.error(f"Error listing approved tutors: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list approved tutors: {e}") from e

    def list_pending(self) -> List[Tutor]:
        """List tutors still waiting for admin approval, oldest first.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = (
                select(TutorModel)
                .where(TutorModel.approved.is_(False))
                .order_by(TutorModel.created_at.asc(), TutorModel.id.asc())
            )
            tutor_models = self.session.execute(stmt).scalars().all()
            return [tutor_model.to_domain() for tutor_model in tutor_models]

        except SQLAlchemyError as e:
            logger.error(f"Error listing pending tutors: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list pending tutors: {e}") from e

    def upsert(self, tutor: Tutor) -> Tutor:
        """Insert a new tutor or update an existing one.

        Raises:
            DataIntegrityError: On constraint violation
            PersistenceError: If database error occurs
        """
        try:
            existing = self.session.get(TutorModel, tutor.id)

            if existing:
                existing.apply(tutor)
                self.session.flush()
                return existing.to_domain()

            tutor_model = TutorModel.from_domain(tutor)
            self.session.add(tutor_model)
            self.session.flush()
            return tutor_model.to_domain()

        except IntegrityError as e:
            logger.error(f"Integrity error upserting tutor {tutor.id}: {e}", exc_info=True)
            raise DataIntegrityError(
                f"Failed to upsert tutor due to constraint violation: {e}"
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Error upserting tutor {tutor.id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to upsert tutor: {e}") from e

    def set_approval(self, tutor_id: str, approved: bool) -> Tutor:
        """Approve or revoke a tutor application.

        Args:
            tutor_id: Tutor to update
            approved: New approval flag

        Returns:
            Updated Tutor domain model

        Raises:
            RecordNotFoundError: If the tutor doesn't exist
            PersistenceError: If database error occurs
        """
        try:
            tutor_model = self.session.get(TutorModel, tutor_id)
            if tutor_model is None:
                raise RecordNotFoundError(f"Tutor with id {tutor_id} not found")

            tutor_model.approved = approved
            tutor_model.updated_at = format_timestamp(utc_now())
            self.session.flush()

            logger.info(
                f"Tutor {tutor_id} {'approved' if approved else 'unapproved'}",
                extra={"event": "tutor.approval_changed", "tutor_id": tutor_id, "approved": approved},
            )
            return tutor_model.to_domain()

        except RecordNotFoundError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error updating approval for tutor {tutor_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to update tutor approval: {e}") from e
