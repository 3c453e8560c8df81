"""Database schema definition and ORM models.

Column names follow the hosted backend's tables so rows can move between the
two stores unchanged: learners carry ``residence_lat``/``residence_lng`` and
tutors carry ``business_lat``/``business_lng``.
"""

import logging

from sqlalchemy import JSON, Boolean, Column, Float, Index, Integer, String, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from tutormatch.domain.models import GeoPoint, Learner, Tutor
from tutormatch.utils.timestamps import format_timestamp, utc_now

logger = logging.getLogger(__name__)

Base = declarative_base()


class LearnerModel(Base):
    """ORM model for the learners table."""

    __tablename__ = "learners"

    id = Column(String(64), primary_key=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    education_level = Column(String(64), nullable=True)
    location_city = Column(String(255), nullable=True)

    # Residence position; both null when unknown
    residence_lat = Column(Float, nullable=True)
    residence_lng = Column(Float, nullable=True)

    subject_selections = Column(JSON, nullable=False, default=list)

    # Timestamps (stored as ISO 8601 strings)
    created_at = Column(String(50), nullable=False)
    updated_at = Column(String(50), nullable=False)

    def to_domain(self) -> Learner:
        return Learner(
            id=self.id,
            location=GeoPoint.from_coordinates(self.residence_lat, self.residence_lng),
            subject_selections=list(self.subject_selections or []),
            full_name=self.full_name,
            education_level=self.education_level,
            location_city=self.location_city,
        )

    def apply(self, learner: Learner) -> None:
        """Copy a domain snapshot onto this row and bump updated_at."""
        self.full_name = learner.full_name
        self.education_level = learner.education_level
        self.location_city = learner.location_city
        self.residence_lat = learner.location.latitude if learner.location else None
        self.residence_lng = learner.location.longitude if learner.location else None
        self.subject_selections = list(learner.subject_selections)
        self.updated_at = format_timestamp(utc_now())

    @classmethod
    def from_domain(cls, learner: Learner) -> "LearnerModel":
        now = format_timestamp(utc_now())
        model = cls(id=learner.id, created_at=now)
        model.apply(learner)
        return model


class TutorModel(Base):
    """ORM model for the tutors table."""

    __tablename__ = "tutors"

    id = Column(String(64), primary_key=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    location_city = Column(String(255), nullable=True)

    # Business position; both null when unknown
    business_lat = Column(Float, nullable=True)
    business_lng = Column(Float, nullable=True)

    subjects = Column(JSON, nullable=False, default=list)
    approved = Column(Boolean, nullable=False, default=False)
    rating = Column(Float, nullable=True)
    experience_years = Column(Integer, nullable=True)

    created_at = Column(String(50), nullable=False)
    updated_at = Column(String(50), nullable=False)

    __table_args__ = (Index("idx_tutors_approved", "approved"),)

    def to_domain(self) -> Tutor:
        return Tutor(
            id=self.id,
            location=GeoPoint.from_coordinates(self.business_lat, self.business_lng),
            subjects=list(self.subjects or []),
            approved=bool(self.approved),
            full_name=self.full_name,
            location_city=self.location_city,
            rating=self.rating,
            experience_years=self.experience_years,
        )

    def apply(self, tutor: Tutor) -> None:
        """Copy a domain snapshot onto this row and bump updated_at."""
        self.full_name = tutor.full_name
        self.location_city = tutor.location_city
        self.business_lat = tutor.location.latitude if tutor.location else None
        self.business_lng = tutor.location.longitude if tutor.location else None
        self.subjects = list(tutor.subjects)
        self.approved = tutor.approved
        self.rating = tutor.rating
        self.experience_years = tutor.experience_years
        self.updated_at = format_timestamp(utc_now())

    @classmethod
    def from_domain(cls, tutor: Tutor) -> "TutorModel":
        now = format_timestamp(utc_now())
        model = cls(id=tutor.id, created_at=now)
        model.apply(tutor)
        return model


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes if they don't exist (idempotent).

    Args:
        engine: SQLAlchemy engine instance
    """
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)
        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
