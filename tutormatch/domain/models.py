"""Core domain models for learners, tutors and their positions.

This module defines the data structures used throughout the application:
- GeoPoint: a latitude/longitude pair in decimal degrees
- Learner: a student looking for tutors, located at their residence
- Tutor: a teacher offering lessons, located at their business address

Positions are optional. A record whose coordinates are missing or unusable
carries ``location=None`` rather than a (0, 0) sentinel.
"""

import math
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator


class GeoPoint(BaseModel):
    """A point on the Earth's surface in decimal degrees."""

    latitude: float = Field(..., allow_inf_nan=False, description="Latitude in degrees")
    longitude: float = Field(..., allow_inf_nan=False, description="Longitude in degrees")

    model_config = {"frozen": True}

    @classmethod
    def from_coordinates(cls, latitude: Any, longitude: Any) -> Optional["GeoPoint"]:
        """Build a point from raw coordinate values.

        Returns None unless both values are present and finite numbers.
        Booleans are rejected even though they are ints.
        """
        lat = _coerce_coordinate(latitude)
        lng = _coerce_coordinate(longitude)
        if lat is None or lng is None:
            return None
        return cls(latitude=lat, longitude=lng)


def _coerce_coordinate(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _clean_subjects(v: Optional[List[Any]]) -> List[str]:
    # Subjects compare by exact string, so only drop entries that are not strings.
    if v is None:
        return []
    if isinstance(v, str):
        return [v] if v else []
    return [subject for subject in v if isinstance(subject, str) and subject]


class Learner(BaseModel):
    """A student seeking tutoring.

    The location is the learner's residence. ``subject_selections`` holds the
    subjects the learner wants help with, compared case-sensitively.
    """

    id: str = Field(..., min_length=1, description="Learner identifier")
    location: Optional[GeoPoint] = Field(None, description="Residence position")
    subject_selections: List[str] = Field(
        default_factory=list, description="Subjects the learner wants to study"
    )
    full_name: Optional[str] = Field(None, description="Display name")
    education_level: Optional[str] = Field(None, description="Education level code")
    location_city: Optional[str] = Field(None, description="City of residence")

    model_config = {"frozen": True}

    @field_validator("subject_selections", mode="before")
    @classmethod
    def clean_subjects(cls, v: Optional[List[Any]]) -> List[str]:
        """Drop null and non-string subject entries."""
        return _clean_subjects(v)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Learner":
        """Build a Learner from a raw student row.

        Args:
            record: Row with ``id``, ``residence_lat``, ``residence_lng``,
                ``subject_selections`` and optional profile fields

        Returns:
            Learner snapshot

        Raises:
            ValueError: If the row has no identifier
        """
        learner_id = record.get("id")
        if not learner_id:
            raise ValueError("Learner record is missing 'id'")

        return cls(
            id=str(learner_id),
            location=GeoPoint.from_coordinates(
                record.get("residence_lat"), record.get("residence_lng")
            ),
            subject_selections=record.get("subject_selections"),
            full_name=record.get("full_name"),
            education_level=record.get("education_level"),
            location_city=record.get("location_city"),
        )


class Tutor(BaseModel):
    """A teacher offering tutoring.

    Only approved tutors are visible in the marketplace. The location is the
    tutor's business address.
    """

    id: str = Field(..., min_length=1, description="Tutor identifier")
    location: Optional[GeoPoint] = Field(None, description="Business position")
    subjects: List[str] = Field(default_factory=list, description="Subjects offered")
    approved: bool = Field(False, description="Whether an admin approved the application")
    full_name: Optional[str] = Field(None, description="Display name")
    location_city: Optional[str] = Field(None, description="City of the business address")
    rating: Optional[float] = Field(None, ge=0, le=5, description="Average rating")
    experience_years: Optional[int] = Field(None, ge=0, description="Years of experience")

    model_config = {"frozen": True}

    @field_validator("subjects", mode="before")
    @classmethod
    def clean_subjects(cls, v: Optional[List[Any]]) -> List[str]:
        """Drop null and non-string subject entries."""
        return _clean_subjects(v)

    @field_validator("approved", mode="before")
    @classmethod
    def null_is_unapproved(cls, v: Any) -> Any:
        """Treat a null approval flag as not approved."""
        return False if v is None else v

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Tutor":
        """Build a Tutor from a raw teacher row.

        Args:
            record: Row with ``id``, ``approved``, ``subjects``, ``business_lat``,
                ``business_lng`` and optional profile fields

        Returns:
            Tutor snapshot

        Raises:
            ValueError: If the row has no identifier or a field has the wrong type
        """
        tutor_id = record.get("id")
        if not tutor_id:
            raise ValueError("Tutor record is missing 'id'")

        return cls(
            id=str(tutor_id),
            location=GeoPoint.from_coordinates(
                record.get("business_lat"), record.get("business_lng")
            ),
            subjects=record.get("subjects"),
            approved=record.get("approved"),
            full_name=record.get("full_name"),
            location_city=record.get("location_city"),
            rating=record.get("rating"),
            experience_years=record.get("experience_years"),
        )
