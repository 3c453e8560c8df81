"""Builders for domain objects used across tests."""

import math

from tutormatch.domain.models import GeoPoint, Learner, Tutor
from tutormatch.matching.geo import EARTH_RADIUS_KM

# Reference positions (decimal degrees)
HARARE = (-17.8292, 31.0522)
BULAWAYO = (-20.1325, 28.6265)
MUTARE = (-18.9707, 32.6709)


def make_tutor(tutor_id, lat=None, lng=None, subjects=(), approved=True, **kwargs):
    """Build a Tutor at (lat, lng), or without a location when either is None."""
    return Tutor(
        id=tutor_id,
        location=GeoPoint.from_coordinates(lat, lng),
        subjects=list(subjects),
        approved=approved,
        **kwargs,
    )


def make_learner(learner_id="stu-1", lat=HARARE[0], lng=HARARE[1], subjects=("Mathematics",), **kwargs):
    """Build a Learner at (lat, lng), Harare by default."""
    return Learner(
        id=learner_id,
        location=GeoPoint.from_coordinates(lat, lng),
        subject_selections=list(subjects),
        **kwargs,
    )


def north_of(origin, km):
    """Point ``km`` kilometres due north of ``origin`` on the matcher's sphere."""
    lat, lng = origin
    return lat + math.degrees(km / EARTH_RADIUS_KM), lng
