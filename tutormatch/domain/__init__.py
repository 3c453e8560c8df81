"""Domain models for Tutor Match."""

from .models import GeoPoint, Learner, Tutor

__all__ = ["GeoPoint", "Learner", "Tutor"]
