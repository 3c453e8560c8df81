"""Proximity matching of tutors to learners.

This module provides:
- great_circle_distance_km: Haversine distance in kilometres
- ProximityMatcher: Service ranking tutors by distance and subject overlap
- find_matches: Functional entry point using a default matcher
- MatchOptions / MatchResult: Input options and output records
- filter_by_search_term: Free-text narrowing of ranked results
"""

from .engine import ProximityMatcher, filter_by_search_term, find_matches
from .geo import EARTH_RADIUS_KM, distance_between, great_circle_distance_km
from .models import MatchOptions, MatchResult

__all__ = [
    "ProximityMatcher",
    "find_matches",
    "filter_by_search_term",
    "great_circle_distance_km",
    "distance_between",
    "EARTH_RADIUS_KM",
    "MatchOptions",
    "MatchResult",
]
