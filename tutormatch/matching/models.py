"""Data models for the proximity matcher.

This module defines the options that control a match run and the result
record produced for each eligible tutor.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from tutormatch.domain.models import Tutor


@dataclass(frozen=True)
class MatchOptions:
    """Options controlling which tutors survive a match run.

    Attributes:
        require_subject_overlap: Keep only tutors sharing at least one subject
            with the learner ("matching your subjects"). False gives the
            "all tutors" listing.
        max_distance_km: Drop tutors farther than this, if set
        limit: Keep at most this many results after ranking, if set
        subject: Keep only tutors offering exactly this subject, if set
    """

    require_subject_overlap: bool = True
    max_distance_km: Optional[float] = None
    limit: Optional[int] = None
    subject: Optional[str] = None

    def __post_init__(self):
        """Validate numeric bounds."""
        if self.max_distance_km is not None and (
            not math.isfinite(self.max_distance_km) or self.max_distance_km < 0
        ):
            raise ValueError(
                f"max_distance_km must be a finite non-negative number, got: {self.max_distance_km}"
            )
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"limit must be non-negative, got: {self.limit}")


@dataclass(frozen=True)
class MatchResult:
    """A tutor that survived the match pipeline.

    Attributes:
        tutor_id: Identifier of the matched tutor
        distance_km: Great-circle distance from the learner in kilometres
        matched_subjects: Subjects shared by learner and tutor, in the tutor's order
        tutor: The tutor snapshot the result was computed from
    """

    tutor_id: str
    distance_km: float
    matched_subjects: List[str] = field(default_factory=list)
    tutor: Optional[Tutor] = field(default=None, compare=False, repr=False)

    @property
    def has_subject_overlap(self) -> bool:
        """True if the learner and tutor share at least one subject."""
        return bool(self.matched_subjects)
