"""Proximity matching engine for ranking tutors against a learner.

This module implements the matching logic that:
1. Filters a tutor roster down to approved, located tutors
2. Applies subject overlap and distance bounds
3. Ranks survivors by great-circle distance from the learner
"""

import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from tutormatch.domain.models import Learner, Tutor

from .geo import distance_between
from .models import MatchOptions, MatchResult

logger = logging.getLogger(__name__)


class ProximityMatcher:
    """Ranks tutors by distance from a learner.

    Responsibilities:
    - Exclude unapproved tutors and tutors without a location
    - Compute subject overlap with the learner's selections
    - Apply the optional subject, distance and limit constraints
    - Return results ordered by ascending distance, ties in input order

    The matcher holds no state beyond its default options, so one instance
    can serve concurrent callers.
    """

    def __init__(
        self,
        options: Optional[MatchOptions] = None,
        logger_instance: logging.Logger = None,
    ):
        """Initialize ProximityMatcher.

        Args:
            options: Default options used when find_matches gets none
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.options = options or MatchOptions()
        self.logger = logger_instance or logger

    def find_matches(
        self,
        learner: Learner,
        tutors: Iterable[Any],
        options: Optional[MatchOptions] = None,
    ) -> List[MatchResult]:
        """Rank tutors for a learner.

        Algorithm:
        1. Keep approved tutors
        2. Keep tutors with both coordinates
        3. If overlap is required, keep tutors sharing a subject with the learner
        4. If a subject filter is set, keep tutors offering that subject
        5. Compute distance from the learner
        6. If max_distance_km is set, keep tutors within it
        7. Sort ascending by distance (stable)
        8. If limit is set, truncate

        Items that are not Tutor instances are converted with
        Tutor.from_record when they are mappings, and excluded when that
        fails. Nothing here raises for bad data.

        Args:
            learner: Learner snapshot; without a location no results are produced
            tutors: Tutor snapshots (or raw tutor rows)
            options: Options for this run (defaults to the matcher's options)

        Returns:
            List of MatchResult ordered by ascending distance
        """
        options = options or self.options

        if learner is None or learner.location is None:
            self.logger.debug(
                "Learner has no location, skipping distance matching",
                extra={
                    "event": "matching.skipped",
                    "learner_id": getattr(learner, "id", None),
                    "reason": "learner_location_missing",
                },
            )
            return []

        wanted = set(learner.subject_selections)
        excluded = {
            "malformed": 0,
            "unapproved": 0,
            "location_missing": 0,
            "no_subject_overlap": 0,
            "subject_filter": 0,
            "too_far": 0,
        }
        ranked: List[MatchResult] = []
        considered = 0

        for item in tutors:
            considered += 1

            tutor = self._coerce_tutor(item)
            if tutor is None:
                excluded["malformed"] += 1
                continue

            # Steps 1-2: eligibility
            if not tutor.approved:
                excluded["unapproved"] += 1
                continue
            if tutor.location is None:
                excluded["location_missing"] += 1
                continue

            # Step 3: subject overlap
            matched_subjects = self._overlap(tutor.subjects, wanted)
            if options.require_subject_overlap and not matched_subjects:
                excluded["no_subject_overlap"] += 1
                continue

            # Step 4: single-subject filter
            if options.subject is not None and options.subject not in tutor.subjects:
                excluded["subject_filter"] += 1
                continue

            # Steps 5-6: distance
            distance_km = distance_between(learner.location, tutor.location)
            if options.max_distance_km is not None and distance_km > options.max_distance_km:
                excluded["too_far"] += 1
                continue

            ranked.append(
                MatchResult(
                    tutor_id=tutor.id,
                    distance_km=distance_km,
                    matched_subjects=matched_subjects,
                    tutor=tutor,
                )
            )

        # Step 7: sorted() is stable, so equal distances keep input order
        ranked = sorted(ranked, key=lambda result: result.distance_km)

        # Step 8: limit
        if options.limit is not None:
            ranked = ranked[: options.limit]

        self.logger.info(
            f"Matched {len(ranked)} of {considered} tutors for learner {learner.id}",
            extra={
                "event": "matching.completed",
                "learner_id": learner.id,
                "tutors_considered": considered,
                "results": len(ranked),
                "require_subject_overlap": options.require_subject_overlap,
                "max_distance_km": options.max_distance_km,
                "limit": options.limit,
                **{f"excluded_{reason}": count for reason, count in excluded.items() if count},
            },
        )

        return ranked

    def _coerce_tutor(self, item: Any) -> Optional[Tutor]:
        """Return item as a Tutor, or None if it cannot be read as one."""
        if isinstance(item, Tutor):
            return item

        if hasattr(item, "get"):
            try:
                return Tutor.from_record(item)
            except (ValueError, TypeError) as e:
                self.logger.debug(
                    "Excluding malformed tutor record",
                    extra={"event": "matching.tutor_malformed", "error": str(e)},
                )
                return None

        return None

    @staticmethod
    def _overlap(offered: Sequence[str], wanted: set) -> List[str]:
        """Subjects in ``offered`` that are also in ``wanted``.

        Keeps the tutor's ordering and drops repeats. Comparison is exact.
        """
        seen = set()
        matched = []
        for subject in offered:
            if subject in wanted and subject not in seen:
                seen.add(subject)
                matched.append(subject)
        return matched


_default_matcher = ProximityMatcher()


def find_matches(
    learner: Learner,
    tutors: Iterable[Any],
    options: Optional[MatchOptions] = None,
) -> List[MatchResult]:
    """Rank tutors for a learner using a default ProximityMatcher.

    See ProximityMatcher.find_matches for the pipeline.
    """
    return _default_matcher.find_matches(learner, tutors, options)


def filter_by_search_term(results: Sequence[MatchResult], term: Optional[str]) -> List[MatchResult]:
    """Narrow ranked results with a free-text search.

    A result is kept when the term appears, case-insensitively, in the
    tutor's name or in any subject the tutor offers. Order is preserved.
    An empty or blank term keeps everything.

    Args:
        results: Ranked match results
        term: Search text typed by the learner

    Returns:
        Filtered list of results
    """
    if term is None or not term.strip():
        return list(results)

    needle = term.strip().lower()
    kept = []
    for result in results:
        name, subjects = _searchable_fields(result)
        if needle in name.lower() or any(needle in subject.lower() for subject in subjects):
            kept.append(result)
    return kept


def _searchable_fields(result: MatchResult) -> Tuple[str, List[str]]:
    if result.tutor is None:
        return "", list(result.matched_subjects)
    return result.tutor.full_name or "", list(result.tutor.subjects)
