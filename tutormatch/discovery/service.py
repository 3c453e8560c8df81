"""Discovery service: the two tutor listings a learner can browse.

"Matching your subjects" requires subject overlap; "all tutors" does not.
Both are ranked by distance from the learner's residence.
"""

from dataclasses import replace
from typing import List, Optional

from tutormatch.logging import get_logger
from tutormatch.logging.context import log_context
from tutormatch.matching import MatchOptions, MatchResult, ProximityMatcher

from .exceptions import LearnerNotFoundError
from .store import ProfileStore

logger = get_logger(__name__, component="discovery")


class DiscoveryService:
    """Loads profiles from a store and runs them through the matcher.

    Store errors are not caught here; callers handle them in the store's
    own terms (PersistenceError, AdapterError).

    Attributes:
        store: ProfileStore supplying learner and tutor snapshots
        default_options: Distance and limit defaults applied when a call
            does not pass its own
    """

    def __init__(
        self,
        store: ProfileStore,
        default_options: Optional[MatchOptions] = None,
        matcher: Optional[ProximityMatcher] = None,
    ):
        self.store = store
        self.default_options = default_options or MatchOptions()
        self.matcher = matcher or ProximityMatcher()

    def matching_tutors(
        self,
        learner_id: str,
        max_distance_km: Optional[float] = None,
        limit: Optional[int] = None,
        subject: Optional[str] = None,
    ) -> List[MatchResult]:
        """Approved tutors sharing at least one subject with the learner.

        Raises:
            LearnerNotFoundError: If the store has no such learner
        """
        return self._discover(
            learner_id,
            listing="matching",
            require_subject_overlap=True,
            max_distance_km=max_distance_km,
            limit=limit,
            subject=subject,
        )

    def all_tutors(
        self,
        learner_id: str,
        max_distance_km: Optional[float] = None,
        limit: Optional[int] = None,
        subject: Optional[str] = None,
    ) -> List[MatchResult]:
        """All approved, located tutors, overlap reported but not required.

        Raises:
            LearnerNotFoundError: If the store has no such learner
        """
        return self._discover(
            learner_id,
            listing="all",
            require_subject_overlap=False,
            max_distance_km=max_distance_km,
            limit=limit,
            subject=subject,
        )

    def _discover(
        self,
        learner_id: str,
        listing: str,
        require_subject_overlap: bool,
        max_distance_km: Optional[float],
        limit: Optional[int],
        subject: Optional[str],
    ) -> List[MatchResult]:
        options = self._build_options(require_subject_overlap, max_distance_km, limit, subject)

        with log_context(learner_id=learner_id, listing=listing):
            learner = self.store.get_learner(learner_id)
            if learner is None:
                logger.warning(
                    f"Learner {learner_id} not found",
                    extra={"event": "discovery.learner_not_found"},
                )
                raise LearnerNotFoundError(learner_id)

            tutors = self.store.list_approved_tutors()
            results = self.matcher.find_matches(learner, tutors, options)

            logger.info(
                f"Discovered {len(results)} tutors",
                extra={
                    "event": "discovery.completed",
                    "tutors_loaded": len(tutors),
                    "results": len(results),
                },
            )
            return results

    def _build_options(
        self,
        require_subject_overlap: bool,
        max_distance_km: Optional[float],
        limit: Optional[int],
        subject: Optional[str],
    ) -> MatchOptions:
        defaults = self.default_options
        return replace(
            defaults,
            require_subject_overlap=require_subject_overlap,
            max_distance_km=max_distance_km if max_distance_km is not None else defaults.max_distance_km,
            limit=limit if limit is not None else defaults.limit,
            subject=subject if subject is not None else defaults.subject,
        )
