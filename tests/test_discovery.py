"""Tests for the discovery service."""

import pytest

from tests.factories import BULAWAYO, HARARE, MUTARE, make_learner, make_tutor
from tutormatch.discovery import DiscoveryError, DiscoveryService, LearnerNotFoundError, ProfileStore
from tutormatch.logging.context import get_log_context
from tutormatch.matching import MatchOptions
from tutormatch.persistence import PersistenceError


class InMemoryStore:
    """ProfileStore over fixed snapshots that records the logging context of each call."""

    def __init__(self, learners, tutors):
        self.learners = {learner.id: learner for learner in learners}
        self.tutors = list(tutors)
        self.contexts = []

    def get_learner(self, learner_id):
        self.contexts.append(get_log_context())
        return self.learners.get(learner_id)

    def list_approved_tutors(self):
        self.contexts.append(get_log_context())
        return [tutor for tutor in self.tutors if tutor.approved]


class FailingStore:
    def get_learner(self, learner_id):
        raise PersistenceError("database is locked")

    def list_approved_tutors(self):
        raise AssertionError("not reached")


@pytest.fixture
def store():
    learner = make_learner("stu-1", subjects=("Mathematics", "Physics"))
    tutors = [
        make_tutor("t-bulawayo", *BULAWAYO, subjects=["Mathematics"]),
        make_tutor("t-harare", *HARARE, subjects=["Physics"]),
        make_tutor("t-mutare", *MUTARE, subjects=["English"]),
        make_tutor("t-pending", *HARARE, subjects=["Mathematics"], approved=False),
    ]
    return InMemoryStore([learner], tutors)


class TestDiscoveryService:
    """Tests for the two discovery listings."""

    def test_store_satisfies_protocol(self, store):
        """Test the in-memory store is a ProfileStore."""
        assert isinstance(store, ProfileStore)

    def test_matching_tutors_requires_overlap(self, store):
        """Test the matching listing keeps only overlapping tutors, nearest first."""
        results = DiscoveryService(store).matching_tutors("stu-1")

        assert [r.tutor_id for r in results] == ["t-harare", "t-bulawayo"]

    def test_all_tutors_includes_non_overlapping(self, store):
        """Test the all-tutors listing includes tutors without shared subjects."""
        results = DiscoveryService(store).all_tutors("stu-1")

        assert [r.tutor_id for r in results] == ["t-harare", "t-mutare", "t-bulawayo"]
        assert results[1].matched_subjects == []

    def test_call_arguments_apply(self, store):
        """Test radius, limit and subject arguments reach the matcher."""
        service = DiscoveryService(store)

        assert [r.tutor_id for r in service.all_tutors("stu-1", max_distance_km=250)] == [
            "t-harare",
            "t-mutare",
        ]
        assert [r.tutor_id for r in service.all_tutors("stu-1", limit=1)] == ["t-harare"]
        assert [r.tutor_id for r in service.all_tutors("stu-1", subject="Mathematics")] == [
            "t-bulawayo"
        ]

    def test_default_options_fill_missing_arguments(self, store):
        """Test defaults apply when a call leaves a bound unset."""
        service = DiscoveryService(store, MatchOptions(require_subject_overlap=False, limit=1))

        assert [r.tutor_id for r in service.all_tutors("stu-1")] == ["t-harare"]
        assert [r.tutor_id for r in service.all_tutors("stu-1", limit=2)] == ["t-harare", "t-mutare"]

    def test_listing_overrides_default_overlap(self, store):
        """Test each listing sets overlap regardless of the defaults."""
        service = DiscoveryService(store, MatchOptions(require_subject_overlap=False))

        assert [r.tutor_id for r in service.matching_tutors("stu-1")] == ["t-harare", "t-bulawayo"]

    def test_unknown_learner_raises(self, store):
        """Test an unknown learner raises LearnerNotFoundError."""
        with pytest.raises(LearnerNotFoundError) as exc_info:
            DiscoveryService(store).matching_tutors("nobody")

        assert exc_info.value.learner_id == "nobody"
        assert isinstance(exc_info.value, DiscoveryError)

    def test_learner_without_location_gets_empty_listing(self):
        """Test a learner with no residence gets no tutors, not an error."""
        learner = make_learner("stu-2", lat=None, lng=None)
        store = InMemoryStore([learner], [make_tutor("t-1", *HARARE, subjects=["Mathematics"])])

        assert DiscoveryService(store).all_tutors("stu-2") == []

    def test_store_errors_propagate(self):
        """Test store failures are not swallowed or wrapped."""
        with pytest.raises(PersistenceError):
            DiscoveryService(FailingStore()).matching_tutors("stu-1")

    def test_calls_run_inside_learner_log_context(self, store):
        """Test store calls see the learner and listing in the logging context."""
        DiscoveryService(store).all_tutors("stu-1")

        assert store.contexts == [
            {"learner_id": "stu-1", "listing": "all"},
            {"learner_id": "stu-1", "listing": "all"},
        ]
        assert get_log_context() == {}
