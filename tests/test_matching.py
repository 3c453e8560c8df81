"""Unit tests for the proximity matching engine."""

import logging

import pytest

from tests.factories import BULAWAYO, HARARE, MUTARE, make_learner, make_tutor, north_of
from tutormatch.domain.models import Learner
from tutormatch.matching import (
    MatchOptions,
    MatchResult,
    ProximityMatcher,
    filter_by_search_term,
    find_matches,
    great_circle_distance_km,
)

ENGINE_LOGGER = "tutormatch.matching.engine"


class TestFindMatchesEligibility:
    """Tests for approval, location and overlap filtering."""

    def test_empty_roster_returns_empty(self, learner):
        """Test an empty tutor collection gives no results."""
        assert find_matches(learner, []) == []
        assert find_matches(learner, [], MatchOptions(require_subject_overlap=False, limit=3)) == []
        assert find_matches(learner, iter([])) == []

    def test_unapproved_tutor_excluded(self, learner):
        """Test an unapproved tutor is excluded even when it matches perfectly."""
        tutor = make_tutor("t-1", *HARARE, subjects=["Mathematics"], approved=False)

        assert find_matches(learner, [tutor]) == []

    def test_tutor_without_location_excluded(self, learner):
        """Test tutors missing business coordinates are excluded."""
        tutors = [
            make_tutor("t-none", subjects=["Mathematics"]),
            make_tutor("t-lat-only", HARARE[0], None, subjects=["Mathematics"]),
            make_tutor("t-ok", *HARARE, subjects=["Mathematics"]),
        ]

        results = find_matches(learner, tutors)

        assert [r.tutor_id for r in results] == ["t-ok"]

    def test_overlap_required_excludes_disjoint_subjects(self, learner):
        """Test a tutor sharing no subjects is excluded when overlap is required."""
        tutor = make_tutor("t-1", *HARARE, subjects=["English", "History"])

        assert find_matches(learner, [tutor]) == []

    def test_overlap_not_required_reports_empty_overlap(self, learner):
        """Test the all-tutors listing keeps disjoint tutors with empty overlap."""
        tutor = make_tutor("t-1", *HARARE, subjects=["English"])

        results = find_matches(learner, [tutor], MatchOptions(require_subject_overlap=False))

        assert len(results) == 1
        assert results[0].matched_subjects == []
        assert results[0].has_subject_overlap is False

    def test_subject_comparison_is_case_sensitive(self):
        """Test subject overlap uses exact string comparison."""
        learner = make_learner(subjects=("mathematics",))
        tutor = make_tutor("t-1", *HARARE, subjects=["Mathematics"])

        assert find_matches(learner, [tutor]) == []

    def test_learner_without_location_returns_empty(self, roster):
        """Test a learner with no residence position gets no results."""
        learner = Learner(id="stu-x", location=None, subject_selections=["Mathematics"])

        assert find_matches(learner, roster) == []
        assert find_matches(learner, roster, MatchOptions(require_subject_overlap=False)) == []

    def test_spec_scenario_only_returns_approved_overlapping_tutor(self):
        """Test T1 is the only result among an overlapping, a disjoint and an unapproved tutor."""
        learner = make_learner(lat=-17.8292, lng=31.0522, subjects=("Mathematics",))
        t1 = make_tutor("T1", *north_of(HARARE, 1.0), subjects=["Mathematics"])
        t2 = make_tutor("T2", *north_of(HARARE, 0.5), subjects=["English"])
        t3 = make_tutor("T3", *north_of(HARARE, 0.2), subjects=["Mathematics"], approved=False)

        results = find_matches(learner, [t1, t2, t3], MatchOptions(require_subject_overlap=True))

        assert [r.tutor_id for r in results] == ["T1"]
        assert results[0].distance_km == pytest.approx(1.0, abs=1e-6)
        assert results[0].matched_subjects == ["Mathematics"]


class TestFindMatchesRanking:
    """Tests for distance ordering, radius and limit."""

    def test_results_sorted_by_distance(self, learner, roster):
        """Test adjacent results are in non-decreasing distance order."""
        results = find_matches(learner, roster, MatchOptions(require_subject_overlap=False))

        assert [r.tutor_id for r in results] == ["t-harare", "t-mutare", "t-bulawayo"]
        for current, following in zip(results, results[1:]):
            assert current.distance_km <= following.distance_km

    def test_equal_distances_keep_input_order(self, learner):
        """Test ties keep their order from the input roster."""
        tutors = [make_tutor(f"t-{i}", *MUTARE, subjects=["Mathematics"]) for i in range(4)]

        results = find_matches(learner, tutors)

        assert [r.tutor_id for r in results] == ["t-0", "t-1", "t-2", "t-3"]

    def test_max_distance_excludes_farther_tutors(self, learner):
        """Test every result is within max_distance_km when recomputed independently."""
        tutors = [
            make_tutor(f"t-{km}", *north_of(HARARE, km), subjects=["Mathematics"])
            for km in (30, 2, 10.5, 9.9, 5, 0)
        ]

        results = find_matches(learner, tutors, MatchOptions(max_distance_km=10))

        assert [r.tutor_id for r in results] == ["t-0", "t-2", "t-5", "t-9.9"]
        for result in results:
            location = result.tutor.location
            recomputed = great_circle_distance_km(
                learner.location.latitude,
                learner.location.longitude,
                location.latitude,
                location.longitude,
            )
            assert recomputed <= 10

    def test_max_distance_is_inclusive(self):
        """Test a tutor exactly on the radius is kept."""
        learner = make_learner(lat=0.0, lng=0.0)
        tutor = make_tutor("t-edge", 0.0, 0.0, subjects=["Mathematics"])

        results = find_matches(learner, [tutor], MatchOptions(max_distance_km=0))

        assert [r.tutor_id for r in results] == ["t-edge"]

    def test_limit_caps_result_count(self, learner):
        """Test limit=5 returns the five nearest of twenty matches."""
        tutors = [
            make_tutor(f"t-{i:02d}", *north_of(HARARE, 20 - i), subjects=["Mathematics"])
            for i in range(20)
        ]

        results = find_matches(learner, tutors, MatchOptions(limit=5))

        assert len(results) == 5
        assert [r.tutor_id for r in results] == ["t-19", "t-18", "t-17", "t-16", "t-15"]

    def test_limit_zero_returns_empty(self, learner, roster):
        """Test limit=0 gives no results."""
        assert find_matches(learner, roster, MatchOptions(require_subject_overlap=False, limit=0)) == []

    def test_limit_applies_after_distance_filter(self, learner):
        """Test the limit counts only tutors that survived the radius."""
        tutors = [
            make_tutor("far", *BULAWAYO, subjects=["Mathematics"]),
            make_tutor("near", *north_of(HARARE, 3), subjects=["Mathematics"]),
        ]

        results = find_matches(learner, tutors, MatchOptions(max_distance_km=50, limit=2))

        assert [r.tutor_id for r in results] == ["near"]


class TestFindMatchesSubjects:
    """Tests for matched subjects and the single-subject filter."""

    def test_matched_subjects_follow_tutor_order_without_duplicates(self):
        """Test overlap keeps the tutor's order and drops repeats."""
        learner = make_learner(subjects=("Physics", "Mathematics"))
        tutor = make_tutor(
            "t-1", *HARARE, subjects=["Mathematics", "Chemistry", "Physics", "Mathematics"]
        )

        results = find_matches(learner, [tutor])

        assert results[0].matched_subjects == ["Mathematics", "Physics"]

    def test_subject_filter_keeps_exact_subject(self, learner, roster):
        """Test the subject filter keeps only tutors offering that subject."""
        results = find_matches(
            learner, roster, MatchOptions(require_subject_overlap=False, subject="English")
        )

        assert [r.tutor_id for r in results] == ["t-mutare"]

    def test_subject_filter_combines_with_overlap(self, learner, roster):
        """Test a subject filter outside the learner's selections still requires overlap."""
        results = find_matches(learner, roster, MatchOptions(subject="English"))

        assert results == []


class TestFindMatchesRobustness:
    """Tests for purity and malformed input handling."""

    def test_does_not_mutate_inputs(self, learner, roster):
        """Test the roster and learner are unchanged after matching."""
        roster_before = list(roster)
        learner_before = learner.model_copy(deep=True)

        find_matches(learner, roster, MatchOptions(require_subject_overlap=False, limit=1))

        assert roster == roster_before
        assert learner == learner_before

    def test_repeatable(self, learner, roster):
        """Test identical inputs give identical outputs."""
        options = MatchOptions(require_subject_overlap=False)

        assert find_matches(learner, roster, options) == find_matches(learner, roster, options)

    def test_malformed_items_are_skipped(self, learner):
        """Test non-tutor items and broken rows are excluded, not raised."""
        good = make_tutor("t-ok", *HARARE, subjects=["Mathematics"])
        items = [
            None,
            42,
            "t-string",
            {"subjects": ["Mathematics"], "approved": True},
            {"id": "t-bad-rating", "rating": "excellent", "approved": True},
            good,
        ]

        results = find_matches(learner, items)

        assert [r.tutor_id for r in results] == ["t-ok"]

    def test_raw_rows_are_accepted(self, learner):
        """Test mapping rows are read like Tutor records."""
        row = {
            "id": "t-row",
            "approved": True,
            "subjects": ["Mathematics"],
            "business_lat": HARARE[0],
            "business_lng": HARARE[1],
        }

        results = find_matches(learner, [row])

        assert [r.tutor_id for r in results] == ["t-row"]
        assert results[0].distance_km == 0.0

    def test_non_finite_coordinates_treated_as_missing(self, learner):
        """Test NaN and infinite coordinates exclude the tutor."""
        rows = [
            {"id": "t-nan", "approved": True, "subjects": ["Mathematics"],
             "business_lat": float("nan"), "business_lng": 31.0},
            {"id": "t-inf", "approved": True, "subjects": ["Mathematics"],
             "business_lat": -17.8, "business_lng": float("inf")},
        ]

        assert find_matches(learner, rows) == []


class TestProximityMatcher:
    """Tests for the class form of the matcher."""

    def test_uses_default_options(self, learner, roster):
        """Test the matcher's own options apply when none are passed."""
        matcher = ProximityMatcher(MatchOptions(require_subject_overlap=False, limit=1))

        results = matcher.find_matches(learner, roster)

        assert [r.tutor_id for r in results] == ["t-harare"]

    def test_call_options_override_defaults(self, learner, roster):
        """Test options passed to find_matches replace the defaults."""
        matcher = ProximityMatcher(MatchOptions(require_subject_overlap=False, limit=1))

        results = matcher.find_matches(learner, roster, MatchOptions())

        assert [r.tutor_id for r in results] == ["t-harare", "t-bulawayo"]

    def test_logs_completion_summary(self, learner, roster, caplog):
        """Test a matching.completed event with exclusion counts is logged."""
        with caplog.at_level(logging.INFO, logger=ENGINE_LOGGER):
            ProximityMatcher().find_matches(learner, roster)

        completed = [r for r in caplog.records if getattr(r, "event", None) == "matching.completed"]
        assert len(completed) == 1
        record = completed[0]
        assert record.results == 2
        assert record.tutors_considered == 5
        assert record.excluded_unapproved == 1
        assert record.excluded_location_missing == 1
        assert record.excluded_no_subject_overlap == 1

    def test_uses_injected_logger(self, learner, monkeypatch):
        """Test a custom logger receives the matcher's events."""
        custom = logging.getLogger("tests.custom_matcher")
        calls = []
        monkeypatch.setattr(custom, "info", lambda *args, **kwargs: calls.append(kwargs))

        ProximityMatcher(logger_instance=custom).find_matches(learner, [])

        assert calls and calls[0]["extra"]["event"] == "matching.completed"


class TestMatchOptions:
    """Tests for MatchOptions validation."""

    def test_defaults(self):
        """Test defaults describe the matching-your-subjects listing."""
        options = MatchOptions()

        assert options.require_subject_overlap is True
        assert options.max_distance_km is None
        assert options.limit is None
        assert options.subject is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_distance_km": -1},
            {"max_distance_km": float("nan")},
            {"max_distance_km": float("inf")},
            {"limit": -3},
        ],
    )
    def test_invalid_bounds_rejected(self, kwargs):
        """Test negative or non-finite radius and negative limit raise ValueError."""
        with pytest.raises(ValueError):
            MatchOptions(**kwargs)


class TestFilterBySearchTerm:
    """Tests for the free-text search over results."""

    @pytest.fixture
    def results(self, learner, roster):
        return find_matches(learner, roster, MatchOptions(require_subject_overlap=False))

    def test_blank_term_keeps_everything(self, results):
        """Test empty, blank and missing terms keep all results."""
        assert filter_by_search_term(results, "") == results
        assert filter_by_search_term(results, "   ") == results
        assert filter_by_search_term(results, None) == results

    def test_matches_name_case_insensitively(self, results):
        """Test the term matches part of the tutor's name."""
        kept = filter_by_search_term(results, "NDLOVU")

        assert [r.tutor_id for r in kept] == ["t-bulawayo"]

    def test_matches_any_offered_subject(self, results):
        """Test the term matches subjects the learner did not select."""
        kept = filter_by_search_term(results, "chem")

        assert [r.tutor_id for r in kept] == ["t-harare"]

    def test_preserves_order(self, results):
        """Test kept results stay in distance order."""
        kept = filter_by_search_term(results, "o")

        assert [r.tutor_id for r in kept] == ["t-mutare", "t-bulawayo"]

    def test_result_without_tutor_uses_matched_subjects(self):
        """Test results built without a tutor snapshot search their matched subjects."""
        bare = MatchResult(tutor_id="t-bare", distance_km=1.0, matched_subjects=["Physics"])

        assert filter_by_search_term([bare], "phys") == [bare]
        assert filter_by_search_term([bare], "math") == []
