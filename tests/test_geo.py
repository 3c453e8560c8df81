"""Tests for great-circle distance."""

import pytest

from tests.factories import BULAWAYO, HARARE, MUTARE, north_of
from tutormatch.domain.models import GeoPoint
from tutormatch.matching import EARTH_RADIUS_KM, distance_between, great_circle_distance_km


class TestGreatCircleDistance:
    """Tests for great_circle_distance_km."""

    def test_harare_to_bulawayo_regression(self):
        """Test Harare to Bulawayo is about 366 km."""
        distance = great_circle_distance_km(-17.8292, 31.0522, -20.1500, 28.5833)
        assert distance == pytest.approx(366, abs=2)

    @pytest.mark.parametrize(
        "a, b",
        [
            (HARARE, BULAWAYO),
            (HARARE, MUTARE),
            ((0.0, 0.0), (0.0, 179.9)),
            ((89.9, 10.0), (-89.9, -170.0)),
            ((51.5074, -0.1278), (-33.8688, 151.2093)),
        ],
    )
    def test_symmetry(self, a, b):
        """Test distance(A, B) == distance(B, A)."""
        assert great_circle_distance_km(*a, *b) == pytest.approx(great_circle_distance_km(*b, *a))

    @pytest.mark.parametrize("point", [HARARE, (0.0, 0.0), (90.0, 0.0), (-45.5, -120.25)])
    def test_identical_points_are_zero(self, point):
        """Test distance from a point to itself is zero."""
        assert great_circle_distance_km(*point, *point) == 0.0

    def test_never_negative(self):
        """Test distances are non-negative in both directions."""
        assert great_circle_distance_km(*MUTARE, *BULAWAYO) > 0
        assert great_circle_distance_km(*BULAWAYO, *MUTARE) > 0

    def test_due_north_offset_matches_arc_length(self):
        """Test a pure latitude offset equals R times the angle."""
        target = north_of(HARARE, 10)
        assert great_circle_distance_km(*HARARE, *target) == pytest.approx(10, abs=1e-6)

    def test_antipodal_points_are_half_circumference(self):
        """Test antipodal points are pi * R apart without a math domain error."""
        distance = great_circle_distance_km(0.0, 0.0, 0.0, 180.0)
        assert distance == pytest.approx(3.141592653589793 * EARTH_RADIUS_KM)

    def test_out_of_range_input_is_not_validated(self):
        """Test out-of-range coordinates still produce a number."""
        distance = great_circle_distance_km(200.0, 400.0, -17.8, 31.0)
        assert distance >= 0


class TestDistanceBetween:
    """Tests for the GeoPoint wrapper."""

    def test_matches_raw_function(self):
        """Test distance_between agrees with great_circle_distance_km."""
        a = GeoPoint(latitude=HARARE[0], longitude=HARARE[1])
        b = GeoPoint(latitude=BULAWAYO[0], longitude=BULAWAYO[1])

        assert distance_between(a, b) == great_circle_distance_km(*HARARE, *BULAWAYO)
