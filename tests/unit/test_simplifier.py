"""Tests for Douglas-Peucker simplification."""

import math

import pytest

from bodytrace.core.geometry import point_segment_distance
from bodytrace.core.simplifier import ContourSimplifier, simplify_contour, simplify_points
from bodytrace.domain import Contour, Point


@pytest.fixture
def wavy_contour() -> Contour:
    """Closed-ish sine wave trace with 60 integer points."""
    return Contour.from_tuples(
        [(x, round(6 * math.sin(x / 4))) for x in range(40)]
        + [(x, 20) for x in range(39, 19, -1)]
    )


class TestSimplifyPoints:
    """Tests for simplify_points."""

    def test_two_or_fewer_points_unchanged(self) -> None:
        assert simplify_points([]) == []
        assert simplify_points([Point(0, 0)]) == [Point(0, 0)]
        assert simplify_points([Point(0, 0), Point(5, 5)]) == [Point(0, 0), Point(5, 5)]

    def test_collinear_points_collapse_to_endpoints(self) -> None:
        points = [Point(x, 0) for x in range(10)]
        assert simplify_points(points) == [Point(0, 0), Point(9, 0)]

    def test_small_wiggle_removed(self) -> None:
        points = [Point(0, 0), Point(5, 1), Point(10, 0)]
        assert simplify_points(points, tolerance=2.0) == [Point(0, 0), Point(10, 0)]

    def test_large_deviation_kept(self) -> None:
        points = [Point(0, 0), Point(5, 8), Point(10, 0)]
        assert simplify_points(points, tolerance=2.0) == points

    def test_deviation_equal_to_tolerance_dropped(self) -> None:
        points = [Point(0, 0), Point(5, 2), Point(10, 0)]
        assert simplify_points(points, tolerance=2.0) == [Point(0, 0), Point(10, 0)]

    def test_zero_tolerance_keeps_corners_only(self) -> None:
        points = [Point(0, 0), Point(1, 0), Point(2, 0), Point(2, 1), Point(2, 2)]
        assert simplify_points(points, tolerance=0.0) == [Point(0, 0), Point(2, 0), Point(2, 2)]

    def test_long_trace_does_not_recurse(self) -> None:
        points = [Point(x, (x % 2) * 10) for x in range(5000)]
        result = simplify_points(points)
        assert result[0] == points[0]
        assert result[-1] == points[-1]
        assert 2 < len(result) <= 5000


class TestSimplifyContour:
    """Tests for contour-level simplification properties."""

    def test_never_increases_point_count(self, wavy_contour: Contour) -> None:
        assert len(simplify_contour(wavy_contour)) <= len(wavy_contour)

    def test_output_is_subsequence(self, wavy_contour: Contour) -> None:
        simplified = simplify_contour(wavy_contour)
        original = list(wavy_contour.points)
        positions = [original.index(p) for p in simplified]
        assert positions == sorted(positions)

    def test_endpoints_retained(self, wavy_contour: Contour) -> None:
        simplified = simplify_contour(wavy_contour)
        assert simplified.points[0] == wavy_contour.points[0]
        assert simplified.points[-1] == wavy_contour.points[-1]

    def test_idempotent(self, wavy_contour: Contour) -> None:
        once = simplify_contour(wavy_contour)
        assert simplify_contour(once) == once

    def test_dropped_points_within_tolerance(self, wavy_contour: Contour) -> None:
        tolerance = 2.0
        simplified = simplify_contour(wavy_contour, tolerance)
        original = list(wavy_contour.points)
        kept = [original.index(p) for p in simplified]

        for start, end in zip(kept, kept[1:]):
            for i in range(start + 1, end):
                assert point_segment_distance(original[i], original[start], original[end]) <= tolerance

    def test_input_not_modified(self, wavy_contour: Contour) -> None:
        before = wavy_contour.to_tuples()
        simplify_contour(wavy_contour)
        assert wavy_contour.to_tuples() == before


class TestContourSimplifier:
    """Tests for ContourSimplifier."""

    def test_simplify_all_is_per_contour(self) -> None:
        a = Contour.from_tuples([(x, 0) for x in range(12)])
        b = Contour.from_tuples([(0, y) for y in range(12)])
        simplifier = ContourSimplifier(tolerance=1.0)
        result = simplifier.simplify_all([a, b])
        assert [c.to_tuples() for c in result] == [[(0, 0), (11, 0)], [(0, 0), (0, 11)]]

    def test_default_tolerance(self) -> None:
        assert ContourSimplifier().tolerance == 2.0
