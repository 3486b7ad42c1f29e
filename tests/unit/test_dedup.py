"""Tests for inner/outer contour deduplication."""

import itertools

import pytest

from bodytrace.config import SingletonPolicy
from bodytrace.core.dedup import ContourDeduplicator
from bodytrace.domain import Contour


def square(x0: float, y0: float, size: float) -> Contour:
    return Contour.from_tuples(
        [(x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)]
    )


@pytest.fixture
def outer() -> Contour:
    return square(10, 10, 40)


@pytest.fixture
def inner() -> Contour:
    """Nearly coincident with outer (IoU ~0.9)."""
    return square(11, 11, 38)


@pytest.fixture
def far_away() -> Contour:
    return square(200, 200, 20)


class TestFindPairs:
    """Tests for ContourDeduplicator.find_pairs."""

    def test_near_identical_pair(self, outer: Contour, inner: Contour) -> None:
        assert ContourDeduplicator().find_pairs([outer, inner]) == [(0, 1)]

    def test_disjoint_contours_do_not_pair(self, outer: Contour, far_away: Contour) -> None:
        assert ContourDeduplicator().find_pairs([outer, far_away]) == []

    def test_first_match_wins(self, outer: Contour, inner: Contour) -> None:
        twin = square(10, 10, 40)
        # outer pairs with inner; twin has no partner left
        assert ContourDeduplicator().find_pairs([outer, inner, twin]) == [(0, 1)]

    def test_threshold_is_strict(self) -> None:
        a = square(0, 0, 10)
        b = square(0, 0, 7)  # IoU = 49 / 100
        assert ContourDeduplicator(overlap_threshold=0.49).find_pairs([a, b]) == []
        assert ContourDeduplicator(overlap_threshold=0.48).find_pairs([a, b]) == [(0, 1)]

    def test_empty_contours_never_pair(self, outer: Contour) -> None:
        assert ContourDeduplicator().find_pairs([Contour(), outer, Contour()]) == []


class TestDeduplicate:
    """Tests for ContourDeduplicator.deduplicate."""

    def test_pair_keeps_first(self, outer: Contour, inner: Contour) -> None:
        assert ContourDeduplicator().deduplicate([outer, inner]) == [outer]
        assert ContourDeduplicator().deduplicate([inner, outer]) == [inner]

    def test_singletons_dropped_by_default(self, outer: Contour, far_away: Contour) -> None:
        assert ContourDeduplicator().deduplicate([outer, far_away]) == []

    def test_singletons_kept_when_asked(self, outer: Contour, far_away: Contour) -> None:
        dedup = ContourDeduplicator(singleton_policy=SingletonPolicy.KEEP)
        assert dedup.deduplicate([outer, far_away]) == [outer, far_away]

    def test_policy_accepts_string(self, outer: Contour) -> None:
        dedup = ContourDeduplicator(singleton_policy="keep")  # type: ignore[arg-type]
        assert dedup.singleton_policy is SingletonPolicy.KEEP
        assert dedup.deduplicate([outer]) == [outer]

    def test_mixed_pairs_and_singletons_keep_order(
        self, outer: Contour, inner: Contour, far_away: Contour
    ) -> None:
        dedup = ContourDeduplicator(singleton_policy=SingletonPolicy.KEEP)
        assert dedup.deduplicate([far_away, outer, inner]) == [far_away, outer]

    def test_empty_input(self) -> None:
        assert ContourDeduplicator().deduplicate([]) == []

    def test_survivor_count_permutation_invariant(
        self, outer: Contour, inner: Contour, far_away: Contour
    ) -> None:
        other_outer = square(100, 10, 30)
        other_inner = square(101, 11, 28)
        contours = [outer, inner, far_away, other_outer, other_inner]

        counts = {
            len(ContourDeduplicator().deduplicate(list(perm)))
            for perm in itertools.permutations(contours)
        }
        assert counts == {2}

    def test_input_not_modified(self, outer: Contour, inner: Contour) -> None:
        contours = [outer, inner]
        ContourDeduplicator().deduplicate(contours)
        assert contours == [outer, inner]
