"""Douglas-Peucker contour simplification.

Reduces the point count of each contour while keeping every dropped point
within a fixed distance of the simplified polyline. Only original points
are retained, so the output is always a subsequence of the input.
"""

from collections.abc import Sequence

from bodytrace.core.geometry import point_segment_distance
from bodytrace.domain import Contour, Point

DEFAULT_TOLERANCE = 2.0


def simplify_points(points: Sequence[Point], tolerance: float = DEFAULT_TOLERANCE) -> list[Point]:
    """Simplify an ordered point sequence from its first to its last point.

    Uses an explicit work stack instead of recursion so long traces cannot
    hit the interpreter's recursion limit.

    Args:
        points: Ordered points; the first and last are always kept
        tolerance: Maximum allowed distance of a dropped point from the
            chord that replaces it

    Returns:
        Retained points in original order
    """
    n = len(points)
    if n <= 2:
        return list(points)

    keep = [False] * n
    keep[0] = keep[-1] = True
    stack = [(0, n - 1)]

    while stack:
        start, end = stack.pop()
        if end - start <= 1:
            continue

        max_distance = 0.0
        max_index = start
        for i in range(start + 1, end):
            distance = point_segment_distance(points[i], points[start], points[end])
            if distance > max_distance:
                max_distance = distance
                max_index = i

        if max_distance > tolerance:
            keep[max_index] = True
            stack.append((start, max_index))
            stack.append((max_index, end))

    return [point for point, kept in zip(points, keep) if kept]


def simplify_contour(contour: Contour, tolerance: float = DEFAULT_TOLERANCE) -> Contour:
    """Simplify a single contour.

    Args:
        contour: Contour to simplify (not modified)
        tolerance: Maximum perpendicular deviation in pixels

    Returns:
        New contour with at most as many points as the input
    """
    return Contour(points=tuple(simplify_points(contour.points, tolerance)))


class ContourSimplifier:
    """Applies Douglas-Peucker simplification to each contour independently."""

    def __init__(self, tolerance: float = DEFAULT_TOLERANCE) -> None:
        self.tolerance = tolerance

    def simplify(self, contour: Contour) -> Contour:
        return simplify_contour(contour, self.tolerance)

    def simplify_all(self, contours: Sequence[Contour]) -> list[Contour]:
        return [self.simplify(contour) for contour in contours]
