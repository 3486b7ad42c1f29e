"""Geometric operations for contour simplification and deduplication.

This module provides core mathematical utilities for:
- Nearest point / distance from a point to a line segment
- Euclidean point distance
- Bounding box Intersection-over-Union

All functions are pure, stateless, and designed for use in parallel processing.
"""

import math

from bodytrace.domain import BoundingBox, Point


def point_distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def nearest_point_on_segment(point: Point, seg_start: Point, seg_end: Point) -> tuple[Point, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment endpoints.

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Tuple of (nearest_point, distance) where nearest_point is the closest
        point on the segment and distance is the Euclidean distance to it

    Examples:
        >>> nearest, dist = nearest_point_on_segment(Point(1, 1), Point(0, 0), Point(2, 0))
        >>> nearest, dist
        (Point(x=1.0, y=0.0), 1.0)
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    # Zero-length segment: plain point distance
    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq == 0:
        return seg_start, point_distance(point, seg_start)

    # t = dot(point - start, end - start) / ||end - start||^2
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest = Point(seg_start.x + t * dx, seg_start.y + t * dy)
    return nearest, point_distance(point, nearest)


def point_segment_distance(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Distance from a point to a line segment.

    Falls back to the distance to seg_start when the segment is degenerate.
    """
    _, distance = nearest_point_on_segment(point, seg_start, seg_end)
    return distance


def bounding_box_iou(a: BoundingBox, b: BoundingBox) -> float:
    """Intersection-over-Union of two bounding boxes.

    Examples:
        >>> bounding_box_iou(BoundingBox(0, 0, 10, 10), BoundingBox(0, 0, 10, 10))
        1.0
        >>> bounding_box_iou(BoundingBox(0, 0, 10, 10), BoundingBox(20, 20, 30, 30))
        0.0
    """
    return a.iou(b)
