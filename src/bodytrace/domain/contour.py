"""Core geometric types for contour representation.

This module defines the fundamental geometric types used throughout bodytrace:
- Point: A 2D pixel coordinate
- Contour: A closed, ordered sequence of points outlining a region
- BoundingBox: Axis-aligned extent of a contour
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from bodytrace.exceptions import ContourError


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D pixel space.

    Traced points always have integer coordinates; synthesized curve
    points (midpoints) may be fractional.

    Attributes:
        x: X coordinate, growing to the right
        y: Y coordinate, growing downwards
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def midpoint(self, other: "Point") -> "Point":
        """Point halfway between this point and another."""
        return Point((self.x + other.x) / 2, (self.y + other.y) / 2)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box of a contour.

    Width and height are measured between extreme coordinates, so a box
    spanning a single column has zero width.

    Attributes:
        min_x: Smallest x coordinate
        min_y: Smallest y coordinate
        max_x: Largest x coordinate
        max_y: Largest y coordinate
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def area(self) -> float:
        return self.width * self.height

    def intersection_area(self, other: "BoundingBox") -> float:
        """Area shared by this box and another (0 when disjoint)."""
        overlap_w = min(self.max_x, other.max_x) - max(self.min_x, other.min_x)
        overlap_h = min(self.max_y, other.max_y) - max(self.min_y, other.min_y)
        if overlap_w <= 0 or overlap_h <= 0:
            return 0.0
        return overlap_w * overlap_h

    def iou(self, other: "BoundingBox") -> float:
        """Intersection-over-Union of this box and another.

        Returns:
            Ratio in [0, 1]; 0.0 when the union has no area
        """
        intersection = self.intersection_area(other)
        union = self.area + other.area - intersection
        if union <= 0:
            return 0.0
        return intersection / union


@dataclass(frozen=True)
class Contour:
    """A closed contour outlining a foreground region.

    The edge from the last point back to the first is implicit.

    Attributes:
        points: Ordered points forming the contour
    """

    points: tuple[Point, ...] = field(default_factory=tuple)

    @classmethod
    def from_tuples(cls, coords: Iterable[tuple[float, float]]) -> "Contour":
        """Build a contour from (x, y) pairs."""
        return cls(points=tuple(Point(x, y) for x, y in coords))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def is_closed_polygon(self) -> bool:
        """A contour needs at least three points to enclose anything."""
        return len(self.points) >= 3

    def bounding_box(self) -> BoundingBox:
        """Calculate bounding box of the contour.

        Returns:
            BoundingBox spanning all points

        Raises:
            ContourError: If the contour has no points
        """
        if not self.points:
            raise ContourError("Cannot compute bounding box of an empty contour")

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return BoundingBox(min(xs), min(ys), max(xs), max(ys))

    def to_tuples(self) -> list[tuple[float, float]]:
        """Convert to a list of (x, y) tuples."""
        return [p.to_tuple() for p in self.points]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the contour
        """
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contour":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a contour

        Returns:
            Contour instance
        """
        return cls(points=tuple(Point.from_dict(p) for p in data["points"]))
