"""Mask representation.

This module defines the two mask types the pipeline works with:
- MaskSpec: the raw input contract (dimensions, numeric data, threshold)
- Mask: the canonical binary grid produced by normalization
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from bodytrace.exceptions import MaskShapeError

BACKGROUND = 0
FOREGROUND = 1


@dataclass(frozen=True, slots=True)
class MaskSpec:
    """Raw mask as delivered by a segmentation source.

    The data is flat and row-major. Values are expected to be exactly 0/1
    or probabilities in [0, 1]; any other range must be scaled by the
    source (see bodytrace.io.adapters) before building a spec.

    Attributes:
        width: Mask width in pixels
        height: Mask height in pixels
        data: Flat numeric sequence of at least width * height values
        threshold: Values above this count as foreground
    """

    width: int
    height: int
    data: Sequence[float]
    threshold: float = 0.5

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with width, height, data and threshold fields
        """
        return {
            "width": self.width,
            "height": self.height,
            "data": list(self.data) if self.data is not None else None,
            "threshold": self.threshold,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MaskSpec":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with width, height, data and optional threshold

        Returns:
            MaskSpec instance
        """
        return cls(
            width=data["width"],
            height=data["height"],
            data=data["data"],
            threshold=data.get("threshold", 0.5),
        )


@dataclass(frozen=True, slots=True)
class Mask:
    """A binary foreground/background grid.

    Immutable: cells are stored as bytes, one byte per pixel, each
    either BACKGROUND (0) or FOREGROUND (1), row-major with the origin
    at the top-left.

    Attributes:
        width: Mask width in pixels
        height: Mask height in pixels
        cells: Row-major cell values, exactly width * height long
    """

    width: int
    height: int
    cells: bytes

    def __post_init__(self) -> None:
        if len(self.cells) != self.width * self.height:
            raise MaskShapeError(
                self.width,
                self.height,
                len(self.cells),
                "cell count must equal width * height",
            )

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Mask":
        """Build a mask from a list of rows (truthy = foreground)."""
        height = len(rows)
        width = len(rows[0]) if height else 0
        cells = bytearray()
        for row in rows:
            if len(row) != width:
                raise MaskShapeError(width, height, None, "rows must all have the same length")
            cells.extend(FOREGROUND if value else BACKGROUND for value in row)
        return cls(width=width, height=height, cells=bytes(cells))

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int:
        """Cell value at (x, y); out-of-bounds reads as background."""
        if not self.in_bounds(x, y):
            return BACKGROUND
        return self.cells[y * self.width + x]

    def is_foreground(self, x: int, y: int) -> bool:
        """Check whether (x, y) is a foreground cell."""
        return self.get(x, y) == FOREGROUND

    def foreground_count(self) -> int:
        """Number of foreground cells."""
        return self.cells.count(FOREGROUND)

    def is_empty(self) -> bool:
        """Check if the mask has no foreground at all."""
        return FOREGROUND not in self.cells

    def rows(self) -> Iterator[bytes]:
        """Iterate over rows, top to bottom."""
        for y in range(self.height):
            start = y * self.width
            yield self.cells[start : start + self.width]
