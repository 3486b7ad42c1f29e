"""Path command stream.

An OutlinePath is the sole output artifact of the pipeline: an ordered
sequence of move / line / quadratic curve / close commands. Operator names
follow the fontTools pen protocol, so a path can be replayed onto any pen
(RecordingPen, SVGPathPen, BoundsPen, ...).
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fontTools.pens.basePen import AbstractPen
from fontTools.pens.svgPathPen import SVGPathPen

Coordinate = tuple[float, float]


class PathOp(Enum):
    """Drawing operator, valued by its pen method name."""

    MOVE = "moveTo"
    LINE = "lineTo"
    QUAD = "qCurveTo"
    CLOSE = "closePath"


@dataclass(frozen=True, slots=True)
class PathCommand:
    """A single drawing instruction.

    Attributes:
        op: Drawing operator
        points: Operands; one point for MOVE/LINE, control point then end
            point for QUAD, none for CLOSE
    """

    op: PathOp
    points: tuple[Coordinate, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        return {"op": self.op.value, "points": [list(p) for p in self.points]}


def move_to(x: float, y: float) -> PathCommand:
    return PathCommand(PathOp.MOVE, ((x, y),))


def line_to(x: float, y: float) -> PathCommand:
    return PathCommand(PathOp.LINE, ((x, y),))


def quad_to(control: Coordinate, end: Coordinate) -> PathCommand:
    return PathCommand(PathOp.QUAD, (control, end))


def close_path() -> PathCommand:
    return PathCommand(PathOp.CLOSE)


def format_number(value: float, precision: int = 2) -> str:
    """Format a coordinate compactly: 5.0 -> "5", 2.50 -> "2.5"."""
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


@dataclass(frozen=True)
class OutlinePath:
    """Immutable stream of path commands covering zero or more contours.

    Attributes:
        commands: Drawing commands in emission order
    """

    commands: tuple[PathCommand, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[PathCommand]:
        return iter(self.commands)

    def is_empty(self) -> bool:
        """Check if the stream contains no commands."""
        return not self.commands

    @property
    def contour_count(self) -> int:
        """Number of closed sub-paths in the stream."""
        return sum(1 for command in self.commands if command.op is PathOp.MOVE)

    def draw(self, pen: AbstractPen) -> None:
        """Replay the stream onto a fontTools pen.

        Args:
            pen: Any object implementing the pen protocol
        """
        for command in self.commands:
            getattr(pen, command.op.value)(*command.points)

    def to_svg_path(self, precision: int = 2) -> str:
        """Render the stream as SVG path data (the "d" attribute).

        Args:
            precision: Maximum decimal places per coordinate

        Returns:
            SVG path data; empty string for an empty stream
        """
        pen = SVGPathPen(None, ntos=lambda value: format_number(value, precision))
        self.draw(pen)
        return pen.getCommands()

    def to_list(self) -> list[dict[str, Any]]:
        """Serialize to a list of command dictionaries."""
        return [command.to_dict() for command in self.commands]

    @classmethod
    def from_list(cls, data: list[dict[str, Any]]) -> "OutlinePath":
        """Deserialize from a list of command dictionaries."""
        return cls(
            commands=tuple(
                PathCommand(PathOp(item["op"]), tuple((p[0], p[1]) for p in item["points"]))
                for item in data
            )
        )
