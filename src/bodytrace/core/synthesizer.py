"""Path synthesis from contours.

Renders contours into a path command stream, either as straight polylines
or as smoothed quadratic curves running through the midpoints between
consecutive contour points.
"""

from collections.abc import Sequence

from bodytrace.config import CurveType
from bodytrace.domain import (
    Contour,
    OutlinePath,
    PathCommand,
    close_path,
    line_to,
    move_to,
    quad_to,
)


def straight_commands(contour: Contour) -> list[PathCommand]:
    """Polyline through every point, closed back to the first."""
    points = contour.points
    commands = [move_to(points[0].x, points[0].y)]
    commands.extend(line_to(p.x, p.y) for p in points[1:])
    commands.append(close_path())
    return commands


def quadratic_commands(contour: Contour) -> list[PathCommand]:
    """Smooth closed curve using each point as a quadratic control point.

    Starts at the first point; segment i uses point i + 1 as control and
    the midpoint of points i + 1 and i + 2 as end point, wrapping around
    the contour once. Contours with fewer than three points are drawn
    straight.
    """
    if not contour.is_closed_polygon():
        return straight_commands(contour)

    points = contour.points
    n = len(points)

    commands = [move_to(points[0].x, points[0].y)]
    for i in range(n):
        control = points[(i + 1) % n]
        end = control.midpoint(points[(i + 2) % n])
        commands.append(quad_to(control.to_tuple(), end.to_tuple()))
    commands.append(close_path())
    return commands


class PathSynthesizer:
    """Turns contours into a single OutlinePath.

    Example:
        synthesizer = PathSynthesizer(CurveType.STRAIGHT)
        path = synthesizer.synthesize(contours)
        svg_d = path.to_svg_path()
    """

    def __init__(self, curve_type: CurveType = CurveType.QUADRATIC) -> None:
        self.curve_type = CurveType(curve_type)

    def synthesize(self, contours: Sequence[Contour]) -> OutlinePath:
        """Render contours into one command stream.

        Args:
            contours: Contours in drawing order; empty contours are skipped

        Returns:
            OutlinePath with one closed sub-path per non-empty contour
        """
        render = quadratic_commands if self.curve_type is CurveType.QUADRATIC else straight_commands

        commands: list[PathCommand] = []
        for contour in contours:
            if not contour.points:
                continue
            commands.extend(render(contour))
        return OutlinePath(commands=tuple(commands))
