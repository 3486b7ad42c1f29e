"""Boundary tracing using Moore-neighbourhood contour following.

The tracer scans a padded binary mask for foreground pixels that touch the
background and walks each boundary through its 8-connected neighbours with
a left-turn bias, producing one ordered point sequence per trace.

Tracing is single-layer: a pixel claimed by one trace is never the start of
another, so holes inside an already traced region are not followed
separately. The visited bookkeeping lives in a per-call scratch buffer,
never in module or instance state, so one tracer can serve concurrent calls.
"""

import logging

from bodytrace.domain import FOREGROUND, Contour, Mask, Point

logger = logging.getLogger(__name__)

# Compass directions, clockwise in image coordinates, starting at +x
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)

# Added to the chosen direction to get the next scan start (left turn)
TURN_OFFSET = 6

DEFAULT_MAX_STEPS = 5000
DEFAULT_MIN_POINTS = 11


def is_boundary_pixel(mask: Mask, x: int, y: int) -> bool:
    """Check whether a foreground pixel has a background 8-neighbour.

    Neighbours outside the grid are ignored.

    Args:
        mask: Binary mask
        x: Pixel column
        y: Pixel row

    Returns:
        True for foreground pixels touching at least one in-bounds
        background pixel
    """
    if not mask.is_foreground(x, y):
        return False

    width, height, cells = mask.width, mask.height, mask.cells

    for dx, dy in DIRECTIONS:
        nx = x + dx
        ny = y + dy
        if 0 <= nx < width and 0 <= ny < height and cells[ny * width + nx] != FOREGROUND:
            return True
    return False


class BoundaryTracer:
    """Extracts ordered boundary point sequences from a binary mask.

    Example:
        tracer = BoundaryTracer()
        contours = tracer.trace(pad_edges(mask))
    """

    def __init__(
        self,
        max_steps: int = DEFAULT_MAX_STEPS,
        min_points: int = DEFAULT_MIN_POINTS,
    ) -> None:
        """Initialize the tracer.

        Args:
            max_steps: Hard cap on steps per trace; longer traces are
                truncated silently
            min_points: Traces with fewer points are discarded as noise
        """
        self.max_steps = max_steps
        self.min_points = min_points

    def trace(self, mask: Mask, visited: bytearray | None = None) -> list[Contour]:
        """Trace every boundary in the mask.

        Only interior cells (1 <= x < width - 1, 1 <= y < height - 1) are
        scanned; the mask is expected to be edge padded.

        Args:
            mask: Padded binary mask
            visited: Optional caller-owned scratch buffer of width * height
                bytes. It is cleared before use. A fresh buffer is
                allocated when omitted.

        Returns:
            Contours in scan order, each with at least min_points points

        Raises:
            ValueError: If the scratch buffer has the wrong size
        """
        width, height = mask.width, mask.height
        cell_count = width * height

        if visited is None:
            visited = bytearray(cell_count)
        elif len(visited) != cell_count:
            raise ValueError(
                f"Scratch buffer has {len(visited)} cells, mask needs {cell_count}"
            )
        else:
            visited[:] = bytes(cell_count)

        cells = mask.cells
        contours: list[Contour] = []
        discarded = 0

        for y in range(1, height - 1):
            for x in range(1, width - 1):
                index = y * width + x
                if cells[index] != FOREGROUND or visited[index]:
                    continue
                if not is_boundary_pixel(mask, x, y):
                    continue

                points = self._follow(mask, x, y, visited)
                if len(points) >= self.min_points:
                    contours.append(Contour(points=tuple(points)))
                else:
                    discarded += 1

        logger.debug(
            "Traced %d contours (%d discarded below %d points)",
            len(contours),
            discarded,
            self.min_points,
        )
        return contours

    def _follow(self, mask: Mask, start_x: int, start_y: int, visited: bytearray) -> list[Point]:
        """Walk one boundary starting at (start_x, start_y).

        Stops when the walk returns to the start pixel, when no neighbour
        qualifies, or after max_steps steps.
        """
        width, height, cells = mask.width, mask.height, mask.cells
        points: list[Point] = []

        x, y = start_x, start_y
        direction = 0
        steps = 0

        while True:
            visited[y * width + x] = 1
            points.append(Point(x, y))

            found = False
            for i in range(8):
                candidate = (direction + i) % 8
                dx, dy = DIRECTIONS[candidate]
                nx = x + dx
                ny = y + dy
                if not (0 <= nx < width and 0 <= ny < height):
                    continue
                if cells[ny * width + nx] == FOREGROUND and is_boundary_pixel(mask, nx, ny):
                    x, y = nx, ny
                    direction = (candidate + TURN_OFFSET) % 8
                    found = True
                    break

            if not found:
                break

            steps += 1
            if x == start_x and y == start_y:
                break
            if steps >= self.max_steps:
                logger.debug("Trace from (%d, %d) truncated at %d steps", start_x, start_y, steps)
                break

        return points
