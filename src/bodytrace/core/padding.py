"""Edge padding.

Forces the outermost ring of a mask to background so every foreground
region is closed and no trace can run off the frame. Regions touching the
frame edge are clipped rather than extrapolated.
"""

from bodytrace.domain import BACKGROUND, Mask


def pad_edges(mask: Mask) -> Mask:
    """Return a copy of the mask with its border cells cleared.

    Args:
        mask: Binary mask (left untouched)

    Returns:
        New mask where every cell with x == 0, x == width - 1, y == 0 or
        y == height - 1 is background
    """
    width, height = mask.width, mask.height
    cells = bytearray(mask.cells)

    # Top and bottom rows
    cells[0:width] = bytes(width)
    cells[(height - 1) * width : height * width] = bytes(width)

    # Left and right columns
    for y in range(height):
        row = y * width
        cells[row] = BACKGROUND
        cells[row + width - 1] = BACKGROUND

    return Mask(width=width, height=height, cells=bytes(cells))
