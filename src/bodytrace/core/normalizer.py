"""Mask normalization.

Converts a MaskSpec (binary, probability or pre-scaled intensity values)
into a canonical binary Mask. Exact 0 and 1 are taken literally; every
other value is foreground iff it is above the MaskSpec threshold.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from numbers import Real

from bodytrace.domain import BACKGROUND, FOREGROUND, Mask, MaskSpec
from bodytrace.exceptions import MaskEncodingError, MaskShapeError

logger = logging.getLogger(__name__)


def _validate_dimensions(spec: MaskSpec) -> int:
    """Check dimensions, threshold and data shape, returning the cell count."""
    width, height = spec.width, spec.height
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise MaskShapeError(width, height, None, f"{name} must be an integer")
        if value <= 0:
            raise MaskShapeError(width, height, None, f"{name} must be positive")

    threshold = spec.threshold
    if isinstance(threshold, bool) or not isinstance(threshold, Real) or math.isnan(threshold):
        raise MaskEncodingError(f"threshold must be a number, got {threshold!r}")

    data = spec.data
    # Anything indexable works (list, tuple, bytes, array.array, 1-D buffers)
    if (
        data is None
        or isinstance(data, (str, Mapping))
        or not (hasattr(data, "__len__") and hasattr(data, "__getitem__"))
    ):
        raise MaskEncodingError(f"expected a flat numeric sequence, got {type(data).__name__}")

    cell_count = width * height
    if len(data) < cell_count:
        raise MaskShapeError(width, height, len(data), "data is shorter than width * height")
    return cell_count


def _binarize(data: Sequence[float], cell_count: int, threshold: float) -> bytes:
    cells = bytearray(cell_count)
    for i in range(cell_count):
        value = data[i]
        if isinstance(value, bool):
            value = int(value)
        elif not isinstance(value, Real):
            raise MaskEncodingError(f"non-numeric value {value!r} at index {i}")

        if value == 1:
            cells[i] = FOREGROUND
        elif value == 0:
            cells[i] = BACKGROUND
        else:
            cells[i] = FOREGROUND if value > threshold else BACKGROUND
    return bytes(cells)


def normalize_mask(spec: MaskSpec, fallback_threshold: float | None = None) -> Mask:
    """Normalize a raw mask into a binary mask.

    Args:
        spec: Raw mask; data longer than width * height is truncated
        fallback_threshold: Optional lower threshold retried once when no
            cell passes spec.threshold

    Returns:
        Binary mask with the input's dimensions

    Raises:
        MaskShapeError: If dimensions are invalid or data is too short
        MaskEncodingError: If data is not a flat numeric sequence or the
            threshold is not a number
    """
    cell_count = _validate_dimensions(spec)
    cells = _binarize(spec.data, cell_count, spec.threshold)

    if FOREGROUND not in cells and fallback_threshold is not None and fallback_threshold < spec.threshold:
        logger.debug(
            "No foreground at threshold %.3f, retrying at %.3f",
            spec.threshold,
            fallback_threshold,
        )
        cells = _binarize(spec.data, cell_count, fallback_threshold)

    return Mask(width=spec.width, height=spec.height, cells=cells)
