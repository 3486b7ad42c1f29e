"""Segmentation-source adapters.

Segmentation models deliver masks in many shapes: probability maps,
single-channel intensity images, RGBA buffers with the mask in the alpha
or red channel. These helpers turn each of them into a MaskSpec the
normalizer accepts, so no format detection happens inside the pipeline.
"""

import math
from collections.abc import Sequence
from enum import Enum
from numbers import Real

from PIL import Image

from bodytrace.domain import MaskSpec
from bodytrace.exceptions import MaskEncodingError, MaskShapeError

RGBA_CHANNELS = 4
ALPHA_OFFSET = 3
RED_OFFSET = 0

# Intensity strictly above this (out of 255) counts as foreground
DEFAULT_INTENSITY_CUTOFF = 128


class Channel(str, Enum):
    """Which RGBA channel carries the mask."""

    AUTO = "auto"
    ALPHA = "alpha"
    RED = "red"


def from_probabilities(
    width: int,
    height: int,
    data: Sequence[float],
    threshold: float = 0.5,
) -> MaskSpec:
    """Wrap a binary or [0, 1] probability mask."""
    return MaskSpec(width=width, height=height, data=data, threshold=threshold)


def from_intensity(
    width: int,
    height: int,
    data: Sequence[float],
    max_value: float = 255,
    cutoff: float = DEFAULT_INTENSITY_CUTOFF,
) -> MaskSpec:
    """Scale a single-channel intensity mask into [0, 1].

    Args:
        width: Mask width in pixels
        height: Mask height in pixels
        data: Flat intensities in [0, max_value]
        max_value: Full-scale intensity
        cutoff: Intensity above which a pixel is foreground

    Returns:
        MaskSpec with scaled data and threshold cutoff / max_value

    Raises:
        MaskEncodingError: If max_value is not positive or data is not numeric
    """
    if isinstance(max_value, bool) or not isinstance(max_value, Real) or math.isnan(max_value):
        raise MaskEncodingError(f"max_value must be a number, got {max_value!r}")
    if max_value <= 0:
        raise MaskEncodingError(f"max_value must be positive, got {max_value}")

    try:
        scaled = [value / max_value for value in data]
    except TypeError as e:
        raise MaskEncodingError(f"intensity data is not numeric: {e}") from e

    return MaskSpec(width=width, height=height, data=scaled, threshold=cutoff / max_value)


def extract_channel(
    width: int,
    height: int,
    buffer: Sequence[int],
    channel: Channel = Channel.AUTO,
) -> list[int]:
    """Pick one channel out of an interleaved RGBA buffer.

    With Channel.AUTO the alpha value is used, falling back to the red
    value for pixels whose alpha is zero.

    Raises:
        MaskShapeError: If the buffer holds fewer than width * height * 4 values
    """
    pixel_count = width * height
    if len(buffer) < pixel_count * RGBA_CHANNELS:
        raise MaskShapeError(
            width,
            height,
            len(buffer),
            f"RGBA buffer needs {pixel_count * RGBA_CHANNELS} values",
        )

    channel = Channel(channel)
    if channel is Channel.ALPHA:
        return [buffer[i * RGBA_CHANNELS + ALPHA_OFFSET] for i in range(pixel_count)]
    if channel is Channel.RED:
        return [buffer[i * RGBA_CHANNELS + RED_OFFSET] for i in range(pixel_count)]

    values = []
    for i in range(pixel_count):
        base = i * RGBA_CHANNELS
        values.append(buffer[base + ALPHA_OFFSET] or buffer[base + RED_OFFSET])
    return values


def from_rgba(
    width: int,
    height: int,
    buffer: Sequence[int],
    channel: Channel = Channel.AUTO,
    cutoff: float = DEFAULT_INTENSITY_CUTOFF,
) -> MaskSpec:
    """Build a mask from an 8-bit RGBA buffer (e.g. canvas image data)."""
    values = extract_channel(width, height, buffer, channel)
    return from_intensity(width, height, values, max_value=255, cutoff=cutoff)


def from_image(
    image: Image.Image,
    channel: Channel = Channel.AUTO,
    cutoff: float = DEFAULT_INTENSITY_CUTOFF,
) -> MaskSpec:
    """Build a mask from a Pillow image.

    Greyscale and bilevel images are read as intensity. Other modes are
    converted to RGBA; images without an alpha band use the red channel
    when channel is AUTO.

    Args:
        image: Loaded Pillow image
        channel: Channel carrying the mask for colour images
        cutoff: Intensity above which a pixel is foreground

    Returns:
        MaskSpec sized like the image
    """
    width, height = image.size

    if image.mode in ("1", "L"):
        grey = image.convert("L")
        return from_intensity(width, height, grey.tobytes(), max_value=255, cutoff=cutoff)

    channel = Channel(channel)
    if channel is Channel.AUTO and "A" not in image.getbands():
        channel = Channel.RED

    rgba = image.convert("RGBA")
    return from_rgba(width, height, rgba.tobytes(), channel=channel, cutoff=cutoff)
