"""Mask and outline I/O layer for bodytrace.

This module sits between the outside world and the pure pipeline:
segmentation sources on one side, the presentation layer on the other.

Key responsibilities:
- Adapt probability, intensity and RGBA masks into MaskSpec inputs
- Load masks from JSON and image files
- Write outlines as SVG documents with the -outline naming convention

Key classes:
- MaskReader: Load masks from disk
- OutlineWriter: Save outlines as SVG
"""

from bodytrace.io.adapters import (
    Channel,
    extract_channel,
    from_image,
    from_intensity,
    from_probabilities,
    from_rgba,
)
from bodytrace.io.reader import MaskReader
from bodytrace.io.writer import OutlineWriter, render_svg

__all__ = [
    "Channel",
    "MaskReader",
    "OutlineWriter",
    "extract_channel",
    "from_image",
    "from_intensity",
    "from_probabilities",
    "from_rgba",
    "render_svg",
]
