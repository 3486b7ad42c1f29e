"""Domain models for bodytrace.

This module contains the core domain models representing masks, contours
and path command streams. All models are designed to be:

- Immutable (frozen dataclasses, bytes / tuple storage)
- Serializable for inter-process communication (parallel processing)
- Independent of any particular segmentation model or renderer

Key classes:
- MaskSpec: Raw mask input (dimensions, numeric data, threshold)
- Mask: Canonical binary mask
- Point: A 2D pixel coordinate
- Contour: A closed contour outlining a foreground region
- BoundingBox: Axis-aligned extent used for deduplication
- PathCommand: A single drawing instruction
- OutlinePath: The path command stream produced by the pipeline
"""

from bodytrace.domain.contour import BoundingBox, Contour, Point
from bodytrace.domain.mask import BACKGROUND, FOREGROUND, Mask, MaskSpec
from bodytrace.domain.path import (
    OutlinePath,
    PathCommand,
    PathOp,
    close_path,
    line_to,
    move_to,
    quad_to,
)

__all__: list[str] = [
    # Constants
    "BACKGROUND",
    "FOREGROUND",
    # Enums
    "PathOp",
    # Core types
    "MaskSpec",
    "Mask",
    "Point",
    "Contour",
    "BoundingBox",
    "PathCommand",
    "OutlinePath",
    # Command builders
    "close_path",
    "line_to",
    "move_to",
    "quad_to",
]
