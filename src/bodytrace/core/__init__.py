"""Core processing algorithms for bodytrace.

This module contains the outline pipeline and its stages:

- Mask normalization (binary / probability values -> binary mask)
- Edge padding (clear the frame border)
- Boundary tracing (Moore-neighbourhood contour following)
- Contour simplification (Douglas-Peucker)
- Contour deduplication (bounding-box IoU pairing)
- Path synthesis (straight or quadratic path commands)

All stages are designed to be:
- Stateless between calls (safe for use in worker processes and threads)
- Pure (no I/O, inputs never mutated)

Key functions:
- normalize_mask: Canonicalize a MaskSpec into a binary Mask
- pad_edges: Clear the outermost ring of a mask
- simplify_contour: Douglas-Peucker simplification of one contour
- trace_outline: One-shot convenience entry point

Key classes:
- BoundaryTracer: Extracts contours from a padded mask
- ContourSimplifier: Simplifies contours
- ContourDeduplicator: Removes duplicate contour pairs
- PathSynthesizer: Renders contours into an OutlinePath
- OutlinePipeline: Runs all stages on one mask
- FrameScheduler: Picks every Nth frame of a stream
- FrameProcessor: Processes batches of frames
"""

from bodytrace.core.dedup import ContourDeduplicator
from bodytrace.core.geometry import (
    bounding_box_iou,
    nearest_point_on_segment,
    point_distance,
    point_segment_distance,
)
from bodytrace.core.normalizer import normalize_mask
from bodytrace.core.padding import pad_edges
from bodytrace.core.pipeline import (
    OutlinePipeline,
    OutlineResult,
    PipelineStats,
    trace_outline,
)
from bodytrace.core.processor import FrameProcessor, process_frame
from bodytrace.core.scheduler import FrameScheduler
from bodytrace.core.simplifier import ContourSimplifier, simplify_contour, simplify_points
from bodytrace.core.synthesizer import PathSynthesizer
from bodytrace.core.tracer import BoundaryTracer, is_boundary_pixel

__all__ = [
    # Pipeline stages
    "BoundaryTracer",
    "ContourDeduplicator",
    "ContourSimplifier",
    "PathSynthesizer",
    # Orchestration
    "FrameProcessor",
    "FrameScheduler",
    "OutlinePipeline",
    "OutlineResult",
    "PipelineStats",
    # Geometry functions
    "bounding_box_iou",
    "nearest_point_on_segment",
    "point_distance",
    "point_segment_distance",
    # Stage functions
    "is_boundary_pixel",
    "normalize_mask",
    "pad_edges",
    "process_frame",
    "simplify_contour",
    "simplify_points",
    "trace_outline",
]
