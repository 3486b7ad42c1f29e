"""Mask-to-outline pipeline.

Runs the six pure stages in order, once per mask:

1. normalize_mask      raw values -> binary mask
2. pad_edges           clear the outer ring
3. BoundaryTracer      binary mask -> raw contours
4. ContourSimplifier   Douglas-Peucker per contour
5. ContourDeduplicator drop inner/outer duplicates
6. PathSynthesizer     contours -> path command stream

The pipeline keeps only its configuration between calls. Malformed input
never raises: it yields an empty result carrying a diagnostic message.
"""

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

import structlog

from bodytrace.config import BodytraceSettings, CurveType, SingletonPolicy, get_default_settings
from bodytrace.core.dedup import ContourDeduplicator
from bodytrace.core.normalizer import normalize_mask
from bodytrace.core.padding import pad_edges
from bodytrace.core.simplifier import ContourSimplifier
from bodytrace.core.synthesizer import PathSynthesizer
from bodytrace.core.tracer import BoundaryTracer
from bodytrace.domain import Contour, Mask, MaskSpec, OutlinePath
from bodytrace.exceptions import MaskError

# Emits through the stdlib logger tree
logger = structlog.wrap_logger(logging.getLogger(__name__))


@dataclass
class PipelineStats:
    """Counters collected while processing one mask."""

    foreground_pixels: int = 0
    raw_contours: int = 0
    surviving_contours: int = 0
    points_before: int = 0
    points_after: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class OutlineResult:
    """Outcome of running the pipeline on one mask.

    Attributes:
        path: Path command stream (empty when nothing was found)
        contours: Surviving contours the path was built from
        stats: Per-stage counters
        error: Diagnostic message when the input was rejected
    """

    path: OutlinePath = field(default_factory=OutlinePath)
    contours: list[Contour] = field(default_factory=list)
    stats: PipelineStats = field(default_factory=PipelineStats)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True unless the input was rejected."""
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "path": self.path.to_list(),
            "contours": [c.to_dict() for c in self.contours],
            "stats": self.stats.to_dict(),
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OutlineResult":
        """Deserialize from dictionary."""
        return cls(
            path=OutlinePath.from_list(data["path"]),
            contours=[Contour.from_dict(c) for c in data["contours"]],
            stats=PipelineStats(**data["stats"]),
            error=data.get("error"),
        )


class OutlinePipeline:
    """Converts segmentation masks into outline paths.

    Safe to share between threads: every call allocates its own buffers.

    Example:
        pipeline = OutlinePipeline()
        result = pipeline.run(MaskSpec(width=64, height=48, data=values))
        svg_d = result.path.to_svg_path()
    """

    def __init__(self, settings: BodytraceSettings | None = None) -> None:
        """Initialize the pipeline stages from settings.

        Args:
            settings: Application settings (defaults when omitted)
        """
        self.settings = settings if settings is not None else get_default_settings()
        self.tracer = BoundaryTracer(
            max_steps=self.settings.trace.max_steps,
            min_points=self.settings.trace.min_points,
        )
        self.simplifier = ContourSimplifier(tolerance=self.settings.simplify.tolerance)
        self.deduplicator = ContourDeduplicator(
            overlap_threshold=self.settings.dedup.overlap_threshold,
            singleton_policy=self.settings.dedup.singleton_policy,
        )
        self.synthesizer = PathSynthesizer(curve_type=self.settings.path.curve_type)

    def run(self, spec: MaskSpec, visited: bytearray | None = None) -> OutlineResult:
        """Run the full pipeline on a raw mask.

        Args:
            spec: Raw mask; its own threshold is used for normalization
            visited: Optional scratch buffer reused by the tracer

        Returns:
            OutlineResult; empty with error set when the input is malformed
        """
        try:
            mask = normalize_mask(spec, fallback_threshold=self.settings.mask.fallback_threshold)
        except MaskError as e:
            logger.warning(
                "Rejected malformed mask",
                error=str(e),
                error_type=type(e).__name__,
            )
            return OutlineResult(error=str(e))

        return self.run_mask(mask, visited=visited)

    def run_data(self, width: int, height: int, data: Sequence[float]) -> OutlineResult:
        """Run the pipeline on raw values using the configured threshold."""
        spec = MaskSpec(width=width, height=height, data=data, threshold=self.settings.mask.threshold)
        return self.run(spec)

    def run_mask(self, mask: Mask, visited: bytearray | None = None) -> OutlineResult:
        """Run stages 2-6 on an already binary mask.

        Args:
            mask: Binary mask
            visited: Optional scratch buffer reused by the tracer

        Returns:
            OutlineResult (empty when the mask has no foreground)
        """
        stats = PipelineStats(foreground_pixels=mask.foreground_count())
        if mask.is_empty():
            return OutlineResult(stats=stats)

        padded = pad_edges(mask)
        raw = self.tracer.trace(padded, visited=visited)
        stats.raw_contours = len(raw)
        stats.points_before = sum(len(c) for c in raw)

        simplified = self.simplifier.simplify_all(raw)
        stats.points_after = sum(len(c) for c in simplified)

        survivors = self.deduplicator.deduplicate(simplified)
        stats.surviving_contours = len(survivors)

        path = self.synthesizer.synthesize(survivors)

        logger.debug(
            "Mask processed",
            width=mask.width,
            height=mask.height,
            **stats.to_dict(),
        )
        return OutlineResult(path=path, contours=survivors, stats=stats)


def trace_outline(
    width: int,
    height: int,
    data: Sequence[float],
    threshold: float = 0.5,
    curve_type: CurveType | str = CurveType.QUADRATIC,
    simplify_tolerance: float = 2.0,
    overlap_threshold: float = 0.7,
    singleton_policy: SingletonPolicy | str = SingletonPolicy.DROP,
) -> OutlineResult:
    """Trace a raw mask into an outline with a one-off configuration.

    Args:
        width: Mask width in pixels
        height: Mask height in pixels
        data: Flat row-major values, at least width * height long
        threshold: Values above this (other than exact 0/1) are foreground
        curve_type: "straight" or "quadratic"
        simplify_tolerance: Douglas-Peucker tolerance in pixels
        overlap_threshold: Bounding-box IoU for duplicate pairing
        singleton_policy: "drop" or "keep" unpaired contours

    Returns:
        OutlineResult for the mask
    """
    settings = BodytraceSettings.model_validate(
        {
            "mask": {"threshold": threshold},
            "simplify": {"tolerance": simplify_tolerance},
            "dedup": {
                "overlap_threshold": overlap_threshold,
                "singleton_policy": singleton_policy,
            },
            "path": {"curve_type": curve_type},
        }
    )
    pipeline = OutlinePipeline(settings)
    return pipeline.run(MaskSpec(width=width, height=height, data=data, threshold=threshold))
