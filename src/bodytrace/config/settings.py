"""Configuration settings for Bodytrace."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class CurveType(str, Enum):
    """How contours are rendered into path commands."""

    STRAIGHT = "straight"
    QUADRATIC = "quadratic"


class SingletonPolicy(str, Enum):
    """What the deduplicator does with contours that never formed a pair."""

    DROP = "drop"
    KEEP = "keep"


class MaskConfig(BaseModel):
    """Configuration for mask normalization."""

    threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Values above this (other than exact 0/1) count as foreground",
    )
    fallback_threshold: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Lower threshold retried once when nothing passes the main threshold",
    )


class TraceConfig(BaseModel):
    """Configuration for boundary tracing."""

    max_steps: int = Field(
        default=5000,
        ge=1,
        description="Hard cap on steps per trace (runaway guard)",
    )
    min_points: int = Field(
        default=11,
        ge=1,
        description="Traces with fewer points are discarded as noise",
    )


class SimplifyConfig(BaseModel):
    """Configuration for Douglas-Peucker simplification."""

    tolerance: float = Field(
        default=2.0,
        ge=0.0,
        description="Maximum perpendicular deviation in pixels",
    )


class DedupConfig(BaseModel):
    """Configuration for inner/outer contour deduplication."""

    overlap_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Bounding-box IoU above which two contours are the same edge",
    )
    singleton_policy: SingletonPolicy = Field(
        default=SingletonPolicy.DROP,
        description="Drop or keep contours that found no duplicate partner",
    )


class PathConfig(BaseModel):
    """Configuration for path synthesis and export."""

    curve_type: CurveType = Field(
        default=CurveType.QUADRATIC,
        description="Straight line segments or smoothed quadratic curves",
    )
    precision: int = Field(
        default=2,
        ge=0,
        le=6,
        description="Decimal places for exported coordinates",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch frame processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    frame_stride: int = Field(
        default=1,
        ge=1,
        description="Process every Nth frame, skip the rest",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class BodytraceSettings(BaseModel):
    """Main application settings."""

    mask: MaskConfig = Field(default_factory=MaskConfig)
    trace: TraceConfig = Field(default_factory=TraceConfig)
    simplify: SimplifyConfig = Field(default_factory=SimplifyConfig)
    dedup: DedupConfig = Field(default_factory=DedupConfig)
    path: PathConfig = Field(default_factory=PathConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> BodytraceSettings:
    """Get default application settings."""
    return BodytraceSettings()
