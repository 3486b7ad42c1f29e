"""Logging utilities for Bodytrace."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Marks handlers installed by configure_logging so reconfiguring replaces them
_HANDLER_TAG = "_bodytrace_handler"


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    processed_count: int = 0
    skipped_count: int = 0
    empty_count: int = 0
    error_count: int = 0
    contours_emitted: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    frame_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_frame_time_ms(self) -> float | None:
        if not self.frame_timings_ms:
            return None
        return sum(self.frame_timings_ms) / len(self.frame_timings_ms)

    @property
    def min_frame_time_ms(self) -> float | None:
        return min(self.frame_timings_ms) if self.frame_timings_ms else None

    @property
    def max_frame_time_ms(self) -> float | None:
        return max(self.frame_timings_ms) if self.frame_timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_TAG, True)
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(console_handler, _HANDLER_TAG, True)
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("bodytrace")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking frame processing progress and statistics."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        stats: ProcessingStats | None = None,
    ) -> None:
        self._logger = logger
        self._stats = stats if stats is not None else ProcessingStats()

    def log_frame_start(self, frame: str) -> None:
        """Log start of frame processing."""
        self._logger.debug("Processing frame", frame=frame)

    def log_frame_complete(
        self,
        frame: str,
        contours: int,
        duration_ms: float,
    ) -> None:
        """Log successful frame processing."""
        self._logger.info(
            "Frame processed",
            frame=frame,
            contours=contours,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.contours_emitted += contours
        self._stats.frame_timings_ms.append(duration_ms)
        if contours == 0:
            self._stats.empty_count += 1

    def log_frame_skipped(self, frame: str, reason: str) -> None:
        """Log skipped frame."""
        self._logger.debug("Frame skipped", frame=frame, reason=reason)
        self._stats.skipped_count += 1

    def log_frame_error(
        self,
        frame: str,
        error: Exception | str,
        traceback: str | None = None,
    ) -> None:
        """Log frame processing error."""
        self._logger.error(
            "Frame processing failed",
            frame=frame,
            error=str(error),
            error_type=type(error).__name__ if isinstance(error, Exception) else "str",
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((frame, str(error)))

    def log_contour_summary(
        self,
        frame: str,
        raw_contours: int,
        surviving_contours: int,
        points_before: int,
        points_after: int,
    ) -> None:
        """Log per-frame contour counts."""
        self._logger.debug(
            "Contour summary",
            frame=frame,
            raw=raw_contours,
            surviving=surviving_contours,
            points_before=points_before,
            points_after=points_after,
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
