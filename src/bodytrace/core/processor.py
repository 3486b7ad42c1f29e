"""Parallel processing orchestration for batches of frames.

This module runs many masks through the outline pipeline, either in-process
or on a ProcessPoolExecutor, honouring the configured frame stride.

Key components:
- process_frame: Top-level picklable function for parallel execution
- FrameProcessor: Main orchestrator class for batch processing
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from bodytrace.config import BodytraceSettings
from bodytrace.core.pipeline import OutlinePipeline, OutlineResult
from bodytrace.core.scheduler import FrameScheduler
from bodytrace.domain import MaskSpec
from bodytrace.exceptions import MaskLoadError, OutlineSaveError
from bodytrace.io import MaskReader, OutlineWriter
from bodytrace.utils import ProcessingLogger, ProcessingStats, configure_logging

ProgressCallback = Callable[[int, int, str, bool], None]


def process_frame(spec_dict: dict[str, Any], settings_dict: dict[str, Any]) -> dict[str, Any]:
    """Run the pipeline on a single serialized mask.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        spec_dict: Serialized mask (from MaskSpec.to_dict())
        settings_dict: Serialized settings (from BodytraceSettings.model_dump())

    Returns:
        Dictionary containing either:
        - Success: {"result": result_dict, "duration_ms": float}
        - Error: {"error": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        spec = MaskSpec.from_dict(spec_dict)
        settings = BodytraceSettings.model_validate(settings_dict)
        result = OutlinePipeline(settings).run(spec)

        duration_ms = (time.time() - start_time) * 1000
        return {"result": result.to_dict(), "duration_ms": duration_ms}

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class FrameProcessor:
    """Orchestrates batch outline extraction.

    Manages the complete workflow:
    1. Select frames according to the frame stride
    2. Run the pipeline on each selected frame (in parallel when asked)
    3. Collect results and update statistics
    4. Optionally write one SVG per frame

    Example:
        processor = FrameProcessor(BodytraceSettings())
        results, stats = processor.process(specs, max_workers=4)
    """

    def __init__(self, config: BodytraceSettings, quiet: bool = False) -> None:
        """Initialize frame processor with configuration.

        Args:
            config: Bodytrace settings
            quiet: Suppress console log output
        """
        self.config = config
        self.last_stats: ProcessingStats | None = None
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )

    def process(
        self,
        specs: Sequence[MaskSpec],
        labels: Sequence[str] | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
        frame_indices: Sequence[int] | None = None,
    ) -> tuple[dict[int, OutlineResult], ProcessingStats]:
        """Process a sequence of frames.

        Args:
            specs: Masks in stream order
            labels: Display names for the frames (defaults to frame-NNNN)
            max_workers: Maximum worker processes (None = config, 1 = in-process)
            progress_callback: Optional callback(completed, total, label, success)
            frame_indices: Stream positions of the specs, used for the stride
                (defaults to 0, 1, 2, ...)

        Returns:
            Tuple of (results keyed by frame index, statistics). Skipped
            frames have no entry.
            The statistics are also kept on last_stats so counts survive
            a cancellation.

        Raises:
            KeyboardInterrupt: If processing is cancelled by user
        """
        stats = ProcessingStats()
        stats.start_time = time.time()
        self.last_stats = stats
        processing_logger = ProcessingLogger(self.logger, stats)

        if labels is None:
            labels = [f"frame-{index:04d}" for index in range(len(specs))]
        if max_workers is None:
            max_workers = self.config.processing.max_workers

        stride = self.config.processing.frame_stride
        scheduler = FrameScheduler(stride)
        due: list[int] = []
        if frame_indices is None:
            frame_indices = range(len(specs))
        for index, frame_index in enumerate(frame_indices):
            if scheduler.should_process(frame_index):
                due.append(index)
            else:
                processing_logger.log_frame_skipped(labels[index], f"frame stride {stride}")

        self.logger.info(
            "Starting frame processing",
            frames=len(specs),
            to_process=len(due),
            skipped=stats.skipped_count,
            max_workers=max_workers,
        )

        if max_workers == 1:
            results = self._process_sequential(specs, labels, due, processing_logger, progress_callback)
        else:
            results = self._process_parallel(
                specs, labels, due, max_workers, processing_logger, progress_callback
            )

        stats.end_time = time.time()
        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            empty=stats.empty_count,
            errors=stats.error_count,
            contours=stats.contours_emitted,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return results, stats

    def _settings_dict(self) -> dict[str, Any]:
        return self.config.model_dump(mode="json")

    def _collect(
        self,
        index: int,
        label: str,
        outcome: dict[str, Any],
        results: dict[int, OutlineResult],
        processing_logger: ProcessingLogger,
    ) -> bool:
        """Record one worker outcome. Returns True on success."""
        if "error" in outcome:
            processing_logger.log_frame_error(
                frame=label,
                error=outcome["error"],
                traceback=outcome.get("traceback"),
            )
            return False

        result = OutlineResult.from_dict(outcome["result"])
        results[index] = result

        if not result.ok:
            processing_logger.log_frame_error(frame=label, error=result.error or "unknown error")
            return False

        processing_logger.log_contour_summary(
            frame=label,
            raw_contours=result.stats.raw_contours,
            surviving_contours=result.stats.surviving_contours,
            points_before=result.stats.points_before,
            points_after=result.stats.points_after,
        )
        processing_logger.log_frame_complete(
            frame=label,
            contours=len(result.contours),
            duration_ms=outcome.get("duration_ms", 0.0),
        )
        return True

    def _process_sequential(
        self,
        specs: Sequence[MaskSpec],
        labels: Sequence[str],
        due: list[int],
        processing_logger: ProcessingLogger,
        progress_callback: ProgressCallback | None,
    ) -> dict[int, OutlineResult]:
        results: dict[int, OutlineResult] = {}
        settings_dict = self._settings_dict()

        for completed, index in enumerate(due, start=1):
            processing_logger.log_frame_start(labels[index])
            try:
                outcome = process_frame(specs[index].to_dict(), settings_dict)
            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                processing_logger.stats.was_cancelled = True
                processing_logger.stats.cancelled_count = len(due) - completed + 1
                raise
            success = self._collect(index, labels[index], outcome, results, processing_logger)
            if progress_callback is not None:
                progress_callback(completed, len(due), labels[index], success)

        return results

    def _process_parallel(
        self,
        specs: Sequence[MaskSpec],
        labels: Sequence[str],
        due: list[int],
        max_workers: int | None,
        processing_logger: ProcessingLogger,
        progress_callback: ProgressCallback | None,
    ) -> dict[int, OutlineResult]:
        """Process frames in parallel using ProcessPoolExecutor."""
        results: dict[int, OutlineResult] = {}
        settings_dict = self._settings_dict()
        stats = processing_logger.stats

        total = len(due)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for index in due:
                future = executor.submit(process_frame, specs[index].to_dict(), settings_dict)
                pending_futures[future] = index

            try:
                for future in as_completed(pending_futures):
                    index = pending_futures.pop(future)
                    label = labels[index]
                    success = False

                    try:
                        outcome = future.result()
                        success = self._collect(index, label, outcome, results, processing_logger)
                    except Exception as e:
                        # Executor-level error
                        processing_logger.log_frame_error(
                            frame=label,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, label, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return results

    def process_files(
        self,
        paths: Sequence[Path],
        output_dir: Path | None = None,
        outputs: Sequence[Path] | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> tuple[ProcessingStats, list[Path]]:
        """Load mask files, trace them and write one SVG per frame.

        Args:
            paths: Mask files in stream order
            output_dir: Directory for SVGs (defaults to each mask's directory)
            outputs: Explicit output paths aligned with paths (overrides output_dir)
            max_workers: Maximum worker processes
            progress_callback: Optional callback(completed, total, label, success)

        Returns:
            Tuple of (statistics, written SVG paths)
        """
        if outputs is not None and len(outputs) != len(paths):
            raise ValueError("outputs must have one entry per input path")

        loaded: list[tuple[int, MaskSpec]] = []
        load_errors: list[tuple[str, str]] = []
        for position, path in enumerate(paths):
            try:
                spec = MaskReader(path, threshold=self.config.mask.threshold).load()
            except (FileNotFoundError, MaskLoadError) as e:
                self.logger.error("Failed to load mask", path=str(path), error=str(e))
                load_errors.append((path.name, str(e)))
                continue
            loaded.append((position, spec))

        specs = [spec for _, spec in loaded]
        labels = [paths[position].name for position, _ in loaded]
        results, stats = self.process(
            specs,
            labels=labels,
            max_workers=max_workers,
            progress_callback=progress_callback,
            frame_indices=[position for position, _ in loaded],
        )
        stats.error_count += len(load_errors)
        stats.errors.extend(load_errors)

        written: list[Path] = []
        for index, result in sorted(results.items()):
            if not result.ok:
                continue
            position, spec = loaded[index]
            if outputs is not None:
                target = outputs[position]
            else:
                target = OutlineWriter.get_outline_path(paths[position], output_dir)

            writer = OutlineWriter(target, precision=self.config.path.precision)
            try:
                writer.write(result.path, spec.width, spec.height)
            except OutlineSaveError as e:
                self.logger.error("Failed to write outline", output=str(target), error=e.reason)
                stats.error_count += 1
                stats.errors.append((paths[position].name, str(e)))
                continue
            written.append(target)

        self.logger.info("Outlines written", count=len(written))
        return stats, written
