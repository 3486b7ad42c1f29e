"""CLI application entry point for bodytrace.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from bodytrace import __version__
from bodytrace.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_frame_errors,
    print_header,
    print_input_info,
    print_outputs,
    print_processing_info,
    print_step,
    print_success,
)
from bodytrace.config import (
    BodytraceSettings,
    CurveType,
    DedupConfig,
    LoggingConfig,
    MaskConfig,
    PathConfig,
    ProcessingConfig,
    SimplifyConfig,
    SingletonPolicy,
)
from bodytrace.core import FrameProcessor, FrameScheduler, OutlinePipeline
from bodytrace.exceptions import BodytraceError, MaskLoadError
from bodytrace.io import MaskReader
from bodytrace.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="bodytrace",
    help="Trace segmentation masks into smooth vector outlines.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Bodytrace[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def trace(
    inputs: Annotated[
        list[Path],
        typer.Argument(
            help="Mask files (JSON or image), in frame order",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output SVG path (single input only; default: {name}-outline.svg)",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            help="Directory for SVG files (default: next to each mask)",
        ),
    ] = None,
    curve: Annotated[
        str,
        typer.Option(
            "--curve",
            "-c",
            help="Path style (straight|quadratic)",
        ),
    ] = "quadratic",
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            "-t",
            help="Simplification tolerance in pixels",
            min=0.0,
        ),
    ] = 2.0,
    overlap: Annotated[
        float,
        typer.Option(
            "--overlap",
            help="Bounding-box overlap (IoU) that marks two contours as duplicates",
            min=0.0,
            max=1.0,
        ),
    ] = 0.7,
    threshold: Annotated[
        float,
        typer.Option(
            "--threshold",
            help="Foreground threshold for probability masks",
            min=0.0,
            max=1.0,
        ),
    ] = 0.5,
    fallback_threshold: Annotated[
        float | None,
        typer.Option(
            "--fallback-threshold",
            help="Lower threshold retried when a mask comes out empty",
            min=0.0,
            max=1.0,
        ),
    ] = None,
    keep_singletons: Annotated[
        bool,
        typer.Option(
            "--keep-singletons",
            help="Keep contours that have no inner/outer duplicate",
        ),
    ] = False,
    stride: Annotated[
        int,
        typer.Option(
            "--stride",
            "-s",
            help="Process every Nth frame",
            min=1,
        ),
    ] = 1,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    print_path: Annotated[
        bool,
        typer.Option(
            "--print-path",
            help="Print SVG path data to stdout instead of writing files",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Trace segmentation masks into SVG outlines.

    Each mask is normalized, traced along its foreground boundary, simplified,
    cleaned of duplicate inner/outer edges and written as an SVG path.

    Example:
        bodytrace frame-0001.png

    This will create frame-0001-outline.svg next to the mask.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if output is not None and len(inputs) > 1:
        print_error(
            "--output can only be used with a single input",
            details="Use --output-dir to choose where multiple outlines go.",
        )
        raise typer.Exit(code=1)

    for input_path in inputs:
        if not input_path.exists():
            print_error(
                f"Input file not found: {input_path}",
                details=f"The file '{input_path}' does not exist or is not accessible.",
            )
            raise typer.Exit(code=1)
        if not input_path.is_file():
            print_error(
                f"Input path is not a file: {input_path}",
                details="Please provide a JSON mask or an image file.",
            )
            raise typer.Exit(code=1)

    try:
        curve_type = CurveType(curve.lower())
    except ValueError:
        print_error(
            f"Invalid curve type: {curve}",
            details="Valid values: straight, quadratic",
        )
        raise typer.Exit(code=1)

    if output_dir is not None and not output_dir.is_dir():
        print_error(f"Output directory not found: {output_dir}")
        raise typer.Exit(code=1)

    # Create settings from CLI arguments
    settings = BodytraceSettings(
        mask=MaskConfig(
            threshold=threshold,
            fallback_threshold=fallback_threshold,
        ),
        simplify=SimplifyConfig(tolerance=tolerance),
        dedup=DedupConfig(
            overlap_threshold=overlap,
            singleton_policy=SingletonPolicy.KEEP if keep_singletons else SingletonPolicy.DROP,
        ),
        path=PathConfig(curve_type=curve_type),
        processing=ProcessingConfig(
            max_workers=workers,
            frame_stride=stride,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    if print_path:
        _handle_print_path(inputs, settings)
        raise typer.Exit(code=0)

    if not quiet:
        print_header(__version__)
        print_step("Loading masks")
        print_input_info(len(inputs), inputs[0])

        actual_workers = workers if workers else os.cpu_count() or 1
        print_step("Tracing")
        print_processing_info(actual_workers, is_auto=(workers is None), stride=stride)

    outputs = [output] if output is not None else None
    processor = FrameProcessor(settings, quiet=quiet)

    try:
        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task(
                    f"Tracing {len(inputs)} frames",
                    total=None,
                )

                def update_progress(completed: int, total: int, *_: object) -> None:
                    progress.update(task_id, completed=completed, total=total)

                stats, written = processor.process_files(
                    inputs,
                    output_dir=output_dir,
                    outputs=outputs,
                    max_workers=workers,
                    progress_callback=update_progress,
                )
        else:
            stats, written = processor.process_files(
                inputs,
                output_dir=output_dir,
                outputs=outputs,
                max_workers=workers,
            )
    except KeyboardInterrupt:
        if not quiet:
            print_cancellation_notice()
            partial = processor.last_stats
            print_cancellation_summary(
                processed=partial.processed_count if partial else 0,
                cancelled=partial.cancelled_count if partial else 0,
            )
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except BodytraceError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_success(
            written=len(written),
            total_time_s=stats.duration_seconds,
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            empty=stats.empty_count,
            contours=stats.contours_emitted,
            errors=stats.error_count,
            avg_time_ms=stats.avg_frame_time_ms,
            min_time_ms=stats.min_frame_time_ms,
            max_time_ms=stats.max_frame_time_ms,
        )
        print_outputs(written, verbose)

    if stats.error_count > 0:
        if not quiet:
            print_frame_errors(stats.errors)
        raise typer.Exit(code=1)


def _handle_print_path(inputs: list[Path], settings: BodytraceSettings) -> None:
    """Handle --print-path mode.

    Traces every selected frame in-process and writes one path string per
    line to stdout. Empty outlines print as empty lines so line numbers stay
    aligned with processed frames.

    Args:
        inputs: Mask files
        settings: Bodytrace settings
    """
    configure_logging(
        log_file=settings.logging.log_file,
        file_level=settings.logging.file_log_level,
        quiet=True,
    )
    pipeline = OutlinePipeline(settings)
    precision = settings.path.precision
    scheduler = FrameScheduler(settings.processing.frame_stride)

    for _, input_path in scheduler.select(inputs):
        try:
            spec = MaskReader(input_path, threshold=settings.mask.threshold).load()
        except (FileNotFoundError, MaskLoadError) as e:
            print_error(f"Could not load mask: {e}")
            raise typer.Exit(code=1)

        result = pipeline.run(spec)
        if not result.ok:
            print_error(f"Could not trace {input_path.name}: {result.error}")
            raise typer.Exit(code=1)
        typer.echo(result.path.to_svg_path(precision=precision))


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
