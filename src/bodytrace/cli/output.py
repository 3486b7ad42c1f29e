"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars and formatted messages.
"""

from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

# Max outputs listed in verbose mode
MAX_LISTED = 20


def create_progress() -> Progress:
    """Create a rich progress bar for frame processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header."""
    console.print(f"\n[bold]Bodytrace[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_input_info(frame_count: int, first_input: Path) -> None:
    """Print input summary.

    Args:
        frame_count: Number of mask files given
        first_input: First mask path, shown as a sample
    """
    line = Text("  ")
    line.append(str(first_input))
    if frame_count > 1:
        line.append(f" (+{frame_count - 1} more)")
    console.print(line)
    plural = "frame" if frame_count == 1 else "frames"
    console.print(f"  {frame_count:,} {plural}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_processing_info(workers: int, is_auto: bool = False, stride: int = 1) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
        stride: Frame stride (1 = every frame)
    """
    auto_suffix = " (auto)" if is_auto else ""
    stride_str = "every frame" if stride == 1 else f"every {stride} frames"
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} {stride_str} {SYM_DOT} Ctrl+C to cancel")


def print_success(
    written: int,
    total_time_s: float,
    processed: int,
    skipped: int,
    empty: int,
    contours: int,
    errors: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        written: Number of SVG files written
        total_time_s: Total processing time in seconds
        processed: Number of frames traced
        skipped: Number of frames skipped by the stride
        empty: Number of frames with no outline
        contours: Total surviving contours
        errors: Number of errors encountered
        avg_time_ms: Average processing time per frame in milliseconds
        min_time_ms: Minimum processing time per frame in milliseconds
        max_time_ms: Maximum processing time per frame in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")
    console.print(f"  {written} outlines written")

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} frames {SYM_DOT} {skipped} skipped {SYM_DOT} {empty} empty {SYM_DOT} "
        f"{contours} contours {SYM_DOT} [{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}–{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_outputs(paths: list[Path], verbose: bool) -> None:
    """List written SVG files (verbose mode only)."""
    if not verbose or not paths:
        return
    console.print("\n[bold]Outputs[/bold]")
    for path in paths[:MAX_LISTED]:
        line = Text("  ")
        line.append(str(path))
        console.print(line)
    if len(paths) > MAX_LISTED:
        console.print(f"  ... +{len(paths) - MAX_LISTED} more")


def print_frame_errors(errors: list[tuple[str, str]]) -> None:
    """Print per-frame error lines."""
    for frame, message in errors[:MAX_LISTED]:
        line = Text("  ")
        line.append(SYM_ERR, style="red")
        line.append(f" {frame}: {message}")
        console.print(line)
    if len(errors) > MAX_LISTED:
        console.print(f"  ... +{len(errors) - MAX_LISTED} more")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress frames")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of frames traced before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} frames completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No outlines written")
