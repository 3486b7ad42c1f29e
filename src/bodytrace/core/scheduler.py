"""Frame scheduling for video streams.

The pipeline has no opinion about cadence; the scheduler decides which
frames of a stream are submitted at all. With stride N only every Nth frame
(the Nth, 2Nth, ...) is processed, which keeps outline extraction within
budget on slow devices.
"""

from collections.abc import Iterable, Iterator
from typing import TypeVar

T = TypeVar("T")


class FrameScheduler:
    """Selects every Nth frame of a stream.

    Example:
        scheduler = FrameScheduler(stride=3)
        for index, frame in scheduler.select(frames):
            pipeline.run(frame)
    """

    def __init__(self, stride: int = 1, offset: int = 0) -> None:
        """Initialize the scheduler.

        Args:
            stride: Process one frame out of every `stride`
            offset: Number of leading frames ignored before counting starts

        Raises:
            ValueError: If stride is less than 1 or offset is negative
        """
        if stride < 1:
            raise ValueError(f"stride must be at least 1, got {stride}")
        if offset < 0:
            raise ValueError(f"offset must not be negative, got {offset}")
        self.stride = stride
        self.offset = offset
        self.processed = 0
        self.skipped = 0

    def should_process(self, frame_index: int) -> bool:
        """Check whether the zero-based frame index is due for processing."""
        position = frame_index - self.offset
        return position >= 0 and (position + 1) % self.stride == 0

    def select(self, frames: Iterable[T]) -> Iterator[tuple[int, T]]:
        """Yield (index, frame) for the frames due for processing.

        Counts processed and skipped frames as the stream is consumed.
        """
        for index, frame in enumerate(frames):
            if self.should_process(index):
                self.processed += 1
                yield index, frame
            else:
                self.skipped += 1

    def reset(self) -> None:
        """Clear the counters."""
        self.processed = 0
        self.skipped = 0
