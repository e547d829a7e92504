"""Scheduler binding: drives a frame callback once per refresh.

The callback receives a monotonic timestamp in milliseconds. Stopping
the animation is not the scheduler's concern (the renderers fall back
to a static frame); ``stop`` only ends the loop itself, e.g. when the
host tears the visualisation down.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_FPS = 60


class FrameLoop:
    """Per-refresh callback driver.

    Args:
        callback: Called with a millisecond timestamp on every tick.
        fps: Target refresh rate.
        absorb_errors: Log and swallow callback errors so the loop keeps
            running. Export paths disable this to surface failures.
    """

    def __init__(
        self,
        callback: Callable[[float], object],
        fps: int = DEFAULT_FPS,
        absorb_errors: bool = True,
    ):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.callback = callback
        self.fps = fps
        self.absorb_errors = absorb_errors
        self.frame_count = 0
        self.error_count = 0
        self._running = False

    @property
    def interval_ms(self) -> float:
        return 1000 / self.fps

    @property
    def running(self) -> bool:
        return self._running

    def tick(self, timestamp: float) -> None:
        """Deliver one frame."""
        self.frame_count += 1
        try:
            self.callback(timestamp)
        except Exception as e:
            if not self.absorb_errors:
                raise
            self.error_count += 1
            logger.error("frame_failed", error=str(e), timestamp=timestamp)

    def timestamps(self, count: int, start_ms: float = 0.0) -> Iterator[float]:
        """Timestamps a display at ``fps`` would deliver for ``count`` frames."""
        for k in range(count):
            yield start_ms + k * self.interval_ms

    def run(
        self,
        frames: int | None = None,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], object] = time.sleep,
    ) -> None:
        """Tick in real time until ``stop`` is called or ``frames`` ran out.

        Args:
            frames: Number of frames to deliver, or None for no limit.
            clock: Monotonic clock in seconds.
            sleep: Sleep function taking seconds.
        """
        self._running = True
        delivered = 0
        logger.debug("frame_loop_started", fps=self.fps, frames=frames)

        while self._running and (frames is None or delivered < frames):
            started = clock()
            self.tick(started * 1000)
            delivered += 1
            remaining = self.interval_ms / 1000 - (clock() - started)
            if remaining > 0:
                sleep(remaining)

        self._running = False
        logger.debug("frame_loop_stopped", delivered=delivered, errors=self.error_count)

    def stop(self) -> None:
        self._running = False
