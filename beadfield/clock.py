"""Animation clock: scheduler timestamps (ms) to elapsed seconds."""

from __future__ import annotations


class AnimationClock:
    """Tracks when the animation started.

    The start time is captured once, on the first tick at which a surface
    is available; later calls to ``start`` are ignored.
    """

    def __init__(self, start_time: float | None = None):
        self.start_time = start_time

    @property
    def started(self) -> bool:
        return self.start_time is not None

    def start(self, timestamp: float) -> None:
        if self.start_time is None:
            self.start_time = timestamp

    def elapsed_seconds(self, timestamp: float) -> float:
        """Seconds since start for a millisecond ``timestamp``.

        Starts the clock at ``timestamp`` if it is not running yet.
        """
        self.start(timestamp)
        return (timestamp - self.start_time) / 1000
