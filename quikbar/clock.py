"""Monotonic clock source for progress timing."""

import time
from collections.abc import Callable

__all__ = ["ClockSource"]


class ClockSource:
    """Monotonic time in seconds, relative to the moment of calibration.

    One instance is created per progress bar and passed around explicitly,
    so tests can substitute any object with a ``now()`` method.
    """

    def __init__(self, timer: Callable[[], float] = time.perf_counter):
        self.timer = timer
        self.origin: float | None = None
        self.resolution = 0.0

    def calibrate(self):
        """Record the timer origin and resolution. Safe to call repeatedly."""
        if self.origin is not None:
            return
        if self.timer is time.perf_counter:
            self.resolution = time.get_clock_info("perf_counter").resolution
        self.origin = self.timer()

    def now(self) -> float:
        if self.origin is None:
            self.calibrate()
        return self.timer() - self.origin
