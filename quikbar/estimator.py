"""Throttled sampling and windowed rate estimation."""

import numpy as np

__all__ = ["DEFAULT_WINDOW_SIZE", "RateEstimator"]

# Number of recent (time, percentage) deltas kept for the recent rate
DEFAULT_WINDOW_SIZE = 5


class RateEstimator:
    """Turn irregular (time, percentage) samples into a stable completion rate.

    Samples arriving sooner than ``min_refresh_time`` after the last accepted
    one are rejected without touching any state, which keeps ``sample`` cheap
    enough to call on every iteration of a hot loop. Accepted samples store
    their deltas in a fixed ring of ``window_size`` slots.

    The remaining time blends the recent windowed rate with the overall rate
    since the first sample, weighted by ``recency_weight``.
    """

    def __init__(
        self,
        min_refresh_time: float = 0.1,
        recency_weight: float = 0.3,
        window_size: int = DEFAULT_WINDOW_SIZE,
    ):
        self.min_refresh_time = min_refresh_time
        self.recency_weight = recency_weight
        self.window_size = window_size
        self._time_diffs = np.zeros(window_size, dtype=np.float64)
        self._percentage_diffs = np.zeros(window_size, dtype=np.float64)
        self.reset()

    def reset(self):
        """Forget all samples; the next one is accepted unconditionally."""
        self.update_count = -1
        self.time_start = 0.0
        self.percentage_start = 0.0
        self.last_sample_time = 0.0
        self.last_sample_percentage = 0.0
        self._time_diffs.fill(0.0)
        self._percentage_diffs.fill(0.0)

    @property
    def started(self) -> bool:
        return self.update_count >= 0

    def sample(self, current_time: float, current_percentage: float, force: bool = False) -> bool:
        """Offer a sample. Return True if it was accepted, False if throttled."""
        if self.update_count < 0:
            self.time_start = self.last_sample_time = current_time
            self.percentage_start = self.last_sample_percentage = current_percentage
            self.update_count = 0
            return True

        dt = current_time - self.last_sample_time
        if dt < self.min_refresh_time and not force:
            return False

        slot = self.update_count % self.window_size
        self._time_diffs[slot] = dt
        self._percentage_diffs[slot] = current_percentage - self.last_sample_percentage
        self.last_sample_time = current_time
        self.last_sample_percentage = current_percentage
        self.update_count += 1
        return True

    @property
    def elapsed(self) -> float:
        return self.last_sample_time - self.time_start

    def overall_rate(self) -> float:
        """Percent per second since the first sample."""
        elapsed = self.elapsed
        if elapsed <= 0:
            return 0.0
        return (self.last_sample_percentage - self.percentage_start) / elapsed

    def recent_rate(self) -> float:
        """Percent per second over the populated window slots."""
        filled = min(max(self.update_count, 0), self.window_size)
        if not filled:
            return 0.0
        dt = float(self._time_diffs[:filled].sum())
        if dt <= 0:
            return 0.0
        return float(self._percentage_diffs[:filled].sum()) / dt

    def blended_rate(self) -> float:
        w = self.recency_weight
        return w * self.recent_rate() + (1 - w) * self.overall_rate()

    def remaining_time(self) -> float | None:
        """Seconds until 100%, or None when no positive rate is known."""
        rate = self.blended_rate()
        if rate <= 0:
            return None
        return (100.0 - self.last_sample_percentage) / rate
