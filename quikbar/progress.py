"""Single-line progress bar driven by a counter."""

import logging
import sys
from dataclasses import dataclass, replace
from typing import TextIO

from quikbar.clock import ClockSource
from quikbar.estimator import DEFAULT_WINDOW_SIZE, RateEstimator
from quikbar.render import RenderProfile, RenderState, render_frame
from quikbar.terminal import Capabilities, terminal_capabilities, terminal_width

__all__ = [
    "Config",
    "ProgressBar",
    "ProgressRange",
    "calculate_percentage",
    "default_config",
    "finish",
    "init",
    "start",
    "update",
]


@dataclass
class Config:
    """Appearance and timing of a progress bar."""

    description: str = ""
    min_refresh_time: float = 0.1  # Seconds between rendered frames
    eta_recency_weight: float = 0.3  # Share of the recent rate in the ETA
    bar_width: int = 40
    max_percent: float = 100.0  # Cap for partial progress, 100% still shows when done
    window_size: int = DEFAULT_WINDOW_SIZE

    def __post_init__(self):
        if not 0.0 <= self.eta_recency_weight <= 1.0:
            raise ValueError(f"eta_recency_weight must be within [0, 1]: {self.eta_recency_weight}")
        if self.min_refresh_time < 0:
            raise ValueError(f"min_refresh_time cannot be negative: {self.min_refresh_time}")
        if self.bar_width < 1:
            raise ValueError(f"bar_width must be at least 1: {self.bar_width}")
        if self.window_size < 1:
            raise ValueError(f"window_size must be at least 1: {self.window_size}")
        if not 0.0 < self.max_percent <= 100.0:
            raise ValueError(f"max_percent must be within (0, 100]: {self.max_percent}")


def default_config() -> Config:
    return Config()


def calculate_percentage(start: int, total: int, current: int, max_percent: float = 100.0) -> float:
    """Completion of current within [start, total], clamped to [0, 100].

    Empty or inverted ranges and progress at or before start give 0.0,
    progress at or past total gives exactly 100.0. Anything in between is
    capped at max_percent.
    """
    span = total - start
    done = current - start
    if span <= 0 or done <= 0:
        return 0.0
    if done >= span:
        return 100.0
    return min(done / span * 100.0, max_percent)


@dataclass
class ProgressRange:
    start: int
    total: int
    current: int

    def percentage(self, max_percent: float = 100.0) -> float:
        return calculate_percentage(self.start, self.total, self.current, max_percent)


class ProgressBar:
    """Progress bar that redraws one line of the stream at a bounded rate.

    Lifecycle: start() draws the first frame, update() redraws whenever the
    rate estimator accepts a sample, finish() draws the completed frame and
    ends the line. Cheap enough to call update() on every loop iteration.
    Not thread safe.
    """

    def __init__(
        self,
        start: int,
        total: int,
        config: Config | None = None,
        *,
        stream: TextIO | None = None,
        clock: ClockSource | None = None,
        capabilities: Capabilities | None = None,
    ):
        self.config = default_config() if config is None else config
        self.range = ProgressRange(start, total, start)
        self.stream = sys.stdout if stream is None else stream
        self.clock = ClockSource() if clock is None else clock
        if isinstance(self.clock, ClockSource):
            self.clock.calibrate()
        # Detected capabilities follow terminal resizes, injected ones stay fixed
        self._detected = capabilities is None
        self.capabilities = (
            terminal_capabilities(self.stream) if capabilities is None else capabilities
        )
        self.profile = RenderProfile.select(self.capabilities)
        self.estimator = RateEstimator(
            self.config.min_refresh_time,
            self.config.eta_recency_weight,
            self.config.window_size,
        )
        self.started = False
        self.finished = False
        self.frames = 0
        self._first_update = False
        self._line_open = False

    @property
    def percentage(self) -> float:
        if self.finished:
            return 100.0
        return self.range.percentage(self.config.max_percent)

    def start(self):
        """Reset timing, take the baseline sample and draw the first frame."""
        if self.finished:
            return
        self.estimator.reset()
        self.started = True
        self._first_update = True
        self.estimator.sample(self.clock.now(), self.percentage)
        self._render()

    def update(self, current: int):
        """Record progress; redraw unless the last frame is too recent."""
        if self.finished:
            logging.debug("Progress update after finish ignored: %s", current)
            return
        if not self.started:
            self.start()
        self.range.current = current
        # The first update after start() is always drawn
        if self.estimator.sample(self.clock.now(), self.percentage, force=self._first_update):
            self._first_update = False
            self._render()

    def finish(self):
        """Draw the completed 100% frame and end the line."""
        if self.finished:
            return
        self.finished = True
        self.started = True
        self.estimator.sample(self.clock.now(), 100.0, force=True)
        self._render()

    def close(self):
        """End an unfinished line and show the cursor again."""
        if self._line_open:
            self.stream.write(self.profile.glyphs.end)
            self.stream.flush()
            self._line_open = False

    def _render(self):
        if self._detected:
            width = terminal_width(self.stream)
            if width != self.capabilities.width:
                self.capabilities = replace(self.capabilities, width=width)
        state = RenderState.capture(self.percentage, self.estimator, self.finished)
        self.stream.write(render_frame(state, self.capabilities, self.config))
        self.stream.flush()
        self.frames += 1
        self._line_open = not self.finished

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.finish()
        else:
            self.close()


def init(
    start: int, total: int, config: Config | None = None, **kwargs
) -> ProgressBar:
    """Create a progress bar over [start, total]; keyword arguments go to ProgressBar."""
    return ProgressBar(start, total, config, **kwargs)


def start(bar: ProgressBar | None):
    if bar is not None:
        bar.start()


def update(bar: ProgressBar | None, current: int):
    if bar is not None:
        bar.update(current)


def finish(bar: ProgressBar | None):
    if bar is not None:
        bar.finish()
