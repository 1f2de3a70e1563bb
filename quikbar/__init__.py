"""QuikBar - Low-overhead terminal progress bar.

This package draws a single-line progress bar with a blended rate
estimate, throttled so that update() can be called from hot loops.
"""

from importlib.metadata import PackageNotFoundError, version

from quikbar.clock import ClockSource
from quikbar.estimator import RateEstimator
from quikbar.progress import (
    Config,
    ProgressBar,
    calculate_percentage,
    default_config,
    finish,
    init,
    start,
    update,
)
from quikbar.render import RenderProfile, RenderState, render_frame
from quikbar.stats import format_clock, format_time
from quikbar.terminal import Capabilities, terminal_capabilities

try:
    __version__ = version("quikbar")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"

__all__ = [
    "Capabilities",
    "ClockSource",
    "Config",
    "ProgressBar",
    "RateEstimator",
    "RenderProfile",
    "RenderState",
    "__version__",
    "calculate_percentage",
    "default_config",
    "finish",
    "format_clock",
    "format_time",
    "init",
    "render_frame",
    "start",
    "terminal_capabilities",
    "update",
]
