"""Time and count formatting, and the run summary line."""

import math
import re
import sys
from dataclasses import dataclass
from typing import TextIO

__all__ = [
    "CLOCK_PLACEHOLDER",
    "RunSummary",
    "format_clock",
    "format_count",
    "format_time",
]

# Shown in place of a time that cannot be computed
CLOCK_PLACEHOLDER = "--:--:--"


def format_clock(seconds: float | None) -> str:
    """Format seconds as zero-padded HH:MM:SS, truncating fractions."""
    if seconds is None or not math.isfinite(seconds) or seconds < 0:
        return CLOCK_PLACEHOLDER
    total = int(seconds)
    h, rest = divmod(total, 3600)
    m, s = divmod(rest, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_count(count: float) -> str:
    """Format a count with SI suffixes."""
    for unit in ["", " k", " M", " G", " T"]:
        if abs(count) < 1000:
            return f"{count:.0f}{unit}"
        count /= 1000
    return f"{count:.0f} P"


def format_time(seconds: float) -> str:
    """Format seconds as human-readable time."""
    if seconds < 0:
        return "--"
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 120:
        return f"{int(seconds)}s"
    elif seconds < 3600:
        m = int(seconds // 60)
        s = int(seconds % 60)
        if s == 0:
            return f"{m}m"
        return f"{m}m{s}s"
    elif seconds < 172800:  # 48 hours
        h = int(seconds // 3600)
        m = int((seconds % 3600) // 60)
        if m == 0:
            return f"{h}h"
        return f"{h}h{m}m"
    else:
        d = int(seconds // 86400)
        h = int((seconds % 86400) // 3600)
        if h == 0:
            return f"{d}d"
        return f"{d}d{h}h"


@dataclass
class RunSummary:
    """Result of a demo run."""

    count: int
    elapsed: float
    interrupted: bool = False
    action: str = "counted"

    def format(self, color: bool = True) -> str:
        rate = self.count / self.elapsed if self.elapsed > 0 else 0
        status_fmt = " \033[31m(interrupted)\033[0m" if self.interrupted else ""
        msg = (
            f"\033[36m[QuikBar]\033[32m {self.action} \033[1m{format_count(self.count)}\033[0;32m in "
            f"\033[1m{format_time(self.elapsed)}\033[0;32m @ "
            f"\033[1;32m{format_count(rate)}/s\033[0m{status_fmt}\n"
        )
        if not color:
            msg = re.sub(r"\033\[[0-9;]*m", "", msg)
        return msg

    def print_summary(self, stream: TextIO | None = None):
        """Print a one-liner summary, colored only on a terminal."""
        stream = sys.stderr if stream is None else stream
        stream.write(self.format(color=stream.isatty()))
