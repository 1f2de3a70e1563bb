"""Frame rendering for the single-line progress bar.

A frame is a pure function of a RenderState, the stream capabilities and the
bar configuration. The bar is drawn at half-cell resolution: a cell at the
fill boundary may be half filled, so a 40 cell bar advances in 1.25% steps.
"""

import enum
import math
import unicodedata
from dataclasses import dataclass
from typing import TYPE_CHECKING

from quikbar.stats import format_clock
from quikbar.terminal import Capabilities

if TYPE_CHECKING:
    from quikbar.estimator import RateEstimator
    from quikbar.progress import Config

__all__ = [
    "MIN_BAR_WIDTH",
    "Glyphs",
    "RenderProfile",
    "RenderState",
    "bar_cells",
    "bar_segments",
    "render_frame",
    "text_width",
]

# The bar never shrinks below this many cells to fit a narrow terminal
MIN_BAR_WIDTH = 10


@dataclass(frozen=True)
class Glyphs:
    """Characters and escape sequences used to draw a frame."""

    begin: str
    end: str
    prefix: str
    suffix: str
    fill: str
    half_fill: str
    half_empty: str
    empty: str
    spinner: str = ""
    time_sep: str = "|"
    clock_sep: str = "/"
    ellipsis: str = "."
    fill_color: str = ""
    done_color: str = ""
    empty_color: str = ""
    elapsed_color: str = ""
    remaining_color: str = ""
    dim: str = ""
    reset: str = ""

    def paint(self, color: str, text: str) -> str:
        if not color or not text:
            return text
        return f"{color}{text}{self.reset}"


class RenderProfile(enum.Enum):
    """Glyph set chosen from the stream capabilities."""

    UNICODE = Glyphs(
        begin="\r\x1b[?25l\x1b[2K",
        end="\x1b[?25h\n",
        prefix="",
        suffix="",
        fill="━",
        half_fill="╸",
        half_empty="╺",
        empty="━",
        spinner="⠋⠙⠹⠸⠼⠴⠦⠧⠇",
        time_sep="•",
        clock_sep="/",
        ellipsis="…",
        fill_color="\x1b[35m",
        done_color="\x1b[32m",
        empty_color="\x1b[38;5;237m",
        elapsed_color="\x1b[33m",
        remaining_color="\x1b[36m",
        dim="\x1b[2m",
        reset="\x1b[0m",
    )
    ASCII = Glyphs(
        begin="\r",
        end="\n",
        prefix="[",
        suffix="]",
        fill="=",
        half_fill=">",
        half_empty=" ",
        empty=" ",
    )

    @classmethod
    def select(cls, capabilities: Capabilities) -> "RenderProfile":
        if capabilities.supports_unicode and capabilities.supports_color:
            return cls.UNICODE
        return cls.ASCII

    @property
    def glyphs(self) -> Glyphs:
        return self.value


@dataclass(frozen=True)
class RenderState:
    """Everything a single frame shows."""

    percentage: float = 0.0
    update_count: int = 0
    elapsed: float | None = None
    remaining: float | None = None
    finished: bool = False

    @classmethod
    def capture(
        cls, percentage: float, estimator: "RateEstimator", finished: bool = False
    ) -> "RenderState":
        if not estimator.started:
            return cls(percentage=percentage, finished=finished)
        return cls(
            percentage=percentage,
            update_count=estimator.update_count,
            elapsed=estimator.elapsed,
            remaining=estimator.remaining_time(),
            finished=finished,
        )


def bar_cells(percentage: float, width: int) -> tuple[int, bool, int]:
    """Split a bar of width cells into (full_cells, has_left_half, empty_cells).

    empty_cells counts every cell that is not fully filled, including the
    half-filled head when has_left_half is set.
    """
    p = min(max(percentage, 0.0), 100.0)
    half_cells = min(math.floor(p * 2 * width / 100), 2 * width)
    full_cells = half_cells // 2
    return full_cells, half_cells % 2 == 1, width - full_cells


def bar_segments(percentage: float, width: int, glyphs: Glyphs) -> tuple[str, str]:
    """Return the (filled, empty) glyph runs of a bar, together width cells long."""
    full_cells, has_left_half, empty_cells = bar_cells(percentage, width)
    filled = glyphs.fill * full_cells
    if has_left_half:
        filled += glyphs.half_fill
        empty = glyphs.empty * (empty_cells - 1)
    elif empty_cells > 0:
        empty = glyphs.half_empty + glyphs.empty * (empty_cells - 1)
    else:
        empty = ""
    return filled, empty


def text_width(text: str) -> int:
    """Terminal columns taken by text; wide and fullwidth characters count twice."""
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text)


def _truncate(text: str, columns: int, ellipsis: str) -> str:
    budget = columns - text_width(ellipsis)
    kept = []
    used = 0
    for ch in text:
        used += text_width(ch)
        if used > budget:
            break
        kept.append(ch)
    return "".join(kept) + ellipsis


def _fit(
    description: str, bar_width: int, fixed: int, columns: int, ellipsis: str
) -> tuple[str, int]:
    """Shrink the bar, then the description, so a line fits in columns."""
    if columns <= 0:
        return description, bar_width
    description_width = text_width(description)
    available = columns - 1 - fixed - description_width
    if available >= bar_width:
        return description, bar_width
    bar_width = min(bar_width, max(MIN_BAR_WIDTH, available))
    overflow = bar_width - available
    if description and overflow > 0:
        keep = description_width - overflow - text_width(ellipsis)
        if keep > 0:
            description = _truncate(description, keep + text_width(ellipsis), ellipsis)
        else:
            description = ""
    return description, bar_width


def render_frame(state: RenderState, capabilities: Capabilities, config: "Config") -> str:
    """Build the full text of one frame, control sequences included."""
    g = RenderProfile.select(capabilities).glyphs

    spinner = f"{g.spinner[state.update_count % len(g.spinner)]} " if g.spinner else ""
    percent = f" {int(state.percentage):3d}% "
    elapsed = format_clock(state.elapsed)
    remaining = format_clock(state.remaining)

    # Visible columns taken by everything except the description and the bar
    fixed = (
        len(spinner)
        + len(g.prefix)
        + len(g.suffix)
        + len(percent)
        + len(g.time_sep)
        + 1
        + len(elapsed)
        + len(g.clock_sep)
        + 2
        + len(remaining)
    )
    description, width = _fit(
        config.description,
        config.bar_width,
        fixed + (1 if config.description else 0),
        capabilities.width,
        g.ellipsis,
    )
    if description:
        description += " "

    filled, empty = bar_segments(state.percentage, width, g)
    fill_color = g.done_color if state.finished else g.fill_color

    return "".join(
        [
            g.begin,
            spinner,
            description,
            g.prefix,
            g.paint(fill_color, filled),
            g.paint(g.empty_color, empty),
            g.suffix,
            percent,
            g.paint(g.dim, g.time_sep),
            " ",
            g.paint(g.elapsed_color, elapsed),
            " ",
            g.paint(g.dim, g.clock_sep),
            " ",
            g.paint(g.remaining_color, remaining),
            g.end if state.finished else "",
        ]
    )
