"""Benchmark the cost of calling update() from a hot loop."""

import os
import sys
import time
from typing import TextIO

from quikbar.progress import Config, ProgressBar
from quikbar.terminal import Capabilities
from quikbar.utils import sparse_range

__all__ = ["bench_loop", "run_benchmark"]


def bench_loop(n: int, step: int, bar: ProgressBar | None) -> float:
    """Run n iterations, updating bar every step iterations. Return seconds."""
    t = time.perf_counter()
    if bar is not None:
        bar.start()
        for i in range(n):
            if i % step == 0:
                bar.update(i)
        bar.finish()
    else:
        for i in range(n):
            if i % step == 0:
                pass
    return time.perf_counter() - t


def _median_ns(n: int, step: int, make_bar, max_repeats: int = 5, max_time: float = 0.5) -> float:
    timings = []
    begin = time.perf_counter()
    for rep in range(max_repeats):
        if rep > 0 and (time.perf_counter() - begin) > max_time:
            break
        timings.append(bench_loop(n, step, make_bar()))
    timings.sort()
    return timings[len(timings) // 2] * 1e9 / n


def run_benchmark(
    n: int = 1_000_000,
    max_step: int = 1000,
    use_ascii: bool = False,
    out: TextIO | None = None,
) -> list[tuple[int, float, float]]:
    """Print a table of nanoseconds per loop iteration, bare and with updates.

    Returns (step, bare_ns, update_ns) per column.
    """
    out = sys.stdout if out is None else out
    caps = Capabilities(is_tty=True, supports_unicode=not use_ascii, supports_color=not use_ascii)
    steps = sparse_range(max_step)
    results = []

    with open(os.devnull, "w", encoding="utf-8") as sink:

        def make_bar():
            return ProgressBar(0, n, Config(description="bench"), stream=sink, capabilities=caps)

        header = f"{'ns/iter':<12}" + "".join(f"{'step ' + str(s):>12}" for s in steps)
        out.write(header + "\n" + "-" * len(header) + "\n")

        bare_row = f"{'bare':<12}"
        update_row = f"{'update':<12}"
        for step in steps:
            bare = _median_ns(n, step, lambda: None)
            updated = _median_ns(n, step, make_bar)
            bare_row += f"{bare:>12.1f}"
            update_row += f"{updated:>12.1f}"
            results.append((step, bare, updated))

        out.write(bare_row + "\n" + update_row + "\n")

    _, bare, updated = results[0]
    out.write(f"\n>>> update() costs {max(0.0, updated - bare):.0f} ns per call\n")
    out.flush()
    return results
