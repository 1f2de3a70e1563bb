"""Command-line demo and benchmark for QuikBar."""

import argparse
import dataclasses
import sys
import time
from typing import TextIO

import tracerite

from quikbar.benchmark import run_benchmark
from quikbar.progress import Config, ProgressBar, finish, init, start, update
from quikbar.stats import RunSummary
from quikbar.terminal import terminal_capabilities
from quikbar.utils import parse_count

tracerite.load()

__all__ = ["main", "run_demo"]

DEFAULT_TOTAL = "10m"


def run_demo(
    total: int,
    step: int,
    config: Config,
    *,
    stream: TextIO | None = None,
    use_ascii: bool = False,
    quiet: bool = False,
) -> RunSummary:
    """Count to total doing a little arithmetic, reporting every step iterations."""
    stream = sys.stdout if stream is None else stream
    bar: ProgressBar | None = None
    if not quiet:
        caps = terminal_capabilities(stream)
        if use_ascii:
            caps = dataclasses.replace(caps, supports_unicode=False)
        bar = init(0, total, config, stream=stream, capabilities=caps)

    t = time.perf_counter()
    start(bar)
    acc = 0.0
    i = 0
    try:
        for i in range(total + 1):
            if i % step == 0:
                update(bar, i)
            acc += (i % 100) * 0.0001
    except KeyboardInterrupt:
        if bar is not None:
            bar.close()
        return RunSummary(i, time.perf_counter() - t, interrupted=True)
    finish(bar)
    return RunSummary(total, time.perf_counter() - t)


def _main():
    """Internal main function that may raise exceptions."""
    parser = argparse.ArgumentParser(description="Draw a progress bar over a busy loop")
    parser.add_argument(
        "-n",
        "--total",
        help=f"Iterations to run (e.g. 500k, 1g; default: {DEFAULT_TOTAL})",
        type=str,
        default=None,
    )
    parser.add_argument("-d", "--description", help="Text shown before the bar", default="")
    parser.add_argument(
        "--step",
        help="Report progress every STEP iterations (default: 1000)",
        type=str,
        default="1000",
    )
    parser.add_argument(
        "--refresh",
        help="Minimum seconds between frames (default: 0.1)",
        type=float,
        default=0.1,
    )
    parser.add_argument(
        "--weight",
        help="Weight of the recent rate in the time estimate, 0 to 1 (default: 0.3)",
        type=float,
        default=0.3,
    )
    parser.add_argument(
        "--width", help="Bar width in cells (default: 40)", type=int, default=40
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Plain ASCII bar without colors or control sequences",
    )
    parser.add_argument(
        "--benchmark",
        action="store_true",
        help="Measure the cost of update() calls in a hot loop",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Quiet mode: no progress bar and no summary",
    )

    args = parser.parse_args()

    step = parse_count(args.step)
    if not step:
        raise ValueError("Step must be at least 1")

    if args.benchmark:
        n = parse_count(args.total) or 1_000_000
        run_benchmark(n, max_step=step, use_ascii=args.ascii)
        return

    total = parse_count(args.total or DEFAULT_TOTAL)
    config = Config(
        description=args.description,
        min_refresh_time=args.refresh,
        eta_recency_weight=args.weight,
        bar_width=args.width,
    )
    summary = run_demo(total, step, config, use_ascii=args.ascii, quiet=args.quiet)
    if not args.quiet:
        summary.print_summary()


def main():
    """Main entry point for the CLI with exception handling."""
    try:
        _main()
    except (KeyboardInterrupt, BrokenPipeError):
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
