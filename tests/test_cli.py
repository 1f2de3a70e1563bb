import io
import sys

import pytest

from quikbar import cli
from quikbar.benchmark import bench_loop, run_benchmark
from quikbar.progress import Config


def test_run_demo_draws_complete_bar(clean_env):
    out = io.StringIO()
    summary = cli.run_demo(10_000, 1000, Config(description="Demo"), stream=out)
    assert summary.count == 10_000
    assert not summary.interrupted
    text = out.getvalue()
    assert text.endswith("\n")
    assert "Demo " in text
    assert " 100% " in text.split("\r")[-1]


def test_run_demo_ascii_has_no_unicode(clean_env, monkeypatch):
    monkeypatch.setenv("CLICOLOR_FORCE", "1")
    out = io.StringIO()
    cli.run_demo(1000, 10, Config(), stream=out, use_ascii=True)
    assert "\x1b" not in out.getvalue()
    assert "[" + "=" * 40 + "]" in out.getvalue()


def test_run_demo_quiet_writes_nothing():
    out = io.StringIO()
    summary = cli.run_demo(1000, 10, Config(), stream=out, quiet=True)
    assert out.getvalue() == ""
    assert summary.count == 1000


def test_main_rejects_bad_count(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["quikbar", "-n", "lots"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 1
    assert "Invalid count format" in capsys.readouterr().err


def test_main_rejects_bad_weight(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["quikbar", "-n", "10", "--weight", "2"])
    with pytest.raises(SystemExit):
        cli.main()
    assert "eta_recency_weight" in capsys.readouterr().err


def test_main_runs_demo(monkeypatch, capsys, clean_env):
    monkeypatch.setattr(sys, "argv", ["quikbar", "-n", "2k", "--step", "100", "-d", "Work"])
    cli.main()
    captured = capsys.readouterr()
    assert " 100% " in captured.out
    assert "[QuikBar] counted 2 k" in captured.err


def test_bench_loop_without_bar():
    assert bench_loop(100, 1, None) >= 0.0


def test_run_benchmark_table():
    out = io.StringIO()
    results = run_benchmark(n=2000, max_step=10, out=out)
    assert [step for step, _, _ in results] == [1, 10]
    text = out.getvalue()
    assert "bare" in text
    assert "update" in text
    assert "ns per call" in text
