import io

import pytest
from conftest import FakeTTY

from quikbar import terminal
from quikbar.progress import Config
from quikbar.render import RenderState, render_frame
from quikbar.terminal import (
    DEFAULT_FILE_WIDTH,
    DEFAULT_TERMINAL_WIDTH,
    supports_color,
    supports_unicode,
    terminal_capabilities,
    terminal_width,
)


@pytest.fixture
def ascii_locale(monkeypatch):
    monkeypatch.setattr(terminal.locale, "getpreferredencoding", lambda *a: "ANSI_X3.4-1968")


@pytest.mark.parametrize(
    "env, tty, expected",
    [
        ({}, True, True),
        ({}, False, False),
        ({"NO_COLOR": "1"}, True, False),
        ({"NO_COLOR": ""}, True, True),
        ({"CLICOLOR_FORCE": "1"}, False, True),
        ({"CLICOLOR_FORCE": "0"}, False, False),
        ({"NO_COLOR": "1", "CLICOLOR_FORCE": "1"}, False, False),
        ({"TERM": "dumb"}, True, False),
        ({"TERM": "xterm-256color"}, True, True),
    ],
)
def test_supports_color(env, tty, expected):
    stream = FakeTTY() if tty else io.StringIO()
    assert supports_color(stream, env) is expected


def test_no_color_beats_forced_color_in_frames():
    env = {"NO_COLOR": "1", "CLICOLOR_FORCE": "1"}
    caps = terminal_capabilities(io.StringIO(), env)
    frame = render_frame(RenderState(percentage=40.0, finished=True), caps, Config())
    assert "\x1b" not in frame

    caps = terminal_capabilities(io.StringIO(), {"CLICOLOR_FORCE": "1"})
    frame = render_frame(RenderState(percentage=40.0), caps, Config())
    assert "\x1b[" in frame


def test_unicode_for_files_and_pipes():
    assert supports_unicode(io.StringIO(), {})


def test_unicode_respects_declared_file_encoding():
    class Latin1File(io.StringIO):
        encoding = "latin-1"

    assert not supports_unicode(Latin1File(), {})


def test_unicode_from_stream_encoding():
    assert supports_unicode(FakeTTY("UTF-8"), {})


@pytest.mark.parametrize(
    "env, expected",
    [
        ({}, False),
        ({"LANG": "en_US.UTF-8"}, True),
        ({"LC_CTYPE": "C.utf8"}, True),
        ({"LC_ALL": "C", "LANG": "en_US.UTF-8"}, False),
        ({"LC_ALL": "", "LANG": "en_US.UTF-8"}, True),
        ({"LANG": "C"}, False),
    ],
)
def test_unicode_from_locale_variables(ascii_locale, env, expected):
    assert supports_unicode(FakeTTY("ascii"), env) is expected


def test_width_falls_back_to_columns():
    assert terminal_width(FakeTTY(), {"COLUMNS": "132"}) == 132
    assert terminal_width(io.StringIO(), {"COLUMNS": "100"}) == 100


@pytest.mark.parametrize("columns", [None, "", "wide", "0", "-3"])
def test_width_defaults(columns):
    env = {} if columns is None else {"COLUMNS": columns}
    assert terminal_width(FakeTTY(), env) == DEFAULT_TERMINAL_WIDTH
    assert terminal_width(io.StringIO(), env) == DEFAULT_FILE_WIDTH


def test_capabilities_bundle():
    caps = terminal_capabilities(FakeTTY(), {"COLUMNS": "90"})
    assert caps.is_tty
    assert caps.supports_unicode
    assert caps.supports_color
    assert caps.width == 90
