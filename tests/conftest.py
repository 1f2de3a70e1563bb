import io

import pytest

from quikbar.terminal import Capabilities

UNICODE_CAPS = Capabilities(is_tty=True, supports_unicode=True, supports_color=True, width=120)
ASCII_CAPS = Capabilities(is_tty=False, supports_unicode=False, supports_color=False, width=120)


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, t: float = 0.0):
        self.t = t

    def now(self) -> float:
        return self.t

    def advance(self, dt: float):
        self.t += dt


class FakeTTY(io.StringIO):
    def __init__(self, encoding: str | None = "utf-8"):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self):
        return self._encoding

    def isatty(self):
        return True


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("NO_COLOR", "CLICOLOR_FORCE", "TERM", "COLUMNS", "LC_ALL", "LC_CTYPE", "LANG"):
        monkeypatch.delenv(name, raising=False)
