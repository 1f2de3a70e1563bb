"""Terminal capability detection for the output stream."""

import locale
import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TextIO

__all__ = [
    "DEFAULT_FILE_WIDTH",
    "DEFAULT_TERMINAL_WIDTH",
    "Capabilities",
    "is_tty",
    "supports_color",
    "supports_unicode",
    "terminal_capabilities",
    "terminal_width",
]

# Width when the terminal cannot be queried
DEFAULT_TERMINAL_WIDTH = 80

# Width when writing to a file or pipe
DEFAULT_FILE_WIDTH = 120

_UTF8 = re.compile(r"utf-?8", re.IGNORECASE)


@dataclass(frozen=True)
class Capabilities:
    """What the output stream can display."""

    is_tty: bool = False
    supports_unicode: bool = False
    supports_color: bool = False
    width: int = DEFAULT_FILE_WIDTH


def is_tty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def _fileno(stream: TextIO) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def _is_utf8(value: str | None) -> bool:
    return bool(value) and _UTF8.search(value) is not None


def supports_unicode(stream: TextIO, environ: Mapping[str, str] | None = None) -> bool:
    """Whether block-drawing and braille glyphs can be written to stream.

    Files and pipes are assumed UTF-8 unless they declare another encoding.
    For terminals the stream encoding, the locale codeset and then
    LC_ALL, LC_CTYPE and LANG are checked in that order.
    """
    env = os.environ if environ is None else environ
    encoding = getattr(stream, "encoding", None)
    if not is_tty(stream):
        return encoding is None or _is_utf8(encoding)

    if _is_utf8(encoding) or _is_utf8(locale.getpreferredencoding(False)):
        return True

    for name in ("LC_ALL", "LC_CTYPE", "LANG"):
        value = env.get(name)
        if value:
            if _is_utf8(value):
                return True
            # LC_ALL overrides everything below it
            if name == "LC_ALL":
                return False
    return False


def supports_color(stream: TextIO, environ: Mapping[str, str] | None = None) -> bool:
    """Whether ANSI escape sequences may be written to stream.

    Follows no-color.org: a non-empty NO_COLOR always wins, CLICOLOR_FORCE
    (other than "0") enables colors even when not on a terminal.
    """
    env = os.environ if environ is None else environ
    if env.get("NO_COLOR"):
        return False
    force = env.get("CLICOLOR_FORCE")
    if force is not None and force != "0":
        return True
    if not is_tty(stream):
        return False
    return env.get("TERM") != "dumb"


def terminal_width(stream: TextIO, environ: Mapping[str, str] | None = None) -> int:
    """Return the column count of stream, or a fallback width."""
    env = os.environ if environ is None else environ
    fd = _fileno(stream)
    if fd is not None:
        try:
            return os.get_terminal_size(fd).columns
        except (OSError, ValueError):
            pass
    try:
        columns = int(env.get("COLUMNS", ""))
    except ValueError:
        columns = 0
    if columns > 0:
        return columns
    return DEFAULT_TERMINAL_WIDTH if is_tty(stream) else DEFAULT_FILE_WIDTH


def terminal_capabilities(
    stream: TextIO, environ: Mapping[str, str] | None = None
) -> Capabilities:
    caps = Capabilities(
        is_tty=is_tty(stream),
        supports_unicode=supports_unicode(stream, environ),
        supports_color=supports_color(stream, environ),
        width=terminal_width(stream, environ),
    )
    logging.debug("Terminal capabilities: %s", caps)
    return caps
