# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Status lines printed while dev-tools drives the test runners.

Colour is only used on a terminal; emoji prefixes follow ``--emoji``.
"""

from __future__ import annotations

import sys
from enum import StrEnum
from functools import lru_cache
from typing import Final

from rich.console import Console
from rich.text import Text


class Level(StrEnum):
    """Message levels and the rich style applied to each."""

    INFO = "cyan"
    OK = "green"
    WARN = "yellow"
    FAIL = "red"


_PREFIXES: Final[dict[Level, str]] = {
    Level.INFO: "ℹ️ ",
    Level.OK: "✅ ",
    Level.WARN: "⚠️ ",
    Level.FAIL: "❌ ",
}


def stdout_is_tty() -> bool:
    """Return whether stdout is attached to a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=4)
def get_console(*, tty: bool) -> Console:
    """Return the shared console for terminal or plain output.

    The console resolves ``sys.stdout`` on every print, so captured output
    (pytest, ``CliRunner``) still receives the text.
    """

    return Console(
        force_terminal=tty,
        no_color=not tty,
        color_system="auto" if tty else None,
        soft_wrap=True,
        highlight=False,
        emoji=False,
    )


def log(level: Level, msg: str, *, use_emoji: bool) -> None:
    """Print ``msg`` at ``level``.

    Args:
        level: Message level selecting the prefix and colour.
        msg: Message text to display.
        use_emoji: Whether to prefix the level emoji.
    """

    tty = stdout_is_tty()
    text = Text(f"{_PREFIXES[level] if use_emoji else ''}{msg}")
    if tty:
        text.stylize(level.value)
    get_console(tty=tty).print(text)


def info(msg: str, *, use_emoji: bool) -> None:
    """Print an informational message.

    Args:
        msg: Message text to display.
        use_emoji: Whether to prefix the level emoji.
    """

    log(Level.INFO, msg, use_emoji=use_emoji)


def ok(msg: str, *, use_emoji: bool) -> None:
    """Print a success message.

    Args:
        msg: Message text to display.
        use_emoji: Whether to prefix the level emoji.
    """

    log(Level.OK, msg, use_emoji=use_emoji)


def warn(msg: str, *, use_emoji: bool) -> None:
    """Print a warning.

    Args:
        msg: Message text to display.
        use_emoji: Whether to prefix the level emoji.
    """

    log(Level.WARN, msg, use_emoji=use_emoji)


def fail(msg: str, *, use_emoji: bool) -> None:
    """Print a failure.

    Args:
        msg: Message text to display.
        use_emoji: Whether to prefix the level emoji.
    """

    log(Level.FAIL, msg, use_emoji=use_emoji)


__all__ = ["Level", "fail", "get_console", "info", "log", "ok", "stdout_is_tty", "warn"]
