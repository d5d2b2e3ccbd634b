# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Invocation context, logging adapter and error translation for CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import typer
from rich.console import Console
from rich.text import Text

from ..environment import LocalEnvironment
from ..errors import DevToolsError
from ..logging import Level, get_console, log, stdout_is_tty

MISSING_EXECUTABLE_EXIT_CODE: Final[int] = 127
_DEBUG_KEY_PATTERN: Final[str] = r"[\w-]+="


class CLIError(RuntimeError):
    """Error raised by a command that should stop with ``exit_code``."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Status line logger bound to the global ``--emoji``/``--debug`` flags."""

    console: Console
    use_emoji: bool
    debug_enabled: bool = False

    def fail(self, message: str) -> None:
        """Print a failure honouring ``--emoji``.

        Args:
            message: Message text to display.
        """

        log(Level.FAIL, message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        """Print a warning honouring ``--emoji``.

        Args:
            message: Message text to display.
        """

        log(Level.WARN, message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        """Print a success message honouring ``--emoji``.

        Args:
            message: Message text to display.
        """

        log(Level.OK, message, use_emoji=self.use_emoji)

    def info(self, message: str) -> None:
        """Print an informational message honouring ``--emoji``.

        Args:
            message: Message text to display.
        """

        log(Level.INFO, message, use_emoji=self.use_emoji)

    def debug(self, message: str) -> None:
        """Print ``message`` with its ``key=`` markers highlighted under ``--debug``."""

        if not self.debug_enabled:
            return
        text = Text.assemble(("[debug] ", "bold cyan"), message)
        text.highlight_regex(_DEBUG_KEY_PATTERN, "bold magenta")
        self.console.print(text)


def build_cli_logger(*, emoji: bool, debug: bool = False) -> CLILogger:
    """Return a ``CLILogger`` sharing the status line console."""

    return CLILogger(console=get_console(tty=stdout_is_tty()), use_emoji=emoji, debug_enabled=debug)


@dataclass(slots=True)
class CLIContext:
    """Global options shared by every dev-tools command."""

    root: Path
    chassis: bool
    emoji: bool
    debug: bool

    @property
    def logger(self) -> CLILogger:
        """Return a logger bound to this invocation's ``--emoji`` and ``--debug`` flags."""

        return build_cli_logger(emoji=self.emoji, debug=self.debug)

    def environment(self, *, chassis: bool = False) -> LocalEnvironment:
        """Return Local Chassis when selected globally or by ``chassis``, else Local Server."""

        return LocalEnvironment(root=self.root, use_chassis=self.chassis or chassis)


def get_cli_context(ctx: typer.Context) -> CLIContext:
    """Return the :class:`CLIContext` stored by the root callback."""

    obj = ctx.find_object(CLIContext)
    if obj is None:
        return CLIContext(root=Path.cwd(), chassis=False, emoji=True, debug=False)
    return obj


@contextmanager
def exit_on_error(logger: CLILogger) -> Iterator[None]:
    """Log command failures and exit with their status.

    :class:`CLIError` and domain errors exit with their own ``exit_code``,
    which for :class:`SubprocessFailed` is the wrapped command's status. A
    missing executable exits with 127.
    """

    try:
        yield
    except (CLIError, DevToolsError) as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code or 1) from exc
    except FileNotFoundError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=MISSING_EXECUTABLE_EXIT_CODE) from exc


__all__ = [
    "CLIContext",
    "CLIError",
    "CLILogger",
    "build_cli_logger",
    "exit_on_error",
    "get_cli_context",
]
