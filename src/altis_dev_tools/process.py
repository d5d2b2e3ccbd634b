# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Commands are passed as argument lists; ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from subprocess import CompletedProcess
from typing import Any, Final

from .errors import SubprocessFailed

_COMMAND_KEYS: Final[frozenset[str]] = frozenset({"cwd", "env", "check", "capture_output", "timeout"})
TIMEOUT_EXIT_CODE: Final[int] = 124


@dataclass(slots=True, frozen=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = False
    capture_output: bool = False
    timeout: float | None = None

    def with_overrides(self, overrides: Mapping[str, Any]) -> CommandOptions:
        """Return a new options instance with ``overrides`` applied.

        Args:
            overrides: Mapping of option names to replacement values.

        Returns:
            CommandOptions: Updated options instance.

        Raises:
            TypeError: If ``overrides`` includes an unknown option name.
            ValueError: When a timeout override is negative.
        """

        unknown = [key for key in overrides if key not in _COMMAND_KEYS]
        if unknown:
            raise TypeError(f"Unknown command option(s): {', '.join(sorted(unknown))}")
        timeout = overrides.get("timeout", self.timeout)
        if timeout is not None and timeout < 0:
            raise ValueError("timeout override must be non-negative")
        return replace(self, **overrides)


def _ensure_text(value: str | bytes | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list with the executable resolved on ``PATH``.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be found.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    options: CommandOptions | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    Output is streamed to the parent's stdout/stderr unless ``capture_output``
    is requested.

    Args:
        args: Command and argument sequence to execute.
        options: Base options configuring execution semantics.
        overrides: Keyword overrides applied to a cloned ``options`` instance.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        SubprocessFailed: When ``check`` is set and the process exits non-zero.
    """

    normalized = _normalize_args(args)
    resolved = (options or CommandOptions()).with_overrides(dict(overrides or {}))

    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(resolved.cwd) if resolved.cwd is not None else None,
            env=dict(resolved.env) if resolved.env is not None else None,
            check=False,
            capture_output=resolved.capture_output,
            text=True,
            timeout=resolved.timeout,
        )
    except subprocess.TimeoutExpired as exc:
        timeout_msg = f"Command timed out after {resolved.timeout:.1f}s"
        stderr = _ensure_text(exc.stderr)
        completed = subprocess.CompletedProcess(
            args=normalized,
            returncode=TIMEOUT_EXIT_CODE,
            stdout=_ensure_text(exc.stdout) or "",
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )

    if resolved.check and completed.returncode != 0:
        raise SubprocessFailed(
            normalized,
            completed.returncode,
            stdout=completed.stdout if isinstance(completed.stdout, str) else None,
            stderr=completed.stderr if isinstance(completed.stderr, str) else None,
        )
    return completed


__all__ = ["CommandOptions", "TIMEOUT_EXIT_CODE", "run_command"]
