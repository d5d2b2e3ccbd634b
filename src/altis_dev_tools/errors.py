# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error types raised by the dev-tools command implementations."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class DevToolsError(Exception):
    """Base class for every error raised by :mod:`altis_dev_tools`."""

    exit_code: int = 1


class ConfigNotFound(DevToolsError):
    """Raised when a required manifest, template, or suite file is missing."""

    def __init__(self, path: Path, *, detail: str | None = None) -> None:
        """Initialise the error with the missing ``path``.

        Args:
            path: Filesystem location that was expected to exist.
            detail: Optional description of what the file was needed for.
        """

        message = f"Required file not found: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.path = path


class InvalidConfigShape(DevToolsError):
    """Raised when project configuration cannot be parsed or validated."""


class SubprocessFailed(DevToolsError):
    """Raised when a wrapped command exits with a non-zero status."""

    def __init__(
        self,
        command: Sequence[str],
        exit_code: int,
        *,
        stdout: str | None = None,
        stderr: str | None = None,
    ) -> None:
        """Initialise the error with the failing command metadata.

        Args:
            command: Argument vector that was executed.
            exit_code: Exit status reported by the subprocess.
            stdout: Captured standard output, when collected.
            stderr: Captured standard error, when collected.
        """

        super().__init__(f"Command '{command[0]}' exited with status {exit_code}")
        self.command = tuple(command)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class BootstrapError(DevToolsError):
    """Raised when suite scaffolding would clobber files or names an unknown suite."""


class UnsupportedBrowser(DevToolsError):
    """Raised when a headless browser container cannot be provided."""

    def __init__(self, browser: str, available: Sequence[str]) -> None:
        super().__init__(
            f'Browser "{browser}" is unavailable, available browsers are: {", ".join(available)}.',
        )
        self.browser = browser
        self.available = tuple(available)


__all__ = [
    "BootstrapError",
    "ConfigNotFound",
    "DevToolsError",
    "InvalidConfigShape",
    "SubprocessFailed",
    "UnsupportedBrowser",
]
