# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CompletedProcess
from typing import Any

import pytest


@dataclass
class CommandRecorder:
    """Collect argument vectors passed to ``run_command`` fakes."""

    commands: list[list[str]] = field(default_factory=list)
    status_for: Callable[[list[str]], int] = lambda args: 0
    stdout_for: Callable[[list[str]], str] = lambda args: ""

    def __call__(self, args: Any, **kwargs: Any) -> CompletedProcess[str]:
        argv = [str(arg) for arg in args]
        self.commands.append(argv)
        return CompletedProcess(args=argv, returncode=self.status_for(argv), stdout=self.stdout_for(argv), stderr="")


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> CommandRecorder:
    """Replace every ``run_command`` import with a single recorder."""

    fake = CommandRecorder()
    for module in ("environment", "browser", "docslint"):
        monkeypatch.setattr(f"altis_dev_tools.{module}.run_command", fake)
    return fake


def write_composer_json(root: Path, modules: dict[str, Any] | None = None) -> Path:
    manifest = root / "composer.json"
    payload: dict[str, Any] = {"name": "acme/site"}
    if modules is not None:
        payload["extra"] = {"altis": {"modules": modules}}
    manifest.write_text(json.dumps(payload), encoding="utf-8")
    return manifest


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return a minimal project root with ``composer.json`` and ``tests/``."""

    root = tmp_path / "acme-site"
    root.mkdir()
    (root / "tests").mkdir()
    (root / "vendor").mkdir()
    write_composer_json(root, {"local-server": {"name": "acme"}})
    return root


@pytest.fixture
def composer_json() -> Callable[..., Path]:
    """Return a helper writing ``composer.json`` with module settings."""

    return write_composer_json
