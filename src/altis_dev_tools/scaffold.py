# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Copy boilerplate project files from the bundled templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Final

from .errors import ConfigNotFound


@dataclass(frozen=True, slots=True)
class Scaffold:
    """Template set copied into a project.

    ``files`` maps template names to destinations relative to ``target``.
    Dotfile destinations are listed explicitly since package data skips
    hidden template names.
    """

    template_dir: str
    target: str
    files: dict[str, str]
    directories: tuple[str, ...] = ()


@dataclass(slots=True)
class ScaffoldResult:
    """Paths written or left untouched by :func:`scaffold`."""

    created: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


SCAFFOLDS: Final[dict[str, Scaffold]] = {
    "devcontainer": Scaffold(
        template_dir="devcontainer",
        target=".devcontainer",
        files={"Dockerfile": "Dockerfile", "devcontainer.json": "devcontainer.json"},
    ),
    "docslint": Scaffold(
        template_dir="docslint",
        target=".",
        files={"vale.ini": ".vale.ini", "markdownlint-cli2.jsonc": ".markdownlint-cli2.jsonc"},
        directories=(".vale/styles",),
    ),
}


def scaffold(root: Path, kind: str, *, force: bool = False) -> ScaffoldResult:
    """Copy the ``kind`` templates into the project at ``root``.

    Existing files are reported as skipped unless ``force`` is set.

    Raises:
        KeyError: If ``kind`` is not a known scaffold.
        ConfigNotFound: If a bundled template is missing from the installation.
    """

    spec = SCAFFOLDS[kind]
    source_dir = resources.files(__package__).joinpath("templates", spec.template_dir)
    target_dir = root / spec.target
    result = ScaffoldResult()

    for template_name, destination in spec.files.items():
        source = source_dir.joinpath(template_name)
        if not source.is_file():
            raise ConfigNotFound(Path(str(source)), detail=f"{kind} template")
        target = target_dir / destination
        if target.exists() and not force:
            result.skipped.append(target)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(source.read_bytes())
        result.created.append(target)

    for directory in spec.directories:
        (target_dir / directory).mkdir(parents=True, exist_ok=True)
    return result


__all__ = ["SCAFFOLDS", "Scaffold", "ScaffoldResult", "scaffold"]
