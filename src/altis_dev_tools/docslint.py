# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Documentation layout checks and markdown linters."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from .errors import ConfigNotFound
from .process import CommandOptions, run_command

DOC_DIRECTORIES: Final[tuple[str, ...]] = ("docs", "user-docs", "other-docs")
SKIPPED_DIRECTORIES: Final[frozenset[str]] = frozenset({"assets"})
README: Final[str] = "README.md"


def check_docs_structure(path: Path) -> list[str]:
    """Return layout problems found in the documentation folders under ``path``.

    Every folder must hold a ``README.md`` and must not hold a markdown file
    named after the folder itself. ``assets`` folders are not inspected.

    Raises:
        ConfigNotFound: If ``path`` does not exist.
    """

    if not path.exists():
        raise ConfigNotFound(path, detail="documentation root")
    problems: list[str] = []
    for name in DOC_DIRECTORIES:
        base = path / name
        if base.is_dir():
            _check_directory(base, problems)
    return problems


def _check_directory(directory: Path, problems: list[str]) -> None:
    if not (directory / README).exists():
        problems.append(f"Folder {directory} does not contain a {README} file")

    entries = sorted(directory.iterdir())
    folder_name = directory.name.lower()
    for entry in entries:
        if entry.is_file() and entry.suffix == ".md" and entry.stem.lower() == folder_name:
            problems.append(f"Folder {directory} contains a file with the same name: {entry.name}")
    for entry in entries:
        if entry.is_dir() and not entry.is_symlink() and entry.name not in SKIPPED_DIRECTORIES:
            _check_directory(entry, problems)


def existing_doc_directories(path: Path) -> list[str]:
    """Return the documentation folder names present under ``path``."""

    return [name for name in DOC_DIRECTORIES if (path / name).is_dir()]


def run_markdownlint(path: Path) -> int:
    """Run ``markdownlint-cli2`` over the documentation folders."""

    globs = [f"{name}/**/*.md" for name in existing_doc_directories(path)]
    if not globs:
        return 0
    return run_command(["markdownlint-cli2", *globs], options=CommandOptions(cwd=path)).returncode


def run_vale(path: Path) -> int:
    """Run ``vale`` over the documentation folders."""

    directories = existing_doc_directories(path)
    if not directories:
        return 0
    return run_command(["vale", *directories], options=CommandOptions(cwd=path)).returncode


__all__ = [
    "DOC_DIRECTORIES",
    "check_docs_structure",
    "existing_doc_directories",
    "run_markdownlint",
    "run_vale",
]
