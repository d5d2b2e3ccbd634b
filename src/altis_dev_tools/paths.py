# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Validation and normalisation of PHPUnit test paths."""

from __future__ import annotations

import glob
from collections.abc import Iterable
from pathlib import Path
from typing import Final

TEST_FILE_SUFFIXES: Final[frozenset[str]] = frozenset({".php", ".inc"})


def is_valid_test_path(root: Path, path: str | None) -> bool:
    """Return whether ``path`` (relative to ``root``) can be handed to PHPUnit.

    Glob patterns are valid when they match at least one entry, files only
    when they carry a PHP extension, and anything else when it is a directory.
    """

    if not path:
        return False
    full_path = root / path
    if "*" in path:
        return bool(glob.glob(str(full_path)))
    if full_path.is_file():
        return full_path.suffix in TEST_FILE_SUFFIXES
    return full_path.is_dir()


def normalise_test_paths(root: Path, paths: Iterable[str]) -> list[str]:
    """Strip surrounding slashes, drop invalid entries and remove duplicates."""

    result: list[str] = []
    for raw in paths:
        trimmed = raw.strip("/")
        if not is_valid_test_path(root, trimmed):
            continue
        if trimmed not in result:
            result.append(trimmed)
    return result


__all__ = ["TEST_FILE_SUFFIXES", "is_valid_test_path", "normalise_test_paths"]
