# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Synchronise the project's Travis CI configuration with the dev-tools package."""

from __future__ import annotations

import hashlib
import json
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from .errors import ConfigNotFound, InvalidConfigShape

DEV_TOOLS_PACKAGE: Final[str] = "altis/dev-tools"
PACKAGE_DIR: Final[str] = "vendor/altis/dev-tools"
INSTALLED_JSON: Final[str] = "vendor/composer/installed.json"
TESTS_TEMPLATE: Final[str] = "travis/tests.yml"
PROJECT_TEMPLATE: Final[str] = "travis/project.yml"
TESTS_CONFIG: Final[str] = ".config/travis.yml"
PROJECT_CONFIG: Final[str] = ".travis.yml"
REF_PLACEHOLDER: Final[str] = "altis.yml@__ref_replace_me__"
DOCS_URL: Final[str] = "https://www.altis-dxp.com/resources/docs/dev-tools/continuous-integration/"

_REF_PATTERN = re.compile(r"altis\.yml@.*")


@dataclass(slots=True)
class CiSyncResult:
    """Outcome of :func:`install_ci_files`."""

    created: list[Path] = field(default_factory=list)
    ref: str | None = None
    mismatch: bool = False
    template: Path | None = None


def installed_version(root: Path, package: str = DEV_TOOLS_PACKAGE) -> str:
    """Return the installed version of ``package`` without a ``dev-`` prefix.

    Raises:
        ConfigNotFound: If Composer's installed package list is missing.
        InvalidConfigShape: If the list cannot be read or lacks ``package``.
    """

    installed = root / INSTALLED_JSON
    if not installed.is_file():
        raise ConfigNotFound(installed, detail="installed packages")
    try:
        payload: Any = json.loads(installed.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidConfigShape(f"{installed} is not valid JSON: {exc}") from exc
    # Composer 2 wraps the list in {"packages": [...]}.
    packages = payload.get("packages", []) if isinstance(payload, dict) else payload
    for entry in packages if isinstance(packages, list) else []:
        if isinstance(entry, dict) and entry.get("name") == package:
            version = str(entry.get("version") or entry.get("version_normalized") or "")
            return version.removeprefix("dev-")
    raise InvalidConfigShape(f"{package} is not listed in {installed}")


def reset_ref(config: str) -> str:
    """Return ``config`` with its dev-tools ref replaced by the placeholder."""

    return _REF_PATTERN.sub(REF_PLACEHOLDER, config)


def _md5(text: str) -> str:
    return hashlib.md5(text.encode("utf-8"), usedforsecurity=False).hexdigest()


def install_ci_files(root: Path) -> CiSyncResult:
    """Install missing CI configs and pin ``.travis.yml`` to the installed ref.

    A ``.travis.yml`` that differs from the template (ignoring its ref) is left
    untouched and reported as a mismatch.
    """

    source = root / PACKAGE_DIR
    project_template = source / PROJECT_TEMPLATE
    if not project_template.is_file():
        raise ConfigNotFound(project_template, detail="Travis CI template")

    result = CiSyncResult(template=project_template)
    tests_config = root / TESTS_CONFIG
    if not tests_config.exists():
        tests_config.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source / TESTS_TEMPLATE, tests_config)
        result.created.append(tests_config)

    project_config = root / PROJECT_CONFIG
    if not project_config.exists():
        shutil.copyfile(project_template, project_config)
        result.created.append(project_config)

    current = reset_ref(project_config.read_text(encoding="utf-8"))
    if _md5(project_template.read_text(encoding="utf-8")) != _md5(current):
        result.mismatch = True
        return result

    result.ref = installed_version(root)
    project_config.write_text(current.replace(REF_PLACEHOLDER, f"altis.yml@{result.ref}"), encoding="utf-8")
    return result


__all__ = ["CiSyncResult", "DOCS_URL", "install_ci_files", "installed_version", "reset_ref"]
