# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Zero-configuration PHPUnit runs driven by ``composer.json`` settings."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from .config import PhpUnitSettings
from .environment import LocalEnvironment
from .merge import merge_config
from .paths import is_valid_test_path, normalise_test_paths
from .serialization import set_attributes, write_xml

DEFAULT_TEST_PATH: Final[str] = "tests"
CONFIG_PATH: Final[str] = "vendor/phpunit.xml"
RUNNER: Final[str] = "vendor/bin/phpunit"
TESTSUITE_NAME: Final[str] = "project"

DEFAULT_ATTRIBUTES: Final[dict[str, Any]] = {
    "bootstrap": "altis/dev-tools/inc/phpunit/bootstrap.php",
    "backupGlobals": False,
    "colors": True,
    "convertErrorsToExceptions": True,
    "convertNoticesToExceptions": True,
    "convertWarningsToExceptions": True,
}

# (prefix, suffix) pairs; every test directory is scanned once per pair.
DIRECTORY_VARIANTS: Final[tuple[tuple[str | None, str], ...]] = (
    ("class-test-", ".php"),
    ("test-", ".php"),
    (None, "-test.php"),
)

_CONFIG_OPTION = re.compile(r"(?:^|\s)(?:-c|--configuration)(?:\s+|=)\S")


@dataclass(slots=True)
class PhpUnitRun:
    """Resolved inputs for a single PHPUnit invocation."""

    test_paths: list[str]
    excludes: list[str]
    options: list[str]


def has_configuration_option(options: Sequence[str]) -> bool:
    """Return ``True`` when ``options`` already select a configuration file."""

    return bool(_CONFIG_OPTION.search(" ".join(options)))


def plan_run(root: Path, settings: PhpUnitSettings, options: Sequence[str]) -> PhpUnitRun:
    """Resolve test paths, excludes and runner options.

    Configured directories come first, followed by ``tests``. When the last
    pass-through option is itself a valid test path it is removed from the
    options and becomes the only test path.
    """

    test_paths = normalise_test_paths(root, [*settings.directories, DEFAULT_TEST_PATH])
    remaining = list(options)
    if remaining and is_valid_test_path(root, remaining[-1]):
        test_paths = [remaining.pop()]
    excludes = normalise_test_paths(root, settings.excludes)
    return PhpUnitRun(test_paths=test_paths, excludes=excludes, options=remaining)


def build_config(root: Path, settings: PhpUnitSettings, run: PhpUnitRun) -> ET.Element:
    """Return the ``<phpunit>`` document for ``run``.

    Paths are written relative to ``vendor/`` where the file is stored.
    """

    phpunit = ET.Element("phpunit")
    set_attributes(phpunit, merge_config(DEFAULT_ATTRIBUTES, settings.attributes))

    testsuites = ET.SubElement(phpunit, "testsuites")
    testsuite = ET.SubElement(testsuites, "testsuite", {"name": TESTSUITE_NAME})
    for test_path in run.test_paths:
        if (root / test_path).is_file():
            ET.SubElement(testsuite, "file").text = f"../{test_path}"
            continue
        for prefix, suffix in DIRECTORY_VARIANTS:
            directory = ET.SubElement(testsuite, "directory")
            if prefix:
                directory.set("prefix", prefix)
            directory.set("suffix", suffix)
            directory.text = f"../{test_path}/"
    for exclude in run.excludes:
        ET.SubElement(testsuite, "exclude").text = f"../{exclude}/"

    if settings.extensions:
        extensions = ET.SubElement(phpunit, "extensions")
        for class_name in settings.extensions:
            ET.SubElement(extensions, "extension", {"class": class_name})
    return phpunit


def write_config(root: Path, settings: PhpUnitSettings, run: PhpUnitRun) -> Path:
    """Write ``vendor/phpunit.xml`` and return its path."""

    target = root / CONFIG_PATH
    write_xml(build_config(root, settings, run), target)
    return target


def run_phpunit(
    environment: LocalEnvironment,
    settings: PhpUnitSettings,
    options: Sequence[str] = (),
) -> int:
    """Generate the PHPUnit configuration and run PHPUnit in ``environment``.

    Returns:
        int: PHPUnit's exit status.
    """

    run = plan_run(environment.root, settings, options)
    write_config(environment.root, settings, run)
    runner_options = run.options
    if not has_configuration_option(runner_options):
        runner_options = ["-c", CONFIG_PATH, *runner_options]
    return environment.exec(RUNNER, *runner_options)


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_ATTRIBUTES",
    "DIRECTORY_VARIANTS",
    "PhpUnitRun",
    "build_config",
    "has_configuration_option",
    "plan_run",
    "run_phpunit",
    "write_config",
]
