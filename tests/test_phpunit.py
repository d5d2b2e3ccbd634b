# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for PHPUnit configuration generation."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from altis_dev_tools.config import PhpUnitSettings
from altis_dev_tools.environment import LocalEnvironment
from altis_dev_tools.phpunit import CONFIG_PATH, has_configuration_option, plan_run, run_phpunit


def _read_config(root: Path) -> ET.Element:
    return ET.parse(root / CONFIG_PATH).getroot()


def test_plan_run_orders_configured_directories_first(project: Path) -> None:
    (project / "inc" / "tests").mkdir(parents=True)
    settings = PhpUnitSettings(directories=["inc/tests/", "absent"], excludes=["tests/fixtures", "inc/tests"])
    (project / "tests" / "fixtures").mkdir()

    run = plan_run(project, settings, ["--filter", "test_it"])

    assert run.test_paths == ["inc/tests", "tests"]
    assert run.excludes == ["tests/fixtures", "inc/tests"]
    assert run.options == ["--filter", "test_it"]


def test_plan_run_uses_trailing_test_path(project: Path) -> None:
    (project / "tests" / "test-single.php").write_text("<?php", encoding="utf-8")
    run = plan_run(project, PhpUnitSettings(), ["--stop-on-failure", "tests/test-single.php"])
    assert run.test_paths == ["tests/test-single.php"]
    assert run.options == ["--stop-on-failure"]


def test_run_writes_config_and_execs_phpunit(project: Path, recorder) -> None:
    (project / "tests" / "test-single.php").write_text("<?php", encoding="utf-8")
    settings = PhpUnitSettings(
        excludes=["tests/fixtures/"],
        attributes={"colors": False, "cacheResult": "false"},
        extensions=["Acme\\Listener"],
    )
    (project / "tests" / "fixtures").mkdir()

    status = run_phpunit(LocalEnvironment(root=project), settings, ["--testdox"])

    assert status == 0
    assert recorder.commands == [
        ["composer", "local-server", "exec", "--", "vendor/bin/phpunit", "-c", "vendor/phpunit.xml", "--testdox"],
    ]
    root = _read_config(project)
    assert root.tag == "phpunit"
    assert root.get("bootstrap") == "altis/dev-tools/inc/phpunit/bootstrap.php"
    assert root.get("backupGlobals") == "false"
    assert root.get("colors") == "false"
    assert root.get("cacheResult") == "false"
    assert root.get("convertWarningsToExceptions") == "true"

    suite = root.find("testsuites/testsuite")
    assert suite is not None and suite.get("name") == "project"
    directories = suite.findall("directory")
    assert [(d.get("prefix"), d.get("suffix"), d.text) for d in directories] == [
        ("class-test-", ".php", "../tests/"),
        ("test-", ".php", "../tests/"),
        (None, "-test.php", "../tests/"),
    ]
    assert [e.text for e in suite.findall("exclude")] == ["../tests/fixtures/"]
    assert [e.get("class") for e in root.findall("extensions/extension")] == ["Acme\\Listener"]


def test_single_file_becomes_file_entry(project: Path, recorder) -> None:
    (project / "tests" / "class-test-widget.php").write_text("<?php", encoding="utf-8")
    run_phpunit(LocalEnvironment(root=project, use_chassis=True), PhpUnitSettings(), ["tests/class-test-widget.php"])

    suite = _read_config(project).find("testsuites/testsuite")
    assert suite is not None
    assert [f.text for f in suite.findall("file")] == ["../tests/class-test-widget.php"]
    assert suite.findall("directory") == []
    assert recorder.commands[0][:4] == ["composer", "chassis", "exec", "--"]


def test_explicit_configuration_is_respected(project: Path, recorder) -> None:
    recorder.status_for = lambda args: 2
    status = run_phpunit(LocalEnvironment(root=project), PhpUnitSettings(), ["-c", "phpunit.xml.dist"])
    assert status == 2
    assert recorder.commands[0][4:] == ["vendor/bin/phpunit", "-c", "phpunit.xml.dist"]


def test_has_configuration_option() -> None:
    assert has_configuration_option(["--configuration", "x.xml"])
    assert has_configuration_option(["--configuration=x.xml"])
    assert has_configuration_option(["--testdox", "-c", "x.xml"])
    assert not has_configuration_option(["-c"])
    assert not has_configuration_option(["--coverage-clover", "c.xml"])
