# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""End-to-end tests for the dev-tools command line."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from altis_dev_tools.cli.app import app
from altis_dev_tools.cli.shared import build_cli_logger

runner = CliRunner()


def _invoke(root: Path, *args: str):
    return runner.invoke(app, ["--root", str(root), "--no-emoji", *args])


def test_phpunit_relays_exit_status(project: Path, recorder) -> None:
    recorder.status_for = lambda argv: 2 if "vendor/bin/phpunit" in argv else 0

    result = _invoke(project, "phpunit", "--", "--filter", "SampleTest")

    assert result.exit_code == 2
    assert recorder.commands == [
        [
            "composer",
            "local-server",
            "exec",
            "--",
            "vendor/bin/phpunit",
            "-c",
            "vendor/phpunit.xml",
            "--filter",
            "SampleTest",
        ],
    ]
    assert (project / "vendor" / "phpunit.xml").is_file()


def test_phpunit_chassis_flag(project: Path, recorder) -> None:
    result = _invoke(project, "phpunit", "--chassis")

    assert result.exit_code == 0
    assert recorder.commands[0][:2] == ["composer", "chassis"]


def test_missing_manifest_fails(tmp_path: Path, recorder) -> None:
    result = _invoke(tmp_path, "phpunit")

    assert result.exit_code == 1
    assert "Required file not found" in result.stdout
    assert "composer.json" in result.stdout
    assert recorder.commands == []


def test_invalid_module_config_fails(tmp_path: Path, composer_json, recorder) -> None:
    composer_json(tmp_path, {"dev-tools": "yes"})

    result = _invoke(tmp_path, "phpunit")

    assert result.exit_code == 1
    assert "extra.altis.modules.dev-tools must be an object" in result.stdout


def test_codecept_bootstrap(project: Path) -> None:
    templates = project / "vendor" / "altis" / "dev-tools" / "tests"
    templates.mkdir(parents=True)
    (templates / "acceptance.suite.yml").write_text("actor: AcceptanceTester\n", encoding="utf-8")
    (templates / "integration.suite.yml").write_text("actor: IntegrationTester\n", encoding="utf-8")

    result = _invoke(project, "codecept", "-p", "tests/e2e", "--", "bootstrap", "acceptance")

    assert result.exit_code == 0, result.stdout
    assert "Created test suites (acceptance)" in result.stdout
    assert (project / "tests" / "e2e" / "acceptance.suite.yml").is_file()
    assert not (project / "tests" / "e2e" / "integration.suite.yml").exists()

    again = _invoke(project, "codecept", "-p", "tests/e2e", "--", "bootstrap", "acceptance")
    assert again.exit_code == 1
    assert 'An existing "acceptance" suite was found' in again.stdout


def test_codecept_rejects_unknown_browser(project: Path, recorder) -> None:
    (project / "tests" / "acceptance.suite.yml").write_text(
        "modules:\n    enabled:\n        - WPWebDriver\n",
        encoding="utf-8",
    )

    result = _invoke(project, "codecept", "--browser", "edge")

    assert result.exit_code == 1
    assert 'Browser "edge" is unavailable' in result.stdout
    assert not (project / "vendor" / ".test-running").exists()


def test_scaffold_reports_created_and_skipped(tmp_path: Path) -> None:
    first = _invoke(tmp_path, "scaffold", "devcontainer")
    assert first.exit_code == 0
    assert "Created .devcontainer/Dockerfile" in first.stdout

    second = _invoke(tmp_path, "scaffold", "devcontainer")
    assert second.exit_code == 0
    assert "Skipped existing .devcontainer/devcontainer.json (use --force to overwrite)" in second.stdout


def test_lint_docs_structure_only(tmp_path: Path, recorder) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "README.md").write_text("# Docs\n", encoding="utf-8")

    result = _invoke(tmp_path, "lint-docs", "--structure-only")

    assert result.exit_code == 0
    assert "Documentation layout is valid." in result.stdout
    assert recorder.commands == []


def test_lint_docs_runs_linters(tmp_path: Path, recorder) -> None:
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "README.md").write_text("# Docs\n", encoding="utf-8")
    recorder.status_for = lambda argv: 1 if argv[0] == "markdownlint-cli2" else 0

    result = _invoke(tmp_path, "lint-docs")

    assert result.exit_code == 1
    assert [argv[0] for argv in recorder.commands] == ["markdownlint-cli2", "vale"]


def test_lint_docs_reports_layout_problems(tmp_path: Path, recorder) -> None:
    (tmp_path / "docs").mkdir()

    result = _invoke(tmp_path, "lint-docs")

    assert result.exit_code == 1
    assert "does not contain a README.md file" in result.stdout
    assert recorder.commands == []


def test_install_ci_missing_package(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "install-ci")

    assert result.exit_code == 1
    assert "Travis CI template" in result.stdout


def test_passthrough_help_lists_sorted_options() -> None:
    result = runner.invoke(app, ["codecept", "--help"])

    assert result.exit_code == 0
    text = result.stdout
    assert text.index("--browser") < text.index("--chassis") < text.index("--output") < text.index("--path")
    assert "Arguments after -- are handed to the wrapped runner unchanged." in text


def test_scaffold_help_has_no_passthrough_section() -> None:
    result = runner.invoke(app, ["scaffold", "--help"])

    assert result.exit_code == 0
    assert "Pass-through" not in result.stdout


def test_phpunit_accepts_empty_attribute_array(project: Path, composer_json, recorder) -> None:
    composer_json(project, {"dev-tools": {"phpunit": {"attributes": []}}})

    result = _invoke(project, "phpunit")

    assert result.exit_code == 0, result.stdout
    assert (project / "vendor" / "phpunit.xml").is_file()


def test_cli_logger_honours_emoji_flag(capsys) -> None:
    build_cli_logger(emoji=False).info("Detected 2 suites")
    build_cli_logger(emoji=True).ok("Done")

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Detected 2 suites"
    assert lines[1].startswith("✅ ")
    assert lines[1].endswith("Done")
