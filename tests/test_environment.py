# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

from pathlib import Path

from altis_dev_tools.environment import LocalEnvironment


def test_local_server_commands(tmp_path: Path, recorder) -> None:
    environment = LocalEnvironment(root=tmp_path)

    assert environment.name == "local-server"
    assert environment.db_host == "db"
    environment.exec("vendor/bin/phpunit", "--filter", "Test")
    environment.create_test_databases()

    assert recorder.commands[0] == [
        "composer",
        "local-server",
        "exec",
        "--",
        "vendor/bin/phpunit",
        "--filter",
        "Test",
    ]
    assert recorder.commands[1][:5] == ["composer", "local-server", "db", "exec", "--"]
    assert recorder.commands[1][5].startswith("DROP DATABASE IF EXISTS test;")
    assert environment.options.cwd == tmp_path


def test_chassis_database_commands(tmp_path: Path, recorder) -> None:
    environment = LocalEnvironment(root=tmp_path, use_chassis=True)

    assert environment.db_host == "localhost"
    environment.create_test_databases()

    assert recorder.commands[0][:8] == ["composer", "chassis", "exec", "--", "mysql", "-uroot", "-ppassword", "-e"]
    assert "wordpress@localhost" in recorder.commands[0][8]


def test_delete_test_databases_reports_first_failure(tmp_path: Path, recorder) -> None:
    recorder.status_for = lambda argv: 7 if "curl" in argv else 0
    environment = LocalEnvironment(root=tmp_path)

    assert environment.delete_test_databases() == 7
    assert recorder.commands[0][-1].startswith("DROP DATABASE test;")
    assert recorder.commands[1][4:] == [
        "curl",
        "--silent",
        "-o",
        "/dev/null",
        "-XDELETE",
        "http://elasticsearch:9200/ep-tests-*",
    ]


def test_flush_cache(tmp_path: Path, recorder) -> None:
    LocalEnvironment(root=tmp_path).flush_cache()
    assert recorder.commands == [["composer", "local-server", "exec", "--", "wp", "cache", "flush", "--quiet"]]


def test_chassis_sql_is_one_quoted_shell_word(tmp_path: Path, recorder) -> None:
    LocalEnvironment(root=tmp_path, use_chassis=True).db_exec('SELECT "a\\b";')
    LocalEnvironment(root=tmp_path).db_exec('SELECT "a";')

    assert recorder.commands[0][-1] == '"SELECT \\"a\\\\b\\";"'
    assert recorder.commands[1][-1] == 'SELECT "a";'
