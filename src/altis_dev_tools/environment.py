# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command execution inside the Local Server or Local Chassis environment."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .process import CommandOptions, run_command

COMPOSER: Final[str] = "composer"
LOCAL_SERVER: Final[str] = "local-server"
CHASSIS: Final[str] = "chassis"
ELASTICSEARCH_TEST_INDEXES: Final[str] = "http://elasticsearch:9200/ep-tests-*"

_LOCAL_SERVER_CREATE_SQL: Final[str] = (
    "DROP DATABASE IF EXISTS test; DROP DATABASE IF EXISTS test2; "
    "CREATE DATABASE test; CREATE DATABASE test2; "
    "GRANT ALL PRIVILEGES ON test.* TO wordpress IDENTIFIED BY \"wordpress\"; "
    "GRANT ALL PRIVILEGES ON test2.* TO wordpress IDENTIFIED BY \"wordpress\";"
)
_CHASSIS_CREATE_SQL: Final[str] = (
    "CREATE DATABASE IF NOT EXISTS test; CREATE DATABASE IF NOT EXISTS test2; "
    "GRANT ALL PRIVILEGES ON test.* TO wordpress@localhost IDENTIFIED BY \"wordpress\"; "
    "GRANT ALL PRIVILEGES ON test2.* TO wordpress@localhost IDENTIFIED BY \"wordpress\";"
)
_DROP_SQL: Final[str] = (
    "DROP DATABASE test; DROP DATABASE test2; "
    "REVOKE ALL PRIVILEGES on test.* FROM wordpress; "
    "REVOKE ALL PRIVILEGES on test2.* FROM wordpress;"
)


def quote_shell_word(text: str) -> str:
    """Return ``text`` wrapped in double quotes with inner quotes escaped."""

    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


@dataclass(slots=True)
class LocalEnvironment:
    """Run commands through the platform CLI of the active local environment.

    Local Server is the default; ``use_chassis`` switches to Local Chassis.
    Every method returns the exit code of the delegated command.
    """

    root: Path
    use_chassis: bool = False
    options: CommandOptions = field(init=False)

    def __post_init__(self) -> None:
        self.options = CommandOptions(cwd=self.root)

    @property
    def name(self) -> str:
        """Return the platform CLI command backing this environment."""

        return CHASSIS if self.use_chassis else LOCAL_SERVER

    @property
    def db_host(self) -> str:
        """Return the database host reachable from inside the environment."""

        return "localhost" if self.use_chassis else "db"

    def exec(self, command: str, *args: str) -> int:
        """Execute ``command`` with ``args`` inside the environment."""

        return self._composer("exec", "--", command, *args)

    def db_exec(self, sql: str) -> int:
        """Execute ``sql`` as the database root user.

        Chassis joins ``exec`` arguments into a shell command line inside the
        VM, so the statement is passed as one double-quoted word.
        """

        if self.use_chassis:
            return self.exec("mysql", "-uroot", "-ppassword", "-e", quote_shell_word(sql))
        return self._composer("db", "exec", "--", sql)

    def create_test_databases(self) -> int:
        """Create the ``test`` and ``test2`` databases and grant access to them."""

        return self.db_exec(_CHASSIS_CREATE_SQL if self.use_chassis else _LOCAL_SERVER_CREATE_SQL)

    def delete_test_databases(self) -> int:
        """Drop the test databases and remove Elasticsearch test indexes.

        Returns:
            int: First non-zero exit code of the two steps, else ``0``.
        """

        dropped = self.db_exec(_DROP_SQL)
        cleared = self.exec("curl", "--silent", "-o", "/dev/null", "-XDELETE", ELASTICSEARCH_TEST_INDEXES)
        return dropped or cleared

    def flush_cache(self) -> int:
        """Flush the WordPress object cache."""

        return self.exec("wp", "cache", "flush", "--quiet")

    def _composer(self, subcommand: str, *args: str) -> int:
        argv: Sequence[str] = (COMPOSER, self.name, subcommand, *args)
        return run_command(argv, options=self.options).returncode


__all__ = ["LocalEnvironment", "quote_shell_word"]
