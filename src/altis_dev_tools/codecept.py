# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Zero-configuration Codeception runs with test database and browser lifecycle.

Codeception runs from the project's ``vendor`` directory, so every path
written into ``vendor/codeception.yml`` is relative to it.
"""

from __future__ import annotations

import re
import shutil
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from .browser import DEFAULT_BROWSER, start_browser_container, stop_browser_container
from .environment import LocalEnvironment
from .errors import BootstrapError, ConfigNotFound, SubprocessFailed
from .logging import info
from .merge import ConfigNode, merge_config
from .serialization import dump_yaml

CONFIG_PATH: Final[str] = "vendor/codeception.yml"
ENV_PATH: Final[str] = "vendor/codeception.env"
RUNNING_MARKER: Final[str] = "vendor/.test-running"
RUNNER: Final[str] = "vendor/bin/codecept"
SUITE_SUFFIX: Final[str] = ".suite.yml"
SUITE_TEMPLATES_DIR: Final[str] = "vendor/altis/dev-tools/tests"
DEV_TOOLS_TESTS: Final[str] = "altis/dev-tools/tests"
DEFAULT_TESTS_FOLDER: Final[str] = "tests"
DB_MODULE: Final[str] = "WPDb"
WEBDRIVER_MODULE: Final[str] = "WPWebDriver"
BOOTSTRAP: Final[str] = "bootstrap"

# Folder key -> fallback location inside the dev-tools package.
SUPPORT_FOLDERS: Final[dict[str, str]] = {
    "_data": f"{DEV_TOOLS_TESTS}/_data",
    "_support": f"{DEV_TOOLS_TESTS}/_support",
    "_envs": f"{DEV_TOOLS_TESTS}/_env",
}

GENERATE_COMMANDS: Final[tuple[str, ...]] = (
    "Codeception\\Command\\GenerateWPUnit",
    "Codeception\\Command\\GenerateWPRestApi",
    "Codeception\\Command\\GenerateWPRestController",
    "Codeception\\Command\\GenerateWPRestPostTypeController",
    "Codeception\\Command\\GenerateWPAjax",
    "Codeception\\Command\\GenerateWPCanonical",
    "Codeception\\Command\\GenerateWPXMLRPC",
)

_POPULATOR: Final[str] = (
    "export DB_NAME=%TEST_SITE_DB_NAME% && "
    "wp core multisite-install --quiet --url=%TEST_SITE_WP_URL% --base=/ --title=Testing "
    "--admin_user=admin --admin_password=password --admin_email=admin@%TEST_SITE_WP_DOMAIN% "
    "--skip-email --skip-config && wp altis migrate --url=%TEST_SITE_WP_URL%"
)

_CHROME_USER_AGENT: Final[str] = (
    '--user-agent="Mozilla/5.0 (Macintosh; Intel Mac OS X 10_14_6) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/95.0.4638.69 Safari/537.36 wp-browser"'
)
_FIREFOX_USER_AGENT: Final[str] = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.14; rv:70.0) Gecko/20100101 Firefox/70.0 wp-browser"
)
_EDGE_USER_AGENT: Final[str] = (
    '-user-agent="Mozilla/5.0 (Macintosh; Intel Mac OS X 10_14_6) AppleWebKit/605.1.15 '
    '(KHTML, like Gecko) Chrome/95.0.4638.69 Safari/604.1 Edg/95.0.100.0 wp-browser"'
)

_CONFIG_OPTION = re.compile(r"(?:^|\s)(?:-c|--configuration)(?:\s+|=)\S")


@dataclass(slots=True)
class CodeceptRun:
    """Command line inputs for a Codeception invocation."""

    tests_folder: str = DEFAULT_TESTS_FOLDER
    output_folder: str = ""
    browser: str = DEFAULT_BROWSER
    options: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.tests_folder = self.tests_folder.rstrip("/\\") or DEFAULT_TESTS_FOLDER

    @property
    def relative_tests_folder(self) -> str:
        """Return the tests folder relative to ``vendor/``."""

        return f"../{self.tests_folder}"

    def tests_dir(self, root: Path) -> Path:
        """Return the absolute tests folder for the project at ``root``."""

        return root / self.tests_folder


def resolve_folders(root: Path, run: CodeceptRun) -> dict[str, str]:
    """Return the support folder locations for ``run``.

    Project folders win over the dev-tools fallbacks when they exist; the
    output folder is ``<tests>/_output`` unless ``--output`` was given.
    """

    tests_dir = run.tests_dir(root)
    folders: dict[str, str] = {}
    for name, fallback in SUPPORT_FOLDERS.items():
        if (tests_dir / name).exists():
            folders[name] = f"{run.relative_tests_folder}/{name}"
        else:
            folders[name] = fallback
    folders["_output"] = run.output_folder or f"{run.relative_tests_folder}/_output"
    return folders


def default_config(tests_folder: str, folders: Mapping[str, str], browser: str) -> dict[str, Any]:
    """Return the default Codeception configuration tree.

    Args:
        tests_folder: Tests folder relative to ``vendor/``.
        folders: Support folder mapping from :func:`resolve_folders`.
        browser: WebDriver browser name.

    Returns:
        dict[str, Any]: A fresh tree the caller may mutate.
    """

    return {
        "paths": {
            "tests": tests_folder,
            "output": folders["_output"],
            "data": folders["_data"],
            "support": folders["_support"],
            "envs": folders["_envs"],
        },
        "actor_suffix": "Tester",
        "extensions": {
            "enabled": ["Codeception\\Extension\\RunFailed"],
            "commands": list(GENERATE_COMMANDS),
        },
        "modules": {
            "config": {
                "WPDb": {
                    "dsn": "%TEST_SITE_DB_DSN%",
                    "user": "%TEST_SITE_DB_USER%",
                    "password": "%TEST_SITE_DB_PASSWORD%",
                    "dump": "%TEST_SITE_DB_DUMP%",
                    "populator": _POPULATOR,
                    "populate": True,
                    "cleanup": False,
                    "waitlock": 10,
                    "url": "%TEST_SITE_WP_URL%",
                    "urlReplacement": False,
                    "tablePrefix": "%TEST_SITE_TABLE_PREFIX%",
                    "letAdminEmailVerification": True,
                    "letCron": True,
                },
                "WPCLI": {
                    "path": "/usr/src/app",
                    "require": "/usr/src/app/index.php",
                },
                "WPBrowser": {
                    "url": "%TEST_SITE_WP_URL%",
                    "adminUsername": "%TEST_SITE_ADMIN_USERNAME%",
                    "adminPassword": "%TEST_SITE_ADMIN_PASSWORD%",
                    "adminPath": "%TEST_SITE_WP_ADMIN_PATH%",
                    "headers": {
                        "X_TEST_REQUEST": 1,
                        "X_WPBROWSER_REQUEST": 1,
                    },
                },
                "WPWebDriver": {
                    "url": "%TEST_SITE_WP_URL%",
                    "adminUsername": "%TEST_SITE_ADMIN_USERNAME%",
                    "adminPassword": "%TEST_SITE_ADMIN_PASSWORD%",
                    "adminPath": "%TEST_SITE_WP_ADMIN_PATH%",
                    "browser": browser,
                    "host": "172.17.0.1",
                    "port": "4444",
                    "wait": 20,
                    # Chrome driver rejects an explicit window size.
                    "window_size": False,
                    "capabilities": {
                        "chromeOptions": {
                            "args": [
                                "--headless",
                                "--disable-gpu",
                                "--proxy-server='direct://'",
                                "--proxy-bypass-list=*",
                                _CHROME_USER_AGENT,
                            ],
                        },
                        "moz:firefoxOptions": {
                            "args": ["-headless"],
                            "prefs": {"general.useragent.override": _FIREFOX_USER_AGENT},
                        },
                        "EdgeOptions": {"args": [_EDGE_USER_AGENT]},
                    },
                },
                "WPFilesystem": {
                    "wpRootFolder": "%WP_ROOT_FOLDER%",
                    "plugins": ".%WP_CONTENT_FOLDER%/plugins",
                    "mu-plugins": "%WP_CONTENT_FOLDER%/mu-plugins",
                    "themes": "%WP_CONTENT_FOLDER%/themes",
                    "uploads": "%WP_CONTENT_FOLDER%/uploads",
                },
                "WPLoader": {
                    "wpRootFolder": "%WP_ROOT_FOLDER%",
                    "dbName": "%TEST_DB_NAME%",
                    "dbHost": "%TEST_DB_HOST%",
                    "dbUser": "%TEST_DB_USER%",
                    "dbPassword": "%TEST_DB_PASSWORD%",
                    "tablePrefix": "%TEST_TABLE_PREFIX%",
                    "domain": "%TEST_SITE_WP_DOMAIN%",
                    "adminEmail": "%TEST_SITE_ADMIN_EMAIL%",
                    "title": "Test",
                    "theme": "default",
                    "plugins": [],
                    "activatePlugins": [],
                    "multisite": True,
                    "configFile": "altis/dev-tools/inc/codeception/config.php",
                    "contentFolder": "content",
                    "bootstrapActions": ["bootstrap_codeception_wp"],
                },
            },
        },
        "params": ["codeception.env"],
    }


def render_env_file(db_host: str, subdomain: str) -> str:
    """Return the ``codeception.env`` parameters file contents."""

    values = {
        "TEST_SITE_DB_DSN": f"mysql:host={db_host};dbname=test",
        "TEST_SITE_DB_HOST": db_host,
        "TEST_SITE_DB_NAME": "test",
        "TEST_SITE_DB_USER": "wordpress",
        "TEST_SITE_DB_PASSWORD": "wordpress",
        "TEST_SITE_DB_DUMP": f"{DEV_TOOLS_TESTS}/_data/dump.sql",
        "TEST_SITE_TABLE_PREFIX": "wp_",
        "TEST_SITE_ADMIN_USERNAME": "admin",
        "TEST_SITE_ADMIN_PASSWORD": "password",
        "TEST_SITE_WP_ADMIN_PATH": "/wp-admin",
        "TEST_SITE_WP_URL": f"https://{subdomain}.altis.dev",
        "TEST_SITE_WP_DOMAIN": f"{subdomain}.altis.dev",
        "TEST_SITE_ADMIN_EMAIL": "admin@example.org",
        "WP_ROOT_FOLDER": "wordpress",
        "WP_CONTENT_FOLDER": "../content",
        "TEST_DB_NAME": "test2",
        "TEST_DB_HOST": db_host,
        "TEST_DB_USER": "wordpress",
        "TEST_DB_PASSWORD": "wordpress",
        "TEST_TABLE_PREFIX": "wp_",
    }
    return "\n".join(f"{key}={value}" for key, value in values.items())


def build_config(root: Path, run: CodeceptRun, overrides: ConfigNode) -> ConfigNode:
    """Return the default configuration merged with project ``overrides``."""

    defaults = default_config(run.relative_tests_folder, resolve_folders(root, run), run.browser)
    return merge_config(defaults, overrides)


def write_config_files(
    environment: LocalEnvironment,
    run: CodeceptRun,
    overrides: ConfigNode,
    subdomain: str,
) -> tuple[Path, Path]:
    """Write ``vendor/codeception.yml`` and ``vendor/codeception.env``.

    Returns:
        tuple[Path, Path]: Paths of the YAML config and env file.
    """

    root = environment.root
    config_path = root / CONFIG_PATH
    env_path = root / ENV_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(dump_yaml(build_config(root, run, overrides)), encoding="utf-8")
    env_path.write_text(render_env_file(environment.db_host, subdomain), encoding="utf-8")
    return config_path, env_path


def get_test_suites(folder: Path) -> list[str]:
    """Return the names of suites defined by ``*.suite.yml`` files in ``folder``."""

    return sorted(path.name[: -len(SUITE_SUFFIX)] for path in folder.glob(f"*{SUITE_SUFFIX}"))


def suite_has_module(suite_file: Path, module: str) -> bool:
    """Return whether ``suite_file`` enables ``module`` as a list entry.

    A missing suite file enables nothing.
    """

    if not suite_file.is_file():
        return False
    pattern = re.compile(rf"-\s+{re.escape(module)}(?![\w\\])")
    return bool(pattern.search(suite_file.read_text(encoding="utf-8")))


def get_test_suite_argument(options: Sequence[str]) -> str:
    """Return the suite selected on the command line, or ``""``.

    The suite follows the Codeception command, e.g. ``run acceptance``.
    """

    if len(options) < 2 or options[1].startswith("-"):
        return ""
    return options[1]


def add_suite_name_to_options(options: Sequence[str], suite: str) -> list[str]:
    """Return ``options`` with ``suite`` inserted after the ``run`` command.

    Without a ``run`` command, ``run <suite>`` is prepended.
    """

    updated = list(options)
    if "run" not in updated:
        return ["run", suite, *updated]
    index = updated.index("run")
    updated.insert(index + 1, suite)
    return updated


def with_config_option(options: Sequence[str]) -> list[str]:
    """Prepend ``-c vendor/codeception.yml`` unless a config file was passed."""

    if _CONFIG_OPTION.search(" ".join(options)):
        return list(options)
    return ["-c", CONFIG_PATH, *options]


def run_suites(
    environment: LocalEnvironment,
    run: CodeceptRun,
    *,
    subdomain: str,
    use_emoji: bool = True,
) -> int:
    """Run each selected suite, provisioning databases and browsers as needed.

    Each suite gets a flushed object cache, fresh test databases when it uses
    ``WPDb`` and a new Selenium container when it uses ``WPWebDriver``. Once
    every suite has run, or one of the steps raised, the databases are
    dropped, the running marker is removed and the browser is stopped.

    Returns:
        int: First non-zero Codeception exit status, else ``0``.
    """

    root = environment.root
    tests_dir = run.tests_dir(root)
    test_suite = get_test_suite_argument(run.options)
    if test_suite:
        suites = [test_suite]
    else:
        suites = get_test_suites(tests_dir)
        info(f"Detected {len(suites)} suites, ({', '.join(suites)})..", use_emoji=use_emoji)

    marker = root / RUNNING_MARKER
    marker.parent.mkdir(parents=True, exist_ok=True)
    marker.write_text("true", encoding="utf-8")

    exit_code = 0
    databases_created = False
    browser_started = False
    try:
        for suite in suites:
            info(f'Running "{suite}" test suite..', use_emoji=use_emoji)
            environment.flush_cache()

            suite_file = tests_dir / f"{suite}{SUITE_SUFFIX}"
            if suite_has_module(suite_file, DB_MODULE):
                databases_created = True
                environment.create_test_databases()
            if suite_has_module(suite_file, WEBDRIVER_MODULE):
                info(f'Starting headless "{run.browser}" browser container..', use_emoji=use_emoji)
                browser_started = True
                started = start_browser_container(subdomain, run.browser)
                if started != 0:
                    raise SubprocessFailed(["docker", "run"], started)

            options = run.options if test_suite else add_suite_name_to_options(run.options, suite)
            info("Running Codeception..", use_emoji=use_emoji)
            status = environment.exec(RUNNER, *with_config_option(options))
            if status and not exit_code:
                exit_code = status
    finally:
        _teardown(
            environment,
            marker,
            subdomain,
            databases=databases_created,
            browser=browser_started,
            use_emoji=use_emoji,
        )
    return exit_code


def _teardown(
    environment: LocalEnvironment,
    marker: Path,
    subdomain: str,
    *,
    databases: bool,
    browser: bool,
    use_emoji: bool,
) -> None:
    # Each step runs even when an earlier one raised.
    try:
        if databases:
            info("Removing test databases..", use_emoji=use_emoji)
            environment.delete_test_databases()
    finally:
        try:
            marker.unlink(missing_ok=True)
        finally:
            if browser:
                info("Removing headless browser container..", use_emoji=use_emoji)
                stop_browser_container(subdomain)


def run_codecept(
    environment: LocalEnvironment,
    run: CodeceptRun,
    overrides: ConfigNode,
    *,
    subdomain: str,
    use_emoji: bool = True,
) -> int:
    """Write the Codeception configuration and run the selected suites."""

    write_config_files(environment, run, overrides, subdomain)
    return run_suites(environment, run, subdomain=subdomain, use_emoji=use_emoji)


def is_bootstrap_request(options: Sequence[str]) -> bool:
    """Return ``True`` when the pass-through options ask for suite scaffolding."""

    return bool(options) and options[0] == BOOTSTRAP


def bootstrap_suites(root: Path, tests_folder: str, requested: str | None = None) -> tuple[Path, list[str]]:
    """Copy suite templates from the dev-tools package into ``tests_folder``.

    Args:
        root: Project root containing ``vendor/``.
        tests_folder: Destination folder relative to ``root``.
        requested: Comma separated suite names; all templates when empty or
            when the value is an option (starts with ``-``).

    Returns:
        tuple[Path, list[str]]: Destination folder and the suites created.

    Raises:
        ConfigNotFound: If no suite templates are installed.
        BootstrapError: If a suite is unknown or already exists.
    """

    template_dir = root / SUITE_TEMPLATES_DIR
    available = get_test_suites(template_dir)
    if not available:
        raise ConfigNotFound(template_dir, detail="Codeception suite templates")

    if not requested or requested.startswith("-"):
        suites = available
    else:
        suites = [name.strip() for name in requested.split(",") if name.strip()]
        invalid = [name for name in suites if name not in available]
        if invalid:
            raise BootstrapError(
                f'Invalid suites selected: "{",".join(invalid)}", '
                f'available suites are: "{",".join(available)}".',
            )

    target = root / tests_folder.rstrip("/\\")
    for suite in suites:
        if (target / suite).exists():
            raise BootstrapError(f'An existing "{suite}" suite was found, halting execution.')
    target.mkdir(parents=True, exist_ok=True)

    for suite in suites:
        shutil.copyfile(template_dir / f"{suite}{SUITE_SUFFIX}", target / f"{suite}{SUITE_SUFFIX}")
        (target / suite).mkdir(parents=True, exist_ok=True)
    return target, suites


__all__ = [
    "CONFIG_PATH",
    "ENV_PATH",
    "RUNNER",
    "RUNNING_MARKER",
    "CodeceptRun",
    "add_suite_name_to_options",
    "bootstrap_suites",
    "build_config",
    "default_config",
    "get_test_suite_argument",
    "get_test_suites",
    "is_bootstrap_request",
    "render_env_file",
    "resolve_folders",
    "run_codecept",
    "run_suites",
    "suite_has_module",
    "with_config_option",
    "write_config_files",
]
