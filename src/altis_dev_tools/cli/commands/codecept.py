# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command running Codeception suites or scaffolding new ones."""

from __future__ import annotations

from typing import Annotated

import typer

from ...browser import DEFAULT_BROWSER
from ...codecept import CodeceptRun, bootstrap_suites, is_bootstrap_request, run_codecept
from ...config import load_settings, project_subdomain
from ..shared import exit_on_error, get_cli_context
from ..typer_ext import SortedTyper
from .phpunit import CHASSIS_OPTION

PATH_OPTION = Annotated[
    str,
    typer.Option("--path", "-p", help="Use a custom path for the tests folder."),
]
OUTPUT_OPTION = Annotated[
    str,
    typer.Option("--output", "-o", help="Use a custom path for the output folder."),
]
BROWSER_OPTION = Annotated[
    str,
    typer.Option(
        "--browser",
        "-b",
        help='Headless browser for acceptance tests, "chrome" or "firefox".',
    ),
]


def codecept_command(
    ctx: typer.Context,
    path: PATH_OPTION = "tests",
    output: OUTPUT_OPTION = "",
    browser: BROWSER_OPTION = DEFAULT_BROWSER,
    chassis: CHASSIS_OPTION = False,
) -> None:
    """Run Codeception tests.

    Use `--` to separate arguments passed to Codeception, e.g.
    `codecept -- run acceptance`. `codecept -- bootstrap [suite,suite]`
    copies the default suites into the tests folder instead.
    """

    cli = get_cli_context(ctx)
    logger = cli.logger
    options = list(ctx.args)
    with exit_on_error(logger):
        if is_bootstrap_request(options):
            requested = options[1] if len(options) > 1 else None
            target, suites = bootstrap_suites(cli.root, path, requested)
            logger.ok(f"Created test suites ({','.join(suites)}) in {target}.")
            raise typer.Exit(code=0)

        settings = load_settings(cli.root)
        environment = cli.environment(chassis=chassis)
        run = CodeceptRun(tests_folder=path, output_folder=output, browser=browser, options=options)
        logger.debug(f"command=codecept environment={environment.name} tests={run.tests_folder}")
        status = run_codecept(
            environment,
            run,
            settings.codeception,
            subdomain=project_subdomain(cli.root),
            use_emoji=cli.emoji,
        )
    raise typer.Exit(code=status)


def register(app: SortedTyper) -> None:
    """Register the ``codecept`` command on ``app``."""

    app.command("codecept", passthrough=True)(codecept_command)


__all__ = ["codecept_command", "register"]
