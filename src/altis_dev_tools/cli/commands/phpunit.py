# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command running PHPUnit with a generated configuration."""

from __future__ import annotations

from typing import Annotated

import typer

from ...config import load_settings
from ...phpunit import run_phpunit
from ..shared import exit_on_error, get_cli_context
from ..typer_ext import SortedTyper

CHASSIS_OPTION = Annotated[
    bool,
    typer.Option("--chassis", help="Run commands in the Local Chassis environment."),
]


def phpunit_command(ctx: typer.Context, chassis: CHASSIS_OPTION = False) -> None:
    """Run PHPUnit integration tests.

    Use `--` to separate arguments passed to PHPUnit. A trailing test file or
    directory replaces the configured test paths.
    """

    cli = get_cli_context(ctx)
    logger = cli.logger
    options = list(ctx.args)
    with exit_on_error(logger):
        settings = load_settings(cli.root)
        environment = cli.environment(chassis=chassis)
        logger.debug(f"command=phpunit environment={environment.name} options={' '.join(options) or '-'}")
        status = run_phpunit(environment, settings.phpunit, options)
    raise typer.Exit(code=status)


def register(app: SortedTyper) -> None:
    """Register the ``phpunit`` command on ``app``."""

    app.command("phpunit", passthrough=True)(phpunit_command)


__all__ = ["CHASSIS_OPTION", "phpunit_command", "register"]
