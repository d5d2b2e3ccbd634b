# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command installing CI configuration from the dev-tools package."""

from __future__ import annotations

import typer

from ...ci import DOCS_URL, install_ci_files
from ..shared import exit_on_error, get_cli_context
from ..typer_ext import SortedTyper


def install_ci_command(ctx: typer.Context) -> None:
    """Install Travis CI configs and pin them to the installed dev-tools version."""

    cli = get_cli_context(ctx)
    logger = cli.logger
    with exit_on_error(logger):
        result = install_ci_files(cli.root)
    for path in result.created:
        logger.ok(f"Created {path.relative_to(cli.root)}")
    if result.mismatch:
        logger.warn(
            "The file .travis.yml does not match that required by Altis. "
            f"See the file at: {result.template}. For more information follow this guide: {DOCS_URL}",
        )
        return
    logger.ok(f"Pinned .travis.yml to altis/dev-tools {result.ref}")


def register(app: SortedTyper) -> None:
    """Register the ``install-ci`` command on ``app``."""

    app.command("install-ci")(install_ci_command)


__all__ = ["install_ci_command", "register"]
