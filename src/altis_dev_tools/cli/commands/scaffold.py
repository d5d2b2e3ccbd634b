# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command copying boilerplate files into the project."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

import typer

from ...scaffold import scaffold
from ..shared import exit_on_error, get_cli_context
from ..typer_ext import SortedTyper


class ScaffoldKind(StrEnum):
    """Template sets available to the scaffold command."""

    DEVCONTAINER = "devcontainer"
    DOCSLINT = "docslint"


KIND_ARGUMENT = Annotated[ScaffoldKind, typer.Argument(help="Template set to copy.")]
FORCE_OPTION = Annotated[
    bool,
    typer.Option("--force", "-f", help="Overwrite files that already exist."),
]


def scaffold_command(ctx: typer.Context, kind: KIND_ARGUMENT, force: FORCE_OPTION = False) -> None:
    """Copy devcontainer or docs lint configuration into the project."""

    cli = get_cli_context(ctx)
    logger = cli.logger
    with exit_on_error(logger):
        result = scaffold(cli.root, kind.value, force=force)
    for path in result.created:
        logger.ok(f"Created {path.relative_to(cli.root)}")
    for path in result.skipped:
        logger.warn(f"Skipped existing {path.relative_to(cli.root)} (use --force to overwrite)")


def register(app: SortedTyper) -> None:
    """Register the ``scaffold`` command on ``app``."""

    app.command("scaffold")(scaffold_command)


__all__ = ["ScaffoldKind", "register", "scaffold_command"]
