# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command linting project documentation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...docslint import check_docs_structure, run_markdownlint, run_vale
from ..shared import CLIError, exit_on_error, get_cli_context
from ..typer_ext import SortedTyper

PATH_ARGUMENT = Annotated[
    Path,
    typer.Argument(help="Base path holding docs folders, relative to the project root."),
]
STRUCTURE_ONLY_OPTION = Annotated[
    bool,
    typer.Option("--structure-only", help="Only check the docs folder layout."),
]


def lint_docs_command(
    ctx: typer.Context,
    path: PATH_ARGUMENT = Path("."),
    structure_only: STRUCTURE_ONLY_OPTION = False,
) -> None:
    """Check docs layout, then run markdownlint-cli2 and Vale."""

    cli = get_cli_context(ctx)
    logger = cli.logger
    base = path if path.is_absolute() else cli.root / path
    with exit_on_error(logger):
        problems = check_docs_structure(base)
        for problem in problems:
            logger.fail(problem)
        if problems:
            raise CLIError(f"Found {len(problems)} documentation layout problem(s).")
        logger.ok("Documentation layout is valid.")
        if structure_only:
            raise typer.Exit(code=0)
        markdownlint_status = run_markdownlint(base)
        vale_status = run_vale(base)
    status = markdownlint_status or vale_status
    raise typer.Exit(code=status)


def register(app: SortedTyper) -> None:
    """Register the ``lint-docs`` command on ``app``."""

    app.command("lint-docs")(lint_docs_command)


__all__ = ["lint_docs_command", "register"]
