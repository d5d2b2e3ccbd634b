# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .commands import register_commands
from .shared import CLIContext
from .typer_ext import create_typer

app = create_typer(
    name="dev-tools",
    help="Developer tools: zero-config PHPUnit and Codeception runs, project scaffolding.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Project root containing composer.json."),
    ] = Path("."),
    chassis: Annotated[
        bool,
        typer.Option("--chassis", help="Run commands in the Local Chassis environment."),
    ] = False,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji output.")] = True,
    debug: Annotated[bool, typer.Option("--debug", help="Show debug output.")] = False,
) -> None:
    """Store global options for the selected command."""

    ctx.obj = CLIContext(root=root.resolve(), chassis=chassis, emoji=emoji, debug=debug)


register_commands(app)

__all__ = ["app", "main"]
