# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command registry."""

from __future__ import annotations

from ..typer_ext import SortedTyper
from . import ci, codecept, docs, phpunit, scaffold

__all__ = ["register_commands"]


def register_commands(app: SortedTyper) -> None:
    """Register every dev-tools command on ``app``."""

    phpunit.register(app)
    codecept.register(app)
    scaffold.register(app)
    docs.register(app)
    ci.register(app)
