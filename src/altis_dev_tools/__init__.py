# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Developer tools for Altis projects: test runner configuration and scaffolding."""

from __future__ import annotations

from .errors import (
    BootstrapError,
    ConfigNotFound,
    DevToolsError,
    InvalidConfigShape,
    SubprocessFailed,
    UnsupportedBrowser,
)
from .merge import is_empty, merge_config, node_shape

__all__ = [
    "BootstrapError",
    "ConfigNotFound",
    "DevToolsError",
    "InvalidConfigShape",
    "SubprocessFailed",
    "UnsupportedBrowser",
    "is_empty",
    "merge_config",
    "node_shape",
]
