# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project manifest loading and dev-tools settings models."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigNotFound, InvalidConfigShape

COMPOSER_JSON: Final[str] = "composer.json"
DEV_TOOLS_MODULE: Final[str] = "dev-tools"
LOCAL_SERVER_MODULE: Final[str] = "local-server"

_SUBDOMAIN_STRIP = re.compile(r"[^A-Za-z0-9\-_]")

AttributeValue = str | int | float | bool


def _as_list(value: Any) -> Any:
    """Wrap a bare scalar in a list, leaving other values to validation."""

    if value is None:
        return []
    if isinstance(value, (str, int, float)):
        return [value]
    if isinstance(value, Mapping):
        return list(value.values())
    return value


def _as_mapping(value: Any) -> Any:
    """Treat a missing or empty section (``null`` or ``[]``) as an empty object."""

    if value is None or (isinstance(value, list) and not value):
        return {}
    return value


class PhpUnitSettings(BaseModel):
    """Settings read from the ``phpunit`` key of the dev-tools module config."""

    model_config = ConfigDict(extra="ignore")

    directories: list[str] = Field(default_factory=list)
    excludes: list[str] = Field(default_factory=list)
    attributes: dict[str, AttributeValue] = Field(default_factory=dict)
    extensions: list[str] = Field(default_factory=list)

    @field_validator("directories", "excludes", "extensions", mode="before")
    @classmethod
    def _coerce_sequences(cls, value: Any) -> Any:
        return _as_list(value)

    @field_validator("attributes", mode="before")
    @classmethod
    def _coerce_attributes(cls, value: Any) -> Any:
        return _as_mapping(value)


class DevToolsSettings(BaseModel):
    """Validated ``extra.altis.modules.dev-tools`` section of ``composer.json``."""

    model_config = ConfigDict(extra="ignore")

    phpunit: PhpUnitSettings = Field(default_factory=PhpUnitSettings)
    codeception: dict[str, Any] | list[Any] = Field(default_factory=dict)

    @field_validator("phpunit", "codeception", mode="before")
    @classmethod
    def _coerce_sections(cls, value: Any) -> Any:
        return _as_mapping(value)


def load_composer_json(root: Path) -> dict[str, Any]:
    """Return the parsed ``composer.json`` found in ``root``.

    Args:
        root: Project root directory.

    Returns:
        dict[str, Any]: Decoded manifest payload.

    Raises:
        ConfigNotFound: If the manifest does not exist.
        InvalidConfigShape: If the manifest is not a JSON object.
    """

    manifest = root / COMPOSER_JSON
    if not manifest.is_file():
        raise ConfigNotFound(manifest, detail="project manifest")
    try:
        payload = json.loads(manifest.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidConfigShape(f"{manifest} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise InvalidConfigShape(f"{manifest} must contain a JSON object")
    return payload


def get_module_config(root: Path, module: str = DEV_TOOLS_MODULE) -> dict[str, Any]:
    """Return ``extra.altis.modules.<module>`` from the project manifest.

    Missing sections resolve to an empty mapping.
    """

    node: Any = load_composer_json(root)
    for key in ("extra", "altis", "modules", module):
        if not isinstance(node, Mapping):
            return {}
        node = node.get(key)
    if node is None or node == []:
        return {}
    if not isinstance(node, Mapping):
        raise InvalidConfigShape(f"extra.altis.modules.{module} must be an object")
    return dict(node)


def load_settings(root: Path) -> DevToolsSettings:
    """Return validated dev-tools settings for the project at ``root``.

    Raises:
        ConfigNotFound: If ``composer.json`` is missing.
        InvalidConfigShape: If the dev-tools section fails validation.
    """

    raw = get_module_config(root)
    try:
        return DevToolsSettings.model_validate(raw)
    except ValidationError as exc:
        raise InvalidConfigShape(f"Invalid dev-tools configuration: {exc}") from exc


def project_subdomain(root: Path) -> str:
    """Return the local development subdomain for the project at ``root``.

    Uses the local-server module's ``name`` when configured, otherwise the
    project directory name, with every character outside ``[A-Za-z0-9_-]``
    removed.
    """

    name = get_module_config(root, LOCAL_SERVER_MODULE).get("name")
    if not isinstance(name, str) or not name:
        name = root.resolve().name
    return _SUBDOMAIN_STRIP.sub("", name)


__all__ = [
    "COMPOSER_JSON",
    "DevToolsSettings",
    "PhpUnitSettings",
    "get_module_config",
    "load_composer_json",
    "load_settings",
    "project_subdomain",
]
