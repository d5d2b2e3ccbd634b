# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""YAML and XML writers for generated runner configuration."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml


class _LiteralBlockDumper(yaml.SafeDumper):
    """Safe dumper that renders multi-line strings as literal blocks."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_LiteralBlockDumper.add_representer(str, _represent_str)


def dump_yaml(payload: Any) -> str:
    """Return ``payload`` serialised as block-style YAML preserving key order."""

    return yaml.dump(
        payload,
        Dumper=_LiteralBlockDumper,
        default_flow_style=False,
        sort_keys=False,
        indent=4,
        allow_unicode=True,
    )


def load_yaml(path: Path) -> Any:
    """Return the parsed YAML document stored at ``path``."""

    return yaml.safe_load(path.read_text(encoding="utf-8"))


def xml_attribute(value: Any) -> str:
    """Render a configuration scalar as an XML attribute value.

    Booleans become ``true``/``false`` and ``None`` an empty string.
    """

    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def set_attributes(element: ET.Element, attributes: Mapping[str, Any]) -> None:
    """Apply ``attributes`` to ``element`` in mapping order."""

    for name, value in attributes.items():
        element.set(str(name), xml_attribute(value))


def write_xml(root: ET.Element, path: Path) -> None:
    """Write ``root`` to ``path`` with an XML declaration and indentation."""

    tree = ET.ElementTree(root)
    ET.indent(tree)
    path.parent.mkdir(parents=True, exist_ok=True)
    tree.write(path, encoding="utf-8", xml_declaration=True)


__all__ = ["dump_yaml", "load_yaml", "set_attributes", "write_xml", "xml_attribute"]
