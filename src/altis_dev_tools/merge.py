# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Deep merging of default configuration trees with project overrides.

Configuration nodes are plain Python values: scalars (``str``, ``int``,
``float``, ``bool``, ``None``), sequences (``list``/``tuple``) and mappings
(``dict``). Branch selection is structural: a mapping whose keys are all
integers is sequence-shaped, any mapping holding at least one non-integer key
is mapping-shaped.

Two merge paths exist:

* mapping-shaped overrides merge key by key. Nested mappings recurse; every
  other value (scalars and sequences alike) replaces the default outright.
* sequence-shaped overrides append to the default instead. String keys of the
  default keep their entries, positional entries of both nodes are renumbered
  in order, then empty values (see :func:`is_empty`) are dropped and duplicate
  values removed keeping the first occurrence. The result is a mapping when
  the default is mapping-shaped and a list otherwise.

Empty values are dropped from the default as well as from the override on the
append path, while the key-by-key path never filters or de-duplicates. A
mapping override on top of a sequence keeps the sequence entries under their
positions, next to the new keys.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import Any, Final, TypeAlias

ConfigNode: TypeAlias = Any
ConfigMapping: TypeAlias = dict[Any, ConfigNode]

_EMPTY_STRINGS: Final[frozenset[str]] = frozenset({"", "0"})


class NodeShape(StrEnum):
    """Structural classification of a configuration node."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def node_shape(node: ConfigNode) -> NodeShape:
    """Return the structural shape of ``node``.

    Args:
        node: Configuration value to classify.

    Returns:
        NodeShape: ``MAPPING`` when ``node`` is a mapping with at least one
        non-integer key (or no keys at all), ``SEQUENCE`` for lists, tuples and
        integer-keyed mappings, ``SCALAR`` otherwise.
    """

    if isinstance(node, Mapping):
        if node and all(_is_positional_key(key) for key in node):
            return NodeShape.SEQUENCE
        return NodeShape.MAPPING
    if isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray)):
        return NodeShape.SEQUENCE
    return NodeShape.SCALAR


def is_empty(value: ConfigNode) -> bool:
    """Return ``True`` when ``value`` counts as empty on the append path.

    ``None``, ``False``, numeric zero, the strings ``""`` and ``"0"`` and empty
    containers are empty. Everything else, including ``True`` and
    whitespace-only strings, is kept.
    """

    if value is None or value is False:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, str):
        return value in _EMPTY_STRINGS
    if isinstance(value, (Mapping, Sequence)):
        return len(value) == 0
    return False


def merge_config(default: ConfigNode, override: ConfigNode) -> ConfigNode:
    """Return ``default`` with ``override`` merged on top.

    Neither argument is modified; the returned tree shares no containers with
    either input, so a module-level default tree can be reused across calls.

    Args:
        default: Baseline configuration tree.
        override: Project supplied configuration tree.

    Returns:
        ConfigNode: A mapping for mapping-shaped overrides, the appended
        entries for sequence-shaped overrides (a mapping when the default is
        mapping-shaped, a list otherwise), or the override itself when it is a
        scalar.
    """

    return _merge(copy.deepcopy(default), copy.deepcopy(override))


def _merge(default: ConfigNode, override: ConfigNode) -> ConfigNode:
    shape = node_shape(override)
    if shape is NodeShape.SCALAR:
        return override
    if shape is NodeShape.SEQUENCE:
        if not override:
            return default
        return _append_unique(default, override)

    result: ConfigMapping = dict(_node_items(default)) if node_shape(default) is not NodeShape.SCALAR else {}
    for key, value in override.items():
        if node_shape(value) is NodeShape.MAPPING:
            result[key] = _merge(result.get(key), value)
        else:
            result[key] = value
    return result


def _append_unique(default: ConfigNode, override: ConfigNode) -> ConfigMapping | list[ConfigNode]:
    """Append override values to the default, dropping empty entries and later duplicates."""

    entries: list[tuple[Any, ConfigNode]] = []
    position = 0
    for key, value in (*_node_items(default), *_node_items(override)):
        if _is_positional_key(key):
            entries.append((position, value))
            position += 1
        else:
            entries.append((key, value))

    kept: list[tuple[Any, ConfigNode]] = []
    seen: list[ConfigNode] = []
    for key, value in entries:
        if is_empty(value):
            continue
        # Plain equality: 1, 1.0 and True collide while 1 and "1" do not.
        if value in seen:
            continue
        seen.append(value)
        kept.append((key, value))

    if node_shape(default) is NodeShape.MAPPING:
        return dict(kept)
    return [value for _, value in kept]


def _node_items(node: ConfigNode) -> list[tuple[Any, ConfigNode]]:
    """Return ``(key, value)`` pairs; scalars and sequences use positional keys."""

    if isinstance(node, Mapping):
        return list(node.items())
    if node_shape(node) is NodeShape.SEQUENCE:
        return list(enumerate(node))
    return [(0, node)]


def _is_positional_key(key: object) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


__all__ = [
    "ConfigMapping",
    "ConfigNode",
    "NodeShape",
    "is_empty",
    "merge_config",
    "node_shape",
]
