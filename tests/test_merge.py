# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for configuration tree merging."""

from __future__ import annotations

import copy

import pytest

from altis_dev_tools.merge import NodeShape, is_empty, merge_config, node_shape

DEFAULTS = {
    "paths": {"tests": "../tests", "output": "../tests/_output"},
    "actor_suffix": "Tester",
    "extensions": {"enabled": ["Codeception\\Extension\\RunFailed"]},
    "params": ["codeception.env"],
}


def test_empty_override_returns_defaults() -> None:
    assert merge_config(DEFAULTS, {}) == DEFAULTS


def test_empty_defaults_return_override() -> None:
    assert merge_config({}, DEFAULTS) == DEFAULTS


def test_nested_override_keeps_sibling_keys() -> None:
    assert merge_config({"a": {"b": 1, "c": 2}}, {"a": {"b": 99}}) == {"a": {"b": 99, "c": 2}}


def test_mapping_override_promotes_scalar() -> None:
    assert merge_config({"a": "x"}, {"a": {"b": 1}}) == {"a": {"b": 1}}


def test_scalar_override_replaces_mapping() -> None:
    assert merge_config({"a": {"b": 1}}, {"a": "x"}) == {"a": "x"}


def test_nested_sequence_override_replaces_default_list() -> None:
    merged = merge_config(DEFAULTS, {"extensions": {"enabled": ["Custom\\Extension"]}})
    assert merged["extensions"]["enabled"] == ["Custom\\Extension"]
    assert merged["paths"] == DEFAULTS["paths"]


def test_new_keys_are_added() -> None:
    merged = merge_config({"a": 1}, {"b": {"c": [1, 2]}})
    assert merged == {"a": 1, "b": {"c": [1, 2]}}
    assert list(merged) == ["a", "b"]


def test_sequence_override_appends_and_strips_empty_values() -> None:
    merged = merge_config({"a": 1, "b": 2}, [3, 0, "", 4, 4])

    assert merged == {"a": 1, "b": 2, 0: 3, 3: 4}
    assert "a" in merged and "b" in merged
    assert list(merged.values()) == [1, 2, 3, 4]


def test_sequence_override_onto_list_returns_list() -> None:
    assert merge_config(["a", "b"], ["b", "c", None]) == ["a", "b", "c"]


def test_sequence_override_renumbers_positional_defaults() -> None:
    merged = merge_config({"name": "suite", 0: "x", 5: "y"}, ["z", "x"])
    assert merged == {"name": "suite", 0: "x", 1: "y", 2: "z"}


def test_mapping_override_keeps_sequence_entries() -> None:
    assert merge_config({"a": [1, 2]}, {"a": {"b": 1}}) == {"a": {0: 1, 1: 2, "b": 1}}


def test_sequence_override_drops_empty_defaults() -> None:
    merged = merge_config({"a": None, "b": "keep", "c": False}, ["keep", "new"])
    assert merged == {"b": "keep", 1: "new"}
    assert list(merged.values()) == ["keep", "new"]


def test_integer_keyed_mapping_is_sequence_shaped() -> None:
    assert merge_config(["x"], {0: "y", 1: "x"}) == ["x", "y"]


def test_mixed_keys_merge_as_mapping() -> None:
    assert merge_config({"a": 1}, {"b": 2, 0: 3}) == {"a": 1, "b": 2, 0: 3}


def test_empty_sequence_override_keeps_defaults() -> None:
    assert merge_config({"a": 1}, []) == {"a": 1}


def test_merge_is_repeatable() -> None:
    override = {"paths": {"output": "/tmp/out"}, "actor_suffix": "Guy"}
    first = merge_config(DEFAULTS, override)
    second = merge_config(DEFAULTS, override)
    assert first == second
    assert merge_config(first, override) == first


def test_inputs_are_not_mutated_and_result_is_detached() -> None:
    defaults = copy.deepcopy(DEFAULTS)
    override = {"paths": {"output": "/tmp/out"}, "params": ["other.env"]}
    override_snapshot = copy.deepcopy(override)

    merged = merge_config(defaults, override)
    merged["paths"]["tests"] = "changed"
    merged["extensions"]["enabled"].append("Another")
    merged["params"].append("more")

    assert defaults == DEFAULTS
    assert override == override_snapshot


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, True),
        (False, True),
        (0, True),
        (0.0, True),
        ("", True),
        ("0", True),
        ([], True),
        ({}, True),
        (True, False),
        (1, False),
        (" ", False),
        ("false", False),
        ([0], False),
    ],
)
def test_is_empty(value: object, expected: bool) -> None:
    assert is_empty(value) is expected


@pytest.mark.parametrize(
    ("node", "shape"),
    [
        ({"a": 1}, NodeShape.MAPPING),
        ({}, NodeShape.MAPPING),
        ({0: "a", 1: "b"}, NodeShape.SEQUENCE),
        ({0: "a", "b": 1}, NodeShape.MAPPING),
        ({True: "a"}, NodeShape.MAPPING),
        ([1, 2], NodeShape.SEQUENCE),
        ((1,), NodeShape.SEQUENCE),
        ("text", NodeShape.SCALAR),
        (None, NodeShape.SCALAR),
    ],
)
def test_node_shape(node: object, shape: NodeShape) -> None:
    assert node_shape(node) is shape
