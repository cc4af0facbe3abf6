"""Tests for the structural equality engine."""

from typing import Any

import pytest

from testgroup.equality import UNDEFINED, describe_value, matches, type_of


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ([1, 2], "array"),
        ((1, 2), "array"),
        (None, "null"),
        ({"a": 1}, "object"),
        (True, "boolean"),
        (5, "number"),
        (2.5, "number"),
        ("5", "string"),
        (UNDEFINED, "undefined"),
        (b"raw", "bytes"),
    ],
)
def test_type_of(value: Any, expected: str) -> None:
    """Classifies values into the comparison taxonomy."""
    assert type_of(value) == expected


def test_primitive_equal() -> None:
    """Matches identical primitives."""
    assert matches(5, 5)
    assert matches("a", "a")
    assert matches(None, None)


def test_primitive_type_mismatch() -> None:
    """Rejects values of a different category even when they look alike."""
    assert not matches(5, "5")
    assert not matches(1, True)
    assert not matches(None, UNDEFINED)


def test_array_positional_and_recursive() -> None:
    """Compares arrays element by element, recursing into objects."""
    assert matches([1, {"a": 1}], [1, {"a": 1}])
    assert not matches([1, {"a": 2}], [1, {"a": 1}])
    assert not matches([1, 2], [2, 1])


def test_array_length_mismatch() -> None:
    """Treats differing lengths as a mismatch."""
    assert not matches([1, 2], [1, 2, 3])
    assert not matches([1, 2, 3], [1, 2])


def test_array_of_booleans() -> None:
    """Compares boolean elements by value."""
    assert matches([True, False], [True, False])
    assert not matches([True], [False])


def test_object_key_count_gate() -> None:
    """Fails objects with a different number of keys regardless of names."""
    assert not matches({"x": True, "y": {"z": False}}, {"x": True})
    assert not matches({"x": 1}, {"x": 1, "y": 2})


def test_object_same_count_different_keys() -> None:
    """Compares expected keys against missing actual keys as undefined."""
    assert not matches({"x": 1}, {"z": 1})


def test_object_comparison_is_asymmetric() -> None:
    """Walks only the expected value's keys, so argument order matters."""
    left = {"x": 1, "y": 2}
    right = {"x": 1, "z": 5}

    assert matches(left, right, ["y"])
    assert not matches(right, left, ["y"])


def test_nested_child_strict_inequality() -> None:
    """Uses a type-strict check when a child is not structural."""
    assert not matches({"x": 1}, {"x": True})
    assert not matches({"x": {"a": 1}}, {"x": "a"})
    assert matches({"x": "a", "y": None}, {"x": "a", "y": None})


def test_ignore_leaf_path() -> None:
    """Skips the mismatched leaf named by an ignore path."""
    assert matches({"x": {"y": {"z": 1}}}, {"x": {"y": {"z": 2}}}, ["x.y.z"])


def test_ignore_subtree_path() -> None:
    """Skips the whole subtree under an ignored path."""
    assert matches({"x": {"y": {"z": 1}}}, {"x": {"y": {"z": 2}}}, ["x.y"])


def test_ignore_path_is_exact() -> None:
    """Matches ignore paths by exact dotted string only."""
    assert not matches({"x": {"y": {"z": 1}}}, {"x": {"y": {"z": 2}}}, ["y.z"])
    assert not matches({"x": {"y": {"z": 1}}}, {"x": {"y": {"z": 2}}}, ["x.*"])


def test_ignore_path_does_not_bypass_key_count() -> None:
    """Keeps the key-count gate of the parent of an ignored path."""
    assert not matches({"x": {"y": 1, "z": 2}}, {"x": {"y": 1}}, ["x.z"])


def test_ignore_path_through_array_index() -> None:
    """Addresses array elements by index in ignore paths."""
    expected = {"items": [{"id": 1, "at": "now"}]}
    actual = {"items": [{"id": 1, "at": "later"}]}

    assert matches(expected, actual, ["items.0.at"])
    assert not matches(expected, actual, ["items.1.at"])


def test_describe_value() -> None:
    """Renders structural values as JSON and others as text."""
    assert describe_value({"a": [1, None]}) == '{"a": [1, null]}'
    assert describe_value(None) == "null"
    assert describe_value(True) == "true"
    assert describe_value(5) == "5"
    assert describe_value(UNDEFINED) == "undefined"


def test_describe_value_non_string_keys() -> None:
    """Falls back to repr for objects JSON cannot encode."""
    assert describe_value({(0, 0): 1}) == "{(0, 0): 1}"
