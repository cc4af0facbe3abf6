"""Structural comparison of expected and actual values.

Values are classified into a small taxonomy (see :func:`type_of`) and compared
by category. Object comparison is gated on the number of keys and then walks
only the keys of the expected value, so ``matches(a, b)`` and ``matches(b, a)``
can disagree.
"""

import json
from collections.abc import Collection, Mapping, Sequence
from typing import Any, Final, Literal

type ValueType = (
    Literal["array", "null", "object", "boolean", "number", "string", "undefined"]
    | str
)

STRUCTURAL_TYPES: Final = frozenset({"array", "object"})


class _Undefined:
    """Placeholder for a key missing from the actual value."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED: Final = _Undefined()


def type_of(value: Any) -> ValueType:
    """Classify a value as array, null, object or one of the primitive kinds."""
    if isinstance(value, list | tuple):
        return "array"
    if value is None:
        return "null"
    if isinstance(value, Mapping):
        return "object"
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is UNDEFINED:
        return "undefined"
    return type(value).__name__.lower()


def is_structural(value: Any) -> bool:
    """Return whether the value is an array or an object."""
    return type_of(value) in STRUCTURAL_TYPES


def matches(
    expected: Any,
    actual: Any,
    ignore_paths: Collection[str] = (),
    path_prefix: Sequence[str] = (),
) -> bool:
    """Compare two values structurally.

    Args:
        expected: Reference value; for objects, only its keys are walked
        actual: Value under test
        ignore_paths: Dotted paths (e.g. ``"x.y.z"``) excluded from comparison
        path_prefix: Keys leading from the comparison root to these values

    Returns:
        True when the values match

    """
    kind = type_of(expected)
    if kind != type_of(actual):
        return False

    if kind == "array":
        return _array_matches(expected, actual, ignore_paths, path_prefix)
    if kind == "object":
        return _object_matches(expected, actual, ignore_paths, path_prefix)
    return bool(expected == actual)


def _array_matches(
    expected: Sequence[Any],
    actual: Sequence[Any],
    ignore_paths: Collection[str],
    path_prefix: Sequence[str],
) -> bool:
    if len(expected) != len(actual):
        return False

    return all(
        _child_matches(left, right, ignore_paths, [*path_prefix, str(index)])
        for index, (left, right) in enumerate(zip(expected, actual, strict=True))
    )


def _object_matches(
    expected: Mapping[Any, Any],
    actual: Mapping[Any, Any],
    ignore_paths: Collection[str],
    path_prefix: Sequence[str],
) -> bool:
    # Key count only, not key names.
    if len(expected) != len(actual):
        return False

    for key, value in expected.items():
        path = [*path_prefix, str(key)]
        if not _child_matches(value, actual.get(key, UNDEFINED), ignore_paths, path):
            return False
    return True


def _child_matches(
    expected: Any,
    actual: Any,
    ignore_paths: Collection[str],
    path: Sequence[str],
) -> bool:
    if ignore_paths and ".".join(path) in ignore_paths:
        return True
    if is_structural(expected) and is_structural(actual):
        return matches(expected, actual, ignore_paths, path)
    return type_of(expected) == type_of(actual) and bool(expected == actual)


def describe_value(value: Any) -> str:
    """Render a value for a failure message."""
    if is_structural(value):
        # JSON object keys must be primitives; default= does not apply to keys
        try:
            return json.dumps(value, default=repr)
        except (TypeError, ValueError):
            return repr(value)
    if value is None or isinstance(value, bool):
        return json.dumps(value)
    return str(value)
