"""JSON value model: type tags, the MISSING sentinel and option-aware equality.

Parsed JSON arrives as plain Python objects (dict, list, str, int, float,
bool, None).  This module tags them with a ``JsonType`` so every comparator
branch can dispatch exhaustively, and provides the leaf/structural equality
rules shared by the comparator, the similarity scorer and opaque
comparisons past ``max_depth``.
"""

from __future__ import annotations

import math
import re
from enum import StrEnum
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from json_structural_diff.algorithm.config import DiffOptions

__all__ = [
    "MISSING",
    "JsonType",
    "JsonValue",
    "is_container",
    "normalize_string",
    "scalars_equal",
    "type_of",
    "values_equal",
]

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None

_WHITESPACE = re.compile(r"\s+")


class _Missing:
    """Marker for a value that is absent on one side of a comparison."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Missing:
        return self


MISSING: Final = _Missing()


class JsonType(StrEnum):
    """The six JSON value types."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"


def type_of(value: Any) -> JsonType:
    """Return the JSON type tag of a parsed value.

    Raises:
        TypeError: If ``value`` is not a JSON value.
    """
    # bool MUST be checked before int: isinstance(True, int) is True
    if isinstance(value, bool):
        return JsonType.BOOLEAN
    if value is None:
        return JsonType.NULL
    if isinstance(value, (int, float)):
        return JsonType.NUMBER
    if isinstance(value, str):
        return JsonType.STRING
    if isinstance(value, dict):
        return JsonType.OBJECT
    if isinstance(value, list):
        return JsonType.ARRAY
    raise TypeError(f"Unsupported JSON value type: {type(value)!r}")


def is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def normalize_string(text: str, options: DiffOptions) -> str:
    """Apply the ignore_whitespace / ignore_case folding to a string."""
    if options.ignore_whitespace:
        text = _WHITESPACE.sub("", text)
    if options.ignore_case:
        text = text.casefold()
    return text


def scalars_equal(a: Any, b: Any, kind: JsonType, options: DiffOptions) -> bool:
    """Compare two scalars already known to share the JSON type ``kind``."""
    if kind == JsonType.NULL:
        return True
    if kind == JsonType.BOOLEAN:
        return bool(a is b or a == b)
    if kind == JsonType.NUMBER:
        if options.numeric_tolerance == 0:
            return bool(a == b)
        return _within_tolerance(a, b, options.numeric_tolerance)
    if kind == JsonType.STRING:
        return normalize_string(a, options) == normalize_string(b, options)
    raise TypeError(f"scalars_equal() called with container type {kind}")


def _within_tolerance(a: float, b: float, tolerance: float) -> bool:
    try:
        return abs(a - b) <= tolerance
    except OverflowError:
        # an int beyond float range met a float; compare exactly
        if any(isinstance(x, float) and not math.isfinite(x) for x in (a, b)):
            return False
        return abs(Fraction(a) - Fraction(b)) <= Fraction(tolerance)


def values_equal(a: Any, b: Any, options: DiffOptions) -> bool:
    """Structural equality honouring the leaf-level options.

    Objects are equal when they hold the same keys with equal values (key
    order is irrelevant).  Arrays compare positionally, or as multisets when
    ``ignore_array_order`` or key-field correlation is configured.
    """
    kind_a = type_of(a)
    if kind_a != type_of(b):
        return False

    if kind_a == JsonType.OBJECT:
        if a.keys() != b.keys():
            return False
        return all(values_equal(a[k], b[k], options) for k in a)

    if kind_a == JsonType.ARRAY:
        if len(a) != len(b):
            return False
        if options.ignore_array_order or options.key_fields_for_array_objects:
            return _multiset_equal(a, b, options)
        return all(values_equal(x, y, options) for x, y in zip(a, b, strict=True))

    return scalars_equal(a, b, kind_a, options)


def _multiset_equal(a: list[Any], b: list[Any], options: DiffOptions) -> bool:
    unused = list(range(len(b)))
    for item in a:
        for pos, j in enumerate(unused):
            if values_equal(item, b[j], options):
                del unused[pos]
                break
        else:
            return False
    return True
