"""Tests for the JSON value model: type tags, MISSING and equality."""

from __future__ import annotations

import copy
from typing import ClassVar

import pytest

from json_structural_diff.algorithm.config import DiffOptions
from json_structural_diff.values import (
    MISSING,
    JsonType,
    is_container,
    normalize_string,
    scalars_equal,
    type_of,
    values_equal,
)


class TestMissing:
    def test_singleton(self) -> None:
        assert type(MISSING)() is MISSING

    def test_repr(self) -> None:
        assert repr(MISSING) == "MISSING"

    def test_falsy(self) -> None:
        assert not MISSING

    def test_survives_copy(self) -> None:
        assert copy.copy(MISSING) is MISSING
        assert copy.deepcopy({"v": MISSING})["v"] is MISSING

    def test_distinct_from_none(self) -> None:
        assert MISSING is not None


class TestTypeOf:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, JsonType.NULL),
            (True, JsonType.BOOLEAN),
            (False, JsonType.BOOLEAN),
            (0, JsonType.NUMBER),
            (-1.5, JsonType.NUMBER),
            ("", JsonType.STRING),
            ({}, JsonType.OBJECT),
            ([], JsonType.ARRAY),
        ],
    )
    def test_tags(self, value: object, expected: JsonType) -> None:
        assert type_of(value) is expected

    def test_unsupported(self) -> None:
        with pytest.raises(TypeError):
            type_of(MISSING)

    def test_is_container(self) -> None:
        assert is_container({})
        assert is_container([])
        assert not is_container("[]")


class TestNormalizeString:
    def test_no_options(self) -> None:
        assert normalize_string(" A b ", DiffOptions()) == " A b "

    def test_whitespace_removed(self) -> None:
        assert normalize_string(" a\tb\nc ", DiffOptions(ignore_whitespace=True)) == "abc"

    def test_casefold(self) -> None:
        assert normalize_string("Straße", DiffOptions(ignore_case=True)) == "strasse"


class TestValuesEqual:
    def test_nested_equal(self) -> None:
        opts = DiffOptions()
        assert values_equal({"a": [1, {"b": None}]}, {"a": [1, {"b": None}]}, opts)

    def test_key_sets_differ(self) -> None:
        assert not values_equal({"a": 1}, {"a": 1, "b": 2}, DiffOptions())

    def test_bool_is_not_number(self) -> None:
        assert not values_equal(True, 1, DiffOptions())
        assert not values_equal([0], [False], DiffOptions())

    def test_arrays_ordered_by_default(self) -> None:
        assert not values_equal([1, 2], [2, 1], DiffOptions())

    def test_arrays_as_multisets_when_order_ignored(self) -> None:
        opts = DiffOptions(ignore_array_order=True)
        assert values_equal([1, 2, 2], [2, 1, 2], opts)
        assert not values_equal([1, 1, 2], [1, 2, 2], opts)

    def test_tolerance_applies_inside_containers(self) -> None:
        opts = DiffOptions(numeric_tolerance=0.01)
        assert values_equal({"t": [1.0]}, {"t": [1.005]}, opts)


class TestScalarsEqualWithTolerance:
    OPTIONS: ClassVar[DiffOptions] = DiffOptions(numeric_tolerance=0.5)

    def test_huge_int_against_float(self) -> None:
        assert not scalars_equal(10**400, 1.0, JsonType.NUMBER, self.OPTIONS)
        assert not scalars_equal(1.0, 10**400, JsonType.NUMBER, self.OPTIONS)

    def test_huge_ints_compared_exactly(self) -> None:
        assert scalars_equal(10**400, 10**400, JsonType.NUMBER, self.OPTIONS)
        assert not scalars_equal(10**400, 10**400 + 1, JsonType.NUMBER, self.OPTIONS)

    def test_huge_int_against_infinity(self) -> None:
        assert not scalars_equal(10**400, float("inf"), JsonType.NUMBER, self.OPTIONS)

    def test_huge_int_within_large_tolerance(self) -> None:
        opts = DiffOptions(numeric_tolerance=1e308)
        assert scalars_equal(2 * 10**308, 1.5e308, JsonType.NUMBER, opts)
