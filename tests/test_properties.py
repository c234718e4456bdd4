"""Behavioural properties and end-to-end scenarios of the diff engine.

Each test class states one property that must hold for every comparison,
exercised across a shared corpus of JSON values and option sets.
"""

from __future__ import annotations

import copy
from typing import Any, ClassVar

import pytest

from json_structural_diff import (
    ArrayMatchStrategy,
    DiffKind,
    DiffOptions,
    compare_json_values,
    generate_diff_report,
    validate_json_text,
)

CORPUS: list[Any] = [
    None,
    True,
    0,
    -3.25,
    "",
    "hello world",
    [],
    {},
    [1, "two", None, [3.0, {"four": 4}]],
    {"name": "John", "age": 30, "tags": ["a", "b"], "address": {"city": "NYC"}},
    [{"id": 1, "v": "x"}, {"id": 2, "v": "y"}, {"id": 2, "v": "dup"}, {"v": "nokey"}],
    {"matrix": [[1, 2], [3, 4]], "empty": {"list": [], "obj": {}}},
]

OPTION_SETS: list[DiffOptions] = [
    DiffOptions(),
    DiffOptions(ignore_array_order=True),
    DiffOptions(ignore_array_order=True, array_match_strategy=ArrayMatchStrategy.OPTIMAL),
    DiffOptions(key_fields_for_array_objects=("id",)),
    DiffOptions(ignore_case=True, ignore_whitespace=True, numeric_tolerance=0.1),
    DiffOptions(max_depth=1),
]

PAIRS: list[tuple[Any, Any]] = [
    ({"a": 1, "b": [1, 2]}, {"a": 2, "c": None, "b": [2]}),
    ([1, "x", {"k": True}], ["x", {"k": False}, 1, 9]),
    ({"users": [{"id": 1, "n": "a"}]}, {"users": [{"id": 1, "n": "b"}, {"id": 3}]}),
    ({"x": {"y": {"z": 1}}}, {"x": {"y": {"z": "1"}}}),
]


class TestReflexivity:
    @pytest.mark.parametrize("value", CORPUS)
    @pytest.mark.parametrize("options", OPTION_SETS)
    def test_value_equals_itself(self, value: Any, options: DiffOptions) -> None:
        result = compare_json_values(value, value, options)
        assert result.has_changes is False
        assert result.statistics.total_changes == 0

    @pytest.mark.parametrize("value", CORPUS)
    def test_value_equals_its_copy(self, value: Any) -> None:
        result = compare_json_values(value, copy.deepcopy(value))
        assert result.tree.kind == DiffKind.UNCHANGED
        assert result.tree.is_leaf


class TestAntisymmetry:
    def test_removed_becomes_added(self) -> None:
        a = {"keep": 1, "only_a": {"x": 1}}
        b = {"keep": 1}
        forward = compare_json_values(a, b)
        backward = compare_json_values(b, a)
        assert [(n.path_text, n.kind) for n in forward.tree.leaves()][-1] == (
            "only_a",
            DiffKind.REMOVED,
        )
        assert [(n.path_text, n.kind) for n in backward.tree.leaves()][-1] == (
            "only_a",
            DiffKind.ADDED,
        )

    @pytest.mark.parametrize(("a", "b"), PAIRS)
    def test_counts_mirror(self, a: Any, b: Any) -> None:
        forward = compare_json_values(a, b).statistics
        backward = compare_json_values(b, a).statistics
        assert forward.added == backward.removed
        assert forward.removed == backward.added
        assert forward.changed == backward.changed
        assert forward.type_changed == backward.type_changed


class TestTypeChangePrecedence:
    def test_single_type_changed_node(self) -> None:
        result = compare_json_values({"x": 1}, {"x": "1"})
        leaves = [n for n in result.tree.leaves() if n.kind != DiffKind.UNCHANGED]
        assert [(n.path_text, n.kind) for n in leaves] == [("x", DiffKind.TYPE_CHANGED)]
        assert result.statistics.changed == 0


class TestNumericTolerance:
    OPTIONS: ClassVar[DiffOptions] = DiffOptions(numeric_tolerance=0.5)

    def test_within_tolerance(self) -> None:
        assert compare_json_values(1.0, 1.4, self.OPTIONS).tree.kind == DiffKind.UNCHANGED

    def test_outside_tolerance(self) -> None:
        assert compare_json_values(1.0, 1.6, self.OPTIONS).tree.kind == DiffKind.CHANGED


class TestStatisticsConsistency:
    @pytest.mark.parametrize(("a", "b"), PAIRS)
    @pytest.mark.parametrize(
        "options",
        [DiffOptions(), DiffOptions(key_fields_for_array_objects=("id",))],
    )
    def test_leaves_are_distinct_paths(
        self, a: Any, b: Any, options: DiffOptions
    ) -> None:
        result = compare_json_values(a, b, options)
        stats = result.statistics
        leaf_paths = [n.path for n in result.tree.leaves()]
        assert len(set(leaf_paths)) == len(leaf_paths)
        assert (
            stats.added + stats.removed + stats.changed + stats.type_changed + stats.unchanged
            == len(leaf_paths)
        )

    @pytest.mark.parametrize(("a", "b"), PAIRS)
    @pytest.mark.parametrize("options", OPTION_SETS)
    def test_total_is_sum_of_change_kinds(
        self, a: Any, b: Any, options: DiffOptions
    ) -> None:
        result = compare_json_values(a, b, options)
        stats = result.statistics
        assert stats.total_changes == (
            stats.added + stats.removed + stats.changed + stats.type_changed
        )
        assert result.has_changes == (stats.total_changes > 0)
        assert sum(stats.changes_by_depth.values()) == stats.total_changes
        assert sum(stats.changes_by_type.values()) == stats.total_changes


class TestIdempotentReporting:
    @pytest.mark.parametrize(("a", "b"), PAIRS)
    @pytest.mark.parametrize("options", OPTION_SETS)
    def test_byte_identical(self, a: Any, b: Any, options: DiffOptions) -> None:
        assert generate_diff_report(a, b, options) == generate_diff_report(a, b, options)


class TestScenarios:
    def test_changed_and_added(self) -> None:
        result = compare_json_values(
            {"name": "John", "age": 30},
            {"name": "John", "age": 31, "city": "NYC"},
        )
        changes = [
            (n.path_text, n.kind, n.value_a, n.value_b)
            for n in result.tree.leaves()
            if n.kind != DiffKind.UNCHANGED
        ]
        assert changes[0] == ("age", DiffKind.CHANGED, 30, 31)
        assert changes[1][:2] == ("city", DiffKind.ADDED)
        assert changes[1][3] == "NYC"
        assert result.has_changes is True
        assert result.statistics.total_changes == 2

    def test_equal_arrays(self) -> None:
        assert compare_json_values([1, 2, 3], [1, 2, 3]).has_changes is False

    def test_key_correlated_change(self) -> None:
        result = compare_json_values(
            [{"id": 1, "v": "x"}],
            [{"id": 1, "v": "y"}],
            DiffOptions(key_fields_for_array_objects=("id",)),
        )
        assert result.change_paths() == ["[id=1].v"]
        assert result.statistics.added == 0
        assert result.statistics.removed == 0
        assert result.statistics.changed == 1

    def test_malformed_input(self) -> None:
        result = validate_json_text('{"a":}')
        assert result.is_valid is False
        assert isinstance(result.error, str)
        assert result.error
