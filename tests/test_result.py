"""Tests for the result dataclasses."""

from __future__ import annotations

import dataclasses

import pytest

from json_structural_diff import (
    DiffStatistics,
    DiffSummary,
    StructureReport,
    ValidationResult,
    compare_json_values,
)
from json_structural_diff.tree.nodes import DiffKind


class TestDiffStatistics:
    def test_defaults(self) -> None:
        stats = DiffStatistics()
        assert stats.total_changes == 0
        assert stats.changes_by_depth == {}
        assert stats.node_count == 0

    def test_count(self) -> None:
        stats = DiffStatistics(type_changed=2, total_changes=2, unchanged=5)
        assert stats.count(DiffKind.TYPE_CHANGED) == 2
        assert stats.count(DiffKind.UNCHANGED) == 5
        assert stats.node_count == 7

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DiffStatistics().added = 1  # type: ignore[misc]

    def test_breakdowns_are_read_only(self) -> None:
        stats = compare_json_values({"a": 1, "b": "x"}, {"a": 2, "b": "y"}).statistics
        assert stats.changes_by_depth == {1: 2}
        with pytest.raises(TypeError):
            stats.changes_by_depth[1] = 0  # type: ignore[index]
        with pytest.raises(TypeError):
            stats.changes_by_type["number"] = 0  # type: ignore[index]

    def test_caller_dict_is_copied(self) -> None:
        by_depth = {1: 1}
        stats = DiffStatistics(changed=1, total_changes=1, changes_by_depth=by_depth)
        by_depth[2] = 5
        assert stats.changes_by_depth == {1: 1}

    def test_hashable(self) -> None:
        first = compare_json_values({"a": 1}, {"a": 2}).statistics
        second = compare_json_values({"b": 1}, {"b": 3}).statistics
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1


class TestDiffResult:
    def test_change_paths_pre_order(self) -> None:
        result = compare_json_values(
            {"a": {"x": 1, "y": 2}, "b": [1]},
            {"a": {"x": 0, "y": 2, "z": 3}, "b": []},
        )
        assert result.change_paths() == ["a.x", "a.z", "b[0]"]

    def test_report_is_text(self) -> None:
        result = compare_json_values(1, 1)
        assert "No differences found" in result.report()

    def test_equal_results_compare_equal(self) -> None:
        assert compare_json_values({"a": 1}, {"a": 2}) == compare_json_values(
            {"a": 1}, {"a": 2}
        )


class TestValueObjects:
    def test_diff_summary_fields(self) -> None:
        summary = DiffSummary(summary="x", has_changes=True, change_count=3)
        assert summary.change_count == 3

    def test_validation_result_defaults(self) -> None:
        result = ValidationResult(is_valid=True)
        assert result.parsed is None
        assert result.error is None
        assert result.line is None
        assert result.column is None

    def test_structure_report(self) -> None:
        report = StructureReport(
            is_valid=False,
            errors=["too deep"],
            warnings=[],
            node_count=3,
            max_depth_found=2,
        )
        assert not report.is_valid
        assert report.errors == ["too deep"]
