"""Result dataclasses returned by the public API.

- ``DiffStatistics``:   counters from one walk of the Diff Tree.
- ``DiffResult``:       tree + statistics + ``has_changes`` for one comparison.
- ``DiffSummary``:      one-sentence human summary of a ``DiffResult``.
- ``ValidationResult``: outcome of parsing JSON text, never an exception.
- ``StructureReport``:  outcome of checking a value against size/depth limits.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from json_structural_diff.tree.nodes import DiffKind, DiffNode

__all__ = [
    "DiffResult",
    "DiffStatistics",
    "DiffSummary",
    "StructureReport",
    "ValidationResult",
]


@dataclass(frozen=True, slots=True)
class DiffStatistics:
    """Aggregate counters over the leaf-equivalent nodes of a Diff Tree.

    Only childless nodes are counted (leaves, collapsed unchanged containers,
    added/removed/type-changed subtrees, opaque containers), so a CHANGED
    parent and its CHANGED child are never double-counted.

    Attributes:
        added:             ADDED leaves.
        removed:           REMOVED leaves.
        changed:           CHANGED leaves.
        type_changed:      TYPE_CHANGED leaves.
        unchanged:         UNCHANGED leaves.
        total_changes:     ``added + removed + changed + type_changed``.
        max_depth_reached: Greatest path length of any node in the tree.
        changes_by_depth:  Path length -> number of non-unchanged leaves.
        changes_by_type:   JSON type name -> number of non-unchanged leaves,
                           typed by the B value (the A value for removals).

    Both breakdowns are stored as read-only mappings and take no part in
    ``hash()``.
    """

    added: int = 0
    removed: int = 0
    changed: int = 0
    type_changed: int = 0
    unchanged: int = 0
    total_changes: int = 0
    max_depth_reached: int = 0
    changes_by_depth: Mapping[int, int] = field(default_factory=dict, hash=False)
    changes_by_type: Mapping[str, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # frozen dataclass: wrap copies via object.__setattr__
        for name in ("changes_by_depth", "changes_by_type"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    @property
    def node_count(self) -> int:
        """Number of leaf-equivalent nodes counted."""
        return self.total_changes + self.unchanged

    def count(self, kind: DiffKind) -> int:
        """Return the counter for ``kind``."""
        return {
            DiffKind.ADDED: self.added,
            DiffKind.REMOVED: self.removed,
            DiffKind.CHANGED: self.changed,
            DiffKind.TYPE_CHANGED: self.type_changed,
            DiffKind.UNCHANGED: self.unchanged,
        }[kind]


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Outcome of one ``compare_json_values`` call.

    Attributes:
        tree:        Root ``DiffNode`` (path ``()``).
        statistics:  Counters computed eagerly from ``tree``.
        has_changes: ``statistics.total_changes > 0``.
    """

    tree: DiffNode
    statistics: DiffStatistics
    has_changes: bool

    def report(self) -> str:
        """Render the textual report for this result (built on demand)."""
        from json_structural_diff.report.markdown import render_report

        return render_report(self)

    def change_paths(self) -> list[str]:
        """Rendered paths of every changed leaf, in tree pre-order."""
        return [
            node.path_text
            for node in self.tree.leaves()
            if node.kind != DiffKind.UNCHANGED
        ]


@dataclass(frozen=True, slots=True)
class DiffSummary:
    """Single-sentence summary of a comparison.

    Attributes:
        summary:      e.g. ``"3 added, 1 removed, 2 changed (6 total changes)"``
                      or ``"No differences found"``.
        has_changes:  Mirrors ``DiffResult.has_changes``.
        change_count: Mirrors ``DiffStatistics.total_changes``.
    """

    summary: str
    has_changes: bool
    change_count: int


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of ``validate_json_text``.

    Attributes:
        is_valid: True when the text parsed.
        parsed:   The parsed JSON value (meaningful only when ``is_valid``;
                  note that the JSON text ``null`` parses to None).
        error:    Human-readable error message when not valid.
        line:     1-based line of a syntax error, when known.
        column:   1-based column of a syntax error, when known.
    """

    is_valid: bool
    parsed: Any = None
    error: str | None = None
    line: int | None = None
    column: int | None = None


@dataclass(frozen=True, slots=True)
class StructureReport:
    """Outcome of ``validate_json_structure``.

    Attributes:
        is_valid:        True when no limit was exceeded.
        errors:          One message per exceeded limit.
        warnings:        Messages for values close to a limit.
        node_count:      Number of values visited.
        max_depth_found: Deepest nesting level visited (root is 0).
    """

    is_valid: bool
    errors: list[str]
    warnings: list[str]
    node_count: int
    max_depth_found: int
