"""Deterministic Markdown-like report for a DiffResult.

Layout::

    # JSON Comparison Report

    ## Added
    - city: added (A=<absent>, B="NYC")

    ## Changed
    - age: changed (A=30, B=31)

    ## Summary
    1 added, 1 changed (2 total changes)
    - Added: 1
    ...

Sections appear in the order Added, Removed, Changed, TypeChanged and only
when non-empty.  Within a section, lines follow tree pre-order.  Only
leaf-equivalent nodes are listed, mirroring what the statistics count.
Nothing time- or environment-dependent is written, so identical inputs
produce byte-identical reports.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from json_structural_diff.report.summary import summary_sentence
from json_structural_diff.tree.nodes import DiffKind
from json_structural_diff.values import MISSING

if TYPE_CHECKING:
    from json_structural_diff.result import DiffResult

__all__ = ["ABSENT_MARKER", "MAX_VALUE_LENGTH", "render_report", "render_value"]

MAX_VALUE_LENGTH = 200
ABSENT_MARKER = "<absent>"
_ELLIPSIS = "..."

_SECTIONS: tuple[tuple[DiffKind, str], ...] = (
    (DiffKind.ADDED, "Added"),
    (DiffKind.REMOVED, "Removed"),
    (DiffKind.CHANGED, "Changed"),
    (DiffKind.TYPE_CHANGED, "TypeChanged"),
)


def render_value(value: Any, limit: int = MAX_VALUE_LENGTH) -> str:
    """Render a value as compact JSON, cut to ``limit`` characters.

    ``MISSING`` renders as ``<absent>``.  Longer renderings keep their first
    ``limit`` characters followed by ``...``.
    """
    if value is MISSING:
        return ABSENT_MARKER
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    if len(text) > limit:
        return text[:limit] + _ELLIPSIS
    return text


def render_report(result: DiffResult) -> str:
    """Render the full report text for ``result``."""
    stats = result.statistics
    grouped: dict[DiffKind, list[str]] = {kind: [] for kind, _ in _SECTIONS}
    for node in result.tree.leaves():
        if node.kind in grouped:
            grouped[node.kind].append(
                f"- {node.path_text}: {node.kind} "
                f"(A={render_value(node.value_a)}, B={render_value(node.value_b)})"
            )

    lines = ["# JSON Comparison Report", ""]
    for kind, title in _SECTIONS:
        if grouped[kind]:
            lines.extend([f"## {title}", *grouped[kind], ""])

    lines.extend(
        [
            "## Summary",
            summary_sentence(stats),
            f"- Added: {stats.added}",
            f"- Removed: {stats.removed}",
            f"- Changed: {stats.changed}",
            f"- Type changed: {stats.type_changed}",
            f"- Unchanged: {stats.unchanged}",
            f"- Total changes: {stats.total_changes}",
            f"- Max depth reached: {stats.max_depth_reached}",
        ]
    )
    return "\n".join(lines) + "\n"
