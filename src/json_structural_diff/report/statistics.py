"""Statistics builder: one depth-first walk of a Diff Tree."""

from __future__ import annotations

from collections import Counter

from json_structural_diff.result import DiffStatistics
from json_structural_diff.tree.nodes import DiffKind, DiffNode
from json_structural_diff.values import MISSING, type_of

__all__ = ["compute_statistics"]


def compute_statistics(tree: DiffNode) -> DiffStatistics:
    """Count the leaf-equivalent nodes of ``tree`` by kind, depth and type.

    A CHANGED container is not counted itself; its descendants are.  Every
    childless node (including collapsed UNCHANGED containers) counts once.

    Args:
        tree: Root of the Diff Tree.

    Returns:
        A frozen ``DiffStatistics``.
    """
    kinds: Counter[DiffKind] = Counter()
    by_depth: Counter[int] = Counter()
    by_type: Counter[str] = Counter()
    max_depth = 0

    for node in tree.walk():
        max_depth = max(max_depth, node.depth)
        if not node.is_leaf:
            continue
        kinds[node.kind] += 1
        if node.kind != DiffKind.UNCHANGED:
            by_depth[node.depth] += 1
            typed = node.value_b if node.value_b is not MISSING else node.value_a
            by_type[str(type_of(typed))] += 1

    total = (
        kinds[DiffKind.ADDED]
        + kinds[DiffKind.REMOVED]
        + kinds[DiffKind.CHANGED]
        + kinds[DiffKind.TYPE_CHANGED]
    )
    return DiffStatistics(
        added=kinds[DiffKind.ADDED],
        removed=kinds[DiffKind.REMOVED],
        changed=kinds[DiffKind.CHANGED],
        type_changed=kinds[DiffKind.TYPE_CHANGED],
        unchanged=kinds[DiffKind.UNCHANGED],
        total_changes=total,
        max_depth_reached=max_depth,
        changes_by_depth=dict(sorted(by_depth.items())),
        changes_by_type=dict(sorted(by_type.items())),
    )
