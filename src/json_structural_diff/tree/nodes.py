"""DiffNode dataclass and DiffKind StrEnum for the Diff Tree.

The Diff Tree mirrors the shape of the two compared values, annotated with a
per-node change classification.  It is sized by change volume rather than
input size: an unchanged container collapses to a single childless node.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from json_structural_diff.tree.paths import Path, format_path
from json_structural_diff.values import MISSING


class DiffKind(StrEnum):
    """Classification of a node in the Diff Tree.

    - UNCHANGED    -> "unchanged"    : equal on both sides (under the options)
    - ADDED        -> "added"        : present only in B
    - REMOVED      -> "removed"      : present only in A
    - CHANGED      -> "changed"      : same type, different content
    - TYPE_CHANGED -> "type-changed" : different JSON types
    """

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"
    TYPE_CHANGED = "type-changed"


@dataclass(frozen=True, slots=True)
class DiffNode:
    """A node in the Diff Tree.

    Attributes:
        path:     Key/index chain from the root (see ``tree.paths``).
        kind:     How the two sides relate at this path.
        value_a:  The value from A, or ``MISSING`` for ADDED nodes.
        value_b:  The value from B, or ``MISSING`` for REMOVED nodes.
        children: Recursive comparison of keys/indices.  Only CHANGED
                  containers carry children; every other node is a leaf.

    The values are references into the caller's inputs and are never mutated.
    """

    path: Path
    kind: DiffKind
    value_a: Any = MISSING
    value_b: Any = MISSING
    children: tuple[DiffNode, ...] = ()

    def __post_init__(self) -> None:
        if self.kind == DiffKind.ADDED:
            ok = self.value_a is MISSING and self.value_b is not MISSING
        elif self.kind == DiffKind.REMOVED:
            ok = self.value_a is not MISSING and self.value_b is MISSING
        else:
            ok = self.value_a is not MISSING and self.value_b is not MISSING
        if not ok:
            msg = f"{self.kind} node at {format_path(self.path)} has inconsistent values"
            raise ValueError(msg)
        if self.children and self.kind != DiffKind.CHANGED:
            msg = f"only changed nodes may carry children, got {self.kind}"
            raise ValueError(msg)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def depth(self) -> int:
        return len(self.path)

    @property
    def path_text(self) -> str:
        return format_path(self.path)

    def walk(self) -> Iterator[DiffNode]:
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def leaves(self) -> Iterator[DiffNode]:
        """Yield the childless nodes in pre-order."""
        return (node for node in self.walk() if node.is_leaf)
