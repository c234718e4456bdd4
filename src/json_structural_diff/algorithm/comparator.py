"""ValueComparator: classifies the relationship between two values at a path.

This is the leaf layer of the diff engine.  It decides between ADDED,
REMOVED, TYPE_CHANGED, UNCHANGED and CHANGED for scalars, compares
containers past ``max_depth`` as opaque blobs, and hands every other
object/array pair to the ``StructuralDiffer``, which recurses back here for
each correlated child.

``check_json_value`` is the input guard run once per side before a
comparison: it rejects non-JSON Python values and cyclic containers, so the
recursive comparison that follows is guaranteed to terminate.  The guard
itself walks with an explicit stack, so any nesting depth the parser accepts
can be checked.
"""

from __future__ import annotations

from typing import Any

from json_structural_diff.algorithm.config import DiffOptions
from json_structural_diff.algorithm.differ import StructuralDiffer
from json_structural_diff.algorithm.similarity import StructuralSimilarity
from json_structural_diff.errors import CircularReferenceError, InvalidComparisonError
from json_structural_diff.tree.nodes import DiffKind, DiffNode
from json_structural_diff.tree.paths import Path, format_path
from json_structural_diff.values import (
    MISSING,
    JsonType,
    scalars_equal,
    type_of,
    values_equal,
)

__all__ = ["ValueComparator", "check_json_value"]


def check_json_value(value: Any, side: str) -> None:
    """Verify ``value`` is an acyclic JSON value.

    Args:
        value: The parsed (or programmatically built) input.
        side:  ``"A"`` or ``"B"``, used in error messages.

    Raises:
        CircularReferenceError: If a container holds one of its ancestors.
        TypeError: If any node is not a JSON type or an object key is not a str.
    """
    ancestors: set[int] = set()
    # a None path marks the exit from the container whose id is the first item
    stack: list[tuple[Any, Path | None]] = [(value, ())]
    while stack:
        current, path = stack.pop()
        if path is None:
            ancestors.discard(current)
            continue

        kind = type_of(current)
        if kind not in (JsonType.OBJECT, JsonType.ARRAY):
            continue

        marker = id(current)
        if marker in ancestors:
            raise CircularReferenceError(format_path(path), side)
        ancestors.add(marker)
        stack.append((marker, None))

        children: list[tuple[Any, Path | None]] = []
        if kind == JsonType.OBJECT:
            for key, child in current.items():
                if not isinstance(key, str):
                    msg = f"object keys must be str, got {key!r} at {format_path(path)}"
                    raise TypeError(msg)
                children.append((child, (*path, key)))
        else:
            children.extend((child, (*path, idx)) for idx, child in enumerate(current))
        # reversed so children are visited in document order
        stack.extend(reversed(children))


class ValueComparator:
    """Compares two values (either may be ``MISSING``) and builds a DiffNode.

    One instance serves one comparison: it owns the ``StructuralDiffer`` and
    the similarity scorer, whose memo is only valid while the inputs are
    unchanged.  Inputs must already have passed ``check_json_value``.

    Example::

        cmp = ValueComparator(DiffOptions(numeric_tolerance=0.5))
        cmp.compare(1.0, 1.4).kind    # DiffKind.UNCHANGED
    """

    def __init__(self, options: DiffOptions | None = None) -> None:
        self._options = options if options is not None else DiffOptions()
        self._similarity = StructuralSimilarity(self._options)
        self._differ = StructuralDiffer(self, self._options, self._similarity)

    @property
    def options(self) -> DiffOptions:
        return self._options

    def compare(self, a: Any, b: Any, path: Path = ()) -> DiffNode:
        """Classify ``a`` against ``b`` at ``path``.

        Raises:
            InvalidComparisonError: If both values are ``MISSING``.
        """
        if a is MISSING and b is MISSING:
            msg = f"both values are absent at {format_path(path)}"
            raise InvalidComparisonError(msg)
        if a is MISSING:
            return DiffNode(path, DiffKind.ADDED, value_b=b)
        if b is MISSING:
            return DiffNode(path, DiffKind.REMOVED, value_a=a)

        kind = type_of(a)
        if kind != type_of(b):
            return DiffNode(path, DiffKind.TYPE_CHANGED, a, b)

        if kind not in (JsonType.OBJECT, JsonType.ARRAY):
            same = scalars_equal(a, b, kind, self._options)
            return DiffNode(path, DiffKind.UNCHANGED if same else DiffKind.CHANGED, a, b)

        max_depth = self._options.max_depth
        if max_depth is not None and len(path) >= max_depth:
            # Opaque: no children below the depth bound
            same = values_equal(a, b, self._options)
            return DiffNode(path, DiffKind.UNCHANGED if same else DiffKind.CHANGED, a, b)

        if kind == JsonType.OBJECT:
            return self._differ.diff_objects(a, b, path)
        return self._differ.diff_arrays(a, b, path)
