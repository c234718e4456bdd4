"""StructuralDiffer: correlates the keys of objects and the elements of arrays.

For every correlated pair the differ recurses through the ``ValueComparator``
and assembles the resulting child nodes into a container node:

- OBJECT pairs: keys of A in A's order, then B-only keys in B's order.
- ARRAY pairs, one of three correlation modes:
    * positional (default): index ``i`` of A against index ``i`` of B.
    * key fields (``key_fields_for_array_objects``): elements are paired by
      the values of the configured fields; elements without a usable key fall
      back to positional pairing among the leftovers.
    * ignore order (``ignore_array_order``): best-match pairing on the
      structural similarity matrix, greedy or optimal.

A container whose children are all UNCHANGED collapses to a single childless
UNCHANGED node.  Otherwise it is CHANGED and keeps every child, so that each
leaf is reachable (and counted) exactly once.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from json_structural_diff.algorithm.config import ArrayMatchStrategy, DiffOptions
from json_structural_diff.algorithm.matcher import greedy_match, optimal_match
from json_structural_diff.tree.nodes import DiffKind, DiffNode
from json_structural_diff.tree.paths import ArrayKey, Path, format_path
from json_structural_diff.values import MISSING

if TYPE_CHECKING:
    from json_structural_diff.algorithm.comparator import ValueComparator
    from json_structural_diff.algorithm.similarity import StructuralSimilarity

__all__ = ["StructuralDiffer"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _KeyIndex:
    """Key-field lookup for one array.

    Attributes:
        segments: index -> path segment, for the first occurrence of each key.
        by_key:   canonical key -> index of its first occurrence.
        keys:     index -> canonical key, inverse of ``by_key``.
        loose:    indices without a usable key, in array order.
    """

    segments: dict[int, ArrayKey] = field(default_factory=dict)
    by_key: dict[tuple[str, ...], int] = field(default_factory=dict)
    keys: dict[int, tuple[str, ...]] = field(default_factory=dict)
    loose: list[int] = field(default_factory=list)


def _container_node(path: Path, a: Any, b: Any, children: list[DiffNode]) -> DiffNode:
    if all(child.kind == DiffKind.UNCHANGED for child in children):
        return DiffNode(path, DiffKind.UNCHANGED, a, b)
    return DiffNode(path, DiffKind.CHANGED, a, b, tuple(children))


def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


class StructuralDiffer:
    """Builds container nodes by correlating children of two objects or arrays.

    Args:
        comparator: The ``ValueComparator`` used to compare each correlated
            child pair (and to build ADDED/REMOVED nodes).
        options:    The comparison options.
        similarity: Scorer used to build the similarity matrix for
            ``ignore_array_order``.
    """

    def __init__(
        self,
        comparator: ValueComparator,
        options: DiffOptions,
        similarity: StructuralSimilarity,
    ) -> None:
        self._comparator = comparator
        self._options = options
        self._similarity = similarity

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def diff_objects(self, a: dict[str, Any], b: dict[str, Any], path: Path) -> DiffNode:
        compare = self._comparator.compare
        children = [
            compare(value, b.get(key, MISSING), (*path, key)) for key, value in a.items()
        ]
        children.extend(
            compare(MISSING, value, (*path, key)) for key, value in b.items() if key not in a
        )
        return _container_node(path, a, b, children)

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def diff_arrays(self, a: list[Any], b: list[Any], path: Path) -> DiffNode:
        if self._options.key_fields_for_array_objects:
            children = self._diff_by_key(a, b, path)
        elif self._options.ignore_array_order:
            children = self._diff_unordered(a, b, path)
        else:
            children = self._diff_positional(a, b, path)
        return _container_node(path, a, b, children)

    def _diff_positional(self, a: list[Any], b: list[Any], path: Path) -> list[DiffNode]:
        compare = self._comparator.compare
        return [
            compare(
                a[i] if i < len(a) else MISSING,
                b[i] if i < len(b) else MISSING,
                (*path, i),
            )
            for i in range(max(len(a), len(b)))
        ]

    def _diff_unordered(self, a: list[Any], b: list[Any], path: Path) -> list[DiffNode]:
        compare = self._comparator.compare
        similarity = self._similarity.matrix(a, b, len(path) + 1)
        threshold = self._options.similarity_threshold

        if self._options.array_match_strategy == ArrayMatchStrategy.OPTIMAL:
            pairs = optimal_match(similarity, threshold)
        else:
            pairs = greedy_match(similarity, threshold)

        logger.debug(
            "correlated %d pair(s) between %d and %d elements at %s (%s)",
            len(pairs),
            len(a),
            len(b),
            format_path(path),
            self._options.array_match_strategy,
        )

        partner = dict(pairs)
        matched_b = set(partner.values())
        children = [
            compare(value, b[partner[i]] if i in partner else MISSING, (*path, i))
            for i, value in enumerate(a)
        ]
        children.extend(
            compare(MISSING, value, (*path, j))
            for j, value in enumerate(b)
            if j not in matched_b
        )
        return children

    def _diff_by_key(self, a: list[Any], b: list[Any], path: Path) -> list[DiffNode]:
        compare = self._comparator.compare
        index_a = self._index_by_key(a, "A", path)
        index_b = self._index_by_key(b, "B", path)
        spare_b = deque(index_b.loose)

        children: list[DiffNode] = []
        for i, value in enumerate(a):
            segment = index_a.segments.get(i)
            if segment is not None:
                j = index_b.by_key.get(index_a.keys[i])
                other = b[j] if j is not None else MISSING
                children.append(compare(value, other, (*path, segment)))
            elif spare_b:
                children.append(compare(value, b[spare_b.popleft()], (*path, i)))
            else:
                children.append(compare(value, MISSING, (*path, i)))

        for j, segment in index_b.segments.items():
            if index_b.keys[j] not in index_a.by_key:
                children.append(compare(MISSING, b[j], (*path, segment)))
        children.extend(compare(MISSING, b[j], (*path, j)) for j in spare_b)
        return children

    def _index_by_key(self, items: list[Any], side: str, path: Path) -> _KeyIndex:
        """Index array elements by their key-field values.

        Elements that are not objects, lack a key field, or repeat a key
        already seen (first occurrence wins) go to ``loose``.
        """
        fields = self._options.key_fields_for_array_objects
        index = _KeyIndex()

        for idx, item in enumerate(items):
            if not isinstance(item, dict) or any(f not in item for f in fields):
                index.loose.append(idx)
                continue
            key = tuple(_canonical(item[f]) for f in fields)
            segment = ArrayKey(tuple((f, item[f]) for f in fields))
            if key in index.by_key:
                logger.warning(
                    "duplicate key %s in array %s of value %s at index %d "
                    "(first seen at index %d); correlating by position",
                    segment,
                    format_path(path),
                    side,
                    idx,
                    index.by_key[key],
                )
                index.loose.append(idx)
                continue
            index.by_key[key] = idx
            index.keys[idx] = key
            index.segments[idx] = segment

        return index
