"""DiffOptions and ArrayMatchStrategy for diff engine configuration.

DiffOptions is a frozen (immutable) dataclass holding every recognized
option.  All values are validated in ``__post_init__`` so that a bad
configuration fails fast with ``InvalidOptionsError`` before any comparison
begins.  ArrayMatchStrategy selects how elements are correlated when
``ignore_array_order`` is set: greedy (documented tie-breaking) or optimal
(Hungarian assignment).
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum, auto

from json_structural_diff.errors import InvalidOptionsError


class ArrayMatchStrategy(StrEnum):
    """How array elements are correlated under ``ignore_array_order``.

    - GREEDY:  Highest-similarity pairs first; ties by lowest A index,
               then lowest B index.  Not globally optimal, fully reproducible.
    - OPTIMAL: Maximum total similarity via the Hungarian algorithm.
    """

    GREEDY = auto()
    OPTIMAL = auto()


@dataclass(frozen=True, slots=True)
class DiffOptions:
    """Immutable configuration for a comparison.

    Attributes:
        ignore_array_order: Correlate array elements by best-match content
            instead of by index.  Default False.
        key_fields_for_array_objects: Field names whose values identify an
            object element across the two arrays.  Any sequence is accepted
            and stored as a tuple.  Default empty (no key correlation).
        ignore_case: Compare strings case-insensitively.  Default False.
        ignore_whitespace: Compare strings with all whitespace removed.
            Default False.
        numeric_tolerance: Numbers with ``abs(a - b) <= numeric_tolerance``
            are unchanged.  Must be finite and >= 0.  Default 0.
        max_depth: Containers at this depth or deeper are compared as opaque
            blobs.  ``None`` means unbounded.  Must be >= 0.
        array_match_strategy: Greedy or optimal correlation for
            ``ignore_array_order``.  Default GREEDY.
        similarity_threshold: Under ``ignore_array_order``, element pairs
            scoring at or below this similarity are never correlated.  Must be
            in [0, 1).  Default None: every element of the shorter array is
            correlated, however dissimilar.
    """

    ignore_array_order: bool = False
    key_fields_for_array_objects: tuple[str, ...] = ()
    ignore_case: bool = False
    ignore_whitespace: bool = False
    numeric_tolerance: float = 0.0
    max_depth: int | None = None
    array_match_strategy: ArrayMatchStrategy = ArrayMatchStrategy.GREEDY
    similarity_threshold: float | None = None

    def __post_init__(self) -> None:
        key_fields = self.key_fields_for_array_objects
        if isinstance(key_fields, str) or not isinstance(key_fields, Sequence):
            msg = (
                "key_fields_for_array_objects must be a sequence of strings, "
                f"got {key_fields!r}"
            )
            raise InvalidOptionsError(msg)
        if any(not isinstance(f, str) or not f for f in key_fields):
            msg = f"key fields must be non-empty strings, got {list(key_fields)!r}"
            raise InvalidOptionsError(msg)
        # frozen dataclass: normalize the sequence via object.__setattr__
        object.__setattr__(self, "key_fields_for_array_objects", tuple(key_fields))

        tol = self.numeric_tolerance
        if isinstance(tol, bool) or not isinstance(tol, (int, float)):
            msg = f"numeric_tolerance must be a number, got {tol!r}"
            raise InvalidOptionsError(msg)
        if not math.isfinite(tol) or tol < 0:
            msg = f"numeric_tolerance must be finite and >= 0, got {tol}"
            raise InvalidOptionsError(msg)

        depth = self.max_depth
        if depth is not None:
            if isinstance(depth, bool) or not isinstance(depth, int):
                msg = f"max_depth must be an int or None, got {depth!r}"
                raise InvalidOptionsError(msg)
            if depth < 0:
                msg = f"max_depth must be >= 0, got {depth}"
                raise InvalidOptionsError(msg)

        try:
            strategy = ArrayMatchStrategy(self.array_match_strategy)
        except ValueError:
            msg = f"unknown array_match_strategy {self.array_match_strategy!r}"
            raise InvalidOptionsError(msg) from None
        object.__setattr__(self, "array_match_strategy", strategy)

        threshold = self.similarity_threshold
        if threshold is not None:
            if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
                msg = f"similarity_threshold must be a number or None, got {threshold!r}"
                raise InvalidOptionsError(msg)
            if not 0.0 <= threshold < 1.0:
                msg = f"similarity_threshold must be in [0, 1), got {threshold}"
                raise InvalidOptionsError(msg)
