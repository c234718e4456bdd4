"""ParseCache: LRU-backed cache of ``validate_json_text`` results.

Editors re-submit the same text over and over (every keystroke on the other
side triggers a new comparison).  ``ParseCache`` keeps the most recent
validation results keyed by the exact text, so unchanged inputs are not
parsed again.  LRU eviction occurs silently when ``max_size`` is exceeded.

Each ``ParseCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state, so two separate instances never interfere with
each other.

The cached ``parsed`` values are shared between hits.  The diff engine never
mutates its inputs, but callers that do must copy first.

Example::

    from json_structural_diff.cache import ParseCache

    cache = ParseCache(max_size=64)
    first = cache.validate('{"a": 1}')    # parsed
    again = cache.validate('{"a": 1}')    # served from memory
    assert first is again
"""

from __future__ import annotations

from cachetools import LRUCache

from json_structural_diff.result import ValidationResult
from json_structural_diff.validation import validate_json_text

__all__ = ["ParseCache"]


class ParseCache:
    """LRU-backed memo around ``validate_json_text``.

    Args:
        max_size: Maximum number of texts to hold in memory.  Defaults to 64.
            When exceeded, the least-recently-used entry is silently evicted.
    """

    def __init__(self, max_size: int = 64) -> None:
        self._cache: LRUCache[str, ValidationResult] = LRUCache(maxsize=max_size)
        self._hits = 0
        self._misses = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def validate(self, text: str) -> ValidationResult:
        """Return the validation result for ``text``, parsing only on a miss.

        Non-str input is validated (and rejected) without being cached.
        """
        if not isinstance(text, str):
            return validate_json_text(text)

        cached = self._cache.get(text)
        if cached is not None:
            self._hits += 1
            return cached

        self._misses += 1
        result = validate_json_text(text)
        self._cache[text] = result
        return result

    def clear(self) -> None:
        """Drop every cached entry (counters are kept)."""
        self._cache.clear()
