"""Diff-tree paths: segment types and their dotted textual rendering.

A path is a tuple of segments from the root:

- ``str``:      an object key, rendered ``.key`` (no dot at the start).
- ``int``:      an array index, rendered ``[3]``.
- ``ArrayKey``: an array element correlated by key fields, rendered
  ``[id=1]`` or ``[id=1,region=eu]``.

The root path ``()`` renders as ``root``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

__all__ = ["ROOT_LABEL", "ArrayKey", "Path", "PathSegment", "format_path"]

ROOT_LABEL = "root"


@dataclass(frozen=True, slots=True)
class ArrayKey:
    """Path segment naming an array element by its key-field values.

    Attributes:
        fields: ``(field_name, value)`` pairs in configured key-field order.
    """

    fields: tuple[tuple[str, Any], ...]

    def __str__(self) -> str:
        parts = [f"{name}={_render_key_value(value)}" for name, value in self.fields]
        return "[" + ",".join(parts) + "]"


PathSegment = str | int | ArrayKey
Path = tuple[PathSegment, ...]


def _render_key_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def format_path(path: Path) -> str:
    """Render a path as a dotted string, e.g. ``users[0].address.city``."""
    if not path:
        return ROOT_LABEL
    out: list[str] = []
    for segment in path:
        if isinstance(segment, ArrayKey):
            out.append(str(segment))
        # bool is excluded so a stray True never renders as an index
        elif isinstance(segment, int) and not isinstance(segment, bool):
            out.append(f"[{segment}]")
        else:
            out.append(f".{segment}" if out else str(segment))
    return "".join(out)
