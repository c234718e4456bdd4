"""Tree subpackage for the Diff Tree primitives.

Re-exports the public API for the tree module:
- DiffNode: frozen dataclass for one node of the Diff Tree
- DiffKind: StrEnum of the five change kinds
- ArrayKey: path segment for key-correlated array elements
- format_path: renders a path tuple as ``users[0].name``
"""

from json_structural_diff.tree.nodes import DiffKind, DiffNode
from json_structural_diff.tree.paths import ArrayKey, Path, PathSegment, format_path

__all__ = ["ArrayKey", "DiffKind", "DiffNode", "Path", "PathSegment", "format_path"]
