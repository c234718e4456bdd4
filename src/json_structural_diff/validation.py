"""Text boundary: turns editor text into JSON values for the engine.

- ``parse_json_text``: strict parse, raises ``JsonSyntaxError``.
- ``validate_json_text``: same parse, but always returns a ``ValidationResult``.
- ``validate_json_structure``: checks a parsed value against size/depth limits.
- ``format_json_for_comparison``: pretty-printed, option-normalized view of a
  JSON text, showing what the comparison will actually treat as equal.

Malformed text never reaches the comparator: callers parse here first.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, NoReturn

from json_structural_diff.algorithm.config import DiffOptions
from json_structural_diff.errors import JsonSyntaxError
from json_structural_diff.result import StructureReport, ValidationResult
from json_structural_diff.tree.paths import Path, format_path
from json_structural_diff.values import JsonType, normalize_string, type_of

__all__ = [
    "StructureLimits",
    "format_json_for_comparison",
    "parse_json_text",
    "validate_json_structure",
    "validate_json_text",
]

# Share of a limit above which a warning is issued
_WARNING_RATIO = 0.8


def _reject_constant(name: str) -> NoReturn:
    raise JsonSyntaxError(f"{name} is not valid JSON")


def parse_json_text(text: str) -> Any:
    """Parse JSON text with the standard-library parser.

    ``NaN``, ``Infinity`` and ``-Infinity`` are rejected: they are not JSON.

    Raises:
        JsonSyntaxError: If ``text`` is not a str, is blank, or is not valid
            JSON.  ``line``/``column`` are set when the parser reports them.
    """
    if not isinstance(text, str):
        raise JsonSyntaxError(f"expected JSON text as str, got {type(text).__name__}")
    if not text.strip():
        raise JsonSyntaxError("JSON text is empty")
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise JsonSyntaxError(exc.msg, exc.lineno, exc.colno) from exc
    except RecursionError as exc:
        raise JsonSyntaxError("JSON text is nested too deeply to parse") from exc


def validate_json_text(text: str) -> ValidationResult:
    """Parse ``text`` and report the outcome as data; never raises.

    Example::

        validate_json_text('{"a":}')
        # ValidationResult(is_valid=False, error='Expecting value (line 1, column 6)', ...)
    """
    try:
        parsed = parse_json_text(text)
    except JsonSyntaxError as exc:
        return ValidationResult(
            is_valid=False,
            error=str(exc),
            line=exc.line,
            column=exc.column,
        )
    return ValidationResult(is_valid=True, parsed=parsed)


# ----------------------------------------------------------------------
# Structure limits
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StructureLimits:
    """Size and nesting limits for ``validate_json_structure``.

    Attributes:
        max_depth:         Deepest nesting level allowed (root is 0).
        max_nodes:         Total number of values allowed.
        max_string_length: Longest string allowed.
        max_array_length:  Longest array allowed.
        max_object_keys:   Most keys allowed in one object.
    """

    max_depth: int = 50
    max_nodes: int = 10_000
    max_string_length: int = 1_000_000
    max_array_length: int = 10_000
    max_object_keys: int = 1_000

    def __post_init__(self) -> None:
        for name in (
            "max_depth",
            "max_nodes",
            "max_string_length",
            "max_array_length",
            "max_object_keys",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                msg = f"{name} must be a non-negative int, got {value!r}"
                raise ValueError(msg)


def validate_json_structure(
    value: Any, limits: StructureLimits | None = None
) -> StructureReport:
    """Check a parsed value against ``limits``.

    Traversal stops descending below ``max_depth`` and stops entirely once
    ``max_nodes`` is exceeded.  Values above 80% of the node or depth limit
    produce warnings.
    """
    limits = limits if limits is not None else StructureLimits()
    errors: list[str] = []
    warnings: list[str] = []
    node_count = 0
    max_depth_found = 0

    stack: list[tuple[Any, int, Path]] = [(value, 0, ())]
    while stack:
        current, depth, path = stack.pop()
        node_count += 1
        max_depth_found = max(max_depth_found, depth)
        where = format_path(path)

        if depth > limits.max_depth:
            errors.append(
                f"Maximum nesting depth ({limits.max_depth}) exceeded at path: {where}"
            )
            continue
        if node_count > limits.max_nodes:
            errors.append(
                f"Maximum node count ({limits.max_nodes}) exceeded. "
                f"Current count: {node_count}"
            )
            break

        kind = type_of(current)
        if kind == JsonType.STRING:
            if len(current) > limits.max_string_length:
                errors.append(
                    f"String too long at path {where}: {len(current)} characters "
                    f"(max: {limits.max_string_length})"
                )
        elif kind == JsonType.ARRAY:
            if len(current) > limits.max_array_length:
                errors.append(
                    f"Array too large at path {where}: {len(current)} items "
                    f"(max: {limits.max_array_length})"
                )
            stack.extend(
                (item, depth + 1, (*path, idx))
                for idx, item in reversed(list(enumerate(current)))
            )
        elif kind == JsonType.OBJECT:
            if len(current) > limits.max_object_keys:
                errors.append(
                    f"Object has too many keys at path {where}: {len(current)} keys "
                    f"(max: {limits.max_object_keys})"
                )
            stack.extend(
                (item, depth + 1, (*path, key))
                for key, item in reversed(list(current.items()))
            )

    if node_count > limits.max_nodes * _WARNING_RATIO:
        warnings.append(
            f"Large data structure detected ({node_count} nodes). "
            "Operations may be slow."
        )
    if max_depth_found > limits.max_depth * _WARNING_RATIO:
        warnings.append(
            f"Deep nesting detected ({max_depth_found} levels). "
            "Consider flattening the structure."
        )

    return StructureReport(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        node_count=node_count,
        max_depth_found=max_depth_found,
    )


# ----------------------------------------------------------------------
# Normalized view
# ----------------------------------------------------------------------


def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _normalize(value: Any, options: DiffOptions) -> Any:
    kind = type_of(value)
    if kind == JsonType.STRING:
        return normalize_string(value, options)
    if kind == JsonType.OBJECT:
        return {k: _normalize(v, options) for k, v in value.items()}
    if kind == JsonType.ARRAY:
        items = [_normalize(v, options) for v in value]
        if options.ignore_array_order or options.key_fields_for_array_objects:
            items.sort(key=_canonical)
        return items
    return value


def format_json_for_comparison(text: str, options: DiffOptions | None = None) -> str:
    """Return ``text`` pretty-printed with the comparison options applied.

    Strings are folded per ``ignore_case``/``ignore_whitespace``; when array
    order is ignored, object keys and array elements are sorted canonically.
    The input text is never modified.

    Raises:
        JsonSyntaxError: If ``text`` is not valid JSON.
    """
    options = options if options is not None else DiffOptions()
    normalized = _normalize(parse_json_text(text), options)
    unordered = options.ignore_array_order or bool(options.key_fields_for_array_objects)
    return json.dumps(normalized, indent=2, ensure_ascii=False, sort_keys=unordered)
