"""Render decode failures as an indented, human-readable report.

Leaf errors are grouped by the decode trail they share. Each field or index
step opens an ``Invalid value supplied to <path>`` node, and the nodes are
nested two spaces per level. Every alternative tried by an alternation gets
its own line: either ``Supplied value `<json>' is not <name>`` when it failed
outright, or ``Supplied value is not <name>`` followed by its own nested
field failures when it is a compound that failed inside.

Example output for ``object_type({"a": array(string() | number())})`` given
``{"a": [false]}``::

    Invalid value supplied to $: { a: (string | number)[] }
      Invalid value supplied to $.a: (string | number)[]
        Invalid value supplied to $.a[0]
          Supplied value `false' is not string
          Supplied value `false' is not number
"""

from __future__ import annotations

import json
from typing import Any, Sequence, Union

from .result import UNDEFINED, ContextEntry, ValidationError, ValidationResult, format_path

INDENT = "  "

_Group = tuple[Union[ContextEntry, None], list[ValidationError]]


def _json_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return list(value)
    if hasattr(value, "__dict__"):
        return vars(value)
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def _normalize(value: Any) -> Any:
    """Turn integral floats into ints, so ``1.0`` prints as ``1``."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    if isinstance(value, dict):
        return {k: _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value


def stringify(value: Any) -> str:
    """Render a value as compact JSON text, ``undefined`` for a missing value."""
    if value is UNDEFINED:
        return "undefined"
    try:
        return json.dumps(
            _normalize(value),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
            default=_json_default,
        )
    except (TypeError, ValueError):
        return repr(value)


def _group(errors: list[ValidationError], depth: int) -> list[_Group]:
    """Split errors by their trail entry at ``depth``, in order of appearance.

    Errors whose trail ends before ``depth`` come back one by one with no entry.
    """
    groups: list[_Group] = []
    seen: dict[tuple[bool, Any], list[ValidationError]] = {}
    for error in errors:
        if len(error.context) <= depth:
            groups.append((None, [error]))
            continue
        entry = error.context[depth]
        marker = (entry.branch, entry.key)
        if marker in seen:
            seen[marker].append(error)
        else:
            seen[marker] = [error]
            groups.append((entry, seen[marker]))
    return groups


class _Renderer:
    def __init__(self) -> None:
        self.lines: list[str] = []

    def emit(self, level: int, text: str) -> None:
        self.lines.append(f"{INDENT * level}{text}")

    def leaf(self, level: int, error: ValidationError) -> None:
        value = error.value
        # Errors built without a value show what the trail saw at that step
        if value is UNDEFINED and error.context:
            value = error.context[-1].actual
        self.emit(level, f"Supplied value `{stringify(value)}' is not {error.expected}")

    def children(self, errors: list[ValidationError], depth: int, path: tuple, level: int) -> None:
        for entry, group in _group(errors, depth):
            if entry is None:
                self.leaf(level, group[0])
            elif entry.branch:
                self.branch(entry, group, depth, path, level)
            else:
                self.node(entry, group, depth, path + (entry.key,), level)

    def node(
        self,
        entry: ContextEntry,
        errors: list[ValidationError],
        depth: int,
        path: tuple,
        level: int,
    ) -> None:
        alternation = any(
            len(error.context) > depth + 1 and error.context[depth + 1].branch
            for error in errors
        )
        header = f"Invalid value supplied to {format_path(path)}"
        if not alternation:
            header = f"{header}: {entry.type.name}"
        self.emit(level, header)
        self.children(errors, depth + 1, path, level + 1)

    def branch(
        self,
        entry: ContextEntry,
        errors: list[ValidationError],
        depth: int,
        path: tuple,
        level: int,
    ) -> None:
        if all(len(error.context) <= depth + 1 for error in errors):
            for error in errors:
                self.leaf(level, error)
            return
        self.emit(level, f"Supplied value is not {entry.type.name}")
        self.children(errors, depth + 1, path, level + 1)


def create_message(errors: ValidationResult | Sequence[ValidationError]) -> str:
    """Render the errors of one failed decode.

    Args:
        errors: A failed ValidationResult, or its leaf errors

    Returns:
        Multi-line report; empty when there is nothing to report
    """
    if isinstance(errors, ValidationResult):
        errors = errors.errors
    errors = list(errors)
    if not errors:
        return ""

    renderer = _Renderer()
    root = errors[0].context[0] if errors[0].context else None
    if root is None:
        renderer.emit(0, "Invalid value supplied to $")
    else:
        renderer.emit(0, f"Invalid value supplied to $: {root.type.name}")
    renderer.children(errors, 1, (), 1)
    return "\n".join(renderer.lines)
