"""Structural validation of raw tool input.

Runs before any scoring. The first violation found aborts the whole call;
no section or item is ever skipped or partially scored.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from .models import BulletInput, BulletItem, BulletSection, Context, Importance

_CONTEXTS = ", ".join(c.value for c in Context)
_IMPORTANCE_LEVELS = ", ".join(i.value for i in Importance)


class InputValidationError(ValueError):
    """Malformed, missing or conflicting input."""


def validate_input(raw: Any) -> BulletInput:
    """Check raw input and convert it into a typed ``BulletInput``.

    Raises:
        InputValidationError: describing the first violation found.
    """
    if not isinstance(raw, Mapping):
        raise InputValidationError("Input must be an object with either `items` or `sections`")

    items = raw.get("items")
    sections = raw.get("sections")

    if items is not None and sections is not None:
        raise InputValidationError(
            "Cannot use both `items` and `sections`. Use `items` for a flat list "
            "or `sections` for a long document, not both."
        )
    if items is None and sections is None:
        raise InputValidationError("Input must include a non-empty `items` or `sections` array")

    if sections is not None:
        parsed_sections = _parse_sections(sections)
        context = _parse_context(raw.get("context"), "context")
        return BulletInput(sections=parsed_sections, context=context or Context.DOCUMENT)

    parsed_items = _parse_items(items, "items")
    context = _parse_context(raw.get("context"), "context")
    return BulletInput(items=parsed_items, context=context or Context.DOCUMENT)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _parse_sections(raw: Any) -> tuple[BulletSection, ...]:
    if not _is_array(raw) or not raw:
        raise InputValidationError("`sections` must be a non-empty array of sections")
    return tuple(_parse_section(section, i) for i, section in enumerate(raw))


def _parse_section(raw: Any, index: int) -> BulletSection:
    path = f"sections[{index}]"
    if not isinstance(raw, Mapping):
        raise InputValidationError(f"{path} must be an object with `title` and `items`")

    title = raw.get("title")
    if not isinstance(title, str) or not title.strip():
        raise InputValidationError(f"{path}.title must be a non-empty string")

    items = _parse_items(raw.get("items"), f"{path}.items")
    context = _parse_context(raw.get("context"), f"{path}.context")
    return BulletSection(title=title, items=items, context=context)


def _parse_items(raw: Any, path: str) -> tuple[BulletItem, ...]:
    if not _is_array(raw) or not raw:
        raise InputValidationError(f"`{path}` must be a non-empty array of bullet items")
    return tuple(_parse_item(item, f"{path}[{i}]") for i, item in enumerate(raw))


def _parse_item(raw: Any, path: str) -> BulletItem:
    # Walks an explicit stack so nesting depth is not bounded by the call stack.
    # Records are appended in pre-order, so every child sits after its parent.
    records: list[tuple[str, Optional[Importance], list[int]]] = []
    stack: list[tuple[Any, str, Optional[int]]] = [(raw, path, None)]
    while stack:
        node, node_path, parent = stack.pop()
        text, children_raw, importance = _check_item(node, node_path)
        index = len(records)
        records.append((text, importance, []))
        if parent is not None:
            records[parent][2].append(index)
        for i in reversed(range(len(children_raw))):
            stack.append((children_raw[i], f"{node_path}.children[{i}]", index))

    built: dict[int, BulletItem] = {}
    for index in reversed(range(len(records))):
        text, importance, child_indexes = records[index]
        children = tuple(built[c] for c in child_indexes)
        built[index] = BulletItem(text=text, children=children, importance=importance)
    return built[0]


def _check_item(raw: Any, path: str) -> tuple[str, Sequence[Any], Optional[Importance]]:
    if not isinstance(raw, Mapping):
        raise InputValidationError(f"{path} must be an object with a `text` field")

    text = raw.get("text")
    if not isinstance(text, str) or not text.strip():
        raise InputValidationError(f"{path}.text must be a non-empty string")

    children = raw.get("children")
    if children is None:
        children = ()
    elif not _is_array(children):
        raise InputValidationError(f"{path}.children must be an array of bullet items")

    return text, children, _parse_importance(raw.get("importance"), path)


def _parse_context(raw: Any, path: str) -> Optional[Context]:
    if raw is None:
        return None
    try:
        return Context(raw)
    except ValueError:
        raise InputValidationError(f"{path} must be one of: {_CONTEXTS} (got {raw!r})") from None


def _parse_importance(raw: Any, path: str) -> Optional[Importance]:
    if raw is None:
        return None
    try:
        return Importance(raw)
    except ValueError:
        raise InputValidationError(f"{path}.importance must be one of: {_IMPORTANCE_LEVELS} (got {raw!r})") from None
