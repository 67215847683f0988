"""Apply set/update data, including field transforms, to document contents."""

import copy
from datetime import datetime
from typing import Any

from docgate.domain.value_objects import (
    ArrayRemove,
    ArrayUnion,
    DeleteField,
    Increment,
    ServerTimestamp,
)

FIELD_PATH_SEPARATOR = "."


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _resolve(value: Any, current: Any, now: datetime) -> Any:
    """Resolve one value against the field's current value."""
    if isinstance(value, Increment):
        base = current if _is_number(current) else 0
        return base + value.amount
    if isinstance(value, ArrayUnion):
        result = list(current) if isinstance(current, list) else []
        for element in value.elements:
            if element not in result:
                result.append(element)
        return result
    if isinstance(value, ArrayRemove):
        if not isinstance(current, list):
            return []
        return [x for x in current if x not in value.elements]
    if isinstance(value, ServerTimestamp):
        return now.isoformat()
    if isinstance(value, dict):
        nested = current if isinstance(current, dict) else {}
        resolved: dict[str, Any] = {}
        for key, item in value.items():
            if isinstance(item, DeleteField):
                continue
            resolved[key] = _resolve(item, nested.get(key), now)
        return resolved
    if isinstance(value, list):
        return [_resolve(item, None, now) for item in value]
    return value


def resolve_set(data: dict[str, Any], now: datetime) -> dict[str, Any]:
    """Contents of a document replaced by ``set``.

    Keys are literal field names; transforms resolve against an empty document.
    """
    return _resolve(data, {}, now)


def apply_update(
    current: dict[str, Any], changes: dict[str, Any], now: datetime
) -> dict[str, Any]:
    """Merge ``changes`` into a copy of ``current``.

    Keys are dotted field paths (``"address.city"``). Intermediate maps are
    created as needed; ``DeleteField`` removes the addressed field.
    """
    result = copy.deepcopy(current)
    for field_path, value in changes.items():
        parts = field_path.split(FIELD_PATH_SEPARATOR)
        parent = result
        for part in parts[:-1]:
            child = parent.get(part)
            if not isinstance(child, dict):
                if isinstance(value, DeleteField):
                    parent = None
                    break
                child = {}
                parent[part] = child
            parent = child
        if parent is None:
            continue
        leaf = parts[-1]
        if isinstance(value, DeleteField):
            parent.pop(leaf, None)
        else:
            parent[leaf] = _resolve(value, parent.get(leaf), now)
    return result
