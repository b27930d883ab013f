"""Getter resolution for YAML Core."""

from __future__ import annotations

from .path import FieldPath, Segment
from .values import Null, Value, VDict, VList


def apply_getter(value: Value, accessor: Segment) -> Value:
    """Resolve a single accessor on a value.

    - VDict: key lookup (an int accessor is looked up as its text)
    - VList: 0-based integer index; negative indices count from the end
    - anything else: returns Null
    """
    if isinstance(value, VDict):
        found = value.get(str(accessor))
        return found if found is not None else Null

    if isinstance(value, VList):
        try:
            idx = int(accessor)
        except ValueError:
            return Null
        if -len(value.items) <= idx < len(value.items):
            return value.items[idx]
        return Null

    return Null


def get_path(value: Value, path: FieldPath | str) -> Value:
    """Follow *path* (``"server.listeners[2].port"``) from *value*.

    Missing keys and out-of-range indices give Null rather than an error.
    """
    if isinstance(path, str):
        path = FieldPath.parse(path)
    for segment in path:
        value = apply_getter(value, segment)
        if value is Null:
            break
    return value
