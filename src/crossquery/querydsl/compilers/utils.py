"""Compiler utility functions.

Helpers for splitting dotted paths and normalizing paging input.
"""

from typing import Any, Dict, List, Optional, Tuple


def split_path(field: str) -> Tuple[List[str], str]:
    """Split ``a.b.c`` into the relationship path ``["a", "b"]`` and attribute ``"c"``."""
    segments = field.split(".")
    return segments[:-1], segments[-1]


def clamp(value: Optional[int], default: int, lower: int, upper: int) -> int:
    """Clamp an optional integer into ``[lower, upper]``, substituting ``default`` for None."""
    if value is None:
        value = default
    return max(lower, min(int(value), upper))


def is_condition(value: Dict[str, Any]) -> bool:
    """True when ``value`` is a query-operator document rather than a sub-document."""
    return any(key.startswith("$") for key in value)


def set_nested(target: Dict[str, Any], path: List[str], value: Any) -> Dict[str, Any]:
    """Set ``value`` at ``path`` inside ``target``, creating intermediate dicts.

    An intermediate key already holding a non-dict value, or an operator
    condition such as ``{"$eq": "x"}``, is replaced.
    """
    current = target
    for segment in path[:-1]:
        child = current.get(segment)
        if not isinstance(child, dict) or is_condition(child):
            child = {}
            current[segment] = child
        current = child
    current[path[-1]] = value
    return target
