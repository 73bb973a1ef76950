"""Utility functions and helpers for the proxyctl application."""
from typing import Any, List

MISSING = "-"


def dig(data: Any, *path: Any, default: Any = None) -> Any:
    """Follow a path of keys and list indexes through a decoded JSON tree.

    Args:
        data: Decoded document (dicts, lists and scalars)
        *path: Dict keys (str) or list indexes (int) to follow in order
        default: Value returned when any step is missing or of the wrong type

    Returns:
        The value at the end of the path, or ``default``
    """
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return default
        elif not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def as_list(value: Any) -> List[Any]:
    """Return ``value`` if it is a list, otherwise an empty list."""
    return value if isinstance(value, list) else []


def display(value: Any) -> str:
    """Render a scalar for a report cell, using a dash for missing values."""
    if value is None or value == "":
        return MISSING
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)
