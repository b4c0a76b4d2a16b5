"""
Variable path resolution.

Paths are dotted: ``product.name``, ``product.images.0.url``. Array indexes
may also be written with brackets: ``images[0].url`` or ``images.[0].url``.
Empty segments are ignored. Besides mapping keys and sequence indexes a path
segment may be ``length`` (size of a sequence or string) or an attribute of a
plain Python object.

``this.<path>`` looks inside the current loop item first and then falls back
to the whole scope, where the item's own keys are merged as well.
"""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Sequence

_INDEX_RE = re.compile(r"^(.*?)\[(\d+)\]$")


def split_path(path: str) -> List[str]:
    """Split a path into lookup keys, expanding bracket indexes."""
    parts: List[str] = []
    for part in path.strip().split("."):
        match = _INDEX_RE.match(part)
        if match:
            prefix, index = match.groups()
            if prefix:
                parts.append(prefix)
            parts.append(index)
        elif part:
            parts.append(part)
    return parts


def _step(current: Any, key: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(key)

    if isinstance(current, (list, tuple)):
        if key.isdigit():
            index = int(key)
            return current[index] if index < len(current) else None
        if key == "length":
            return len(current)
        return None

    if isinstance(current, str):
        return len(current) if key == "length" else None

    if key.startswith("_"):
        return None
    return getattr(current, key, None)


def traverse(root: Any, parts: Sequence[str]) -> Any:
    """Follow keys from root; any missing step gives None."""
    current = root
    for key in parts:
        if current is None:
            return None
        current = _step(current, key)
    return current


def resolve_path(path: str, scope: Mapping[str, Any]) -> Any:
    """
    Value at a variable path, or None when any step is missing.

    Args:
        path: Dotted variable path
        scope: Merged variable context

    Returns:
        The value found
    """
    path = path.strip()
    if path.startswith("this."):
        rest = split_path(path[5:])
        item = scope.get("this")
        if item is not None:
            found = traverse(item, rest)
            if found is not None:
                return found
        return traverse(scope, rest)

    parts = split_path(path)
    if not parts:
        return None
    return traverse(scope, parts)


__all__ = ["split_path", "traverse", "resolve_path"]
