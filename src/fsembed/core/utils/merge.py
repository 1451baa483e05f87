"""Layering of several roots files into one config mapping."""
from __future__ import annotations

from typing import Any, Dict, List

APPEND = "+"
REPLACE = "="


def _merge_roots(current: List[Any], incoming: List[Any]) -> List[Any]:
    # A leading "+" keeps the earlier roots, "=" (or no marker) drops them.
    if incoming[:1] == [APPEND]:
        return [*current, *incoming[1:]]
    if incoming[:1] == [REPLACE]:
        return list(incoming[1:])
    return list(incoming)


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Lay ``override`` over ``base`` and return a new mapping.

    Nested mappings merge key by key and scalars from ``override`` win.
    Lists go through the ``"+"``/``"="`` marker rules, which are stripped
    from the result.

    Example:
        >>> merge_config({"roots": [{"id": "core"}]}, {"roots": ["+", {"id": "site"}]})
        {'roots': [{'id': 'core'}, {'id': 'site'}]}
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = merge_config(current, value)
        elif isinstance(value, list):
            merged[key] = _merge_roots(current if isinstance(current, list) else [], value)
        else:
            merged[key] = value
    return merged


__all__ = ["merge_config", "APPEND", "REPLACE"]
