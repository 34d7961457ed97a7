#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/renderers/_template.py
"""Parameter lookup and value formatting for the template tags.

``[var]``, ``[foreach]`` and ``[cond]`` read from a params mapping supplied
at render time. Lookups are lenient: a missing key, or a params object that
is not a mapping, reads as ``None``.
"""

from __future__ import annotations

from collections import ChainMap
from typing import Any, Mapping


def lookup(params: Mapping[str, Any], key: str | None) -> Any:
    """Return ``params[key]``, or None when the key is absent or empty."""
    if not key:
        return None
    return params.get(key)


def format_value(value: Any) -> str:
    """Convert a param value to the text a ``[var]`` tag inserts.

    Parameters
    ----------
    value : Any
        Value taken from the params mapping

    Returns
    -------
    str
        ``""`` for None, ``"true"``/``"false"`` for booleans, integral floats
        without a fractional part, ``str(value)`` otherwise

    Examples
    --------
        >>> format_value(3.0)
        '3'
        >>> format_value(False)
        'false'

    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_sequence(value: Any) -> bool:
    """Return True for values ``[foreach]`` iterates over."""
    return isinstance(value, (list, tuple))


def overlay_params(params: Mapping[str, Any], item: Any) -> ChainMap:
    """Layer one ``[foreach]`` item over the enclosing params.

    Mapping items shadow outer keys for the duration of one iteration; any
    other item adds nothing. Neither mapping is modified. Nested scopes stay
    one flat ChainMap, so lookups do not recurse once per level.
    """
    layer = dict(item) if isinstance(item, Mapping) else {}
    if isinstance(params, ChainMap):
        return params.new_child(layer)
    return ChainMap(layer, params)


__all__ = ["lookup", "format_value", "is_sequence", "overlay_params"]
