#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/utils/escape.py
"""Entity codec for BBCode text.

Seven characters are structurally significant in the HTML output and in
BBCode source: ``& < > [ ] ' "``. ``escape`` turns each of them into an
entity; ``unescape`` reverses the named entities and short numeric character
references back into literal characters.

Only numeric references for printable ASCII (code points 32-126) are decoded.
Anything else is left exactly as written, so text such as ``&#10;`` or
``&#999;`` survives parsing untouched.

"""

from __future__ import annotations

import re

_ESCAPE_MAP = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "[": "&#91;",
    "]": "&#93;",
    "'": "&#39;",
    '"': "&quot;",
}

_UNESCAPE_MAP = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "apos": "'",
    "quot": '"',
}

_ESCAPE_PATTERN = re.compile(r"[&<>\[\]'\"]")
_ENTITY_PATTERN = re.compile(r"&(?:(amp|lt|gt|apos|quot)|#([0-9]{2,3}));")


def _decode_entity(match: re.Match[str]) -> str:
    name, digits = match.groups()
    if name is not None:
        return _UNESCAPE_MAP[name]
    code_point = int(digits)
    if 32 <= code_point <= 126:
        return chr(code_point)
    return match.group(0)


def escape(text: str) -> str:
    """Escape the structurally significant characters in ``text``.

    Parameters
    ----------
    text : str
        Literal text

    Returns
    -------
    str
        Text safe to embed in HTML element content and attribute values

    Examples
    --------
        >>> escape('[b] & "x"')
        '&#91;b&#93; &amp; &quot;x&quot;'

    """
    if not text:
        return text
    return _ESCAPE_PATTERN.sub(lambda m: _ESCAPE_MAP[m.group(0)], text)


def unescape(text: str) -> str:
    """Decode named entities and printable-ASCII numeric references.

    Parameters
    ----------
    text : str
        Source text possibly containing entities

    Returns
    -------
    str
        Text with ``&amp; &lt; &gt; &apos; &quot;`` and ``&#32;`` through
        ``&#126;`` replaced by their characters

    Examples
    --------
        >>> unescape("&#91;b&#93; &amp;&#200;")
        '[b] &&#200;'

    """
    if not text or "&" not in text:
        return text
    return _ENTITY_PATTERN.sub(_decode_entity, text)


__all__ = ["escape", "unescape"]
