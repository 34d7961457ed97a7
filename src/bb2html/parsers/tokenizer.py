#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/parsers/tokenizer.py
"""Tag scanner for BBCode source text.

The scanner works from an explicit cursor: every call to
:func:`find_next_tag` performs one search starting at ``pos`` and reports the
first bracket construct found there, together with its position. Everything
between the cursor and the match is a literal run that the caller handles.

Recognized forms:

- ``[name]``
- ``[name=default value]``
- ``[name key=value key2=value2]``
- ``[/name]``

Names and keys exclude ``/ [ ] = `` and whitespace. A default value excludes
brackets and line breaks but may contain spaces; ``key=value`` values may not
contain whitespace. Whether a name is actually a known tag is decided by the
tree builder, not here.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from bb2html.constants import NEWLINE_PATTERN

_NAME = r"[^/\[\]\n\r\s=]+"

TAG_PATTERN = re.compile(
    rf"\[(?P<name>{_NAME})"
    r"(?:=(?P<default>[^\[\]\n\r]+))?"
    rf"(?P<attrs>(?:\s+{_NAME}=[^\[\]\n\r\s]+)*)\]"
    rf"|\[/(?P<close>{_NAME})\]"
)
ATTRIBUTE_PATTERN = re.compile(rf"({_NAME})=([^\[\]\n\r\s]+)")
_WHITESPACE_PATTERN = re.compile(r"\s+")


@dataclass(frozen=True)
class TagMatch:
    """One bracket construct found by the scanner.

    Parameters
    ----------
    start : int
        Index of the opening ``[`` in the scanned text
    end : int
        Index just past the closing ``]``
    raw : str
        The full matched text, e.g. ``"[size=3]"``
    name : str
        Tag name
    is_closing : bool
        Whether this is a ``[/name]`` marker
    default_value : str or None, default None
        Value written directly after the name, as in ``[size=3]``
    attrs_source : str, default ""
        Raw ``key=value`` list following the name
    attrs : dict, default = empty dict
        Attributes resolved by :func:`build_attrs`

    """

    start: int
    end: int
    raw: str
    name: str
    is_closing: bool
    default_value: str | None = None
    attrs_source: str = ""
    attrs: dict[str, str] = field(default_factory=dict)


def parse_attribute_list(source: str) -> dict[str, str]:
    """Parse a whitespace-separated ``key=value`` list.

    Pieces that do not contain a ``key=value`` pair are dropped.

    Parameters
    ----------
    source : str
        Raw attribute list, e.g. ``" colspan=2 width=10"``

    Returns
    -------
    dict
        Parsed attributes; a repeated key keeps its last value

    Examples
    --------
        >>> parse_attribute_list("  colspan=2 junk width=10")
        {'colspan': '2', 'width': '10'}

    """
    attrs: dict[str, str] = {}
    for piece in _WHITESPACE_PATTERN.split(source):
        if not piece:
            continue
        match = ATTRIBUTE_PATTERN.search(piece)
        if match:
            attrs[match.group(1)] = match.group(2)
    return attrs


def build_attrs(name: str, default_value: str | None, attrs_source: str) -> dict[str, str]:
    """Combine a tag's default value with its explicit attributes.

    The default value is stored under the tag name itself; explicit
    attributes with the same key replace it.

    Examples
    --------
        >>> build_attrs("td", None, " colspan=2")
        {'colspan': '2'}
        >>> build_attrs("size", "3", "")
        {'size': '3'}

    """
    explicit = parse_attribute_list(attrs_source)
    if default_value is None:
        return explicit
    return {name: default_value, **explicit}


def find_next_tag(text: str, pos: int = 0) -> TagMatch | None:
    """Find the first bracket construct in ``text`` at or after ``pos``.

    Parameters
    ----------
    text : str
        Source text
    pos : int, default 0
        Cursor position to search from

    Returns
    -------
    TagMatch or None
        The first match, or None when the rest of the text is literal

    """
    match = TAG_PATTERN.search(text, pos)
    if match is None:
        return None

    close_name = match.group("close")
    if close_name is not None:
        return TagMatch(
            start=match.start(),
            end=match.end(),
            raw=match.group(0),
            name=close_name,
            is_closing=True,
        )

    name = match.group("name")
    default_value = match.group("default")
    attrs_source = match.group("attrs") or ""
    return TagMatch(
        start=match.start(),
        end=match.end(),
        raw=match.group(0),
        name=name,
        is_closing=False,
        default_value=default_value,
        attrs_source=attrs_source,
        attrs=build_attrs(name, default_value, attrs_source),
    )


def skip_newline(text: str, pos: int) -> int:
    """Return the position after one line terminator at ``pos``, or ``pos`` if there is none."""
    match = NEWLINE_PATTERN.match(text, pos)
    return match.end() if match else pos


__all__ = [
    "TAG_PATTERN",
    "TagMatch",
    "build_attrs",
    "find_next_tag",
    "parse_attribute_list",
    "skip_newline",
]
