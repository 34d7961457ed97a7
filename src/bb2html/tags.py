#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/tags.py
"""Known BBCode tags and their structural behaviour.

The tag table is fixed: a name that does not appear here is never
structural, and its bracket text is kept verbatim as literal text.

Each entry controls how the tree builder treats line breaks around the tag.
A tag with ``break_after`` set keeps a newline that directly follows its
opening or closing marker; otherwise one newline there is swallowed, which
lets block tags like ``[table]`` or ``[li]`` sit on their own source lines
without producing stray ``<br />`` elements. Self-closing tags consult
``break_start`` instead.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class TagName(str, Enum):
    """Closed enumeration of structural tag names.

    ``GENERIC`` stands for any tag name without a dedicated rendering rule;
    the tree builder never produces one, but deserialized or hand-built
    trees may.
    """

    B = "b"
    I = "i"  # noqa: E741
    U = "u"
    S = "s"
    SUB = "sub"
    SUP = "sup"
    COLOR = "color"
    SIZE = "size"
    FONT = "font"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"
    UL = "ul"
    OL = "ol"
    LI = "li"
    TABLE = "table"
    TR = "tr"
    TD = "td"
    HR = "hr"
    URL = "url"
    IMG = "img"
    VAR = "var"
    FOREACH = "foreach"
    COND = "cond"
    GENERIC = ""

    @classmethod
    def from_name(cls, name: str) -> TagName:
        """Return the member for ``name``, or ``GENERIC`` for anything else."""
        try:
            return cls(name)
        except ValueError:
            return cls.GENERIC


@dataclass(frozen=True)
class TagSpec:
    """Structural flags for one known tag.

    Parameters
    ----------
    break_start : bool, default False
        Keep a newline that directly follows a self-closing tag
    break_after : bool, default False
        Keep a newline that directly follows the opening or closing marker
    self_closing : bool, default False
        The tag never has children and has no close marker

    """

    break_start: bool = False
    break_after: bool = False
    self_closing: bool = False


_INLINE = TagSpec(break_start=True, break_after=True)
_BLOCK = TagSpec()

TAG_SPECS: Mapping[str, TagSpec] = MappingProxyType(
    {
        "b": _INLINE,
        "i": _INLINE,
        "u": _INLINE,
        "s": _INLINE,
        "sub": _INLINE,
        "sup": _INLINE,
        "left": _INLINE,
        "center": _INLINE,
        "right": _INLINE,
        "justify": _INLINE,
        "font": _INLINE,
        "size": _INLINE,
        "color": _INLINE,
        "url": _INLINE,
        "ul": _BLOCK,
        "ol": _BLOCK,
        "li": _BLOCK,
        "table": _BLOCK,
        "tr": _BLOCK,
        "td": _BLOCK,
        "hr": TagSpec(self_closing=True),
        "img": TagSpec(break_after=True),
        "var": TagSpec(break_start=True, break_after=True, self_closing=True),
        "foreach": _BLOCK,
        "cond": _BLOCK,
    }
)


def get_tag_spec(name: str) -> TagSpec | None:
    """Return the TagSpec for a known tag name, or None when the name is not structural."""
    return TAG_SPECS.get(name)


__all__ = ["TagName", "TagSpec", "TAG_SPECS", "get_tag_spec"]
