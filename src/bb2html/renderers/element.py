#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/renderers/element.py
"""Structured element rendering from a parsed forest.

``ElementRenderer`` produces the same element structure as ``HtmlRenderer``
but as plain data: a list of fragments, each either a ``str`` (raw,
unescaped text) or an ``Element``. Consumers that build their own UI
tree, or that serialize to JSON, escape text themselves.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Union

from bb2html.constants import ELEMENT_NBSP, NEWLINE_PATTERN
from bb2html.options.element import ElementRendererOptions
from bb2html.renderers.base import BaseRenderer

logger = logging.getLogger(__name__)


@dataclass
class Element:
    """A rendered element.

    Parameters
    ----------
    tag : str
        Element name, e.g. ``"strong"`` or ``"td"``
    style : dict, default = empty dict
        CSS properties in insertion order
    attrs : dict, default = empty dict
        Element attributes such as ``href``, ``src`` or ``colspan``
    children : list, default = empty list
        Child fragments

    """

    tag: str
    style: dict[str, str] = field(default_factory=dict)
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Fragment] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Project the element onto JSON-compatible dicts and lists."""
        return fragments_to_dicts([self])[0]


Fragment = Union[str, Element]


def fragments_to_dicts(fragments: list[Fragment]) -> list[Any]:
    """Convert a fragment list to JSON-compatible data; strings are kept as-is."""
    result: list[Any] = []
    pending: list[tuple[list[Fragment], list[Any]]] = [(fragments, result)]
    while pending:
        source, target = pending.pop()
        for fragment in source:
            if not isinstance(fragment, Element):
                target.append(fragment)
                continue
            data: dict[str, Any] = {
                "tag": fragment.tag,
                "style": dict(fragment.style),
                "attrs": dict(fragment.attrs),
                "children": [],
            }
            target.append(data)
            pending.append((fragment.children, data["children"]))
    return result


class ElementRenderer(BaseRenderer):
    """Render a parsed forest to ``Element`` fragments.

    Parameters
    ----------
    options : ElementRendererOptions or None, default = None
        Element rendering options

    Examples
    --------
        >>> from bb2html.parsers.bbcode import parse_bbcode
        >>> ElementRenderer().render(parse_bbcode("[b]a\\nb[/b]"))
        [Element(tag='strong', style={}, attrs={}, children=['a', Element(tag='br', ...), 'b'])]

    """

    def __init__(self, options: ElementRendererOptions | None = None):
        """Initialize the element renderer with options."""
        BaseRenderer._validate_options_type(options, ElementRendererOptions, "element")
        options = options or ElementRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: ElementRendererOptions = options

    def _text(self, text: str) -> list[Fragment]:
        if self.options.preserve_whitespace:
            text = text.replace(" ", ELEMENT_NBSP)

        fragments: list[Fragment] = []
        for index, piece in enumerate(NEWLINE_PATTERN.split(text)):
            if index:
                fragments.append(Element("br"))
            fragments.append(piece)
        return fragments

    def _value(self, value: str) -> list[Fragment]:
        return [value]

    def _element(self, tag: str, style: dict[str, str], attrs: dict[str, str], children: list[Any]) -> list[Fragment]:
        return [Element(tag, style, attrs, children)]

    def _void_element(self, tag: str, style: dict[str, str], attrs: dict[str, str]) -> list[Fragment]:
        return [Element(tag, style, attrs)]

    def _finish(self, fragments: list[Any]) -> list[Fragment]:
        return fragments


__all__ = ["Element", "Fragment", "ElementRenderer", "fragments_to_dicts"]
