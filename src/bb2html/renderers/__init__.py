#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers that turn a parsed BBCode forest into output.

- ``HtmlRenderer``: HTML string, optionally a standalone document
- ``ElementRenderer``: list of ``str`` and ``Element`` fragments
"""

from __future__ import annotations

from bb2html.renderers.base import BaseRenderer
from bb2html.renderers.element import Element, ElementRenderer, Fragment, fragments_to_dicts
from bb2html.renderers.html import HtmlRenderer

__all__ = [
    "BaseRenderer",
    "HtmlRenderer",
    "ElementRenderer",
    "Element",
    "Fragment",
    "fragments_to_dicts",
]
