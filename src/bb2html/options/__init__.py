#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for bb2html parsing and rendering.

Each parser and renderer has its own options dataclass. All options are
frozen; use ``create_updated`` to derive a modified copy.
"""

from __future__ import annotations

from bb2html.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from bb2html.options.bbcode import BBCodeParserOptions
from bb2html.options.element import ElementRendererOptions
from bb2html.options.html import HtmlRendererOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "BBCodeParserOptions",
    "HtmlRendererOptions",
    "ElementRendererOptions",
]
