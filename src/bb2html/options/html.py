#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from bb2html.constants import (
    DEFAULT_HTML_ESCAPE_PARAMS,
    DEFAULT_HTML_FONT_FAMILY,
    DEFAULT_HTML_FONT_SIZE,
    DEFAULT_HTML_LINE_BREAK,
    DEFAULT_HTML_STANDALONE,
    DEFAULT_HTML_TITLE,
)
from bb2html.options.base import BaseRendererOptions


# src/bb2html/options/html.py
@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for rendering a parsed forest to HTML.

    Parameters
    ----------
    line_break : str, default "<br />"
        Markup emitted for each line break in text.
    escape_params : bool, default True
        Escape the values inserted by ``[var]`` tags. Disable only when the
        params come from a trusted source and may contain markup.
    standalone : bool, default False
        Wrap the fragment in a complete HTML document with ``<html>``,
        ``<head>`` and ``<body>`` tags.
    title : str, default ""
        Document title used when ``standalone`` is set.
    language : str, default "en"
        Value of the ``lang`` attribute when ``standalone`` is set.
    font_family : str
        Body font stack used when ``standalone`` is set.
    font_size : str, default "14px"
        Body font size used when ``standalone`` is set.

    """

    line_break: str = field(
        default=DEFAULT_HTML_LINE_BREAK,
        metadata={"help": "Markup emitted for each line break in text", "importance": "advanced"},
    )
    escape_params: bool = field(
        default=DEFAULT_HTML_ESCAPE_PARAMS,
        metadata={
            "help": "Escape values inserted by [var] tags",
            "cli_name": "no-escape-params",
            "importance": "security",
        },
    )
    standalone: bool = field(
        default=DEFAULT_HTML_STANDALONE,
        metadata={"help": "Wrap output in a complete HTML document", "importance": "core"},
    )
    title: str = field(
        default=DEFAULT_HTML_TITLE,
        metadata={"help": "Document title for standalone output", "importance": "core"},
    )
    language: str = field(
        default="en",
        metadata={"help": "Document language code for standalone output", "importance": "advanced"},
    )
    font_family: str = field(
        default=DEFAULT_HTML_FONT_FAMILY,
        metadata={"help": "Body font stack for standalone output", "importance": "advanced"},
    )
    font_size: str = field(
        default=DEFAULT_HTML_FONT_SIZE,
        metadata={"help": "Body font size for standalone output", "importance": "advanced"},
    )
