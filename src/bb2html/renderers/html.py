#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/renderers/html.py
"""HTML rendering from a parsed forest.

This module provides the HtmlRenderer class which converts a BBCode forest
to an HTML fragment, or to a complete document when ``standalone`` is set.

Text is escaped with the entity codec before whitespace handling, so the
output never contains markup that was not produced by a tag rule. Spaces
become ``&nbsp;`` and other inline whitespace becomes a numeric character
reference, which keeps runs of whitespace visible. Line breaks become the
configured ``line_break`` markup.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Iterable, Mapping, Union

from bb2html.ast.nodes import Node
from bb2html.constants import HTML_NBSP, INLINE_WHITESPACE_PATTERN, NEWLINE_PATTERN
from bb2html.options.html import HtmlRendererOptions
from bb2html.renderers._styles import style_to_css
from bb2html.renderers.base import BaseRenderer
from bb2html.utils.escape import escape

logger = logging.getLogger(__name__)


def _whitespace_entity(match: Any) -> str:
    char = match.group()
    if char == " ":
        return HTML_NBSP
    return f"&#{ord(char)};"


class HtmlRenderer(BaseRenderer):
    """Render a parsed forest to HTML.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options

    Examples
    --------
    Basic usage:

        >>> from bb2html.parsers.bbcode import parse_bbcode
        >>> renderer = HtmlRenderer()
        >>> renderer.render(parse_bbcode("[b]Hi there[/b]"))
        '<strong>Hi&nbsp;there</strong>'

    With params:

        >>> renderer.render(parse_bbcode("Hello [var=name]"), {"name": "<World>"})
        'Hello&nbsp;&lt;World&gt;'

    """

    def __init__(self, options: HtmlRendererOptions | None = None):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options

    def render_to_file(
        self,
        nodes: Iterable[Node],
        output: Union[str, Path, IO[bytes], IO[str]],
        params: Mapping[str, Any] | None = None,
    ) -> None:
        """Render a forest to HTML and write it to a path or stream.

        Parameters
        ----------
        nodes : iterable of Node
            Parsed forest
        output : str, Path, IO[bytes], or IO[str]
            Output destination
        params : Mapping or None, default None
            Template params

        """
        self.write_text_output(self.render(nodes, params), output)

    def _text(self, text: str) -> list[str]:
        html = escape(text)
        html = INLINE_WHITESPACE_PATTERN.sub(_whitespace_entity, html)
        html = NEWLINE_PATTERN.sub(lambda _: self.options.line_break, html)
        return [html]

    def _value(self, value: str) -> list[str]:
        return [escape(value) if self.options.escape_params else value]

    def _element(self, tag: str, style: dict[str, str], attrs: dict[str, str], children: list[Any]) -> list[str]:
        return [f"<{tag}{self._format_attributes(style, attrs)}>", *children, f"</{tag}>"]

    def _void_element(self, tag: str, style: dict[str, str], attrs: dict[str, str]) -> list[str]:
        return [f"<{tag}{self._format_attributes(style, attrs)} />"]

    def _finish(self, fragments: list[Any]) -> str:
        content = "".join(fragments)
        if self.options.standalone:
            return self._wrap_in_document(content)
        return content

    @staticmethod
    def _format_attributes(style: dict[str, str], attrs: dict[str, str]) -> str:
        parts = []
        if style:
            parts.append(f' style="{escape(style_to_css(style))}"')
        for name, value in attrs.items():
            parts.append(f' {name}="{escape(value)}"')
        return "".join(parts)

    def _wrap_in_document(self, content: str) -> str:
        """Wrap rendered content in a complete HTML document.

        Parameters
        ----------
        content : str
            Rendered HTML fragment

        Returns
        -------
        str
            Complete HTML document

        """
        body_style = style_to_css({"font-family": self.options.font_family, "font-size": self.options.font_size})
        parts = [
            "<!DOCTYPE html>",
            f'<html lang="{escape(self.options.language)}">',
            "<head>",
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{escape(self.options.title)}</title>",
            "</head>",
            f'<body style="{escape(body_style)}">',
            content,
            "</body>",
            "</html>",
        ]
        return "\n".join(parts)


__all__ = ["HtmlRenderer"]
