"""bb2html - A Python library for parsing BBCode and rendering it to HTML.

bb2html turns forum-style BBCode markup into a small immutable node tree and
renders that tree either to an HTML string or to structured element data.
Rendering accepts a params mapping, so a parsed tree doubles as a template:
``[var]`` inserts values, ``[foreach]`` repeats content per list item and
``[cond]`` shows content conditionally.

Key Features
------------
- Total parsing: malformed markup degrades to literal text and never raises
- Fixed tag table with predictable line-break handling around block tags
- HTML output that escapes all text and attribute values
- Structured ``Element`` output for consumers that build their own UI tree
- JSON serialization of parsed forests for caching
- Command-line interface with config file and environment variable support

Examples
--------
Basic usage:

    >>> from bb2html import to_html
    >>> to_html("[b]Hello[/b] [i]world[/i]")
    '<strong>Hello</strong>&nbsp;<i>world</i>'

Parse once, render many times:

    >>> from bb2html import parse, render
    >>> forest = parse("Hi [var=name]")
    >>> render(forest, {"name": "Ann"})
    'Hi&nbsp;Ann'
    >>> render(forest, {"name": "Bo"})
    'Hi&nbsp;Bo'

See Also
--------
bb2html.ast : node definitions and serialization
bb2html.renderers : HTML and element renderers

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "bb2html requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from bb2html.api import parse, render, render_elements, to_elements, to_html  # noqa: E402
from bb2html.ast.nodes import Node, TagNode, TextNode  # noqa: E402
from bb2html.exceptions import Bb2HtmlError, ParamsError, ValidationError  # noqa: E402
from bb2html.options.bbcode import BBCodeParserOptions  # noqa: E402
from bb2html.options.element import ElementRendererOptions  # noqa: E402
from bb2html.options.html import HtmlRendererOptions  # noqa: E402
from bb2html.renderers.element import Element, Fragment  # noqa: E402
from bb2html.utils.escape import escape, unescape  # noqa: E402

__all__ = [
    "__version__",
    "parse",
    "render",
    "render_elements",
    "to_html",
    "to_elements",
    "escape",
    "unescape",
    "Node",
    "TextNode",
    "TagNode",
    "Element",
    "Fragment",
    "BBCodeParserOptions",
    "HtmlRendererOptions",
    "ElementRendererOptions",
    "Bb2HtmlError",
    "ValidationError",
    "ParamsError",
]
