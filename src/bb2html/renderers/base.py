#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/renderers/base.py
"""Base class for forest renderers.

``BaseRenderer`` walks a parsed forest once and owns everything that is the
same for every output format: the mapping from tag to output element, the
style computation, and the params scope used by the template tags. A
subclass only decides how leaves and elements are built, through five hooks:

- ``_text``: a literal text node
- ``_value``: the formatted value inserted by ``[var]``
- ``_element``: an element with a style, attributes and children
- ``_void_element``: an element that never has children
- ``_finish``: the final result built from the top-level fragments

Every ``visit_*`` method returns a list of fragments, or a generator for
tags with children. ``_render_children`` drives those generators from an
explicit stack, so deeply nested input never exhausts the interpreter
stack. Fragments from children are concatenated in document order.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from types import GeneratorType
from typing import IO, Any, Callable, Generator, Iterable, Mapping, Union

from bb2html.ast.nodes import Node, TagNode, TextNode
from bb2html.ast.utils import single_text_child
from bb2html.ast.visitors import NodeVisitor
from bb2html.constants import LIST_STYLE
from bb2html.exceptions import InvalidOptionsError, ParamsError
from bb2html.options.base import BaseRendererOptions
from bb2html.renderers._styles import resolve_font_size, resolve_image_style, split_cell_attrs, table_style
from bb2html.renderers._template import format_value, is_sequence, lookup, overlay_params
from bb2html.tags import TagName
from bb2html.utils.io_utils import write_content

logger = logging.getLogger(__name__)

_EMPHASIS_TAGS: dict[TagName, str] = {
    TagName.B: "strong",
    TagName.I: "i",
    TagName.U: "u",
    TagName.S: "strike",
    TagName.SUB: "sub",
    TagName.SUP: "sup",
}

_SPAN_PROPERTIES: dict[TagName, str] = {
    TagName.COLOR: "color",
    TagName.FONT: "font-family",
}

# A handler either returns its fragments or, when it needs its children
# rendered, is a generator that yields the children and is sent their fragments.
_Step = Union[list[Any], Generator[Any, list[Any], list[Any]]]


def _style_property(name: str, value: str | None) -> dict[str, str]:
    return {name: value} if value else {}


class BaseRenderer(NodeVisitor, ABC):
    """Abstract base class for all forest renderers.

    Parameters
    ----------
    options : BaseRendererOptions
        Format-specific rendering options

    Notes
    -----
    Params are bound for the duration of one ``render`` call, so a renderer
    instance must not be shared between threads. The functions in
    ``bb2html.api`` create a fresh renderer per call.

    """

    def __init__(self, options: BaseRendererOptions):
        """Initialize the renderer with its options."""
        self.options = options
        self._params: Mapping[str, Any] = {}
        self._handlers: dict[TagName, Callable[[TagNode], _Step]] = {
            TagName.COLOR: self._render_span,
            TagName.FONT: self._render_span,
            TagName.SIZE: self._render_size,
            TagName.LEFT: self._render_alignment,
            TagName.CENTER: self._render_alignment,
            TagName.RIGHT: self._render_alignment,
            TagName.JUSTIFY: self._render_alignment,
            TagName.UL: self._render_list,
            TagName.OL: self._render_list,
            TagName.LI: self._render_list_item,
            TagName.TABLE: self._render_table,
            TagName.TR: self._render_table_row,
            TagName.TD: self._render_table_cell,
            TagName.HR: self._render_rule,
            TagName.URL: self._render_link,
            TagName.IMG: self._render_image,
            TagName.VAR: self._render_var,
            TagName.FOREACH: self._render_foreach,
            TagName.COND: self._render_cond,
        }
        for tag in _EMPHASIS_TAGS:
            self._handlers[tag] = self._render_emphasis

    def render(self, nodes: Iterable[Node], params: Mapping[str, Any] | None = None) -> Any:
        """Render a parsed forest.

        Parameters
        ----------
        nodes : iterable of Node
            Top-level nodes, as returned by the parser
        params : Mapping or None, default None
            Values available to ``[var]``, ``[foreach]`` and ``[cond]``

        Returns
        -------
        Any
            Output built by ``_finish``

        Raises
        ------
        ParamsError
            If params is not a mapping

        """
        if params is None:
            params = {}
        elif not isinstance(params, Mapping):
            raise ParamsError(
                f"params must be a mapping, got {type(params).__name__}",
                parameter_value=params,
            )

        self._params = params
        try:
            fragments = self._render_children(nodes)
        finally:
            self._params = {}
        return self._finish(fragments)

    def visit_text_node(self, node: TextNode) -> list[Any]:
        """Render a TextNode through the ``_text`` hook."""
        return self._text(node.text)

    def visit_tag_node(self, node: TagNode) -> _Step:
        """Render a TagNode.

        Returns the finished fragments, or a generator that yields child
        sequences and is sent their fragments (see ``_render_children``).
        Tags without a dedicated rule render their children only.
        """
        handler = self._handlers.get(node.kind)
        if handler is None:
            return self._render_sequence(node.children)
        return handler(node)

    def _render_children(self, nodes: Iterable[Node]) -> list[Any]:
        """Render a node sequence without recursing once per nesting level.

        Pending handler generators are kept on an explicit stack, so nesting
        depth is bounded by memory rather than by the interpreter's
        recursion limit.
        """
        stack: list[Generator[Any, list[Any], list[Any]]] = [self._render_sequence(nodes)]
        value: Any = None
        try:
            while stack:
                try:
                    request = stack[-1].send(value)
                except StopIteration as stop:
                    stack.pop()
                    value = stop.value
                    continue

                step = request.accept(self) if isinstance(request, Node) else self._render_sequence(request)
                if isinstance(step, GeneratorType):
                    stack.append(step)
                    value = None
                else:
                    value = step
        except BaseException:
            # Innermost first, so foreach scopes unwind in order
            for pending in reversed(stack):
                pending.close()
            raise
        return value

    def _render_sequence(self, nodes: Iterable[Node]) -> Generator[Any, list[Any], list[Any]]:
        fragments: list[Any] = []
        for child in nodes:
            fragments.extend((yield child))
        return fragments

    # Formatting tags

    def _render_emphasis(self, node: TagNode) -> _Step:
        children = yield node.children
        return self._element(_EMPHASIS_TAGS[node.kind], {}, {}, children)

    def _render_span(self, node: TagNode) -> _Step:
        style = _style_property(_SPAN_PROPERTIES[node.kind], node.attrs.get(node.tag))
        children = yield node.children
        return self._element("span", style, {}, children)

    def _render_size(self, node: TagNode) -> _Step:
        style = _style_property("font-size", resolve_font_size(node.attrs.get("size")))
        children = yield node.children
        return self._element("span", style, {}, children)

    def _render_alignment(self, node: TagNode) -> _Step:
        children = yield node.children
        return self._element("div", {"text-align": node.tag}, {}, children)

    # Block tags

    def _render_list(self, node: TagNode) -> _Step:
        children = yield node.children
        return self._element(node.tag, dict(LIST_STYLE), {}, children)

    def _render_list_item(self, node: TagNode) -> _Step:
        children = yield node.children
        return self._element("li", {}, {}, children)

    def _render_table(self, node: TagNode) -> _Step:
        children = yield node.children
        return self._element("table", table_style(node.attrs), {}, children)

    def _render_table_row(self, node: TagNode) -> _Step:
        children = yield node.children
        return self._element("tr", dict(node.attrs), {}, children)

    def _render_table_cell(self, node: TagNode) -> _Step:
        style, element_attrs = split_cell_attrs(node.attrs)
        children = yield node.children
        return self._element("td", style, element_attrs, children)

    def _render_rule(self, node: TagNode) -> _Step:
        return self._void_element("hr", {}, {})

    def _render_link(self, node: TagNode) -> _Step:
        attrs = {"href": node.attrs["url"]} if "url" in node.attrs else {}
        children = yield node.children
        return self._element("a", {}, attrs, children)

    def _render_image(self, node: TagNode) -> _Step:
        src = single_text_child(node) or ""
        return self._void_element("img", resolve_image_style(node.attrs), {"src": src})

    # Template tags

    def _render_var(self, node: TagNode) -> _Step:
        return self._value(format_value(lookup(self._params, node.attrs.get("var"))))

    def _render_foreach(self, node: TagNode) -> _Step:
        items = lookup(self._params, node.attrs.get("foreach"))
        if not is_sequence(items):
            return []

        limit = self.options.max_foreach_items
        if len(items) > limit:
            logger.warning(
                "[foreach=%s] has %d items, rendering only the first %d",
                node.attrs.get("foreach"),
                len(items),
                limit,
            )
            items = items[:limit]

        outer = self._params
        fragments: list[Any] = []
        try:
            for item in items:
                self._params = overlay_params(outer, item)
                fragments.extend((yield node.children))
        finally:
            self._params = outer
        return fragments

    def _render_cond(self, node: TagNode) -> _Step:
        cond_key = node.attrs.get("cond")
        not_key = node.attrs.get("not")
        if cond_key and lookup(self._params, cond_key):
            return (yield node.children)
        if not_key and not lookup(self._params, not_key):
            return (yield node.children)
        return []

    # Output hooks

    @abstractmethod
    def _text(self, text: str) -> list[Any]:
        """Build the fragments for a literal text node."""

    @abstractmethod
    def _value(self, value: str) -> list[Any]:
        """Build the fragments for a formatted ``[var]`` value."""

    @abstractmethod
    def _element(self, tag: str, style: dict[str, str], attrs: dict[str, str], children: list[Any]) -> list[Any]:
        """Build the fragments for an element with children."""

    @abstractmethod
    def _void_element(self, tag: str, style: dict[str, str], attrs: dict[str, str]) -> list[Any]:
        """Build the fragments for an element without children."""

    @abstractmethod
    def _finish(self, fragments: list[Any]) -> Any:
        """Turn the top-level fragments into the renderer's result."""

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write rendered text to a file path or stream.

        Examples
        --------
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("<strong>x</strong>", buffer)
            >>> buffer.getvalue()
            '<strong>x</strong>'

        """
        write_content(text, output)


__all__ = ["BaseRenderer"]
