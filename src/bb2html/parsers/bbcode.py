#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/parsers/bbcode.py
"""BBCode to document tree converter.

This module builds the node forest for a BBCode string. The tokenizer reports
one bracket construct at a time; the builder keeps a stack of open tags and
decides what each construct means:

- text before a construct becomes a ``TextNode``
- a construct whose name is not a known tag stays literal text
- a close tag that matches the innermost open tag finishes that tag
- any other close tag stays literal text and leaves the stack untouched
- an opening tag either starts a new frame or, when self-closing, is added
  directly

Line breaks directly after a tag marker are swallowed unless the tag's
``TagSpec`` says to keep them. When the input runs out, tags that are still
open are closed implicitly, innermost first.

Parsing never raises for string input: anything that is not well-formed
markup falls back to literal text.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bb2html.ast.nodes import Node, TagNode, TextNode
from bb2html.exceptions import InvalidOptionsError
from bb2html.options.bbcode import BBCodeParserOptions
from bb2html.parsers.tokenizer import TagMatch, find_next_tag, skip_newline
from bb2html.tags import get_tag_spec
from bb2html.utils.escape import unescape

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """An open tag whose children are still being collected."""

    name: str
    attrs: dict[str, str]
    children: list[Node] = field(default_factory=list)


class BBCodeParser:
    """Convert BBCode markup into a forest of ``TextNode`` and ``TagNode``.

    Parameters
    ----------
    options : BBCodeParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = BBCodeParser()
        >>> parser.parse("[b]Bold[/b] and [i]italic[/i]")
        [TagNode(tag='b', attrs=mappingproxy({}), children=(TextNode(text='Bold'),)), TextNode(text=' and '), ...]

    Unbalanced markup degrades to text:

        >>> parser.parse("[b]x[/i]")
        [TagNode(tag='b', attrs=mappingproxy({}), children=(TextNode(text='x'), TextNode(text='[/i]')))]

    """

    def __init__(self, options: BBCodeParserOptions | None = None):
        """Initialize the BBCode parser with options."""
        if options is not None and not isinstance(options, BBCodeParserOptions):
            raise InvalidOptionsError(
                converter_name="bbcode",
                expected_type=BBCodeParserOptions,
                received_type=type(options),
            )
        self.options: BBCodeParserOptions = options or BBCodeParserOptions()

    def parse(self, source: str) -> list[Node]:
        """Parse BBCode source into a node forest.

        Parameters
        ----------
        source : str
            BBCode text

        Returns
        -------
        list of Node
            Top-level nodes in document order

        """
        root: list[Node] = []
        stack: list[_Frame] = []
        current = root
        pos = 0

        while pos < len(source):
            match = find_next_tag(source, pos)
            if match is None:
                break

            if match.start > pos:
                self._append_text(current, source[pos : match.start])
            pos = match.end

            spec = get_tag_spec(match.name)
            if spec is None:
                logger.debug("Unknown tag %r at %d kept as text", match.raw, match.start)
                self._append_text(current, match.raw)

            elif match.is_closing:
                if stack and stack[-1].name == match.name:
                    current = self._close_frame(stack, root)
                    if not spec.break_after:
                        pos = skip_newline(source, pos)
                else:
                    logger.debug("Unmatched close tag %r at %d kept as text", match.raw, match.start)
                    self._append_text(current, match.raw)

            elif spec.self_closing:
                current.append(TagNode(tag=match.name, attrs=match.attrs))
                if not spec.break_start:
                    pos = skip_newline(source, pos)

            elif len(stack) >= self.options.max_nesting_depth:
                logger.debug("Nesting depth limit reached at %d, tag %r kept as text", match.start, match.raw)
                self._append_text(current, match.raw)

            else:
                current = self._open_frame(stack, match)
                if not spec.break_after:
                    pos = skip_newline(source, pos)

        if pos < len(source):
            self._append_text(current, source[pos:])

        if stack:
            logger.debug("Closing %d unterminated tag(s) at end of input", len(stack))
        while stack:
            self._close_frame(stack, root)

        return root

    @staticmethod
    def _open_frame(stack: list[_Frame], match: TagMatch) -> list[Node]:
        frame = _Frame(name=match.name, attrs=match.attrs)
        stack.append(frame)
        return frame.children

    @staticmethod
    def _close_frame(stack: list[_Frame], root: list[Node]) -> list[Node]:
        """Finish the innermost frame and return the parent accumulator."""
        frame = stack.pop()
        parent = stack[-1].children if stack else root
        parent.append(TagNode(tag=frame.name, attrs=frame.attrs, children=tuple(frame.children)))
        return parent

    def _append_text(self, accumulator: list[Node], raw: str) -> None:
        text = unescape(raw)
        if self.options.merge_text_nodes and accumulator and isinstance(accumulator[-1], TextNode):
            accumulator[-1] = TextNode(text=accumulator[-1].text + text)
        else:
            accumulator.append(TextNode(text=text))


def parse_bbcode(source: str, options: BBCodeParserOptions | None = None) -> list[Node]:
    """Parse BBCode source with a fresh :class:`BBCodeParser`."""
    return BBCodeParser(options).parse(source)


__all__ = ["BBCodeParser", "parse_bbcode"]
