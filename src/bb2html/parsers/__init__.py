#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/parsers/__init__.py
"""Parsers that turn BBCode source into a node forest."""

from bb2html.parsers.bbcode import BBCodeParser, parse_bbcode
from bb2html.parsers.tokenizer import TagMatch, find_next_tag

__all__ = ["BBCodeParser", "parse_bbcode", "TagMatch", "find_next_tag"]
