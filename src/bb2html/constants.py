#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for bb2html.

This module centralizes the hardcoded values and default configuration used
across the library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Parsing - Tree builder defaults and patterns
3. Rendering - Renderer defaults, style tables and output markers
4. CLI and Configuration - Environment variables and config discovery
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

OutputFormat = Literal["html", "elements", "ast"]

# =============================================================================
# Parsing
# =============================================================================

DEFAULT_MERGE_TEXT_NODES = False
DEFAULT_MAX_NESTING_DEPTH = 256

# Matches exactly one line terminator; CRLF must come before CR.
NEWLINE_PATTERN = re.compile(r"\r\n|\r|\n")

# =============================================================================
# Rendering
# =============================================================================

DEFAULT_MAX_FOREACH_ITEMS = 10000

DEFAULT_HTML_LINE_BREAK = "<br />"
DEFAULT_HTML_ESCAPE_PARAMS = True
DEFAULT_HTML_STANDALONE = False
DEFAULT_HTML_TITLE = ""
DEFAULT_HTML_FONT_FAMILY = '-apple-system,BlinkMacSystemFont,"Segoe UI",Roboto,Helvetica,Arial,sans-serif'
DEFAULT_HTML_FONT_SIZE = "14px"
HTML_NBSP = "&nbsp;"

DEFAULT_ELEMENT_PRESERVE_WHITESPACE = False
ELEMENT_NBSP = "\u00a0"

# [size=N] with N in 1..7 maps onto the CSS absolute-size keywords.
FONT_SIZE_SCALE: dict[str, str] = {
    "1": "xx-small",
    "2": "x-small",
    "3": "small",
    "4": "medium",
    "5": "large",
    "6": "x-large",
    "7": "xx-large",
}

DIGITS_PATTERN = re.compile(r"^\d+$")
IMAGE_DIMENSIONS_PATTERN = re.compile(r"(\d+)x(\d+)")

# Whitespace other than line terminators
INLINE_WHITESPACE_PATTERN = re.compile(r"[^\S\r\n]")

LIST_STYLE: dict[str, str] = {"margin": "0"}
TABLE_DEFAULT_STYLE: dict[str, str] = {"border-collapse": "collapse"}
TABLE_CELL_DEFAULT_STYLE: dict[str, str] = {"border": "1px solid gray"}
TABLE_CELL_ELEMENT_ATTRIBUTES = frozenset({"colspan", "rowspan"})

# =============================================================================
# CLI and Configuration
# =============================================================================

ENV_PREFIX = "BB2HTML_"
ENV_CONFIG_VAR = "BB2HTML_CONFIG"
CONFIG_FILENAMES = [".bb2html.toml", ".bb2html.yaml", ".bb2html.yml", ".bb2html.json", "pyproject.toml"]
PYPROJECT_TOOL_SECTION = "bb2html"
DEFAULT_OUTPUT_FORMAT: OutputFormat = "html"
