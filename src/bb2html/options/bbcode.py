#  Copyright (c) 2025 Tom Villani, Ph.D.

# bb2html/options/bbcode.py
"""Configuration options for BBCode parsing."""

from __future__ import annotations

from dataclasses import dataclass, field

from bb2html.constants import DEFAULT_MAX_NESTING_DEPTH, DEFAULT_MERGE_TEXT_NODES
from bb2html.options.base import BaseParserOptions


@dataclass(frozen=True)
class BBCodeParserOptions(BaseParserOptions):
    """Configuration options for BBCode-to-tree parsing.

    Parameters
    ----------
    merge_text_nodes : bool, default False
        Merge adjacent text nodes into one. Literal fallbacks (unknown tags,
        unmatched close tags) otherwise produce separate text nodes next to
        the surrounding text. Rendered output is the same either way.
    max_nesting_depth : int, default 256
        Maximum number of simultaneously open tags. An opening tag beyond
        this depth is kept as literal text.

    Examples
    --------
        >>> from bb2html.parsers.bbcode import BBCodeParser
        >>> options = BBCodeParserOptions(merge_text_nodes=True)
        >>> nodes = BBCodeParser(options).parse("[b]x[/i][/b]")

    """

    merge_text_nodes: bool = field(
        default=DEFAULT_MERGE_TEXT_NODES,
        metadata={"help": "Merge adjacent text nodes produced by literal fallbacks", "importance": "advanced"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={
            "help": "Maximum depth of nested tags; deeper opening tags stay literal text",
            "type": int,
            "importance": "security",
        },
    )

    def __post_init__(self) -> None:
        """Validate options.

        Raises
        ------
        ValueError
            If max_nesting_depth is not positive.

        """
        super().__post_init__()
        if self.max_nesting_depth <= 0:
            raise ValueError(f"max_nesting_depth must be positive, got {self.max_nesting_depth}")
