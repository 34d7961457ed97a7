#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for structured element rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from bb2html.constants import DEFAULT_ELEMENT_PRESERVE_WHITESPACE
from bb2html.options.base import BaseRendererOptions


@dataclass(frozen=True)
class ElementRendererOptions(BaseRendererOptions):
    """Configuration options for rendering a parsed forest to element fragments.

    Parameters
    ----------
    preserve_whitespace : bool, default False
        Replace spaces in text leaves with non-breaking spaces, mirroring the
        ``&nbsp;`` substitution of the HTML renderer.

    """

    preserve_whitespace: bool = field(
        default=DEFAULT_ELEMENT_PRESERVE_WHITESPACE,
        metadata={"help": "Use non-breaking spaces in text leaves", "importance": "advanced"},
    )
