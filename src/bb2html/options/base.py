#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for parser and renderer options.

This module defines the foundation classes for the options used throughout
the bb2html pipeline. Options are frozen dataclasses; each field carries
``metadata`` with a ``help`` string (and an ``importance`` hint) that the
command-line interface uses to build its arguments.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from bb2html.constants import DEFAULT_MAX_FOREACH_ITEMS


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    max_foreach_items : int
        Maximum number of iterations a single ``[foreach]`` tag renders.
        Extra items are dropped with a warning.

    """

    max_foreach_items: int = field(
        default=DEFAULT_MAX_FOREACH_ITEMS,
        metadata={
            "help": "Maximum number of items a single [foreach] tag renders",
            "type": int,
            "importance": "security",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges for base renderer options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.max_foreach_items <= 0:
            raise ValueError(f"max_foreach_items must be positive, got {self.max_foreach_items}")


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Notes
    -----
    Subclasses define format-specific parsing options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate option values; the base class has none."""
        pass
