#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/ast/nodes.py
"""Node classes for parsed BBCode documents.

A parsed document is a *forest*: an ordered list of top-level nodes. There
are only two node kinds:

- ``TextNode`` holds literal text. Entities have already been decoded, so
  ``text`` is the logical character content, not escaped markup.
- ``TagNode`` holds a structural tag, its attributes and its children.

Nodes are immutable once built. Both kinds are frozen, hashable dataclasses
and tag attributes are a read-only mapping, so two parses of the same input
compare equal and a forest can be cached and rendered any number of times.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from bb2html.tags import TagName


class Node(ABC):
    """Base class for all nodes.

    All nodes support the visitor pattern for traversal and rendering.
    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@dataclass(frozen=True)
class TextNode(Node):
    """Literal text content.

    Parameters
    ----------
    text : str
        Decoded text

    """

    text: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text node."""
        return visitor.visit_text_node(self)


@dataclass(frozen=True)
class TagNode(Node):
    """A structural tag with attributes and children.

    Parameters
    ----------
    tag : str
        Tag name as written in the source, e.g. ``"size"``
    attrs : Mapping, default = empty mapping
        Attribute values. A default value written as ``[size=3]`` is stored
        under the tag's own name (``{"size": "3"}``). The node keeps a
        read-only copy, so later changes to the passed dict do not leak in.
    children : tuple of Node, default = empty tuple
        Child nodes in document order

    Notes
    -----
    ``attrs`` takes part in equality but not in the hash, since a mapping
    is not hashable. Equal nodes still hash equally.

    """

    tag: str
    attrs: Mapping[str, str] = field(default_factory=dict, hash=False)
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def kind(self) -> TagName:
        """Return the closed tag enumeration member for this node."""
        return TagName.from_name(self.tag)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this tag node."""
        return visitor.visit_tag_node(self)


__all__ = ["Node", "TextNode", "TagNode"]
