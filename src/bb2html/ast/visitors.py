#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/ast/visitors.py
"""Visitor pattern implementation for node traversal.

Visitors keep algorithms (rendering, text extraction, serialization) separate
from the node classes. Each node's ``accept`` calls the matching ``visit_*``
method on the visitor.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator

from bb2html.ast.nodes import Node, TagNode, TextNode


class NodeVisitor(ABC):
    """Abstract base class for node visitors.

    Examples
    --------
    Count the tags in a forest:

        >>> class TagCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...
        ...     def visit_text_node(self, node):
        ...         pass
        ...
        ...     def visit_tag_node(self, node):
        ...         self.count += 1
        ...         for child in node.children:
        ...             child.accept(self)

    """

    @abstractmethod
    def visit_text_node(self, node: TextNode) -> Any:
        """Visit a TextNode.

        Parameters
        ----------
        node : TextNode
            The text node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_tag_node(self, node: TagNode) -> Any:
        """Visit a TagNode.

        Parameters
        ----------
        node : TagNode
            The tag node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass


def walk(nodes: Iterable[Node]) -> Iterator[Node]:
    """Yield every node of a forest in depth-first document order."""
    stack: list[Node] = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, TagNode):
            stack.extend(reversed(node.children))


__all__ = ["NodeVisitor", "walk"]
