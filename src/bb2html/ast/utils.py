#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/ast/utils.py
"""Helpers for inspecting parsed forests."""

from __future__ import annotations

from typing import Sequence, Union

from bb2html.ast.nodes import Node, TagNode, TextNode
from bb2html.ast.visitors import walk


def extract_text(node_or_nodes: Union[Node, Sequence[Node]], joiner: str = "") -> str:
    """Extract the literal text of a node or forest.

    Parameters
    ----------
    node_or_nodes : Node or sequence of Node
        Node or forest to extract text from
    joiner : str, default ""
        String placed between consecutive text nodes

    Returns
    -------
    str
        Concatenated text content, ignoring tags and attributes

    Examples
    --------
        >>> extract_text(parse("[b]Hello[/b] world"))
        'Hello world'

    """
    nodes = [node_or_nodes] if isinstance(node_or_nodes, Node) else node_or_nodes
    return joiner.join(node.text for node in walk(nodes) if isinstance(node, TextNode))


def single_text_child(node: TagNode) -> str | None:
    """Return the text of ``node``'s only child when that child is a TextNode."""
    if len(node.children) == 1 and isinstance(node.children[0], TextNode):
        return node.children[0].text
    return None


__all__ = ["extract_text", "single_text_child"]
