#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/ast/__init__.py
"""Document tree for parsed BBCode.

The module consists of several components:

- nodes: ``TextNode`` and ``TagNode``
- visitors: visitor base class and depth-first traversal
- serialization: dict/JSON conversion for caching parsed forests
- utils: text extraction helpers

Examples
--------
    >>> from bb2html.ast import TagNode, TextNode
    >>> forest = [TagNode(tag="b", children=(TextNode(text="bold"),))]

"""

from __future__ import annotations

from bb2html.ast.nodes import Node, TagNode, TextNode
from bb2html.ast.serialization import (
    dict_to_node,
    dict_to_nodes,
    json_to_nodes,
    node_to_dict,
    nodes_to_dict,
    nodes_to_json,
)
from bb2html.ast.utils import extract_text
from bb2html.ast.visitors import NodeVisitor, walk

__all__ = [
    "Node",
    "TagNode",
    "TextNode",
    "NodeVisitor",
    "walk",
    "extract_text",
    "node_to_dict",
    "dict_to_node",
    "nodes_to_dict",
    "dict_to_nodes",
    "nodes_to_json",
    "json_to_nodes",
]
