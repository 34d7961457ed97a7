#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/ast/serialization.py
"""JSON serialization and deserialization for parsed forests.

A parsed forest can be stored and rendered again later with different
params. This module converts forests to plain dictionaries and JSON and
back again; the round trip yields a forest equal to the original.

Examples
--------
Serialize a forest to JSON:

    >>> from bb2html import parse
    >>> from bb2html.ast.serialization import nodes_to_json, json_to_nodes
    >>> json_str = nodes_to_json(parse("[b]Hi[/b]"), indent=2)

Deserialize it again:

    >>> nodes = json_to_nodes(json_str)
    >>> nodes[0].tag
    'b'

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterator, Sequence

from bb2html.ast.nodes import Node, TagNode, TextNode

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _serialize_text_node(node: TextNode) -> dict[str, Any]:
    return {"node_type": "TextNode", "text": node.text}


def _serialize_tag_node(node: TagNode) -> dict[str, Any]:
    # Children are filled in by node_to_dict
    return {"node_type": "TagNode", "tag": node.tag, "attrs": dict(node.attrs), "children": []}


_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    TextNode: _serialize_text_node,
    TagNode: _serialize_tag_node,
}


def _serialize_shallow(node: Node) -> dict[str, Any]:
    serializer = _SERIALIZATION_DISPATCH.get(type(node))
    if serializer:
        return serializer(node)

    raise ValueError(f"Unknown node type for serialization: {type(node).__name__}")


def node_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a dictionary representation.

    The tree is walked with an explicit stack, so any nesting depth the
    parser produces can be serialized.

    Parameters
    ----------
    node : Node
        The node to convert

    Returns
    -------
    dict
        Dictionary representation of the node

    Raises
    ------
    ValueError
        If the node type is not serializable

    Examples
    --------
    >>> node_to_dict(TextNode(text="Hello"))
    {'node_type': 'TextNode', 'text': 'Hello'}

    """
    root = _serialize_shallow(node)
    pending: list[tuple[Node, dict[str, Any]]] = [(node, root)]
    while pending:
        current, data = pending.pop()
        if isinstance(current, TagNode):
            for child in current.children:
                child_data = _serialize_shallow(child)
                data["children"].append(child_data)
                pending.append((child, child_data))
    return root


def _deserialize_text_node(data: dict[str, Any], children: tuple[Node, ...]) -> TextNode:
    return TextNode(text=str(data.get("text", "")))


def _deserialize_tag_node(data: dict[str, Any], children: tuple[Node, ...]) -> TagNode:
    tag = data.get("tag")
    if not isinstance(tag, str) or not tag:
        raise ValueError("TagNode dictionary must contain a non-empty 'tag' string")
    attrs = {str(key): str(value) for key, value in (data.get("attrs") or {}).items()}
    return TagNode(tag=tag, attrs=attrs, children=children)


_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any], tuple[Node, ...]], Node]] = {
    "TextNode": _deserialize_text_node,
    "TagNode": _deserialize_tag_node,
}

_EXHAUSTED = object()


def _child_dicts(data: dict[str, Any]) -> Iterator[Any]:
    if data.get("node_type") != "TagNode":
        return iter(())
    return iter(data.get("children") or [])


def _build_node(data: dict[str, Any], children: tuple[Node, ...], strict_mode: bool) -> Node:
    node_type = data.get("node_type")
    deserializer = _DESERIALIZATION_DISPATCH.get(node_type) if isinstance(node_type, str) else None
    if deserializer is None:
        if strict_mode:
            raise ValueError(f"Unknown node type: {node_type!r}")
        logger.warning("Unknown node type %r, replacing with empty text", node_type)
        return TextNode(text="")

    return deserializer(data, children)


def dict_to_node(data: dict[str, Any], strict_mode: bool = True) -> Node:
    """Convert a dictionary representation back to a node.

    Children are rebuilt before their parent using an explicit stack, so
    deeply nested dictionaries do not hit the recursion limit.

    Parameters
    ----------
    data : dict
        Dictionary representation of a node
    strict_mode : bool, default True
        If True, raise ValueError on unknown node types.
        If False, replace unknown nodes with an empty TextNode.

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValueError
        If the dictionary has no or an unknown node type and strict_mode is True

    """
    stack: list[tuple[dict[str, Any], list[Node], Iterator[Any]]] = [(data, [], _child_dicts(data))]
    while True:
        current, built, pending = stack[-1]
        child = next(pending, _EXHAUSTED)
        if child is not _EXHAUSTED:
            stack.append((child, [], _child_dicts(child)))
            continue

        stack.pop()
        node = _build_node(current, tuple(built), strict_mode)
        if not stack:
            return node
        stack[-1][1].append(node)


def nodes_to_dict(nodes: Sequence[Node]) -> dict[str, Any]:
    """Convert a forest to a versioned dictionary.

    Returns
    -------
    dict
        ``{"schema_version": 1, "nodes": [...]}``

    """
    return {"schema_version": SCHEMA_VERSION, "nodes": [node_to_dict(node) for node in nodes]}


def dict_to_nodes(data: dict[str, Any], validate_schema: bool = True, strict_mode: bool = True) -> list[Node]:
    """Convert a versioned dictionary produced by :func:`nodes_to_dict` back to a forest.

    Parameters
    ----------
    data : dict
        Versioned forest dictionary
    validate_schema : bool, default True
        If True, raise on unsupported schema versions.
        If False, only log a warning.
    strict_mode : bool, default True
        Passed through to :func:`dict_to_node`

    Returns
    -------
    list of Node
        Reconstructed forest

    Raises
    ------
    ValueError
        If the schema version is unsupported or a node cannot be rebuilt

    """
    schema_version = data.get("schema_version", SCHEMA_VERSION)

    if validate_schema:
        if not isinstance(schema_version, int):
            raise ValueError(f"Schema version must be an integer, got {type(schema_version).__name__}")
        if schema_version != SCHEMA_VERSION:
            raise ValueError(
                f"Unsupported schema version: {schema_version}. "
                f"This version of bb2html supports schema version {SCHEMA_VERSION} only."
            )
    elif schema_version != SCHEMA_VERSION:
        logger.warning(
            "Schema version %s differs from supported version %s. "
            "Attempting to load anyway (schema validation disabled).",
            schema_version,
            SCHEMA_VERSION,
        )

    nodes = data.get("nodes")
    if not isinstance(nodes, list):
        raise ValueError("Forest dictionary must contain a 'nodes' list")
    return [dict_to_node(item, strict_mode=strict_mode) for item in nodes]


def nodes_to_json(nodes: Sequence[Node], indent: int | None = None) -> str:
    """Serialize a forest to a JSON string.

    Unicode characters are preserved without escape sequences.

    Parameters
    ----------
    nodes : sequence of Node
        Forest to serialize
    indent : int or None, default None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string with a ``schema_version`` field

    """
    return json.dumps(nodes_to_dict(nodes), indent=indent, ensure_ascii=False)


def json_to_nodes(json_str: str, validate_schema: bool = True, strict_mode: bool = True) -> list[Node]:
    """Deserialize a JSON string produced by :func:`nodes_to_json`.

    Raises
    ------
    ValueError
        If the JSON does not describe a forest
    json.JSONDecodeError
        If the JSON string is malformed

    """
    data = json.loads(json_str)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return dict_to_nodes(data, validate_schema=validate_schema, strict_mode=strict_mode)


__all__ = [
    "SCHEMA_VERSION",
    "node_to_dict",
    "dict_to_node",
    "nodes_to_dict",
    "dict_to_nodes",
    "nodes_to_json",
    "json_to_nodes",
]
