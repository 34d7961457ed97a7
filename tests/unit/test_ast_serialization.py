#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for forest serialization and deserialization."""
import json
import logging

import pytest

from bb2html.ast import TagNode, TextNode, extract_text, walk
from bb2html.ast.serialization import (
    SCHEMA_VERSION,
    dict_to_node,
    dict_to_nodes,
    json_to_nodes,
    node_to_dict,
    nodes_to_dict,
    nodes_to_json,
)
from bb2html.parsers.bbcode import parse_bbcode
from bb2html.renderers.html import HtmlRenderer


@pytest.mark.unit
class TestNodeToDict:
    """Test node to dictionary conversion."""

    def test_text_node_to_dict(self) -> None:
        """Test converting a TextNode."""
        assert node_to_dict(TextNode(text="Hello")) == {"node_type": "TextNode", "text": "Hello"}

    def test_tag_node_to_dict(self) -> None:
        """Test converting a TagNode with attributes and children."""
        node = TagNode(tag="color", attrs={"color": "red"}, children=(TextNode(text="x"),))
        assert node_to_dict(node) == {
            "node_type": "TagNode",
            "tag": "color",
            "attrs": {"color": "red"},
            "children": [{"node_type": "TextNode", "text": "x"}],
        }

    def test_unknown_node_type(self) -> None:
        """Test that foreign objects are rejected."""
        with pytest.raises(ValueError, match="Unknown node type"):
            node_to_dict("not a node")  # type: ignore[arg-type]


@pytest.mark.unit
class TestDictToNode:
    """Test dictionary to node conversion."""

    def test_text_node(self) -> None:
        """Test rebuilding a TextNode."""
        assert dict_to_node({"node_type": "TextNode", "text": "a"}) == TextNode(text="a")

    def test_tag_node_defaults(self) -> None:
        """Test that attrs and children may be omitted."""
        assert dict_to_node({"node_type": "TagNode", "tag": "hr"}) == TagNode(tag="hr")

    def test_tag_node_requires_tag(self) -> None:
        """Test that a TagNode needs a tag name."""
        with pytest.raises(ValueError, match="non-empty 'tag'"):
            dict_to_node({"node_type": "TagNode", "tag": ""})

    def test_unknown_type_strict(self) -> None:
        """Test strict mode with an unknown node type."""
        with pytest.raises(ValueError, match="Unknown node type"):
            dict_to_node({"node_type": "Paragraph"})

    def test_missing_type_strict(self) -> None:
        """Test strict mode without a node type."""
        with pytest.raises(ValueError):
            dict_to_node({"text": "x"})

    def test_unknown_type_lenient(self, caplog) -> None:
        """Test that lenient mode replaces unknown nodes with empty text."""
        with caplog.at_level(logging.WARNING, logger="bb2html.ast.serialization"):
            node = dict_to_node({"node_type": "Paragraph"}, strict_mode=False)
        assert node == TextNode(text="")
        assert "Paragraph" in caplog.text

    def test_lenient_mode_applies_to_children(self) -> None:
        """Test that strict_mode is passed down to children."""
        data = {"node_type": "TagNode", "tag": "b", "children": [{"node_type": "Bogus"}]}
        assert dict_to_node(data, strict_mode=False) == TagNode(tag="b", children=(TextNode(text=""),))


@pytest.mark.unit
class TestForestSerialization:
    """Test versioned forest conversion."""

    def test_nodes_to_dict(self) -> None:
        """Test the versioned envelope."""
        data = nodes_to_dict([TextNode(text="a")])
        assert data == {"schema_version": SCHEMA_VERSION, "nodes": [{"node_type": "TextNode", "text": "a"}]}

    def test_round_trip(self, forum_post) -> None:
        """Test that a parsed post survives a JSON round trip unchanged."""
        forest = parse_bbcode(forum_post)
        assert json_to_nodes(nodes_to_json(forest)) == forest

    def test_round_trip_renders_identically(self, forum_post) -> None:
        """Test that a deserialized forest renders the same HTML."""
        forest = parse_bbcode(forum_post)
        restored = json_to_nodes(nodes_to_json(forest, indent=2))
        assert HtmlRenderer().render(restored) == HtmlRenderer().render(forest)

    def test_json_keeps_unicode(self) -> None:
        """Test that non-ASCII text is not escaped."""
        assert "héllo" in nodes_to_json([TextNode(text="héllo")])

    def test_indent(self) -> None:
        """Test pretty-printed output."""
        assert "\n  " in nodes_to_json([TextNode(text="a")], indent=2)

    def test_missing_schema_version_accepted(self) -> None:
        """Test that a missing version is treated as current."""
        assert dict_to_nodes({"nodes": []}) == []

    def test_unsupported_schema_version(self) -> None:
        """Test that other schema versions are rejected."""
        with pytest.raises(ValueError, match="Unsupported schema version"):
            dict_to_nodes({"schema_version": 99, "nodes": []})

    def test_non_integer_schema_version(self) -> None:
        """Test that a non-integer version is rejected."""
        with pytest.raises(ValueError, match="must be an integer"):
            dict_to_nodes({"schema_version": "1", "nodes": []})

    def test_schema_validation_disabled(self, caplog) -> None:
        """Test that validation can be downgraded to a warning."""
        data = {"schema_version": 2, "nodes": [{"node_type": "TextNode", "text": "a"}]}
        with caplog.at_level(logging.WARNING, logger="bb2html.ast.serialization"):
            nodes = dict_to_nodes(data, validate_schema=False)
        assert nodes == [TextNode(text="a")]
        assert "schema validation disabled" in caplog.text

    def test_nodes_must_be_list(self) -> None:
        """Test an envelope without a nodes list."""
        with pytest.raises(ValueError, match="'nodes' list"):
            dict_to_nodes({"schema_version": SCHEMA_VERSION, "nodes": {}})

    def test_json_must_be_object(self) -> None:
        """Test a JSON document that is not an object."""
        with pytest.raises(ValueError, match="Expected a JSON object"):
            json_to_nodes("[]")

    def test_malformed_json(self) -> None:
        """Test that malformed JSON raises a decode error."""
        with pytest.raises(json.JSONDecodeError):
            json_to_nodes("{not json")


@pytest.mark.unit
class TestTraversal:
    """Test the traversal helpers."""

    def test_walk_document_order(self) -> None:
        """Test depth-first document order."""
        forest = parse_bbcode("a[b]b[i]c[/i][/b]d")
        names = [node.tag if isinstance(node, TagNode) else node.text for node in walk(forest)]
        assert names == ["a", "b", "b", "i", "c", "d"]

    def test_extract_text(self) -> None:
        """Test text extraction ignoring tags."""
        assert extract_text(parse_bbcode("[b]Hello[/b] [url=x]world[/url]")) == "Hello world"

    def test_extract_text_single_node(self) -> None:
        """Test extraction from one node with a joiner."""
        node = TagNode(tag="b", children=(TextNode(text="a"), TextNode(text="b")))
        assert extract_text(node, joiner=" ") == "a b"

    def test_kind_for_unknown_tag(self) -> None:
        """Test that unknown names map to the generic kind."""
        assert TagNode(tag="spoiler").kind.value == ""
