#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the BBCode tree builder."""

import pytest

from bb2html.ast import TagNode, TextNode
from bb2html.constants import DEFAULT_MAX_NESTING_DEPTH
from bb2html.exceptions import InvalidOptionsError
from bb2html.options import BBCodeParserOptions, HtmlRendererOptions
from bb2html.parsers.bbcode import BBCodeParser, parse_bbcode
from bb2html.tags import TagName


def _parse(source: str, **options) -> list:
    return BBCodeParser(BBCodeParserOptions(**options)).parse(source)


@pytest.mark.unit
class TestBasicParsing:
    """Test parsing of well-formed markup."""

    def test_empty_input(self):
        """Test that empty input yields an empty forest."""
        assert _parse("") == []

    def test_plain_text(self):
        """Test that text without tags is one text node."""
        assert _parse("hello world") == [TextNode(text="hello world")]

    def test_entities_decoded_in_text(self):
        """Test that entities in text are decoded."""
        assert _parse("a &lt;b&gt; &#91;c&#93;") == [TextNode(text="a <b> [c]")]

    def test_simple_tag(self):
        """Test a single formatting tag."""
        assert _parse("[b]bold[/b]") == [TagNode(tag="b", children=(TextNode(text="bold"),))]

    def test_text_around_tag(self):
        """Test text before and after a tag."""
        assert _parse("a [i]b[/i] c") == [
            TextNode(text="a "),
            TagNode(tag="i", children=(TextNode(text="b"),)),
            TextNode(text=" c"),
        ]

    def test_nested_tags(self):
        """Test properly nested tags."""
        result = _parse("[b][i]x[/i][/b]")
        assert result == [TagNode(tag="b", children=(TagNode(tag="i", children=(TextNode(text="x"),)),))]

    def test_tag_with_default_value(self):
        """Test that the default value is stored under the tag name."""
        result = _parse("[color=red]x[/color]")
        assert result == [TagNode(tag="color", attrs={"color": "red"}, children=(TextNode(text="x"),))]

    def test_tag_with_attributes(self):
        """Test key=value attributes."""
        result = _parse("[td colspan=2]x[/td]")
        assert result[0].attrs == {"colspan": "2"}

    def test_empty_tag(self):
        """Test a tag with no content."""
        assert _parse("[b][/b]") == [TagNode(tag="b")]

    def test_kind_property(self):
        """Test that parsed nodes map onto the tag enumeration."""
        assert _parse("[url=x]y[/url]")[0].kind is TagName.URL

    def test_attrs_not_unescaped(self):
        """Test that attribute values are kept as written."""
        result = _parse("[url=a&amp;b]x[/url]")
        assert result[0].attrs == {"url": "a&amp;b"}

    def test_parse_bbcode_helper(self):
        """Test the module-level convenience function."""
        assert parse_bbcode("[u]x[/u]") == [TagNode(tag="u", children=(TextNode(text="x"),))]


@pytest.mark.unit
class TestLiteralFallback:
    """Test that malformed markup degrades to text."""

    def test_unknown_tag_kept_as_text(self):
        """Test that unknown tags are literal and split the text."""
        assert _parse("[foo]bar[/foo]") == [
            TextNode(text="[foo]"),
            TextNode(text="bar"),
            TextNode(text="[/foo]"),
        ]

    def test_tag_names_are_case_sensitive(self):
        """Test that uppercase names are not known tags."""
        result = _parse("[B]x[/B]")
        assert all(isinstance(node, TextNode) for node in result)

    def test_mismatched_close_tag(self):
        """Test that a close tag for a different tag is literal."""
        assert _parse("[b]x[/i]") == [
            TagNode(tag="b", children=(TextNode(text="x"), TextNode(text="[/i]"))),
        ]

    def test_mismatched_close_tag_merged(self):
        """Test the mismatched close tag with text merging enabled."""
        assert _parse("[b]x[/i]", merge_text_nodes=True) == [
            TagNode(tag="b", children=(TextNode(text="x[/i]"),)),
        ]

    def test_stray_close_tag_at_top_level(self):
        """Test a close tag with nothing open."""
        assert _parse("a[/b]c", merge_text_nodes=True) == [TextNode(text="a[/b]c")]

    def test_close_does_not_unwind_stack(self):
        """Test that a close tag only matches the innermost open tag."""
        result = _parse("[b][i]x[/b][/i]")
        # [/b] is literal inside i; [/i] closes i; b is closed at end of input
        assert result == [
            TagNode(
                tag="b",
                children=(TagNode(tag="i", children=(TextNode(text="x"), TextNode(text="[/b]"))),),
            )
        ]

    def test_unclosed_tags_closed_at_end(self):
        """Test implicit closing of open tags at end of input."""
        assert _parse("[b]x[i]y") == [
            TagNode(tag="b", children=(TextNode(text="x"), TagNode(tag="i", children=(TextNode(text="y"),)))),
        ]

    def test_lone_bracket(self):
        """Test brackets that never form a tag."""
        assert _parse("a [ b ] c") == [TextNode(text="a [ b ] c")]

    def test_unknown_close_for_unknown_tag(self):
        """Test that an unknown close tag is literal even at depth."""
        result = _parse("[b][/nope][/b]")
        assert result == [TagNode(tag="b", children=(TextNode(text="[/nope]"),))]

    def test_merge_combines_unknown_tag_with_text(self):
        """Test that merging folds literal fallbacks into neighbouring text."""
        assert _parse("x[foo]y", merge_text_nodes=True) == [TextNode(text="x[foo]y")]


@pytest.mark.unit
class TestLineBreakHandling:
    """Test newline swallowing around block tags."""

    def test_newline_after_block_tags_swallowed(self):
        """Test that one newline after each block marker is removed."""
        result = _parse("[ul]\n[li]x[/li]\n[/ul]\nafter")
        assert result == [
            TagNode(tag="ul", children=(TagNode(tag="li", children=(TextNode(text="x"),)),)),
            TextNode(text="after"),
        ]

    def test_second_newline_survives(self):
        """Test that only one newline is swallowed."""
        result = _parse("[ul][/ul]\n\nafter")
        assert result == [TagNode(tag="ul"), TextNode(text="\nafter")]

    def test_crlf_swallowed_as_one(self):
        """Test that CRLF counts as a single newline."""
        result = _parse("[table]\r\n[/table]\r\nx")
        assert result == [TagNode(tag="table"), TextNode(text="x")]

    def test_inline_tag_keeps_newline(self):
        """Test that inline tags keep the following newline."""
        result = _parse("[b]x[/b]\ny")
        assert result == [TagNode(tag="b", children=(TextNode(text="x"),)), TextNode(text="\ny")]

    def test_hr_swallows_newline(self):
        """Test the self-closing rule tag."""
        assert _parse("[hr]\ntext") == [TagNode(tag="hr"), TextNode(text="text")]

    def test_var_keeps_newline(self):
        """Test that the var tag keeps the following newline."""
        assert _parse("[var=x]\ny") == [TagNode(tag="var", attrs={"var": "x"}), TextNode(text="\ny")]

    def test_img_keeps_newline(self):
        """Test that img keeps the newline after its markers."""
        result = _parse("[img]a.png[/img]\nx")
        assert result == [TagNode(tag="img", children=(TextNode(text="a.png"),)), TextNode(text="\nx")]

    def test_foreach_swallows_newlines(self):
        """Test that template blocks can sit on their own lines."""
        result = _parse("[foreach=items]\n[var=name]\n[/foreach]\n")
        assert result == [
            TagNode(
                tag="foreach",
                attrs={"foreach": "items"},
                children=(TagNode(tag="var", attrs={"var": "name"}), TextNode(text="\n")),
            )
        ]


@pytest.mark.unit
class TestSelfClosing:
    """Test self-closing tags."""

    def test_hr_has_no_children(self):
        """Test that text after hr is a sibling, not a child."""
        assert _parse("[hr]x") == [TagNode(tag="hr"), TextNode(text="x")]

    def test_var_inside_block(self):
        """Test var as a child of foreach."""
        result = _parse("[foreach=items][var=name][/foreach]")
        assert result == [
            TagNode(tag="foreach", attrs={"foreach": "items"}, children=(TagNode(tag="var", attrs={"var": "name"}),))
        ]

    def test_close_marker_for_self_closing_tag_is_literal(self):
        """Test that [/hr] is never consumed since hr is never on the stack."""
        assert _parse("[hr][/hr]") == [TagNode(tag="hr"), TextNode(text="[/hr]")]


@pytest.mark.unit
class TestNestingDepth:
    """Test the nesting depth limit."""

    def test_depth_limit_keeps_tag_as_text(self):
        """Test that an opening tag beyond the limit is literal."""
        result = _parse("[b][i][u]x[/u][/i][/b]", max_nesting_depth=2)
        assert result == [
            TagNode(
                tag="b",
                children=(
                    TagNode(
                        tag="i",
                        children=(TextNode(text="[u]"), TextNode(text="x"), TextNode(text="[/u]")),
                    ),
                ),
            )
        ]

    def test_nesting_at_default_limit(self):
        """Test that nesting exactly at the default limit builds real tags."""
        result = _parse("[b]" * DEFAULT_MAX_NESTING_DEPTH + "x")
        node = result[0]
        for _ in range(DEFAULT_MAX_NESTING_DEPTH - 1):
            assert len(node.children) == 1
            node = node.children[0]
        assert node.tag == "b"
        assert node.children == (TextNode(text="x"),)

    def test_one_past_default_limit(self):
        """Test that the first opening tag past the default limit is literal."""
        result = _parse("[b]" * (DEFAULT_MAX_NESTING_DEPTH + 1) + "x")
        node = result[0]
        for _ in range(DEFAULT_MAX_NESTING_DEPTH - 1):
            node = node.children[0]
        assert node.children == (TextNode(text="[b]"), TextNode(text="x"))

    def test_self_closing_ignores_limit(self):
        """Test that self-closing tags never count toward depth."""
        result = _parse("[b][hr][/b]", max_nesting_depth=1)
        assert result == [TagNode(tag="b", children=(TagNode(tag="hr"),))]


@pytest.mark.unit
class TestParserOptions:
    """Test option handling."""

    def test_default_options(self):
        """Test that the parser works without options."""
        parser = BBCodeParser()
        assert parser.options == BBCodeParserOptions()

    def test_wrong_options_type(self):
        """Test that renderer options are rejected."""
        with pytest.raises(InvalidOptionsError):
            BBCodeParser(HtmlRendererOptions())  # type: ignore[arg-type]

    def test_invalid_nesting_depth(self):
        """Test that a non-positive depth is rejected."""
        with pytest.raises(ValueError):
            BBCodeParserOptions(max_nesting_depth=0)

    def test_parse_is_deterministic(self, forum_post):
        """Test that two parses compare equal."""
        assert _parse(forum_post) == _parse(forum_post)
