#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the structured element renderer."""

import json

import pytest

from bb2html.exceptions import InvalidOptionsError, ParamsError
from bb2html.options import ElementRendererOptions, HtmlRendererOptions
from bb2html.parsers.bbcode import parse_bbcode
from bb2html.renderers.element import Element, ElementRenderer, fragments_to_dicts


def _elements(source: str, params=None, **options) -> list:
    return ElementRenderer(ElementRendererOptions(**options)).render(parse_bbcode(source), params)


@pytest.mark.unit
class TestTextFragments:
    """Test text leaves."""

    def test_plain_text(self):
        """Test that text is a raw string leaf."""
        assert _elements("hello world") == ["hello world"]

    def test_text_not_escaped(self):
        """Test that markup characters stay raw."""
        assert _elements("a < b & c") == ["a < b & c"]

    def test_newline_becomes_br_element(self):
        """Test that line breaks become br elements between pieces."""
        assert _elements("a\nb") == ["a", Element("br"), "b"]

    def test_trailing_newline_keeps_empty_piece(self):
        """Test that the empty piece after a trailing newline is kept."""
        assert _elements("a\r\n") == ["a", Element("br"), ""]

    def test_preserve_whitespace(self):
        """Test the non-breaking space substitution."""
        assert _elements("a b", preserve_whitespace=True) == ["a b"]

    def test_spaces_kept_by_default(self):
        """Test that spaces are kept as-is by default."""
        assert _elements("a  b") == ["a  b"]


@pytest.mark.unit
class TestElements:
    """Test the element structure for tags."""

    def test_emphasis(self):
        """Test a formatting tag with a line break inside."""
        assert _elements("[b]a\nb[/b]") == [Element("strong", children=["a", Element("br"), "b"])]

    def test_color_style(self):
        """Test that styles are plain dicts."""
        assert _elements("[color=#f00]x[/color]") == [Element("span", style={"color": "#f00"}, children=["x"])]

    def test_size_style(self):
        """Test the font size scale."""
        assert _elements("[size=6]x[/size]") == [Element("span", style={"font-size": "x-large"}, children=["x"])]

    def test_table_cell(self):
        """Test that colspan is an attribute and the rest is style."""
        result = _elements("[td colspan=2 width=10%]x[/td]")
        assert result == [
            Element(
                "td",
                style={"border": "1px solid gray", "width": "10%"},
                attrs={"colspan": "2"},
                children=["x"],
            )
        ]

    def test_link(self):
        """Test that href is kept unescaped."""
        assert _elements("[url=/a?b=1&c=2]x[/url]") == [Element("a", attrs={"href": "/a?b=1&c=2"}, children=["x"])]

    def test_image(self):
        """Test the void image element."""
        assert _elements("[img=10x20]a.png[/img]") == [
            Element("img", style={"width": "10px", "height": "20px"}, attrs={"src": "a.png"})
        ]

    def test_hr(self):
        """Test the void rule element."""
        assert _elements("[hr]") == [Element("hr")]

    def test_list(self):
        """Test list structure with the default margin."""
        assert _elements("[ol]\n[li]a[/li]\n[/ol]") == [
            Element("ol", style={"margin": "0"}, children=[Element("li", children=["a"])])
        ]

    def test_var_value_is_raw(self):
        """Test that var values are never escaped."""
        assert _elements("[var=x]", {"x": "<b>"}) == ["<b>"]

    def test_elements_are_independent(self):
        """Test that list styles are not shared between elements."""
        first, second = _elements("[ul][/ul][ul][/ul]")
        first.style["margin"] = "1em"
        assert second.style == {"margin": "0"}


@pytest.mark.unit
class TestSerialization:
    """Test conversion to JSON-compatible data."""

    def test_to_dict(self):
        """Test the dict projection of an element."""
        element = Element("a", attrs={"href": "x"}, children=["t", Element("br")])
        assert element.to_dict() == {
            "tag": "a",
            "style": {},
            "attrs": {"href": "x"},
            "children": ["t", {"tag": "br", "style": {}, "attrs": {}, "children": []}],
        }

    def test_fragments_to_dicts_is_json_serializable(self, forum_post):
        """Test that a rendered post can be dumped to JSON."""
        data = fragments_to_dicts(_elements(forum_post))
        assert json.loads(json.dumps(data)) == data


@pytest.mark.unit
class TestRendererApi:
    """Test renderer construction."""

    def test_wrong_options_type(self):
        """Test that HTML options are rejected."""
        with pytest.raises(InvalidOptionsError):
            ElementRenderer(HtmlRendererOptions())  # type: ignore[arg-type]

    def test_params_must_be_mapping(self):
        """Test that non-mapping params raise."""
        with pytest.raises(ParamsError):
            ElementRenderer().render(parse_bbcode("x"), "params")  # type: ignore[arg-type]

    def test_empty_forest(self):
        """Test rendering nothing."""
        assert ElementRenderer().render([]) == []
