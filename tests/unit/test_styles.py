#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for inline style computation."""

import pytest

from bb2html.renderers._styles import (
    resolve_font_size,
    resolve_image_style,
    resolve_length,
    split_cell_attrs,
    style_to_css,
    table_style,
)


@pytest.mark.unit
class TestLengths:
    """Test length and font size resolution."""

    @pytest.mark.parametrize("value,expected", [("12", "12px"), ("1.5em", "1.5em"), ("50%", "50%"), (None, "")])
    def test_resolve_length(self, value, expected):
        """Test that only bare integers gain a unit."""
        assert resolve_length(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [("1", "xx-small"), ("2", "x-small"), ("5", "large"), ("0", "0px"), ("8", "8px"), ("2em", "2em"), (None, "")],
    )
    def test_resolve_font_size(self, value, expected):
        """Test the 1-7 scale and its fallbacks."""
        assert resolve_font_size(value) == expected


@pytest.mark.unit
class TestImageStyle:
    """Test image sizing."""

    def test_dimensions_in_default_value(self):
        """Test WxH in the default value."""
        assert resolve_image_style({"img": "640x480"}) == {"width": "640px", "height": "480px"}

    def test_default_value_without_dimensions(self):
        """Test that a non-empty default value without a size yields no style."""
        assert resolve_image_style({"img": "big", "width": "10"}) == {}

    def test_empty_default_value_falls_back(self):
        """Test that an empty default value is ignored."""
        assert resolve_image_style({"img": "", "width": "10"}) == {"width": "10px"}

    def test_width_only(self):
        """Test one explicit dimension."""
        assert resolve_image_style({"width": "50%"}) == {"width": "50%"}

    def test_no_sizing(self):
        """Test an image without sizing attributes."""
        assert resolve_image_style({}) == {}


@pytest.mark.unit
class TestTableStyles:
    """Test table and cell styles."""

    def test_table_style_overlay(self):
        """Test that attributes override the defaults."""
        assert table_style({"border-collapse": "separate", "width": "1px"}) == {
            "border-collapse": "separate",
            "width": "1px",
        }

    def test_split_cell_attrs(self):
        """Test the split between style and element attributes."""
        style, attrs = split_cell_attrs({"colspan": "2", "rowspan": "3", "background": "red"})
        assert style == {"border": "1px solid gray", "background": "red"}
        assert attrs == {"colspan": "2", "rowspan": "3"}

    def test_split_cell_attrs_does_not_share_default(self):
        """Test that the default style dict is copied."""
        style, _ = split_cell_attrs({})
        style["border"] = "none"
        assert split_cell_attrs({})[0] == {"border": "1px solid gray"}


@pytest.mark.unit
def test_style_to_css():
    """Test declaration serialization in insertion order."""
    assert style_to_css({"width": "1px", "height": "2px"}) == "width:1px;height:2px;"
    assert style_to_css({}) == ""
