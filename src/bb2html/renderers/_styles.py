#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/renderers/_styles.py
"""Inline style computation shared by the HTML and element renderers."""

from __future__ import annotations

from typing import Mapping

from bb2html.constants import (
    DIGITS_PATTERN,
    FONT_SIZE_SCALE,
    IMAGE_DIMENSIONS_PATTERN,
    TABLE_CELL_DEFAULT_STYLE,
    TABLE_CELL_ELEMENT_ATTRIBUTES,
    TABLE_DEFAULT_STYLE,
)


def resolve_length(value: str | None) -> str:
    """Append ``px`` to a bare integer; any other value is kept verbatim."""
    if value is None:
        return ""
    if DIGITS_PATTERN.match(value):
        return f"{value}px"
    return value


def resolve_font_size(value: str | None) -> str:
    """Map a ``[size]`` value to a CSS font size.

    Parameters
    ----------
    value : str or None
        Default value of the size tag

    Returns
    -------
    str
        A CSS keyword for 1 through 7, ``<n>px`` for other integers, the
        value itself when it is not an integer, ``""`` when missing

    Examples
    --------
        >>> resolve_font_size("3")
        'small'
        >>> resolve_font_size("10")
        '10px'
        >>> resolve_font_size("larger")
        'larger'

    """
    if value is not None and value in FONT_SIZE_SCALE:
        return FONT_SIZE_SCALE[value]
    return resolve_length(value)


def resolve_image_style(attrs: Mapping[str, str]) -> dict[str, str]:
    """Compute width and height for an ``[img]`` tag.

    A default value such as ``[img=100x50]`` takes precedence and is the only
    source consulted when non-empty, even if it does not contain a size.
    Otherwise the ``width`` and ``height`` attributes are used.
    """
    if attrs.get("img"):
        match = IMAGE_DIMENSIONS_PATTERN.search(attrs["img"])
        if match is None:
            return {}
        return {"width": f"{match.group(1)}px", "height": f"{match.group(2)}px"}

    style: dict[str, str] = {}
    for name in ("width", "height"):
        if attrs.get(name):
            style[name] = resolve_length(attrs[name])
    return style


def table_style(attrs: Mapping[str, str]) -> dict[str, str]:
    """Return the default table style overlaid by every tag attribute."""
    return {**TABLE_DEFAULT_STYLE, **attrs}


def split_cell_attrs(attrs: Mapping[str, str]) -> tuple[dict[str, str], dict[str, str]]:
    """Split ``[td]`` attributes into a style dict and element attributes.

    ``colspan`` and ``rowspan`` are real HTML attributes; everything else is
    treated as a CSS property on top of the default cell border.
    """
    style = dict(TABLE_CELL_DEFAULT_STYLE)
    element_attrs: dict[str, str] = {}
    for key, value in attrs.items():
        if key in TABLE_CELL_ELEMENT_ATTRIBUTES:
            element_attrs[key] = value
        else:
            style[key] = value
    return style, element_attrs


def style_to_css(style: Mapping[str, str]) -> str:
    """Serialize a style dict as ``key:value;`` declarations."""
    return "".join(f"{key}:{value};" for key, value in style.items())


__all__ = [
    "resolve_length",
    "resolve_font_size",
    "resolve_image_style",
    "table_style",
    "split_cell_attrs",
    "style_to_css",
]
