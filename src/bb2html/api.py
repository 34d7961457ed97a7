"""The major exported API functions for BBCode parsing and rendering."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/bb2html/api.py
import logging
from dataclasses import fields
from typing import Any, Iterable, Mapping, Optional, TypeVar

from bb2html.ast.nodes import Node
from bb2html.exceptions import InvalidOptionsError, ValidationError
from bb2html.options.base import BaseParserOptions, BaseRendererOptions
from bb2html.options.bbcode import BBCodeParserOptions
from bb2html.options.element import ElementRendererOptions
from bb2html.options.html import HtmlRendererOptions
from bb2html.parsers.bbcode import BBCodeParser
from bb2html.renderers.element import ElementRenderer, Fragment
from bb2html.renderers.html import HtmlRenderer

logger = logging.getLogger(__name__)

# TypeVar for generic options creation
OptionsT = TypeVar("OptionsT", BaseParserOptions, BaseRendererOptions)


def _field_names(options_class: type) -> set[str]:
    return {f.name for f in fields(options_class)}


def _create_options_from_kwargs(
    options_class: type[OptionsT],
    options: Optional[OptionsT],
    options_type_name: str,
    **kwargs: Any,
) -> OptionsT:
    """Merge an optional options object with keyword overrides.

    Parameters
    ----------
    options_class : type[OptionsT]
        The options class expected by the parser or renderer.
    options : OptionsT or None
        Pre-configured options, or None for defaults.
    options_type_name : str
        Name of the options type for error messages (e.g., "parser" or "html").
    **kwargs
        Individual option values that override ``options``.

    Returns
    -------
    OptionsT
        Options instance with every override applied.

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not an instance of ``options_class``
    ValidationError
        If a keyword is not a field of ``options_class`` or a value is out of range

    """
    if options is not None and not isinstance(options, options_class):
        raise InvalidOptionsError(
            converter_name=options_type_name,
            expected_type=options_class,
            received_type=type(options),
        )

    unknown = sorted(set(kwargs) - _field_names(options_class))
    if unknown:
        raise ValidationError(
            f"Unknown {options_type_name} option(s): {', '.join(unknown)}",
            parameter_name=unknown[0],
            parameter_value=kwargs[unknown[0]],
        )

    if not kwargs:
        return options if options is not None else options_class()

    try:
        if options is not None:
            return options.create_updated(**kwargs)
        return options_class(**kwargs)
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e


def _split_kwargs_for_parser_and_renderer(
    renderer_class: type[BaseRendererOptions], kwargs: dict[str, Any]
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split kwargs between parser and renderer based on their field names.

    Raises
    ------
    ValidationError
        If a keyword matches neither options class

    """
    parser_fields = _field_names(BBCodeParserOptions)
    renderer_fields = _field_names(renderer_class)

    parser_kwargs: dict[str, Any] = {}
    renderer_kwargs: dict[str, Any] = {}
    unmatched = []

    for k, v in kwargs.items():
        if k in parser_fields:
            parser_kwargs[k] = v
        elif k in renderer_fields:
            renderer_kwargs[k] = v
        else:
            unmatched.append(k)

    if unmatched:
        raise ValidationError(
            f"Keyword argument(s) match neither parser nor renderer options: {', '.join(sorted(unmatched))}",
            parameter_name=unmatched[0],
            parameter_value=kwargs[unmatched[0]],
        )

    return parser_kwargs, renderer_kwargs


def _check_source(source: Any) -> None:
    if not isinstance(source, str):
        raise ValidationError(
            f"BBCode source must be a str, got {type(source).__name__}",
            parameter_name="source",
            parameter_value=source,
        )


def parse(source: str, options: Optional[BBCodeParserOptions] = None, **kwargs: Any) -> list[Node]:
    """Parse BBCode source into a node forest.

    Parsing is total: malformed markup is kept as literal text and never raises.

    Parameters
    ----------
    source : str
        BBCode text
    options : BBCodeParserOptions, optional
        Pre-configured parser options
    kwargs : Any
        Individual parser options that override settings in ``options``

    Returns
    -------
    list of Node
        Top-level nodes in document order

    Raises
    ------
    ValidationError
        If ``source`` is not a string or a keyword is not a parser option

    Examples
    --------
        >>> parse("[b]bold[/b]")
        [TagNode(tag='b', attrs=mappingproxy({}), children=(TextNode(text='bold'),))]
        >>> parse("a[x]b", merge_text_nodes=True)
        [TextNode(text='a[x]b')]

    """
    _check_source(source)
    parser_options = _create_options_from_kwargs(BBCodeParserOptions, options, "parser", **kwargs)
    return BBCodeParser(parser_options).parse(source)


def render(
    nodes: Iterable[Node],
    params: Optional[Mapping[str, Any]] = None,
    options: Optional[HtmlRendererOptions] = None,
    **kwargs: Any,
) -> str:
    """Render a parsed forest to HTML.

    Parameters
    ----------
    nodes : iterable of Node
        Parsed forest, as returned by :func:`parse`
    params : Mapping, optional
        Values for ``[var]``, ``[foreach]`` and ``[cond]``
    options : HtmlRendererOptions, optional
        Pre-configured renderer options
    kwargs : Any
        Individual renderer options that override settings in ``options``

    Returns
    -------
    str
        HTML fragment, or a complete document when ``standalone=True``

    Raises
    ------
    ParamsError
        If params is not a mapping
    ValidationError
        If a keyword is not an HTML renderer option

    Examples
    --------
        >>> render(parse("[color=red]x[/color]"))
        '<span style="color:red;">x</span>'

    """
    renderer_options = _create_options_from_kwargs(HtmlRendererOptions, options, "html", **kwargs)
    return HtmlRenderer(renderer_options).render(nodes, params)


def render_elements(
    nodes: Iterable[Node],
    params: Optional[Mapping[str, Any]] = None,
    options: Optional[ElementRendererOptions] = None,
    **kwargs: Any,
) -> list[Fragment]:
    """Render a parsed forest to structured element fragments.

    Parameters
    ----------
    nodes : iterable of Node
        Parsed forest
    params : Mapping, optional
        Template params
    options : ElementRendererOptions, optional
        Pre-configured renderer options
    kwargs : Any
        Individual renderer options that override settings in ``options``

    Returns
    -------
    list of Fragment
        ``str`` leaves and ``Element`` instances

    """
    renderer_options = _create_options_from_kwargs(ElementRendererOptions, options, "element", **kwargs)
    return ElementRenderer(renderer_options).render(nodes, params)


def to_html(
    source: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    parser_options: Optional[BBCodeParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
    **kwargs: Any,
) -> str:
    """Parse BBCode and render it to HTML in one call.

    Equivalent to ``render(parse(source), params)``. Keyword arguments are
    routed to the parser or renderer options by field name.

    Parameters
    ----------
    source : str
        BBCode text
    params : Mapping, optional
        Template params
    parser_options : BBCodeParserOptions, optional
        Pre-configured parser options
    renderer_options : HtmlRendererOptions, optional
        Pre-configured renderer options
    kwargs : Any
        Individual parser or renderer options

    Returns
    -------
    str
        Rendered HTML

    Examples
    --------
        >>> to_html("[foreach=items][var=name][/foreach]", {"items": [{"name": "a"}, {"name": "b"}]})
        'ab'
        >>> to_html("[b]x[/b]", standalone=True, title="Post")
        '<!DOCTYPE html>\\n<html lang="en">...'

    """
    parser_kwargs, renderer_kwargs = _split_kwargs_for_parser_and_renderer(HtmlRendererOptions, kwargs)
    nodes = parse(source, parser_options, **parser_kwargs)
    return render(nodes, params, renderer_options, **renderer_kwargs)


def to_elements(
    source: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    parser_options: Optional[BBCodeParserOptions] = None,
    renderer_options: Optional[ElementRendererOptions] = None,
    **kwargs: Any,
) -> list[Fragment]:
    """Parse BBCode and render it to element fragments in one call.

    See Also
    --------
    to_html : the same pipeline with HTML output

    """
    parser_kwargs, renderer_kwargs = _split_kwargs_for_parser_and_renderer(ElementRendererOptions, kwargs)
    nodes = parse(source, parser_options, **parser_kwargs)
    return render_elements(nodes, params, renderer_options, **renderer_kwargs)


__all__ = ["parse", "render", "render_elements", "to_html", "to_elements"]
