#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for the bb2html library.

Reads BBCode from a file or stdin and writes HTML, element JSON or the parsed
tree as JSON to a file or stdout.

Environment Variable Support
----------------------------
Every parser and renderer option reads a default from ``BB2HTML_<OPTION>``
where the option's field name is uppercased (``BB2HTML_STANDALONE=true``,
``BB2HTML_MAX_NESTING_DEPTH=64``). ``BB2HTML_FORMAT`` sets the output format.
Explicit flags always override environment variables, which override the
config file.

Examples
--------
Render a file::

    $ bb2html post.bbcode --out post.html

Render a template with params::

    $ bb2html card.bbcode --params data.yaml --param user=Ann --param admin=true

Dump the parsed tree::

    $ echo "[b]x[/b]" | bb2html --format ast

"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict

from bb2html.api import parse, render, render_elements
from bb2html.ast.serialization import nodes_to_json
from bb2html.cli.builder import (
    EXIT_SUCCESS,
    OPTIONS_GROUPS,
    DynamicCLIBuilder,
    create_parser,
    get_exit_code_for_exception,
)
from bb2html.cli.config import (
    load_config_with_priority,
    load_env_options,
    load_params,
    merge_configs,
    option_fields,
)
from bb2html.constants import DEFAULT_OUTPUT_FORMAT, ENV_CONFIG_VAR, ENV_PREFIX
from bb2html.exceptions import Bb2HtmlError, ValidationError
from bb2html.logging_utils import configure_logging
from bb2html.options.bbcode import BBCodeParserOptions
from bb2html.options.element import ElementRendererOptions
from bb2html.options.html import HtmlRendererOptions
from bb2html.renderers.element import fragments_to_dicts
from bb2html.utils.io_utils import read_text_input, write_content

logger = logging.getLogger(__name__)

__all__ = ["main", "DynamicCLIBuilder", "create_parser"]

_OUTPUT_FORMATS = ("html", "elements", "ast")


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _collect_option_values(parsed_args: argparse.Namespace, config: Dict[str, Any]) -> Dict[str, Any]:
    """Layer config file, environment and explicit flag values for all option fields."""
    all_fields = option_fields(*OPTIONS_GROUPS.values())
    field_names = {field.name for field in all_fields}

    unknown = sorted(set(config) - field_names - {"format", "params"})
    if unknown:
        logger.warning("Ignoring unknown config key(s): %s", ", ".join(unknown))

    file_values = {k: v for k, v in config.items() if k in field_names}
    env_values = load_env_options(all_fields)
    cli_values = {name: getattr(parsed_args, name) for name in field_names if getattr(parsed_args, name) is not None}
    return merge_configs(merge_configs(file_values, env_values), cli_values)


def _resolve_output_format(parsed_args: argparse.Namespace, config: Dict[str, Any]) -> str:
    output_format = parsed_args.format or os.environ.get(f"{ENV_PREFIX}FORMAT") or config.get("format")
    output_format = output_format or DEFAULT_OUTPUT_FORMAT
    if output_format not in _OUTPUT_FORMATS:
        raise ValidationError(
            f"Unknown output format {output_format!r}, expected one of: {', '.join(_OUTPUT_FORMATS)}",
            parameter_name="format",
            parameter_value=output_format,
        )
    return output_format


def _build_options(options_class: type, values: Dict[str, Any]) -> Any:
    """Instantiate an options class from the subset of ``values`` it accepts."""
    accepted = {field.name for field in option_fields(options_class)}
    try:
        return options_class(**{k: v for k, v in values.items() if k in accepted})
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid option value: {e}", original_error=e) from e


def _read_source(input_arg: str | None) -> str:
    if input_arg is None or input_arg == "-":
        logger.debug("Reading BBCode from stdin")
        return read_text_input(getattr(sys.stdin, "buffer", sys.stdin))
    return read_text_input(input_arg)


def _convert(parsed_args: argparse.Namespace) -> str:
    """Run one conversion and return the output text."""
    if parsed_args.no_config:
        config: Dict[str, Any] = {}
    else:
        config = load_config_with_priority(parsed_args.config, os.environ.get(ENV_CONFIG_VAR))

    output_format = _resolve_output_format(parsed_args, config)
    values = _collect_option_values(parsed_args, config)

    base_params = config.get("params") or {}
    if not isinstance(base_params, dict):
        raise ValidationError("Config key 'params' must be a table/mapping", parameter_name="params")
    params = load_params(parsed_args.params, parsed_args.param, base=base_params)

    source = _read_source(parsed_args.input)
    nodes = parse(source, _build_options(BBCodeParserOptions, values))
    logger.debug("Parsed %d top-level node(s)", len(nodes))

    if output_format == "ast":
        return nodes_to_json(nodes, indent=2)
    if output_format == "elements":
        fragments = render_elements(nodes, params, _build_options(ElementRendererOptions, values))
        return json.dumps(fragments_to_dicts(fragments), indent=2, ensure_ascii=False)
    return render(nodes, params, _build_options(HtmlRendererOptions, values))


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return the process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        output = _convert(parsed_args)
        if parsed_args.out:
            write_content(output, parsed_args.out)
            logger.info("Wrote %s", parsed_args.out)
        else:
            sys.stdout.write(output)
            if not output.endswith("\n"):
                sys.stdout.write("\n")
    except Bb2HtmlError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
