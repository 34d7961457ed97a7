#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Argument parser construction for the bb2html CLI.

Option arguments are generated from the options dataclasses using their
field metadata (``help``, ``cli_name``) so that a new option field shows up
on the command line without touching this module.
"""

import argparse
import logging
from dataclasses import MISSING, Field, fields
from typing import Any, Dict, Type

from bb2html import __version__
from bb2html.constants import DEFAULT_OUTPUT_FORMAT, ENV_CONFIG_VAR, ENV_PREFIX
from bb2html.exceptions import FileError, RenderingError, ValidationError
from bb2html.options.bbcode import BBCodeParserOptions
from bb2html.options.element import ElementRendererOptions
from bb2html.options.html import HtmlRendererOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_RENDERING_ERROR = 7

# Group title -> options class, in the order the groups appear in --help
OPTIONS_GROUPS: Dict[str, Type[Any]] = {
    "Parser options": BBCodeParserOptions,
    "HTML output options": HtmlRendererOptions,
    "Element output options": ElementRendererOptions,
}


class DynamicCLIBuilder:
    """Build CLI arguments from options dataclasses.

    Every generated argument defaults to ``None`` so the caller can tell an
    explicit flag apart from an omitted one and layer environment and config
    file values underneath.
    """

    def __init__(self) -> None:
        """Initialize the builder."""
        self.option_dests: list[str] = []

    @staticmethod
    def snake_to_kebab(name: str) -> str:
        """Convert ``snake_case`` to ``kebab-case``."""
        return name.replace("_", "-")

    def infer_cli_name(self, field: Field) -> str:
        """Return the flag name (without dashes) for an options field.

        ``cli_name`` metadata wins; a boolean that defaults to True becomes a
        ``no-`` flag.
        """
        cli_name = field.metadata.get("cli_name")
        if cli_name:
            return cli_name
        kebab = self.snake_to_kebab(field.name)
        if field.default is True:
            return f"no-{kebab}"
        return kebab

    def get_argument_kwargs(self, field: Field) -> Dict[str, Any]:
        """Return ``add_argument`` keyword arguments for an options field."""
        help_text = field.metadata.get("help", "")
        kwargs: Dict[str, Any] = {"dest": field.name, "default": None}

        default = field.default
        if isinstance(default, bool):
            kwargs["action"] = "store_const"
            kwargs["const"] = not default
            kwargs["help"] = help_text
            return kwargs

        field_type = field.metadata.get("type") or (type(default) if default is not MISSING else str)
        kwargs["type"] = field_type
        kwargs["metavar"] = "N" if field_type is int else "VALUE"
        kwargs["help"] = f"{help_text} (default: {default})" if default not in (MISSING, "") else help_text
        return kwargs

    def add_options_arguments(self, parser: argparse.ArgumentParser, title: str, options_class: Type[Any]) -> None:
        """Add one argument group for the fields of ``options_class``.

        Fields already added by an earlier group are skipped.
        """
        group = parser.add_argument_group(title)
        for field in fields(options_class):
            if field.name in self.option_dests:
                continue
            group.add_argument(f"--{self.infer_cli_name(field)}", **self.get_argument_kwargs(field))
            self.option_dests.append(field.name)

    def build_parser(self) -> argparse.ArgumentParser:
        """Create the parser with the fixed arguments and every options group."""
        parser = argparse.ArgumentParser(
            prog="bb2html",
            description="Render BBCode to HTML, element JSON or a parsed-tree JSON dump.",
            epilog=(
                f"Options also read defaults from {ENV_PREFIX}<OPTION> environment variables and from "
                ".bb2html.toml/.yaml/.yml/.json or [tool.bb2html] in pyproject.toml, searched from the "
                f"working directory upward and then in the home directory. {ENV_CONFIG_VAR} names a config file."
            ),
        )

        parser.add_argument("input", nargs="?", default=None, help="Input BBCode file (default: stdin, or '-')")
        parser.add_argument("--out", "-o", metavar="FILE", help="Write output to FILE instead of stdout")
        parser.add_argument(
            "--format",
            "-f",
            choices=["html", "elements", "ast"],
            default=None,
            help=f"Output format (default: {DEFAULT_OUTPUT_FORMAT})",
        )

        template_group = parser.add_argument_group("Template params")
        template_group.add_argument("--params", metavar="FILE", help="Load params from a JSON, YAML or TOML file")
        template_group.add_argument(
            "--param",
            action="append",
            default=[],
            metavar="KEY=VALUE",
            help="Set one param; VALUE is parsed as a YAML scalar (repeatable)",
        )

        for title, options_class in OPTIONS_GROUPS.items():
            self.add_options_arguments(parser, title, options_class)

        config_group = parser.add_argument_group("Configuration")
        config_group.add_argument("--config", metavar="FILE", help="Load options from this config file")
        config_group.add_argument(
            "--no-config", action="store_true", help="Ignore config files and the config environment variable"
        )

        logging_group = parser.add_argument_group("Logging")
        logging_group.add_argument(
            "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            default="WARNING",
            help="Logging level (default: WARNING)",
        )
        logging_group.add_argument("--log-file", metavar="FILE", help="Also write log records to FILE")
        logging_group.add_argument(
            "--trace", action="store_true", help="Debug logging with timestamps and logger names"
        )

        parser.add_argument("--version", "-V", action="version", version=f"bb2html {__version__}")
        return parser


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    return DynamicCLIBuilder().build_parser()


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR


__all__ = [
    "EXIT_SUCCESS",
    "EXIT_ERROR",
    "EXIT_VALIDATION_ERROR",
    "EXIT_FILE_ERROR",
    "EXIT_RENDERING_ERROR",
    "OPTIONS_GROUPS",
    "DynamicCLIBuilder",
    "create_parser",
    "get_exit_code_for_exception",
]
