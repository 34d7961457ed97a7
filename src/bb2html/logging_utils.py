#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the bb2html command-line entry point.

Library modules only ever create module loggers with
``logging.getLogger(__name__)``; handlers are installed here, and only by
the CLI.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PLAIN_FORMAT = "%(levelname)s: %(message)s"


def resolve_log_level(log_level: int | str) -> int:
    """Return the numeric level for a level name, falling back to INFO."""
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _build_formatter(trace_mode: bool) -> logging.Formatter:
    if trace_mode:
        return logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    return logging.Formatter(PLAIN_FORMAT)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install stderr (and optionally file) handlers on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "DEBUG").
    log_file : str, optional
        Path of a log file that receives a copy of every record.
    trace_mode : bool, default False
        Include timestamps and logger names, and force DEBUG level.

    Returns
    -------
    logging.Logger
        The configured root logger.

    """
    level = logging.DEBUG if trace_mode else resolve_log_level(log_level)
    formatter = _build_formatter(trace_mode)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.debug("Logging to file: %s", log_file)

    return root_logger


__all__ = ["configure_logging", "resolve_log_level"]
