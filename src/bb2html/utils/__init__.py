#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/utils/__init__.py
"""Utility modules for the bb2html package.

This package contains the entity codec and the file input/output helpers
shared by the API and the CLI.
"""

from bb2html.utils.escape import escape, unescape

__all__ = [
    "escape",
    "unescape",
]
