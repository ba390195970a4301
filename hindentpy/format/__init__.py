"""Formatting over parsed Haskell modules."""

from hindentpy.format.runner import (
    FormatOptions,
    format_module,
    render,
    run_format,
    strip_trailing_whitespace,
)

__all__ = [
    "FormatOptions",
    "format_module",
    "render",
    "run_format",
    "strip_trailing_whitespace",
]
