"""Shared parse carrier and lazy pipeline entrypoint exports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hindentpy.parser.options import ParseMode, ParserOptions
from hindentpy.pipeline.result import HaskellParseResult
from hindentpy.pipeline.results import CheckRunResult, FormatRunResult

if TYPE_CHECKING:
    from hindentpy.format import FormatOptions


def run_format(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: HaskellParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> FormatRunResult:
    from hindentpy.pipeline.entrypoints import run_format as _run_format

    return _run_format(text, options=options, mode=mode, parse=parse, format_options=format_options)


def run_check(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: HaskellParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> CheckRunResult:
    from hindentpy.pipeline.entrypoints import run_check as _run_check

    return _run_check(text, options=options, mode=mode, parse=parse, format_options=format_options)


__all__ = [
    "CheckRunResult",
    "FormatRunResult",
    "HaskellParseResult",
    "run_check",
    "run_format",
]
