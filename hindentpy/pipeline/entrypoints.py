"""Unified entrypoints that orchestrate parse/format with one parse lifecycle."""

from __future__ import annotations

from hindentpy.format import FormatOptions
from hindentpy.format import run_format as _run_format
from hindentpy.parser import ParseMode, ParserOptions, parse_result
from hindentpy.pipeline.result import HaskellParseResult
from hindentpy.pipeline.results import CheckRunResult, FormatRunResult


def run_format(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: HaskellParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> FormatRunResult:
    """Run formatting over one Haskell parse lifecycle."""
    resolved_parse = _resolve_parse(text, options=options, mode=mode, parse=parse)
    return _run_format(resolved_parse.source_text, parse=resolved_parse, format_options=format_options)


def run_check(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: HaskellParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> CheckRunResult:
    """Report parse diagnostics and whether `text` is already formatted."""
    formatted = run_format(text, options=options, mode=mode, parse=parse, format_options=format_options)
    return CheckRunResult(
        parse=formatted.parse,
        diagnostics=formatted.diagnostics,
        has_errors=formatted.parse.has_errors,
        formatted=not formatted.changed and not formatted.parse.has_errors,
    )


def _resolve_parse(
    text: str,
    *,
    options: ParserOptions | None,
    mode: ParseMode | None,
    parse: HaskellParseResult | None,
) -> HaskellParseResult:
    if parse is not None:
        if options is not None or mode is not None:
            raise ValueError("Pass either parse or options/mode, not both")
        return parse
    return parse_result(text, options=options, mode=mode)
