"""Pipeline run result carriers for tool entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from hindentpy.diagnostics import Diagnostic
from hindentpy.pipeline.result import HaskellParseResult


@dataclass(frozen=True, slots=True)
class FormatRunResult:
    """Result of formatting from a shared parse result."""

    parse: HaskellParseResult
    formatted_text: str
    diagnostics: list[Diagnostic]
    changed: bool


@dataclass(frozen=True, slots=True)
class CheckRunResult:
    """Result of a format check: parse diagnostics and whether the text is formatted."""

    parse: HaskellParseResult
    diagnostics: list[Diagnostic]
    has_errors: bool
    formatted: bool
