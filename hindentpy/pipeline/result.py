"""Parse carrier shared by the format and check entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hindentpy.diagnostics import has_errors
from hindentpy.parser.haskell import ParsedModule
from hindentpy.parser.options import ParserOptions

if TYPE_CHECKING:
    from hindentpy.ast import Module
    from hindentpy.diagnostics import Diagnostic


@dataclass(slots=True)
class HaskellParseResult:
    """Haskell parse result for parse-once/consume-many workflows."""

    source_text: str
    parsed: ParsedModule
    options: ParserOptions

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.parsed.diagnostics

    @property
    def has_errors(self) -> bool:
        return has_errors(self.parsed.diagnostics)

    @property
    def module(self) -> Module:
        return self.parsed.module
