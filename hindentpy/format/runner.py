"""Format runner over a shared Haskell parse result."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from hindentpy.ast import Module, Node
from hindentpy.parser import ParseMode, ParserOptions, parse_result
from hindentpy.pipeline.result import HaskellParseResult
from hindentpy.pipeline.results import FormatRunResult
from hindentpy.printer import Printer
from hindentpy.style import DEFAULT_STYLE, Style, StyleConfig, get_style

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FormatOptions:
    """Which style renders the document and with which thresholds."""

    style: str = DEFAULT_STYLE
    # Replaces the style's default configuration when given.
    config: StyleConfig | None = None

    def resolve(self) -> tuple[Style, StyleConfig]:
        style = get_style(self.style)
        return style, self.config or style.default_config


def render(
    node: Node | Module,
    *,
    style: Style | None = None,
    config: StyleConfig | None = None,
) -> str:
    """Render one node with a fresh printer, trailing whitespace stripped."""
    printer = Printer(style or get_style(DEFAULT_STYLE), config)
    printer.pretty(node)
    return strip_trailing_whitespace(printer.output())


def strip_trailing_whitespace(text: str) -> str:
    return "\n".join(line.rstrip() for line in text.split("\n"))


def format_module(module: Module, options: FormatOptions | None = None) -> str:
    style, config = (options or FormatOptions()).resolve()
    rendered = render(module, style=style, config=config).rstrip("\n")
    return rendered + "\n" if rendered else ""


def run_format(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: HaskellParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> FormatRunResult:
    """Run formatting from a single parse lifecycle."""
    resolved_parse = _resolve_parse(text, options=options, mode=mode, parse=parse)
    diagnostics = list(resolved_parse.diagnostics)

    if resolved_parse.has_errors:
        logger.info("leaving source unchanged: %d parse diagnostics", len(diagnostics))
        formatted_text = resolved_parse.source_text
    else:
        formatted_text = format_module(resolved_parse.module, format_options)
    changed = formatted_text != resolved_parse.source_text
    logger.debug("formatted %d items (changed=%s)", len(resolved_parse.module.items), changed)

    return FormatRunResult(
        parse=resolved_parse,
        formatted_text=formatted_text,
        diagnostics=diagnostics,
        changed=changed,
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
