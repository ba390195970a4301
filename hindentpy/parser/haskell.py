"""High-level parse entrypoint for Haskell source text."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import TYPE_CHECKING, Final

from hindentpy.ast import Decl, Module, ModuleItem, RawDecl, SourceComment
from hindentpy.diagnostics import Diagnostic, collect_diagnostics
from hindentpy.diagnostics.codes import PARSER_UNEXPECTED_TOKEN, PARSER_UNSUPPORTED_DECLARATION
from hindentpy.lexer import Lexer, Token, TokenFlags, TokenKind
from hindentpy.parser.grammar import group_function_clauses, parse_declaration
from hindentpy.parser.options import ParseMode, ParserOptions
from hindentpy.parser.parser import ParseAbort, Parser
from hindentpy.text import TextRange, slice_text_range

if TYPE_CHECKING:
    from hindentpy.pipeline import HaskellParseResult

logger = logging.getLogger(__name__)

# Declarations passed through untouched.
VERBATIM_KEYWORDS: Final[frozenset[TokenKind]] = frozenset(
    {
        TokenKind.MODULE,
        TokenKind.IMPORT,
        TokenKind.DATA,
        TokenKind.NEWTYPE,
        TokenKind.CLASS,
        TokenKind.INSTANCE,
        TokenKind.TYPE,
        TokenKind.INFIX,
        TokenKind.INFIXL,
        TokenKind.INFIXR,
        TokenKind.DERIVING,
        TokenKind.FOREIGN,
        TokenKind.DEFAULT,
    }
)

# Tokens at the top-level column that continue the previous declaration.
CONTINUATION_KINDS: Final[frozenset[TokenKind]] = frozenset(
    {
        TokenKind.RPAREN,
        TokenKind.RBRACKET,
        TokenKind.RBRACE,
        TokenKind.COMMA,
        TokenKind.SEMICOLON,
        TokenKind.WHERE,
        TokenKind.THEN,
        TokenKind.ELSE,
        TokenKind.OF,
        TokenKind.IN,
        TokenKind.EQUAL,
        TokenKind.PIPE,
        TokenKind.DOUBLE_COLON,
        TokenKind.RIGHT_ARROW,
        TokenKind.DOUBLE_ARROW,
        TokenKind.VARSYM,
        TokenKind.CONSYM,
        TokenKind.BACKTICK,
        TokenKind.HASH_RPAREN,
    }
)


@dataclass(frozen=True, slots=True)
class ParsedModule:
    module: Module
    diagnostics: list[Diagnostic]


def _resolve_options(
    options: ParserOptions | None,
    mode: ParseMode | None,
) -> ParserOptions:
    if mode is not None and options is not None:
        raise ValueError("Pass either options or mode, not both")

    if options is not None:
        return options

    if mode is not None:
        return ParserOptions.for_mode(mode)

    return ParserOptions()


def parse(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ParsedModule:
    resolved_options = _resolve_options(options=options, mode=mode)

    lexer = Lexer(text)
    tokens = lexer.lex()
    chunks = split_top_level(text, tokens)

    items: list[ModuleItem] = []
    parser_diagnostics: list[Diagnostic] = []
    previous_end = 0
    for chunk in chunks:
        start = chunk[0].range.start.value
        blank_line_before = bool(items) and text.count("\n", previous_end, start) >= 2
        previous_end = chunk[-1].range.end.value

        node, diagnostics = _parse_chunk(text, chunk, lexer.diagnostics, resolved_options)
        parser_diagnostics.extend(diagnostics)
        items.append(ModuleItem(node, blank_line_before))

    module = Module(_merge_function_clauses(items))
    diagnostics = collect_diagnostics(lexer.diagnostics, parser_diagnostics)
    logger.debug("parsed %d top-level items with %d diagnostics", len(module.items), len(diagnostics))
    return ParsedModule(module=module, diagnostics=diagnostics)


def parse_result(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> HaskellParseResult:
    from hindentpy.pipeline import HaskellParseResult

    resolved_options = _resolve_options(options=options, mode=mode)
    parsed = parse(text, options=resolved_options)
    return HaskellParseResult(
        source_text=text,
        parsed=parsed,
        options=resolved_options,
    )


def split_top_level(source: str, tokens: list[Token]) -> list[list[Token]]:
    """Group non-whitespace tokens into top-level declarations and comment runs.

    A chunk starts at every token that begins a line at (or left of) the
    column of the first declaration, unless it can only continue the
    previous declaration, e.g. a closing `)` of a module export list.
    """
    content = [
        token
        for token in tokens
        if token.kind not in (TokenKind.WHITESPACE, TokenKind.NEWLINE, TokenKind.EOF)
    ]
    if not content:
        return []

    significant = [token for token in content if not token.kind.is_trivia]
    top = significant[0].column if significant else 0

    chunks: list[list[Token]] = []
    current: list[Token] = []
    for token in content:
        if (
            current
            and token.column <= top
            and token.kind not in CONTINUATION_KINDS
            and _starts_line(source, token)
        ):
            chunks.append(current)
            current = []
        current.append(token)
    chunks.append(current)
    return chunks


def _starts_line(source: str, token: Token) -> bool:
    start = token.range.start.value
    line_start = source.rfind("\n", 0, start) + 1
    return not source[line_start:start].strip()


def _parse_chunk(
    source: str,
    chunk: list[Token],
    lexer_diagnostics: list[Diagnostic],
    options: ParserOptions,
) -> tuple[Decl | RawDecl | SourceComment, list[Diagnostic]]:
    chunk_range = TextRange.new(chunk[0].range.start, chunk[-1].range.end)
    text = slice_text_range(source, chunk_range)

    significant = [token for token in chunk if not token.kind.is_trivia]
    if not significant:
        return SourceComment(text), []

    head = significant[0].kind
    if head in VERBATIM_KEYWORDS:
        if options.allow_verbatim_declarations:
            logger.debug("keeping `%s` declaration verbatim", head.name.lower())
            return RawDecl(text), []
        diagnostic = PARSER_UNSUPPORTED_DECLARATION.at(chunk_range)
        return RawDecl(text), [_downgrade(diagnostic, options)]

    if any(token.kind == TokenKind.SKIPPED for token in chunk) or any(
        chunk_range.contains_range(diagnostic.range) for diagnostic in lexer_diagnostics
    ):
        logger.debug("keeping declaration with lexer errors verbatim")
        return RawDecl(text), []

    if len(significant) != len(chunk):
        logger.debug("keeping declaration with embedded comments verbatim")
        return RawDecl(text), []

    eof = Token(TokenKind.EOF, TextRange.empty(chunk_range.end), 0, TokenFlags.PRECEDING_LINE_BREAK)
    parser = Parser(source, [*significant, eof], options, layout_column=significant[0].column)
    try:
        decl = parse_declaration(parser)
        if not parser.at(TokenKind.EOF):
            parser.fail(PARSER_UNEXPECTED_TOKEN, message=f"Unexpected `{parser.text()}` after declaration")
    except ParseAbort as exc:
        logger.debug("keeping unparseable declaration verbatim: %s", exc)
        return RawDecl(text), [_downgrade(diagnostic, options) for diagnostic in parser.diagnostics]
    return decl, []


def _downgrade(diagnostic: Diagnostic, options: ParserOptions) -> Diagnostic:
    if options.downgrade_parse_errors and diagnostic.severity == "error":
        return replace(diagnostic, severity="warning")
    return diagnostic


def _merge_function_clauses(items: list[ModuleItem]) -> tuple[ModuleItem, ...]:
    """Merge clauses of one function that follow each other without a blank line."""
    merged: list[ModuleItem] = []
    for item in items:
        if merged and not item.blank_line_before:
            grouped = group_function_clauses([merged[-1].node, item.node])
            if len(grouped) == 1:
                merged[-1] = ModuleItem(grouped[0], merged[-1].blank_line_before)
                continue
        merged.append(item)
    return tuple(merged)
