"""Token cursor with layout-rule awareness."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import NoReturn

from hindentpy.diagnostics import Diagnostic, DiagnosticSpec
from hindentpy.diagnostics.codes import PARSER_EXPECTED_TOKEN
from hindentpy.lexer import Token, TokenKind, token_text
from hindentpy.parser.options import ParserOptions
from hindentpy.text import TextRange

# Sentinel column for explicit `{ ... }` blocks: no token is ever a layout boundary.
EXPLICIT_LAYOUT = -1


class ParseAbort(Exception):
    """Abandons the current top-level declaration after a diagnostic was recorded."""


@dataclass(slots=True)
class LayoutContext:
    column: int
    item_start: int


@dataclass(frozen=True, slots=True)
class ParserCheckpoint:
    position: int
    layout: tuple[tuple[int, int], ...]
    diagnostics_len: int
    speculative_depth: int


class Parser:
    """Recursive-descent cursor over the significant tokens of one declaration.

    Implicit layout blocks are tracked as a stack of columns: a token that
    starts a line at or left of the innermost block column reads as
    `TokenKind.LAYOUT_END`, except for the token that opens the current item.
    """

    def __init__(
        self,
        source: str,
        tokens: list[Token],
        options: ParserOptions | None = None,
        *,
        layout_column: int = 0,
    ) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            raise ValueError("Token stream must end with an EOF token")
        self._source = source
        self._tokens = tokens
        self._options = options or ParserOptions()
        self._position = 0
        self._layout: list[LayoutContext] = [LayoutContext(layout_column, 0)]
        self._diagnostics: list[Diagnostic] = []
        self._speculative_depth = 0

    @property
    def source(self) -> str:
        return self._source

    @property
    def options(self) -> ParserOptions:
        return self._options

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def token(self) -> Token:
        """Raw current token, ignoring layout."""
        return self._tokens[self._position]

    @property
    def current(self) -> TokenKind:
        return self.nth(0)

    @property
    def current_range(self) -> TextRange:
        return self.token.range

    @property
    def layout_column(self) -> int:
        return self._layout[-1].column

    def nth(self, n: int) -> TokenKind:
        index = min(self._position + n, len(self._tokens) - 1)
        token = self._tokens[index]
        if token.kind == TokenKind.EOF:
            return TokenKind.EOF
        if self._is_layout_boundary(index):
            return TokenKind.LAYOUT_END
        return token.kind

    def nth_text(self, n: int) -> str:
        index = min(self._position + n, len(self._tokens) - 1)
        return token_text(self._source, self._tokens[index])

    def text(self) -> str:
        return token_text(self._source, self.token)

    def at(self, kind: TokenKind) -> bool:
        return self.current == kind

    def at_set(self, kinds: frozenset[TokenKind] | set[TokenKind]) -> bool:
        return self.current in kinds

    def at_symbol(self, text: str) -> bool:
        """At a VARSYM/CONSYM token with exactly the given text, e.g. `-` or `.`."""
        return self.current in (TokenKind.VARSYM, TokenKind.CONSYM) and self.text() == text

    def bump(self) -> Token:
        token = self.token
        if self.current not in (TokenKind.EOF, TokenKind.LAYOUT_END):
            self._position += 1
        return token

    def eat(self, kind: TokenKind) -> bool:
        if self.current == kind:
            self.bump()
            return True
        return False

    def expect(self, kind: TokenKind, description: str | None = None) -> Token:
        if self.current == kind:
            return self.bump()
        expected = description or kind.name
        self.fail(PARSER_EXPECTED_TOKEN, message=f"Expected {expected}, found {self._describe_current()}")

    def fail(self, spec: DiagnosticSpec, *, message: str | None = None) -> NoReturn:
        self.error(spec.at(self.current_range, message=message))
        raise ParseAbort(message or spec.message)

    def error(self, diagnostic: Diagnostic) -> None:
        if self._speculative_depth:
            return
        if self._diagnostics:
            previous = self._diagnostics[-1]
            if previous.range.start == diagnostic.range.start:
                return
        self._diagnostics.append(diagnostic)

    def checkpoint(self) -> ParserCheckpoint:
        return ParserCheckpoint(
            position=self._position,
            layout=tuple((ctx.column, ctx.item_start) for ctx in self._layout),
            diagnostics_len=len(self._diagnostics),
            speculative_depth=self._speculative_depth,
        )

    def rewind(self, checkpoint: ParserCheckpoint) -> None:
        self._position = checkpoint.position
        self._layout = [LayoutContext(column, start) for column, start in checkpoint.layout]
        del self._diagnostics[checkpoint.diagnostics_len :]
        self._speculative_depth = checkpoint.speculative_depth

    @contextmanager
    def speculative_parsing(self) -> Iterator[None]:
        self._speculative_depth += 1
        try:
            yield
        finally:
            self._speculative_depth -= 1

    @contextmanager
    def layout_block(self, column: int) -> Iterator[None]:
        self._layout.append(LayoutContext(column, self._position))
        try:
            yield
        finally:
            self._layout.pop()

    def start_item(self) -> None:
        """Mark the current token as the first token of a new block item."""
        self._layout[-1].item_start = self._position

    def _is_layout_boundary(self, index: int) -> bool:
        token = self._tokens[index]
        context = self._layout[-1]
        if index == context.item_start:
            return False
        return token.has_preceding_line_break() and token.column <= context.column

    def _describe_current(self) -> str:
        kind = self.current
        if kind in (TokenKind.EOF, TokenKind.LAYOUT_END):
            return "end of block"
        return f"`{self.text()}`"
