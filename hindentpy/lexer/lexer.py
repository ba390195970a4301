"""Lexer."""

from dataclasses import dataclass

from hindentpy.diagnostics import Diagnostic
from hindentpy.diagnostics.codes import (
    LEXER_UNEXPECTED_CHARACTER,
    LEXER_UNTERMINATED_BLOCK_COMMENT,
    LEXER_UNTERMINATED_CHAR,
    LEXER_UNTERMINATED_STRING,
    DiagnosticSpec,
)
from hindentpy.lexer.tokens import (
    KEYWORDS,
    RESERVED_OPERATORS,
    SYMBOL_CHARS,
    Token,
    TokenFlags,
    TokenKind,
)
from hindentpy.text import TextRange, TextSize, slice_text_range

TAB_WIDTH = 8


@dataclass(frozen=True, slots=True)
class LexerCheckpoint:
    """Lexer checkpoint."""

    position: int
    line_start: int
    after_newline: bool
    eof_emitted: bool
    diagnostics_position: int


class Lexer:
    """Lossless Haskell lexer that emits trivia and non-trivia tokens."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._line_start = 0
        self._after_newline = True
        self._current_start = TextSize.from_int(0)
        self._current_flags = TokenFlags.NONE
        self._eof_emitted = False
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """List of diagnostics emitted during lexing."""
        return self._diagnostics

    @property
    def current_range(self) -> TextRange:
        return TextRange.new(self._current_start, TextSize.from_int(self._position))

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    @property
    def next_token(self) -> Token:
        start = self._position
        self._current_start = TextSize.from_int(start)
        self._current_flags = TokenFlags.NONE
        column = self._column_of(start)

        if self.is_eof:
            self._eof_emitted = True
            return Token(TokenKind.EOF, TextRange.empty(self._current_start), column, TokenFlags.PRECEDING_LINE_BREAK)

        kind = self._lex_token()
        if self._after_newline:
            self._current_flags |= TokenFlags.PRECEDING_LINE_BREAK

        if not kind.is_trivia:
            self._after_newline = False

        last_newline = self._source.rfind("\n", start, self._position)
        if last_newline != -1:
            self._line_start = last_newline + 1

        return Token(kind, self.current_range, column, self._current_flags)

    @property
    def checkpoint(self) -> LexerCheckpoint:
        return LexerCheckpoint(
            position=self._position,
            line_start=self._line_start,
            after_newline=self._after_newline,
            eof_emitted=self._eof_emitted,
            diagnostics_position=len(self._diagnostics),
        )

    def rewind(self, checkpoint: LexerCheckpoint) -> None:
        self._position = checkpoint.position
        self._line_start = checkpoint.line_start
        self._after_newline = checkpoint.after_newline
        self._eof_emitted = checkpoint.eof_emitted
        if len(self._diagnostics) > checkpoint.diagnostics_position:
            self._diagnostics = self._diagnostics[: checkpoint.diagnostics_position]

    def lex(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            token = self.next_token
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                break
        return tokens

    def _column_of(self, offset: int) -> int:
        return len(self._source[self._line_start : offset].expandtabs(TAB_WIDTH))

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch in "\r\n":
            self._consume_newline()
            self._after_newline = True
            return TokenKind.NEWLINE

        if ch in " \t\f\v":
            self._consume_whitespaces()
            return TokenKind.WHITESPACE

        if ch == "{" and self._peek_char() == "-":
            return self._lex_block_comment()

        if ch == '"':
            return self._lex_string()

        if ch == "'":
            return self._lex_quote_or_char()

        if ch.isdigit():
            return self._lex_number()

        if ch.isalpha() or ch == "_":
            return self._lex_identifier()

        if ch == "(" and self._peek_char() == "#" and self._peek_char(2) in " \t\r\n":
            self._advance(2)
            return TokenKind.LPAREN_HASH
        if ch == "#" and self._peek_char() == ")" and self._previous_char() in " \t":
            self._advance(2)
            return TokenKind.HASH_RPAREN

        if ch in SYMBOL_CHARS:
            return self._lex_operator()

        match ch:
            case "(":
                kind = TokenKind.LPAREN
            case ")":
                kind = TokenKind.RPAREN
            case "[":
                kind = TokenKind.LBRACKET
            case "]":
                kind = TokenKind.RBRACKET
            case "{":
                kind = TokenKind.LBRACE
            case "}":
                kind = TokenKind.RBRACE
            case ",":
                kind = TokenKind.COMMA
            case ";":
                kind = TokenKind.SEMICOLON
            case "`":
                kind = TokenKind.BACKTICK
            case _:
                self._advance(1)
                self._report(LEXER_UNEXPECTED_CHARACTER, message=f"Unexpected character {ch!r}")
                return TokenKind.SKIPPED
        self._advance(1)
        return kind

    def _lex_operator(self) -> TokenKind:
        start = self._position
        while self._current_char() in SYMBOL_CHARS and not self.is_eof:
            self._advance(1)
        text = self._source[start : self._position]

        # `--`, `---`, ... start a line comment; `-->` is an ordinary operator.
        if len(text) >= 2 and set(text) == {"-"}:
            self._consume_until_line_end()
            return TokenKind.COMMENT

        reserved = RESERVED_OPERATORS.get(text)
        if reserved is not None:
            return reserved
        if text.startswith(":"):
            return TokenKind.CONSYM
        return TokenKind.VARSYM

    def _lex_block_comment(self) -> TokenKind:
        self._advance(2)
        depth = 1
        while not self.is_eof:
            ch = self._current_char()
            if ch == "{" and self._peek_char() == "-":
                depth += 1
                self._advance(2)
                continue
            if ch == "-" and self._peek_char() == "}":
                depth -= 1
                self._advance(2)
                if depth == 0:
                    return TokenKind.COMMENT
                continue
            self._advance(1)

        self._report(LEXER_UNTERMINATED_BLOCK_COMMENT)
        return TokenKind.COMMENT

    def _lex_string(self) -> TokenKind:
        self._advance(1)
        closed = False

        while not self.is_eof:
            ch = self._current_char()
            if ch == '"':
                self._advance(1)
                closed = True
                break
            if ch == "\\":
                self._current_flags |= TokenFlags.HAS_ESCAPE
                self._advance(1)
                if self._current_char() in " \t\r\n":
                    # String gap: `\   \` may span lines.
                    while not self.is_eof and self._current_char() != "\\":
                        self._advance(1)
                if not self.is_eof:
                    self._advance(1)
                continue
            if ch == "\n" or ch == "\r":
                break
            self._advance(1)

        if not closed:
            self._report(LEXER_UNTERMINATED_STRING)

        return TokenKind.STRING

    def _lex_quote_or_char(self) -> TokenKind:
        nxt = self._peek_char()

        if nxt == "\\":
            self._current_flags |= TokenFlags.HAS_ESCAPE
            self._advance(3)
            while not self.is_eof and self._current_char() not in "'\r\n":
                self._advance(1)
            if self._current_char() == "'":
                self._advance(1)
            else:
                self._report(LEXER_UNTERMINATED_CHAR)
            return TokenKind.CHAR

        if nxt not in "\r\n\0" and self._peek_char(2) == "'":
            self._advance(3)
            return TokenKind.CHAR

        if nxt == "'" and _is_ident_start(self._peek_char(2)):
            self._advance(2)
            self._consume_identifier_chars()
            return TokenKind.TYPQUOTE

        if _is_ident_start(nxt):
            self._advance(1)
            self._consume_identifier_chars()
            return TokenKind.VARQUOTE

        self._advance(1)
        self._report(LEXER_UNTERMINATED_CHAR)
        return TokenKind.CHAR

    def _lex_number(self) -> TokenKind:
        if self._current_char() == "0" and self._peek_char() in "xXoObB" and self._peek_char(2).isalnum():
            self._advance(2)
            while not self.is_eof and (self._current_char().isalnum() or self._current_char() == "_"):
                self._advance(1)
            return TokenKind.INT

        self._consume_digits()
        is_float = False
        if self._current_char() == "." and self._peek_char().isdigit():
            is_float = True
            self._advance(1)
            self._consume_digits()
        if self._current_char() in "eE":
            sign = 1 if self._peek_char() in "+-" else 0
            if self._peek_char(1 + sign).isdigit():
                is_float = True
                self._advance(1 + sign)
                self._consume_digits()
        return TokenKind.FLOAT if is_float else TokenKind.INT

    def _lex_identifier(self) -> TokenKind:
        qualified = False
        while True:
            segment_start = self._position
            self._consume_identifier_chars()
            is_conid = self._source[segment_start].isupper()
            if not (is_conid and self._current_char() == "."):
                break
            after_dot = self._peek_char()
            if _is_ident_start(after_dot):
                qualified = True
                self._advance(1)
                continue
            if after_dot in SYMBOL_CHARS:
                self._advance(1)
                while self._current_char() in SYMBOL_CHARS and not self.is_eof:
                    self._advance(1)
                return TokenKind.CONSYM if after_dot == ":" else TokenKind.VARSYM
            break

        if is_conid:
            return TokenKind.CONID
        text = self._source[self._current_start.value : self._position]
        if not qualified and text in KEYWORDS:
            return KEYWORDS[text]
        return TokenKind.VARID

    def _consume_identifier_chars(self) -> None:
        while not self.is_eof:
            ch = self._current_char()
            if ch.isalnum() or ch == "_" or ch == "'":
                self._advance(1)
                continue
            break

    def _consume_digits(self) -> None:
        while not self.is_eof and (self._current_char().isdigit() or self._current_char() == "_"):
            self._advance(1)

    def _consume_until_line_end(self) -> None:
        while not self.is_eof and self._current_char() not in "\r\n":
            self._advance(1)

    def _consume_whitespaces(self) -> None:
        while not self.is_eof and self._current_char() in " \t\f\v":
            self._advance(1)

    def _consume_newline(self) -> None:
        if self._current_char() == "\r" and self._peek_char() == "\n":
            self._advance(2)
        else:
            self._advance(1)

    def _report(self, spec: DiagnosticSpec, *, message: str | None = None) -> None:
        self._diagnostics.append(spec.at(self.current_range, message=message))

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _previous_char(self) -> str:
        if self._position == 0:
            return "\0"
        return self._source[self._position - 1]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position = min(self._position + steps, len(self._source))


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def token_text(
    source: str,
    token: Token,
    null_char_on_eof: bool = False,
) -> str:
    """Get the text of a token from the source string based on its range."""
    if token.kind == TokenKind.EOF:
        return "\0" if null_char_on_eof else ""
    return slice_text_range(source, token.range)

