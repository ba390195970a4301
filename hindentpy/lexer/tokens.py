"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Final

from hindentpy.text import TextRange, TextSize


class TokenKind(IntEnum):
    # -------------------------
    # Special / sentinels
    # -------------------------
    EOF = 1
    LAYOUT_END = 2  # virtual: next token closes the innermost implicit layout block

    # -------------------------
    # Trivia tokens (emitted by the lexer)
    # -------------------------
    WHITESPACE = 10
    NEWLINE = 11
    COMMENT = 12
    SKIPPED = 13

    # -------------------------
    # Names / literals
    # -------------------------
    VARID = 20  # map, M.lookup, x'
    CONID = 21  # Just, Data.Map
    VARSYM = 22  # +, <$>, M.!
    CONSYM = 23  # :, :|
    INT = 24
    FLOAT = 25
    CHAR = 26
    STRING = 27
    VARQUOTE = 28  # 'name
    TYPQUOTE = 29  # ''Name

    # -------------------------
    # Reserved operators
    # -------------------------
    DOTDOT = 30  # ..
    DOUBLE_COLON = 31  # ::
    EQUAL = 32  # =
    BACKSLASH = 33  # \
    PIPE = 34  # |
    LEFT_ARROW = 35  # <-
    RIGHT_ARROW = 36  # ->
    AT = 37  # @
    TILDE = 38  # ~
    DOUBLE_ARROW = 39  # =>

    # -------------------------
    # Special punctuation
    # -------------------------
    LPAREN = 40
    RPAREN = 41
    LBRACKET = 42
    RBRACKET = 43
    LBRACE = 44
    RBRACE = 45
    COMMA = 46
    SEMICOLON = 47
    BACKTICK = 48
    LPAREN_HASH = 49  # (#
    HASH_RPAREN = 50  # #)

    # -------------------------
    # Reserved identifiers
    # -------------------------
    CASE = 60
    CLASS = 61
    DATA = 62
    DEFAULT = 63
    DERIVING = 64
    DO = 65
    ELSE = 66
    FOREIGN = 67
    IF = 68
    IMPORT = 69
    IN = 70
    INFIX = 71
    INFIXL = 72
    INFIXR = 73
    INSTANCE = 74
    LET = 75
    MODULE = 76
    NEWTYPE = 77
    OF = 78
    THEN = 79
    TYPE = 80
    WHERE = 81
    UNDERSCORE = 82

    @property
    def is_trivia(self) -> bool:
        return self in (
            TokenKind.WHITESPACE,
            TokenKind.NEWLINE,
            TokenKind.COMMENT,
            TokenKind.SKIPPED,
        )


KEYWORDS: Final[dict[str, TokenKind]] = {
    "case": TokenKind.CASE,
    "class": TokenKind.CLASS,
    "data": TokenKind.DATA,
    "default": TokenKind.DEFAULT,
    "deriving": TokenKind.DERIVING,
    "do": TokenKind.DO,
    "else": TokenKind.ELSE,
    "foreign": TokenKind.FOREIGN,
    "if": TokenKind.IF,
    "import": TokenKind.IMPORT,
    "in": TokenKind.IN,
    "infix": TokenKind.INFIX,
    "infixl": TokenKind.INFIXL,
    "infixr": TokenKind.INFIXR,
    "instance": TokenKind.INSTANCE,
    "let": TokenKind.LET,
    "module": TokenKind.MODULE,
    "newtype": TokenKind.NEWTYPE,
    "of": TokenKind.OF,
    "then": TokenKind.THEN,
    "type": TokenKind.TYPE,
    "where": TokenKind.WHERE,
    "_": TokenKind.UNDERSCORE,
}

RESERVED_OPERATORS: Final[dict[str, TokenKind]] = {
    "..": TokenKind.DOTDOT,
    "::": TokenKind.DOUBLE_COLON,
    "=": TokenKind.EQUAL,
    "\\": TokenKind.BACKSLASH,
    "|": TokenKind.PIPE,
    "<-": TokenKind.LEFT_ARROW,
    "->": TokenKind.RIGHT_ARROW,
    "@": TokenKind.AT,
    "~": TokenKind.TILDE,
    "=>": TokenKind.DOUBLE_ARROW,
}

SYMBOL_CHARS: Final[frozenset[str]] = frozenset("!#$%&*+./<=>?@\\^|-~:")


class TokenFlags(IntFlag):
    """Token metadata flags."""

    NONE = 0
    PRECEDING_LINE_BREAK = 1 << 0  # first token on its line
    HAS_ESCAPE = 1 << 1


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token (trivia or non-trivia)."""

    kind: TokenKind
    range: TextRange
    column: int = 0
    flags: TokenFlags = TokenFlags.NONE

    def has_preceding_line_break(self) -> bool:
        return bool(self.flags & TokenFlags.PRECEDING_LINE_BREAK)


EOF_TOKEN: Final[Token] = Token(TokenKind.EOF, TextRange.empty(TextSize.from_int(0)))
