"""Lexer."""

from hindentpy.lexer.lexer import Lexer, LexerCheckpoint, token_text
from hindentpy.lexer.tokens import (
    KEYWORDS,
    RESERVED_OPERATORS,
    SYMBOL_CHARS,
    Token,
    TokenFlags,
    TokenKind,
)

__all__ = [
    "KEYWORDS",
    "RESERVED_OPERATORS",
    "SYMBOL_CHARS",
    "Lexer",
    "LexerCheckpoint",
    "Token",
    "TokenFlags",
    "TokenKind",
    "token_text",
]
