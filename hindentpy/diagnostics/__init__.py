"""Diagnostics."""

from hindentpy.diagnostics.codes import (
    LEXER_UNEXPECTED_CHARACTER,
    LEXER_UNTERMINATED_BLOCK_COMMENT,
    LEXER_UNTERMINATED_CHAR,
    LEXER_UNTERMINATED_STRING,
    PARSER_EXPECTED_EXPRESSION,
    PARSER_EXPECTED_PATTERN,
    PARSER_EXPECTED_TOKEN,
    PARSER_EXPECTED_TYPE,
    PARSER_FIXITY_CONFLICT,
    PARSER_INVALID_CONTEXT,
    PARSER_UNEXPECTED_TOKEN,
    PARSER_UNSUPPORTED_DECLARATION,
    DiagnosticSpec,
)
from hindentpy.diagnostics.diagnostic import Diagnostic, Severity
from hindentpy.diagnostics.report import collect_diagnostics, format_diagnostic, has_errors

__all__ = [
    "LEXER_UNEXPECTED_CHARACTER",
    "LEXER_UNTERMINATED_BLOCK_COMMENT",
    "LEXER_UNTERMINATED_CHAR",
    "LEXER_UNTERMINATED_STRING",
    "PARSER_EXPECTED_EXPRESSION",
    "PARSER_EXPECTED_PATTERN",
    "PARSER_EXPECTED_TOKEN",
    "PARSER_EXPECTED_TYPE",
    "PARSER_FIXITY_CONFLICT",
    "PARSER_INVALID_CONTEXT",
    "PARSER_UNEXPECTED_TOKEN",
    "PARSER_UNSUPPORTED_DECLARATION",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "format_diagnostic",
    "has_errors",
]
