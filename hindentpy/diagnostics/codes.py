"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final

from hindentpy.diagnostics.diagnostic import Diagnostic, Severity
from hindentpy.text import TextRange


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None

    def at(
        self,
        range: TextRange,
        *,
        message: str | None = None,
        severity: Severity | None = None,
    ) -> Diagnostic:
        """Instantiate the spec at a source range."""
        return Diagnostic(
            code=self.code,
            message=message if message is not None else self.message,
            range=range,
            severity=severity if severity is not None else self.severity,
            hint=self.hint,
            category=self.category,
        )


LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string literal.",
    hint="Close the string with a double quote.",
    severity="error",
    category="lexer",
)

LEXER_UNTERMINATED_CHAR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_CHAR",
    message="Unterminated character literal.",
    hint="Close the character literal with a single quote.",
    severity="error",
    category="lexer",
)

LEXER_UNTERMINATED_BLOCK_COMMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_BLOCK_COMMENT",
    message="Unterminated block comment.",
    hint="Close the comment with `-}`.",
    severity="error",
    category="lexer",
)

LEXER_UNEXPECTED_CHARACTER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNEXPECTED_CHARACTER",
    message="Unexpected character",
    severity="error",
    category="lexer",
)

PARSER_EXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_TOKEN",
    message="Expected token",
    severity="error",
    category="parser",
)

PARSER_UNEXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNEXPECTED_TOKEN",
    message="Unexpected token",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_EXPRESSION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_EXPRESSION",
    message="Expected an expression",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_PATTERN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_PATTERN",
    message="Expected a pattern",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_TYPE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_TYPE",
    message="Expected a type",
    severity="error",
    category="parser",
)

PARSER_INVALID_CONTEXT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_INVALID_CONTEXT",
    message="Class context must be a class constraint or a tuple of class constraints",
    hint="Write contexts like `(Show a, Eq a) =>`.",
    severity="error",
    category="parser",
)

PARSER_UNSUPPORTED_DECLARATION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNSUPPORTED_DECLARATION",
    message="Declaration could not be parsed; it is kept verbatim.",
    severity="error",
    category="parser",
)

PARSER_FIXITY_CONFLICT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_FIXITY_CONFLICT",
    message="Operators of equal precedence cannot be mixed",
    hint="Add parentheses to make the grouping explicit.",
    severity="error",
    category="parser",
)
