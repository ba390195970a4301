"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from hindentpy.diagnostics.diagnostic import Diagnostic
from hindentpy.text import LineIndex


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for group in groups:
        diagnostics.extend(group)
    return diagnostics


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def format_diagnostic(diagnostic: Diagnostic, index: LineIndex, path: str = "<stdin>") -> str:
    """Render one diagnostic as a `path:line:col: severity CODE message` line."""
    line, col = index.line_col(diagnostic.range.start)
    text = f"{path}:{line}:{col}: {diagnostic.severity} {diagnostic.code} {diagnostic.message}"
    if diagnostic.hint:
        text += f" (hint: {diagnostic.hint})"
    return text
