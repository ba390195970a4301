"""Structural and measured predicates that drive layout decisions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hindentpy.ast import (
    App,
    Con,
    InfixApp,
    Lambda,
    LeftSection,
    List,
    Lit,
    NegApp,
    RightSection,
    TypQuote,
    Var,
    VarQuote,
)

if TYPE_CHECKING:
    from hindentpy.ast import Exp, Node
    from hindentpy.printer import PrintState, Printer, Procedure


def is_flat(node: Exp) -> bool:
    """Shape-only check that `node` is cheap enough to render inline."""
    match node:
        case Var() | Con() | Lit() | VarQuote() | TypQuote() | List(elements=()):
            return True
        case Lambda(body=body):
            return is_flat(body)
        case App(fun=fun, arg=arg):
            return isinstance(fun, Var) and isinstance(arg, Var)
        case InfixApp(left=left, right=right):
            return is_flat(left) and is_flat(right)
        case NegApp(expr=expr) | LeftSection(expr=expr) | RightSection(expr=expr):
            return is_flat(expr)
    return False


def effective_column(printer: Printer) -> int:
    """Column the next write starts at, with pending indentation applied."""
    _, state = printer.sandbox(lambda: printer.write(""))
    return state.column


def overflows(printer: Printer, state: PrintState, margin: int = 0) -> bool:
    return state.column > printer.column_limit + margin


def is_single_liner(printer: Printer, procedure: Procedure) -> bool:
    line = printer.state.line
    _, state = printer.sandbox(procedure)
    return state.line == line


def is_overflow(printer: Printer, procedure: Procedure) -> bool:
    _, state = printer.sandbox(procedure)
    return overflows(printer, state)


def is_overflow_max(printer: Printer, procedure: Procedure) -> bool:
    _, state = printer.sandbox(procedure)
    return overflows(printer, state, printer.config.overflow_margin)


def is_short(printer: Printer, node: Node) -> tuple[bool, PrintState]:
    line = printer.state.line
    start = effective_column(printer)
    _, state = printer.sandbox(lambda: printer.pretty(node))
    return state.line == line and state.column < start + printer.config.short_name, state


def is_small(printer: Printer, procedure: Procedure) -> tuple[bool, PrintState]:
    line = printer.state.line
    _, state = printer.sandbox(procedure)
    return state.line == line and state.column < printer.config.small_column_limit, state


def fits_on_line(printer: Printer, procedure: Procedure, margin: int = 0) -> tuple[bool, PrintState]:
    """Single trial answering both "one line" and "within limit + margin"."""
    line = printer.state.line
    _, state = printer.sandbox(procedure)
    return state.line == line and not overflows(printer, state, margin), state
