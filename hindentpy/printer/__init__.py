"""Printer state, combinators and the fundamental renderer."""

from hindentpy.printer.base import op_name, pretty_base, tuple_delimiters, var_name
from hindentpy.printer.printer import OutputChain, PrintState, Printer, Procedure

__all__ = [
    "OutputChain",
    "PrintState",
    "Printer",
    "Procedure",
    "op_name",
    "pretty_base",
    "tuple_delimiters",
    "var_name",
]
