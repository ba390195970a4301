"""Per-shape layout rules choosing between inline and broken renderings."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging
from typing import TYPE_CHECKING

from hindentpy.ast import (
    App,
    FieldUpdate,
    GuardedAlt,
    GuardedRhs,
    InfixApp,
    Lambda,
    List,
    Qualifier,
    Stmt,
    Tuple,
    TyForall,
    TyFun,
    TypeSig,
    UnGuardedAlt,
    UnGuardedRhs,
)
from hindentpy.printer.base import tuple_delimiters, var_name
from hindentpy.style.predicates import (
    effective_column,
    fits_on_line,
    is_flat,
    is_short,
    is_small,
    overflows,
)

if TYPE_CHECKING:
    from hindentpy.ast import Exp, Type
    from hindentpy.printer import PrintState, Printer, Procedure

logger = logging.getLogger(__name__)


def depend_or_newline(
    printer: Printer,
    left: Procedure,
    node: Exp,
    render: Callable[[Exp], object],
) -> None:
    """Render `left` then `node` inline when flat or small, else break after `left`."""

    def render_dependent() -> None:
        printer.depend(left, lambda: render(node))

    if is_flat(node):
        render_dependent()
        return

    small, state = is_small(printer, render_dependent)
    if small:
        printer.commit(state)
        return

    logger.debug("breaking before %s", type(node).__name__)
    left()
    printer.newline()
    render(node)


def infix_app(printer: Printer, node: InfixApp, column: int | None = None) -> None:
    """`a op b` on one line when flat and within the limit.

    Otherwise `b` goes on the next line, at `column` plus the indent width
    when a continuation column is given.
    """

    def operand_and_operator() -> None:
        printer.pretty(node.left)
        printer.space()
        printer.pretty(node.op)
        printer.space()

    if is_flat(node):
        _, state = printer.sandbox(lambda: printer.depend(operand_and_operator, lambda: printer.pretty(node.right)))
        if not overflows(printer, state):
            printer.commit(state)
            return

    # A left-nested chain keeps the continuation column for every operand it breaks.
    if column is not None and isinstance(node.left, InfixApp):
        infix_app(printer, node.left, column)
    else:
        printer.pretty(node.left)
    printer.space()
    printer.pretty(node.op)
    printer.newline()
    if column is None:
        printer.pretty(node.right)
    else:
        printer.column(column + printer.indent_spaces, lambda: printer.pretty(node.right))


def flatten_app(node: App) -> tuple[Exp, list[Exp]]:
    """`f a b c` as `(f, [a, b, c])`."""
    args: list[Exp] = []
    head: Exp = node
    while isinstance(head, App):
        args.insert(0, head.arg)
        head = head.fun
    return head, args


def sandbox_singles(printer: Printer, args: Sequence[Exp]) -> tuple[bool, PrintState]:
    """Trial of `args` one per line; reports whether each stayed on one line."""

    def render() -> bool:
        all_single = True
        for index, arg in enumerate(args):
            if index:
                printer.newline()
            line = printer.state.line
            printer.pretty(arg)
            if printer.state.line != line:
                all_single = False
                break
        return all_single

    return printer.sandbox(render)


def multi(printer: Printer, orig: int, args: Sequence[Exp], head_is_short: bool) -> None:
    """Arguments one per line: hanging after a short head, else below it."""
    if head_is_short:
        printer.lined(printer.renderers(args))
        return

    all_single, state = sandbox_singles(printer, args)
    if all_single:
        printer.commit(state)
        return

    printer.newline()
    printer.column(orig + printer.indent_spaces, lambda: printer.lined(printer.renderers(args)))


def infix_application(printer: Printer, node: InfixApp) -> None:
    infix_app(printer, node)


def application(printer: Printer, node: App) -> None:
    orig = printer.state.indent_level
    head, args = flatten_app(node)

    def render_head() -> bool:
        short, state = is_short(printer, head)
        printer.commit(state)
        printer.space()
        return short

    def render_args(head_is_short: bool) -> None:
        flats = [is_flat(arg) for arg in args]
        flatish = flats.count(False) < 2
        if (head_is_short and flatish) or all(flats):
            fits, state = fits_on_line(
                printer,
                lambda: printer.spaced(printer.renderers(args)),
                printer.config.overflow_margin,
            )
            if fits:
                printer.commit(state)
                return
            logger.debug("application with %d arguments does not fit on one line", len(args))
        multi(printer, orig, args, head_is_short)

    printer.depend_bind(render_head, render_args)


def lambda_expression(printer: Printer, node: Lambda) -> None:
    def parameters_and_body() -> None:
        printer.spaced(printer.renderers(node.patterns))
        depend_or_newline(
            printer,
            lambda: printer.write(" -> "),
            node.body,
            lambda body: printer.indented(1, lambda: printer.pretty(body)),
        )

    printer.depend(lambda: printer.write("\\"), parameters_and_body)


def tuple_expression(printer: Printer, node: Tuple) -> None:
    opener, closer = tuple_delimiters(node.boxed)
    elements = printer.renderers(node.elements)

    def body() -> None:
        fits, state = fits_on_line(printer, lambda: printer.commas(elements))
        if fits:
            printer.commit(state)
        else:
            printer.prefixed_lined(",", elements)
        printer.write(closer)

    printer.depend(lambda: printer.write(opener), body)


def list_expression(printer: Printer, node: List) -> None:
    elements = printer.renderers(node.elements)
    fits, state = fits_on_line(printer, lambda: printer.brackets(lambda: printer.commas(elements)))
    if fits:
        printer.commit(state)
        return
    printer.brackets(lambda: printer.prefixed_lined(",", elements))


def field_update(printer: Printer, node: FieldUpdate) -> None:
    depend_or_newline(printer, lambda: printer.write(f"{node.name} = "), node.expr, printer.pretty)


def unguarded_rhs(printer: Printer, node: UnGuardedRhs) -> None:
    printer.indented(
        printer.indent_spaces,
        lambda: depend_or_newline(printer, lambda: printer.write(" = "), node.expr, printer.pretty),
    )


def _guarded(printer: Printer, guards: Sequence[Stmt], separator: str, expr: Exp) -> None:
    def guard(stmt: Stmt) -> None:
        printer.space()
        printer.pretty(stmt)

    def body() -> None:
        printer.prefixed_lined(",", [lambda stmt=stmt: guard(stmt) for stmt in guards])
        depend_or_newline(
            printer,
            lambda: printer.write(separator),
            expr,
            lambda branch: printer.indented(1, lambda: printer.pretty(branch)),
        )

    printer.indented(1, body)


def guarded_rhs(printer: Printer, node: GuardedRhs) -> None:
    _guarded(printer, node.guards, " = ", node.expr)


def guarded_alt(printer: Printer, node: GuardedAlt) -> None:
    _guarded(printer, node.guards, " -> ", node.expr)


def unguarded_alt(printer: Printer, node: UnGuardedAlt) -> None:
    depend_or_newline(
        printer,
        lambda: printer.write(" -> "),
        node.expr,
        lambda branch: printer.indented(2, lambda: printer.pretty(branch)),
    )


def qualifier_statement(printer: Printer, node: Qualifier) -> None:
    # Continuation lines stay right of the statement column.
    if isinstance(node.expr, InfixApp):
        infix_app(printer, node.expr, effective_column(printer))
        return
    printer.pretty_no_ext(node)


def collapse_arrows(ty: Type) -> list[Type]:
    """`a -> b -> c` as `[a, b, c]`."""
    components: list[Type] = []
    while isinstance(ty, TyFun):
        components.append(ty.arg)
        ty = ty.result
    components.append(ty)
    return components


def type_signature(printer: Printer, node: TypeSig) -> None:
    def names() -> None:
        printer.commas([lambda name=name: printer.write(var_name(name)) for name in node.names])
        printer.write(" :: ")

    printer.depend(names, lambda: _declaration_type(printer, node.type))


def _declaration_type(printer: Printer, ty: Type) -> None:
    if not isinstance(ty, TyForall):
        _arrow_chain(printer, ty)
        return

    if ty.binders is not None:
        printer.write("forall ")
        printer.spaced([lambda name=name: printer.write(name) for name in ty.binders])
        printer.write(". ")
        printer.newline()

    if ty.context is None:
        _arrow_chain(printer, ty.type)
        return

    printer.pretty(ty.context)
    printer.newline()
    printer.indented(
        -3,
        lambda: printer.depend(lambda: printer.write("=> "), lambda: _arrow_chain(printer, ty.type)),
    )


def _arrow_chain(printer: Printer, ty: Type) -> None:
    line = printer.state.line
    _, state = printer.sandbox(lambda: printer.pretty(ty))
    if state.line == line and not overflows(printer, state) and state.column < printer.config.small_column_limit:
        printer.commit(state)
        return
    logger.debug("breaking type signature at function arrows")
    printer.prefixed_lined("-> ", printer.renderers(collapse_arrows(ty)))
