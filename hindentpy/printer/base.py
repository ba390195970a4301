"""Fundamental rendering of every node shape.

Children are always rendered through `Printer.pretty`, so a style's rules
apply at every depth even when a parent falls back to this renderer.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from hindentpy.ast import (
    Alt,
    App,
    Boxed,
    Case,
    ClassA,
    Con,
    Context,
    Decl,
    Do,
    EnumFrom,
    EnumFromThen,
    EnumFromThenTo,
    EnumFromTo,
    Exp,
    ExpTypeSig,
    FieldUpdate,
    FunBind,
    Generator,
    GuardedAlt,
    GuardedAlts,
    GuardedRhs,
    GuardedRhss,
    If,
    InfixApp,
    Lambda,
    LeftSection,
    Let,
    LetStmt,
    List,
    ListComp,
    Lit,
    Match,
    Module,
    ModuleItem,
    NegApp,
    Paren,
    PApp,
    PAsPat,
    PatBind,
    PBangPat,
    PInfixApp,
    PIrrPat,
    PList,
    PLit,
    PParen,
    PTuple,
    PVar,
    PWildCard,
    QOp,
    Qualifier,
    RawDecl,
    RecConstr,
    RecUpdate,
    RightSection,
    SourceComment,
    Tuple,
    TyApp,
    TyCon,
    TyForall,
    TyFun,
    TyList,
    TyParen,
    TyTuple,
    TyVar,
    TypeSig,
    TypQuote,
    UnGuardedAlt,
    UnGuardedRhs,
    Var,
    VarQuote,
    is_symbol_name,
)

if TYPE_CHECKING:
    from hindentpy.ast import Node
    from hindentpy.printer.printer import Printer


def var_name(name: str) -> str:
    """Name in prefix position: operators are parenthesized."""
    return f"({name})" if is_symbol_name(name) else name


def op_name(name: str) -> str:
    """Name in infix position: identifiers are backticked."""
    return name if is_symbol_name(name) else f"`{name}`"


def tuple_delimiters(boxed: Boxed) -> tuple[str, str]:
    # Unboxed delimiters keep a space so `#)` never fuses with a MagicHash literal like `2#`.
    if boxed == Boxed.UNBOXED:
        return "(# ", " #)"
    return "(", ")"


def pretty_base(printer: Printer, node: Node | Module | ModuleItem | RawDecl | SourceComment) -> None:
    match node:
        # Expressions
        case Var(name=name):
            printer.write(var_name(name))
        case Con(name=name):
            printer.write(var_name(name))
        case Lit(text=text):
            printer.write(text)
        case QOp(name=name):
            printer.write(op_name(name))
        case App(fun=fun, arg=arg):
            printer.spaced(printer.renderers([fun, arg]))
        case InfixApp(left=left, op=op, right=right):

            def operand_and_operator() -> None:
                printer.pretty(left)
                printer.space()
                printer.pretty(op)
                printer.space()

            printer.depend(operand_and_operator, lambda: printer.pretty(right))
        case NegApp(expr=expr):
            printer.depend(lambda: printer.write("-"), lambda: printer.pretty(expr))
        case Lambda(patterns=patterns, body=body):

            def lambda_body() -> None:
                printer.spaced(printer.renderers(patterns))
                printer.depend(lambda: printer.write(" -> "), lambda: printer.pretty(body))

            printer.depend(lambda: printer.write("\\"), lambda_body)
        case Let(binds=binds, body=body):
            printer.depend(lambda: printer.write("let "), lambda: printer.lined(printer.renderers(binds)))
            printer.newline()
            printer.depend(lambda: printer.write("in "), lambda: printer.pretty(body))
        case If(cond=cond, then_branch=then_branch, else_branch=else_branch):

            def branches() -> None:
                printer.pretty(cond)
                printer.newline()
                printer.depend(lambda: printer.write("then "), lambda: printer.pretty(then_branch))
                printer.newline()
                printer.depend(lambda: printer.write("else "), lambda: printer.pretty(else_branch))

            printer.depend(lambda: printer.write("if "), branches)
        case Case(scrutinee=scrutinee, alts=alts):

            def scrutinee_of() -> None:
                printer.pretty(scrutinee)
                printer.write(" of")

            printer.depend(lambda: printer.write("case "), scrutinee_of)
            if alts:
                printer.newline()
                printer.indented(printer.indent_spaces, lambda: printer.lined(printer.renderers(alts)))
        case Do(stmts=stmts):
            printer.depend(lambda: printer.write("do "), lambda: printer.lined(printer.renderers(stmts)))
        case Tuple(elements=elements, boxed=boxed):
            opener, closer = tuple_delimiters(boxed)
            printer.wrap(opener, closer, lambda: printer.commas(printer.renderers(elements)))
        case List(elements=elements):
            printer.brackets(lambda: printer.commas(printer.renderers(elements)))
        case Paren(expr=expr):
            printer.parens(lambda: printer.pretty(expr))
        case LeftSection(expr=expr, op=op):
            printer.parens(lambda: printer.spaced(printer.renderers([expr, op])))
        case RightSection(op=op, expr=expr):
            printer.parens(lambda: printer.spaced(printer.renderers([op, expr])))
        case RecConstr(con=con, fields=fields):
            printer.depend(
                lambda: printer.write(var_name(con) + " "),
                lambda: printer.braces(lambda: printer.commas(printer.renderers(fields))),
            )
        case RecUpdate(expr=expr, fields=fields):

            def record() -> None:
                printer.pretty(expr)
                printer.space()

            printer.depend(record, lambda: printer.braces(lambda: printer.commas(printer.renderers(fields))))
        case FieldUpdate(name=name, expr=expr):
            printer.write(f"{name} = ")
            printer.pretty(expr)
        case EnumFrom(start=start):
            printer.brackets(lambda: _enum(printer, [start], None))
        case EnumFromTo(start=start, end=end):
            printer.brackets(lambda: _enum(printer, [start], end))
        case EnumFromThen(start=start, then=then):
            printer.brackets(lambda: _enum(printer, [start, then], None))
        case EnumFromThenTo(start=start, then=then, end=end):
            printer.brackets(lambda: _enum(printer, [start, then], end))
        case ListComp(expr=expr, qualifiers=qualifiers):

            def comprehension() -> None:
                printer.pretty(expr)
                printer.write(" | ")
                printer.commas(printer.renderers(qualifiers))

            printer.brackets(comprehension)
        case ExpTypeSig(expr=expr, type=ty):
            printer.pretty(expr)
            printer.write(" :: ")
            printer.pretty(ty)
        case VarQuote(name=name):
            printer.write(f"'{name}")
        case TypQuote(name=name):
            printer.write(f"''{name}")

        # Patterns
        case PVar(name=name):
            printer.write(var_name(name))
        case PLit(text=text, negated=negated):
            printer.write(f"-{text}" if negated else text)
        case PWildCard():
            printer.write("_")
        case PApp(con=con, args=()):
            printer.write(var_name(con))
        case PApp(con=con, args=args):
            printer.depend(lambda: printer.write(var_name(con) + " "), lambda: printer.spaced(printer.renderers(args)))
        case PInfixApp(left=left, op=op, right=right):
            printer.pretty(left)
            printer.write(f" {op_name(op)} ")
            printer.pretty(right)
        case PTuple(elements=elements, boxed=boxed):
            opener, closer = tuple_delimiters(boxed)
            printer.wrap(opener, closer, lambda: printer.commas(printer.renderers(elements)))
        case PList(elements=elements):
            printer.brackets(lambda: printer.commas(printer.renderers(elements)))
        case PParen(pattern=pattern):
            printer.parens(lambda: printer.pretty(pattern))
        case PAsPat(name=name, pattern=pattern):
            printer.write(f"{name}@")
            printer.pretty(pattern)
        case PIrrPat(pattern=pattern):
            printer.write("~")
            printer.pretty(pattern)
        case PBangPat(pattern=pattern):
            printer.write("!")
            printer.pretty(pattern)

        # Types
        case TyVar(name=name) | TyCon(name=name):
            printer.write(name)
        case TyApp(fun=fun, arg=arg):
            printer.pretty(fun)
            printer.space()
            printer.pretty(arg)
        case TyFun(arg=arg, result=result):
            printer.pretty(arg)
            printer.write(" -> ")
            printer.pretty(result)
        case TyTuple(elements=elements, boxed=boxed):
            opener, closer = tuple_delimiters(boxed)
            printer.wrap(opener, closer, lambda: printer.commas(printer.renderers(elements)))
        case TyList(element=element):
            printer.brackets(lambda: printer.pretty(element))
        case TyParen(type=ty):
            printer.parens(lambda: printer.pretty(ty))
        case TyForall(binders=binders, context=context, type=ty):
            if binders is not None:
                printer.write("forall ")
                printer.spaced([lambda name=name: printer.write(name) for name in binders])
                printer.write(". ")
            if context is not None:
                printer.pretty(context)
                printer.write(" => ")
            printer.pretty(ty)
        case Context(assertions=assertions, parenthesized=True):
            printer.parens(lambda: printer.commas(printer.renderers(assertions)))
        case Context(assertions=assertions):
            printer.commas(printer.renderers(assertions))
        case ClassA(class_name=class_name, types=types):
            printer.write(class_name)
            for ty in types:
                printer.space()
                printer.pretty(ty)

        # Right-hand sides and alternatives
        case UnGuardedRhs(expr=expr):
            printer.write(" = ")
            printer.pretty(expr)
        case GuardedRhss(rhss=rhss):
            _guarded_lines(printer, rhss)
        case GuardedRhs(guards=guards, expr=expr):
            printer.space()
            printer.commas(printer.renderers(guards))
            printer.write(" = ")
            printer.pretty(expr)
        case UnGuardedAlt(expr=expr):
            printer.write(" -> ")
            printer.pretty(expr)
        case GuardedAlts(alts=alts):
            _guarded_lines(printer, alts)
        case GuardedAlt(guards=guards, expr=expr):
            printer.space()
            printer.commas(printer.renderers(guards))
            printer.write(" -> ")
            printer.pretty(expr)
        case Alt(pattern=pattern, alts=alts, binds=binds):
            printer.pretty(pattern)
            printer.pretty(alts)
            _where(printer, binds)

        # Statements
        case Generator(pattern=pattern, expr=expr):

            def bind_pattern() -> None:
                printer.pretty(pattern)
                printer.write(" <- ")

            printer.depend(bind_pattern, lambda: printer.pretty(expr))
        case Qualifier(expr=expr):
            printer.pretty(expr)
        case LetStmt(binds=binds):
            printer.depend(lambda: printer.write("let "), lambda: printer.lined(printer.renderers(binds)))

        # Declarations
        case TypeSig(names=names, type=ty):

            def names_of() -> None:
                printer.commas([lambda name=name: printer.write(var_name(name)) for name in names])
                printer.write(" :: ")

            printer.depend(names_of, lambda: printer.pretty(ty))
        case FunBind(matches=matches):
            printer.lined(printer.renderers(matches))
        case Match(name=name, patterns=patterns, rhs=rhs, binds=binds):
            if patterns:
                printer.depend(
                    lambda: printer.write(var_name(name) + " "),
                    lambda: printer.spaced(printer.renderers(patterns)),
                )
            else:
                printer.write(var_name(name))
            printer.pretty(rhs)
            _where(printer, binds)
        case PatBind(pattern=pattern, rhs=rhs, binds=binds):
            printer.pretty(pattern)
            printer.pretty(rhs)
            _where(printer, binds)

        # Module level
        case Module(items=items):
            for index, item in enumerate(items):
                if index:
                    printer.newline()
                    if item.blank_line_before:
                        printer.newline()
                printer.pretty(item)
        case ModuleItem(node=item_node):
            printer.pretty(item_node)
        case RawDecl(text=text) | SourceComment(text=text):
            printer.write(text)
        case _:
            raise TypeError(f"Cannot render {type(node).__name__}")


def _enum(printer: Printer, heads: list[Exp], end: Exp | None) -> None:
    printer.commas(printer.renderers(heads))
    if end is None:
        printer.write(" ..")
        return
    printer.write(" .. ")
    printer.pretty(end)


def _guarded_lines(printer: Printer, branches: Sequence[GuardedRhs | GuardedAlt]) -> None:
    def guard_line(branch: GuardedRhs | GuardedAlt) -> None:
        printer.write("|")
        printer.pretty(branch)

    printer.newline()
    printer.indented(
        printer.indent_spaces,
        lambda: printer.lined([lambda branch=branch: guard_line(branch) for branch in branches]),
    )


def _where(printer: Printer, binds: tuple[Decl, ...] | None) -> None:
    if not binds:
        return

    def where_block() -> None:
        printer.write("where")
        printer.newline()
        printer.indented(printer.indent_spaces, lambda: printer.lined(printer.renderers(binds)))

    printer.newline()
    printer.indented(printer.indent_spaces, where_block)
