"""Operator fixities and resolution of flat operator sequences into trees."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from hindentpy.ast import Exp, InfixApp, NegApp, QOp, unqualified


class Associativity(StrEnum):
    LEFT = "infixl"
    RIGHT = "infixr"
    NONE = "infix"


@dataclass(frozen=True, slots=True)
class Fixity:
    associativity: Associativity
    precedence: int


DEFAULT_FIXITY: Final[Fixity] = Fixity(Associativity.LEFT, 9)


def _fixities(associativity: Associativity, precedence: int, *names: str) -> dict[str, Fixity]:
    return {name: Fixity(associativity, precedence) for name in names}


BASE_FIXITIES: Final[dict[str, Fixity]] = {
    **_fixities(Associativity.RIGHT, 9, "."),
    **_fixities(Associativity.LEFT, 9, "!!", "!"),
    **_fixities(Associativity.RIGHT, 8, "^", "^^", "**"),
    **_fixities(Associativity.LEFT, 7, "*", "/", "div", "mod", "rem", "quot", "%"),
    **_fixities(Associativity.LEFT, 6, "+", "-"),
    **_fixities(Associativity.RIGHT, 6, "<>"),
    **_fixities(Associativity.RIGHT, 5, ":", "++"),
    **_fixities(Associativity.NONE, 4, "==", "/=", "<", "<=", ">", ">=", "elem", "notElem"),
    **_fixities(Associativity.LEFT, 4, "<$>", "<$", "$>", "<*>", "*>", "<*"),
    **_fixities(Associativity.LEFT, 3, "<|>"),
    **_fixities(Associativity.RIGHT, 3, "&&"),
    **_fixities(Associativity.RIGHT, 2, "||"),
    **_fixities(Associativity.LEFT, 1, ">>", ">>=", "&", "<&>"),
    **_fixities(Associativity.RIGHT, 1, "=<<", ">=>", "<=<"),
    **_fixities(Associativity.RIGHT, 0, "$", "$!", "seq"),
}

NEGATION_FIXITY: Final[Fixity] = Fixity(Associativity.LEFT, 6)
_START: Final[Fixity] = Fixity(Associativity.NONE, -1)


class FixityError(ValueError):
    """Operators of equal precedence and conflicting associativity were mixed."""


@dataclass(frozen=True, slots=True)
class Negation:
    """Prefix `-` marker inside an operator sequence."""


type SequenceItem = Exp | QOp | Negation


def fixity_of(op: QOp, table: dict[str, Fixity] | None = None) -> Fixity:
    fixities = BASE_FIXITIES if table is None else table
    return fixities.get(unqualified(op.name), DEFAULT_FIXITY)


def resolve_operators(items: list[SequenceItem], table: dict[str, Fixity] | None = None) -> Exp:
    """Resolve `e1 op1 e2 op2 ...` (with optional prefix negations) by fixity.

    Follows the resolution algorithm of the Haskell 2010 report (section 10.6).
    """

    def parse_neg(op1: Fixity, rest: list[SequenceItem]) -> tuple[Exp, list[SequenceItem]]:
        head, *tail = rest
        if isinstance(head, Negation):
            if op1.precedence >= NEGATION_FIXITY.precedence:
                raise FixityError("Prefix negation cannot appear here without parentheses")
            operand, remaining = parse_neg(NEGATION_FIXITY, tail)
            return parse_one(op1, NegApp(operand), remaining)
        if isinstance(head, QOp):
            raise FixityError(f"Unexpected operator `{head.name}`")
        return parse_one(op1, head, tail)

    def parse_one(op1: Fixity, left: Exp, rest: list[SequenceItem]) -> tuple[Exp, list[SequenceItem]]:
        while rest:
            op2 = rest[0]
            if not isinstance(op2, QOp):
                raise FixityError("Expected an operator")
            fixity2 = fixity_of(op2, table)
            if op1.precedence == fixity2.precedence and (
                op1.associativity != fixity2.associativity or op1.associativity == Associativity.NONE
            ):
                raise FixityError(f"Cannot mix operators around `{op2.name}` of equal precedence")
            if op1.precedence > fixity2.precedence or (
                op1.precedence == fixity2.precedence and op1.associativity == Associativity.LEFT
            ):
                return left, rest
            right, rest = parse_neg(fixity2, rest[1:])
            left = InfixApp(left, op2, right)
        return left, rest

    expr, remaining = parse_neg(_START, items)
    if remaining:
        raise FixityError("Operator sequence did not resolve completely")
    return expr
