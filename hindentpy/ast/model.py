"""AST data model for the supported Haskell subset."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import re

_QUALIFIER = re.compile(r"^(?:[A-Z][\w']*\.)+(?=.)")


class Boxed(StrEnum):
    BOXED = "boxed"
    UNBOXED = "unboxed"


class LitKind(StrEnum):
    INT = "int"
    FRAC = "frac"
    CHAR = "char"
    STRING = "string"


def unqualified(name: str) -> str:
    """Strip a module qualifier, e.g. `M.lookup` -> `lookup`, `M.!` -> `!`."""
    return _QUALIFIER.sub("", name, count=1)


def is_symbol_name(name: str) -> bool:
    """Operator names (`+`, `M.!`, `:|`) as opposed to identifiers."""
    base = unqualified(name)
    return bool(base) and not (base[0].isalpha() or base[0] == "_" or base[0] in "([")


@dataclass(frozen=True, slots=True)
class Var:
    """Variable reference; operator names print in parentheses, e.g. `(+)`."""

    name: str


@dataclass(frozen=True, slots=True)
class Con:
    """Constructor reference, including special constructors `()`, `[]`, `(,)`."""

    name: str


@dataclass(frozen=True, slots=True)
class Lit:
    """Literal preserved as raw source text."""

    text: str
    kind: LitKind = LitKind.INT


@dataclass(frozen=True, slots=True)
class QOp:
    """Infix operator; identifiers print in backticks, e.g. `` `div` ``."""

    name: str

    @property
    def is_backticked(self) -> bool:
        return not is_symbol_name(self.name)


@dataclass(frozen=True, slots=True)
class App:
    """Curried application `fun arg`."""

    fun: Exp
    arg: Exp


@dataclass(frozen=True, slots=True)
class InfixApp:
    left: Exp
    op: QOp
    right: Exp


@dataclass(frozen=True, slots=True)
class NegApp:
    expr: Exp


@dataclass(frozen=True, slots=True)
class Lambda:
    patterns: tuple[Pat, ...]
    body: Exp


@dataclass(frozen=True, slots=True)
class Let:
    binds: tuple[Decl, ...]
    body: Exp


@dataclass(frozen=True, slots=True)
class If:
    cond: Exp
    then_branch: Exp
    else_branch: Exp


@dataclass(frozen=True, slots=True)
class Case:
    scrutinee: Exp
    alts: tuple[Alt, ...]


@dataclass(frozen=True, slots=True)
class Do:
    stmts: tuple[Stmt, ...]


@dataclass(frozen=True, slots=True)
class Tuple:
    elements: tuple[Exp, ...]
    boxed: Boxed = Boxed.BOXED


@dataclass(frozen=True, slots=True)
class List:
    elements: tuple[Exp, ...]


@dataclass(frozen=True, slots=True)
class Paren:
    expr: Exp


@dataclass(frozen=True, slots=True)
class LeftSection:
    """`(expr op)`"""

    expr: Exp
    op: QOp


@dataclass(frozen=True, slots=True)
class RightSection:
    """`(op expr)`"""

    op: QOp
    expr: Exp


@dataclass(frozen=True, slots=True)
class FieldUpdate:
    name: str
    expr: Exp


@dataclass(frozen=True, slots=True)
class RecConstr:
    con: str
    fields: tuple[FieldUpdate, ...]


@dataclass(frozen=True, slots=True)
class RecUpdate:
    expr: Exp
    fields: tuple[FieldUpdate, ...]


@dataclass(frozen=True, slots=True)
class EnumFrom:
    start: Exp


@dataclass(frozen=True, slots=True)
class EnumFromTo:
    start: Exp
    end: Exp


@dataclass(frozen=True, slots=True)
class EnumFromThen:
    start: Exp
    then: Exp


@dataclass(frozen=True, slots=True)
class EnumFromThenTo:
    start: Exp
    then: Exp
    end: Exp


@dataclass(frozen=True, slots=True)
class ListComp:
    expr: Exp
    qualifiers: tuple[Stmt, ...]


@dataclass(frozen=True, slots=True)
class ExpTypeSig:
    expr: Exp
    type: Type


@dataclass(frozen=True, slots=True)
class VarQuote:
    """Template Haskell value-name quote, `'name`."""

    name: str


@dataclass(frozen=True, slots=True)
class TypQuote:
    """Template Haskell type-name quote, `''Name`."""

    name: str


@dataclass(frozen=True, slots=True)
class PVar:
    name: str


@dataclass(frozen=True, slots=True)
class PLit:
    text: str
    negated: bool = False


@dataclass(frozen=True, slots=True)
class PWildCard:
    pass


@dataclass(frozen=True, slots=True)
class PApp:
    """Constructor pattern, `Just x` or a bare `Nothing`."""

    con: str
    args: tuple[Pat, ...] = ()


@dataclass(frozen=True, slots=True)
class PInfixApp:
    left: Pat
    op: str
    right: Pat


@dataclass(frozen=True, slots=True)
class PTuple:
    elements: tuple[Pat, ...]
    boxed: Boxed = Boxed.BOXED


@dataclass(frozen=True, slots=True)
class PList:
    elements: tuple[Pat, ...]


@dataclass(frozen=True, slots=True)
class PParen:
    pattern: Pat


@dataclass(frozen=True, slots=True)
class PAsPat:
    name: str
    pattern: Pat


@dataclass(frozen=True, slots=True)
class PIrrPat:
    pattern: Pat


@dataclass(frozen=True, slots=True)
class PBangPat:
    pattern: Pat


@dataclass(frozen=True, slots=True)
class TyVar:
    name: str


@dataclass(frozen=True, slots=True)
class TyCon:
    name: str


@dataclass(frozen=True, slots=True)
class TyApp:
    fun: Type
    arg: Type


@dataclass(frozen=True, slots=True)
class TyFun:
    arg: Type
    result: Type


@dataclass(frozen=True, slots=True)
class TyTuple:
    elements: tuple[Type, ...]
    boxed: Boxed = Boxed.BOXED


@dataclass(frozen=True, slots=True)
class TyList:
    element: Type


@dataclass(frozen=True, slots=True)
class TyParen:
    type: Type


@dataclass(frozen=True, slots=True)
class ClassA:
    """Class assertion, `Show a` / `MonadState s m`."""

    class_name: str
    types: tuple[Type, ...]


@dataclass(frozen=True, slots=True)
class Context:
    assertions: tuple[ClassA, ...]
    parenthesized: bool = True


@dataclass(frozen=True, slots=True)
class TyForall:
    """`forall vs. ctx => type`, either part optional."""

    binders: tuple[str, ...] | None
    context: Context | None
    type: Type


@dataclass(frozen=True, slots=True)
class UnGuardedRhs:
    expr: Exp


@dataclass(frozen=True, slots=True)
class GuardedRhs:
    guards: tuple[Stmt, ...]
    expr: Exp


@dataclass(frozen=True, slots=True)
class GuardedRhss:
    rhss: tuple[GuardedRhs, ...]


@dataclass(frozen=True, slots=True)
class UnGuardedAlt:
    expr: Exp


@dataclass(frozen=True, slots=True)
class GuardedAlt:
    guards: tuple[Stmt, ...]
    expr: Exp


@dataclass(frozen=True, slots=True)
class GuardedAlts:
    alts: tuple[GuardedAlt, ...]


@dataclass(frozen=True, slots=True)
class Alt:
    pattern: Pat
    alts: UnGuardedAlt | GuardedAlts
    binds: tuple[Decl, ...] | None = None


@dataclass(frozen=True, slots=True)
class Generator:
    """`pat <- expr`"""

    pattern: Pat
    expr: Exp


@dataclass(frozen=True, slots=True)
class Qualifier:
    expr: Exp


@dataclass(frozen=True, slots=True)
class LetStmt:
    binds: tuple[Decl, ...]


@dataclass(frozen=True, slots=True)
class TypeSig:
    names: tuple[str, ...]
    type: Type


@dataclass(frozen=True, slots=True)
class Match:
    """One clause of a function binding."""

    name: str
    patterns: tuple[Pat, ...]
    rhs: Rhs
    binds: tuple[Decl, ...] | None = None


@dataclass(frozen=True, slots=True)
class FunBind:
    matches: tuple[Match, ...]

    @property
    def name(self) -> str:
        return self.matches[0].name


@dataclass(frozen=True, slots=True)
class PatBind:
    pattern: Pat
    rhs: Rhs
    binds: tuple[Decl, ...] | None = None


@dataclass(frozen=True, slots=True)
class RawDecl:
    """Top-level source kept verbatim (unsupported syntax or embedded comments)."""

    text: str


@dataclass(frozen=True, slots=True)
class SourceComment:
    text: str


@dataclass(frozen=True, slots=True)
class ModuleItem:
    node: Decl | RawDecl | SourceComment
    blank_line_before: bool = False


@dataclass(frozen=True, slots=True)
class Module:
    items: tuple[ModuleItem, ...]

    @property
    def decls(self) -> tuple[Decl, ...]:
        return tuple(
            item.node for item in self.items if isinstance(item.node, (TypeSig, FunBind, PatBind))
        )


type Exp = (
    Var
    | Con
    | Lit
    | App
    | InfixApp
    | NegApp
    | Lambda
    | Let
    | If
    | Case
    | Do
    | Tuple
    | List
    | Paren
    | LeftSection
    | RightSection
    | RecConstr
    | RecUpdate
    | EnumFrom
    | EnumFromTo
    | EnumFromThen
    | EnumFromThenTo
    | ListComp
    | ExpTypeSig
    | VarQuote
    | TypQuote
)
type Pat = PVar | PLit | PWildCard | PApp | PInfixApp | PTuple | PList | PParen | PAsPat | PIrrPat | PBangPat
type Type = TyVar | TyCon | TyApp | TyFun | TyTuple | TyList | TyParen | TyForall
type Rhs = UnGuardedRhs | GuardedRhss
type Stmt = Generator | Qualifier | LetStmt
type Decl = TypeSig | FunBind | PatBind
type Node = Exp | Pat | Type | Rhs | Stmt | Decl | Match | Alt | UnGuardedAlt | GuardedAlts | GuardedAlt | GuardedRhs | FieldUpdate | Context | ClassA | QOp


__all__ = [
    "Alt",
    "App",
    "Boxed",
    "Case",
    "ClassA",
    "Con",
    "Context",
    "Decl",
    "Do",
    "EnumFrom",
    "EnumFromThen",
    "EnumFromThenTo",
    "EnumFromTo",
    "Exp",
    "ExpTypeSig",
    "FieldUpdate",
    "FunBind",
    "Generator",
    "GuardedAlt",
    "GuardedAlts",
    "GuardedRhs",
    "GuardedRhss",
    "If",
    "InfixApp",
    "Lambda",
    "LeftSection",
    "Let",
    "LetStmt",
    "List",
    "ListComp",
    "Lit",
    "LitKind",
    "Match",
    "Module",
    "ModuleItem",
    "NegApp",
    "Node",
    "PApp",
    "PAsPat",
    "PBangPat",
    "PInfixApp",
    "PIrrPat",
    "PList",
    "PLit",
    "PParen",
    "PTuple",
    "PVar",
    "PWildCard",
    "Paren",
    "Pat",
    "PatBind",
    "QOp",
    "Qualifier",
    "RawDecl",
    "RecConstr",
    "RecUpdate",
    "Rhs",
    "RightSection",
    "SourceComment",
    "Stmt",
    "Tuple",
    "TyApp",
    "TyCon",
    "TyForall",
    "TyFun",
    "TyList",
    "TyParen",
    "TyTuple",
    "TyVar",
    "TypQuote",
    "Type",
    "TypeSig",
    "UnGuardedAlt",
    "UnGuardedRhs",
    "Var",
    "VarQuote",
    "is_symbol_name",
    "unqualified",
]
