"""Haskell AST model."""

from hindentpy.ast.model import (
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
    LitKind,
    Match,
    Module,
    ModuleItem,
    NegApp,
    Node,
    PApp,
    PAsPat,
    PBangPat,
    PInfixApp,
    PIrrPat,
    PList,
    PLit,
    PParen,
    PTuple,
    PVar,
    PWildCard,
    Paren,
    Pat,
    PatBind,
    QOp,
    Qualifier,
    RawDecl,
    RecConstr,
    RecUpdate,
    Rhs,
    RightSection,
    SourceComment,
    Stmt,
    Tuple,
    TyApp,
    TyCon,
    TyForall,
    TyFun,
    TyList,
    TyParen,
    TyTuple,
    TyVar,
    TypQuote,
    Type,
    TypeSig,
    UnGuardedAlt,
    UnGuardedRhs,
    Var,
    VarQuote,
    is_symbol_name,
    unqualified,
)

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
