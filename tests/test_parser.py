import textwrap

import pytest

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
    EnumFromThen,
    EnumFromTo,
    Exp,
    FieldUpdate,
    FunBind,
    Generator,
    GuardedRhs,
    GuardedRhss,
    If,
    InfixApp,
    Lambda,
    LeftSection,
    Let,
    LetStmt,
    ListComp,
    Lit,
    LitKind,
    Match,
    NegApp,
    PApp,
    Paren,
    PatBind,
    PInfixApp,
    PLit,
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
    TyVar,
    TypeSig,
    UnGuardedAlt,
    UnGuardedRhs,
    Var,
)
from hindentpy.parser import (
    FixityError,
    Negation,
    ParseMode,
    ParserOptions,
    parse,
    parse_result,
    resolve_operators,
)
from tests._shared_cases import FORMAT_CASES, PARSE_ERROR_CASES, HaskellCase, case_id


def first_decl(source: str) -> Decl:
    parsed = parse(source)
    assert parsed.diagnostics == []
    return parsed.module.decls[0]


def rhs_of(source: str) -> Exp:
    decl = first_decl(source)
    assert isinstance(decl, PatBind)
    assert isinstance(decl.rhs, UnGuardedRhs)
    return decl.rhs.expr


def op(name: str) -> QOp:
    return QOp(name)


def test_function_clause_with_patterns() -> None:
    assert first_decl("f x _ 0 = x\n") == FunBind(
        (Match("f", (PVar("x"), PWildCard(), PLit("0")), UnGuardedRhs(Var("x"))),)
    )


def test_pattern_binding_with_constructor_patterns() -> None:
    decl = first_decl("(Just a, b : rest) = pair\n")

    assert decl == PatBind(
        PTuple((PApp("Just", (PVar("a"),)), PInfixApp(PVar("b"), ":", PVar("rest")))),
        UnGuardedRhs(Var("pair")),
    )


def test_operators_resolve_by_precedence() -> None:
    assert rhs_of("x = a + b * c\n") == InfixApp(
        Var("a"), op("+"), InfixApp(Var("b"), op("*"), Var("c"))
    )
    assert rhs_of("x = a - b - c\n") == InfixApp(
        InfixApp(Var("a"), op("-"), Var("b")), op("-"), Var("c")
    )
    assert rhs_of("x = f $ g $ y\n") == InfixApp(
        Var("f"), op("$"), InfixApp(Var("g"), op("$"), Var("y"))
    )


def test_unknown_and_backticked_operators_default_to_infixl_9() -> None:
    assert rhs_of("x = a <+> b `on` c\n") == InfixApp(
        InfixApp(Var("a"), op("<+>"), Var("b")), op("on"), Var("c")
    )


def test_prefix_negation_binds_looser_than_multiplication() -> None:
    assert rhs_of("x = - a * b\n") == NegApp(InfixApp(Var("a"), op("*"), Var("b")))


def test_resolve_operators_rejects_non_associative_chains() -> None:
    with pytest.raises(FixityError):
        resolve_operators([Var("a"), op("=="), Var("b"), op("=="), Var("c")])

    with pytest.raises(FixityError):
        resolve_operators([Var("a"), op("*"), Negation(), Var("b")])


def test_application_is_left_nested() -> None:
    assert rhs_of("x = f a (g b)\n") == App(
        App(Var("f"), Var("a")), Paren(App(Var("g"), Var("b")))
    )


def test_parenthesized_forms() -> None:
    assert rhs_of("x = ()\n") == Con("()")
    assert rhs_of("x = (,)\n") == Con("(,)")
    assert rhs_of("x = (+)\n") == Var("+")
    assert rhs_of("x = (:)\n") == Con(":")
    assert rhs_of("x = (+ 1)\n") == RightSection(op("+"), Lit("1"))
    assert rhs_of("x = (1 +)\n") == LeftSection(Lit("1"), op("+"))
    assert rhs_of("x = (- 1)\n") == Paren(NegApp(Lit("1")))
    assert rhs_of("x = (a, \"s\")\n") == Tuple((Var("a"), Lit('"s"', LitKind.STRING)))
    assert rhs_of("x = (# a, b #)\n") == Tuple((Var("a"), Var("b")), Boxed.UNBOXED)


def test_bracketed_forms() -> None:
    assert rhs_of("x = [1 .. 10]\n") == EnumFromTo(Lit("1"), Lit("10"))
    assert rhs_of("x = [1, 3 ..]\n") == EnumFromThen(Lit("1"), Lit("3"))
    assert rhs_of("x = [y | y <- ys, even y]\n") == ListComp(
        Var("y"),
        (Generator(PVar("y"), Var("ys")), Qualifier(App(Var("even"), Var("y")))),
    )


def test_records() -> None:
    assert rhs_of("x = Foo {bar = 1}\n") == RecConstr("Foo", (FieldUpdate("bar", Lit("1")),))
    assert rhs_of("x = r {bar = 1, baz = y}\n") == RecUpdate(
        Var("r"), (FieldUpdate("bar", Lit("1")), FieldUpdate("baz", Var("y")))
    )


def test_lambda_let_and_if() -> None:
    assert rhs_of("x = \\a b -> a\n") == Lambda((PVar("a"), PVar("b")), Var("a"))
    assert rhs_of("x = let y = 1 in y\n") == Let(
        (PatBind(PVar("y"), UnGuardedRhs(Lit("1"))),), Var("y")
    )
    assert rhs_of("x = if c then 1 else 0\n") == If(Var("c"), Lit("1"), Lit("0"))


def test_case_alternatives_use_layout() -> None:
    src = textwrap.dedent(
        """
        x = case m of
          Just y -> y
          Nothing -> 0
        """
    ).lstrip()

    assert rhs_of(src) == Case(
        Var("m"),
        (
            Alt(PApp("Just", (PVar("y"),)), UnGuardedAlt(Var("y"))),
            Alt(PApp("Nothing"), UnGuardedAlt(Lit("0"))),
        ),
    )


def test_do_block_statements() -> None:
    src = textwrap.dedent(
        """
        main = do
          line <- getLine
          let n = 1
          print n
        """
    ).lstrip()

    assert rhs_of(src) == Do(
        (
            Generator(PVar("line"), Var("getLine")),
            LetStmt((PatBind(PVar("n"), UnGuardedRhs(Lit("1"))),)),
            Qualifier(App(Var("print"), Var("n"))),
        )
    )


def test_do_block_with_explicit_braces() -> None:
    assert rhs_of("main = do { a; b }\n") == Do((Qualifier(Var("a")), Qualifier(Var("b"))))


def test_let_in_expression_inside_do_is_a_qualifier() -> None:
    src = textwrap.dedent(
        """
        main = do
          let y = 1 in print y
        """
    ).lstrip()

    assert rhs_of(src) == Do(
        (
            Qualifier(
                Let((PatBind(PVar("y"), UnGuardedRhs(Lit("1"))),), App(Var("print"), Var("y")))
            ),
        )
    )


def test_guards_and_where_bindings() -> None:
    src = textwrap.dedent(
        """
        classify n
          | n < 0 = neg
          | otherwise = pos
          where
            neg = 0
            pos = 1
        """
    ).lstrip()

    assert first_decl(src) == FunBind(
        (
            Match(
                "classify",
                (PVar("n"),),
                GuardedRhss(
                    (
                        GuardedRhs((Qualifier(InfixApp(Var("n"), op("<"), Lit("0"))),), Var("neg")),
                        GuardedRhs((Qualifier(Var("otherwise")),), Var("pos")),
                    )
                ),
                (
                    PatBind(PVar("neg"), UnGuardedRhs(Lit("0"))),
                    PatBind(PVar("pos"), UnGuardedRhs(Lit("1"))),
                ),
            ),
        )
    )


def test_type_signatures() -> None:
    assert first_decl("f, g :: Int -> [a]\n") == TypeSig(
        ("f", "g"), TyFun(TyCon("Int"), TyList(TyVar("a")))
    )
    assert first_decl("f :: Show a => a -> String\n") == TypeSig(
        ("f",),
        TyForall(
            None,
            Context((ClassA("Show", (TyVar("a"),)),), parenthesized=False),
            TyFun(TyVar("a"), TyCon("String")),
        ),
    )
    assert first_decl("f :: forall a. Maybe a\n") == TypeSig(
        ("f",), TyForall(("a",), None, TyApp(TyCon("Maybe"), TyVar("a")))
    )


def test_function_clauses_are_merged_when_adjacent() -> None:
    module = parse("f 0 = 1\nf n = n\n\ng = 2\n").module

    assert len(module.items) == 2
    merged = module.items[0].node
    assert isinstance(merged, FunBind)
    assert [match.patterns for match in merged.matches] == [(PLit("0"),), (PVar("n"),)]
    assert module.items[1].blank_line_before is True


def test_comments_and_verbatim_declarations_are_kept_as_text() -> None:
    src = textwrap.dedent(
        """
        module Main where
        import Data.List
        -- | Docs.
        data T = A | B
        x = 1 -- trailing
        """
    ).lstrip()

    parsed = parse(src)
    nodes = [item.node for item in parsed.module.items]

    assert parsed.diagnostics == []
    assert nodes == [
        RawDecl("module Main where"),
        RawDecl("import Data.List"),
        SourceComment("-- | Docs."),
        RawDecl("data T = A | B"),
        RawDecl("x = 1 -- trailing"),
    ]


def test_multiline_export_list_stays_one_chunk() -> None:
    src = textwrap.dedent(
        """
        module Main
          ( main
          ) where
        main = pure ()
        """
    ).lstrip()

    nodes = [item.node for item in parse(src).module.items]

    assert nodes[0] == RawDecl("module Main\n  ( main\n  ) where")
    assert isinstance(nodes[1], PatBind)


def test_verbatim_declarations_can_be_reported() -> None:
    options = ParserOptions(allow_verbatim_declarations=False)

    parsed = parse("import Data.List\n", options)

    assert [d.code for d in parsed.diagnostics] == ["PARSER_UNSUPPORTED_DECLARATION"]
    assert parsed.module.items[0].node == RawDecl("import Data.List")


@pytest.mark.parametrize(("source", "code"), PARSE_ERROR_CASES)
def test_strict_parse_errors(source: str, code: str) -> None:
    parsed = parse(source)

    assert parsed.diagnostics[0].code == code
    assert parsed.diagnostics[0].severity == "error"
    assert isinstance(parsed.module.items[0].node, RawDecl)


def test_permissive_mode_downgrades_errors_and_keeps_going() -> None:
    parsed = parse("f = (\ng = 1\n", mode=ParseMode.PERMISSIVE)

    assert [d.severity for d in parsed.diagnostics] == ["warning"]
    assert parsed.module.items[0].node == RawDecl("f = (")
    assert isinstance(parsed.module.items[1].node, PatBind)


def test_parse_rejects_options_with_mode() -> None:
    with pytest.raises(ValueError, match="Pass either options or mode, not both"):
        parse("x = 1\n", ParserOptions(), mode=ParseMode.STRICT)


def test_parse_result_carries_source_and_options() -> None:
    result = parse_result("x = 1\n", mode=ParseMode.PERMISSIVE)

    assert result.source_text == "x = 1\n"
    assert result.options.mode == ParseMode.PERMISSIVE
    assert result.has_errors is False
    assert len(result.module.items) == 1


@pytest.mark.parametrize("case", FORMAT_CASES, ids=case_id)
def test_format_cases_parse_cleanly(case: HaskellCase) -> None:
    parsed = parse(case.source)

    assert parsed.diagnostics == []
    assert not any(isinstance(item.node, RawDecl) and "=" in item.node.text for item in parsed.module.items)
