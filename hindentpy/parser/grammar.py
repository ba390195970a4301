"""Haskell grammar routines producing AST nodes directly."""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

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
    Lambda,
    LeftSection,
    Let,
    LetStmt,
    List,
    ListComp,
    Lit,
    LitKind,
    Match,
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
    Pat,
    QOp,
    Qualifier,
    RecConstr,
    RecUpdate,
    Rhs,
    RightSection,
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
    Type,
    TypeSig,
    TypQuote,
    UnGuardedAlt,
    UnGuardedRhs,
    Var,
    VarQuote,
)
from hindentpy.diagnostics.codes import (
    PARSER_EXPECTED_EXPRESSION,
    PARSER_EXPECTED_PATTERN,
    PARSER_EXPECTED_TYPE,
    PARSER_FIXITY_CONFLICT,
    PARSER_INVALID_CONTEXT,
    PARSER_UNEXPECTED_TOKEN,
)
from hindentpy.lexer import TokenKind, token_text
from hindentpy.parser.fixity import FixityError, Negation, SequenceItem, resolve_operators
from hindentpy.parser.parser import EXPLICIT_LAYOUT, ParseAbort, Parser

LITERAL_KINDS: Final[dict[TokenKind, LitKind]] = {
    TokenKind.INT: LitKind.INT,
    TokenKind.FLOAT: LitKind.FRAC,
    TokenKind.CHAR: LitKind.CHAR,
    TokenKind.STRING: LitKind.STRING,
}

OPERATOR_TOKENS: Final[frozenset[TokenKind]] = frozenset({TokenKind.VARSYM, TokenKind.CONSYM})

APAT_START: Final[frozenset[TokenKind]] = frozenset(
    {
        TokenKind.VARID,
        TokenKind.CONID,
        TokenKind.UNDERSCORE,
        TokenKind.TILDE,
        TokenKind.LPAREN,
        TokenKind.LPAREN_HASH,
        TokenKind.LBRACKET,
        *LITERAL_KINDS,
    }
)

AEXP_START: Final[frozenset[TokenKind]] = frozenset(
    {
        TokenKind.VARID,
        TokenKind.CONID,
        TokenKind.UNDERSCORE,
        TokenKind.LPAREN,
        TokenKind.LPAREN_HASH,
        TokenKind.LBRACKET,
        TokenKind.VARQUOTE,
        TokenKind.TYPQUOTE,
        *LITERAL_KINDS,
    }
)

ATYPE_START: Final[frozenset[TokenKind]] = frozenset(
    {
        TokenKind.VARID,
        TokenKind.CONID,
        TokenKind.LPAREN,
        TokenKind.LPAREN_HASH,
        TokenKind.LBRACKET,
    }
)

# Tokens after which `;` in a block does not start another item.
BLOCK_CLOSERS: Final[frozenset[TokenKind]] = frozenset(
    {
        TokenKind.EOF,
        TokenKind.LAYOUT_END,
        TokenKind.RPAREN,
        TokenKind.RBRACKET,
        TokenKind.RBRACE,
        TokenKind.COMMA,
        TokenKind.IN,
        TokenKind.THEN,
        TokenKind.ELSE,
        TokenKind.OF,
    }
)


def parse_declaration(parser: Parser) -> Decl:
    if _at_type_signature(parser):
        names = [_parse_binder_name(parser)]
        while parser.eat(TokenKind.COMMA):
            names.append(_parse_binder_name(parser))
        parser.expect(TokenKind.DOUBLE_COLON, "`::`")
        return TypeSig(tuple(names), parse_sig_type(parser))

    if _at_function_clause(parser):
        name = _parse_binder_name(parser)
        patterns: list[Pat] = []
        while _at_apattern(parser):
            patterns.append(parse_apattern(parser))
        rhs = parse_rhs(parser)
        return FunBind((Match(name, tuple(patterns), rhs, _parse_where(parser)),))

    pattern = parse_pattern(parser)
    rhs = parse_rhs(parser)
    return PatBind(pattern, rhs, _parse_where(parser))


def parse_rhs(parser: Parser) -> Rhs:
    if parser.at(TokenKind.PIPE):
        return GuardedRhss(
            tuple(GuardedRhs(guards, expr) for guards, expr in _parse_guarded(parser, TokenKind.EQUAL))
        )
    parser.expect(TokenKind.EQUAL, "`=` or `|`")
    return UnGuardedRhs(parse_expression(parser))


def parse_declaration_block(parser: Parser) -> tuple[Decl, ...]:
    return group_function_clauses(parse_block(parser, parse_declaration))


def group_function_clauses(decls: list[Decl] | tuple[Decl, ...]) -> tuple[Decl, ...]:
    """Merge adjacent clauses of the same function into one `FunBind`."""
    grouped: list[Decl] = []
    for decl in decls:
        previous = grouped[-1] if grouped else None
        if isinstance(decl, FunBind) and isinstance(previous, FunBind) and previous.name == decl.name:
            grouped[-1] = FunBind(previous.matches + decl.matches)
            continue
        grouped.append(decl)
    return tuple(grouped)


def _parse_where(parser: Parser) -> tuple[Decl, ...] | None:
    if not parser.eat(TokenKind.WHERE):
        return None
    return parse_declaration_block(parser)


def _parse_binder_name(parser: Parser) -> str:
    if parser.at(TokenKind.LPAREN) and parser.nth(1) in OPERATOR_TOKENS and parser.nth(2) == TokenKind.RPAREN:
        parser.bump()
        name = parser.text()
        parser.bump()
        parser.bump()
        return name
    return token_text(parser.source, parser.expect(TokenKind.VARID, "a name"))


def _binder_width(parser: Parser, offset: int) -> int:
    """Token count of a binder name at `offset`, or 0 if there is none."""
    if parser.nth(offset) == TokenKind.VARID:
        return 1
    if (
        parser.nth(offset) == TokenKind.LPAREN
        and parser.nth(offset + 1) in OPERATOR_TOKENS
        and parser.nth(offset + 2) == TokenKind.RPAREN
    ):
        return 3
    return 0


def _at_type_signature(parser: Parser) -> bool:
    offset = 0
    while True:
        width = _binder_width(parser, offset)
        if width == 0:
            return False
        offset += width
        if parser.nth(offset) == TokenKind.COMMA:
            offset += 1
            continue
        return parser.nth(offset) == TokenKind.DOUBLE_COLON


def _at_function_clause(parser: Parser) -> bool:
    width = _binder_width(parser, 0)
    if width == 0:
        return False
    following = parser.nth(width)
    if following in APAT_START:
        return True
    return following == TokenKind.VARSYM and parser.nth_text(width) == "!"


def parse_block[T](parser: Parser, parse_item: Callable[[Parser], T]) -> list[T]:
    """Parse `{ item; ... }` or an implicit layout block of items."""
    items: list[T] = []

    if parser.at(TokenKind.LBRACE):
        parser.bump()
        with parser.layout_block(EXPLICIT_LAYOUT):
            while not parser.at(TokenKind.RBRACE):
                if parser.eat(TokenKind.SEMICOLON):
                    continue
                parser.start_item()
                items.append(parse_item(parser))
                if not parser.at(TokenKind.RBRACE):
                    parser.expect(TokenKind.SEMICOLON, "`;` or `}`")
        parser.expect(TokenKind.RBRACE, "`}`")
        return items

    if parser.at_set(BLOCK_CLOSERS) or parser.at(TokenKind.WHERE):
        return items

    column = parser.token.column
    if column <= parser.layout_column:
        return items

    with parser.layout_block(column):
        parser.start_item()
        items.append(parse_item(parser))
        while True:
            if parser.eat(TokenKind.SEMICOLON) and not parser.at_set(BLOCK_CLOSERS):
                parser.start_item()
                items.append(parse_item(parser))
                continue
            token = parser.token
            if (
                token.kind not in BLOCK_CLOSERS
                and token.kind != TokenKind.WHERE
                and token.has_preceding_line_break()
                and token.column == column
            ):
                parser.start_item()
                items.append(parse_item(parser))
                continue
            break
    return items


def _parse_guarded(parser: Parser, separator: TokenKind) -> list[tuple[tuple[Stmt, ...], Exp]]:
    branches: list[tuple[tuple[Stmt, ...], Exp]] = []
    while parser.eat(TokenKind.PIPE):
        guards = [parse_statement(parser)]
        while parser.eat(TokenKind.COMMA):
            guards.append(parse_statement(parser))
        parser.expect(separator, "`=`" if separator == TokenKind.EQUAL else "`->`")
        branches.append((tuple(guards), parse_expression(parser)))
    return branches


def parse_statement(parser: Parser) -> Stmt:
    checkpoint = parser.checkpoint()

    if parser.at(TokenKind.LET):
        parser.bump()
        binds = parse_declaration_block(parser)
        if not parser.at(TokenKind.IN):
            return LetStmt(binds)
        parser.rewind(checkpoint)
        return Qualifier(parse_expression(parser))

    with parser.speculative_parsing():
        try:
            pattern = parse_pattern(parser)
            is_generator = parser.eat(TokenKind.LEFT_ARROW)
        except ParseAbort:
            is_generator = False
    if is_generator:
        return Generator(pattern, parse_expression(parser))
    parser.rewind(checkpoint)
    return Qualifier(parse_expression(parser))


def _parse_alternative(parser: Parser) -> Alt:
    pattern = parse_pattern(parser)
    if parser.at(TokenKind.PIPE):
        alts: UnGuardedAlt | GuardedAlts = GuardedAlts(
            tuple(GuardedAlt(guards, expr) for guards, expr in _parse_guarded(parser, TokenKind.RIGHT_ARROW))
        )
    else:
        parser.expect(TokenKind.RIGHT_ARROW, "`->` or `|`")
        alts = UnGuardedAlt(parse_expression(parser))
    return Alt(pattern, alts, _parse_where(parser))


def parse_expression(parser: Parser) -> Exp:
    expr, _ = _parse_operator_sequence(parser, allow_left_section=False)
    if parser.eat(TokenKind.DOUBLE_COLON):
        return ExpTypeSig(expr, parse_sig_type(parser))
    return expr


def _parse_operator_sequence(parser: Parser, *, allow_left_section: bool) -> tuple[Exp, QOp | None]:
    """Parse `e1 op e2 op ...`; a trailing `op )` is returned for left sections."""
    items: list[SequenceItem] = []
    start = parser.current_range
    trailing: QOp | None = None

    while True:
        if parser.at_symbol("-"):
            parser.bump()
            items.append(Negation())
        items.append(_parse_operand(parser))
        if not _at_operator(parser):
            break
        op = _parse_operator(parser)
        if allow_left_section and parser.at(TokenKind.RPAREN):
            trailing = op
            break
        items.append(op)

    try:
        return resolve_operators(items), trailing
    except FixityError as exc:
        parser.error(PARSER_FIXITY_CONFLICT.at(start.cover(parser.current_range), message=str(exc)))
        raise ParseAbort(str(exc)) from exc


def _at_operator(parser: Parser) -> bool:
    if parser.at_set(OPERATOR_TOKENS):
        return True
    return parser.at(TokenKind.BACKTICK)


def _parse_operator(parser: Parser) -> QOp:
    if parser.eat(TokenKind.BACKTICK):
        if not parser.at_set(frozenset({TokenKind.VARID, TokenKind.CONID})):
            parser.fail(PARSER_UNEXPECTED_TOKEN, message="Expected an identifier inside backticks")
        name = parser.text()
        parser.bump()
        parser.expect(TokenKind.BACKTICK, "closing backtick")
        return QOp(name)
    name = parser.text()
    parser.bump()
    return QOp(name)


def _parse_operand(parser: Parser) -> Exp:
    match parser.current:
        case TokenKind.BACKSLASH:
            parser.bump()
            patterns = [parse_apattern(parser)]
            while not parser.at(TokenKind.RIGHT_ARROW):
                patterns.append(parse_apattern(parser))
            parser.bump()
            return Lambda(tuple(patterns), parse_expression(parser))
        case TokenKind.LET:
            parser.bump()
            binds = parse_declaration_block(parser)
            parser.expect(TokenKind.IN, "`in`")
            return Let(binds, parse_expression(parser))
        case TokenKind.IF:
            parser.bump()
            cond = parse_expression(parser)
            parser.eat(TokenKind.SEMICOLON)
            parser.expect(TokenKind.THEN, "`then`")
            then_branch = parse_expression(parser)
            parser.eat(TokenKind.SEMICOLON)
            parser.expect(TokenKind.ELSE, "`else`")
            return If(cond, then_branch, parse_expression(parser))
        case TokenKind.CASE:
            parser.bump()
            scrutinee = parse_expression(parser)
            parser.expect(TokenKind.OF, "`of`")
            return Case(scrutinee, tuple(parse_block(parser, _parse_alternative)))
        case TokenKind.DO:
            parser.bump()
            stmts = parse_block(parser, parse_statement)
            if not stmts:
                parser.fail(PARSER_EXPECTED_EXPRESSION, message="Empty `do` block")
            return Do(tuple(stmts))

    if not parser.at_set(AEXP_START):
        parser.fail(PARSER_EXPECTED_EXPRESSION, message=f"Expected an expression, found {_describe(parser)}")
    expr = parse_aexp(parser)
    while parser.at_set(AEXP_START):
        expr = App(expr, parse_aexp(parser))
    return expr


def parse_aexp(parser: Parser) -> Exp:
    expr = _parse_aexp_base(parser)
    while parser.at(TokenKind.LBRACE):
        expr = RecUpdate(expr, _parse_field_updates(parser))
    return expr


def _parse_aexp_base(parser: Parser) -> Exp:
    kind = parser.current
    text = parser.text()

    if kind in (TokenKind.VARID, TokenKind.UNDERSCORE):
        parser.bump()
        return Var(text)
    if kind == TokenKind.CONID:
        parser.bump()
        if parser.at(TokenKind.LBRACE):
            return RecConstr(text, _parse_field_updates(parser))
        return Con(text)
    if kind in LITERAL_KINDS:
        parser.bump()
        return Lit(text, LITERAL_KINDS[kind])
    if kind == TokenKind.VARQUOTE:
        parser.bump()
        return VarQuote(text[1:])
    if kind == TokenKind.TYPQUOTE:
        parser.bump()
        return TypQuote(text[2:])
    if kind == TokenKind.LPAREN:
        return _parse_paren_expression(parser)
    if kind == TokenKind.LPAREN_HASH:
        parser.bump()
        elements = _parse_comma_separated(parser, parse_expression, TokenKind.HASH_RPAREN)
        return Tuple(tuple(elements), Boxed.UNBOXED)
    if kind == TokenKind.LBRACKET:
        return _parse_bracket_expression(parser)
    parser.fail(PARSER_EXPECTED_EXPRESSION, message=f"Expected an expression, found {_describe(parser)}")


def _parse_paren_expression(parser: Parser) -> Exp:
    parser.expect(TokenKind.LPAREN)

    if parser.eat(TokenKind.RPAREN):
        return Con("()")

    if parser.at(TokenKind.COMMA):
        arity = 1
        while parser.eat(TokenKind.COMMA):
            arity += 1
        parser.expect(TokenKind.RPAREN, "`)`")
        return Con("(" + "," * (arity - 1) + ")")

    if parser.at_set(OPERATOR_TOKENS) and parser.nth(1) == TokenKind.RPAREN:
        name = parser.text()
        parser.bump()
        parser.bump()
        return Con(name) if name.startswith(":") else Var(name)

    if _at_operator(parser) and not parser.at_symbol("-"):
        op = _parse_operator(parser)
        expr = parse_expression(parser)
        parser.expect(TokenKind.RPAREN, "`)`")
        return RightSection(op, expr)

    first, trailing = _parse_operator_sequence(parser, allow_left_section=True)
    if trailing is not None:
        parser.expect(TokenKind.RPAREN, "`)`")
        return LeftSection(first, trailing)
    if parser.eat(TokenKind.DOUBLE_COLON):
        first = ExpTypeSig(first, parse_sig_type(parser))

    if parser.eat(TokenKind.RPAREN):
        return Paren(first)

    parser.expect(TokenKind.COMMA, "`,` or `)`")
    elements = [first, *_parse_comma_separated(parser, parse_expression, TokenKind.RPAREN)]
    return Tuple(tuple(elements))


def _parse_bracket_expression(parser: Parser) -> Exp:
    parser.expect(TokenKind.LBRACKET)

    if parser.eat(TokenKind.RBRACKET):
        return List(())

    first = parse_expression(parser)

    if parser.eat(TokenKind.DOTDOT):
        if parser.eat(TokenKind.RBRACKET):
            return EnumFrom(first)
        end = parse_expression(parser)
        parser.expect(TokenKind.RBRACKET, "`]`")
        return EnumFromTo(first, end)

    if parser.eat(TokenKind.PIPE):
        qualifiers = _parse_comma_separated(parser, parse_statement, TokenKind.RBRACKET)
        return ListComp(first, tuple(qualifiers))

    if parser.eat(TokenKind.RBRACKET):
        return List((first,))

    parser.expect(TokenKind.COMMA, "`,` or `]`")
    second = parse_expression(parser)
    if parser.eat(TokenKind.DOTDOT):
        if parser.eat(TokenKind.RBRACKET):
            return EnumFromThen(first, second)
        end = parse_expression(parser)
        parser.expect(TokenKind.RBRACKET, "`]`")
        return EnumFromThenTo(first, second, end)

    elements = [first, second]
    if parser.eat(TokenKind.COMMA):
        elements.extend(_parse_comma_separated(parser, parse_expression, TokenKind.RBRACKET))
    else:
        parser.expect(TokenKind.RBRACKET, "`,` or `]`")
    return List(tuple(elements))


def _parse_field_updates(parser: Parser) -> tuple[FieldUpdate, ...]:
    parser.expect(TokenKind.LBRACE)
    with parser.layout_block(EXPLICIT_LAYOUT):
        if parser.eat(TokenKind.RBRACE):
            return ()

        def parse_field(current: Parser) -> FieldUpdate:
            name = token_text(current.source, current.expect(TokenKind.VARID, "a field name"))
            current.expect(TokenKind.EQUAL, "`=`")
            return FieldUpdate(name, parse_expression(current))

        return tuple(_parse_comma_separated(parser, parse_field, TokenKind.RBRACE))


def _parse_comma_separated[T](parser: Parser, parse_item: Callable[[Parser], T], closer: TokenKind) -> list[T]:
    """Parse `item, item, ... closer`, consuming the closer."""
    items = [parse_item(parser)]
    while parser.eat(TokenKind.COMMA):
        items.append(parse_item(parser))
    parser.expect(closer, f"`,` or {closer.name}")
    return items


def parse_pattern(parser: Parser) -> Pat:
    left = _parse_lpattern(parser)
    if parser.at(TokenKind.CONSYM):
        op = parser.text()
        parser.bump()
        return PInfixApp(left, op, parse_pattern(parser))
    if parser.at(TokenKind.BACKTICK) and parser.nth(1) == TokenKind.CONID and parser.nth(2) == TokenKind.BACKTICK:
        parser.bump()
        op = parser.text()
        parser.bump()
        parser.bump()
        return PInfixApp(left, op, parse_pattern(parser))
    return left


def _parse_lpattern(parser: Parser) -> Pat:
    if parser.at_symbol("-") and parser.nth(1) in (TokenKind.INT, TokenKind.FLOAT):
        parser.bump()
        text = parser.text()
        parser.bump()
        return PLit(text, negated=True)
    if parser.at(TokenKind.CONID):
        con = parser.text()
        parser.bump()
        args: list[Pat] = []
        while _at_apattern(parser):
            args.append(parse_apattern(parser))
        return PApp(con, tuple(args))
    return parse_apattern(parser)


def _at_apattern(parser: Parser) -> bool:
    if parser.at_set(APAT_START):
        return True
    return parser.at_symbol("!")


def parse_apattern(parser: Parser) -> Pat:
    kind = parser.current
    text = parser.text()

    if kind == TokenKind.VARID:
        parser.bump()
        if parser.eat(TokenKind.AT):
            return PAsPat(text, parse_apattern(parser))
        return PVar(text)
    if kind == TokenKind.CONID:
        parser.bump()
        return PApp(text)
    if kind == TokenKind.UNDERSCORE:
        parser.bump()
        return PWildCard()
    if kind in LITERAL_KINDS:
        parser.bump()
        return PLit(text)
    if kind == TokenKind.TILDE:
        parser.bump()
        return PIrrPat(parse_apattern(parser))
    if parser.at_symbol("!"):
        parser.bump()
        return PBangPat(parse_apattern(parser))
    if kind == TokenKind.LPAREN:
        parser.bump()
        if parser.eat(TokenKind.RPAREN):
            return PApp("()")
        first = parse_pattern(parser)
        if parser.eat(TokenKind.RPAREN):
            return PParen(first)
        parser.expect(TokenKind.COMMA, "`,` or `)`")
        rest = _parse_comma_separated(parser, parse_pattern, TokenKind.RPAREN)
        return PTuple((first, *rest))
    if kind == TokenKind.LPAREN_HASH:
        parser.bump()
        elements = _parse_comma_separated(parser, parse_pattern, TokenKind.HASH_RPAREN)
        return PTuple(tuple(elements), Boxed.UNBOXED)
    if kind == TokenKind.LBRACKET:
        parser.bump()
        if parser.eat(TokenKind.RBRACKET):
            return PList(())
        return PList(tuple(_parse_comma_separated(parser, parse_pattern, TokenKind.RBRACKET)))
    parser.fail(PARSER_EXPECTED_PATTERN, message=f"Expected a pattern, found {_describe(parser)}")


def parse_sig_type(parser: Parser) -> Type:
    """Type with optional `forall vs.` quantifier and `ctx =>` context."""
    binders: tuple[str, ...] | None = None
    if parser.at(TokenKind.VARID) and parser.text() == "forall":
        parser.bump()
        names: list[str] = []
        while parser.at(TokenKind.VARID):
            names.append(parser.text())
            parser.bump()
        if not parser.at_symbol("."):
            parser.fail(PARSER_UNEXPECTED_TOKEN, message="Expected `.` after forall binders")
        parser.bump()
        binders = tuple(names)

    ty = parse_type(parser)
    if parser.at(TokenKind.DOUBLE_ARROW):
        context = _to_context(parser, ty)
        parser.bump()
        return TyForall(binders, context, parse_type(parser))
    if binders is not None:
        return TyForall(binders, None, ty)
    return ty


def parse_type(parser: Parser) -> Type:
    arg = _parse_btype(parser)
    if parser.eat(TokenKind.RIGHT_ARROW):
        return TyFun(arg, parse_type(parser))
    return arg


def _parse_btype(parser: Parser) -> Type:
    if not parser.at_set(ATYPE_START):
        parser.fail(PARSER_EXPECTED_TYPE, message=f"Expected a type, found {_describe(parser)}")
    ty = _parse_atype(parser)
    while parser.at_set(ATYPE_START):
        ty = TyApp(ty, _parse_atype(parser))
    return ty


def _parse_atype(parser: Parser) -> Type:
    kind = parser.current
    text = parser.text()

    if kind == TokenKind.VARID:
        parser.bump()
        return TyVar(text)
    if kind == TokenKind.CONID:
        parser.bump()
        return TyCon(text)
    if kind == TokenKind.LBRACKET:
        parser.bump()
        if parser.eat(TokenKind.RBRACKET):
            return TyCon("[]")
        element = parse_sig_type(parser)
        parser.expect(TokenKind.RBRACKET, "`]`")
        return TyList(element)
    if kind == TokenKind.LPAREN_HASH:
        parser.bump()
        elements = _parse_comma_separated(parser, parse_sig_type, TokenKind.HASH_RPAREN)
        return TyTuple(tuple(elements), Boxed.UNBOXED)

    parser.expect(TokenKind.LPAREN)
    if parser.eat(TokenKind.RPAREN):
        return TyCon("()")
    if parser.at(TokenKind.RIGHT_ARROW) and parser.nth(1) == TokenKind.RPAREN:
        parser.bump()
        parser.bump()
        return TyCon("(->)")
    if parser.at(TokenKind.COMMA):
        arity = 1
        while parser.eat(TokenKind.COMMA):
            arity += 1
        parser.expect(TokenKind.RPAREN, "`)`")
        return TyCon("(" + "," * (arity - 1) + ")")
    first = parse_sig_type(parser)
    if parser.eat(TokenKind.RPAREN):
        return TyParen(first)
    parser.expect(TokenKind.COMMA, "`,` or `)`")
    rest = _parse_comma_separated(parser, parse_sig_type, TokenKind.RPAREN)
    return TyTuple((first, *rest))


def _to_context(parser: Parser, ty: Type) -> Context:
    match ty:
        case TyTuple(elements=elements, boxed=Boxed.BOXED):
            return Context(tuple(_to_assertion(parser, element) for element in elements))
        case TyParen(type=inner):
            return Context((_to_assertion(parser, inner),))
        case TyCon(name="()"):
            return Context(())
    return Context((_to_assertion(parser, ty),), parenthesized=False)


def _to_assertion(parser: Parser, ty: Type) -> ClassA:
    args: list[Type] = []
    while isinstance(ty, TyApp):
        args.insert(0, ty.arg)
        ty = ty.fun
    if not isinstance(ty, TyCon):
        parser.fail(PARSER_INVALID_CONTEXT)
    return ClassA(ty.name, tuple(args))


def _describe(parser: Parser) -> str:
    if parser.at_set(frozenset({TokenKind.EOF, TokenKind.LAYOUT_END})):
        return "end of block"
    return f"`{parser.text()}`"
