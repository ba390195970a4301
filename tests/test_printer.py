from collections.abc import Callable
import random

import pytest

from hindentpy.ast import Lit, Module, ModuleItem, RawDecl, SourceComment, Var
from hindentpy.printer import PrintState, Printer, Procedure
from hindentpy.style import FUNDAMENTAL, Style, StyleConfig


def new_printer(**config: int) -> Printer:
    return Printer(FUNDAMENTAL, StyleConfig(**config) if config else None)


def writer(printer: Printer, text: str) -> Procedure:
    return lambda: printer.write(text)


def test_initial_state() -> None:
    printer = new_printer()

    assert printer.state == PrintState(indent_level=0, column=0, line=1, newline_pending=False, output=None)
    assert printer.output() == ""
    assert printer.column_limit == 80
    assert printer.indent_spaces == 2


def test_write_tracks_column_and_line() -> None:
    printer = new_printer()

    printer.write("abc")
    assert (printer.state.line, printer.state.column) == (1, 3)

    printer.write("de\nfgh")
    assert (printer.state.line, printer.state.column) == (2, 3)
    assert printer.output() == "abcde\nfgh"


def test_newline_defers_indentation_to_next_write() -> None:
    printer = new_printer()

    def body() -> None:
        printer.write("x")
        printer.newline()
        assert printer.state.newline_pending
        printer.write("y")

    printer.column(4, body)

    assert printer.output() == "x\n    y"
    assert printer.state.indent_level == 0
    assert printer.state.newline_pending is False


def test_consecutive_newlines_do_not_emit_indentation() -> None:
    printer = new_printer()

    printer.column(4, lambda: (printer.newline(), printer.newline(), printer.write("z")))

    assert printer.output() == "\n\n    z"


def test_negative_indentation_is_clamped() -> None:
    printer = new_printer()

    printer.column(-3, lambda: (printer.newline(), printer.write("z")))

    assert printer.output() == "\nz"


def test_depend_aligns_dependent_after_maker() -> None:
    printer = new_printer()

    printer.depend(
        writer(printer, "let "),
        lambda: printer.lined([writer(printer, "a = 1"), writer(printer, "b = 2")]),
    )

    assert printer.output() == "let a = 1\n    b = 2"


def test_depend_keeps_indentation_when_maker_writes_nothing() -> None:
    printer = new_printer()

    printer.column(
        2,
        lambda: printer.depend(
            writer(printer, ""),
            lambda: printer.lined([writer(printer, "a"), writer(printer, "b")]),
        ),
    )

    assert printer.output() == "a\n  b"


def test_depend_bind_passes_maker_result() -> None:
    printer = new_printer()

    def maker() -> int:
        printer.write("f ")
        return 7

    seen: list[int] = []
    printer.depend_bind(maker, lambda value: (seen.append(value), printer.write("x")))

    assert seen == [7]
    assert printer.output() == "f x"


def test_inter_aligns_each_item_after_the_previous_one() -> None:
    printer = new_printer()

    def multi_line() -> None:
        printer.write("b1")
        printer.newline()
        printer.write("b2")

    printer.spaced([writer(printer, "a"), multi_line, writer(printer, "c")])

    assert printer.output() == "a b1\n  b2 c"
    assert printer.state.indent_level == 0


def test_commas_and_lined() -> None:
    printer = new_printer()

    printer.commas([writer(printer, "a"), writer(printer, "b"), writer(printer, "c")])
    printer.newline()
    printer.lined([writer(printer, "d"), writer(printer, "e")])

    assert printer.output() == "a, b, c\nd\ne"


def test_prefixed_lined_hangs_prefix_left_of_items() -> None:
    printer = new_printer()

    printer.depend(
        writer(printer, "["),
        lambda: printer.prefixed_lined(",", [writer(printer, "1"), writer(printer, "2"), writer(printer, "3")]),
    )

    assert printer.output() == "[1\n,2\n,3"


def test_prefixed_lined_with_no_items_writes_nothing() -> None:
    printer = new_printer()

    printer.prefixed_lined(", ", [])

    assert printer.output() == ""


def test_wrap_helpers() -> None:
    printer = new_printer()

    printer.parens(writer(printer, "a"))
    printer.brackets(writer(printer, "b"))
    printer.braces(writer(printer, "c"))
    printer.wrap("<", ">", writer(printer, "d"))

    assert printer.output() == "(a)[b]{c}<d>"


def test_sandbox_restores_state_and_returns_trial() -> None:
    printer = new_printer()
    printer.write("keep")
    before = printer.state

    result, trial = printer.sandbox(lambda: (printer.write(" more"), 42)[1])

    assert result == 42
    assert printer.state is before
    assert trial.text() == "keep more"
    assert trial.column == 9

    printer.commit(trial)
    assert printer.output() == "keep more"


def test_sandbox_restores_state_when_procedure_raises() -> None:
    printer = new_printer()
    before = printer.state

    def failing() -> None:
        printer.write("partial")
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        printer.sandbox(failing)

    assert printer.state is before


type Program = Callable[[Printer], None]


def _random_program(rng: random.Random, depth: int = 0) -> Program:
    choice = rng.randrange(7 if depth < 3 else 3)
    match choice:
        case 0:
            text = rng.choice(["a", "bb", "ccc", "", " "])
            return lambda printer: printer.write(text)
        case 1:
            return lambda printer: printer.newline()
        case 2:
            return lambda printer: printer.space()
        case 3:
            delta = rng.randrange(-2, 5)
            inner = _random_program(rng, depth + 1)
            return lambda printer: printer.indented(delta, lambda: inner(printer))
        case 4:
            maker = _random_program(rng, depth + 1)
            dependent = _random_program(rng, depth + 1)
            return lambda printer: printer.depend(lambda: maker(printer), lambda: dependent(printer))
        case 5:
            items = [_random_program(rng, depth + 1) for _ in range(rng.randrange(1, 4))]
            return lambda printer: printer.lined([lambda item=item: item(printer) for item in items])
        case _:
            items = [_random_program(rng, depth + 1) for _ in range(rng.randrange(1, 4))]
            return lambda printer: printer.spaced([lambda item=item: item(printer) for item in items])


def test_sandbox_isolation_over_random_programs() -> None:
    rng = random.Random(1729)

    for _ in range(200):
        printer = new_printer()
        for _ in range(rng.randrange(0, 4)):
            _random_program(rng)(printer)
        before = printer.state

        program = _random_program(rng)
        _, trial = printer.sandbox(lambda: program(printer))

        assert printer.state is before

        # Running the program for real from the same state reaches the trial state.
        replay = Printer(FUNDAMENTAL, state=before)
        program(replay)
        assert replay.state == trial

        printer.commit(trial)
        assert printer.state == trial


def test_module_items_are_separated_by_newlines() -> None:
    module = Module(
        (
            ModuleItem(RawDecl("import A")),
            ModuleItem(SourceComment("-- c"), blank_line_before=True),
            ModuleItem(RawDecl("x = 1")),
        )
    )
    printer = new_printer()

    printer.pretty(module)

    assert printer.output() == "import A\n\n-- c\nx = 1"


def test_pretty_dispatches_through_style_rules() -> None:
    calls: list[object] = []
    style = Style(
        name="recording",
        author="tests",
        description="records Var rendering",
        rules={Var: lambda printer, node: (calls.append(node), printer.write("<var>"))},
    )
    printer = Printer(style)

    printer.pretty(Var("x"))
    printer.pretty(Lit("1"))
    printer.pretty_no_ext(Var("y"))

    assert calls == [Var("x")]
    assert printer.output() == "<var>1y"


def test_renderers_bind_each_node() -> None:
    printer = new_printer()

    printer.spaced(printer.renderers([Var("a"), Var("+"), Lit("2")]))

    assert printer.output() == "a (+) 2"


def test_unknown_node_raises_type_error() -> None:
    printer = new_printer()

    with pytest.raises(TypeError, match="Cannot render"):
        printer.pretty(object())  # type: ignore[arg-type]
