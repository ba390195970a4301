import pytest

from hindentpy.format import FormatOptions, format_module, strip_trailing_whitespace
from hindentpy.parser import ParseMode, parse, parse_result
from hindentpy.pipeline import run_check, run_format
from hindentpy.style import StyleConfig
from tests._shared_cases import FORMAT_CASES, HaskellCase, case_id


@pytest.mark.parametrize("case", FORMAT_CASES, ids=case_id)
def test_format_cases(case: HaskellCase) -> None:
    result = run_format(case.source)

    assert result.diagnostics == []
    assert result.formatted_text == case.formatted
    assert result.changed is (case.expected is not None)


@pytest.mark.parametrize("case", FORMAT_CASES, ids=case_id)
def test_formatting_is_idempotent(case: HaskellCase) -> None:
    result = run_format(case.formatted)

    assert result.formatted_text == case.formatted
    assert result.changed is False


def test_run_format_reuses_provided_parse_result() -> None:
    source = "x  =  1\n"
    parsed = parse_result(source)

    result = run_format("ignored", parse=parsed)

    assert result.parse is parsed
    assert result.formatted_text == "x = 1\n"


def test_run_format_rejects_parse_with_mode_or_options() -> None:
    parsed = parse_result("x = 1\n")

    try:
        run_format("x = 1\n", parse=parsed, mode=ParseMode.PERMISSIVE)
    except ValueError as exc:
        assert "Pass either parse or options/mode, not both" in str(exc)
    else:
        raise AssertionError("Expected ValueError when passing parse and mode together")


def test_strict_mode_leaves_sources_with_errors_untouched() -> None:
    source = "f = (\ng  =  1\n"

    result = run_format(source)

    assert result.parse.has_errors is True
    assert result.formatted_text == source
    assert result.changed is False
    assert [d.code for d in result.diagnostics] == ["PARSER_EXPECTED_EXPRESSION"]


def test_permissive_mode_formats_around_unparseable_declarations() -> None:
    source = "f = (\ng  =  1\n"

    result = run_format(source, mode=ParseMode.PERMISSIVE)

    assert result.parse.has_errors is False
    assert result.formatted_text == "f = (\ng = 1\n"
    assert result.changed is True
    assert [d.severity for d in result.diagnostics] == ["warning"]


def test_empty_module_formats_to_empty_text() -> None:
    result = run_format("\n\n")

    assert result.formatted_text == ""
    assert result.parse.module.items == ()


def test_format_options_override_style_config() -> None:
    source = "t = (alpha, beta, gamma)\n"
    options = FormatOptions(config=StyleConfig(max_columns=12))

    result = run_format(source, format_options=options)

    assert result.formatted_text == "t =\n  (alpha\n  ,beta\n  ,gamma)\n"


def test_fundamental_style_uses_base_layout() -> None:
    source = "f x = if x then 1 else 0\n"

    result = run_format(source, format_options=FormatOptions(style="fundamental"))

    assert result.formatted_text == "f x = if x\n         then 1\n         else 0\n"


def test_format_module_and_trailing_whitespace() -> None:
    module = parse("x = 1\n").module

    assert format_module(module) == "x = 1\n"
    assert strip_trailing_whitespace("a  \nb \n") == "a\nb\n"


def test_run_check_reports_unformatted_text() -> None:
    result = run_check("x  =  1\n")

    assert result.has_errors is False
    assert result.formatted is False
    assert result.diagnostics == []


def test_run_check_reports_parse_errors() -> None:
    source = "f = (\n"

    result = run_check(source)

    assert result.parse.source_text == source
    assert result.has_errors is True
    assert result.formatted is False
    assert len(result.diagnostics) == 1
    assert result.diagnostics[0].code == "PARSER_EXPECTED_EXPRESSION"


def test_run_check_reuses_provided_parse_result() -> None:
    parsed = parse_result("x = 1\n")

    result = run_check("ignored", parse=parsed)

    assert result.parse is parsed
    assert result.formatted is True
