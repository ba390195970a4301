import pytest

from hindentpy.ast import App, Tuple, Var
from hindentpy.style import CHRIS_DONE, DEFAULT_STYLE, FUNDAMENTAL, STYLES, StyleConfig, base_rule, get_style
from hindentpy.style import layout


def test_registry_contains_both_styles() -> None:
    assert DEFAULT_STYLE == "chris-done"
    assert STYLES == {"chris-done": CHRIS_DONE, "fundamental": FUNDAMENTAL}
    assert get_style("fundamental") is FUNDAMENTAL


def test_unknown_style_names_the_known_ones() -> None:
    with pytest.raises(ValueError, match="chris-done, fundamental"):
        get_style("kernel")


def test_rule_lookup_falls_back_to_base_rendering() -> None:
    assert CHRIS_DONE.rule_for(Tuple(())) is layout.tuple_expression
    assert CHRIS_DONE.rule_for(App(Var("f"), Var("x"))) is layout.application
    assert CHRIS_DONE.rule_for(Var("x")) is base_rule
    assert FUNDAMENTAL.rule_for(Tuple(())) is base_rule


def test_chris_done_defaults() -> None:
    config = CHRIS_DONE.default_config

    assert (config.max_columns, config.indent_spaces) == (80, 2)
    assert (config.short_name, config.small_column_limit, config.overflow_margin) == (10, 50, 20)


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_columns": 0},
        {"indent_spaces": -1},
        {"short_name": 0},
        {"small_column_limit": 0},
        {"overflow_margin": -1},
    ],
)
def test_style_config_rejects_invalid_values(overrides: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        StyleConfig(**overrides)


def test_with_overrides_replaces_only_given_limits() -> None:
    base = StyleConfig(short_name=12)

    assert base.with_overrides() == base
    assert base.with_overrides(max_columns=100) == StyleConfig(max_columns=100, short_name=12)
    assert base.with_overrides(indent_spaces=4).indent_spaces == 4

    with pytest.raises(ValueError):
        base.with_overrides(max_columns=0)
