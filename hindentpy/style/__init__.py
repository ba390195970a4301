"""Layout styles and their registry."""

from typing import Final

from hindentpy.style.chris_done import CHRIS_DONE, FUNDAMENTAL
from hindentpy.style.config import StyleConfig
from hindentpy.style.predicates import (
    effective_column,
    fits_on_line,
    is_flat,
    is_overflow,
    is_overflow_max,
    is_short,
    is_single_liner,
    is_small,
)
from hindentpy.style.style import Rule, Style, base_rule

DEFAULT_STYLE: Final[str] = CHRIS_DONE.name

STYLES: Final[dict[str, Style]] = {style.name: style for style in (CHRIS_DONE, FUNDAMENTAL)}


def get_style(name: str) -> Style:
    try:
        return STYLES[name]
    except KeyError:
        known = ", ".join(sorted(STYLES))
        raise ValueError(f"Unknown style {name!r} (known styles: {known})") from None


__all__ = [
    "CHRIS_DONE",
    "DEFAULT_STYLE",
    "FUNDAMENTAL",
    "STYLES",
    "Rule",
    "Style",
    "StyleConfig",
    "base_rule",
    "effective_column",
    "fits_on_line",
    "get_style",
    "is_flat",
    "is_overflow",
    "is_overflow_max",
    "is_short",
    "is_single_liner",
    "is_small",
]
