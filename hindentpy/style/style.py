"""Style records: a name, a rule table keyed by node class, default config."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from hindentpy.style.config import StyleConfig

if TYPE_CHECKING:
    from hindentpy.printer import Printer

type Rule = Callable[[Printer, Any], None]


def base_rule(printer: Printer, node: Any) -> None:
    """Final default of every rule table: the fundamental renderer."""
    printer.pretty_no_ext(node)


@dataclass(frozen=True, slots=True)
class Style:
    name: str
    author: str
    description: str
    rules: Mapping[type, Rule] = field(default_factory=dict)
    default_config: StyleConfig = field(default_factory=StyleConfig)

    def rule_for(self, node: object) -> Rule:
        return self.rules.get(type(node), base_rule)
