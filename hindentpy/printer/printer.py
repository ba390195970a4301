"""Printer over an immutable state value with sandboxed trial renders."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from hindentpy.printer.base import pretty_base

if TYPE_CHECKING:
    from hindentpy.ast import Node
    from hindentpy.style.config import StyleConfig
    from hindentpy.style.style import Style

type Procedure = Callable[[], object]


@dataclass(frozen=True, slots=True)
class OutputChain:
    """Persistent output list; a trial extends it without copying."""

    text: str
    previous: OutputChain | None = None


@dataclass(frozen=True, slots=True)
class PrintState:
    indent_level: int = 0
    column: int = 0
    line: int = 1
    newline_pending: bool = False
    output: OutputChain | None = None

    def text(self) -> str:
        parts: list[str] = []
        chain = self.output
        while chain is not None:
            parts.append(chain.text)
            chain = chain.previous
        return "".join(reversed(parts))


class Printer:
    """Stateful text sink used by layout rules.

    The live state is a single `PrintState` reference. `sandbox` runs a
    procedure and hands back the state it produced while restoring the
    previous reference; `commit` makes such a state live.
    """

    def __init__(
        self,
        style: Style,
        config: StyleConfig | None = None,
        state: PrintState | None = None,
    ) -> None:
        self._style = style
        self._config = config or style.default_config
        self._state = state or PrintState()

    @property
    def style(self) -> Style:
        return self._style

    @property
    def config(self) -> StyleConfig:
        return self._config

    @property
    def state(self) -> PrintState:
        return self._state

    @property
    def column_limit(self) -> int:
        return self._config.max_columns

    @property
    def indent_spaces(self) -> int:
        return self._config.indent_spaces

    def output(self) -> str:
        return self._state.text()

    # -- trials -----------------------------------------------------------

    def sandbox[T](self, procedure: Callable[[], T]) -> tuple[T, PrintState]:
        saved = self._state
        try:
            result = procedure()
            return result, self._state
        finally:
            self._state = saved

    def commit(self, state: PrintState) -> None:
        self._state = state

    # -- primitives -------------------------------------------------------

    def write(self, text: str) -> None:
        state = self._state
        out = text
        if state.newline_pending and text != "\n":
            out = " " * max(state.indent_level, 0) + text
        newlines = out.count("\n")
        if newlines:
            column = len(out) - out.rfind("\n") - 1
        else:
            column = state.column + len(out)
        self._state = replace(
            state,
            column=column,
            line=state.line + newlines,
            newline_pending=False,
            output=OutputChain(out, state.output) if out else state.output,
        )

    def newline(self) -> None:
        self.write("\n")
        self._state = replace(self._state, newline_pending=True)

    def space(self) -> None:
        self.write(" ")

    def column[T](self, indent: int, procedure: Callable[[], T]) -> T:
        """Run `procedure` with the indentation base set to `indent`."""
        saved = self._state.indent_level
        self._state = replace(self._state, indent_level=indent)
        try:
            return procedure()
        finally:
            self._state = replace(self._state, indent_level=saved)

    def indented[T](self, delta: int, procedure: Callable[[], T]) -> T:
        return self.column(self._state.indent_level + delta, procedure)

    # -- combinators ------------------------------------------------------

    def depend[T](self, maker: Procedure, dependent: Callable[[], T]) -> T:
        """Run `dependent` aligned to where `maker` left off, if it moved."""
        return self.depend_bind(maker, lambda _: dependent())

    def depend_bind[R, T](self, maker: Callable[[], R], dependent: Callable[[R], T]) -> T:
        before = self._state
        result = maker()
        after = self._state
        if (before.line, before.column) != (after.line, after.column):
            return self.column(after.column, lambda: dependent(result))
        return dependent(result)

    def inter(self, separator: Procedure, procedures: Sequence[Procedure]) -> None:
        """Each item depends on the end of the previous item plus `separator`."""
        saved = self._state.indent_level
        try:
            for index, procedure in enumerate(procedures):
                before = self._state
                procedure()
                if index < len(procedures) - 1:
                    separator()
                after = self._state
                if (before.line, before.column) != (after.line, after.column):
                    self._state = replace(after, indent_level=after.column)
        finally:
            self._state = replace(self._state, indent_level=saved)

    def spaced(self, procedures: Sequence[Procedure]) -> None:
        self.inter(self.space, procedures)

    def commas(self, procedures: Sequence[Procedure]) -> None:
        self.inter(lambda: self.write(", "), procedures)

    def lined(self, procedures: Sequence[Procedure]) -> None:
        for index, procedure in enumerate(procedures):
            if index:
                self.newline()
            procedure()

    def prefixed_lined(self, prefix: str, procedures: Sequence[Procedure]) -> None:
        """First item as is, the rest on new lines with `prefix` hanging left."""
        if not procedures:
            return
        first, *rest = procedures
        first()

        def render_rest() -> None:
            for procedure in rest:
                self.newline()
                self.depend(lambda: self.write(prefix), procedure)

        self.indented(-len(prefix), render_rest)

    def wrap[T](self, opener: str, closer: str, procedure: Callable[[], T]) -> T:
        def body() -> T:
            result = procedure()
            self.write(closer)
            return result

        return self.depend(lambda: self.write(opener), body)

    def parens[T](self, procedure: Callable[[], T]) -> T:
        return self.wrap("(", ")", procedure)

    def brackets[T](self, procedure: Callable[[], T]) -> T:
        return self.wrap("[", "]", procedure)

    def braces[T](self, procedure: Callable[[], T]) -> T:
        return self.wrap("{", "}", procedure)

    # -- dispatch ---------------------------------------------------------

    def pretty(self, node: Node) -> None:
        """Render `node` with the style's rule for its class."""
        self._style.rule_for(node)(self, node)

    def pretty_no_ext(self, node: Node) -> None:
        """Render `node` with the base renderer, bypassing style rules."""
        pretty_base(self, node)

    def renderers(self, nodes: Sequence[Node]) -> list[Procedure]:
        """One procedure per node, for the list combinators."""
        return [lambda node=node: self.pretty(node) for node in nodes]
