"""Parser modes and configuration options."""

from dataclasses import dataclass
from enum import StrEnum


class ParseMode(StrEnum):
    """Top-level parser behavior profile."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Flags controlling how unparseable declarations are reported."""

    mode: ParseMode = ParseMode.STRICT
    # Report parse failures as warnings and keep the declaration verbatim.
    downgrade_parse_errors: bool = False
    # Pass `module`/`import`/`data`/... declarations through untouched.
    allow_verbatim_declarations: bool = True

    @staticmethod
    def for_mode(mode: ParseMode) -> "ParserOptions":
        if mode == ParseMode.PERMISSIVE:
            return ParserOptions(
                mode=mode,
                downgrade_parse_errors=True,
                allow_verbatim_declarations=True,
            )

        return ParserOptions(
            mode=mode,
            downgrade_parse_errors=False,
            allow_verbatim_declarations=True,
        )
