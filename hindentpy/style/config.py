"""Layout thresholds shared by every rule of a style."""

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class StyleConfig:
    """Immutable layout thresholds carried by the printer."""

    max_columns: int = 80
    indent_spaces: int = 2
    # Column delta within which an application head counts as short.
    short_name: int = 10
    # Absolute column before which a one-line rendering counts as small.
    small_column_limit: int = 50
    # Extra columns a single-line argument list may run past `max_columns`.
    overflow_margin: int = 20

    def __post_init__(self):
        for name in ("max_columns", "indent_spaces", "short_name", "small_column_limit"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.overflow_margin < 0:
            raise ValueError("overflow_margin cannot be negative")

    def with_overrides(
        self,
        *,
        max_columns: int | None = None,
        indent_spaces: int | None = None,
    ) -> "StyleConfig":
        """Copy with the CLI-overridable limits replaced when given."""
        return replace(
            self,
            max_columns=self.max_columns if max_columns is None else max_columns,
            indent_spaces=self.indent_spaces if indent_spaces is None else indent_spaces,
        )
