"""Chris Done's style.

Documented at https://github.com/chrisdone/haskell-style-guide
"""

from types import MappingProxyType
from typing import Final

from hindentpy.ast import (
    App,
    FieldUpdate,
    GuardedAlt,
    GuardedRhs,
    InfixApp,
    Lambda,
    List,
    Qualifier,
    Tuple,
    TypeSig,
    UnGuardedAlt,
    UnGuardedRhs,
)
from hindentpy.style import layout
from hindentpy.style.config import StyleConfig
from hindentpy.style.style import Style

CHRIS_DONE: Final[Style] = Style(
    name="chris-done",
    author="Chris Done",
    description=(
        "Chris Done's personal style. Documented here: <https://github.com/chrisdone/haskell-style-guide>"
    ),
    rules=MappingProxyType(
        {
            InfixApp: layout.infix_application,
            App: layout.application,
            Lambda: layout.lambda_expression,
            Tuple: layout.tuple_expression,
            List: layout.list_expression,
            FieldUpdate: layout.field_update,
            UnGuardedRhs: layout.unguarded_rhs,
            GuardedRhs: layout.guarded_rhs,
            GuardedAlt: layout.guarded_alt,
            UnGuardedAlt: layout.unguarded_alt,
            Qualifier: layout.qualifier_statement,
            TypeSig: layout.type_signature,
        }
    ),
    default_config=StyleConfig(max_columns=80, indent_spaces=2),
)

FUNDAMENTAL: Final[Style] = Style(
    name="fundamental",
    author="hindentpy",
    description="Base rendering of every node with no layout decisions.",
)
