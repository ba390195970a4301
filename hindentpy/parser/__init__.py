"""Parser infrastructure (layout-aware token cursor + grammar + module splitting)."""

from hindentpy.parser.fixity import (
    BASE_FIXITIES,
    DEFAULT_FIXITY,
    Associativity,
    Fixity,
    FixityError,
    Negation,
    fixity_of,
    resolve_operators,
)
from hindentpy.parser.grammar import (
    group_function_clauses,
    parse_block,
    parse_declaration,
    parse_expression,
    parse_pattern,
    parse_sig_type,
    parse_statement,
    parse_type,
)
from hindentpy.parser.haskell import ParsedModule, parse, parse_result, split_top_level
from hindentpy.parser.options import ParseMode, ParserOptions
from hindentpy.parser.parser import EXPLICIT_LAYOUT, ParseAbort, Parser, ParserCheckpoint

__all__ = [
    "BASE_FIXITIES",
    "DEFAULT_FIXITY",
    "EXPLICIT_LAYOUT",
    "Associativity",
    "Fixity",
    "FixityError",
    "Negation",
    "ParseAbort",
    "ParseMode",
    "ParsedModule",
    "Parser",
    "ParserCheckpoint",
    "ParserOptions",
    "fixity_of",
    "group_function_clauses",
    "parse",
    "parse_block",
    "parse_declaration",
    "parse_expression",
    "parse_pattern",
    "parse_result",
    "parse_sig_type",
    "parse_statement",
    "parse_type",
    "resolve_operators",
    "split_top_level",
]
