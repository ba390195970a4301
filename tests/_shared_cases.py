"""Centralized Haskell source cases used across parser/format/cli tests."""

from __future__ import annotations

from dataclasses import dataclass
import textwrap


@dataclass(frozen=True, slots=True)
class HaskellCase:
    name: str
    source: str
    # Formatter output; `None` means the source is already formatted.
    expected: str | None = None

    @property
    def formatted(self) -> str:
        return self.source if self.expected is None else self.expected


def _dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip()


FORMAT_CASES: tuple[HaskellCase, ...] = (
    HaskellCase(name="pattern_binding", source="foo = 1\n"),
    HaskellCase(name="spacing_is_normalized", source="foo  =   1\n", expected="foo = 1\n"),
    HaskellCase(name="short_application", source="main = print (foo bar)\n"),
    HaskellCase(name="lambda_with_flat_body", source="inc = \\x -> x + 1\n"),
    HaskellCase(name="operator_binder", source="(<+>) a b = a\n"),
    HaskellCase(name="tuple_pattern_binding", source="(a, b) = pair\n"),
    HaskellCase(name="sections_and_operator_names", source="fs = (plus, (+ 1), (1 +), (+))\n"),
    HaskellCase(name="backtick_operator", source="q = a `div` b\n"),
    HaskellCase(name="record_construction", source="r = Foo {bar = 1, baz = x}\n"),
    HaskellCase(name="enumeration", source="xs = [1 .. 10]\n"),
    HaskellCase(name="list_comprehension", source="ys = [x * 2 | x <- xs]\n"),
    HaskellCase(
        name="type_signature_breaks_at_arrows",
        source="foo :: (Show x, Read x) => (Foo -> Bar) -> Maybe Int -> (Char -> X -> Y) -> IO ()\n",
        expected=_dedent(
            """
            foo :: (Show x, Read x)
                => (Foo -> Bar)
                -> Maybe Int
                -> (Char -> X -> Y)
                -> IO ()
            """
        ),
    ),
    HaskellCase(name="short_type_signature", source="main :: IO ()\n"),
    HaskellCase(
        name="context_goes_on_its_own_line",
        source="f :: Show a => a -> String\n",
        expected="f :: Show a\n  => a -> String\n",
    ),
    HaskellCase(
        name="do_block_moves_below_equals",
        source=_dedent(
            """
            main = do
              x <- getLine
              putStrLn x
            """
        ),
        expected=_dedent(
            """
            main =
              do x <- getLine
                 putStrLn x
            """
        ),
    ),
    HaskellCase(
        name="guarded_function",
        source=_dedent(
            """
            sign x
              | x > 0 = 1
              | otherwise = 0
            """
        ),
    ),
    HaskellCase(
        name="guards_stack_with_leading_commas",
        source="f x | x > 0, even x = 1\n",
        expected=_dedent(
            """
            f x
              | x > 0
              , even x = 1
            """
        ),
    ),
    HaskellCase(
        name="where_clause",
        source="f x = y where y = x\n",
        expected=_dedent(
            """
            f x = y
              where
                y = x
            """
        ),
    ),
    HaskellCase(
        name="case_expression",
        source=_dedent(
            """
            f x =
              case x of
                Just y -> y
                Nothing -> 0
            """
        ),
    ),
    HaskellCase(
        name="if_then_else_aligns_branches",
        source="f x = if x then 1 else 0\n",
        expected=_dedent(
            """
            f x =
              if x
                 then 1
                 else 0
            """
        ),
    ),
    HaskellCase(
        name="function_clauses_stay_together",
        source=_dedent(
            """
            fact 0 = 1
            fact n = n * fact (n - 1)
            """
        ),
        # The right operand is an application of a parenthesized argument, so
        # the operator application is not flat and breaks after `*`.
        expected=_dedent(
            """
            fact 0 = 1
            fact n =
              n *
              fact (n - 1)
            """
        ),
    ),
    HaskellCase(
        name="module_header_imports_and_comments",
        source=_dedent(
            """
            module Main where

            import Data.List

            -- | Entry point.
            main :: IO ()
            main = print 1
            """
        ),
    ),
)

# Sources whose strict parse reports an error, with the first diagnostic code.
PARSE_ERROR_CASES: tuple[tuple[str, str], ...] = (
    ("f = (\n", "PARSER_EXPECTED_EXPRESSION"),
    ("f = a == b == c\n", "PARSER_FIXITY_CONFLICT"),
    ("f :: a b => c\n", "PARSER_INVALID_CONTEXT"),
    ("f x\n", "PARSER_EXPECTED_TOKEN"),
)


def case_id(case: HaskellCase) -> str:
    return case.name
