#!/usr/bin/env python
"""Write the token stream of a Haskell file, one token per line."""

from __future__ import annotations

import argparse
from pathlib import Path

from hindentpy.lexer import Lexer, Token, token_text


def format_token(idx: int, token: Token, source: str) -> str:
    return (
        f"[{idx}] kind={token.kind.name} "
        f"text={token_text(source, token)!r} "
        f"range={token.range.as_tuple()} "
        f"col={token.column} "
        f"flags={token.flags!r}"
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump lexer tokens for a Haskell source file")
    parser.add_argument("input", type=Path, help="Haskell source file")
    parser.add_argument("--output", type=Path, default=None, help="Output file (default: print)")
    parser.add_argument("--skip-trivia", action="store_true", help="Leave out whitespace and comments")
    args = parser.parse_args()

    text = args.input.read_text(encoding="utf-8")
    lexer = Lexer(text)
    tokens = lexer.lex()
    if args.skip_trivia:
        tokens = [token for token in tokens if not token.kind.is_trivia]

    lines = [format_token(idx, token, text) for idx, token in enumerate(tokens)]
    lines.extend(f"diagnostic: {diagnostic.code} {diagnostic.message}" for diagnostic in lexer.diagnostics)

    if args.output is None:
        print("\n".join(lines))
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with args.output.open("w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")

    print(f"Wrote {len(tokens)} tokens to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
