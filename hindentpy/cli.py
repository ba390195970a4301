"""Command line entrypoint: format Haskell files or stdin."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys

from tqdm import tqdm

from hindentpy.diagnostics import format_diagnostic
from hindentpy.format import FormatOptions
from hindentpy.parser import ParseMode
from hindentpy.pipeline import FormatRunResult, run_format
from hindentpy.style import DEFAULT_STYLE, STYLES, get_style
from hindentpy.text import LineIndex

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNFORMATTED = 1
EXIT_ERRORS = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hindentpy", description="Reformat Haskell source code")
    parser.add_argument("paths", nargs="*", type=Path, help="Files to format (default: read stdin)")
    parser.add_argument("--style", choices=sorted(STYLES), default=DEFAULT_STYLE, help="Layout style")
    parser.add_argument("--line-length", type=int, default=None, help="Column limit (default: from style)")
    parser.add_argument("--indent-size", type=int, default=None, help="Indent width (default: from style)")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ParseMode],
        default=ParseMode.STRICT.value,
        help="strict leaves files with parse errors untouched; permissive formats around them",
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--check", action="store_true", help="Exit non-zero if any input would change")
    action.add_argument("--write", action="store_true", help="Rewrite files in place")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=max(logging.WARNING - 10 * args.verbose, logging.DEBUG),
        format="%(levelname)s %(name)s: %(message)s",
    )

    style = get_style(args.style)
    try:
        config = style.default_config.with_overrides(
            max_columns=args.line_length,
            indent_spaces=args.indent_size,
        )
    except ValueError as exc:
        parser.error(str(exc))
    format_options = FormatOptions(style=style.name, config=config)
    mode = ParseMode(args.mode)

    if not args.paths:
        if args.write:
            parser.error("--write needs file paths")
        text = sys.stdin.read()
        result = run_format(text, mode=mode, format_options=format_options)
        _report(result, "<stdin>")
        if not args.check:
            sys.stdout.write(result.formatted_text)
        return _exit_code([result], check=args.check)

    paths: list[Path] = args.paths
    show_progress = len(paths) > 1 and not args.no_progress
    iterator = tqdm(paths, desc="formatting", unit="file") if show_progress else paths

    results: list[FormatRunResult] = []
    for path in iterator:
        text = path.read_text(encoding="utf-8")
        result = run_format(text, mode=mode, format_options=format_options)
        results.append(result)
        _report(result, str(path))

        if args.check:
            if result.changed:
                print(f"would reformat {path}", file=sys.stderr)
        elif args.write:
            if result.changed:
                path.write_text(result.formatted_text, encoding="utf-8")
                logger.info("reformatted %s", path)
        else:
            sys.stdout.write(result.formatted_text)

    logger.info(
        "%d files, %d changed",
        len(results),
        sum(1 for result in results if result.changed),
    )
    return _exit_code(results, check=args.check)


def _report(result: FormatRunResult, path: str) -> None:
    if not result.diagnostics:
        return
    index = LineIndex(result.parse.source_text)
    for diagnostic in result.diagnostics:
        print(format_diagnostic(diagnostic, index, path), file=sys.stderr)


def _exit_code(results: list[FormatRunResult], *, check: bool) -> int:
    if any(result.parse.has_errors for result in results):
        return EXIT_ERRORS
    if check and any(result.changed for result in results):
        return EXIT_UNFORMATTED
    return EXIT_OK
