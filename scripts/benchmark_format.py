#!/usr/bin/env python3
"""Quick perf benchmark for parsing and formatting Haskell files."""

from __future__ import annotations

import argparse
import cProfile
import io
from pathlib import Path
import pstats
import statistics
import time

from tqdm import tqdm

from hindentpy.format import FormatOptions
from hindentpy.pipeline import run_format
from hindentpy.style import DEFAULT_STYLE, STYLES


def _collect_sources(root: Path) -> list[Path]:
    if root.is_file():
        return [root]
    files = sorted(root.rglob("*.hs"))
    return [path for path in files if path.is_file()]


def _run_once(
    files: list[Path],
    *,
    options: FormatOptions,
    label: str,
    show_progress: bool,
) -> tuple[float, int, int, int]:
    start = time.perf_counter()
    changed = 0
    total_diagnostics = 0
    iterator = tqdm(files, desc=label, unit="file") if show_progress else files
    for path in iterator:
        result = run_format(path.read_text(encoding="utf-8"), format_options=options)
        changed += int(result.changed)
        total_diagnostics += len(result.diagnostics)
    duration = time.perf_counter() - start
    return duration, len(files), changed, total_diagnostics


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark Haskell formatting throughput")
    parser.add_argument("root", type=Path, help="Haskell file or directory of .hs files")
    parser.add_argument("--style", choices=sorted(STYLES), default=DEFAULT_STYLE)
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument("--profile", action="store_true", help="Run cProfile and print top hotspots")
    parser.add_argument("--profile-top", type=int, default=30, help="Number of cProfile rows to print")
    args = parser.parse_args()

    root: Path = args.root
    if not root.exists():
        raise SystemExit(f"Invalid root: {root}")

    files = _collect_sources(root)
    if not files:
        raise SystemExit(f"No .hs files found under {root}")

    options = FormatOptions(style=args.style)
    show_progress = not args.no_progress

    def _benchmark() -> tuple[list[float], int, int, int]:
        for warmup_idx in range(max(args.warmups, 0)):
            _run_once(files, options=options, label=f"warmup {warmup_idx + 1}", show_progress=show_progress)

        timings: list[float] = []
        files_count = changed = diagnostics_count = 0
        for run_idx in range(max(args.runs, 1)):
            duration, files_count, changed, diagnostics_count = _run_once(
                files,
                options=options,
                label=f"run {run_idx + 1}/{max(args.runs, 1)}",
                show_progress=show_progress,
            )
            timings.append(duration)
        return timings, files_count, changed, diagnostics_count

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        timings, files_count, changed, diagnostics_count = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.sort_stats("tottime").print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        timings, files_count, changed, diagnostics_count = _benchmark()

    mean = statistics.mean(timings)
    print(f"Dataset: {root}")
    print(f"Files: {files_count} (would change: {changed})")
    print(f"Diagnostics: {diagnostics_count}")
    print(f"Runs: {len(timings)} (warmups={max(args.warmups, 0)})")
    print(f"Best:   {min(timings):.4f}s")
    print(f"Median: {statistics.median(timings):.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Files/s (mean): {files_count / mean:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
