#!/usr/bin/env python3
"""Benchmark suite for the Data Matrix codeword reader.

Lays out random codewords for each symbol size, reads them back, and measures
throughput per size. Every readback is checked against the codewords placed.

Usage:
    python benchmark.py
    python benchmark.py --sizes 10x10,144x144 --runs 200 --profile
"""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass

import numpy as np
from tqdm import tqdm

from dmreader.config import SymbolGeometry
from dmreader.parser import parse_codewords
from dmreader.placement import place_codewords
from dmreader.profiler import ParseProfiler
from dmreader.versions import DEFAULT_CATALOG, lookup_geometry


@dataclass
class BenchResult:
    label: str
    codewords: int
    time_s: float
    rate: float
    success: bool


def _parse_size(s: str) -> SymbolGeometry:
    """Parse a symbol size like '10x10' or '8x18' (rows x columns)."""
    try:
        rows, cols = (int(v) for v in s.strip().lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Bad symbol size: {s!r}") from None
    geometry = lookup_geometry(cols, rows)
    if geometry is None:
        raise argparse.ArgumentTypeError(f"Not a Data Matrix size: {s!r}")
    return geometry


def _run_benchmark_case(
    geometry: SymbolGeometry,
    rng: np.random.Generator,
    profiler: ParseProfiler,
    runs: int = 1,
) -> BenchResult:
    """Time repeated reads of one freshly placed symbol."""
    codewords = bytes(rng.integers(0, 256, geometry.total_codewords).tolist())
    grid = place_codewords(codewords, geometry)

    success = True
    t0 = time.perf_counter()
    for _ in range(runs):
        report = parse_codewords(grid, profiler=profiler, split_blocks=True)
        success = success and report.codewords == codewords
    elapsed = time.perf_counter() - t0

    return BenchResult(
        label=f"{geometry.symbol_size_rows}x{geometry.symbol_size_columns}",
        codewords=geometry.total_codewords,
        time_s=elapsed,
        rate=runs / elapsed if elapsed > 0 else 0,
        success=success,
    )


def run_benchmark(
    geometries: list[SymbolGeometry],
    runs: int = 1,
    profile: bool = False,
    seed: int = 0,
    quiet: bool = False,
) -> list[BenchResult]:
    """Run the full benchmark suite."""
    rng = np.random.default_rng(seed)
    profiler = ParseProfiler(enabled=profile)

    if not quiet:
        print("=" * 54)
        print("  Data Matrix Codeword Reader Benchmark")
        print("=" * 54)
        print(f"  Sizes: {len(geometries)} | Runs per size: {runs}")
        print("-" * 54)

    results: list[BenchResult] = []
    for geometry in tqdm(geometries, desc="Benchmarking", unit="size", disable=quiet):
        result = _run_benchmark_case(geometry, rng, profiler, runs=runs)
        if not result.success and not quiet:
            tqdm.write(f"  Readback mismatch for {geometry.summary()}")
        results.append(result)

    if not quiet:
        print()
        print(f"  {'Size':<10} {'Words':>6} {'Time':>9} {'Reads/s':>10} {'OK':>4}")
        print(f"  {'-'*10} {'-'*6} {'-'*9} {'-'*10} {'-'*4}")
        for r in results:
            ok = "Yes" if r.success else "NO"
            print(
                f"  {r.label:<10} {r.codewords:>6} {r.time_s:>8.3f}s "
                f"{r.rate:>10.1f} {ok:>4}"
            )
        print()
        if profile:
            print("  Per-stage timing")
            print(profiler.summary())

    return results


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark suite for the Data Matrix codeword reader"
    )
    parser.add_argument(
        "--sizes", default="all",
        help="Comma-separated symbol sizes as ROWSxCOLS, or 'all' (default: all)"
    )
    parser.add_argument(
        "--runs", type=int, default=50,
        help="Reads per symbol size (default: 50)"
    )
    parser.add_argument(
        "--profile", action="store_true",
        help="Print per-stage timing"
    )
    parser.add_argument(
        "--seed", type=int, default=0,
        help="Seed for the random codewords (default: 0)"
    )
    parser.add_argument(
        "--quiet", action="store_true",
        help="Suppress all output"
    )

    args = parser.parse_args()
    if args.sizes.strip().lower() == "all":
        geometries = list(DEFAULT_CATALOG)
    else:
        try:
            geometries = [_parse_size(s) for s in args.sizes.split(",")]
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))

    results = run_benchmark(
        geometries, runs=args.runs, profile=args.profile,
        seed=args.seed, quiet=args.quiet,
    )
    raise SystemExit(0 if all(r.success for r in results) else 1)


if __name__ == "__main__":
    main()
