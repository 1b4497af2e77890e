#!/usr/bin/env python3
"""Run the batch driver over several working-set sizes and tabulate throughput.

Usage
-----
    python scripts/throughput_sweep.py --counts 100000 1000000 10000000 --output sweep.csv
    python scripts/throughput_sweep.py --counts 1e6 --runs 3 --output sweep.json

Output
------
    CSV or JSON with columns: count, runs, elapsed_ms, options_per_sec, checksum
"""

from __future__ import annotations
import argparse
import csv
import io
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from optbatch.cli import _positive_int
from optbatch.dataset import load_seed
from optbatch.driver import BatchConfig, BatchDriver


def _count(s: str) -> int:
    """Accept 1e6-style sizes as well as plain integers."""
    try:
        return _positive_int(s)
    except argparse.ArgumentTypeError:
        pass
    try:
        n = int(float(s))
    except (ValueError, OverflowError):
        raise argparse.ArgumentTypeError(f"expected an integer, got {s!r}")
    return _positive_int(str(n))


def _sweep_one(seed, count: int, runs: int, check: bool) -> dict:
    """Run one batch and return its result row."""
    config = BatchConfig(target_count=count, num_repetitions=runs,
                         validation_enabled=check)
    # Diagnostics and the per-run elapsed line are not part of the table.
    report = BatchDriver(seed, config, out=io.StringIO()).execute()
    return {
        "count": count,
        "runs": runs,
        "elapsed_ms": report.elapsed_ms,
        "options_per_sec": report.options_per_second,
        "checksum": report.checksum,
    }


def main():
    parser = argparse.ArgumentParser(
        description="Throughput sweep of the batch Black-Scholes driver."
    )
    parser.add_argument("--counts", nargs="+", required=True,
                        type=_count, help="Working-set sizes")
    parser.add_argument("--runs", type=_positive_int, default=1, help="Timed passes per size")
    parser.add_argument("--no-check", dest="check", action="store_false",
                        help="Skip reference-price checks")
    parser.add_argument("--seed-file", default=None, help="Seed CSV")
    parser.add_argument("--output", required=True, help="Output path (.csv or .json)")
    args = parser.parse_args()

    seed = load_seed(args.seed_file)

    results = []
    for count in args.counts:
        row = _sweep_one(seed, count, args.runs, args.check)
        print(f"  {count:>12,d} options: {row['elapsed_ms']:10.1f} msec "
              f"({row['options_per_sec']:,.0f} options/s)")
        results.append(row)

    output_path = Path(args.output)
    if output_path.suffix == ".json":
        with open(output_path, "w") as f:
            json.dump(results, f, indent=2)
    else:
        with open(output_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(results[0].keys()))
            writer.writeheader()
            writer.writerows(results)

    print(f"Results written to {args.output}")


if __name__ == "__main__":
    main()
