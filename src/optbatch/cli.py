import argparse
import logging
import sys

from .core import SeedDataError
from .dataset import load_seed
from .driver import BatchConfig, BatchDriver
from .validation import DEFAULT_TOLERANCE


def _positive_int(s: str) -> int:
    try:
        n = int(s.replace("_", ""))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {s!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {n}")
    return n


def _tolerance(s: str) -> float:
    try:
        tol = float(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {s!r}")
    if tol < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {tol}")
    return tol


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="optbatch",
        description="Price a tiled batch of European options with Black-Scholes "
                    "and report elapsed time",
    )
    p.add_argument("--count", type=_positive_int, default=BatchConfig.target_count,
                   help="working-set size (default: %(default)s)")
    p.add_argument("--runs", type=_positive_int, default=BatchConfig.num_repetitions,
                   help="timed passes over the working set (default: %(default)s)")
    p.add_argument("--tolerance", type=_tolerance, default=DEFAULT_TOLERANCE,
                   help="reference-price tolerance (default: %(default)s)")
    p.add_argument("--no-check", dest="check", action="store_false",
                   help="skip the reference-price check")
    p.add_argument("--chunk-size", dest="chunk_size", type=_positive_int,
                   default=BatchConfig.chunk_size,
                   help="rows priced per vectorised call (default: %(default)s)")
    p.add_argument("--seed-file", dest="seed_file", default=None,
                   help="seed CSV to use instead of the embedded dataset")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO,
                            format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        seed = load_seed(args.seed_file)
    except (SeedDataError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    config = BatchConfig(
        target_count=args.count,
        num_repetitions=args.runs,
        validation_enabled=args.check,
        tolerance=args.tolerance,
        chunk_size=args.chunk_size,
    )
    BatchDriver(seed, config).execute()
    return 0


if __name__ == "__main__":
    sys.exit(main())
