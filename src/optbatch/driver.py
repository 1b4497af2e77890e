"""Batch driver: tile the seed dataset, time repeated pricing passes, and
report prices that stray from their reference values.

The driver is a three-state machine::

    UNINITIALIZED --load()--> LOADED --run()--> COMPLETED

``execute()`` performs both steps.  Diagnostics and the elapsed-time line
are written to the configured output stream (stdout by default).
"""

from __future__ import annotations

import enum
import logging
import sys
import time
from dataclasses import dataclass
from typing import Optional, Sequence, TextIO

import numpy as np

from .black_scholes import price
from .core import OptionRecord, SeedDataError
from .dataset import OptionTable, WorkingSet
from .validation import DEFAULT_TOLERANCE, find_mismatches, format_diagnostic

__all__ = [
    "BatchConfig",
    "BatchReport",
    "BatchDriver",
    "DriverState",
    "evaluate",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Configuration and results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BatchConfig:
    """Run-time knobs for a batch.

    Parameters
    ----------
    target_count : int
        Size of the working set the seed dataset is tiled to.
    num_repetitions : int
        Number of timed passes over the working set.
    validation_enabled : bool
        Compare each computed price with its reference value.
    tolerance : float
        Largest accepted ``|reference - computed|``.
    chunk_size : int
        Rows priced per vectorised call.
    """
    target_count: int = 10_000_000
    num_repetitions: int = 1
    validation_enabled: bool = True
    tolerance: float = DEFAULT_TOLERANCE
    chunk_size: int = 1_000_000

    def __post_init__(self):
        if self.target_count <= 0:
            raise ValueError(f"target_count must be positive, got {self.target_count}")
        if self.num_repetitions <= 0:
            raise ValueError(f"num_repetitions must be positive, got {self.num_repetitions}")
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {self.tolerance}")
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")


@dataclass(frozen=True)
class BatchReport:
    elapsed_ms: float
    record_count: int
    repetitions: int
    checksum: float     # float64 sum of the last pass's prices

    @property
    def options_per_second(self) -> float:
        if self.elapsed_ms <= 0:
            return float("inf")
        return self.record_count * self.repetitions / (self.elapsed_ms / 1000.0)


class DriverState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    COMPLETED = "completed"


# ---------------------------------------------------------------------------
# Pricing a slice of the working set
# ---------------------------------------------------------------------------

def evaluate(table: OptionTable, start: int = 0, stop: Optional[int] = None) -> np.ndarray:
    """Price rows ``[start, stop)`` of ``table``; returns a float32 array."""
    sl = slice(start, stop)
    return price(table.spot[sl], table.strike[sl], table.rate[sl],
                 table.volatility[sl], table.time[sl], table.is_put[sl])


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------

class BatchDriver:
    """Owns the working set and runs the timed pricing passes.

    Parameters
    ----------
    seed : sequence of OptionRecord
        Seed dataset; copied into an immutable tuple.
    config : BatchConfig, optional
    out : text stream, optional
        Where diagnostics and the elapsed-time line go.  Default: stdout.
    """

    def __init__(self, seed: Sequence[OptionRecord],
                 config: Optional[BatchConfig] = None,
                 out: Optional[TextIO] = None):
        self.seed = tuple(seed)
        if not self.seed:
            raise SeedDataError("seed dataset is empty")
        self.config = config if config is not None else BatchConfig()
        self.out = out
        self.state = DriverState.UNINITIALIZED
        self._working: Optional[WorkingSet] = None

    def _write(self, line: str) -> None:
        print(line, file=self.out if self.out is not None else sys.stdout)

    def load(self) -> None:
        """Expand the seed dataset into the working set."""
        if self.state is not DriverState.UNINITIALIZED:
            raise RuntimeError(f"load() called in state {self.state.value!r}")
        logger.info("Seed dataset: %d records", len(self.seed))
        self._working = WorkingSet.expand(self.seed, self.config.target_count)
        self.state = DriverState.LOADED

    def run(self) -> BatchReport:
        """Run the timed passes, report, and release the working set."""
        if self.state is not DriverState.LOADED:
            raise RuntimeError(f"run() called in state {self.state.value!r}")
        cfg = self.config

        try:
            with self._working as table:
                n = len(table)
                checksum = 0.0

                t0 = time.perf_counter()
                for rep in range(cfg.num_repetitions):
                    logger.debug("Repetition %d/%d", rep + 1, cfg.num_repetitions)
                    checksum = 0.0
                    for start in range(0, n, cfg.chunk_size):
                        stop = min(start + cfg.chunk_size, n)
                        prices = evaluate(table, start, stop)
                        checksum += float(prices.sum(dtype=np.float64))
                        if cfg.validation_enabled:
                            self._check(rep, prices, table.reference[start:stop])
                t1 = time.perf_counter()
        finally:
            self._working = None
            self.state = DriverState.COMPLETED

        elapsed_ms = (t1 - t0) * 1000.0
        self._write(f"Elapsed time: {elapsed_ms} msec")
        report = BatchReport(elapsed_ms=elapsed_ms, record_count=n,
                             repetitions=cfg.num_repetitions, checksum=checksum)
        logger.info("Priced %d options x %d run(s): %.0f options/s",
                    n, cfg.num_repetitions, report.options_per_second)
        return report

    def execute(self) -> BatchReport:
        self.load()
        return self.run()

    def _check(self, rep: int, prices: np.ndarray, reference: np.ndarray) -> None:
        idx, deltas = find_mismatches(prices, reference, self.config.tolerance)
        for i, delta in zip(idx, deltas):
            self._write(format_diagnostic(rep, float(prices[i]),
                                          float(reference[i]), float(delta)))
