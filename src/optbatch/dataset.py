"""Seed dataset loading and working-set expansion.

The seed dataset is a small CSV of option records (shipped inside the
package, or supplied by the caller).  The working set is that seed tiled
cyclically up to a target size and stored column-wise as read-only float32
arrays, so the pricer can walk it in vectorised chunks.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, fields
from importlib import resources
from pathlib import Path
from typing import Iterable, Optional, Sequence

import numpy as np

from .core import OptionKind, OptionRecord, SeedDataError

__all__ = [
    "SEED_COLUMNS",
    "parse_seed",
    "load_seed",
    "OptionTable",
    "WorkingSet",
]

logger = logging.getLogger(__name__)

SEED_COLUMNS = (
    "spot", "strike", "rate", "dividend_yield", "volatility",
    "time", "kind", "dividend", "reference",
)
_NUMERIC = tuple(c for c in SEED_COLUMNS if c != "kind")


# ---------------------------------------------------------------------------
# Seed loading
# ---------------------------------------------------------------------------

def parse_seed(lines: Iterable[str], source: str = "<seed>") -> tuple[OptionRecord, ...]:
    """Parse seed CSV text into an immutable tuple of records.

    Blank lines and lines starting with ``#`` are skipped.  The first
    remaining row must be the header ``SEED_COLUMNS``.
    """
    records: list[OptionRecord] = []
    header_seen = False
    for lineno, row in enumerate(csv.reader(lines), start=1):
        if not row or not "".join(row).strip() or row[0].lstrip().startswith("#"):
            continue
        row = [cell.strip() for cell in row]
        if not header_seen:
            if tuple(row) != SEED_COLUMNS:
                raise SeedDataError(
                    f"{source}:{lineno}: expected header {','.join(SEED_COLUMNS)!r}, "
                    f"got {','.join(row)!r}"
                )
            header_seen = True
            continue
        try:
            records.append(OptionRecord.from_row(row))
        except SeedDataError as e:
            raise SeedDataError(f"{source}:{lineno}: {e}") from e

    if not records:
        raise SeedDataError(f"{source}: seed dataset is empty")
    return tuple(records)


def load_seed(path: Optional[str | Path] = None) -> tuple[OptionRecord, ...]:
    """Load the seed dataset from ``path``, or the embedded one by default."""
    if path is None:
        res = resources.files(__package__) / "data" / "seed_options.csv"
        text = res.read_text(encoding="utf-8")
        source = "seed_options.csv"
    else:
        path = Path(path)
        source = str(path)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise SeedDataError(f"{source}: {e}") from e
    records = parse_seed(io.StringIO(text), source=source)
    logger.debug("Loaded %d seed records from %s", len(records), source)
    return records


# ---------------------------------------------------------------------------
# Column-oriented table
# ---------------------------------------------------------------------------

def _read_only(col: np.ndarray) -> np.ndarray:
    col.setflags(write=False)
    return col


@dataclass(frozen=True, eq=False)
class OptionTable:
    """Struct-of-arrays view of a sequence of option records.

    Every numeric column is a read-only float32 array; ``is_put`` is a
    read-only boolean mask.  Writeable arrays passed in are copied, so the
    caller's arrays keep their flags.
    """
    spot: np.ndarray
    strike: np.ndarray
    rate: np.ndarray
    dividend_yield: np.ndarray
    volatility: np.ndarray
    time: np.ndarray
    dividend: np.ndarray
    reference: np.ndarray
    is_put: np.ndarray

    def __post_init__(self):
        n = len(self.spot)
        for f in fields(self):
            col = getattr(self, f.name)
            if col.ndim != 1 or len(col) != n:
                raise ValueError(
                    f"column {f.name!r} has shape {col.shape}, expected ({n},)"
                )
            if col.flags.writeable:
                col = np.array(col, copy=True)
                col.setflags(write=False)
                object.__setattr__(self, f.name, col)

    @classmethod
    def from_records(cls, records: Sequence[OptionRecord]) -> OptionTable:
        cols = {
            name: np.array([getattr(rec, name) for rec in records], dtype=np.float32)
            for name in _NUMERIC
        }
        cols["is_put"] = np.array([rec.is_put for rec in records], dtype=bool)
        return cls(**{name: _read_only(col) for name, col in cols.items()})

    def __len__(self) -> int:
        return len(self.spot)

    def tile(self, count: int) -> OptionTable:
        """Repeat the rows cyclically: row ``i`` of the result is row ``i % len(self)``."""
        if count <= 0:
            raise ValueError(f"count must be positive, got {count}")
        if len(self) == 0:
            raise ValueError("cannot tile an empty table")
        return OptionTable(**{
            f.name: _read_only(np.resize(getattr(self, f.name), count))
            for f in fields(self)
        })

    def record(self, i: int) -> OptionRecord:
        """Rebuild the OptionRecord stored at row ``i`` (float32-rounded)."""
        vals = {name: float(getattr(self, name)[i]) for name in _NUMERIC}
        kind = OptionKind.PUT if self.is_put[i] else OptionKind.CALL
        return OptionRecord(kind=kind, **vals)


# ---------------------------------------------------------------------------
# Working set
# ---------------------------------------------------------------------------

class WorkingSet:
    """Owns the expanded table for the lifetime of a ``with`` block.

    >>> with WorkingSet.expand(load_seed(), 1_000) as table:
    ...     len(table)
    1000
    """

    def __init__(self, table: OptionTable):
        self._table: Optional[OptionTable] = table

    @classmethod
    def expand(cls, seed: Sequence[OptionRecord], target_count: int) -> WorkingSet:
        """Tile ``seed`` cyclically up to ``target_count`` rows."""
        if not seed:
            raise SeedDataError("seed dataset is empty")
        table = OptionTable.from_records(seed).tile(target_count)
        logger.info("Expanded %d seed records to a working set of %d",
                    len(seed), target_count)
        return cls(table)

    @property
    def table(self) -> OptionTable:
        if self._table is None:
            raise RuntimeError("working set has been released")
        return self._table

    @property
    def released(self) -> bool:
        return self._table is None

    def release(self) -> None:
        self._table = None

    def __len__(self) -> int:
        return len(self.table)

    def __enter__(self) -> OptionTable:
        return self.table

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
