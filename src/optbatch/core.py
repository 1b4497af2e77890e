from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class SeedDataError(ValueError):
    """Raised when a seed dataset row cannot be turned into an OptionRecord."""


class OptionKind(Enum):
    CALL = "C"
    PUT = "P"

    @classmethod
    def from_code(cls, code) -> OptionKind:
        """Parse ``'C'``/``'P'`` (or ``"call"``/``"put"``), case-insensitive.

        Unrecognised codes raise instead of falling back to CALL.
        """
        if isinstance(code, cls):
            return code
        s = str(code).strip().lower()
        if s in {"c", "call"}:
            return cls.CALL
        if s in {"p", "put"}:
            return cls.PUT
        raise ValueError(f"option kind must be 'C' or 'P', got {code!r}")


CALL = OptionKind.CALL
PUT  = OptionKind.PUT


# ---------------------------------------------------------------------------
# Seed record: static market parameters for one option
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class OptionRecord:
    """One option as it appears in the seed dataset.

    Parameters
    ----------
    spot : float
        Underlying price.
    strike : float
        Strike price.
    rate : float
        Continuously-compounded risk-free rate.
    dividend_yield : float
        Carried for completeness; not used by the pricer.
    volatility : float
        Annualised volatility.
    time : float
        Time to expiry in years (1yr = 1.0, 6mos = 0.5, ...).
    kind : OptionKind
        CALL or PUT.
    dividend : float
        Discrete dividend amount; not used by the pricer.
    reference : float
        Reference price the computed price is checked against.
    """
    spot: float
    strike: float
    rate: float
    dividend_yield: float
    volatility: float
    time: float
    kind: OptionKind
    dividend: float
    reference: float

    @classmethod
    def from_row(cls, row: Sequence[str]) -> OptionRecord:
        """Build a record from the nine textual fields of a seed row."""
        if len(row) != 9:
            raise SeedDataError(f"expected 9 fields, got {len(row)}: {list(row)!r}")
        try:
            s, k, r, q, v, t = (float(x) for x in row[:6])
            kind = OptionKind.from_code(row[6])
            div, ref = float(row[7]), float(row[8])
        except ValueError as e:
            raise SeedDataError(str(e)) from e
        return cls(spot=s, strike=k, rate=r, dividend_yield=q, volatility=v,
                   time=t, kind=kind, dividend=div, reference=ref)

    @property
    def is_put(self) -> bool:
        return self.kind is OptionKind.PUT
