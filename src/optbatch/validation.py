"""Price validation against reference values.

Two concerns live here: the per-record tolerance check the batch driver
runs on every computed price, and a cross-check of the float32 polynomial
pricer against the exact float64 closed form.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .core import OptionRecord

__all__ = [
    "DEFAULT_TOLERANCE",
    "exceeds_tolerance",
    "find_mismatches",
    "format_diagnostic",
    "cross_validate",
]

DEFAULT_TOLERANCE = 1e-4


# ---------------------------------------------------------------------------
# Tolerance check
# ---------------------------------------------------------------------------

def exceeds_tolerance(delta, tolerance: float = DEFAULT_TOLERANCE):
    """True where ``|delta|`` is strictly greater than ``tolerance``.

    A deviation of exactly ``tolerance`` is accepted.  NaN deltas are
    reported as mismatches.
    """
    delta = np.abs(np.asarray(delta))
    return ~(delta <= tolerance)


def find_mismatches(prices: np.ndarray, reference: np.ndarray,
                    tolerance: float = DEFAULT_TOLERANCE) -> tuple[np.ndarray, np.ndarray]:
    """Locate prices deviating from ``reference`` by more than ``tolerance``.

    Returns
    -------
    (indices, deltas)
        Positions of the offending prices, in increasing order, and their
        signed deltas ``reference - price``.
    """
    delta = reference - prices
    idx = np.flatnonzero(exceeds_tolerance(delta, tolerance))
    return idx, delta[idx]


def format_diagnostic(repetition: int, computed: float, reference: float,
                      delta: float) -> str:
    return (f"Error on {repetition}. Computed={computed:.5f}, "
            f"Ref={reference:.5f}, Delta={delta:.5f}")


# ---------------------------------------------------------------------------
# Approximate vs exact cross-check
# ---------------------------------------------------------------------------

def cross_validate(records: Sequence[OptionRecord]) -> dict:
    """Compare the float32 pricer, the exact pricer and the reference prices.

    Parameters
    ----------
    records : sequence of OptionRecord

    Returns
    -------
    dict
        ``"approx"``, ``"exact"``, ``"reference"`` (arrays), and
        ``"max_approx_vs_exact"``, ``"max_approx_vs_reference"``,
        ``"max_exact_vs_reference"`` (floats).
    """
    from .black_scholes import price
    from .reference import bs_price_exact

    if not records:
        raise ValueError("records must not be empty")

    cols = {
        name: np.array([getattr(rec, name) for rec in records], dtype=float)
        for name in ("spot", "strike", "rate", "volatility", "time", "reference")
    }
    is_put = np.array([rec.is_put for rec in records], dtype=bool)
    args = (cols["spot"], cols["strike"], cols["rate"], cols["volatility"],
            cols["time"], is_put)

    approx = np.asarray(price(*args), dtype=float)
    exact = bs_price_exact(*args)
    ref = cols["reference"]

    return {
        "approx": approx,
        "exact": exact,
        "reference": ref,
        "max_approx_vs_exact": float(np.max(np.abs(approx - exact))),
        "max_approx_vs_reference": float(np.max(np.abs(approx - ref))),
        "max_exact_vs_reference": float(np.max(np.abs(exact - ref))),
    }
