# black_scholes.py
# Closed-form Black-Scholes for European options without dividends, built on
# the polynomial CND in normal.py.  Accepts scalars *or* NumPy arrays and
# broadcasts; arithmetic is float32.

from __future__ import annotations
import numpy as np

from .core import OptionKind, OptionRecord
from .normal import cndf

_F = np.float32
_ONE = _F(1.0)
_HALF = _F(0.5)


def _is_put(kind) -> np.ndarray:
    """Return boolean mask: True where the option is a put.

    ``kind`` may be an OptionKind, a kind code (``'C'``, ``"put"``, ...) or an
    array (or scalar, or list) of booleans that is already a put mask.
    """
    arr = np.asarray(kind)
    if arr.dtype == bool:
        return arr
    if isinstance(kind, (OptionKind, str)):
        return np.bool_(OptionKind.from_code(kind) is OptionKind.PUT)
    kind = np.asarray(kind, dtype=object)
    mask = [OptionKind.from_code(k) is OptionKind.PUT for k in kind.flat]
    return np.array(mask, dtype=bool).reshape(kind.shape)


def price(spot, strike, rate, volatility, time, kind):
    """Black-Scholes price of a European call or put.

    Inputs are not range-checked: non-positive spot, strike, volatility or
    time give NaN/inf rather than an exception.  No clamping is applied, so
    a deep out-of-the-money put can come out marginally negative.

    Returns
    -------
    np.ndarray or np.float32
        Option prices (same shape as the broadcast inputs).
    """
    S, K, r, v, T = (np.asarray(x, dtype=_F) for x in (spot, strike, rate, volatility, time))
    is_put = _is_put(kind)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        sqrt_T = np.sqrt(T)
        log_moneyness = np.log(S / K)
        den = v * sqrt_T
        d1 = ((r + _HALF * v * v) * T + log_moneyness) / den
        d2 = d1 - den

        discounted_K = K * np.exp(-r * T)
        nd1 = cndf(d1)
        nd2 = cndf(d2)

        call_px = S * nd1 - discounted_K * nd2
        put_px  = discounted_K * (_ONE - nd2) - S * (_ONE - nd1)

    out = np.where(is_put, put_px, call_px).astype(_F, copy=False)
    return out[()] if out.ndim == 0 else out


def price_record(record: OptionRecord) -> float:
    """Price a single seed record."""
    return float(price(record.spot, record.strike, record.rate,
                       record.volatility, record.time, record.kind))
