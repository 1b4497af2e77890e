# normal.py
# Polynomial approximation of the standard-normal CDF (Hull, "Options,
# Futures and Other Derivatives", section on the cumulative normal).
# Works on scalars or NumPy arrays; all arithmetic is float32.

from __future__ import annotations
import numpy as np

_F = np.float32

_INV_SQRT_2PI = _F(0.39894228040143270286)
_GAMMA = _F(0.2316419)
_A1 = _F(0.319381530)
_A2 = _F(-0.356563782)
_A3 = _F(1.781477937)
_A4 = _F(-1.821255978)
_A5 = _F(1.330274429)

_ONE = _F(1.0)
_HALF = _F(0.5)


def cndf(x):
    """Approximate N(x), the standard-normal cumulative distribution.

    Absolute error is about 1e-7 before float32 rounding.  Symmetric by
    construction: ``cndf(-x) == 1 - cndf(x)`` exactly.  Because ``cndf(0)``
    rounds to 0.49999994, tiny negative inputs return 0.50000006, so the
    result is not monotone within about 1e-7 of zero.

    Returns
    -------
    np.ndarray or np.float32
        Same shape as ``x``.
    """
    x = np.asarray(x, dtype=_F)
    a = np.abs(x)

    density = np.exp(-_HALF * a * a) * _INV_SQRT_2PI

    k = _ONE / (_ONE + _GAMMA * a)
    k2 = k * k
    k3 = k2 * k
    k4 = k3 * k
    k5 = k4 * k
    poly = k * _A1 + (k2 * _A2 + k3 * _A3 + k4 * _A4 + k5 * _A5)

    upper = _ONE - poly * density
    out = np.where(x < 0, _ONE - upper, upper).astype(_F, copy=False)
    return out[()] if out.ndim == 0 else out
