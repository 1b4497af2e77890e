# reference.py
# Exact (float64) Black-Scholes using scipy's normal CDF.  Used to measure
# how far the float32 polynomial pricer drifts from the closed form.

from __future__ import annotations
import numpy as np
from scipy.stats import norm

from .black_scholes import _is_put

_N = norm.cdf   # vectorised standard-normal CDF


def bs_price_exact(spot, strike, rate, volatility, time, kind) -> np.ndarray:
    """Float64 Black-Scholes price, same arguments as ``black_scholes.price``.

    Returns
    -------
    np.ndarray
        Option prices (same shape as broadcasted inputs).
    """
    S, K, r, v, T = (np.asarray(x, dtype=float) for x in (spot, strike, rate, volatility, time))
    sig_sqrt_T = v * np.sqrt(T)
    d1 = (np.log(S / K) + (r + 0.5 * v * v) * T) / sig_sqrt_T
    d2 = d1 - sig_sqrt_T
    disc_r = np.exp(-r * T)

    call_px = S * _N(d1) - disc_r * K * _N(d2)
    put_px  = disc_r * K * _N(-d2) - S * _N(-d1)
    return np.where(_is_put(kind), put_px, call_px)
