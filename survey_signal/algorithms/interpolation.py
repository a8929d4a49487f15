"""Spline fitting and resampling on the sample index.

Both functions treat the sample number as the independent variable; no
timestamps are involved.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import interpolate

from ._signal import as_signal

logger = logging.getLogger(__name__)

SPLINE_MIN_POINTS = 4


def tension_spline(y: NDArray[np.float64], tension: float = 0.0) -> interpolate.PPoly:
    """Natural cubic spline through `y` (abscissae 0..n-1) with tension.

    `tension` is clamped to [0, 1]: 0 is the natural cubic spline, 1 turns
    every segment into its chord. Intermediate values blend the cubic
    coefficients toward the chord slope.
    """
    x = np.arange(y.size, dtype=float)
    tension = min(1.0, max(0.0, float(tension)))
    cs = interpolate.CubicSpline(x, y, bc_type='natural')

    # PPoly coefficient rows: cubic, quadratic, linear, constant.
    coeffs = cs.c.copy()
    if tension > 0:
        chord = np.diff(y)  # unit spacing
        coeffs[0] *= (1 - tension)
        coeffs[1] *= (1 - tension)
        coeffs[2] = coeffs[2] * (1 - tension) + chord * tension
    return interpolate.PPoly(coeffs, x)


def cubic_spline(y: ArrayLike, tension: float = 0.0) -> NDArray[np.float64]:
    """Fit a tension cubic spline through every sample and re-evaluate it.

    The spline passes through the samples, so at the integer knots the
    output reproduces the input up to rounding for any tension; the call is
    used where callers want the spline-evaluated channel rather than the raw
    one.

    Args:
        y: Input signal values
        tension: Spline tension (0 = natural cubic, 1 = linear)

    Returns:
        Spline-evaluated signal. Signals shorter than four samples, or
        containing non-finite samples, are returned unchanged.
    """
    y = as_signal(y)
    if y.size < SPLINE_MIN_POINTS:
        logger.debug(f"Spline needs {SPLINE_MIN_POINTS} samples, got {y.size}; returning input")
        return y
    if not np.all(np.isfinite(y)):
        # CubicSpline rejects NaN/Inf knots; leave the channel for spike cleaning.
        return y

    spline = tension_spline(y, tension)
    return spline(np.arange(y.size, dtype=float))


def resample(y: ArrayLike, new_length: int) -> NDArray[np.float64]:
    """Linearly resample a signal to `new_length` samples.

    Output sample ``i`` is read at source position ``i * (n - 1) / (new_length - 1)``.
    The first and last samples always map exactly onto the source's first and
    last samples.

    Args:
        y: Input signal values
        new_length: Desired output length

    Returns:
        Resampled array. Empty when `new_length` <= 0 or the input is empty;
        a copy when the length is unchanged; ``[y[0]]`` for length 1.
    """
    y = as_signal(y)
    new_length = int(new_length)
    n = y.size
    if n == 0 or new_length <= 0:
        return np.empty(0, dtype=float)
    if new_length == n:
        return y
    if new_length == 1:
        return y[:1]

    scale = (n - 1) / (new_length - 1)
    positions = np.minimum(np.arange(new_length) * scale, n - 1)
    result = np.interp(positions, np.arange(n, dtype=float), y)
    result[0] = y[0]
    result[-1] = y[-1]
    return result
