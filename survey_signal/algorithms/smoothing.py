from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ._signal import as_signal, clipped_correlate, odd_window

logger = logging.getLogger(__name__)

# Convolution weights for the order-2 Savitzky-Golay configurations used by
# the survey modules, as (numerators, normaliser).
_SAVGOL_TABLE: dict[tuple[int, int], tuple[tuple[int, ...], float]] = {
    (5, 2): ((-3, 12, 17, 12, -3), 35.0),
    (7, 2): ((-2, 3, 6, 7, 6, 3, -2), 21.0),
    (9, 2): ((-21, 14, 39, 54, 59, 54, 39, 14, -21), 231.0),
    (11, 2): ((-36, 9, 44, 69, 84, 89, 84, 69, 44, 9, -36), 429.0),
}

SAVGOL_MIN_WINDOW = 5


def moving_average(y: ArrayLike, window_size: int = 5) -> NDArray[np.float64]:
    """Unweighted moving average over a bounds-clipped window.

    Edge windows are simply shorter; there is no padding or reflection.

    Args:
        y: Input signal values
        window_size: Window size (raised to the next odd value >= 3)

    Returns:
        Smoothed signal array of the same length
    """
    y = as_signal(y)
    if y.size == 0:
        return y

    window = odd_window(window_size)
    sums, counts = clipped_correlate(y, np.ones(window))
    return sums / counts


def weighted_moving_average(y: ArrayLike, window_size: int = 5) -> NDArray[np.float64]:
    """Triangular-weighted moving average.

    Weights fall linearly from the centre (`half - |offset| + 1`) and each
    output is normalised by the weights that were actually in bounds.

    Args:
        y: Input signal values
        window_size: Window size (raised to the next odd value >= 3)

    Returns:
        Smoothed signal array of the same length
    """
    y = as_signal(y)
    if y.size == 0:
        return y

    window = odd_window(window_size)
    half = window // 2
    offsets = np.arange(-half, half + 1)
    weights = (half - np.abs(offsets) + 1).astype(float)
    sums, present = clipped_correlate(y, weights)
    return sums / present


def exponential_smooth(y: ArrayLike, alpha: float = 0.3) -> NDArray[np.float64]:
    """Single exponential smoothing (causal EWMA).

    Args:
        y: Input signal values
        alpha: Smoothing factor, clamped to [0.01, 1.0]. Lower = smoother.

    Returns:
        Smoothed signal array
    """
    y = as_signal(y)
    if y.size == 0:
        return y

    alpha = min(1.0, max(0.01, float(alpha)))

    result = np.empty_like(y)
    result[0] = y[0]
    for i in range(1, y.size):
        result[i] = alpha * y[i] + (1 - alpha) * result[i - 1]
    return result


def median_smooth(y: ArrayLike, window_size: int = 5) -> NDArray[np.float64]:
    """Median filter for robust smoothing against spikes.

    Each output is the middle element (upper middle for an even count) of
    the sorted, bounds-clipped window, so it is always one of the original
    samples.

    Args:
        y: Input signal values
        window_size: Window size (raised to the next odd value >= 3)

    Returns:
        Filtered signal array
    """
    y = as_signal(y)
    if y.size == 0:
        return y

    half = odd_window(window_size) // 2
    n = y.size
    result = np.empty_like(y)
    for i in range(n):
        window = np.sort(y[max(0, i - half):min(n, i + half + 1)])
        result[i] = window[window.size // 2]
    return result


def savgol_coefficients(window_size: int, polyorder: int = 2) -> NDArray[np.float64]:
    """Convolution weights used by :func:`savitzky_golay`.

    Only the order-2 windows 5, 7, 9 and 11 are true Savitzky-Golay weights.
    Any other combination gets normalised inverse-distance weights
    ``1 / (1 + |d|)``, which smooth but do NOT fit a polynomial.
    """
    key = (int(window_size), int(polyorder))
    if key in _SAVGOL_TABLE:
        numerators, norm = _SAVGOL_TABLE[key]
        return np.asarray(numerators, dtype=float) / norm

    logger.debug(
        f"No tabulated Savitzky-Golay weights for window {window_size}, "
        f"polyorder {polyorder}; using inverse-distance approximation"
    )
    half = int(window_size) // 2
    coeffs = 1.0 / (1.0 + np.abs(np.arange(-half, half + 1)))
    return coeffs / coeffs.sum()


def savitzky_golay(y: ArrayLike, window_size: int = 5, polyorder: int = 2) -> NDArray[np.float64]:
    """Apply Savitzky-Golay smoothing while preserving peaks and valleys.

    The window is raised to an odd value of at least 5 and `polyorder` is
    clamped to ``[2, window_size - 2]``. Near the edges the kernel is
    truncated, and each output is rescaled by
    ``sum(all coeffs) / sum(coeffs in bounds)``. Where the in-bounds weights
    do not sum to a positive value the input sample is kept.

    See :func:`savgol_coefficients` for which configurations are exact.

    Args:
        y: Input signal values
        window_size: Window length
        polyorder: Order of the fitted polynomial

    Returns:
        Smoothed signal array
    """
    y = as_signal(y)
    if y.size == 0:
        return y

    window = odd_window(window_size, minimum=SAVGOL_MIN_WINDOW)
    polyorder = min(max(int(polyorder), 2), window - 2)

    coeffs = savgol_coefficients(window, polyorder)
    sums, used = clipped_correlate(y, coeffs)
    total = coeffs.sum()

    positive = used > 0
    result = y.copy()
    result[positive] = sums[positive] / used[positive] * total
    return result


def gaussian_smooth(y: ArrayLike, sigma: float = 1.0) -> NDArray[np.float64]:
    """Apply Gaussian smoothing with edge renormalisation.

    The kernel spans ``ceil(3 * sigma)`` samples either side. At the edges
    each output is divided by the kernel mass that lies inside the signal, so
    the output never leaves the input's value range.

    Args:
        y: Input signal values
        sigma: Standard deviation of the kernel in samples. Values <= 0
            return the input unchanged.

    Returns:
        Smoothed signal array
    """
    y = as_signal(y)
    if y.size == 0 or sigma <= 0:
        return y

    radius = int(math.ceil(3 * sigma))
    x = np.arange(-radius, radius + 1, dtype=float)
    kernel = np.exp(-(x * x) / (2 * sigma * sigma))
    kernel /= kernel.sum()

    sums, mass = clipped_correlate(y, kernel)
    return sums / mass


def threshold_smooth(y: ArrayLike, threshold: float, window_size: int = 5) -> NDArray[np.float64]:
    """Replace only the samples that stray too far from their neighbours.

    A sample is swapped for the mean of its clipped window (itself excluded)
    when it deviates from that mean by more than `threshold`; all other
    samples are copied through.

    Args:
        y: Input signal values
        threshold: Maximum allowed absolute deviation from the local mean
        window_size: Window size (raised to the next odd value >= 3)

    Returns:
        Filtered signal array
    """
    y = as_signal(y)
    if y.size == 0:
        return y

    window = odd_window(window_size)
    # Zero centre tap: the centre sample never enters its own local mean.
    kernel = np.ones(window)
    kernel[window // 2] = 0.0
    sums, neighbours = clipped_correlate(y, kernel)
    result = y.copy()
    has_neighbours = neighbours > 0
    local = np.zeros_like(y)
    local[has_neighbours] = sums[has_neighbours] / neighbours[has_neighbours]
    replace = has_neighbours & (np.abs(y - local) > threshold)
    result[replace] = local[replace]
    return result
