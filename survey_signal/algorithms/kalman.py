"""Scalar Kalman filtering with Rauch-Tung-Striebel smoothing.

The model is a random walk: the state is predicted unchanged and its
variance grows by `process_noise` each step. The forward pass is causal;
the RTS pass runs backwards over the stored forward estimates, so every
smoothed sample depends on the whole signal.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ._signal import as_signal

logger = logging.getLogger(__name__)

INITIAL_ERROR = 1.0


def _gain(numerator: float, denominator: float) -> float:
    # p == 0 and r == 0: the prior is exact, keep it.
    return numerator / denominator if denominator > 0 else 0.0


def kalman_filter(
    y: ArrayLike,
    process_noise: float = 0.01,
    measurement_noise: float = 0.1,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Run the forward Kalman pass.

    Args:
        y: Observations
        process_noise: Process noise variance Q (negative values clamp to 0)
        measurement_noise: Measurement noise variance R (negative values clamp to 0)

    Returns:
        Tuple of (filtered estimates, posterior error variances)
    """
    y = as_signal(y)
    estimates = np.empty_like(y)
    errors = np.empty_like(y)
    if y.size == 0:
        return estimates, errors

    q = max(0.0, float(process_noise))
    r = max(0.0, float(measurement_noise))

    estimate = float(y[0])
    error = INITIAL_ERROR
    for i, observation in enumerate(y):
        predicted_error = error + q
        gain = _gain(predicted_error, predicted_error + r)
        estimate = estimate + gain * (observation - estimate)
        error = (1 - gain) * predicted_error
        estimates[i] = estimate
        errors[i] = error

    return estimates, errors


def kalman_smooth(
    y: ArrayLike,
    process_noise: float = 0.01,
    measurement_noise: float = 0.1,
) -> NDArray[np.float64]:
    """Kalman forward pass followed by an RTS backward smoothing pass.

    The last smoothed sample is the last forward estimate, bit for bit.

    Args:
        y: Input signal values
        process_noise: Process noise variance Q. Larger values track the
            data more closely.
        measurement_noise: Measurement noise variance R. Larger values
            smooth more.

    Returns:
        Smoothed signal array
    """
    forward, errors = kalman_filter(y, process_noise, measurement_noise)
    n = forward.size
    if n == 0:
        return forward

    q = max(0.0, float(process_noise))
    smoothed = np.empty_like(forward)
    smoothed[n - 1] = forward[n - 1]
    for i in range(n - 2, -1, -1):
        gain = _gain(errors[i], errors[i] + q)
        smoothed[i] = forward[i] + gain * (smoothed[i + 1] - forward[i])

    return smoothed
