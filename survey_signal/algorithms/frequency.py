"""Single-pole IIR filters.

The low-pass is a first-order approximation of a Butterworth response,
``alpha = dt / (RC + dt)`` with ``RC = 1 / (2*pi*fc)``. High-pass and
band-pass are composed from it rather than designed separately.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import signal

from ._signal import as_signal

logger = logging.getLogger(__name__)


def lowpass_alpha(cutoff_hz: float, sample_rate_hz: float) -> float:
    """Recurrence coefficient for the given cutoff and sampling rate."""
    rc = 1.0 / (2.0 * math.pi * cutoff_hz)
    dt = 1.0 / sample_rate_hz
    return dt / (rc + dt)


def lowpass_filter(y: ArrayLike, cutoff_hz: float, sample_rate_hz: float) -> NDArray[np.float64]:
    """Causal single-pole low-pass filter.

    Args:
        y: Input signal values
        cutoff_hz: Cutoff frequency in Hz
        sample_rate_hz: Sampling rate in Hz

    Returns:
        Filtered signal array. A non-positive cutoff or sampling rate returns
        the input unchanged.
    """
    y = as_signal(y)
    if y.size == 0:
        return y
    if cutoff_hz <= 0 or sample_rate_hz <= 0:
        logger.debug(
            f"Low-pass skipped: cutoff {cutoff_hz} Hz, sample rate {sample_rate_hz} Hz"
        )
        return y

    alpha = lowpass_alpha(cutoff_hz, sample_rate_hz)
    # out[i] = alpha * y[i] + (1 - alpha) * out[i-1], with out[-1] taken as y[0]
    result, _ = signal.lfilter([alpha], [1.0, alpha - 1.0], y, zi=[(1.0 - alpha) * y[0]])
    result[0] = y[0]
    return result


def highpass_filter(y: ArrayLike, cutoff_hz: float, sample_rate_hz: float) -> NDArray[np.float64]:
    """Complementary high-pass: the signal minus its low-pass."""
    y = as_signal(y)
    if y.size == 0:
        return y
    return y - lowpass_filter(y, cutoff_hz, sample_rate_hz)


def bandpass_filter(
    y: ArrayLike,
    low_cutoff_hz: float,
    high_cutoff_hz: float,
    sample_rate_hz: float,
) -> NDArray[np.float64]:
    """High-pass at `low_cutoff_hz`, then low-pass at `high_cutoff_hz`."""
    y = as_signal(y)
    if y.size == 0:
        return y
    high_passed = highpass_filter(y, low_cutoff_hz, sample_rate_hz)
    return lowpass_filter(high_passed, high_cutoff_hz, sample_rate_hz)
