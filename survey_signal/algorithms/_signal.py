"""Input coercion shared by every kernel.

Kernels never raise on degenerate numeric input: windows are normalised,
empty signals come back empty, and non-finite samples are reported but
allowed to propagate.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray
import scipy.ndimage

logger = logging.getLogger(__name__)

MIN_WINDOW = 3


def as_signal(data: ArrayLike, name: str = "signal") -> NDArray[np.float64]:
    """Return `data` as a fresh 1-D float64 array.

    Raises:
        ValueError: If the input has more than one non-singleton dimension
    """
    arr = np.array(data, dtype=float, copy=True)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    elif arr.ndim > 1:
        if sum(dim > 1 for dim in arr.shape) > 1:
            raise ValueError(f"{name} must be one-dimensional, got shape {arr.shape}")
        arr = arr.reshape(-1)

    if arr.size and not np.all(np.isfinite(arr)):
        bad = int(np.count_nonzero(~np.isfinite(arr)))
        logger.warning(f"{name} contains {bad} non-finite value(s), results may be NaN")
    return arr


def odd_window(window_size: int, minimum: int = MIN_WINDOW) -> int:
    """Smallest odd integer >= max(minimum, window_size)."""
    requested = int(window_size)
    window = max(minimum, requested)
    if window % 2 == 0:
        window += 1
    if window != requested:
        logger.debug(f"Window size {requested} normalised to {window}")
    return window


def clipped_correlate(
    y: NDArray[np.float64], kernel: NDArray[np.float64]
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Correlate `y` with a centred odd kernel, ignoring out-of-bounds taps.

    Returns the weighted sums and the sum of kernel weights that fell inside
    the signal at each index.
    """
    sums = scipy.ndimage.correlate1d(y, kernel, mode="constant", cval=0.0)
    present = scipy.ndimage.correlate1d(np.ones_like(y), kernel, mode="constant", cval=0.0)
    return sums, present
