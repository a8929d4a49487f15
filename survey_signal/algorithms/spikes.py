"""Spike detection and removal.

A spike is a sample whose distance from the mean of its neighbours exceeds
`threshold` standard deviations of those neighbours. Detected indices are
only meaningful against the exact signal they were computed from.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ._signal import as_signal, odd_window

logger = logging.getLogger(__name__)

# Fewer neighbours than this give no usable spread estimate.
MIN_NEIGHBOURS = 3


def detect_spikes(y: ArrayLike, window_size: int = 5, threshold: float = 3.0) -> list[int]:
    """Flag samples that deviate strongly from their local neighbourhood.

    For every index the population mean and standard deviation of the other
    samples in the clipped window are computed. The index is flagged when
    ``std > 0`` and ``|y[i] - mean| > threshold * std``. A perfectly flat
    neighbourhood therefore never produces a spike, whatever the threshold.
    Non-finite samples are never flagged.

    Args:
        y: Input signal values
        window_size: Window size (raised to the next odd value >= 3)
        threshold: Number of standard deviations that counts as a spike

    Returns:
        Ascending list of spike indices
    """
    y = as_signal(y)
    n = y.size
    if n < 3:
        return []

    half = odd_window(window_size) // 2
    spikes: list[int] = []
    for i in range(n):
        if not np.isfinite(y[i]):
            continue
        neighbours = np.concatenate([y[max(0, i - half):i], y[i + 1:min(n, i + half + 1)]])
        if neighbours.size < MIN_NEIGHBOURS:
            continue
        mean = neighbours.mean()
        std = neighbours.std()
        if std > 0 and abs(y[i] - mean) > threshold * std:
            spikes.append(i)

    if spikes:
        logger.debug(f"Detected {len(spikes)} spike(s) in {n} samples")
    return spikes


def remove_spikes(y: ArrayLike, spike_indices: Iterable[int]) -> NDArray[np.float64]:
    """Replace flagged samples by interpolating from clean neighbours.

    For each index the nearest unflagged sample on each side is located.
    With both sides available the value is linearly interpolated by
    distance; with only one side, that side is copied. Indices outside the
    signal are ignored.

    Args:
        y: Input signal values
        spike_indices: Indices to replace, e.g. from :func:`detect_spikes`

    Returns:
        Signal array with spikes replaced
    """
    y = as_signal(y)
    flagged = {int(i) for i in spike_indices}
    n = y.size
    if n == 0 or not flagged:
        return y

    result = y.copy()
    for i in sorted(flagged):
        if i < 0 or i >= n:
            continue

        left = i - 1
        while left >= 0 and left in flagged:
            left -= 1
        right = i + 1
        while right < n and right in flagged:
            right += 1

        if left >= 0 and right < n:
            t = (i - left) / (right - left)
            result[i] = y[left] + t * (y[right] - y[left])
        elif left >= 0:
            result[i] = y[left]
        elif right < n:
            result[i] = y[right]

    return result
