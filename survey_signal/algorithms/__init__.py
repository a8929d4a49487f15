"""Signal-conditioning kernels: smoothing, Kalman/RTS, IIR filters, spikes, interpolation.

Every function takes a 1-D array-like plus scalar parameters and returns a
new array; nothing here knows about survey points.
"""

from .smoothing import (
    moving_average,
    weighted_moving_average,
    exponential_smooth,
    median_smooth,
    savitzky_golay,
    savgol_coefficients,
    gaussian_smooth,
    threshold_smooth,
)
from .kalman import kalman_filter, kalman_smooth
from .frequency import lowpass_filter, highpass_filter, bandpass_filter
from .spikes import detect_spikes, remove_spikes
from .interpolation import cubic_spline, resample

__all__ = [
    "moving_average",
    "weighted_moving_average",
    "exponential_smooth",
    "median_smooth",
    "savitzky_golay",
    "savgol_coefficients",
    "gaussian_smooth",
    "threshold_smooth",
    "kalman_filter",
    "kalman_smooth",
    "lowpass_filter",
    "highpass_filter",
    "bandpass_filter",
    "detect_spikes",
    "remove_spikes",
    "cubic_spline",
    "resample",
]
