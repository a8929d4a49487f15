"""Apply smoothing kernels to survey point channels.

This is the only module that knows what a survey point is. It pulls the
position, depth and altitude channels out of a list of points, runs the
configured kernel on each, writes the results into the points' `smoothed_*`
fields and reports how far each channel moved.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..algorithms import (
    cubic_spline,
    gaussian_smooth,
    kalman_smooth,
    median_smooth,
    moving_average,
    savitzky_golay,
    threshold_smooth,
)
from .models import (
    SmoothingMethod,
    SmoothingOptions,
    SmoothingResult,
    SmoothingSettings,
    SmoothingStatistics,
    SurveyPoint,
)

logger = logging.getLogger(__name__)

# A channel counts as modified at a point when it moved by more than this.
MODIFICATION_EPSILON = 1e-4
MIN_POINTS = 3

SAVGOL_ORDER = 2
SPLINE_TENSION = 0.5

DEFAULT_COLUMNS: Dict[str, str] = {
    'easting': 'Easting',
    'northing': 'Northing',
    'depth': 'Depth',
    'altitude': 'Altitude',
}


def apply_method(
    data: NDArray[np.float64],
    method: SmoothingMethod,
    window_size: int,
    threshold: float,
    process_noise: float = 0.01,
    measurement_noise: float = 0.1,
    *,
    polyorder: int = SAVGOL_ORDER,
    sigma: Optional[float] = None,
    tension: float = SPLINE_TENSION,
) -> NDArray[np.float64]:
    """Run the kernel selected by `method` on one channel.

    This is the only place a SmoothingMethod is turned into a kernel call.
    The Gaussian sigma defaults to a third of the window size.
    """
    if method is SmoothingMethod.MOVING_AVERAGE:
        return moving_average(data, window_size)
    if method is SmoothingMethod.SAVITZKY_GOLAY:
        return savitzky_golay(data, window_size, polyorder)
    if method is SmoothingMethod.SPLINE_FIT:
        return cubic_spline(data, tension)
    if method is SmoothingMethod.GAUSSIAN:
        return gaussian_smooth(data, window_size / 3.0 if sigma is None else sigma)
    if method is SmoothingMethod.MEDIAN_FILTER:
        return median_smooth(data, window_size)
    if method is SmoothingMethod.THRESHOLD_BASED:
        return threshold_smooth(data, threshold, window_size)
    if method is SmoothingMethod.KALMAN_FILTER:
        return kalman_smooth(data, process_noise, measurement_noise)
    return np.array(data, dtype=float, copy=True)


def _channel(points: Sequence[SurveyPoint], attr: str) -> NDArray[np.float64]:
    values = (getattr(p, attr) for p in points)
    return np.fromiter((0.0 if v is None else v for v in values), dtype=float, count=len(points))


def smooth(points: Sequence[SurveyPoint], options: Optional[SmoothingOptions]) -> SmoothingResult:
    """Smooth the enabled channels of `points` in place.

    Raw fields are left untouched; results are written to `smoothed_easting`,
    `smoothed_northing`, `smoothed_depth` and `smoothed_altitude`. Missing
    depth or altitude values are treated as 0.0.

    Args:
        points: Survey points in acquisition order
        options: Channel flags and per-channel method settings

    Returns:
        SmoothingResult with per-channel counts and largest corrections.
        With fewer than three points (or no options) nothing is smoothed and
        only `total_points` is set.
    """
    result = SmoothingResult(total_points=len(points))
    if options is None or len(points) < MIN_POINTS:
        return result

    modified: set[int] = set()

    def run(data: NDArray[np.float64], method: SmoothingMethod, window: int, threshold: float):
        return apply_method(
            data, method, window, threshold, options.process_noise, options.measurement_noise
        )

    if options.smooth_position:
        eastings = _channel(points, 'easting')
        northings = _channel(points, 'northing')
        new_e = run(eastings, options.position_method, options.position_window_size, options.position_threshold)
        new_n = run(northings, options.position_method, options.position_window_size, options.position_threshold)

        shift = np.hypot(new_e - eastings, new_n - northings)
        changed = np.flatnonzero(shift > MODIFICATION_EPSILON)
        result.position_points_modified = int(changed.size)
        if changed.size:
            result.max_position_correction = float(shift[changed].max())
        modified.update(changed.tolist())

        for point, e, n in zip(points, new_e, new_n):
            point.smoothed_easting = float(e)
            point.smoothed_northing = float(n)

    scalar_channels = (
        ('depth', options.smooth_depth, 'z', 'smoothed_depth'),
        ('altitude', options.smooth_altitude, 'altitude', 'smoothed_altitude'),
    )
    for label, enabled, raw_attr, smoothed_attr in scalar_channels:
        if not enabled:
            continue
        raw = _channel(points, raw_attr)
        new = run(raw, options.depth_method, options.depth_window_size, options.depth_threshold)

        shift = np.abs(new - raw)
        changed = np.flatnonzero(shift > MODIFICATION_EPSILON)
        setattr(result, f"{label}_points_modified", int(changed.size))
        if changed.size:
            setattr(result, f"max_{label}_correction", float(shift[changed].max()))
        modified.update(changed.tolist())

        for point, value in zip(points, new):
            setattr(point, smoothed_attr, float(value))

    result.modified_point_indices = sorted(modified)
    result.points_changed = len(result.modified_point_indices)
    logger.info(
        f"Smoothed {result.total_points} points: {result.points_changed} changed "
        f"(position {result.position_points_modified}, depth {result.depth_points_modified}, "
        f"altitude {result.altitude_points_modified})"
    )
    return result


def _apply_setting(data: NDArray[np.float64], settings: SmoothingSettings) -> NDArray[np.float64]:
    return apply_method(
        data,
        settings.method,
        settings.window_size,
        settings.threshold,
        settings.process_noise,
        settings.measurement_noise,
        polyorder=settings.polynomial_order,
        sigma=settings.gaussian_sigma,
        tension=settings.spline_tension,
    )


def apply_smoothing(points: Sequence[SurveyPoint], settings: SmoothingSettings) -> None:
    """Smooth easting, northing and optionally depth with one method.

    Channels whose flag is off get their raw values copied into the smoothed
    field. With fewer than three points, or `SmoothingMethod.NONE`, the raw
    positions are copied and depth is left alone.

    Threshold and Kalman methods run like any other, using the settings'
    `threshold` and noise terms.
    """
    if len(points) < MIN_POINTS or settings.method is SmoothingMethod.NONE:
        for point in points:
            point.smoothed_easting = point.easting
            point.smoothed_northing = point.northing
        return

    eastings = _channel(points, 'easting')
    northings = _channel(points, 'northing')
    new_e = _apply_setting(eastings, settings) if settings.smooth_easting else eastings
    new_n = _apply_setting(northings, settings) if settings.smooth_northing else northings

    for point, e, n in zip(points, new_e, new_n):
        point.smoothed_easting = float(e)
        point.smoothed_northing = float(n)

    if settings.smooth_depth:
        depths = _apply_setting(_channel(points, 'z'), settings)
        for point, d in zip(points, depths):
            point.smoothed_depth = float(d)


def _summary(diffs: NDArray[np.float64]) -> Tuple[float, float, float]:
    if diffs.size == 0:
        return 0.0, 0.0, 0.0
    return (
        float(diffs.mean()),
        float(np.abs(diffs).max()),
        float(np.sqrt(np.mean(diffs * diffs))),
    )


def calculate_statistics(points: Iterable[SurveyPoint]) -> SmoothingStatistics:
    """Compare smoothed and raw positions.

    Only points that carry a smoothed value contribute to the easting and
    northing figures; displacement pairs them up in order.
    """
    points = list(points)
    de = np.array([p.smoothed_easting - p.easting for p in points if p.smoothed_easting is not None])
    dn = np.array([p.smoothed_northing - p.northing for p in points if p.smoothed_northing is not None])

    paired = min(de.size, dn.size)
    displacement = np.hypot(de[:paired], dn[:paired])

    mean_e, max_e, rms_e = _summary(de)
    mean_n, max_n, rms_n = _summary(dn)
    mean_d, max_d, rms_d = _summary(displacement)
    return SmoothingStatistics(
        mean_easting_diff=mean_e,
        max_easting_diff=max_e,
        rms_easting_diff=rms_e,
        mean_northing_diff=mean_n,
        max_northing_diff=max_n,
        rms_northing_diff=rms_n,
        mean_displacement=mean_d,
        max_displacement=max_d,
        rms_displacement=rms_d,
    )


def smooth_dataframe(
    df: pd.DataFrame,
    options: SmoothingOptions,
    columns: Optional[Dict[str, str]] = None,
) -> Tuple[pd.DataFrame, SmoothingResult]:
    """
    Convenience function to smooth survey channels held in a pandas DataFrame.

    Parameters
    ----------
    df : pd.DataFrame
        One row per survey point, in acquisition order
    options : SmoothingOptions
        Channel flags and method settings
    columns : dict, optional
        Maps 'easting', 'northing', 'depth', 'altitude' to column names.
        Defaults to 'Easting', 'Northing', 'Depth', 'Altitude'.

    Returns
    -------
    tuple
        (copy of `df` with Smoothed* columns for the enabled channels,
        SmoothingResult)
    """
    names = {**DEFAULT_COLUMNS, **(columns or {})}

    required = ['easting', 'northing']
    if options.smooth_depth:
        required.append('depth')
    if options.smooth_altitude:
        required.append('altitude')
    for key in required:
        if names[key] not in df.columns:
            raise ValueError(f"Column '{names[key]}' not found in DataFrame")

    def numeric(key: str) -> List[Optional[float]]:
        if names[key] not in df.columns:
            return [None] * len(df)
        values = pd.to_numeric(df[names[key]], errors='coerce').to_numpy(dtype=float)
        return [None if np.isnan(v) else float(v) for v in values]

    eastings = pd.to_numeric(df[names['easting']], errors='coerce').to_numpy(dtype=float)
    northings = pd.to_numeric(df[names['northing']], errors='coerce').to_numpy(dtype=float)
    points = [
        SurveyPoint(easting=float(e), northing=float(n), z=d, altitude=a, index=i)
        for i, (e, n, d, a) in enumerate(zip(eastings, northings, numeric('depth'), numeric('altitude')))
    ]

    result = smooth(points, options)

    out = df.copy()
    if options.smooth_position and len(points) >= MIN_POINTS:
        out['SmoothedEasting'] = [p.smoothed_easting for p in points]
        out['SmoothedNorthing'] = [p.smoothed_northing for p in points]
    if options.smooth_depth and len(points) >= MIN_POINTS:
        out['SmoothedDepth'] = [p.smoothed_depth for p in points]
    if options.smooth_altitude and len(points) >= MIN_POINTS:
        out['SmoothedAltitude'] = [p.smoothed_altitude for p in points]
    return out, result
