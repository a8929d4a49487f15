from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


class SmoothingMethod(enum.Enum):
    NONE = "none"
    MOVING_AVERAGE = "moving_average"
    SAVITZKY_GOLAY = "savitzky_golay"
    SPLINE_FIT = "spline_fit"
    GAUSSIAN = "gaussian"
    MEDIAN_FILTER = "median_filter"
    THRESHOLD_BASED = "threshold_based"
    KALMAN_FILTER = "kalman_filter"


@dataclass
class SurveyPoint:
    """One survey fix.

    Raw channels (`easting`, `northing`, `z`, `altitude`) are what the source
    file held and are never written by the smoothing code; results land in
    the `smoothed_*` companions.
    """

    easting: float
    northing: float
    z: Optional[float] = None
    altitude: Optional[float] = None
    index: int = 0
    timestamp: Optional[datetime] = None
    name: Optional[str] = None
    source: Optional[str] = None

    smoothed_easting: Optional[float] = None
    smoothed_northing: Optional[float] = None
    smoothed_depth: Optional[float] = None
    smoothed_altitude: Optional[float] = None

    @property
    def x(self) -> float:
        return self.smoothed_easting if self.smoothed_easting is not None else self.easting

    @property
    def y(self) -> float:
        return self.smoothed_northing if self.smoothed_northing is not None else self.northing

    @property
    def final_depth(self) -> Optional[float]:
        return self.smoothed_depth if self.smoothed_depth is not None else self.z

    @property
    def final_altitude(self) -> Optional[float]:
        return self.smoothed_altitude if self.smoothed_altitude is not None else self.altitude


@dataclass(frozen=True)
class SmoothingOptions:
    """Per-call configuration for :func:`survey_signal.survey.service.smooth`.

    Altitude has no settings of its own; it reuses the depth method, window
    and threshold. The noise terms are only read by the Kalman method.
    """

    smooth_position: bool = False
    position_method: SmoothingMethod = SmoothingMethod.MOVING_AVERAGE
    position_window_size: int = 5
    position_threshold: float = 0.5

    smooth_depth: bool = False
    depth_method: SmoothingMethod = SmoothingMethod.MOVING_AVERAGE
    depth_window_size: int = 5
    depth_threshold: float = 0.1

    smooth_altitude: bool = False

    process_noise: float = 0.01
    measurement_noise: float = 0.1


@dataclass(frozen=True)
class SmoothingSettings:
    """Single-method configuration for :func:`survey_signal.survey.service.apply_smoothing`."""

    method: SmoothingMethod = SmoothingMethod.NONE
    window_size: int = 5
    polynomial_order: int = 2
    gaussian_sigma: float = 1.0
    spline_tension: float = 0.5
    threshold: float = 1.0
    process_noise: float = 0.01
    measurement_noise: float = 0.1
    smooth_easting: bool = True
    smooth_northing: bool = True
    smooth_depth: bool = False


@dataclass
class SmoothingResult:
    """Summary of one :func:`smooth` call.

    `points_changed` is the number of distinct points where any channel moved
    by more than the modification epsilon. Older consumers read it as
    `spikes_removed`; that name is kept as an alias, but the count includes
    ordinary smoothing corrections, not only removed spikes.
    """

    total_points: int = 0
    position_points_modified: int = 0
    max_position_correction: float = 0.0
    depth_points_modified: int = 0
    max_depth_correction: float = 0.0
    altitude_points_modified: int = 0
    max_altitude_correction: float = 0.0
    points_changed: int = 0
    modified_point_indices: List[int] = field(default_factory=list)

    @property
    def spikes_removed(self) -> int:
        return self.points_changed


@dataclass(frozen=True)
class SmoothingStatistics:
    mean_easting_diff: float = 0.0
    max_easting_diff: float = 0.0
    rms_easting_diff: float = 0.0

    mean_northing_diff: float = 0.0
    max_northing_diff: float = 0.0
    rms_northing_diff: float = 0.0

    mean_displacement: float = 0.0
    max_displacement: float = 0.0
    rms_displacement: float = 0.0
