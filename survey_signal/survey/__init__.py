"""Survey-point orchestration on top of the channel-agnostic kernels."""

from .models import (
    SmoothingMethod,
    SmoothingOptions,
    SmoothingResult,
    SmoothingSettings,
    SmoothingStatistics,
    SurveyPoint,
)
from .service import (
    apply_method,
    apply_smoothing,
    calculate_statistics,
    smooth,
    smooth_dataframe,
)

__all__ = [
    "SmoothingMethod",
    "SmoothingOptions",
    "SmoothingResult",
    "SmoothingSettings",
    "SmoothingStatistics",
    "SurveyPoint",
    "apply_method",
    "apply_smoothing",
    "calculate_statistics",
    "smooth",
    "smooth_dataframe",
]
