"""Utility functions for glucose analysis."""

from glucose_dashboard.utils.smoothing import rolling_smooth
from glucose_dashboard.utils.statistics import (
    safe_mean,
    population_std,
    calculate_cv,
    calculate_time_in_range,
)
from glucose_dashboard.utils.categories import (
    classify_glucose,
    classify_heatmap_band,
    classify_day_part,
    classify_meal_period,
    status_distribution,
)
from glucose_dashboard.utils.colors import (
    get_glucose_color,
    get_heatmap_color,
    STATUS_COLORS,
)

__all__ = [
    "rolling_smooth",
    "safe_mean",
    "population_std",
    "calculate_cv",
    "calculate_time_in_range",
    "classify_glucose",
    "classify_heatmap_band",
    "classify_day_part",
    "classify_meal_period",
    "status_distribution",
    "get_glucose_color",
    "get_heatmap_color",
    "STATUS_COLORS",
]
