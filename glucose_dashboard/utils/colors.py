"""
Color utilities for glucose visualization.

Maps statuses, heatmap bands and time-in-range bands to colors used by the
Plotly charts and the Streamlit badges.
"""

from typing import Dict, List, Optional, Tuple

from glucose_dashboard.config import GlucoseThresholds
from glucose_dashboard.utils.categories import (
    classify_glucose,
    classify_heatmap_band,
    BAND_LOW,
    BAND_IDEAL,
    BAND_NORMAL,
    BAND_ELEVATED,
    BAND_HIGH,
    BAND_VERY_HIGH,
    STATUS_LOW,
    STATUS_NORMAL,
    STATUS_ELEVATED,
    STATUS_HIGH,
)

DANGER = '#ef4444'
SUCCESS = '#22c55e'
WARNING = '#f59e0b'
DARK_DANGER = '#dc2626'
EMPTY_CELL = '#f3f4f6'

STATUS_COLORS: Dict[str, str] = {
    STATUS_LOW: DANGER,
    STATUS_NORMAL: SUCCESS,
    STATUS_ELEVATED: WARNING,
    STATUS_HIGH: DARK_DANGER,
}

STATUS_EMOJI: Dict[str, str] = {
    STATUS_LOW: '🔴',
    STATUS_NORMAL: '🟢',
    STATUS_ELEVATED: '🟡',
    STATUS_HIGH: '🔴',
}

HEATMAP_BAND_COLORS: Dict[str, str] = {
    BAND_LOW: DANGER,
    BAND_IDEAL: SUCCESS,
    BAND_NORMAL: '#86efac',
    BAND_ELEVATED: WARNING,
    BAND_HIGH: '#fb923c',
    BAND_VERY_HIGH: DARK_DANGER,
}

TIME_IN_RANGE_COLORS: Dict[str, str] = {
    'low': DANGER,
    'target': SUCCESS,
    'high': WARNING,
    'very_high': DARK_DANGER,
}

RECOMMENDATION_COLORS: Dict[str, str] = {
    'warning': DANGER,
    'suggestion': WARNING,
    'positive': SUCCESS,
}


def get_glucose_color(
    value: float,
    thresholds: Optional[GlucoseThresholds] = None
) -> str:
    """Get color for a glucose value based on its status.

    Args:
        value: Glucose value in mg/dL.
        thresholds: Optional custom thresholds. Uses defaults if None.

    Returns:
        Hex color string.
    """
    return STATUS_COLORS[classify_glucose(value, thresholds)]


def get_heatmap_color(
    average: Optional[float],
    thresholds: Optional[GlucoseThresholds] = None
) -> str:
    """Get color for a heatmap cell; cells without data are greyed out."""
    if average is None:
        return EMPTY_CELL
    return HEATMAP_BAND_COLORS[classify_heatmap_band(average, thresholds)]


def get_reference_lines(
    thresholds: Optional[GlucoseThresholds] = None
) -> List[Tuple[float, str, str]]:
    """Get glucose reference lines for the time-series chart.

    Returns:
        List of (value, color, label) tuples.
    """
    if thresholds is None:
        thresholds = GlucoseThresholds()
    return [
        (thresholds.low, DANGER, 'Baixa'),
        (thresholds.normal_high, WARNING, 'Limite Normal'),
        (thresholds.target_high, DANGER, 'Alta'),
    ]
