"""
Smoothing utilities for the glucose time-series chart.
"""

import pandas as pd


def rolling_smooth(
    series: pd.Series,
    window: int = 5,
    min_periods: int = 1,
    center: bool = False
) -> pd.Series:
    """Apply a rolling average to a series of readings.

    Spreadsheet readings are sparse (a few per day), so the window counts
    readings rather than time.

    Args:
        series: Glucose values in chronological order.
        window: Number of readings in the window.
        min_periods: Minimum readings required in the window.
        center: If True, center the window on each point.

    Returns:
        Smoothed series with same index.
    """
    if window <= 1:
        return series.astype(float)
    return series.rolling(window=window, min_periods=min_periods, center=center).mean()
