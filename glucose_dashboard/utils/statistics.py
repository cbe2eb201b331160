"""
Statistical utilities for glucose analysis.

Provides common statistical calculations used across analyzers. Every helper
returns 0.0 instead of NaN for empty input.
"""

import numpy as np
import pandas as pd
from typing import Iterable, Sequence, Union

ArrayLike = Union[np.ndarray, pd.Series, Sequence[float]]


def _clean(values: ArrayLike) -> np.ndarray:
    values = np.asarray(values, dtype=float)
    return values[~np.isnan(values)]


def safe_mean(values: ArrayLike) -> float:
    """Arithmetic mean, 0.0 for empty input."""
    values = _clean(values)
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def population_std(values: ArrayLike) -> float:
    """Standard deviation dividing by N (descriptive, not sample inference)."""
    values = _clean(values)
    if len(values) == 0:
        return 0.0
    return float(np.std(values, ddof=0))


def calculate_cv(values: ArrayLike) -> float:
    """Calculate coefficient of variation (CV).

    CV = (population standard deviation / mean) x 100

    This is a key metric for glycemic variability.
    Target: <36% per International Consensus (Battelino 2019).

    Args:
        values: Array of values.

    Returns:
        CV as a percentage, 0.0 when the mean is 0 or there is no data.
    """
    values = _clean(values)

    if len(values) == 0 or np.mean(values) == 0:
        return 0.0

    return float(np.std(values, ddof=0) / np.mean(values) * 100)


def calculate_time_in_range(
    values: ArrayLike,
    lower: float,
    upper: float
) -> float:
    """Calculate percentage of values within a range.

    Args:
        values: Array of values.
        lower: Lower bound (inclusive).
        upper: Upper bound (inclusive).

    Returns:
        Percentage (0-100) of values within range.
    """
    values = _clean(values)

    if len(values) == 0:
        return 0.0

    in_range = np.sum((values >= lower) & (values <= upper))
    return float(in_range / len(values) * 100)


def mean_difference(first: Iterable[float], second: Iterable[float]) -> float:
    """Mean of ``second`` minus mean of ``first``."""
    return safe_mean(list(second)) - safe_mean(list(first))
