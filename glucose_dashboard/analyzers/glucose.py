"""
Glucose Analyzer - Core glucose statistics calculation.

Computes descriptive statistics, time in range and the composite control
score over a set of self-monitoring readings.
"""

import numpy as np
from typing import Optional, Sequence, Dict

from glucose_dashboard.config import AnalysisConfig
from glucose_dashboard.metrics.glucose_stats import GlucoseStats, TimeInRange
from glucose_dashboard.reading import Reading
from glucose_dashboard.utils.statistics import (
    safe_mean,
    population_std,
    calculate_cv,
    calculate_time_in_range,
)


class GlucoseAnalyzer:
    """Analyzer for glucose self-monitoring readings.

    The reading sequence is never reordered; values are copied into a
    sorted numpy array on first access.
    """

    def __init__(
        self,
        readings: Sequence[Reading],
        config: Optional[AnalysisConfig] = None
    ):
        """Initialize glucose analyzer.

        Args:
            readings: Readings to analyze, in any order.
            config: Optional configuration. Uses defaults if None.
        """
        self.readings = tuple(readings)
        self.config = config or AnalysisConfig()
        self._values: Optional[np.ndarray] = None
        self._stats: Optional[GlucoseStats] = None

    @property
    def values(self) -> np.ndarray:
        """Glucose values sorted ascending."""
        if self._values is None:
            self._values = np.sort(
                np.array([r.glucose for r in self.readings], dtype=float)
            )
        return self._values

    @property
    def stats(self) -> GlucoseStats:
        """Get computed stats (calculates on first access)."""
        if self._stats is None:
            self._stats = self.analyze()
        return self._stats

    def calculate_median(self) -> float:
        """Median of the ascending-sorted values.

        Even counts average the two central values.
        """
        values = self.values
        n = len(values)
        if n == 0:
            return 0.0
        middle = n // 2
        if n % 2 == 0:
            return float((values[middle - 1] + values[middle]) / 2)
        return float(values[middle])

    def calculate_time_in_ranges(self) -> Dict[str, float]:
        """Calculate the percentage of readings in each band.

        Bands:
        - Low: <70 mg/dL
        - Target: 70-180 mg/dL (both inclusive)
        - High: >180-250 mg/dL
        - Very High: >250 mg/dL

        Returns:
            Dictionary with percentage in each band.
        """
        t = self.config.glucose
        values = self.values
        n = len(values)

        if n == 0:
            return {'low': 0.0, 'target': 0.0, 'high': 0.0, 'very_high': 0.0}

        return {
            'low': float(np.sum(values < t.target_low) / n * 100),
            'target': calculate_time_in_range(values, t.target_low, t.target_high),
            'high': float(np.sum((values > t.target_high) & (values <= t.very_high)) / n * 100),
            'very_high': float(np.sum(values > t.very_high) / n * 100),
        }

    def calculate_variability_score(self, cv: float) -> float:
        """Score where 100 means no variability."""
        return max(0.0, 100.0 - cv)

    def calculate_control_score(self, target_pct: float, variability_score: float) -> float:
        """Blend time in target with the variability score."""
        s = self.config.analysis
        return (
            s.control_target_weight * target_pct
            + s.control_variability_weight * variability_score
        )

    def analyze(self) -> GlucoseStats:
        """Compute all statistics.

        Returns:
            GlucoseStats; all zeros for an empty reading set.
        """
        values = self.values

        if len(values) == 0:
            return GlucoseStats()

        average = safe_mean(values)
        std = population_std(values)
        cv = calculate_cv(values)

        tir = self.calculate_time_in_ranges()
        variability_score = self.calculate_variability_score(cv)

        return GlucoseStats(
            average=average,
            median=self.calculate_median(),
            standard_deviation=std,
            coefficient_of_variation=cv,
            time_in_range=TimeInRange(
                low=tir['low'],
                target=tir['target'],
                high=tir['high'],
                very_high=tir['very_high'],
            ),
            variability_score=variability_score,
            control_score=self.calculate_control_score(tir['target'], variability_score),
            readings_count=len(values),
            min_glucose=float(values[0]),
            max_glucose=float(values[-1]),
        )


def compute_stats(
    readings: Sequence[Reading],
    config: Optional[AnalysisConfig] = None
) -> GlucoseStats:
    """Compute GlucoseStats for a reading set."""
    return GlucoseAnalyzer(readings, config).analyze()
