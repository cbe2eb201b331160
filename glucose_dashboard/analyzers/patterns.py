"""
Pattern Analyzer - Hour-of-day, weekday and trend analysis.

Aggregates are fixed-size tuples (24 hours, 7 weekdays starting on Sunday)
where None marks a slot without readings.
"""

import pandas as pd
from datetime import datetime, timedelta
from typing import Optional, Sequence, List, Tuple

from glucose_dashboard.config import AnalysisConfig
from glucose_dashboard.metrics.pattern_analysis import (
    PatternAnalysis,
    Trends,
    OverallTrend,
    RecentTrend,
    HOURS_PER_DAY,
    DAYS_PER_WEEK,
)
from glucose_dashboard.reading import Reading, naive_local
from glucose_dashboard.utils.statistics import safe_mean, mean_difference


def readings_to_frame(readings: Sequence[Reading]) -> pd.DataFrame:
    """Build the analysis frame: timestamp, hour, weekday, glucose_mg_dl.

    Rows keep the input order; callers sort when they need chronology.
    """
    return pd.DataFrame(
        {
            'timestamp': [r.timestamp for r in readings],
            'hour': [r.hour for r in readings],
            'weekday': [r.weekday for r in readings],
            'glucose_mg_dl': [float(r.glucose) for r in readings],
        },
        columns=['timestamp', 'hour', 'weekday', 'glucose_mg_dl'],
    )


class PatternAnalyzer:
    """Temporal pattern analysis over glucose readings.

    ``now`` anchors the recent-week window. It defaults to the wall clock,
    which makes the recent-week trend depend on the invocation time. An aware
    ``now`` is converted to naive local time to match reading timestamps.
    """

    def __init__(
        self,
        readings: Sequence[Reading],
        config: Optional[AnalysisConfig] = None,
        now: Optional[datetime] = None
    ):
        self.readings = tuple(readings)
        self.config = config or AnalysisConfig()
        self.now = naive_local(now or datetime.now())
        self.df = readings_to_frame(self.readings)

    # =========================================================================
    # HOUR / WEEKDAY AGGREGATES
    # =========================================================================

    def _slot_means(self, column: str, size: int) -> Tuple[Tuple[Optional[float], ...], Tuple[int, ...]]:
        means: List[Optional[float]] = [None] * size
        counts = [0] * size
        if self.df.empty:
            return tuple(means), tuple(counts)

        grouped = self.df.groupby(column)['glucose_mg_dl'].agg(['mean', 'count'])
        for slot, row in grouped.iterrows():
            means[int(slot)] = float(row['mean'])
            counts[int(slot)] = int(row['count'])
        return tuple(means), tuple(counts)

    def calculate_hourly_pattern(self) -> Tuple[Tuple[Optional[float], ...], Tuple[int, ...]]:
        """Mean glucose and reading count per hour of day."""
        return self._slot_means('hour', HOURS_PER_DAY)

    def calculate_weekday_pattern(self) -> Tuple[Tuple[Optional[float], ...], Tuple[int, ...]]:
        """Mean glucose and reading count per weekday (0=Sunday)."""
        return self._slot_means('weekday', DAYS_PER_WEEK)

    # =========================================================================
    # PEAK / LOW HOURS
    # =========================================================================

    def find_extreme_hours(
        self,
        hourly_pattern: Sequence[Optional[float]]
    ) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        """Select peak and low hours.

        The overall mean is the mean of the populated hourly means. An hour is
        a peak when its mean exceeds the overall mean by more than the
        relative threshold, and a low when it falls below by more than it.
        Each list keeps the strongest deviations first; equal deviations keep
        the lower hour first.

        Returns:
            Tuple of (peak_hours, low_hours).
        """
        s = self.config.analysis
        populated = [(hour, mean) for hour, mean in enumerate(hourly_pattern) if mean is not None]

        if not populated or len(populated) < s.min_populated_hours:
            return (), ()

        overall = safe_mean([mean for _, mean in populated])
        threshold = overall * s.peak_relative_threshold

        # populated is in ascending hour order and sorted() is stable,
        # also with reverse=True
        peaks = sorted(
            (item for item in populated if item[1] > overall + threshold),
            key=lambda item: item[1] - overall,
            reverse=True,
        )
        lows = sorted(
            (item for item in populated if item[1] < overall - threshold),
            key=lambda item: overall - item[1],
            reverse=True,
        )
        limit = s.max_pattern_hours
        return (
            tuple(hour for hour, _ in peaks[:limit]),
            tuple(hour for hour, _ in lows[:limit]),
        )

    # =========================================================================
    # TRENDS
    # =========================================================================

    def _chronological_values(self) -> List[float]:
        ordered = self.df.sort_values('timestamp', kind='mergesort')
        return ordered['glucose_mg_dl'].tolist()

    def classify_overall_trend(self) -> OverallTrend:
        """Compare the first and last quarter of the chronological readings."""
        s = self.config.analysis
        values = self._chronological_values()
        n = len(values)

        if n < s.min_trend_readings:
            return 'stable'

        quarter = n // 4
        if quarter == 0:
            return 'stable'

        difference = mean_difference(values[:quarter], values[-quarter:])
        if abs(difference) > s.overall_trend_threshold:
            return 'increasing' if difference > 0 else 'decreasing'
        return 'stable'

    def classify_recent_week_trend(self) -> RecentTrend:
        """Compare the first and second half of the readings in the last week.

        The window is anchored at ``now``, not at the latest reading.
        """
        s = self.config.analysis

        if len(self.df) < s.min_recent_total:
            return 'stable'

        window_start = self.now - timedelta(days=s.recent_window_days)
        ordered = self.df.sort_values('timestamp', kind='mergesort')
        recent = ordered.loc[ordered['timestamp'] >= window_start, 'glucose_mg_dl'].tolist()

        if len(recent) < s.min_recent_readings:
            return 'stable'

        half = len(recent) // 2
        if half == 0:
            return 'stable'

        difference = mean_difference(recent[:half], recent[-half:])
        if abs(difference) > s.recent_trend_threshold:
            return 'improving' if difference < 0 else 'worsening'
        return 'stable'

    # =========================================================================
    # MAIN ANALYSIS
    # =========================================================================

    def analyze(self) -> PatternAnalysis:
        """Perform the full pattern analysis."""
        if not self.readings:
            return PatternAnalysis()

        hourly_pattern, hourly_counts = self.calculate_hourly_pattern()
        weekday_pattern, weekday_counts = self.calculate_weekday_pattern()
        peak_hours, low_hours = self.find_extreme_hours(hourly_pattern)

        return PatternAnalysis(
            hourly_pattern=hourly_pattern,
            weekday_pattern=weekday_pattern,
            hourly_counts=hourly_counts,
            weekday_counts=weekday_counts,
            peak_hours=peak_hours,
            low_hours=low_hours,
            trends=Trends(
                overall=self.classify_overall_trend(),
                recent_week=self.classify_recent_week_trend(),
            ),
        )


def analyze_patterns(
    readings: Sequence[Reading],
    config: Optional[AnalysisConfig] = None,
    now: Optional[datetime] = None
) -> PatternAnalysis:
    """Compute PatternAnalysis for a reading set."""
    return PatternAnalyzer(readings, config, now).analyze()
