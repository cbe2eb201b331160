"""Metric dataclasses for analysis results."""

from glucose_dashboard.metrics.glucose_stats import GlucoseStats, TimeInRange
from glucose_dashboard.metrics.pattern_analysis import PatternAnalysis, Trends
from glucose_dashboard.metrics.recommendation import SmartRecommendation
from glucose_dashboard.metrics.daily_metrics import DailyMetrics

__all__ = [
    "GlucoseStats",
    "TimeInRange",
    "PatternAnalysis",
    "Trends",
    "SmartRecommendation",
    "DailyMetrics",
]
