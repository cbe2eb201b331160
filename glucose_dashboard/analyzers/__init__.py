"""Analyzers for glucose statistics, patterns, recommendations and insights."""

from glucose_dashboard.analyzers.glucose import GlucoseAnalyzer, compute_stats
from glucose_dashboard.analyzers.patterns import PatternAnalyzer, analyze_patterns
from glucose_dashboard.analyzers.recommendations import (
    RecommendationGenerator,
    generate_recommendations,
)
from glucose_dashboard.analyzers.insights import (
    InsightGenerator,
    generate_insights,
    build_pattern_report,
    daily_metrics,
    heatmap_grid,
    day_part_stats,
)

__all__ = [
    "GlucoseAnalyzer",
    "compute_stats",
    "PatternAnalyzer",
    "analyze_patterns",
    "RecommendationGenerator",
    "generate_recommendations",
    "InsightGenerator",
    "generate_insights",
    "build_pattern_report",
    "daily_metrics",
    "heatmap_grid",
    "day_part_stats",
]
