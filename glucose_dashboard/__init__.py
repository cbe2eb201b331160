"""
Glucose Dashboard - Analysis of glucose self-monitoring spreadsheets.

This package provides modular components for:
- Loading readings from a published spreadsheet CSV
- Computing time in range, variability and a composite control score
- Detecting hour-of-day and weekday patterns and trends
- Generating prioritized recommendations, insights and reports
- Visualizing readings in an interactive Streamlit dashboard
"""

from glucose_dashboard.config import AnalysisConfig, load_config
from glucose_dashboard.reading import Reading
from glucose_dashboard.analyzers import (
    compute_stats,
    analyze_patterns,
    generate_recommendations,
)

__version__ = "1.0.0"
__all__ = [
    "AnalysisConfig",
    "load_config",
    "Reading",
    "compute_stats",
    "analyze_patterns",
    "generate_recommendations",
]
