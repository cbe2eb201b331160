"""Visualization modules for the dashboard."""

from glucose_dashboard.visualizers.plotly_viz import PlotlyVisualizer

__all__ = ["PlotlyVisualizer"]
