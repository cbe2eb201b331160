"""
Plotly Visualizer - Interactive charts for the Streamlit dashboard.

Provides all the interactive chart functions for the web app.
"""

import pandas as pd
import plotly.graph_objects as go
from typing import Optional, Sequence, List, Tuple

from glucose_dashboard.config import AnalysisConfig
from glucose_dashboard.metrics.glucose_stats import GlucoseStats
from glucose_dashboard.metrics.pattern_analysis import PatternAnalysis
from glucose_dashboard.reading import Reading
from glucose_dashboard.utils.categories import (
    status_distribution,
    WEEKDAY_ABBREVIATIONS,
    WEEKDAY_NAMES,
)
from glucose_dashboard.utils.colors import (
    get_reference_lines,
    get_glucose_color,
    get_heatmap_color,
    STATUS_COLORS,
    TIME_IN_RANGE_COLORS,
)
from glucose_dashboard.utils.smoothing import rolling_smooth

HEATMAP_COLORSCALE = [
    [0.0, '#ef4444'],    # <70
    [0.23, '#22c55e'],   # 70-100
    [0.37, '#86efac'],   # 100-140
    [0.5, '#f59e0b'],    # 140-180
    [0.75, '#fb923c'],   # 180-250
    [1.0, '#dc2626'],    # >250
]


class PlotlyVisualizer:
    """Interactive Plotly visualizations for Streamlit.

    Provides interactive charts with consistent styling.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """Initialize visualizer.

        Args:
            config: Optional configuration.
        """
        self.config = config or AnalysisConfig()
        self.font_family = self.config.visualization.font_family

    def _get_base_layout(self, height: int = 400, **kwargs) -> dict:
        """Get base layout for consistent styling."""
        return {
            'height': height,
            'margin': dict(l=50, r=30, t=50, b=30),
            'paper_bgcolor': 'rgba(0,0,0,0)',
            'plot_bgcolor': 'rgba(0,0,0,0)',
            'font': dict(family=self.font_family, size=12),
            'hoverlabel': dict(font_size=12, bordercolor='rgba(128,128,128,0.3)'),
            **kwargs
        }

    def _add_glucose_zones(self, fig: go.Figure):
        """Add glucose reference lines to a figure."""
        for value, color, label in get_reference_lines(self.config.glucose):
            fig.add_hline(
                y=value,
                line_dash='dash',
                line_color=color,
                opacity=0.6,
                annotation_text=label,
                annotation_position='top left',
            )

    # =========================================================================
    # TIME SERIES
    # =========================================================================

    def create_time_series(
        self,
        readings: Sequence[Reading],
        smoothing: Optional[int] = None,
        height: int = 450,
    ) -> go.Figure:
        """Readings over time with reference lines and a moving average.

        Args:
            readings: Readings in any order.
            smoothing: Moving-average window in readings. Defaults to config.
            height: Chart height.

        Returns:
            Plotly Figure.
        """
        fig = go.Figure()
        if smoothing is None:
            smoothing = self.config.visualization.rolling_window

        ordered = sorted(readings, key=lambda r: r.timestamp)
        if ordered:
            df = pd.DataFrame({
                'timestamp': [r.timestamp for r in ordered],
                'glucose_mg_dl': [r.glucose for r in ordered],
                'period': [r.period for r in ordered],
                'color': [get_glucose_color(r.glucose, self.config.glucose) for r in ordered],
            })

            fig.add_trace(go.Scatter(
                x=df['timestamp'],
                y=df['glucose_mg_dl'],
                name='Glicemia',
                mode='lines+markers',
                line=dict(color='#6366f1', width=1.5),
                marker=dict(color=df['color'], size=7),
                customdata=df['period'],
                hovertemplate='%{x|%d/%m %H:%M}<br><b>%{y:.0f}</b> mg/dL<br>%{customdata}<extra></extra>'
            ))

            if smoothing > 1 and len(df) >= smoothing:
                fig.add_trace(go.Scatter(
                    x=df['timestamp'],
                    y=rolling_smooth(df['glucose_mg_dl'], window=smoothing),
                    name=f'Média móvel ({smoothing})',
                    mode='lines',
                    line=dict(color='#94a3b8', width=2, dash='dot'),
                    hovertemplate='%{x|%d/%m %H:%M}<br>%{y:.0f} mg/dL<extra></extra>'
                ))

            self._add_glucose_zones(fig)

        fig.update_layout(
            **self._get_base_layout(height=height),
            legend=dict(orientation='h', yanchor='bottom', y=1.02, xanchor='right', x=1),
            yaxis_title='Glicemia (mg/dL)',
        )
        fig.update_xaxes(showgrid=True, gridcolor='rgba(128,128,128,0.15)')
        fig.update_yaxes(showgrid=True, gridcolor='rgba(128,128,128,0.15)')

        return fig

    # =========================================================================
    # PATTERN CHARTS
    # =========================================================================

    def _slot_bar(
        self,
        labels: List[str],
        means: Sequence[Optional[float]],
        highlight: Sequence[int],
        low: Sequence[int],
        title: str,
        height: int,
    ) -> go.Figure:
        colors = []
        for slot in range(len(means)):
            if slot in highlight:
                colors.append('#ef4444')
            elif slot in low:
                colors.append('#3b82f6')
            else:
                colors.append('#6366f1')

        fig = go.Figure(go.Bar(
            x=labels,
            y=[mean if mean is not None else 0 for mean in means],
            marker_color=colors,
            customdata=['sem dados' if mean is None else '' for mean in means],
            hovertemplate='%{x}<br><b>%{y:.0f}</b> mg/dL %{customdata}<extra></extra>'
        ))
        self._add_glucose_zones(fig)
        fig.update_layout(
            **self._get_base_layout(height=height),
            title=dict(text=title, font=dict(size=14)),
            yaxis_title='Média (mg/dL)',
            bargap=0.15,
        )
        return fig

    def create_hourly_pattern_chart(self, patterns: PatternAnalysis, height: int = 350) -> go.Figure:
        """Mean glucose per hour; peak hours in red, low hours in blue."""
        return self._slot_bar(
            [f"{hour:02d}h" for hour in range(len(patterns.hourly_pattern))],
            patterns.hourly_pattern,
            patterns.peak_hours,
            patterns.low_hours,
            'Média por horário',
            height,
        )

    def create_weekday_pattern_chart(self, patterns: PatternAnalysis, height: int = 350) -> go.Figure:
        """Mean glucose per weekday, Sunday first."""
        return self._slot_bar(
            list(WEEKDAY_NAMES),
            patterns.weekday_pattern,
            (),
            (),
            'Média por dia da semana',
            height,
        )

    def create_heatmap(
        self,
        means: Sequence[Sequence[Optional[float]]],
        counts: Sequence[Sequence[int]],
        height: int = 380,
    ) -> go.Figure:
        """Weekday x hour heatmap of mean glucose.

        Args:
            means: 7 rows (Sunday first) of 24 hourly means, None where empty.
            counts: Matching reading counts.
            height: Chart height.

        Returns:
            Plotly Figure.
        """
        z = [[mean for mean in row] for row in means]
        text = [
            [f"{mean:.0f} mg/dL ({count})" if mean is not None else 'sem dados'
             for mean, count in zip(mean_row, count_row)]
            for mean_row, count_row in zip(means, counts)
        ]
        fig = go.Figure(go.Heatmap(
            z=z,
            x=[f"{hour:02d}h" for hour in range(24)],
            y=list(WEEKDAY_ABBREVIATIONS),
            colorscale=HEATMAP_COLORSCALE,
            zmin=40,
            zmax=300,
            text=text,
            hovertemplate='%{y} %{x}<br>%{text}<extra></extra>',
            hoverongaps=False,
            xgap=2,
            ygap=2,
        ))
        fig.update_layout(
            **self._get_base_layout(height=height),
            title=dict(text='Mapa de calor - padrões semanais', font=dict(size=14)),
            yaxis=dict(autorange='reversed'),
        )
        return fig

    # =========================================================================
    # DISTRIBUTION CHARTS
    # =========================================================================

    def create_donut_chart(
        self,
        labels: List[str],
        values: List[float],
        colors: List[str],
        title: str = 'Tempo no alvo',
        height: int = 300,
    ) -> go.Figure:
        """Create donut chart.

        Args:
            labels: Zone labels.
            values: Values for each zone.
            colors: Colors for each zone.
            title: Chart title.
            height: Chart height.

        Returns:
            Plotly Figure.
        """
        fig = go.Figure(data=[go.Pie(
            labels=labels,
            values=values,
            hole=0.55,
            marker_colors=colors,
            textinfo='percent',
            textposition='inside',
            sort=False,
            hovertemplate='%{label}<br><b>%{value:.1f}</b><extra></extra>'
        )])

        fig.update_layout(
            **self._get_base_layout(height=height),
            title=dict(text=title, font=dict(size=14)),
            showlegend=True,
            legend=dict(orientation='h', y=-0.1),
        )

        return fig

    def _time_in_range_bands(self, stats: GlucoseStats) -> List[Tuple[str, str, float]]:
        t = self.config.glucose
        tir = stats.time_in_range
        return [
            ('low', f"Baixa (<{t.target_low:.0f})", tir.low),
            ('target', f"Alvo ({t.target_low:.0f}-{t.target_high:.0f})", tir.target),
            ('high', f"Elevada ({t.target_high:.0f}-{t.very_high:.0f})", tir.high),
            ('very_high', f"Muito alta (>{t.very_high:.0f})", tir.very_high),
        ]

    def create_time_in_range_chart(self, stats: GlucoseStats, height: int = 160) -> go.Figure:
        """Single stacked horizontal bar of the four time-in-range bands."""
        fig = go.Figure()
        for key, label, value in self._time_in_range_bands(stats):
            fig.add_trace(go.Bar(
                x=[value],
                y=['TIR'],
                name=label,
                orientation='h',
                marker_color=TIME_IN_RANGE_COLORS[key],
                text=[f"{value:.0f}%"] if value >= 5 else None,
                textposition='inside',
                hovertemplate=f'{label}<br><b>%{{x:.1f}}%</b><extra></extra>'
            ))
        fig.update_layout(
            **self._get_base_layout(height=height),
            barmode='stack',
            xaxis=dict(range=[0, 100], ticksuffix='%'),
            yaxis=dict(showticklabels=False),
            legend=dict(orientation='h', y=-0.4),
        )
        return fig

    def create_status_distribution_chart(
        self,
        readings: Sequence[Reading],
        height: int = 320,
    ) -> go.Figure:
        """Donut of reading counts per status (Baixa/Normal/Elevada/Alta)."""
        t = self.config.glucose
        ranges = {
            'Baixa': f"<{t.low:.0f}",
            'Normal': f"{t.low:.0f}-{t.normal_high:.0f}",
            'Elevada': f"{t.normal_high:.0f}-{t.target_high:.0f}",
            'Alta': f">{t.target_high:.0f}",
        }
        distribution = [d for d in status_distribution(readings, t) if d['count'] > 0]
        return self.create_donut_chart(
            labels=[f"{d['label']} ({ranges[d['label']]})" for d in distribution],
            values=[d['count'] for d in distribution],
            colors=[STATUS_COLORS[d['label']] for d in distribution],
            title='Distribuição das leituras',
            height=height,
        )

    def create_heatmap_legend(self) -> List[Tuple[str, str]]:
        """(label, color) pairs for the heatmap bands, low to high."""
        t = self.config.glucose
        samples = [
            (f"Baixa (<{t.low:.0f})", t.low - 1),
            (f"Ideal ({t.low:.0f}-{t.ideal_high:.0f})", t.ideal_high),
            (f"Normal ({t.ideal_high:.0f}-{t.tight_high:.0f})", t.tight_high),
            (f"Elevada ({t.tight_high:.0f}-{t.target_high:.0f})", t.target_high),
            (f"Alta ({t.target_high:.0f}-{t.very_high:.0f})", t.very_high),
            (f"Muito Alta (>{t.very_high:.0f})", t.very_high + 1),
        ]
        return [(label, get_heatmap_color(value, t)) for label, value in samples]
