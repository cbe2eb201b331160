"""
Report Generator - Text and structured report generation.

Generates the plain-text summary shown in the report tab and the
dictionary used for JSON downloads.
"""

from typing import Optional, Dict, Any, List, Sequence
from datetime import datetime

from glucose_dashboard.config import AnalysisConfig
from glucose_dashboard.metrics.glucose_stats import GlucoseStats
from glucose_dashboard.metrics.pattern_analysis import PatternAnalysis
from glucose_dashboard.metrics.recommendation import SmartRecommendation
from glucose_dashboard.analyzers.recommendations import format_hours
from glucose_dashboard.utils.categories import WEEKDAY_NAMES

TREND_LABELS = {
    'increasing': 'Em alta',
    'decreasing': 'Em queda',
    'improving': 'Melhorando',
    'worsening': 'Piorando',
    'stable': 'Estável',
}


class ReportGenerator:
    """Generate analysis reports.

    Reports are organized into three sections:
    - Statistics: averages, variability and time in range
    - Patterns: hourly/weekday highlights and trends
    - Recommendations: prioritized findings
    """

    def __init__(self, config: Optional[AnalysisConfig] = None, now: Optional[datetime] = None):
        """Initialize report generator.

        Args:
            config: Optional configuration.
            now: Generation timestamp. Defaults to the wall clock.
        """
        self.config = config or AnalysisConfig()
        self.now = now or datetime.now()

    def generate_text_report(
        self,
        stats: Optional[GlucoseStats] = None,
        patterns: Optional[PatternAnalysis] = None,
        recommendations: Optional[Sequence[SmartRecommendation]] = None,
    ) -> str:
        """Generate full text report.

        Args:
            stats: Statistics engine output.
            patterns: Pattern analyzer output.
            recommendations: Recommendation generator output.

        Returns:
            Formatted text report.
        """
        t = self.config.glucose
        lines = []
        lines.append("=" * 60)
        lines.append("RELATÓRIO DE GLICEMIA")
        lines.append(f"Gerado em: {self.now.strftime('%d/%m/%Y %H:%M')}")
        lines.append("=" * 60)
        lines.append("")

        if stats:
            lines.append("-" * 60)
            lines.append("ESTATÍSTICAS")
            lines.append("-" * 60)
            lines.append(f"  Registros: {stats.readings_count}")
            lines.append(f"  Média: {stats.average:.1f} mg/dL")
            lines.append(f"  Mediana: {stats.median:.1f} mg/dL")
            lines.append(f"  Desvio padrão: {stats.standard_deviation:.1f} mg/dL")
            lines.append(f"  CV: {stats.coefficient_of_variation:.1f}% (meta <{self.config.analysis.cv_target:.0f}%)")
            lines.append("")
            lines.append("  Tempo no alvo:")
            tir = stats.time_in_range
            lines.append(f"    Baixa (<{t.target_low:.0f}): {tir.low:.1f}%")
            lines.append(f"    Alvo ({t.target_low:.0f}-{t.target_high:.0f}): {tir.target:.1f}%")
            lines.append(f"    Elevada ({t.target_high:.0f}-{t.very_high:.0f}): {tir.high:.1f}%")
            lines.append(f"    Muito alta (>{t.very_high:.0f}): {tir.very_high:.1f}%")
            lines.append("")
            lines.append(f"  Score de variabilidade: {stats.variability_score:.0f}/100")
            lines.append(f"  Score de controle: {stats.control_score:.0f}/100")
            lines.append("")

        if patterns:
            lines.append("-" * 60)
            lines.append("PADRÕES")
            lines.append("-" * 60)
            lines.append(f"  Horários de pico: {format_hours(patterns.peak_hours) or 'nenhum'}")
            lines.append(f"  Horários de baixa: {format_hours(patterns.low_hours) or 'nenhum'}")
            weekdays = patterns.populated_weekdays
            if weekdays:
                highest = max(weekdays, key=lambda d: patterns.weekday_pattern[d])
                lines.append(
                    f"  Dia com maior média: {WEEKDAY_NAMES[highest]} "
                    f"({patterns.weekday_pattern[highest]:.0f} mg/dL)"
                )
            lines.append(f"  Tendência geral: {TREND_LABELS[patterns.trends.overall]}")
            lines.append(f"  Última semana: {TREND_LABELS[patterns.trends.recent_week]}")
            lines.append("")

        if recommendations:
            lines.append("-" * 60)
            lines.append("RECOMENDAÇÕES")
            lines.append("-" * 60)
            for recommendation in recommendations:
                lines.append(f"  [{recommendation.priority.upper()}] {recommendation.title}")
                lines.append(f"    {recommendation.description}")
            lines.append("")

        lines.append("=" * 60)
        lines.append("FIM DO RELATÓRIO")
        lines.append("=" * 60)

        return "\n".join(lines)

    def generate_summary_dict(
        self,
        stats: Optional[GlucoseStats] = None,
        patterns: Optional[PatternAnalysis] = None,
        recommendations: Optional[Sequence[SmartRecommendation]] = None,
    ) -> Dict[str, Any]:
        """Generate structured summary dictionary."""
        recommendation_list: List[Dict[str, Any]] = [
            r.to_dict() for r in (recommendations or [])
        ]
        return {
            'generated_at': self.now.isoformat(),
            'stats': stats.to_dict() if stats else None,
            'patterns': patterns.to_dict() if patterns else None,
            'recommendations': recommendation_list,
        }

    def get_interpretation(self, stats: GlucoseStats) -> Dict[str, str]:
        """Generate interpretive text for key metrics."""
        interpretations = {}

        cv_target = self.config.analysis.cv_target
        if stats.coefficient_of_variation <= cv_target:
            interpretations['cv'] = 'Variabilidade dentro da meta'
        else:
            interpretations['cv'] = 'Variabilidade acima da meta'

        goal = self.config.recommendations.min_target_percent
        if stats.time_in_range.target >= goal:
            interpretations['tir'] = f"Meta de tempo no alvo atingida (>{goal:.0f}%)"
        elif stats.time_in_range.target >= 50:
            interpretations['tir'] = 'Abaixo da meta, foque em reduzir altas e baixas'
        else:
            interpretations['tir'] = 'Muito abaixo da meta'

        return interpretations
