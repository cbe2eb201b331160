"""
Recommendation Generator - Rule-based findings from stats and patterns.

Rules are evaluated independently and in a fixed order; the result is sorted
by descending priority while keeping rule order inside each priority.
"""

from typing import Optional, Sequence, List, Callable

from glucose_dashboard.config import AnalysisConfig
from glucose_dashboard.metrics.glucose_stats import GlucoseStats
from glucose_dashboard.metrics.pattern_analysis import PatternAnalysis
from glucose_dashboard.metrics.recommendation import SmartRecommendation
from glucose_dashboard.reading import Reading


def format_hours(hours: Sequence[int]) -> str:
    """Format hours the way the dashboard prints them: "7h, 12h"."""
    return ', '.join(f"{hour}h" for hour in hours)


class RecommendationGenerator:
    """Generate prioritized recommendations."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    @property
    def rules(self) -> List[Callable[[GlucoseStats, PatternAnalysis], Optional[SmartRecommendation]]]:
        """Rules in evaluation order."""
        return [
            self._hypoglycemia_risk,
            self._low_time_in_target,
            self._high_variability,
            self._peak_hours,
            self._excellent_control,
            self._improving_week,
        ]

    def _hypoglycemia_risk(self, stats: GlucoseStats, patterns: PatternAnalysis) -> Optional[SmartRecommendation]:
        limit = self.config.recommendations.max_low_percent
        low = stats.time_in_range.low
        if low <= limit:
            return None
        return SmartRecommendation(
            type='warning',
            title='Alto risco de hipoglicemia',
            description=(
                f"{low:.1f}% do tempo abaixo de {self.config.glucose.target_low:.0f} mg/dL. "
                "Considere ajustar medicação ou horários das refeições."
            ),
            priority='high',
            actionable=True,
        )

    def _low_time_in_target(self, stats: GlucoseStats, patterns: PatternAnalysis) -> Optional[SmartRecommendation]:
        goal = self.config.recommendations.min_target_percent
        target = stats.time_in_range.target
        if target >= goal:
            return None
        return SmartRecommendation(
            type='suggestion',
            title='Melhore o tempo no alvo',
            description=f"Apenas {target:.1f}% do tempo na faixa ideal. Meta: >{goal:.0f}%.",
            priority='medium',
            actionable=True,
        )

    def _high_variability(self, stats: GlucoseStats, patterns: PatternAnalysis) -> Optional[SmartRecommendation]:
        cv = stats.coefficient_of_variation
        if cv <= self.config.analysis.cv_target:
            return None
        return SmartRecommendation(
            type='warning',
            title='Alta variabilidade glicêmica',
            description=f"CV de {cv:.1f}%. Busque maior consistência na rotina.",
            priority='high',
            actionable=True,
        )

    def _peak_hours(self, stats: GlucoseStats, patterns: PatternAnalysis) -> Optional[SmartRecommendation]:
        if not patterns.peak_hours:
            return None
        return SmartRecommendation(
            type='suggestion',
            title='Horários de pico identificados',
            description=(
                f"Valores mais altos às {format_hours(patterns.peak_hours)}. "
                "Monitore atividades nesses horários."
            ),
            priority='medium',
            actionable=True,
        )

    def _excellent_control(self, stats: GlucoseStats, patterns: PatternAnalysis) -> Optional[SmartRecommendation]:
        score = stats.control_score
        if score <= self.config.recommendations.excellent_control_score:
            return None
        return SmartRecommendation(
            type='positive',
            title='Excelente controle glicêmico!',
            description=f"Score de {score:.0f}/100. Continue com a rotina atual.",
            priority='low',
            actionable=False,
        )

    def _improving_week(self, stats: GlucoseStats, patterns: PatternAnalysis) -> Optional[SmartRecommendation]:
        if patterns.trends.recent_week != 'improving':
            return None
        return SmartRecommendation(
            type='positive',
            title='Tendência de melhora',
            description='Seus valores estão melhorando na última semana. Parabéns!',
            priority='low',
            actionable=False,
        )

    def generate(
        self,
        readings: Sequence[Reading],
        stats: GlucoseStats,
        patterns: PatternAnalysis
    ) -> List[SmartRecommendation]:
        """Apply every rule and order the findings by priority.

        Args:
            readings: The analyzed readings.
            stats: Output of the statistics engine.
            patterns: Output of the pattern analyzer.

        Returns:
            Recommendations, high priority first. Empty when there are no
            readings and the stats are the zero value.
        """
        if not readings and stats == GlucoseStats():
            return []

        found = [
            recommendation
            for recommendation in (rule(stats, patterns) for rule in self.rules)
            if recommendation is not None
        ]
        return sorted(found, key=lambda r: r.rank, reverse=True)


def generate_recommendations(
    readings: Sequence[Reading],
    stats: GlucoseStats,
    patterns: PatternAnalysis,
    config: Optional[AnalysisConfig] = None
) -> List[SmartRecommendation]:
    """Generate the prioritized recommendation list."""
    return RecommendationGenerator(config).generate(readings, stats, patterns)
