"""
Insight Generator - Recent-week insights and the pattern report.

Backs the insight cards, the calendar, the weekday x hour heatmap and the
exportable pattern report. All functions are pure given ``now``.
"""

import pandas as pd
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional, Sequence, List, Dict, Tuple

from glucose_dashboard.config import AnalysisConfig
from glucose_dashboard.metrics.daily_metrics import DailyMetrics
from glucose_dashboard.metrics.pattern_analysis import HOURS_PER_DAY, DAYS_PER_WEEK
from glucose_dashboard.reading import Reading, naive_local
from glucose_dashboard.utils.categories import (
    classify_glucose,
    classify_day_part,
    classify_meal_period,
    DAY_PARTS,
    WEEKDAY_NAMES,
    BEFORE_MEALS,
    AFTER_MEALS,
    MORNING_FASTING,
    AFTER_BREAKFAST,
    AFTER_LUNCH,
    AFTER_DINNER,
)
from glucose_dashboard.utils.statistics import safe_mean


@dataclass(frozen=True)
class Insight:
    """A short finding for the insight cards.

    Attributes:
        kind: "warning", "info" or "success".
        title: Headline with the key figure.
        description: One sentence of context.
    """
    kind: str
    title: str
    description: str


@dataclass(frozen=True)
class SlotSummary:
    """Average and count for an hour or weekday slot."""
    slot: int
    label: str
    average: float
    count: int


@dataclass(frozen=True)
class MealSummary:
    average: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class WeeklyAverage:
    label: str
    start: date
    end: date
    average: float
    count: int


@dataclass(frozen=True)
class DayPartSummary:
    day_part: str
    count: int
    average: Optional[float] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None


@dataclass(frozen=True)
class PatternReport:
    """Structured pattern report, exported to Excel by the report layer."""
    generated_at: datetime
    total_readings: int
    peak_hours: Tuple[SlotSummary, ...] = ()
    peak_days: Tuple[SlotSummary, ...] = ()
    before_meals: MealSummary = field(default_factory=MealSummary)
    after_meals: MealSummary = field(default_factory=MealSummary)
    highest_readings: Tuple[Reading, ...] = ()
    lowest_readings: Tuple[Reading, ...] = ()
    weekly_trends: Tuple[WeeklyAverage, ...] = ()


def _recent(readings: Sequence[Reading], now: datetime, days: int) -> List[Reading]:
    start = now - timedelta(days=days)
    return [r for r in readings if start <= r.timestamp <= now]


def _plural(count: int, word: str) -> str:
    return f"{word}s" if count > 1 else word


class InsightGenerator:
    """Generate insight cards and the pattern report."""

    def __init__(
        self,
        readings: Sequence[Reading],
        config: Optional[AnalysisConfig] = None,
        now: Optional[datetime] = None
    ):
        self.readings = tuple(readings)
        self.config = config or AnalysisConfig()
        self.now = naive_local(now or datetime.now())

    # =========================================================================
    # INSIGHT CARDS (last N days)
    # =========================================================================

    def recent_readings(self) -> List[Reading]:
        """Readings inside the insight window, in chronological order."""
        recent = _recent(self.readings, self.now, self.config.report.insight_window_days)
        return sorted(recent, key=lambda r: r.timestamp)

    def _hypoglycemia_insight(self, recent: List[Reading]) -> Optional[Insight]:
        limit = self.config.glucose.low
        count = sum(1 for r in recent if r.glucose < limit)
        if count == 0:
            return None
        return Insight(
            kind='warning',
            title=f"{count} {_plural(count, 'episódio')} de hipoglicemia",
            description=(
                f"Detectados nos últimos {self.config.report.insight_window_days} dias. "
                "Considere ajustar a medicação ou alimentação."
            ),
        )

    def _high_readings_insight(self, recent: List[Reading]) -> Optional[Insight]:
        limit = self.config.glucose.target_high
        count = sum(1 for r in recent if r.glucose > limit)
        if count == 0:
            return None
        return Insight(
            kind='warning',
            title=f"{count} {_plural(count, 'leitura')} acima de {limit:.0f} mg/dL",
            description='Monitore a alimentação e considere ajustes na medicação.',
        )

    def _highest_reading_insight(self, recent: List[Reading]) -> Optional[Insight]:
        if not recent:
            return None
        highest = max(recent, key=lambda r: r.glucose)
        return Insight(
            kind='info',
            title=f"Maior valor: {highest.glucose:g} mg/dL",
            description=(
                f"Registrado em {highest.day.strftime(self.config.source.export_date_format)} "
                f"às {highest.time}"
            ),
        )

    def _period_insight(self, recent: List[Reading]) -> Optional[Insight]:
        """Day part with the highest average, matched on the period label."""
        averages = []
        for day_part in DAY_PARTS:
            values = [r.glucose for r in recent if day_part in (r.period or '').lower()]
            if values:
                averages.append((day_part, safe_mean(values), len(values)))

        if not averages:
            return None

        day_part, average, count = max(averages, key=lambda item: item[1])
        return Insight(
            kind='info',
            title=f"Período com maior média: {day_part.capitalize()}",
            description=f"Média de {average:.0f} mg/dL ({count} leituras)",
        )

    def _trend_insight(self, recent: List[Reading]) -> Optional[Insight]:
        settings = self.config.report
        if len(recent) < settings.min_insight_trend_readings:
            return None

        half = len(recent) // 2
        first = safe_mean([r.glucose for r in recent[:half]])
        second = safe_mean([r.glucose for r in recent[half:]])
        difference = second - first

        if abs(difference) <= settings.insight_trend_threshold:
            return None

        rising = difference > 0
        return Insight(
            kind='warning' if rising else 'success',
            title=f"Tendência {'crescente' if rising else 'decrescente'}",
            description=f"Variação de {abs(difference):.0f} mg/dL na média dos últimos dias",
        )

    def generate_insights(self) -> List[Insight]:
        """Build the insight cards for the recent window."""
        recent = self.recent_readings()
        candidates = [
            self._hypoglycemia_insight(recent),
            self._high_readings_insight(recent),
            self._highest_reading_insight(recent),
            self._period_insight(recent),
            self._trend_insight(recent),
        ]
        return [insight for insight in candidates if insight is not None]

    # =========================================================================
    # PATTERN REPORT
    # =========================================================================

    def _frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                'hour': [r.hour for r in self.readings],
                'weekday': [r.weekday for r in self.readings],
                'glucose_mg_dl': [float(r.glucose) for r in self.readings],
            },
            columns=['hour', 'weekday', 'glucose_mg_dl'],
        )

    def rank_hours(self) -> List[SlotSummary]:
        """Hours ordered by reading count, then by mean (both descending)."""
        df = self._frame()
        if df.empty:
            return []
        grouped = df.groupby('hour')['glucose_mg_dl'].agg(average='mean', readings='count').reset_index()
        grouped = grouped.sort_values(
            ['readings', 'average'], ascending=[False, False], kind='mergesort'
        )
        return [
            SlotSummary(int(row.hour), f"{int(row.hour):02d}:00", float(row.average), int(row.readings))
            for row in grouped.head(self.config.report.report_hours).itertuples()
        ]

    def rank_weekdays(self) -> List[SlotSummary]:
        """Weekdays ordered by mean glucose, highest first."""
        df = self._frame()
        if df.empty:
            return []
        grouped = df.groupby('weekday')['glucose_mg_dl'].agg(average='mean', readings='count').reset_index()
        grouped = grouped.sort_values('average', ascending=False, kind='mergesort')
        return [
            SlotSummary(int(row.weekday), WEEKDAY_NAMES[int(row.weekday)], float(row.average), int(row.readings))
            for row in grouped.itertuples()
        ]

    def meal_patterns(self) -> Tuple[MealSummary, MealSummary]:
        """Before/after meal averages.

        Explicit period labels are preferred; hour windows are the fallback
        when no reading carries an explicit label.
        """
        groups: Dict[str, List[float]] = {}
        for r in self.readings:
            groups.setdefault(classify_meal_period(r.period, r.hour), []).append(r.glucose)

        before = groups.get(BEFORE_MEALS) or groups.get(MORNING_FASTING) or []
        after = groups.get(AFTER_MEALS) or (
            groups.get(AFTER_BREAKFAST, [])
            + groups.get(AFTER_LUNCH, [])
            + groups.get(AFTER_DINNER, [])
        )
        return (
            MealSummary(safe_mean(before), len(before)),
            MealSummary(safe_mean(after), len(after)),
        )

    def extreme_readings(self) -> Tuple[Tuple[Reading, ...], Tuple[Reading, ...]]:
        """Highest readings (descending) and lowest readings (ascending)."""
        n = self.config.report.extreme_readings
        by_value = sorted(self.readings, key=lambda r: r.glucose, reverse=True)
        highest = tuple(by_value[:n])
        lowest = tuple(reversed(by_value[-n:])) if by_value else ()
        return highest, lowest

    def weekly_trends(self) -> List[WeeklyAverage]:
        """Average per 7-day block going back from ``now``; empty weeks are skipped."""
        fmt = '%d/%m'
        trends = []
        for i in range(self.config.report.weekly_trend_weeks):
            end = self.now - timedelta(days=7 * i)
            start = end - timedelta(days=7)
            values = [r.glucose for r in self.readings if start < r.timestamp <= end]
            if not values:
                continue
            trends.append(WeeklyAverage(
                label=f"{(start + timedelta(days=1)).strftime(fmt)} - {end.strftime(fmt)}",
                start=(start + timedelta(days=1)).date(),
                end=end.date(),
                average=safe_mean(values),
                count=len(values),
            ))
        return trends

    def build_pattern_report(self) -> PatternReport:
        before, after = self.meal_patterns()
        highest, lowest = self.extreme_readings()
        return PatternReport(
            generated_at=self.now,
            total_readings=len(self.readings),
            peak_hours=tuple(self.rank_hours()),
            peak_days=tuple(self.rank_weekdays()),
            before_meals=before,
            after_meals=after,
            highest_readings=highest,
            lowest_readings=lowest,
            weekly_trends=tuple(self.weekly_trends()),
        )

    # =========================================================================
    # CALENDAR / HEATMAP
    # =========================================================================

    def daily_metrics(self) -> List[DailyMetrics]:
        """One summary per calendar day, oldest first."""
        by_day: Dict[date, List[float]] = {}
        for r in self.readings:
            by_day.setdefault(r.day, []).append(r.glucose)

        return [
            DailyMetrics(
                date=day,
                count=len(values),
                average=safe_mean(values),
                minimum=min(values),
                maximum=max(values),
                status=classify_glucose(round(safe_mean(values)), self.config.glucose),
            )
            for day, values in sorted(by_day.items())
        ]

    def heatmap_grid(self) -> Tuple[Tuple[Tuple[Optional[float], ...], ...], Tuple[Tuple[int, ...], ...]]:
        """Mean glucose per weekday (rows, 0=Sunday) and hour (columns).

        Returns:
            Tuple of (means, counts); means are None where there is no data.
        """
        sums = [[0.0] * HOURS_PER_DAY for _ in range(DAYS_PER_WEEK)]
        counts = [[0] * HOURS_PER_DAY for _ in range(DAYS_PER_WEEK)]
        for r in self.readings:
            sums[r.weekday][r.hour] += r.glucose
            counts[r.weekday][r.hour] += 1

        means = tuple(
            tuple(s / c if c else None for s, c in zip(sum_row, count_row))
            for sum_row, count_row in zip(sums, counts)
        )
        return means, tuple(tuple(row) for row in counts)

    def day_part_stats(self) -> List[DayPartSummary]:
        """Average, minimum and maximum per day part, classified by hour."""
        groups: Dict[str, List[float]] = {part: [] for part in DAY_PARTS}
        for r in self.readings:
            groups[classify_day_part(r.hour)].append(r.glucose)

        return [
            DayPartSummary(
                day_part=part,
                count=len(values),
                average=safe_mean(values) if values else None,
                minimum=min(values) if values else None,
                maximum=max(values) if values else None,
            )
            for part, values in groups.items()
        ]


def generate_insights(
    readings: Sequence[Reading],
    config: Optional[AnalysisConfig] = None,
    now: Optional[datetime] = None
) -> List[Insight]:
    return InsightGenerator(readings, config, now).generate_insights()


def build_pattern_report(
    readings: Sequence[Reading],
    config: Optional[AnalysisConfig] = None,
    now: Optional[datetime] = None
) -> PatternReport:
    return InsightGenerator(readings, config, now).build_pattern_report()


def daily_metrics(
    readings: Sequence[Reading],
    config: Optional[AnalysisConfig] = None
) -> List[DailyMetrics]:
    return InsightGenerator(readings, config).daily_metrics()


def heatmap_grid(
    readings: Sequence[Reading]
) -> Tuple[Tuple[Tuple[Optional[float], ...], ...], Tuple[Tuple[int, ...], ...]]:
    return InsightGenerator(readings).heatmap_grid()


def day_part_stats(readings: Sequence[Reading]) -> List[DayPartSummary]:
    return InsightGenerator(readings).day_part_stats()
