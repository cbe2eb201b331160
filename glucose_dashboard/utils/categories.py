"""
Categorization of glucose values, hours and period labels.

These mappings back the table badges, calendar days, heatmap cells,
distribution chart and the CSV export status column.
"""

from typing import Dict, Iterable, List, Optional

from glucose_dashboard.config import GlucoseThresholds
from glucose_dashboard.reading import Reading

# Status labels (table, calendar, distribution, export)
STATUS_LOW = 'Baixa'
STATUS_NORMAL = 'Normal'
STATUS_ELEVATED = 'Elevada'
STATUS_HIGH = 'Alta'
STATUS_LABELS = (STATUS_LOW, STATUS_NORMAL, STATUS_ELEVATED, STATUS_HIGH)

# Heatmap bands
BAND_LOW = 'Baixa'
BAND_IDEAL = 'Ideal'
BAND_NORMAL = 'Normal'
BAND_ELEVATED = 'Elevada'
BAND_HIGH = 'Alta'
BAND_VERY_HIGH = 'Muito Alta'
HEATMAP_BANDS = (BAND_LOW, BAND_IDEAL, BAND_NORMAL, BAND_ELEVATED, BAND_HIGH, BAND_VERY_HIGH)

# Day parts
DAY_PARTS = ('manhã', 'tarde', 'noite')

WEEKDAY_NAMES = ('Domingo', 'Segunda', 'Terça', 'Quarta', 'Quinta', 'Sexta', 'Sábado')
WEEKDAY_ABBREVIATIONS = ('Dom', 'Seg', 'Ter', 'Qua', 'Qui', 'Sex', 'Sáb')

# Meal periods
BEFORE_MEALS = 'before_meals'
AFTER_MEALS = 'after_meals'
MORNING_FASTING = 'morning_fasting'
AFTER_BREAKFAST = 'after_breakfast'
BEFORE_LUNCH = 'before_lunch'
AFTER_LUNCH = 'after_lunch'
BEFORE_DINNER = 'before_dinner'
AFTER_DINNER = 'after_dinner'
NIGHT_TIME = 'night_time'
OTHER = 'other'

_BEFORE_KEYWORDS = ('jejum', 'antes')
_AFTER_KEYWORDS = ('após', 'apos', 'depois', 'pós')


def classify_glucose(
    value: float,
    thresholds: Optional[GlucoseThresholds] = None
) -> str:
    """Get the status label for a glucose value.

    Args:
        value: Glucose value in mg/dL.
        thresholds: Optional custom thresholds. Uses defaults if None.

    Returns:
        One of Baixa (<70), Normal (<=130), Elevada (<=180) or Alta.
    """
    if thresholds is None:
        thresholds = GlucoseThresholds()

    if value < thresholds.low:
        return STATUS_LOW
    elif value <= thresholds.normal_high:
        return STATUS_NORMAL
    elif value <= thresholds.target_high:
        return STATUS_ELEVATED
    return STATUS_HIGH


def classify_heatmap_band(
    value: float,
    thresholds: Optional[GlucoseThresholds] = None
) -> str:
    """Get the finer-grained heatmap band for an average glucose value."""
    if thresholds is None:
        thresholds = GlucoseThresholds()

    if value < thresholds.low:
        return BAND_LOW
    elif value <= thresholds.ideal_high:
        return BAND_IDEAL
    elif value <= thresholds.tight_high:
        return BAND_NORMAL
    elif value <= thresholds.target_high:
        return BAND_ELEVATED
    elif value <= thresholds.very_high:
        return BAND_HIGH
    return BAND_VERY_HIGH


def classify_day_part(hour: int) -> str:
    """Map an hour to manhã (06-11), tarde (12-17) or noite (18-05)."""
    if 6 <= hour < 12:
        return 'manhã'
    if 12 <= hour < 18:
        return 'tarde'
    return 'noite'


def classify_meal_period(period: Optional[str], hour: int) -> str:
    """Classify a reading relative to meals.

    The explicit period label wins; the hour window is used otherwise.
    Overlapping windows resolve to the first match (8h is morning fasting,
    19h is before dinner).
    """
    label = (period or '').lower()

    if any(keyword in label for keyword in _BEFORE_KEYWORDS):
        return BEFORE_MEALS
    if any(keyword in label for keyword in _AFTER_KEYWORDS):
        return AFTER_MEALS

    if 6 <= hour <= 8:
        return MORNING_FASTING
    if 8 <= hour <= 10:
        return AFTER_BREAKFAST
    if 11 <= hour <= 12:
        return BEFORE_LUNCH
    if 13 <= hour <= 15:
        return AFTER_LUNCH
    if 17 <= hour <= 19:
        return BEFORE_DINNER
    if 19 <= hour <= 21:
        return AFTER_DINNER
    if hour >= 22 or hour <= 5:
        return NIGHT_TIME
    return OTHER


def status_distribution(
    readings: Iterable[Reading],
    thresholds: Optional[GlucoseThresholds] = None
) -> List[Dict[str, object]]:
    """Count readings per status.

    Returns:
        One entry per status, in display order, with label, count and
        percentage (rounded to whole numbers like the chart labels).
    """
    counts = {label: 0 for label in STATUS_LABELS}
    for reading in readings:
        counts[classify_glucose(reading.glucose, thresholds)] += 1

    total = sum(counts.values())
    return [
        {
            'label': label,
            'count': count,
            'percentage': round(count / total * 100) if total else 0,
        }
        for label, count in counts.items()
    ]
