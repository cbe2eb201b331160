from __future__ import annotations

import pytest

from glucose_dashboard.utils.categories import (
    AFTER_BREAKFAST,
    AFTER_DINNER,
    AFTER_LUNCH,
    AFTER_MEALS,
    BEFORE_DINNER,
    BEFORE_LUNCH,
    BEFORE_MEALS,
    MORNING_FASTING,
    NIGHT_TIME,
    OTHER,
    classify_day_part,
    classify_glucose,
    classify_heatmap_band,
    classify_meal_period,
    status_distribution,
)
from glucose_dashboard.utils.colors import (
    DANGER,
    EMPTY_CELL,
    SUCCESS,
    get_glucose_color,
    get_heatmap_color,
    get_reference_lines,
)


@pytest.mark.parametrize(
    "value, expected",
    [(69, 'Baixa'), (70, 'Normal'), (130, 'Normal'), (131, 'Elevada'), (180, 'Elevada'), (181, 'Alta')],
)
def test_classify_glucose(value, expected) -> None:
    assert classify_glucose(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (69, 'Baixa'),
        (100, 'Ideal'),
        (101, 'Normal'),
        (140, 'Normal'),
        (141, 'Elevada'),
        (180, 'Elevada'),
        (250, 'Alta'),
        (251, 'Muito Alta'),
    ],
)
def test_classify_heatmap_band(value, expected) -> None:
    assert classify_heatmap_band(value) == expected


@pytest.mark.parametrize(
    "hour, expected",
    [(5, 'noite'), (6, 'manhã'), (11, 'manhã'), (12, 'tarde'), (17, 'tarde'), (18, 'noite'), (23, 'noite')],
)
def test_classify_day_part(hour, expected) -> None:
    assert classify_day_part(hour) == expected


@pytest.mark.parametrize(
    "period, hour, expected",
    [
        ("manhã/jejum", 14, BEFORE_MEALS),
        ("Antes do almoço", 11, BEFORE_MEALS),
        ("Após almoço", 7, AFTER_MEALS),
        ("2h depois do jantar", 21, AFTER_MEALS),
        ("", 7, MORNING_FASTING),
        ("", 8, MORNING_FASTING),
        ("", 9, AFTER_BREAKFAST),
        ("", 12, BEFORE_LUNCH),
        ("", 14, AFTER_LUNCH),
        (None, 19, BEFORE_DINNER),
        (None, 20, AFTER_DINNER),
        (None, 23, NIGHT_TIME),
        (None, 3, NIGHT_TIME),
        (None, 16, OTHER),
    ],
)
def test_classify_meal_period(period, hour, expected) -> None:
    assert classify_meal_period(period, hour) == expected


def test_status_distribution(make_reading) -> None:
    readings = [make_reading(v) for v in (60, 100, 120, 150, 200)]
    distribution = status_distribution(readings)

    assert [d['label'] for d in distribution] == ['Baixa', 'Normal', 'Elevada', 'Alta']
    assert [d['count'] for d in distribution] == [1, 2, 1, 1]
    assert [d['percentage'] for d in distribution] == [20, 40, 20, 20]


def test_status_distribution_empty() -> None:
    assert all(d['count'] == 0 and d['percentage'] == 0 for d in status_distribution([]))


def test_colors() -> None:
    assert get_glucose_color(60) == DANGER
    assert get_glucose_color(100) == SUCCESS
    assert get_heatmap_color(None) == EMPTY_CELL
    assert get_heatmap_color(90) == SUCCESS
    assert [value for value, _, _ in get_reference_lines()] == [70, 130, 180]
