from __future__ import annotations

from glucose_dashboard.analyzers.recommendations import (
    RecommendationGenerator,
    format_hours,
    generate_recommendations,
)
from glucose_dashboard.metrics import GlucoseStats, PatternAnalysis, TimeInRange, Trends


def _stats(low=0.0, target=90.0, cv=20.0, control=70.0) -> GlucoseStats:
    return GlucoseStats(
        average=120,
        coefficient_of_variation=cv,
        time_in_range=TimeInRange(low=low, target=target, high=100 - low - target),
        control_score=control,
        readings_count=10,
    )


def test_empty_input_gives_no_recommendations() -> None:
    assert generate_recommendations([], GlucoseStats(), PatternAnalysis()) == []


def test_high_priority_before_low(make_reading) -> None:
    result = generate_recommendations(
        [make_reading(60)],
        _stats(low=20, target=80, cv=10, control=90),
        PatternAnalysis(),
    )
    assert [r.title for r in result] == [
        'Alto risco de hipoglicemia',
        'Excelente controle glicêmico!',
    ]
    assert [r.priority for r in result] == ['high', 'low']


def test_order_within_priority_follows_rules(make_reading) -> None:
    patterns = PatternAnalysis(peak_hours=(7, 12), trends=Trends(recent_week='improving'))
    result = generate_recommendations(
        [make_reading(60)],
        _stats(low=20, target=50, cv=40, control=50),
        patterns,
    )
    assert [r.title for r in result] == [
        'Alto risco de hipoglicemia',
        'Alta variabilidade glicêmica',
        'Melhore o tempo no alvo',
        'Horários de pico identificados',
        'Tendência de melhora',
    ]


def test_thresholds_are_exclusive(make_reading) -> None:
    result = generate_recommendations(
        [make_reading(100)],
        _stats(low=10, target=70, cv=36, control=80),
        PatternAnalysis(),
    )
    assert result == []


def test_descriptions_embed_figures(make_reading) -> None:
    generator = RecommendationGenerator()
    result = generator.generate(
        [make_reading(100)],
        _stats(low=12.5, target=60, cv=41.2),
        PatternAnalysis(peak_hours=(7, 12)),
    )
    by_title = {r.title: r for r in result}

    assert by_title['Alto risco de hipoglicemia'].description.startswith('12.5% do tempo abaixo de 70 mg/dL')
    assert 'CV de 41.2%' in by_title['Alta variabilidade glicêmica'].description
    assert 'Apenas 60.0%' in by_title['Melhore o tempo no alvo'].description
    assert '7h, 12h' in by_title['Horários de pico identificados'].description
    assert all(r.actionable for r in result)


def test_positive_findings_not_actionable(make_reading) -> None:
    result = generate_recommendations(
        [make_reading(100)],
        _stats(control=85),
        PatternAnalysis(trends=Trends(recent_week='improving')),
    )
    assert [r.type for r in result] == ['positive', 'positive']
    assert not any(r.actionable for r in result)
    assert result[0].description == 'Score de 85/100. Continue com a rotina atual.'


def test_format_hours() -> None:
    assert format_hours([7, 12]) == '7h, 12h'
    assert format_hours([]) == ''
