from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from glucose_dashboard.analyzers.patterns import PatternAnalyzer, analyze_patterns
from glucose_dashboard.metrics import PatternAnalysis

NOW = datetime(2024, 5, 20, 12, 0)


def test_empty_readings_give_empty_analysis() -> None:
    result = analyze_patterns([], now=NOW)
    assert result == PatternAnalysis()
    assert result.hourly_pattern == (None,) * 24
    assert result.weekday_pattern == (None,) * 7


def test_peak_hour_detected(make_reading) -> None:
    readings = []
    for offset in range(5):
        day = date(2024, 5, 6) + timedelta(days=offset)
        readings.append(make_reading(220, day=day, time="07:00"))
        readings.append(make_reading(140, day=day, time="12:00"))
        readings.append(make_reading(140, day=day, time="18:00"))
        readings.append(make_reading(140, day=day, time="21:00"))

    result = analyze_patterns(readings, now=NOW)

    assert result.peak_hours == (7,)
    # Equal deviations keep the lower hour first
    assert result.low_hours == (12, 18, 21)


def test_peak_ties_resolve_to_lower_hour(make_reading) -> None:
    readings = [
        make_reading(200, time="15:00"),
        make_reading(200, time="09:00"),
        make_reading(100, time="12:00"),
        make_reading(100, time="03:00"),
    ]
    result = analyze_patterns(readings, now=NOW)
    assert result.peak_hours == (9, 15)
    assert result.low_hours == (3, 12)


def test_pattern_hours_limited_to_strongest(make_reading) -> None:
    readings = [make_reading(value, time=f"{hour:02d}:00")
                for hour, value in enumerate((300, 290, 280, 270, 260))]
    readings += [make_reading(100, time=f"{hour}:00") for hour in range(10, 20)]

    result = analyze_patterns(readings, now=NOW)

    assert result.peak_hours == (0, 1, 2)
    assert result.low_hours == (10, 11, 12)


def test_absent_slots_are_none(make_reading) -> None:
    result = analyze_patterns([make_reading(120, time="08:00")], now=NOW)

    assert result.hourly_pattern[8] == 120
    assert result.hourly_counts[8] == 1
    assert result.populated_hours == [8]
    assert all(mean is None for hour, mean in enumerate(result.hourly_pattern) if hour != 8)
    # 2024-05-06 is a Monday
    assert result.populated_weekdays == [1]
    assert result.peak_hours == ()
    assert result.low_hours == ()


def test_hourly_mean_aggregates_readings(make_reading) -> None:
    readings = [make_reading(100, time="08:10"), make_reading(140, time="08:50")]
    analyzer = PatternAnalyzer(readings, now=NOW)
    means, counts = analyzer.calculate_hourly_pattern()
    assert means[8] == 120
    assert counts[8] == 2


def test_weekday_pattern_sunday_first(make_reading) -> None:
    readings = [
        make_reading(100, day=date(2024, 5, 5)),
        make_reading(200, day=date(2024, 5, 11)),
    ]
    result = analyze_patterns(readings, now=NOW)
    assert result.weekday_pattern[0] == 100
    assert result.weekday_pattern[6] == 200
    assert result.weekday_counts == (1, 0, 0, 0, 0, 0, 1)


def _series(make_reading, values, start=date(2024, 1, 1)):
    return [make_reading(v, day=start + timedelta(days=i)) for i, v in enumerate(values)]


def test_overall_trend_increasing(make_reading) -> None:
    values = [100, 100, 100, 110, 110, 110, 110, 110, 110, 130, 130, 130]
    result = analyze_patterns(_series(make_reading, values), now=NOW)
    assert result.trends.overall == 'increasing'


def test_overall_trend_decreasing_uses_chronology(make_reading) -> None:
    values = [130, 130, 130, 110, 110, 110, 110, 110, 110, 100, 100, 100]
    readings = list(reversed(_series(make_reading, values)))
    result = analyze_patterns(readings, now=NOW)
    assert result.trends.overall == 'decreasing'


def test_overall_trend_stable_within_threshold(make_reading) -> None:
    values = [100] * 3 + [105] * 6 + [115] * 3
    result = analyze_patterns(_series(make_reading, values), now=NOW)
    assert result.trends.overall == 'stable'


def test_overall_trend_needs_ten_readings(make_reading) -> None:
    values = [100, 100, 100, 150, 150, 150, 200, 200, 200]
    result = analyze_patterns(_series(make_reading, values), now=NOW)
    assert result.trends.overall == 'stable'


def _recent_week(make_reading, in_window):
    older = [make_reading(150, day=date(2024, 5, 1)), make_reading(150, day=date(2024, 5, 2))]
    recent = _series(make_reading, in_window, start=date(2024, 5, 14))
    return older + recent


def test_recent_week_improving(make_reading) -> None:
    readings = _recent_week(make_reading, [180, 180, 180, 120, 120, 120])
    result = analyze_patterns(readings, now=NOW)
    assert result.trends.recent_week == 'improving'


def test_recent_week_worsening(make_reading) -> None:
    readings = _recent_week(make_reading, [120, 120, 120, 180, 180, 180])
    result = analyze_patterns(readings, now=NOW)
    assert result.trends.recent_week == 'worsening'


def test_recent_week_needs_five_readings_in_window(make_reading) -> None:
    readings = _recent_week(make_reading, [120, 120, 180, 180])
    readings += [make_reading(150, day=date(2024, 5, 3)), make_reading(150, day=date(2024, 5, 4))]
    result = analyze_patterns(readings, now=NOW)
    assert result.trends.recent_week == 'stable'


def test_recent_week_accepts_aware_now(make_reading) -> None:
    readings = _recent_week(make_reading, [180, 180, 180, 120, 120, 120])
    aware_now = NOW.astimezone(timezone.utc)

    result = analyze_patterns(readings, now=aware_now)

    assert result.trends.recent_week == 'improving'


def test_recent_week_anchored_at_now(make_reading) -> None:
    readings = _recent_week(make_reading, [180, 180, 180, 120, 120, 120])
    result = analyze_patterns(readings, now=datetime(2024, 6, 30))
    assert result.trends.recent_week == 'stable'
