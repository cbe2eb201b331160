from __future__ import annotations

from datetime import date, datetime

import pytest

from glucose_dashboard.reading import Reading, parse_clock


@pytest.mark.parametrize(
    "value, expected",
    [
        ("7:05", (7, 5)),
        ("07:05", (7, 5)),
        ("0705", (7, 5)),
        ("7", (7, 0)),
        (" 23:59", (23, 59)),
        ("24:00", None),
        ("12:60", None),
        ("abc", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_clock(value, expected) -> None:
    assert parse_clock(value) == expected


def test_hour_prefers_time_over_datetime() -> None:
    r = Reading(date=datetime(2024, 5, 6, 23, 0), time="07:30", period="manhã", glucose=100)
    assert r.hour == 7


def test_hour_falls_back_to_datetime_then_zero() -> None:
    with_datetime = Reading(date=datetime(2024, 5, 6, 23, 15), time="", period="noite", glucose=100)
    date_only = Reading(date=date(2024, 5, 6), time="??", period="noite", glucose=100)
    assert with_datetime.hour == 23
    assert date_only.hour == 0


def test_weekday_starts_on_sunday() -> None:
    sunday = Reading(date=date(2024, 5, 5), time="08:00", period="", glucose=100)
    saturday = Reading(date=date(2024, 5, 11), time="08:00", period="", glucose=100)
    assert sunday.weekday == 0
    assert saturday.weekday == 6


def test_timestamp_and_day() -> None:
    r = Reading(date=datetime(2024, 5, 6, 1, 0), time="13:45", period="tarde", glucose=100)
    assert r.day == date(2024, 5, 6)
    assert r.timestamp == datetime(2024, 5, 6, 13, 45)

    no_time = Reading(date=date(2024, 5, 6), time="", period="tarde", glucose=100)
    assert no_time.timestamp == datetime(2024, 5, 6, 0, 0)
