from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict

import pytest
import requests

from glucose_dashboard.config import AnalysisConfig
from glucose_dashboard.loaders import SheetCsvLoader, fetch_readings

CSV = (
    "Data,Hora,Período,Glicemia (mg/dL),Observações\n"
    "05/06/2024,08:00,manhã/jejum,95,\n"
    '05/06/2024,07:00,manhã/jejum,"102,5",café\n'
    "05/07/2024,12:30,almoço,140,\n"
    "13/45/2024,08:00,manhã,100,\n"
    "05/08/2024,08:00,manhã,abc,\n"
    "05/08/2024,08:00,,110,\n"
)


class _Response:
    def __init__(self, text: str, status: int = 200) -> None:
        self.text = text
        self.content = text.encode("utf-8")
        self.status_code = status
        self.encoding = None

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_parse_valid_rows_sorted() -> None:
    loader = SheetCsvLoader(text=CSV)
    readings = loader.load()

    assert [(r.day, r.time, r.glucose) for r in readings] == [
        (date(2024, 5, 6), "07:00", 102.5),
        (date(2024, 5, 6), "08:00", 95.0),
        (date(2024, 5, 7), "12:30", 140.0),
    ]
    assert readings[0].notes == "café"
    assert readings[1].notes is None
    assert readings[0].period == "manhã/jejum"


def test_malformed_rows_are_skipped() -> None:
    loader = SheetCsvLoader(text=CSV)
    loader.load()
    assert loader.skipped_rows == 3
    assert loader.get_readings_count() == 3


def test_zero_glucose_is_skipped() -> None:
    text = "Data,Hora,Período,Glicemia\n05/06/2024,08:00,manhã,0\n05/06/2024,09:00,manhã,-5\n"
    loader = SheetCsvLoader(text=text)
    assert loader.load() == []
    assert loader.skipped_rows == 2


def test_non_finite_glucose_is_skipped() -> None:
    text = (
        "Data,Hora,Período,Glicemia\n"
        "05/06/2024,08:00,manhã,Infinity\n"
        "05/06/2024,09:00,manhã,inf\n"
        "05/06/2024,10:00,manhã,nan\n"
        "05/06/2024,11:00,manhã,100\n"
    )
    loader = SheetCsvLoader(text=text)
    readings = loader.load()

    assert [r.glucose for r in readings] == [100.0]
    assert loader.skipped_rows == 3


def test_rows_with_extra_fields_are_counted() -> None:
    text = (
        "Data,Hora,Período,Glicemia\n"
        "05/06/2024,08:00,manhã,100\n"
        "05/06/2024,09:00,manhã,110,extra,field\n"
        "05/06/2024,10:00,manhã,120\n"
    )
    loader = SheetCsvLoader(text=text)
    readings = loader.load()

    assert [r.glucose for r in readings] == [100.0, 120.0]
    assert loader.skipped_rows == 1


def test_missing_required_column_raises() -> None:
    with pytest.raises(ValueError, match="period"):
        SheetCsvLoader(text="Data,Hora,Glicemia\n05/06/2024,08:00,100\n").load()


def test_empty_csv_raises() -> None:
    with pytest.raises(ValueError, match="empty"):
        SheetCsvLoader(text="").load()


def test_no_source_raises() -> None:
    with pytest.raises(ValueError, match="No spreadsheet source"):
        SheetCsvLoader().load()


def test_custom_date_format() -> None:
    config = AnalysisConfig()
    config.source.date_format = "%d/%m/%Y"
    text = "Data,Hora,Periodo,Valor\n06/05/2024,08:00,manhã,101\n"
    readings = SheetCsvLoader(text=text, config=config).load()
    assert readings[0].day == date(2024, 5, 6)
    assert readings[0].glucose == 101


def test_load_from_file(tmp_path: Path) -> None:
    path = tmp_path / "glicemia.csv"
    path.write_text(CSV, encoding="utf-8-sig")

    loader = SheetCsvLoader(filepath=path)

    assert loader.get_date_range() == (date(2024, 5, 6), date(2024, 5, 7))
    frame = loader.to_frame()
    assert list(frame.columns) == ["date", "time", "period", "glucose_mg_dl", "notes"]
    assert len(frame) == 3


def test_date_range_without_readings() -> None:
    loader = SheetCsvLoader(text="Data,Hora,Período,Glicemia\n")
    assert loader.get_date_range() == (None, None)


def test_fetch_from_url(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: Dict[str, Any] = {}

    def _get(url: str, **kwargs: Any) -> _Response:
        calls["url"] = url
        calls.update(kwargs)
        return _Response(CSV)

    monkeypatch.setattr(requests, "get", _get)
    config = AnalysisConfig()
    config.source.csv_url = "https://example.com/pub?output=csv"
    config.source.request_timeout = 5

    readings = fetch_readings(config=config)

    assert len(readings) == 3
    assert calls["url"] == "https://example.com/pub?output=csv"
    assert calls["headers"] == {"Cache-Control": "no-cache"}
    assert calls["timeout"] == 5


def test_http_error_propagates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: _Response("", status=500))
    with pytest.raises(requests.HTTPError):
        fetch_readings(url="https://example.com/pub?output=csv")
