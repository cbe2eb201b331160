from __future__ import annotations

import io
from datetime import date, datetime
from pathlib import Path

import pandas as pd
import pytest

from glucose_dashboard.analyzers.insights import build_pattern_report
from glucose_dashboard.reading import Reading
from glucose_dashboard.reports import (
    default_export_filename,
    export_pattern_report_excel,
    export_readings_csv,
)
from glucose_dashboard.reports.export import READING_SHEET_HEADERS

NOW = datetime(2024, 5, 20, 12, 0)


@pytest.fixture
def readings() -> list:
    return [
        Reading(date=date(2024, 5, 6), time="08:00", period="manhã", glucose=95.0),
        Reading(date=date(2024, 5, 6), time="13:00", period="almoço", glucose=185.5, notes="pizza"),
        Reading(date=date(2024, 5, 7), time="22:00", period="noite", glucose=65.0),
    ]


def test_export_csv_content(readings) -> None:
    lines = export_readings_csv(readings).splitlines()

    assert lines == [
        "Data,Horário,Período,Glicemia (mg/dL),Status,Observações",
        "06/05/2024,08:00,manhã,95,Normal,",
        "06/05/2024,13:00,almoço,185.5,Alta,pizza",
        "07/05/2024,22:00,noite,65,Baixa,",
    ]


def test_export_csv_to_file_and_buffer(readings, tmp_path: Path) -> None:
    path = tmp_path / "registros.csv"
    content = export_readings_csv(readings, path)
    assert path.read_text(encoding="utf-8") == content

    buffer = io.StringIO()
    export_readings_csv(readings, buffer)
    assert buffer.getvalue() == content


def test_export_csv_empty_raises() -> None:
    with pytest.raises(ValueError, match="Nenhum dado"):
        export_readings_csv([])


def test_default_export_filename() -> None:
    assert default_export_filename(now=datetime(2024, 5, 6)) == "registros_glicemia_2024-05-06.csv"
    assert (
        default_export_filename("relatorio_glicemia", datetime(2024, 5, 6), "xlsx")
        == "relatorio_glicemia_2024-05-06.xlsx"
    )


def test_export_pattern_report_excel(readings, tmp_path: Path) -> None:
    report = build_pattern_report(readings, now=NOW)
    path = tmp_path / "relatorio.xlsx"

    content = export_pattern_report_excel(report, path)

    assert path.read_bytes() == content
    sheets = pd.read_excel(io.BytesIO(content), sheet_name=None)
    assert list(sheets) == ["Resumo", "Maiores Leituras", "Menores Leituras"]
    assert sheets["Resumo"].columns[0] == "RELATÓRIO DE PADRÕES GLICÊMICOS"

    highest = sheets["Maiores Leituras"]
    assert list(highest.columns) == READING_SHEET_HEADERS
    assert highest["Glicemia (mg/dL)"].tolist() == [185.5, 95.0, 65.0]
    assert highest["Data"].iloc[0] == "06/05/2024"

    lowest = sheets["Menores Leituras"]
    assert lowest["Glicemia (mg/dL)"].tolist() == [65.0, 95.0, 185.5]
