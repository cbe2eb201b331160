"""
Exporters for readings and the pattern report.

Readings go to CSV with a status column; the pattern report goes to a
multi-sheet Excel workbook.
"""

import io
import logging
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Optional, Sequence, TextIO, Union

import pandas as pd

from glucose_dashboard.analyzers.insights import PatternReport
from glucose_dashboard.config import AnalysisConfig
from glucose_dashboard.reading import Reading
from glucose_dashboard.utils.categories import classify_glucose

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    'Data',
    'Horário',
    'Período',
    'Glicemia (mg/dL)',
    'Status',
    'Observações',
]

READING_SHEET_HEADERS = ['Data', 'Hora', 'Glicemia (mg/dL)', 'Período']


def default_export_filename(
    prefix: str = 'registros_glicemia',
    now: Optional[datetime] = None,
    extension: str = 'csv'
) -> str:
    """Build a dated file name such as ``registros_glicemia_2024-05-01.csv``."""
    now = now or datetime.now()
    return f"{prefix}_{now.strftime('%Y-%m-%d')}.{extension}"


def readings_to_export_frame(
    readings: Sequence[Reading],
    config: Optional[AnalysisConfig] = None
) -> pd.DataFrame:
    """Tabular view of readings with localized headers and status."""
    config = config or AnalysisConfig()
    date_format = config.source.export_date_format
    return pd.DataFrame(
        [
            [
                r.day.strftime(date_format),
                r.time,
                r.period,
                f"{r.glucose:g}",
                classify_glucose(r.glucose, config.glucose),
                r.notes or '',
            ]
            for r in readings
        ],
        columns=CSV_HEADERS,
    )


def export_readings_csv(
    readings: Sequence[Reading],
    target: Union[str, Path, TextIO, None] = None,
    config: Optional[AnalysisConfig] = None
) -> str:
    """Export readings to CSV.

    Args:
        readings: Readings to export, written in the given order.
        target: File path or text buffer. If None, only the content is returned.
        config: Optional configuration (thresholds, date format).

    Returns:
        The CSV content.

    Raises:
        ValueError: If there are no readings.
    """
    if not readings:
        raise ValueError('Nenhum dado para exportar')

    df = readings_to_export_frame(readings, config)
    content = df.to_csv(index=False, lineterminator='\n')

    if isinstance(target, (str, Path)):
        Path(target).write_text(content, encoding='utf-8')
        logger.info("Exported %d readings to %s", len(readings), target)
    elif target is not None:
        target.write(content)

    return content


def _readings_sheet(readings: Sequence[Reading], date_format: str) -> pd.DataFrame:
    return pd.DataFrame(
        [
            [r.day.strftime(date_format), r.time, r.glucose, r.period or 'N/A']
            for r in readings
        ],
        columns=READING_SHEET_HEADERS,
    )


def _summary_rows(report: PatternReport) -> list:
    rows = [
        ['RELATÓRIO DE PADRÕES GLICÊMICOS', '', ''],
        ['Gerado em:', report.generated_at.strftime('%d/%m/%Y %H:%M'), ''],
        ['Total de registros:', report.total_readings, ''],
        ['', '', ''],
        ['HORÁRIOS DE PICO', '', ''],
        ['Horário', 'Média (mg/dL)', 'Quantidade'],
    ]
    rows += [[h.label, round(h.average, 1), h.count] for h in report.peak_hours]
    rows += [
        ['', '', ''],
        ['DIAS DA SEMANA - MAIORES MÉDIAS', '', ''],
        ['Dia', 'Média (mg/dL)', 'Quantidade'],
    ]
    rows += [[d.label, round(d.average, 1), d.count] for d in report.peak_days]
    rows += [
        ['', '', ''],
        ['PADRÕES DE REFEIÇÃO', '', ''],
        ['Período', 'Média (mg/dL)', 'Quantidade'],
        ['Antes das refeições', round(report.before_meals.average, 1), report.before_meals.count],
        ['Após as refeições', round(report.after_meals.average, 1), report.after_meals.count],
    ]
    if report.weekly_trends:
        rows += [
            ['', '', ''],
            ['TENDÊNCIAS SEMANAIS', '', ''],
            ['Semana', 'Média (mg/dL)', 'Quantidade'],
        ]
        rows += [[w.label, round(w.average, 1), w.count] for w in report.weekly_trends]
    return rows


def export_pattern_report_excel(
    report: PatternReport,
    target: Union[str, Path, BinaryIO, None] = None,
    config: Optional[AnalysisConfig] = None
) -> bytes:
    """Write the pattern report to an Excel workbook.

    Sheets: Resumo, Maiores Leituras, Menores Leituras.

    Args:
        report: Report built by the insight generator.
        target: File path or binary buffer. If None, only the bytes are returned.
        config: Optional configuration (date format).

    Returns:
        The workbook content.
    """
    config = config or AnalysisConfig()
    date_format = config.source.export_date_format

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        pd.DataFrame(_summary_rows(report)).to_excel(
            writer, sheet_name='Resumo', index=False, header=False
        )
        _readings_sheet(report.highest_readings, date_format).to_excel(
            writer, sheet_name='Maiores Leituras', index=False
        )
        _readings_sheet(report.lowest_readings, date_format).to_excel(
            writer, sheet_name='Menores Leituras', index=False
        )

        for worksheet in writer.book.worksheets:
            worksheet.column_dimensions['A'].width = 34
            worksheet.column_dimensions['B'].width = 18
            worksheet.column_dimensions['C'].width = 18

    content = buffer.getvalue()

    if isinstance(target, (str, Path)):
        Path(target).write_bytes(content)
        logger.info("Exported pattern report to %s", target)
    elif target is not None:
        target.write(content)

    return content
