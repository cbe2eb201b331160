"""
Published spreadsheet CSV loader.

Parses the glucose log kept in a spreadsheet (published as CSV) into
Reading objects.
"""

import io
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
import requests

from glucose_dashboard.config import AnalysisConfig
from glucose_dashboard.reading import Reading

logger = logging.getLogger(__name__)


class SheetCsvLoader:
    """Loader for the glucose log spreadsheet.

    Columns are located by case-insensitive substring of the header, so
    "Data", "Hora", "Período", "Glicemia (mg/dL)" and "Observações" are all
    recognised. Rows that cannot be parsed are skipped.
    """

    # Substrings identifying each column, checked in order
    DATE_KEYS = ('data',)
    TIME_KEYS = ('hora',)
    PERIOD_KEYS = ('período', 'periodo')
    GLUCOSE_KEYS = ('glicemia', 'valor')
    NOTES_KEYS = ('observ', 'nota')

    MIN_FIELDS = 4

    def __init__(
        self,
        url: Optional[str] = None,
        filepath: Optional[Union[str, Path]] = None,
        text: Optional[str] = None,
        config: Optional[AnalysisConfig] = None
    ):
        """Initialize loader with one source.

        Args:
            url: Published CSV URL. Defaults to ``config.source.csv_url``.
            filepath: Path to a downloaded CSV.
            text: CSV content already in memory.
            config: Optional configuration.
        """
        self.config = config or AnalysisConfig()
        self.url = url or self.config.source.csv_url
        self.filepath = Path(filepath) if filepath is not None else None
        self.text = text
        self.skipped_rows = 0
        self._readings: Optional[List[Reading]] = None

    def fetch_text(self) -> str:
        """Return the CSV content from the configured source.

        Raises:
            ValueError: If no source was configured.
            requests.HTTPError: If the spreadsheet request fails.
        """
        if self.text is not None:
            return self.text

        if self.filepath is not None:
            return self.filepath.read_text(encoding='utf-8-sig')

        if not self.url:
            raise ValueError("No spreadsheet source configured: pass url, filepath or text")

        response = requests.get(
            self.url,
            headers={'Cache-Control': 'no-cache'},
            timeout=self.config.source.request_timeout,
        )
        response.raise_for_status()
        response.encoding = 'utf-8'
        logger.info("Fetched %d bytes from spreadsheet", len(response.content))
        return response.text

    @staticmethod
    def _find_column(headers: Sequence[str], keys: Sequence[str]) -> Optional[str]:
        """Find the first header containing any of the keys."""
        for header in headers:
            lowered = header.lower()
            if any(key in lowered for key in keys):
                return header
        return None

    def _map_columns(self, headers: Sequence[str]) -> Dict[str, Optional[str]]:
        columns = {
            'date': self._find_column(headers, self.DATE_KEYS),
            'time': self._find_column(headers, self.TIME_KEYS),
            'period': self._find_column(headers, self.PERIOD_KEYS),
            'glucose': self._find_column(headers, self.GLUCOSE_KEYS),
            'notes': self._find_column(headers, self.NOTES_KEYS),
        }
        missing = [name for name in ('date', 'time', 'period', 'glucose') if columns[name] is None]
        if missing:
            raise ValueError(
                f"Could not find required columns {missing} in spreadsheet. "
                f"Found columns: {list(headers)}"
            )
        return columns

    def _parse_row(self, row: Dict[str, str], columns: Dict[str, Optional[str]]) -> Tuple[Optional[Reading], str]:
        """Parse one row.

        Returns:
            Tuple of (reading or None, reason when skipped).
        """
        filled = [value for value in row.values() if value]
        if len(filled) < self.MIN_FIELDS:
            return None, 'too few fields'

        date_str = row.get(columns['date'], '')
        time_str = row.get(columns['time'], '')
        period = row.get(columns['period'], '')
        glucose_str = row.get(columns['glucose'], '')
        notes = row.get(columns['notes'], '') if columns['notes'] else ''

        if not (date_str and time_str and period and glucose_str):
            return None, 'missing required field'

        try:
            day = datetime.strptime(date_str, self.config.source.date_format).date()
        except ValueError:
            return None, f"invalid date {date_str!r}"

        try:
            glucose = float(glucose_str.replace(',', '.'))
        except ValueError:
            return None, f"invalid glucose {glucose_str!r}"

        if not np.isfinite(glucose) or glucose <= 0:
            return None, f"invalid glucose {glucose_str!r}"

        return Reading(
            date=day,
            time=time_str,
            period=period,
            glucose=glucose,
            notes=notes or None,
        ), ''

    def parse(self, text: str) -> List[Reading]:
        """Parse CSV content into readings sorted by date, then time.

        Raises:
            ValueError: If a required column is missing.
        """
        bad_lines: List[List[str]] = []

        def _skip_bad_line(fields: List[str]) -> None:
            bad_lines.append(fields)
            return None

        try:
            # Callable on_bad_lines requires the python engine
            df = pd.read_csv(
                io.StringIO(text),
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
                engine='python',
                on_bad_lines=_skip_bad_line,
            )
        except pd.errors.EmptyDataError:
            raise ValueError("Spreadsheet CSV is empty") from None
        df.columns = [str(c).strip().replace('"', '') for c in df.columns]
        columns = self._map_columns(list(df.columns))

        readings = []
        self.skipped_rows = len(bad_lines)
        for fields in bad_lines:
            logger.debug("Skipping row with %d fields: %s", len(fields), fields)
        for line_number, row in enumerate(df.to_dict('records'), start=2):
            row = {
                key: '' if pd.isna(value) else str(value).strip().replace('"', '')
                for key, value in row.items()
            }
            reading, reason = self._parse_row(row, columns)
            if reading is None:
                self.skipped_rows += 1
                logger.debug("Skipping line %d: %s", line_number, reason)
                continue
            readings.append(reading)

        if self.skipped_rows:
            logger.warning("Skipped %d malformed rows", self.skipped_rows)

        readings.sort(key=lambda r: (r.day, r.time))
        logger.info("Parsed %d readings", len(readings))
        return readings

    def load(self) -> List[Reading]:
        """Fetch and parse the spreadsheet.

        Returns:
            Readings sorted by date, then time.
        """
        self._readings = self.parse(self.fetch_text())
        return self._readings

    @property
    def readings(self) -> List[Reading]:
        """Get loaded readings (loads on first access)."""
        if self._readings is None:
            self._readings = self.load()
        return self._readings

    def to_frame(self) -> pd.DataFrame:
        """Readings as a DataFrame with columns date, time, period, glucose_mg_dl, notes."""
        return pd.DataFrame(
            [
                {
                    'date': r.day,
                    'time': r.time,
                    'period': r.period,
                    'glucose_mg_dl': r.glucose,
                    'notes': r.notes,
                }
                for r in self.readings
            ],
            columns=['date', 'time', 'period', 'glucose_mg_dl', 'notes'],
        )

    def get_date_range(self) -> tuple:
        """Get date range of data.

        Returns:
            Tuple of (start_date, end_date), or (None, None) without readings.
        """
        readings = self.readings
        if not readings:
            return None, None
        return readings[0].day, readings[-1].day

    def get_readings_count(self) -> int:
        """Get total number of readings."""
        return len(self.readings)


def fetch_readings(
    url: Optional[str] = None,
    config: Optional[AnalysisConfig] = None
) -> List[Reading]:
    """Fetch and parse the published spreadsheet."""
    return SheetCsvLoader(url=url, config=config).load()
