"""
Daily metrics dataclass for per-day breakdown.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Any


@dataclass(frozen=True)
class DailyMetrics:
    """Per-day summary of glucose readings.

    Used by the calendar view and day-over-day comparisons.
    """
    date: date
    count: int
    average: float
    minimum: float
    maximum: float
    status: str  # Status of the day's average (Baixa/Normal/Elevada/Alta)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'date': self.date.isoformat(),
            'readings': self.count,
            'average_mg_dl': round(self.average, 1),
            'min_mg_dl': round(self.minimum, 1),
            'max_mg_dl': round(self.maximum, 1),
            'status': self.status,
        }
