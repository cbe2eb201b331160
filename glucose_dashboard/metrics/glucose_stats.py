"""
Glucose statistics dataclasses.

Time-in-range bands follow the international consensus split used by the
dashboard: <70, 70-180, >180-250, >250 mg/dL.
"""

from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass(frozen=True)
class TimeInRange:
    """Percentage of readings in each of the four exclusive bands."""
    low: float = 0.0        # <70 mg/dL
    target: float = 0.0     # 70-180 mg/dL, both bounds inclusive
    high: float = 0.0       # >180-250 mg/dL
    very_high: float = 0.0  # >250 mg/dL

    @property
    def total(self) -> float:
        return self.low + self.target + self.high + self.very_high

    def to_dict(self) -> Dict[str, float]:
        return {
            'low_pct': round(self.low, 1),
            'target_pct': round(self.target, 1),
            'high_pct': round(self.high, 1),
            'very_high_pct': round(self.very_high, 1),
        }


@dataclass(frozen=True)
class GlucoseStats:
    """Aggregate statistics over a reading set.

    Every field is 0 for an empty reading set.
    """
    average: float = 0.0
    median: float = 0.0
    standard_deviation: float = 0.0  # Population SD
    coefficient_of_variation: float = 0.0  # SD / average x 100
    time_in_range: TimeInRange = field(default_factory=TimeInRange)
    variability_score: float = 0.0  # max(0, 100 - CV)
    control_score: float = 0.0      # 0.7 x TIR + 0.3 x variability

    readings_count: int = 0
    min_glucose: float = 0.0
    max_glucose: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.readings_count == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'average_mg_dl': round(self.average, 1),
            'median_mg_dl': round(self.median, 1),
            'std_mg_dl': round(self.standard_deviation, 1),
            'cv_percent': round(self.coefficient_of_variation, 1),
            **self.time_in_range.to_dict(),
            'variability_score': round(self.variability_score, 1),
            'control_score': round(self.control_score, 1),
            'readings_count': self.readings_count,
            'min_mg_dl': round(self.min_glucose, 1),
            'max_mg_dl': round(self.max_glucose, 1),
        }
