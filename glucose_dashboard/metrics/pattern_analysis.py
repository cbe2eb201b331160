"""
Temporal pattern dataclasses.

Hour and weekday aggregates are fixed-size tuples indexed by the hour (0-23)
or weekday (0=Sunday..6=Saturday). A slot is None when no reading fell in it.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Literal, Optional, Tuple

OverallTrend = Literal['increasing', 'decreasing', 'stable']
RecentTrend = Literal['improving', 'worsening', 'stable']

HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7


def _empty_slots(size: int) -> Tuple[Optional[float], ...]:
    return (None,) * size


@dataclass(frozen=True)
class Trends:
    overall: OverallTrend = 'stable'
    recent_week: RecentTrend = 'stable'


@dataclass(frozen=True)
class PatternAnalysis:
    """Hour-of-day and weekday aggregates plus trend classification."""
    hourly_pattern: Tuple[Optional[float], ...] = field(
        default_factory=lambda: _empty_slots(HOURS_PER_DAY)
    )
    weekday_pattern: Tuple[Optional[float], ...] = field(
        default_factory=lambda: _empty_slots(DAYS_PER_WEEK)
    )
    hourly_counts: Tuple[int, ...] = (0,) * HOURS_PER_DAY
    weekday_counts: Tuple[int, ...] = (0,) * DAYS_PER_WEEK
    peak_hours: Tuple[int, ...] = ()
    low_hours: Tuple[int, ...] = ()
    trends: Trends = field(default_factory=Trends)

    @property
    def populated_hours(self) -> List[int]:
        """Hours with at least one reading, ascending."""
        return [h for h, mean in enumerate(self.hourly_pattern) if mean is not None]

    @property
    def populated_weekdays(self) -> List[int]:
        return [d for d, mean in enumerate(self.weekday_pattern) if mean is not None]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization (absent slots omitted)."""
        return {
            'hourly_pattern': {
                h: round(mean, 1) for h, mean in enumerate(self.hourly_pattern) if mean is not None
            },
            'weekday_pattern': {
                d: round(mean, 1) for d, mean in enumerate(self.weekday_pattern) if mean is not None
            },
            'peak_hours': list(self.peak_hours),
            'low_hours': list(self.low_hours),
            'trend_overall': self.trends.overall,
            'trend_recent_week': self.trends.recent_week,
        }
