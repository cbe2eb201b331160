"""
Glucose reading value object.

A reading carries its calendar date and its clock time separately. The time
field is authoritative for hour-of-day; the date may be date-only.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Tuple

_TIME_PATTERN = re.compile(r'^\s*(\d{1,2})(?::?(\d{2}))?')


def parse_clock(value: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse an "HH:MM" string into (hour, minute).

    Accepts "7:05", "07:05", "0705" and bare hours like "7".

    Returns:
        Tuple of (hour, minute), or None if the value is absent or unparsable.
    """
    if not value:
        return None
    match = _TIME_PATTERN.match(value)
    if match is None:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0
    if hour > 23 or minute > 59:
        return None
    return hour, minute


@dataclass(frozen=True)
class Reading:
    """One glucose measurement.

    Attributes:
        date: Calendar date. A datetime is accepted; its time-of-day is
              used only when ``time`` cannot be parsed.
        time: Clock time as "HH:MM" (24-hour).
        period: Free-text period label (e.g. "manhã/jejum").
        glucose: Concentration in mg/dL, always > 0.
        notes: Optional free text.
    """
    date: date
    time: str
    period: str
    glucose: float
    notes: Optional[str] = None

    @property
    def hour(self) -> int:
        """Hour of day (0-23), from ``time`` first and ``date`` as fallback."""
        clock = parse_clock(self.time)
        if clock is not None:
            return clock[0]
        if isinstance(self.date, datetime):
            return self.date.hour
        return 0

    @property
    def weekday(self) -> int:
        """Day of week with 0=Sunday .. 6=Saturday."""
        return self.date.isoweekday() % 7

    @property
    def day(self) -> date:
        """Calendar day without any time component."""
        if isinstance(self.date, datetime):
            return self.date.date()
        return self.date

    @property
    def timestamp(self) -> datetime:
        """Date combined with the parsed clock time, for chronological order."""
        clock = parse_clock(self.time)
        if clock is not None:
            return datetime.combine(self.day, time(clock[0], clock[1]))
        if isinstance(self.date, datetime):
            return self.date.replace(tzinfo=None)
        return datetime.combine(self.date, time())


def naive_local(moment: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through.

    Reading timestamps are naive wall-clock times, so reference times must be
    naive before they are compared with them.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)
