from __future__ import annotations

from datetime import date
from typing import Callable, Optional

import pytest

from glucose_dashboard.reading import Reading


@pytest.fixture
def make_reading() -> Callable[..., Reading]:
    """Factory for readings; defaults to Monday 2024-05-06 at 08:00."""

    def _make(
        glucose: float,
        day: date = date(2024, 5, 6),
        time: str = "08:00",
        period: str = "manhã",
        notes: Optional[str] = None,
    ) -> Reading:
        return Reading(date=day, time=time, period=period, glucose=glucose, notes=notes)

    return _make
