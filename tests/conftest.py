from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from models import Event, EventKind, ShiftInterval

SYDNEY = "Australia/Sydney"
BRISBANE = "Australia/Brisbane"


def at(zone: str, year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    """UTC instant for a wall-clock time in `zone`."""
    local = datetime(year, month, day, hour, minute, second, tzinfo=ZoneInfo(zone))
    return local.astimezone(timezone.utc)


@pytest.fixture
def make_event():
    def _make(event_id, start, end, profile_id="staff_anna", title=None, kind=EventKind.MEETING, **extra):
        return Event(
            id=event_id,
            profile_id=profile_id,
            title=title or event_id,
            kind=kind,
            start=start,
            end=end,
            **extra
        )
    return _make


@pytest.fixture
def monday_shift():
    """Monday 09:00-17:00, no authored zone."""
    return ShiftInterval(profile_id="staff_anna", day_of_week=1, start_minute=9 * 60, end_minute=17 * 60)
