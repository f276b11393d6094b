"""
Change Point Scheduling.

Finds the next instant at which any staff member's status flips, so the
board knows when to refresh. Candidates are shift and event boundaries
that fall on that local date.
"""

import logging
from datetime import date as date_type, datetime, timezone
from typing import List, Mapping, Optional, Sequence

from models import Event, ShiftInterval
from .shifts import occurrence_on_local_date
from .timezones import local_date

logger = logging.getLogger(__name__)


def collect_change_points(
    date: date_type,
    all_shifts: Mapping[str, ShiftInterval],
    all_events: Mapping[str, Sequence[Event]],
    zone: str
) -> List[datetime]:
    """Every status-change candidate on `date`, unsorted, in UTC."""
    points: List[datetime] = []

    # 1. Shift boundaries that land on the local date
    for shift in all_shifts.values():
        occurrence = occurrence_on_local_date(shift, date, zone)
        if occurrence is None:
            continue
        for boundary in (occurrence.start, occurrence.end):
            if local_date(boundary, zone) == date:
                points.append(boundary)

    # 2. Event boundaries on the same local date, each checked on its own
    for profile_id, events in all_events.items():
        for event in events:
            if not event.is_well_formed():
                logger.debug(f"Skipping malformed event {event.id} for {profile_id}")
                continue
            for boundary in (event.start, event.end):
                if local_date(boundary, zone) == date:
                    points.append(boundary)

    return points


def next_change(
    date: date_type,
    all_shifts: Mapping[str, ShiftInterval],
    all_events: Mapping[str, Sequence[Event]],
    zone: str,
    now: datetime
) -> Optional[datetime]:
    """Earliest change point strictly after `now`, or None."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    future = [p for p in collect_change_points(date, all_shifts, all_events, zone) if p > now]
    if not future:
        return None
    return min(future)
