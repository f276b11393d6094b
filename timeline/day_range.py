"""
Day Window Auto-Ranging.

Picks the visible hour range for a day column: wide enough to show every
shift and event on the date with some padding, at least `min_span_hours`
tall, and never narrower than the default working-day baseline.
"""

import logging
import math
from datetime import date as date_type, datetime
from typing import List, Mapping, Optional, Sequence, Tuple

from models import DayWindow, Event, ShiftInterval
from .config import DAY_END_HOUR, DAY_START_HOUR, DEFAULT_PADDING_MINUTES, MIN_SPAN_HOURS
from .layout import is_all_day_leave
from .shifts import occurrence_on_local_date
from .timezones import to_zoned

logger = logging.getLogger(__name__)


def _local_hour(instant: datetime, zone: str, date: date_type) -> float:
    """Fractional local hour on `date`; clamped to 0 / 24 when the instant is on another day."""
    civil = to_zoned(instant, zone)
    if civil.date < date:
        return 0.0
    if civil.date > date:
        return 24.0
    return civil.hour + civil.minute / 60


def _collect_bounds(
    date: date_type,
    all_shifts: Mapping[str, ShiftInterval],
    all_events: Mapping[str, Sequence[Event]],
    zone: str
) -> List[Tuple[float, float]]:
    bounds: List[Tuple[float, float]] = []

    for shift in all_shifts.values():
        occurrence = occurrence_on_local_date(shift, date, zone)
        if occurrence is None:
            continue
        bounds.append((_local_hour(occurrence.start, zone, date), _local_hour(occurrence.end, zone, date)))

    for events in all_events.values():
        for event in events:
            if not event.is_well_formed():
                logger.debug(f"Skipping malformed event {event.id} in day range")
                continue
            # All-day leave spans whatever window we pick
            if is_all_day_leave(event, zone):
                continue
            if to_zoned(event.start, zone).date != date:
                continue
            bounds.append((_local_hour(event.start, zone, date), _local_hour(event.end, zone, date)))

    return bounds


def compute_day_range(
    date: date_type,
    all_shifts: Mapping[str, ShiftInterval],
    all_events: Optional[Mapping[str, Sequence[Event]]],
    zone: str,
    padding_minutes: int = DEFAULT_PADDING_MINUTES,
    default_range: Tuple[int, int] = (DAY_START_HOUR, DAY_END_HOUR),
    min_span_hours: int = MIN_SPAN_HOURS
) -> DayWindow:
    """
    Visible [start_hour, end_hour] for `date` in `zone`.
    Always a superset of `default_range` when there is data; exactly it when there is none.
    """
    default_start, default_end = default_range
    bounds = _collect_bounds(date, all_shifts, all_events or {}, zone)

    # 1. Nothing on the day
    if not bounds:
        return DayWindow(start_hour=default_start, end_hour=default_end)

    # 2. Data extent
    earliest_start = min(start for start, _ in bounds)
    latest_end = max(end for _, end in bounds)

    # 3. Padding
    pad_hours = math.ceil(padding_minutes / 60)
    start_hour = max(0, math.floor(earliest_start) - pad_hours)
    end_hour = min(24, math.ceil(latest_end) + pad_hours)

    # 4. Minimum span, centred on the data
    if end_hour - start_hour < min_span_hours:
        center = (earliest_start + latest_end) / 2
        start_hour = max(0, math.floor(center - min_span_hours / 2))
        end_hour = min(24, math.ceil(center + min_span_hours / 2))

    # 5. Never narrower than the baseline
    start_hour = min(start_hour, default_start)
    end_hour = max(end_hour, default_end)

    return DayWindow(start_hour=start_hour, end_hour=end_hour)
