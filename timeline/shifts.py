"""
Recurring Shift Expansion.

Turns a weekday-indexed ShiftInterval into a concrete [start, end) interval
on a target calendar date. The minute-of-day fields are wall-clock time in
the zone the shift was authored in; they are materialised on the target date
in that zone and converted to UTC, after which they can be shown in any zone.

Also hosts the compatibility shim for legacy 'workingHours' template events,
which encode a recurring shift as UTC instants on a fixed reference date.
"""

import logging
from dataclasses import dataclass
from datetime import date as date_type, datetime, timedelta, timezone
from typing import Iterable, List, Optional

from models import Event, EventKind, ShiftInterval
from .timezones import CivilTime, InvalidTimezone, from_zoned, local_date, resolve_zone, weekday_index

logger = logging.getLogger(__name__)

# Monday. Template events were stored against this date, in UTC.
LEGACY_REFERENCE_DATE = date_type(2024, 1, 1)
LEGACY_TEMPLATE_ZONE = "UTC"

# Authored dates to try around a local date, nearest first
NEIGHBOUR_DAYS = (0, -1, 1, -2, 2)


@dataclass(frozen=True)
class ShiftOccurrence:
    """One shift materialised on one date."""
    start: datetime
    end: datetime
    shift: ShiftInterval

    def contains(self, instant: datetime) -> bool:
        """Half-open: a shift ending at 17:00 is over at 17:00."""
        return self.start <= instant < self.end


def expand_shift(
    shift: ShiftInterval,
    target_date: date_type,
    display_zone: str
) -> Optional[ShiftOccurrence]:
    """
    Materialise a shift on target_date.
    Returns None if the shift does not run on that weekday or the record is malformed.
    """
    if not shift.is_well_formed():
        logger.debug(f"Skipping malformed shift {shift.id} for {shift.profile_id}")
        return None

    if shift.day_of_week != weekday_index(target_date):
        return None

    if shift.timezone:
        try:
            resolve_zone(shift.timezone)
        except InvalidTimezone:
            logger.debug(f"Skipping shift {shift.id} for {shift.profile_id}: unknown zone {shift.timezone!r}")
            return None

    authored_zone = shift.timezone or display_zone
    start = from_zoned(CivilTime.on(target_date, shift.start_minute), authored_zone)
    end = from_zoned(CivilTime.on(target_date, shift.end_minute), authored_zone)

    # A DST gap can swallow a short shift entirely
    if end <= start:
        logger.debug(f"Shift {shift.id} collapses on {target_date} in {authored_zone}")
        return None

    return ShiftOccurrence(start=start, end=end, shift=shift)


def occurrence_on_local_date(
    shift: ShiftInterval,
    local_day: date_type,
    display_zone: str
) -> Optional[ShiftOccurrence]:
    """
    The occurrence of a shift that overlaps `local_day` as seen in display_zone.

    A shift authored in another zone can run on a different calendar date
    there (a Monday 22:00 UTC shift is Tuesday morning in Sydney), so the
    authored dates either side of local_day are tried as well. Zone offsets
    differ by at most 26 hours, and a weekly shift matches only one of those
    dates.
    """
    day_start = from_zoned(CivilTime.on(local_day, 0), display_zone)
    day_end = from_zoned(CivilTime.on(local_day + timedelta(days=1), 0), display_zone)

    for offset in NEIGHBOUR_DAYS:
        occurrence = expand_shift(shift, local_day + timedelta(days=offset), display_zone)
        if occurrence and occurrence.start < day_end and day_start < occurrence.end:
            return occurrence
    return None


def occurrence_at(
    shift: ShiftInterval,
    instant: datetime,
    display_zone: str
) -> Optional[ShiftOccurrence]:
    """The occurrence of a shift that contains `instant`, if any."""
    occurrence = occurrence_on_local_date(shift, local_date(instant, display_zone), display_zone)
    if occurrence and occurrence.contains(instant):
        return occurrence
    return None


def shift_for_local_date(
    shifts: Iterable[ShiftInterval],
    profile_id: str,
    local_day: date_type,
    display_zone: str
) -> Optional[ShiftInterval]:
    """
    First shift of a profile that runs on local_day in display_zone.
    Same as shift_for_weekday() for zone-less shifts; also finds shifts
    authored elsewhere whose weekday differs from the local one.
    """
    for shift in shifts:
        if shift.profile_id != profile_id:
            continue
        if occurrence_on_local_date(shift, local_day, display_zone):
            return shift
    return None


def shift_for_weekday(
    shifts: Iterable[ShiftInterval],
    profile_id: str,
    weekday: int
) -> Optional[ShiftInterval]:
    """First shift of a profile on a weekday (0=Sunday) from a flat list."""
    for shift in shifts:
        if shift.profile_id == profile_id and shift.day_of_week == weekday:
            return shift
    return None


# --- Legacy template adapter ---

def shifts_from_template(event: Event) -> List[ShiftInterval]:
    """
    Convert a legacy 'workingHours' template event into ShiftIntervals.

    The template's start/end sit on LEGACY_REFERENCE_DATE in UTC, so the
    UTC wall-clock fields are the shift's minute-of-day values. One shift is
    produced per weekday in the recurrence pattern (or day_of_week, or the
    weekday of the stored start when neither is set).
    """
    if event.kind != EventKind.WORKING_HOURS:
        raise ValueError(f"Event {event.id} is not a workingHours template")

    start = event.start.astimezone(timezone.utc)
    end = event.end.astimezone(timezone.utc)
    if start.date() != end.date():
        raise ValueError(f"Template {event.id} crosses midnight UTC; overnight shifts are not supported")

    if event.recurrence_pattern:
        weekdays = list(event.recurrence_pattern)
    elif event.day_of_week is not None:
        weekdays = [event.day_of_week]
    else:
        weekdays = [weekday_index(start.date())]

    return [
        ShiftInterval(
            id=event.id,
            profile_id=event.profile_id,
            day_of_week=day,
            start_minute=start.hour * 60 + start.minute,
            end_minute=end.hour * 60 + end.minute,
            timezone=LEGACY_TEMPLATE_ZONE
        )
        for day in weekdays
    ]


def shift_from_template(event: Event) -> ShiftInterval:
    """Single-weekday form of shifts_from_template()."""
    shifts = shifts_from_template(event)
    if len(shifts) != 1:
        raise ValueError(f"Template {event.id} repeats on {len(shifts)} weekdays; use shifts_from_template()")
    return shifts[0]


def shift_to_template(shift: ShiftInterval, title: str = "Working hours") -> Event:
    """
    Encode a shift in the legacy template form, for consumers that still read it.
    The encoding has no zone, so only UTC-authored or zone-less shifts can be written.
    """
    if shift.timezone not in (None, LEGACY_TEMPLATE_ZONE):
        raise ValueError(f"Shift authored in {shift.timezone} cannot be stored as a UTC template")

    # Reference date is a Monday (weekday index 1)
    day = LEGACY_REFERENCE_DATE + timedelta(days=(shift.day_of_week - 1) % 7)
    midnight = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)

    return Event(
        id=shift.id or f"wh_{shift.profile_id}_{shift.day_of_week}",
        profile_id=shift.profile_id,
        title=title,
        kind=EventKind.WORKING_HOURS,
        start=midnight + timedelta(minutes=shift.start_minute),
        end=midnight + timedelta(minutes=shift.end_minute),
        is_recurring=True,
        day_of_week=shift.day_of_week,
        recurrence_pattern=[shift.day_of_week]
    )
