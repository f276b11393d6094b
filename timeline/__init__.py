"""
Scheduling core for the Roster Calendar.

Stateless, timezone-aware functions over snapshots of shifts and events:
status, conflicts, lane layout, next change point and day window.
"""

from .config import CalendarSettings
from .timezones import (
    CivilTime,
    InvalidTimezone,
    from_zoned,
    local_date,
    minute_of_day,
    resolve_zone,
    to_zoned,
    weekday_index,
    zone_or_default
)
from .shifts import (
    LEGACY_REFERENCE_DATE,
    ShiftOccurrence,
    expand_shift,
    occurrence_at,
    occurrence_on_local_date,
    shift_for_local_date,
    shift_for_weekday,
    shift_from_template,
    shift_to_template,
    shifts_from_template
)
from .status import compute_status, next_block_for_user
from .conflicts import find_conflicts, has_conflict, overlaps
from .layout import is_all_day_leave, layout_events, place_event, split_all_day_leave
from .changes import collect_change_points, next_change
from .day_range import compute_day_range

__all__ = [
    # --- Configuration ---
    "CalendarSettings",

    # --- Timezone Conversion ---
    "CivilTime",
    "InvalidTimezone",
    "from_zoned",
    "local_date",
    "minute_of_day",
    "resolve_zone",
    "to_zoned",
    "weekday_index",
    "zone_or_default",

    # --- Shift Expansion ---
    "LEGACY_REFERENCE_DATE",
    "ShiftOccurrence",
    "expand_shift",
    "occurrence_at",
    "occurrence_on_local_date",
    "shift_for_local_date",
    "shift_for_weekday",
    "shift_from_template",
    "shift_to_template",
    "shifts_from_template",

    # --- Derived Views ---
    "compute_status",
    "next_block_for_user",
    "find_conflicts",
    "has_conflict",
    "overlaps",
    "is_all_day_leave",
    "layout_events",
    "place_event",
    "split_all_day_leave",
    "collect_change_points",
    "next_change",
    "compute_day_range",
]
