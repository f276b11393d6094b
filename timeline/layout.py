"""
Event Layout Engine.

Assigns each event a horizontal lane so overlapping blocks sit side by side
in a day column.

Grouping is a single left-to-right scan over start-sorted events: an event
joins the current group if it overlaps ANY member, otherwise the group is
closed and a new one starts. Every member of a group of n gets width 100/n.
This is a chain (connected component in scan order), not a minimum-width
interval colouring: in a chain A-B-C where A and C do not touch, all three
still get a third of the column. Columns depend on that, keep it.
"""

import logging
from datetime import date as date_type, datetime
from typing import Dict, Iterable, List, Optional, Tuple

from models import MINUTES_PER_DAY, BlockPlacement, DayWindow, Event, EventKind, EventLayout
from .conflicts import overlaps
from .timezones import to_zoned

logger = logging.getLogger(__name__)


def layout_events(events: Iterable[Event]) -> Dict[str, EventLayout]:
    """Lane layout for one column's events, keyed by event id."""
    usable = []
    for event in events:
        if not event.is_well_formed():
            logger.debug(f"Skipping malformed event {event.id} in layout")
            continue
        usable.append(event)

    # 1. Deterministic order
    ordered = sorted(usable, key=lambda e: (e.start, e.id))

    # 2. Chain grouping
    groups: List[List[Event]] = []
    current: List[Event] = []
    for event in ordered:
        if current and not any(overlaps(event, member) for member in current):
            groups.append(current)
            current = []
        current.append(event)
    if current:
        groups.append(current)

    # 3. Lanes
    layouts: Dict[str, EventLayout] = {}
    for group in groups:
        n = len(group)
        width = 100.0 / n
        for i, event in enumerate(group):
            layouts[event.id] = EventLayout(
                left=i * width,
                width=width,
                lane_index=i,
                lane_count=n
            )
    return layouts


# --- All-day leave ---

def is_all_day_leave(event: Event, zone: str) -> bool:
    """
    Leave that covers the whole day: flagged all-day, or running 00:00-23:59
    local time on a single date.
    """
    if event.kind != EventKind.LEAVE:
        return False
    if event.is_all_day:
        return True

    start = to_zoned(event.start, zone)
    end = to_zoned(event.end, zone)
    return (
        start.date == end.date
        and (start.hour, start.minute) == (0, 0)
        and (end.hour, end.minute) == (23, 59)
    )


def split_all_day_leave(events: Iterable[Event], zone: str) -> Tuple[List[Event], List[Event]]:
    """
    Partition a column's events into (all_day_leave, regular).
    All-day leave shades the column; only regular events get lanes.
    """
    all_day, regular = [], []
    for event in events:
        if is_all_day_leave(event, zone):
            all_day.append(event)
        else:
            regular.append(event)
    return all_day, regular


def _minutes_from_window_start(instant: datetime, zone: str, window: DayWindow, day: date_type) -> int:
    civil = to_zoned(instant, zone)
    days = (civil.date - day).days
    return days * MINUTES_PER_DAY + (civil.hour - window.start_hour) * 60 + civil.minute


def place_event(
    event: Event,
    zone: str,
    window: DayWindow,
    day: Optional[date_type] = None
) -> BlockPlacement:
    """
    Vertical placement of an event in the visible window of `day`
    (default: the event's local start date).
    All-day leave fills the whole window regardless of its stored instants.
    Other blocks are clipped to [0, window.span_minutes]; a block wholly
    outside the window gets zero duration at the nearest edge.
    """
    span = window.span_minutes
    if is_all_day_leave(event, zone):
        return BlockPlacement(offset_minutes=0, duration_minutes=span)

    duration = int((event.end - event.start).total_seconds() // 60)
    day = day or to_zoned(event.start, zone).date
    top = _minutes_from_window_start(event.start, zone, window, day)
    bottom = top + max(0, duration)

    top = min(max(top, 0), span)
    bottom = min(max(bottom, top), span)
    return BlockPlacement(offset_minutes=top, duration_minutes=bottom - top)
