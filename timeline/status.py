"""
Status Engine.

Answers "what is this person doing right now?" for the live board.

Priority (highest wins):
1. BUSY    - an event strictly contains the instant (start < t < end).
2. WORKING - the instant falls in the day's shift, [start, end).
3. OFF     - otherwise.

Event boundaries are open on both ends so back-to-back events never claim
the same instant; shift boundaries are inclusive-start, exclusive-end.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from models import BlockSource, Event, NextBlock, ShiftInterval, StatusInfo, UserStatus
from .shifts import occurrence_at, occurrence_on_local_date
from .timezones import local_date

logger = logging.getLogger(__name__)


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def _usable_events(profile_id: str, events: Iterable[Event]) -> List[Event]:
    """Events that belong to the profile and pass the interval invariant, in input order."""
    usable = []
    for event in events:
        if event.profile_id != profile_id:
            logger.debug(f"Ignoring event {event.id}: belongs to {event.profile_id}, not {profile_id}")
            continue
        if not event.is_well_formed():
            logger.debug(f"Skipping malformed event {event.id}")
            continue
        usable.append(event)
    return usable


def _own_shift(profile_id: str, shift: Optional[ShiftInterval]) -> Optional[ShiftInterval]:
    if shift is None:
        return None
    if shift.profile_id != profile_id:
        logger.debug(f"Ignoring shift {shift.id}: belongs to {shift.profile_id}, not {profile_id}")
        return None
    return shift


def compute_status(
    profile_id: str,
    instant: datetime,
    zone: str,
    shift: Optional[ShiftInterval] = None,
    events: Iterable[Event] = ()
) -> StatusInfo:
    """
    Status of one user at an instant.
    `shift` is the user's shift covering the instant's local date in `zone`
    (if any), in whatever zone it was authored;
    `events` are the user's events around that date.
    """
    instant = _as_utc(instant)

    # 1. Events override everything; first match by input order wins
    for event in _usable_events(profile_id, events):
        if event.start < instant < event.end:
            return StatusInfo(status=UserStatus.BUSY, current_event=event, shift=shift)

    # 2. Shift coverage, on whichever date the shift runs in its own zone
    own = _own_shift(profile_id, shift)
    if own and occurrence_at(own, instant, zone):
        return StatusInfo(status=UserStatus.WORKING, shift=shift)

    return StatusInfo(status=UserStatus.OFF, shift=shift)


def next_block_for_user(
    profile_id: str,
    now: datetime,
    zone: str,
    shift: Optional[ShiftInterval] = None,
    events: Iterable[Event] = ()
) -> Optional[NextBlock]:
    """
    The next thing starting later today for one user: a shift start or an event start.
    Only blocks on now's local date (in zone) are considered.
    """
    now = _as_utc(now)
    today = local_date(now, zone)
    blocks: List[NextBlock] = []

    own = _own_shift(profile_id, shift)
    occurrence = occurrence_on_local_date(own, today, zone) if own else None
    if occurrence and now < occurrence.start and local_date(occurrence.start, zone) == today:
        blocks.append(NextBlock(title="Shift starts", at=occurrence.start, source=BlockSource.SHIFT))

    for event in _usable_events(profile_id, events):
        if event.start > now and local_date(event.start, zone) == today:
            blocks.append(NextBlock(title=event.title, at=event.start, source=BlockSource.EVENT))

    if not blocks:
        return None

    # Stable sort: on a tie the shift (added first) wins
    blocks.sort(key=lambda b: b.at)
    return blocks[0]
