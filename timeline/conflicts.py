"""
Conflict Detection.

Two events of the same profile conflict when their intervals overlap:
StartA < EndB and StartB < EndA. Touching (A ends exactly as B starts)
is not a conflict.
"""

import logging
from typing import Dict, Iterable

from models import Event

logger = logging.getLogger(__name__)


def overlaps(a: Event, b: Event) -> bool:
    """Open-interval overlap. Symmetric."""
    return a.start < b.end and b.start < a.end


def has_conflict(event: Event, other_events: Iterable[Event]) -> bool:
    """
    True if `event` overlaps any of `other_events`.
    The event itself (matched by id) is skipped, so the full list can be passed.
    """
    if not event.is_well_formed():
        logger.debug(f"Skipping conflict check for malformed event {event.id}")
        return False

    for other in other_events:
        if other.id == event.id:
            continue
        if not other.is_well_formed():
            continue
        if overlaps(event, other):
            return True
    return False


def find_conflicts(events: Iterable[Event]) -> Dict[str, bool]:
    """Conflict flag for every event in a single profile's list, keyed by event id."""
    events = list(events)
    return {event.id: has_conflict(event, events) for event in events}
