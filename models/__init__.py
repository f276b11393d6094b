"""
Data models package for the Roster Calendar.

This package exports the three pillars of the data architecture:
1. Supply (ShiftInterval)
2. Occurrences (Event, EventKind)
3. Output (StatusInfo, EventLayout, DayWindow, NextBlock, BlockPlacement)
"""

from .shift import (
    ShiftInterval,
    MINUTES_PER_DAY
)

from .event import (
    Event,
    EventKind
)

from .schedule import (
    UserStatus,
    StatusInfo,
    EventLayout,
    DayWindow,
    BlockSource,
    NextBlock,
    BlockPlacement
)

__all__ = [
    # --- Supply Models ---
    "ShiftInterval",
    "MINUTES_PER_DAY",

    # --- Occurrence Models ---
    "Event",
    "EventKind",

    # --- Output Models ---
    "UserStatus",
    "StatusInfo",
    "EventLayout",
    "DayWindow",
    "BlockSource",
    "NextBlock",
    "BlockPlacement",
]
