"""
Derived view models for the Roster Calendar.

This module defines the 'Output' of the scheduling core.
None of these are persisted; each is valid only for the inputs it was computed from.
"""

from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, model_validator
from datetime import datetime

from .event import Event
from .shift import ShiftInterval


class UserStatus(str, Enum):
    """Point-in-time classification of a staff member."""
    WORKING = "working"
    BUSY = "busy"
    OFF = "off"


class StatusInfo(BaseModel):
    status: UserStatus
    current_event: Optional[Event] = Field(default=None, description="The event making the user busy")
    shift: Optional[ShiftInterval] = Field(default=None, description="The user's shift for that weekday, if any")

    model_config = ConfigDict(frozen=True)


class EventLayout(BaseModel):
    """Horizontal placement of one event inside its overlap group."""
    left: float = Field(ge=0, le=100, description="Left offset, percent of column width")
    width: float = Field(gt=0, le=100, description="Width, percent of column width")
    lane_index: int = Field(ge=0)
    lane_count: int = Field(ge=1)

    model_config = ConfigDict(frozen=True)


class DayWindow(BaseModel):
    """Visible hour range of a day column, [start_hour, end_hour]."""
    start_hour: int = Field(ge=0, le=24)
    end_hour: int = Field(ge=0, le=24)

    @model_validator(mode='after')
    def validate_order(self):
        if self.end_hour <= self.start_hour:
            raise ValueError("Window end hour must be after start hour")
        return self

    @property
    def span_minutes(self) -> int:
        return (self.end_hour - self.start_hour) * 60

    model_config = ConfigDict(frozen=True)


class BlockSource(str, Enum):
    SHIFT = "shift"
    EVENT = "event"


class NextBlock(BaseModel):
    """The next thing coming up on a user's day."""
    title: str
    at: datetime
    source: BlockSource

    model_config = ConfigDict(frozen=True)


class BlockPlacement(BaseModel):
    """Vertical position of an event within the visible window, in minutes. Clipped to the window."""
    offset_minutes: int = Field(ge=0, description="Minutes after the window start")
    duration_minutes: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)
