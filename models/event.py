"""
Event data models for the Roster Calendar.

An Event is a concrete, dated block on a staff member's day:
a meeting, a personal block, leave, or an expanded working-hours occurrence.
All instants are stored in UTC.
"""

from enum import Enum
from typing import Optional, List
from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict


class EventKind(str, Enum):
    """Categorization of calendar events."""
    MEETING = "meeting"
    PERSONAL = "personal"
    LEAVE = "leave"
    WORKING_HOURS = "workingHours"


class Event(BaseModel):
    """
    A single occurrence on the calendar.
    The interval is [start, end) in absolute time and must be non-empty.
    """

    # --- Core Identity ---
    id: str = Field(description="Unique identifier for the event")
    profile_id: str = Field(min_length=1, description="Staff member the event belongs to")
    title: str = Field(default="", description="Human-readable label")
    kind: EventKind = Field(default=EventKind.MEETING, description="Category of the event")

    # --- Timing ---
    start: datetime = Field(description="Start instant (UTC)")
    end: datetime = Field(description="End instant (UTC)")

    is_all_day: bool = Field(
        default=False,
        description="Only meaningful for leave: the event covers the whole visible day"
    )

    # --- Recurring shift templates ---
    is_recurring: bool = Field(default=False)
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6, description="0=Sunday, 6=Saturday")
    recurrence_pattern: List[int] = Field(
        default_factory=list,
        description="Weekdays (0=Sunday) the template repeats on"
    )

    @field_validator('start', 'end')
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC; aware ones are converted."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_validator('recurrence_pattern')
    @classmethod
    def validate_weekdays(cls, v):
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f"Recurrence weekday out of range: {day}")
        return sorted(set(v))

    @model_validator(mode='after')
    def validate_interval(self):
        if self.end <= self.start:
            raise ValueError("Event end must be strictly after start")
        return self

    def is_well_formed(self) -> bool:
        """Non-raising invariant check for records that bypassed validation."""
        try:
            return (
                self.start.tzinfo is not None
                and self.end.tzinfo is not None
                and self.end > self.start
            )
        except (AttributeError, TypeError):
            return False

    model_config = ConfigDict(frozen=True, json_schema_extra={
        "example": {
            "id": "evt_sync_01",
            "profile_id": "staff_anna",
            "title": "Team sync",
            "kind": "meeting",
            "start": "2025-03-02T23:00:00Z",
            "end": "2025-03-02T23:30:00Z",
            "is_all_day": False
        }
    })
