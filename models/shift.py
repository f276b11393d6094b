"""
Recurring shift data models for the Roster Calendar.

This module defines the 'Supply' side of the calendar:
a staff member's standing weekly working hours, one block per weekday.
Shifts are timezone-agnostic minute-of-day ranges; the zone they were
authored in travels with them so they can be materialised on any date.
"""

from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict

MINUTES_PER_DAY = 1440


class ShiftInterval(BaseModel):
    """
    A recurring weekly availability block for one staff member.
    Same-day only: a shift never wraps past midnight.
    """

    # --- Identity ---
    id: Optional[str] = Field(default=None, description="Row identifier in the persistence layer")
    profile_id: str = Field(min_length=1, description="Staff member the shift belongs to")

    # --- Recurrence ---
    day_of_week: int = Field(ge=0, le=6, description="0=Sunday, 6=Saturday")
    start_minute: int = Field(ge=0, lt=MINUTES_PER_DAY, description="Shift start, minutes after midnight")
    end_minute: int = Field(ge=0, lt=MINUTES_PER_DAY, description="Shift end, minutes after midnight")

    # --- Context ---
    timezone: Optional[str] = Field(
        default=None,
        description="IANA zone the shift was authored in. None = interpret in the display zone."
    )

    @field_validator('timezone')
    @classmethod
    def timezone_must_resolve(cls, v):
        if v is None or not v.strip():
            return None
        try:
            ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError) as ex:
            raise ValueError(f"Invalid timezone identifier: {v!r}") from ex
        return v.strip()

    @model_validator(mode='after')
    def validate_same_day(self):
        if self.start_minute >= self.end_minute:
            raise ValueError("Shift end must be strictly after start (overnight shifts are not supported)")
        return self

    @classmethod
    def from_hours(
        cls,
        profile_id: str,
        day_of_week: int,
        start_hour: int,
        start_minute: int,
        end_hour: int,
        end_minute: int,
        **extra
    ) -> "ShiftInterval":
        """Build a shift from a weekly-hours row (separate hour and minute columns)."""
        for label, value, limit in (
            ("start_hour", start_hour, 23),
            ("end_hour", end_hour, 23),
            ("start_minute", start_minute, 59),
            ("end_minute", end_minute, 59),
        ):
            if not 0 <= value <= limit:
                raise ValueError(f"Invalid time value for {label}: {value}")

        return cls(
            profile_id=profile_id,
            day_of_week=day_of_week,
            start_minute=start_hour * 60 + start_minute,
            end_minute=end_hour * 60 + end_minute,
            **extra
        )

    @property
    def duration_minutes(self) -> int:
        return self.end_minute - self.start_minute

    def is_well_formed(self) -> bool:
        """
        Re-check the invariants without raising.
        Records built with model_construct() skip validation, so the core
        calls this before trusting a shift.
        """
        try:
            return (
                0 <= self.day_of_week <= 6
                and 0 <= self.start_minute < self.end_minute < MINUTES_PER_DAY
            )
        except TypeError:
            return False

    model_config = ConfigDict(frozen=True, json_schema_extra={
        "example": {
            "id": "wh_001",
            "profile_id": "staff_anna",
            "day_of_week": 1,
            "start_minute": 540,
            "end_minute": 1020,
            "timezone": "Australia/Sydney"
        }
    })
