"""
Calendar configuration.

The default zone and day-window constants are plain values handed to the
core by the caller. Nothing in the core reads them implicitly.
"""

import os
from typing import Mapping, Optional, Tuple
from pydantic import BaseModel, Field, field_validator, model_validator

from .timezones import resolve_zone

DEFAULT_TIMEZONE = "Australia/Brisbane"
DAY_START_HOUR = 6
DAY_END_HOUR = 20
DEFAULT_PADDING_MINUTES = 60
MIN_SPAN_HOURS = 8


class CalendarSettings(BaseModel):
    """Values the UI layer threads into every core call."""

    default_timezone: str = Field(default=DEFAULT_TIMEZONE, description="Fallback IANA zone")
    day_start_hour: int = Field(default=DAY_START_HOUR, ge=0, le=23)
    day_end_hour: int = Field(default=DAY_END_HOUR, ge=1, le=24)
    padding_minutes: int = Field(default=DEFAULT_PADDING_MINUTES, ge=0)
    min_span_hours: int = Field(default=MIN_SPAN_HOURS, ge=1, le=24)

    @field_validator('default_timezone')
    @classmethod
    def validate_zone(cls, v):
        resolve_zone(v)  # InvalidTimezone is a ValueError, surfaced as ValidationError
        return v.strip()

    @model_validator(mode='after')
    def validate_window(self):
        if self.day_end_hour <= self.day_start_hour:
            raise ValueError("day_end_hour must be after day_start_hour")
        return self

    @property
    def default_range(self) -> Tuple[int, int]:
        return (self.day_start_hour, self.day_end_hour)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CalendarSettings":
        """Read overrides from ROSTER_* environment variables."""
        env = os.environ if environ is None else environ
        overrides = {}

        for key, field_name in (
            ("ROSTER_DEFAULT_TZ", "default_timezone"),
            ("ROSTER_DAY_START_HOUR", "day_start_hour"),
            ("ROSTER_DAY_END_HOUR", "day_end_hour"),
            ("ROSTER_PADDING_MINUTES", "padding_minutes"),
            ("ROSTER_MIN_SPAN_HOURS", "min_span_hours"),
        ):
            value = env.get(key)
            if value:
                overrides[field_name] = value

        return cls(**overrides)
