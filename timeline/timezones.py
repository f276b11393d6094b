"""
Timezone Conversion.

The only place in the core where wall-clock arithmetic happens.
Everything else compares absolute UTC instants; this module converts an
instant into civil fields for a named IANA zone and back again, applying
the zone's offset for that specific date (DST included).
"""

import logging
from dataclasses import dataclass
from datetime import date as date_type, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


class InvalidTimezone(ValueError):
    """Raised when a zone name cannot be resolved."""

    def __init__(self, zone_name):
        self.zone_name = zone_name
        super().__init__(f"Invalid timezone identifier: {zone_name!r}")


@dataclass(frozen=True)
class CivilTime:
    """Wall-clock fields in some zone. Carries no zone of its own."""
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0

    @property
    def date(self) -> date_type:
        return date_type(self.year, self.month, self.day)

    @classmethod
    def on(cls, day: date_type, minute_of_day: int) -> "CivilTime":
        hour, minute = divmod(minute_of_day, 60)
        return cls(day.year, day.month, day.day, hour, minute)


def resolve_zone(zone_name: Optional[str]) -> ZoneInfo:
    if not zone_name or not str(zone_name).strip():
        raise InvalidTimezone(zone_name)
    try:
        return ZoneInfo(str(zone_name).strip())
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise InvalidTimezone(zone_name) from ex


def zone_or_default(zone_name: Optional[str], default_zone: str) -> str:
    """
    Return zone_name if it resolves, otherwise the configured default.
    The default itself must be valid; a bad default raises InvalidTimezone.
    """
    try:
        resolve_zone(zone_name)
        return str(zone_name).strip()
    except InvalidTimezone:
        logger.warning(f"Unknown timezone {zone_name!r}, falling back to {default_zone}")
        resolve_zone(default_zone)
        return default_zone


def to_zoned(instant: datetime, zone_name: str) -> CivilTime:
    """Civil fields of an absolute instant as seen in zone_name."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    local = instant.astimezone(resolve_zone(zone_name))
    return CivilTime(local.year, local.month, local.day, local.hour, local.minute)


def from_zoned(civil: CivilTime, zone_name: str) -> datetime:
    """
    Absolute instant (UTC) for wall-clock fields in zone_name.
    Times inside a DST gap or overlap resolve with fold=0.
    """
    local = datetime(civil.year, civil.month, civil.day, civil.hour, civil.minute,
                     tzinfo=resolve_zone(zone_name))
    return local.astimezone(timezone.utc)


def local_date(instant: datetime, zone_name: str) -> date_type:
    return to_zoned(instant, zone_name).date


def minute_of_day(instant: datetime, zone_name: str) -> int:
    civil = to_zoned(instant, zone_name)
    return civil.hour * 60 + civil.minute


def weekday_index(day: date_type) -> int:
    """Weekday with 0=Sunday ... 6=Saturday (Python's weekday() is 0=Monday)."""
    return (day.weekday() + 1) % 7
