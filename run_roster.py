"""
Day Board Runner for the Roster Calendar.

Loads a snapshot of shifts and events from JSON, runs the scheduling core
for one date and writes the derived board (status, lanes, conflicts,
next change, visible window) back out as JSON.

Usage: python run_roster.py [dataset.json] [YYYY-MM-DD]
"""

import os
import sys
import logging
import json
from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from models import Event, EventKind, ShiftInterval
from timeline import (
    CalendarSettings,
    compute_day_range,
    compute_status,
    find_conflicts,
    layout_events,
    local_date,
    next_block_for_user,
    next_change,
    place_event,
    shift_for_local_date,
    shifts_from_template,
    split_all_day_leave,
    zone_or_default
)

logger = logging.getLogger("Roster")

# --- CONFIGURATION ---
DATASET_FILENAME = "roster_data.json"
BOARD_FILENAME = "board_data.json"
# ---------------------


def _parse_shift(item: dict) -> ShiftInterval:
    """Accept both minute-of-day rows and hour/minute weekly-hours rows."""
    if "start_hour" in item:
        return ShiftInterval.from_hours(
            profile_id=item["profile_id"],
            day_of_week=item["day_of_week"],
            start_hour=item["start_hour"],
            start_minute=item.get("start_minute", 0),
            end_hour=item["end_hour"],
            end_minute=item.get("end_minute", 0),
            id=item.get("id"),
            timezone=item.get("timezone")
        )
    return ShiftInterval(**item)


def load_dataset(filename: str) -> Tuple[List[ShiftInterval], List[Event]]:
    """
    Re-hydrate pydantic models from a JSON snapshot.
    Invalid rows are logged and dropped; legacy workingHours templates become shifts.
    """
    with open(filename, 'r') as f:
        data = json.load(f)

    shifts: List[ShiftInterval] = []
    events: List[Event] = []

    for item in data.get('shifts', []):
        try:
            shifts.append(_parse_shift(item))
        except (ValidationError, ValueError, KeyError) as e:
            logger.warning(f"Dropping invalid shift row {item.get('id')}: {e}")

    for item in data.get('events', []):
        try:
            event = Event(**item)
        except ValidationError as e:
            logger.warning(f"Dropping invalid event row {item.get('id')}: {e}")
            continue

        if event.kind == EventKind.WORKING_HOURS and event.is_recurring:
            try:
                shifts.extend(shifts_from_template(event))
            except ValueError as e:
                logger.warning(f"Dropping workingHours template {event.id}: {e}")
            continue
        events.append(event)

    logger.info(f"Loaded {len(shifts)} shifts and {len(events)} events from {filename}")
    return shifts, events


def _events_on_date(events: List[Event], day: date, zone: str) -> Dict[str, List[Event]]:
    """Events touching `day` in `zone`, grouped by profile."""
    by_profile: Dict[str, List[Event]] = defaultdict(list)
    for event in events:
        if local_date(event.start, zone) <= day <= local_date(event.end, zone):
            by_profile[event.profile_id].append(event)
    return by_profile


def build_day_board(
    day: date,
    shifts: List[ShiftInterval],
    events: List[Event],
    zone: str,
    now: datetime,
    settings: CalendarSettings
) -> dict:
    """Run every derived view for one date and collect a JSON-ready board."""
    events_by_profile = _events_on_date(events, day, zone)
    profile_ids = sorted({s.profile_id for s in shifts} | set(events_by_profile))

    shifts_by_profile: Dict[str, ShiftInterval] = {}
    for profile_id in profile_ids:
        shift = shift_for_local_date(shifts, profile_id, day, zone)
        if shift:
            shifts_by_profile[profile_id] = shift

    window = compute_day_range(
        day,
        shifts_by_profile,
        events_by_profile,
        zone,
        padding_minutes=settings.padding_minutes,
        default_range=settings.default_range,
        min_span_hours=settings.min_span_hours
    )
    change_at = next_change(day, shifts_by_profile, events_by_profile, zone, now)

    columns = {}
    for profile_id in profile_ids:
        shift = shifts_by_profile.get(profile_id)
        profile_events = events_by_profile.get(profile_id, [])

        status = compute_status(profile_id, now, zone, shift, profile_events)
        upcoming = next_block_for_user(profile_id, now, zone, shift, profile_events)
        all_day_leave, regular = split_all_day_leave(profile_events, zone)
        layouts = layout_events(regular)
        conflicts = find_conflicts(regular)

        columns[profile_id] = {
            "status": status.status.value,
            "current_event": status.current_event.id if status.current_event else None,
            "on_leave": bool(all_day_leave),
            "next_block": upcoming.model_dump(mode='json') if upcoming else None,
            "blocks": [
                {
                    "event_id": event.id,
                    "title": event.title,
                    "kind": event.kind.value,
                    "conflict": conflicts[event.id],
                    "layout": layouts[event.id].model_dump(mode='json'),
                    "placement": place_event(event, zone, window, day).model_dump(mode='json')
                }
                for event in regular
                if event.id in layouts
            ]
        }

        if status.current_event:
            logger.debug(f"{profile_id}: {status.status.value} ({status.current_event.title})")
        else:
            logger.debug(f"{profile_id}: {status.status.value}")

    return {
        "date": day.isoformat(),
        "timezone": zone,
        "generated_at": now.isoformat(),
        "window": window.model_dump(mode='json'),
        "next_change": change_at.isoformat() if change_at else None,
        "columns": columns
    }


def export_board_data(board: dict, filename: str = BOARD_FILENAME) -> None:
    with open(filename, 'w') as f:
        json.dump(board, f, indent=2)
    logger.info(f"Board exported to {filename}")


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    settings = CalendarSettings.from_env()
    display_zone = os.environ.get("ROSTER_DISPLAY_TZ")
    zone = zone_or_default(display_zone, settings.default_timezone) if display_zone else settings.default_timezone
    dataset = argv[0] if argv else DATASET_FILENAME
    now = datetime.now(timezone.utc)
    day = date.fromisoformat(argv[1]) if len(argv) > 1 else local_date(now, zone)

    try:
        shifts, events = load_dataset(dataset)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read dataset {dataset}: {e}")
        return 1

    board = build_day_board(day, shifts, events, zone, now, settings)

    working = sum(1 for c in board["columns"].values() if c["status"] == "working")
    busy = sum(1 for c in board["columns"].values() if c["status"] == "busy")
    logger.info(f"{day.isoformat()} in {zone}: {working} working, {busy} busy, "
                f"window {board['window']['start_hour']}:00-{board['window']['end_hour']}:00, "
                f"next change {board['next_change'] or 'none'}")

    export_board_data(board)
    return 0


if __name__ == "__main__":
    sys.exit(main())
