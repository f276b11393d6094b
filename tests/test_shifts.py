from datetime import date, datetime, timezone

import pytest

from models import Event, EventKind, ShiftInterval
from timeline import (
    LEGACY_REFERENCE_DATE,
    expand_shift,
    occurrence_at,
    occurrence_on_local_date,
    shift_for_local_date,
    shift_for_weekday,
    shift_from_template,
    shift_to_template,
    shifts_from_template
)

from conftest import SYDNEY, at

MONDAY = date(2025, 3, 3)


def test_expand_on_matching_weekday(monday_shift):
    occ = expand_shift(monday_shift, MONDAY, SYDNEY)
    assert occ.start == at(SYDNEY, 2025, 3, 3, 9)
    assert occ.end == at(SYDNEY, 2025, 3, 3, 17)
    assert occ.shift is monday_shift


def test_expand_on_other_weekday_yields_nothing(monday_shift):
    assert expand_shift(monday_shift, date(2025, 3, 4), SYDNEY) is None


def test_expand_tracks_daylight_saving():
    friday = ShiftInterval(profile_id="p1", day_of_week=5, start_minute=540, end_minute=1020)
    before = expand_shift(friday, date(2025, 4, 4), SYDNEY)
    after = expand_shift(friday, date(2025, 4, 11), SYDNEY)
    assert before.start == datetime(2025, 4, 3, 22, 0, tzinfo=timezone.utc)
    assert after.start == datetime(2025, 4, 10, 23, 0, tzinfo=timezone.utc)


def test_authored_zone_wins_over_display_zone():
    perth_shift = ShiftInterval(profile_id="p1", day_of_week=1, start_minute=540, end_minute=1020,
                                timezone="Australia/Perth")
    occ = expand_shift(perth_shift, MONDAY, SYDNEY)
    # 09:00 in Perth (UTC+8) is 01:00 UTC
    assert occ.start == datetime(2025, 3, 3, 1, 0, tzinfo=timezone.utc)


def test_malformed_shift_is_skipped():
    bad = ShiftInterval.model_construct(id="bad", profile_id="p1", day_of_week=1,
                                        start_minute=1000, end_minute=900, timezone=None)
    assert expand_shift(bad, MONDAY, SYDNEY) is None


def test_occurrence_is_half_open(monday_shift):
    occ = expand_shift(monday_shift, MONDAY, SYDNEY)
    assert occ.contains(at(SYDNEY, 2025, 3, 3, 9))
    assert occ.contains(at(SYDNEY, 2025, 3, 3, 16, 59, 59))
    assert not occ.contains(at(SYDNEY, 2025, 3, 3, 17))


def test_shift_for_weekday(monday_shift):
    tuesday = ShiftInterval(profile_id="staff_anna", day_of_week=2, start_minute=600, end_minute=900)
    other = ShiftInterval(profile_id="staff_ben", day_of_week=1, start_minute=600, end_minute=900)
    shifts = [other, tuesday, monday_shift]
    assert shift_for_weekday(shifts, "staff_anna", 1) is monday_shift
    assert shift_for_weekday(shifts, "staff_anna", 2) is tuesday
    assert shift_for_weekday(shifts, "staff_anna", 3) is None


class TestLegacyTemplates:
    def _template(self, **extra):
        return Event(
            id="wh_1",
            profile_id="p1",
            title="Working hours",
            kind=EventKind.WORKING_HOURS,
            start=datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
            end=datetime(2024, 1, 1, 17, 30, tzinfo=timezone.utc),
            is_recurring=True,
            **extra
        )

    def test_reference_date_is_monday(self):
        assert LEGACY_REFERENCE_DATE.weekday() == 0

    def test_template_becomes_utc_shift(self):
        shift = shift_from_template(self._template())
        assert (shift.start_minute, shift.end_minute) == (540, 1050)
        assert shift.day_of_week == 1
        assert shift.timezone == "UTC"

    def test_template_with_pattern_expands_per_weekday(self):
        shifts = shifts_from_template(self._template(recurrence_pattern=[1, 3, 5]))
        assert [s.day_of_week for s in shifts] == [1, 3, 5]
        with pytest.raises(ValueError):
            shift_from_template(self._template(recurrence_pattern=[1, 3]))

    def test_template_day_of_week_overrides_reference_weekday(self):
        shift = shift_from_template(self._template(day_of_week=4))
        assert shift.day_of_week == 4

    def test_non_template_rejected(self, make_event):
        meeting = make_event("m1", at(SYDNEY, 2025, 3, 3, 10), at(SYDNEY, 2025, 3, 3, 11))
        with pytest.raises(ValueError):
            shifts_from_template(meeting)

    def test_template_shift_rezones_for_display(self):
        shift = shift_from_template(self._template())
        occ = expand_shift(shift, MONDAY, SYDNEY)
        assert occ.start == datetime(2025, 3, 3, 9, 0, tzinfo=timezone.utc)

    def test_shift_to_template_round_trip(self):
        wednesday = ShiftInterval(id="wh_9", profile_id="p1", day_of_week=3, start_minute=480, end_minute=960)
        template = shift_to_template(wednesday)
        assert template.kind == EventKind.WORKING_HOURS
        assert template.start == datetime(2024, 1, 3, 8, 0, tzinfo=timezone.utc)
        back = shift_from_template(template)
        assert (back.day_of_week, back.start_minute, back.end_minute) == (3, 480, 960)

    def test_sunday_template_lands_at_end_of_reference_week(self):
        sunday = ShiftInterval(profile_id="p1", day_of_week=0, start_minute=600, end_minute=720)
        assert shift_to_template(sunday).start.date() == date(2024, 1, 7)

    def test_zoned_shift_cannot_be_templated(self):
        zoned = ShiftInterval(profile_id="p1", day_of_week=1, start_minute=540, end_minute=600, timezone=SYDNEY)
        with pytest.raises(ValueError):
            shift_to_template(zoned)


def test_unknown_authored_zone_is_skipped():
    bad = ShiftInterval.model_construct(id="bad", profile_id="p1", day_of_week=1,
                                        start_minute=540, end_minute=1020, timezone="Mars/Olympus")
    assert expand_shift(bad, MONDAY, SYDNEY) is None
    assert occurrence_on_local_date(bad, MONDAY, SYDNEY) is None


class TestLocalDateOccurrences:
    """Monday 22:00-23:30 UTC, which is Tuesday 09:00-10:30 in Sydney."""

    @pytest.fixture
    def utc_shift(self):
        return ShiftInterval(id="tpl", profile_id="staff_dan", day_of_week=1, start_minute=1320, end_minute=1410,
                             timezone="UTC")

    def test_occurrence_lands_on_the_next_local_day(self, utc_shift):
        assert occurrence_on_local_date(utc_shift, MONDAY, SYDNEY) is None
        occ = occurrence_on_local_date(utc_shift, date(2025, 3, 4), SYDNEY)
        assert occ.start == datetime(2025, 3, 3, 22, 0, tzinfo=timezone.utc)
        assert occ.end == datetime(2025, 3, 3, 23, 30, tzinfo=timezone.utc)

    def test_occurrence_at(self, utc_shift):
        assert occurrence_at(utc_shift, at(SYDNEY, 2025, 3, 4, 9, 30), SYDNEY) is not None
        assert occurrence_at(utc_shift, at(SYDNEY, 2025, 3, 4, 10, 30), SYDNEY) is None
        assert occurrence_at(utc_shift, at(SYDNEY, 2025, 3, 3, 9, 30), SYDNEY) is None

    def test_zone_less_shift_matches_local_weekday(self, monday_shift):
        occ = occurrence_on_local_date(monday_shift, MONDAY, SYDNEY)
        assert occ.start == at(SYDNEY, 2025, 3, 3, 9)
        assert occurrence_on_local_date(monday_shift, date(2025, 3, 4), SYDNEY) is None

    def test_shift_for_local_date(self, utc_shift, monday_shift):
        shifts = [monday_shift, utc_shift]
        assert shift_for_local_date(shifts, "staff_dan", date(2025, 3, 4), SYDNEY) is utc_shift
        assert shift_for_local_date(shifts, "staff_dan", MONDAY, SYDNEY) is None
        assert shift_for_local_date(shifts, "staff_anna", MONDAY, SYDNEY) is monday_shift
