from datetime import date, datetime, timezone

import pytest

from timeline import (
    CivilTime,
    InvalidTimezone,
    from_zoned,
    local_date,
    minute_of_day,
    resolve_zone,
    to_zoned,
    weekday_index,
    zone_or_default
)

from conftest import SYDNEY, BRISBANE


def test_to_zoned_applies_daylight_saving():
    # Sydney is UTC+11 in January and UTC+10 in July
    summer = to_zoned(datetime(2025, 1, 15, 0, 0, tzinfo=timezone.utc), SYDNEY)
    winter = to_zoned(datetime(2025, 7, 15, 0, 0, tzinfo=timezone.utc), SYDNEY)
    assert (summer.hour, winter.hour) == (11, 10)


def test_brisbane_has_no_daylight_saving():
    summer = to_zoned(datetime(2025, 1, 15, 0, 0, tzinfo=timezone.utc), BRISBANE)
    winter = to_zoned(datetime(2025, 7, 15, 0, 0, tzinfo=timezone.utc), BRISBANE)
    assert summer.hour == winter.hour == 10


def test_from_zoned_is_inverse_of_to_zoned():
    civil = CivilTime(2025, 3, 3, 9, 15)
    instant = from_zoned(civil, SYDNEY)
    assert instant == datetime(2025, 3, 2, 22, 15, tzinfo=timezone.utc)
    assert to_zoned(instant, SYDNEY) == civil


def test_from_zoned_uses_offset_of_that_date():
    before = from_zoned(CivilTime(2025, 4, 4, 9, 0), SYDNEY)
    after = from_zoned(CivilTime(2025, 4, 11, 9, 0), SYDNEY)
    assert before.hour == 22
    assert after.hour == 23


def test_naive_instant_is_treated_as_utc():
    assert to_zoned(datetime(2025, 3, 2, 22, 15), SYDNEY) == CivilTime(2025, 3, 3, 9, 15)


def test_local_date_and_minute_of_day():
    instant = datetime(2025, 3, 2, 22, 15, tzinfo=timezone.utc)
    assert local_date(instant, SYDNEY) == date(2025, 3, 3)
    assert local_date(instant, "UTC") == date(2025, 3, 2)
    assert minute_of_day(instant, SYDNEY) == 9 * 60 + 15


@pytest.mark.parametrize("name", ["Mars/Olympus_Mons", "", None, "   "])
def test_invalid_zone(name):
    with pytest.raises(InvalidTimezone):
        resolve_zone(name)


def test_invalid_zone_is_a_value_error():
    with pytest.raises(ValueError):
        to_zoned(datetime(2025, 1, 1, tzinfo=timezone.utc), "Not/AZone")


def test_zone_or_default_falls_back():
    assert zone_or_default("Not/AZone", BRISBANE) == BRISBANE
    assert zone_or_default(None, BRISBANE) == BRISBANE
    assert zone_or_default(SYDNEY, BRISBANE) == SYDNEY


def test_zone_or_default_rejects_bad_default():
    with pytest.raises(InvalidTimezone):
        zone_or_default("Not/AZone", "Also/NotAZone")


def test_weekday_index_starts_on_sunday():
    assert weekday_index(date(2025, 3, 2)) == 0  # Sunday
    assert weekday_index(date(2025, 3, 3)) == 1  # Monday
    assert weekday_index(date(2025, 3, 8)) == 6  # Saturday


def test_civil_time_on():
    assert CivilTime.on(date(2025, 3, 3), 17 * 60 + 30) == CivilTime(2025, 3, 3, 17, 30)
