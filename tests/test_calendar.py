"""Tests for date normalization, weekdays and year/month boundaries."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from datecalc import (
    FRIDAY,
    MONDAY,
    SATURDAY,
    WEDNESDAY,
    Calendar,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def at(*args: int, tz: str = "UTC") -> int:
    """Epoch milliseconds of a wall-clock time in the given zone."""
    moment = datetime(*args, tzinfo=ZoneInfo(tz))
    return (moment - EPOCH) // timedelta(milliseconds=1)


NOW = at(2025, 1, 15, 12)  # Wednesday


@pytest.fixture
def cal() -> Calendar:
    return Calendar(tz="UTC", clock=lambda: NOW)


@pytest.fixture
def pacific() -> Calendar:
    return Calendar(tz="US/Pacific", clock=lambda: NOW)


def test_unknown_timezone_raises():
    """Test that an unknown zone name is rejected at construction."""
    with pytest.raises(ValueError, match="Unknown timezone"):
        Calendar(tz="Not/AZone")


def test_to_instant_accepts_datetimes_dates_and_numbers(cal):
    """Test normalization of the supported input types."""
    new_year = 1735689600000

    assert cal.to_instant(datetime(2025, 1, 1, tzinfo=timezone.utc)) == new_year
    assert cal.to_instant(date(2025, 1, 1)) == new_year
    assert cal.to_instant(new_year) == new_year
    assert cal.to_instant(12.9) == 12


def test_to_instant_reads_naive_values_in_calendar_zone(pacific):
    """Test that naive datetimes and dates are wall time in the zone."""
    midnight = at(2025, 1, 1, tz="US/Pacific")

    assert pacific.to_instant(datetime(2025, 1, 1)) == midnight
    assert pacific.to_instant(date(2025, 1, 1)) == midnight
    assert pacific.to_instant("2025-01-01") == midnight


def test_to_instant_parses_strings(cal):
    """Test that ISO strings with and without offsets are parsed."""
    assert cal.to_instant("2025-01-01T00:00:00Z") == at(2025, 1, 1)
    assert cal.to_instant("2025-01-01T00:00:00-08:00") == at(2025, 1, 1, 8)


def test_to_instant_falls_back_to_clock(cal):
    """Test that unreadable values resolve to the current time."""
    assert cal.to_instant() == NOW
    assert cal.to_instant(None) == NOW
    assert cal.to_instant("garbage") == NOW
    assert cal.to_instant(float("nan")) == NOW
    assert cal.to_instant(float("inf")) == NOW
    assert cal.to_instant(True) == NOW
    assert cal.to_instant([2025, 1, 1]) == NOW


def test_now_returns_aware_datetime(pacific):
    """Test that now() gives a datetime in the calendar's zone."""
    moment = pacific.now()

    assert moment.utcoffset() == timedelta(hours=-8)
    assert (moment.year, moment.month, moment.day, moment.hour) == (2025, 1, 15, 4)


def test_is_valid_weekday(cal):
    """Test the weekday range check."""
    assert cal.is_valid_weekday(0)
    assert cal.is_valid_weekday(6)
    assert cal.is_valid_weekday(3.5)

    assert not cal.is_valid_weekday(-1)
    assert not cal.is_valid_weekday(7)
    assert not cal.is_valid_weekday(float("nan"))
    assert not cal.is_valid_weekday(True)
    assert not cal.is_valid_weekday("1")
    assert not cal.is_valid_weekday(None)


def test_nearest_weekday_stays_in_week(cal):
    """Test that the nearest weekday shifts within the reference's week."""
    # Wednesday Jan 15, 2025 at noon
    assert cal.nearest_weekday(MONDAY, NOW) == at(2025, 1, 13, 12)
    assert cal.nearest_weekday(SATURDAY, NOW) == at(2025, 1, 18, 12)
    assert cal.nearest_weekday(WEDNESDAY, NOW) == NOW


def test_nearest_weekday_defaults(cal):
    """Test the clock default and the Thursday fallback for bad days."""
    assert cal.nearest_weekday(MONDAY) == at(2025, 1, 13, 12)
    assert cal.nearest_weekday(9, NOW) == at(2025, 1, 16, 12)
    assert cal.nearest_weekday(None, NOW) == at(2025, 1, 16, 12)


def test_future_weekday_never_before_reference(cal):
    """Test that future_weekday moves a week ahead when needed."""
    assert cal.future_weekday(MONDAY, NOW) == at(2025, 1, 20, 12)
    assert cal.future_weekday(FRIDAY, NOW) == at(2025, 1, 17, 12)
    assert cal.future_weekday(WEDNESDAY, NOW) == NOW


def test_past_weekday_never_after_reference(cal):
    """Test that past_weekday moves a week back when needed."""
    assert cal.past_weekday(FRIDAY, NOW) == at(2025, 1, 10, 12)
    assert cal.past_weekday(MONDAY, NOW) == at(2025, 1, 13, 12)
    assert cal.past_weekday(WEDNESDAY, NOW) == NOW


def test_weekday_shift_keeps_wall_time_across_dst(pacific):
    """Test that weekday shifts are calendar days, not 24h blocks."""
    # Wednesday after the March 9, 2025 DST change
    ref = at(2025, 3, 12, 9, tz="US/Pacific")

    assert pacific.past_weekday(0, ref) == at(2025, 3, 9, 9, tz="US/Pacific")
    assert pacific.past_weekday(SATURDAY, ref) == at(2025, 3, 8, 9, tz="US/Pacific")


def test_day_of_year(cal):
    """Test ordinal days including the leap-year adjustment."""
    assert cal.day_of_year(at(2023, 1, 1)) == 1
    assert cal.day_of_year(at(2023, 3, 1)) == 60
    assert cal.day_of_year(at(2024, 3, 1)) == 61
    assert cal.day_of_year(at(2024, 2, 29)) == 60
    assert cal.day_of_year(at(2023, 12, 31)) == 365
    assert cal.day_of_year(at(2024, 12, 31)) == 366


def test_is_leap_year(cal):
    """Test the Gregorian leap-year rule."""
    assert cal.is_leap_year(at(2024, 6, 1))
    assert cal.is_leap_year(at(2000, 6, 1))
    assert not cal.is_leap_year(at(2023, 6, 1))
    assert not cal.is_leap_year(at(1900, 6, 1))
    assert not cal.is_leap_year(at(2100, 6, 1))


def test_first_and_last_of_year(cal):
    """Test year boundaries and the current-year default."""
    assert cal.first_of_year(2024) == at(2024, 1, 1)
    assert cal.last_of_year(2024) == at(2025, 1, 1) - 1
    assert cal.first_of_year() == at(2025, 1, 1)
    assert cal.last_of_year() == at(2026, 1, 1) - 1


def test_year_boundaries_local_and_utc(pacific):
    """Test that utc=True ignores the calendar's zone."""
    assert pacific.first_of_year(2024) == at(2024, 1, 1, tz="US/Pacific")
    assert pacific.first_of_year(2024, utc=True) == at(2024, 1, 1)
    assert pacific.last_of_year(2024, utc=True) == at(2024, 12, 31, 23, 59, 59, 999000)


@pytest.mark.parametrize(
    "year,expected",
    [(1900, 365), (2000, 366), (2023, 365), (2024, 366), (2100, 365)],
)
def test_days_in_year(cal, year, expected):
    """Test that days_in_year agrees with the leap-year rule."""
    assert cal.days_in_year(year) == expected
    assert (cal.days_in_year(year) == 366) == cal.is_leap_year(cal.first_of_year(year))


def test_month_boundaries(cal):
    """Test first/last of month with 0-based months."""
    assert cal.first_of_month(0, 2025) == at(2025, 1, 1)
    assert cal.first_of_month(1, 2024) == at(2024, 2, 1)
    assert cal.last_of_month(1, 2024) == at(2024, 3, 1) - 1
    assert cal.last_of_month(11, 2024) == at(2025, 1, 1) - 1


def test_month_index_rolls_into_adjacent_years(cal):
    """Test that out-of-range month indexes normalize like a calendar."""
    assert cal.first_of_month(12, 2024) == at(2025, 1, 1)
    assert cal.first_of_month(13, 2024) == at(2025, 2, 1)
    assert cal.first_of_month(-1, 2024) == at(2023, 12, 1)
    assert cal.first_of_month(-13, 2024) == at(2022, 12, 1)


def test_days_in_month(cal):
    """Test month lengths."""
    assert cal.days_in_month(0, 2025) == 31
    assert cal.days_in_month(1, 2023) == 28
    assert cal.days_in_month(1, 2024) == 29
    assert cal.days_in_month(3, 2024) == 30
    assert cal.days_in_month(13, 2024) == 28


def test_month_boundaries_in_local_zone(pacific):
    """Test that months start at local midnight unless utc is set."""
    assert pacific.first_of_month(2, 2025) == at(2025, 3, 1, tz="US/Pacific")
    assert pacific.first_of_month(2, 2025, utc=True) == at(2025, 3, 1)
    assert pacific.days_in_month(2, 2025) == 31
    assert pacific.days_in_month(1, 2024, utc=True) == 29


def test_out_of_range_instants_fall_back_to_clock(cal):
    """Test that values beyond the supported years read as the current time."""
    assert cal.to_instant(10**15) == NOW
    assert cal.to_instant(-(10**15)) == NOW
    assert cal.to_instant(10**400) == NOW
    assert cal.to_instant(1e300) == NOW
    assert cal.to_instant(datetime(9999, 12, 31, tzinfo=timezone.utc)) == NOW
    assert cal.to_instant(date(1, 1, 1)) == NOW
    assert cal.floor(10**15, "day") == at(2025, 1, 15)
    assert cal.utc_offset(10**15) == 0
    assert not cal.is_valid_weekday(10**400)


def test_far_dates_inside_supported_range(cal):
    """Test that distant but supported dates are kept."""
    far = at(9000, 6, 15)

    assert cal.to_instant(far) == far
    assert cal.floor(far, "year") == at(9000, 1, 1)
    assert cal.to_instant(datetime(100, 1, 1, tzinfo=timezone.utc)) == at(100, 1, 1)
