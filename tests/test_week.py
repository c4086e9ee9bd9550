"""Tests for week numbering and day-of-week arithmetic."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from datecalc import DAY, MONDAY, SUNDAY, THURSDAY, WEDNESDAY, WEEK, Calendar, YearWeek

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def at(*args: int, tz: str = "UTC") -> int:
    moment = datetime(*args, tzinfo=ZoneInfo(tz))
    return (moment - EPOCH) // timedelta(milliseconds=1)


@pytest.fixture
def cal() -> Calendar:
    return Calendar(tz="UTC", clock=lambda: at(2025, 1, 15, 12))


def test_january_first_mid_week_is_week_one(cal):
    """Test that the partial week holding January 1 is week 1."""
    # Jan 1, 2025 is a Wednesday
    yw = cal.year_week(at(2025, 1, 1, 12), SUNDAY)

    assert yw.year == 2025
    assert yw.week == 1
    assert yw.start == at(2024, 12, 29)
    assert yw.end == at(2025, 1, 4, 23, 59, 59, 999000)
    assert yw.end - yw.start == 6 * DAY + 86399999


def test_following_weeks_count_up(cal):
    """Test week numbers after the first week."""
    assert cal.year_week(at(2025, 1, 5), SUNDAY).week == 2
    assert cal.year_week(at(2025, 1, 8), SUNDAY).week == 2
    assert cal.year_week(at(2025, 1, 12), SUNDAY).week == 3


def test_week_spanning_new_year_belongs_to_later_year(cal):
    """Test that a week is numbered in the year it ends in."""
    december = cal.year_week(at(2024, 12, 31), SUNDAY)
    january = cal.year_week(at(2025, 1, 1), SUNDAY)

    assert december.key == (2025, 1)
    assert december == january


def test_last_week_of_year(cal):
    """Test the final full week of a leap year."""
    yw = cal.year_week(at(2024, 12, 28), SUNDAY)

    assert yw.key == (2024, 52)
    assert yw.start == at(2024, 12, 22)


def test_week_starting_on_january_first(cal):
    """Test a year whose January 1 is the beginning of the week."""
    # Jan 1, 2023 is a Sunday
    yw = cal.year_week(at(2023, 1, 1), SUNDAY)

    assert yw.key == (2023, 1)
    assert yw.start == at(2023, 1, 1)


def test_beginning_of_week_anchor(cal):
    """Test other anchors, including the Thursday default."""
    monday = cal.year_week(at(2025, 1, 6), MONDAY)
    assert monday.key == (2025, 2)
    assert monday.start == at(2025, 1, 6)

    default = cal.year_week(at(2025, 1, 15))
    assert default.key == (2025, 3)
    assert default.start == at(2025, 1, 9)
    assert cal.year_week(at(2025, 1, 15), 42) == default


def test_year_week_defaults_to_clock(cal):
    """Test that the reference defaults to the injected clock."""
    assert cal.year_week(bow=SUNDAY).start == at(2025, 1, 12)


def test_year_week_across_dst(cal):
    """Test that week bounds sit on local midnights across a DST change."""
    pacific = Calendar(tz="US/Pacific")
    yw = pacific.year_week(at(2025, 3, 12, tz="US/Pacific"), SUNDAY)

    assert yw.start == at(2025, 3, 9, tz="US/Pacific")
    assert yw.end == at(2025, 3, 16, tz="US/Pacific") - 1


def test_year_week_str():
    """Test the human-friendly rendering."""
    yw = YearWeek(year=2025, week=3, start=0, end=WEEK - 1)

    assert str(yw).startswith("YearWeek(2025-W03")


def test_year_week_rejects_inverted_span():
    """Test that a week cannot end before it starts."""
    with pytest.raises(ValueError, match="must be <= end"):
        YearWeek(year=2025, week=1, start=10, end=0)


def test_day_of_week(cal):
    """Test day numbers within anchored weeks."""
    # Wednesday Jan 15, 2025
    wednesday = at(2025, 1, 15, 18)

    assert cal.day_of_week(wednesday, SUNDAY) == 4
    assert cal.day_of_week(wednesday, MONDAY) == 3
    assert cal.day_of_week(wednesday, WEDNESDAY) == 1
    assert cal.day_of_week(wednesday, THURSDAY) == 7
    assert cal.day_of_week(wednesday) == 7


@pytest.mark.parametrize("bow", range(7))
def test_day_of_week_is_cyclic(cal, bow):
    """Test that day_of_week repeats every seven days."""
    for day in range(14):
        t = at(2025, 1, 1, 9) + day * DAY
        assert 1 <= cal.day_of_week(t, bow) <= 7
        assert cal.day_of_week(t + 7 * DAY, bow) == cal.day_of_week(t, bow)
