import logging
import math
from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from time import time as current_time
from typing import Any, TypeAlias
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser
from dateutil.tz import tzlocal

from datecalc.fields import fields_for
from datecalc.precision import FIXED_UNITS, Precision, resolve
from datecalc.util import DAY, JANUARY, JULY, SATURDAY, SUNDAY, THURSDAY
from datecalc.week import YearWeek

logger = logging.getLogger(__name__)

DateLike: TypeAlias = datetime | date | int | float | str | None
RoundFn: TypeAlias = Callable[[float], int]
DateRoundFn: TypeAlias = Callable[[Any, Any], Any]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NAIVE_EPOCH = datetime(1970, 1, 1)
_ONE_MS = timedelta(milliseconds=1)

# Supported Instants, with a year of headroom on both sides of the datetime
# range so that zone conversion and year rounding stay representable
_MIN_INSTANT = (datetime(2, 1, 1, tzinfo=timezone.utc) - _EPOCH) // _ONE_MS
_MAX_INSTANT = (datetime(9998, 1, 1, tzinfo=timezone.utc) - _EPOCH) // _ONE_MS

# Days before the first of each month in a common year
_DAY_COUNT = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


def system_clock() -> int:
    """Return the host's current time as an Instant."""
    return int(current_time() * 1000)


def _weekday(moment: datetime | date) -> int:
    """Day of the week with Sunday as 0."""
    return (moment.weekday() + 1) % 7


class Calendar:
    """Calendar boundary, rounding and comparison arithmetic.

    Every value the calendar returns is an Instant: an integer count of
    milliseconds since the Unix epoch. Inputs may be datetimes, dates,
    millisecond numbers or parseable strings and are normalized with
    `to_instant`. Wall-clock arithmetic (day boundaries, weekdays, months)
    happens in the calendar's zone.

    Supported Instants run from 0002-01-01 up to (not including) 9998-01-01
    UTC. Inputs outside that range are read as the current time, like any
    other unreadable value.
    """

    def __init__(
        self, tz: str | None = None, clock: Callable[[], int] | None = None
    ):
        """
        Initialize a calendar.

        Args:
            tz: IANA timezone name (e.g., "UTC", "US/Pacific"), or None for the
                host's local zone
            clock: Zero-argument callable returning the current Instant.
                Defaults to the host clock.
        """
        self.zone: tzinfo
        if tz is None:
            self.zone = tzlocal()
        else:
            try:
                self.zone = ZoneInfo(tz)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError(
                    f"Unknown timezone {tz!r}.\n"
                    f"Hint: Use an IANA name such as 'UTC' or 'US/Pacific',\n"
                    f"      or tz=None for the host's local zone."
                ) from exc
        self.clock: Callable[[], int] = clock or system_clock

    # -- conversions -------------------------------------------------------

    def _local(self, instant: int) -> datetime:
        return (_EPOCH + timedelta(milliseconds=instant)).astimezone(self.zone)

    def _moment(self, instant: int, utc: bool) -> datetime:
        if utc:
            return _EPOCH + timedelta(milliseconds=instant)
        return self._local(instant)

    @staticmethod
    def _instant(moment: datetime) -> int:
        return (moment - _EPOCH) // _ONE_MS

    def _from_wall(self, wall: int, fold: int = 0) -> int:
        """Resolve milliseconds of local wall-clock time to an Instant."""
        naive = _NAIVE_EPOCH + timedelta(milliseconds=wall)
        return self._instant(naive.replace(tzinfo=self.zone, fold=fold))

    def _calendar_instant(
        self, year: int, month: int, day: int = 1, utc: bool = False
    ) -> int:
        """Midnight of a calendar day, rolling a 0-based month into the year."""
        year += month // 12
        month %= 12
        zone = timezone.utc if utc else self.zone
        return self._instant(datetime(year, month + 1, day, tzinfo=zone))

    def _shift_days(self, instant: int, days: int) -> int:
        """Move by whole calendar days, keeping the wall-clock time."""
        return self._instant(self._local(instant) + timedelta(days=days))

    def _current_year(self) -> int:
        return self._local(self.clock()).year

    def to_instant(self, value: Any = None) -> int:
        """Normalize a date-like value to an Instant.

        Accepts:
        - datetime: aware values use their own offset, naive values are read
          as wall time in the calendar's zone
        - date: midnight of that day in the calendar's zone
        - int/float: milliseconds since the epoch (truncated)
        - str: anything dateutil can parse

        Anything else, an unparseable string, a non-finite number or a date
        outside years 2 to 9997 falls back to the current time.
        """
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=self.zone)
            return self._bounded(self._instant(value), value)
        if isinstance(value, date):
            moment = datetime.combine(value, time.min, tzinfo=self.zone)
            return self._bounded(self._instant(moment), value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            if isinstance(value, int) or math.isfinite(value):
                return self._bounded(int(value), value)
        elif isinstance(value, str):
            today = self._local(self.clock()).replace(
                hour=0, minute=0, second=0, microsecond=0
            )
            try:
                parsed = date_parser.parse(value, default=today)
            except (ValueError, OverflowError):
                logger.debug("Unparseable date string %r, using current time", value)
            else:
                return self.to_instant(parsed)

        if value is not None:
            logger.debug("Cannot read %r as a date, using current time", value)
        return self.clock()

    def _bounded(self, instant: int, value: Any) -> int:
        if _MIN_INSTANT <= instant < _MAX_INSTANT:
            return instant
        logger.debug(
            "%r is outside the supported date range, using current time", value
        )
        return self.clock()

    def now(self, value: Any = None) -> datetime:
        """Return `value` (default: the current time) as an aware datetime."""
        return self._local(self.to_instant(value))

    # -- weekdays ----------------------------------------------------------

    def is_valid_weekday(self, n: Any) -> bool:
        return (
            isinstance(n, (int, float))
            and not isinstance(n, bool)
            and (isinstance(n, int) or math.isfinite(n))
            and SUNDAY <= n <= SATURDAY
        )

    def nearest_weekday(self, day: Any, ref: Any = None) -> int:
        """Return the reference moved within its week to the given weekday.

        The reference shifts by (day - reference weekday) calendar days, so
        the wall-clock time is kept. An invalid day selects Thursday.
        """
        day = int(day) if self.is_valid_weekday(day) else THURSDAY
        moment = self._local(self.to_instant(ref))
        return self._instant(moment + timedelta(days=day - _weekday(moment)))

    def future_weekday(self, day: Any, ref: Any = None) -> int:
        """Like `nearest_weekday`, but never earlier than the reference."""
        instant = self.to_instant(ref)
        nearest = self.nearest_weekday(day, instant)
        if nearest < instant:
            nearest = self._shift_days(nearest, 7)
        return nearest

    def past_weekday(self, day: Any, ref: Any = None) -> int:
        """Like `nearest_weekday`, but never later than the reference."""
        instant = self.to_instant(ref)
        nearest = self.nearest_weekday(day, instant)
        if nearest > instant:
            nearest = self._shift_days(nearest, -7)
        return nearest

    def day_of_week(self, ref: Any = None, bow: Any = None) -> int:
        """Day number (1-7) within the week that begins on weekday `bow`."""
        instant = self.to_instant(ref)
        day = self._local(instant).date()
        week_start = self._local(self.year_week(instant, bow).start).date()
        return (day - week_start).days % 7 + 1

    # -- years and months --------------------------------------------------

    def is_leap_year(self, ref: Any = None) -> bool:
        year = self._local(self.to_instant(ref)).year
        if year % 4 != 0:
            return False
        return year % 100 != 0 or year % 400 == 0

    def day_of_year(self, ref: Any = None) -> int:
        instant = self.to_instant(ref)
        moment = self._local(instant)
        month = moment.month - 1
        day_of_year = _DAY_COUNT[month] + moment.day
        if month > 1 and self.is_leap_year(instant):
            day_of_year += 1
        return day_of_year

    def first_of_year(self, year: int | None = None, utc: bool = False) -> int:
        """January 1 00:00:00.000 of `year` (default: the current year)."""
        if year is None:
            year = self._current_year()
        return self._calendar_instant(year, JANUARY, utc=utc)

    def last_of_year(self, year: int | None = None, utc: bool = False) -> int:
        """December 31 23:59:59.999 of `year` (default: the current year)."""
        if year is None:
            year = self._current_year()
        return self._calendar_instant(year + 1, JANUARY, utc=utc) - 1

    def days_in_year(self, year: int | None = None) -> int:
        return self.day_of_year(self.last_of_year(year))

    def first_of_month(
        self, month: int, year: int | None = None, utc: bool = False
    ) -> int:
        """Midnight on the first of a month.

        `month` is 0-based and rolls over into neighbouring years, so month 12
        of 2024 is January 2025 and month -1 is December 2023.
        """
        if year is None:
            year = self._current_year()
        return self._calendar_instant(year, month, utc=utc)

    def last_of_month(
        self, month: int, year: int | None = None, utc: bool = False
    ) -> int:
        """The last millisecond of a month (see `first_of_month`)."""
        return self.first_of_month(month + 1, year, utc) - 1

    def days_in_month(
        self, month: int, year: int | None = None, utc: bool = False
    ) -> int:
        return self._moment(self.last_of_month(month, year, utc), utc).day

    # -- offsets -----------------------------------------------------------

    def utc_offset(self, ref: Any = None) -> int:
        """Milliseconds to add to local wall time to get UTC.

        Zones west of Greenwich are positive: US Pacific standard time is
        28800000.
        """
        offset = self._local(self.to_instant(ref)).utcoffset() or timedelta(0)
        return -offset // _ONE_MS

    def standard_offset(self, ref: Any = None) -> int:
        """The non-DST offset of the reference's year.

        Whichever of January 1 and July 1 is further west is taken as
        standard time, which holds in both hemispheres.
        """
        year = self._local(self.to_instant(ref)).year
        return max(
            self.utc_offset(self._calendar_instant(year, JANUARY)),
            self.utc_offset(self._calendar_instant(year, JULY)),
        )

    def dst_offset(self, ref: Any = None) -> int:
        instant = self.to_instant(ref)
        standard = self.standard_offset(instant)
        current = self.utc_offset(instant)
        return standard - current if current < standard else 0

    def is_dst(self, ref: Any = None) -> bool:
        instant = self.to_instant(ref)
        return self.utc_offset(instant) < self.standard_offset(instant)

    # -- weeks -------------------------------------------------------------

    def year_week(self, ref: Any = None, bow: Any = None) -> YearWeek:
        """Return the week containing the reference.

        The week starts at midnight of the most recent `bow` weekday at or
        before the reference and ends on the last millisecond six days
        later. A week belongs to the year it ends in, and week 1 is the week
        containing January 1.

        Numbers count from that week 1 rather than from the first full week
        of the year: with a Sunday start, Sunday January 5, 2025 is week 2
        because the partial week holding Wednesday January 1 is week 1. A
        bare `(days since January 1) / 7` count would call both week 1.
        """
        anchor = self.past_weekday(bow, ref)
        last_day = self._shift_days(anchor, 6)
        year = self._local(last_day).year

        first_anchor = self.past_weekday(bow, self._calendar_instant(year, JANUARY))
        days = (
            self._local(anchor).date() - self._local(first_anchor).date()
        ).days
        week = math.ceil((days + 1) / 7)

        return YearWeek(
            year=year,
            week=week,
            start=self._round_fixed(anchor, DAY, math.floor),
            end=self._round_fixed(last_day + 1, DAY, math.ceil) - 1,
        )

    # -- rounding ----------------------------------------------------------

    def _round_fixed(self, instant: int, unit: int, round_fn: RoundFn) -> int:
        """Round on the local wall clock to a multiple of a fixed unit.

        The UTC offset is removed before rounding and the zone's offset at the
        rounded wall time is put back, so day boundaries stay at local
        midnight across DST changes.
        """
        wall = instant - self.utc_offset(instant)
        remainder = wall % unit
        rounded = wall - remainder + int(round_fn(remainder / unit)) * unit
        if rounded == wall:
            return instant
        return self._from_wall(rounded, fold=self._local(instant).fold)

    @staticmethod
    def _round_span(instant: int, start: int, stop: int, round_fn: RoundFn) -> int:
        """Round an instant inside [start, stop) to one of the two ends."""
        fraction = (instant - start) / (stop - start)
        return stop if round_fn(fraction) >= 1 else start

    def round(
        self,
        instant: Any,
        precision: Precision | str | None = None,
        round_fn: RoundFn | None = None,
        *,
        bow: Any = None,
    ) -> int | None:
        """Round an instant to a precision.

        Args:
            instant: Any date-like value accepted by `to_instant`
            precision: Unit or alias ("ms", "sec", "min", "hr", "day", "week",
                "month", "year"); default millisecond
            round_fn: Maps the fractional position inside the unit to 0 or 1
                (math.floor, math.ceil); default rounds half up
            bow: Beginning of week for week precision (default Thursday)

        Returns:
            The rounded Instant, or None for an unknown precision.
        """
        round_fn = round_fn if callable(round_fn) else round_half_up
        instant = self.to_instant(instant)
        unit = resolve(precision)

        if unit in FIXED_UNITS:
            return self._round_fixed(instant, FIXED_UNITS[unit], round_fn)

        if unit is Precision.WEEK:
            start = self.year_week(instant, bow).start
            stop = self._shift_days(start, 7)
        elif unit is Precision.MONTH:
            moment = self._local(instant)
            start = self.first_of_month(moment.month - 1, moment.year)
            stop = self.first_of_month(moment.month, moment.year)
        elif unit is Precision.YEAR:
            year = self._local(instant).year
            start = self.first_of_year(year)
            stop = self.first_of_year(year + 1)
        else:
            return None

        return self._round_span(instant, start, stop, round_fn)

    def ceil(
        self, instant: Any, precision: Precision | str | None = None, *, bow: Any = None
    ) -> int | None:
        return self.round(instant, precision, math.ceil, bow=bow)

    def floor(
        self, instant: Any, precision: Precision | str | None = None, *, bow: Any = None
    ) -> int | None:
        return self.round(instant, precision, math.floor, bow=bow)

    def start_of(
        self, instant: Any, precision: Precision | str | None = None, *, bow: Any = None
    ) -> int | None:
        return self.floor(instant, precision, bow=bow)

    def end_of(
        self, instant: Any, precision: Precision | str | None = None, *, bow: Any = None
    ) -> int | None:
        """The last millisecond of the precision bucket holding `instant`."""
        ceiled = self.ceil(self.to_instant(instant) + 1, precision, bow=bow)
        if ceiled is None:
            return None
        return ceiled - 1

    # -- comparison --------------------------------------------------------

    def _rounding(self, rounding: str | DateRoundFn | None) -> DateRoundFn:
        if callable(rounding):
            return rounding
        if isinstance(rounding, str):
            mode = rounding.lower()
            if mode == "ceil":
                return self.ceil
            if mode == "floor":
                return self.floor
        return self.round

    def compare(
        self,
        a: Any,
        b: Any,
        precision: Precision | str | None = None,
        rounding: str | DateRoundFn | None = None,
    ) -> int:
        """Return -1, 0 or 1 as `a` is before, equal to or after `b`.

        With a precision, both sides are rounded first: to the nearest unit
        by default, or with "ceil", "floor" or a callable taking
        (instant, precision).
        """
        left = self.to_instant(a)
        right = self.to_instant(b)

        if precision:
            round_fn = self._rounding(rounding)
            rounded_left = round_fn(left, precision)
            rounded_right = round_fn(right, precision)
            if rounded_left is None or rounded_right is None:
                logger.debug(
                    "Cannot round to precision %r, comparing raw instants", precision
                )
            else:
                left = self.to_instant(rounded_left)
                right = self.to_instant(rounded_right)

        if left > right:
            return 1
        if left < right:
            return -1
        return 0

    def between(self, value: Any, low: Any, high: Any) -> bool:
        """Inclusive range test."""
        return self.compare(value, low) >= 0 and self.compare(value, high) <= 0

    def equal(
        self,
        a: Any,
        b: Any,
        precision: Precision | str | None = None,
        bow: Any = None,
    ) -> bool:
        """Compare two dates field by field down to a precision.

        "week" compares only the (year, week number) pair. Any other precision
        compares its own local field and every coarser one: "day" checks day,
        month and year, "ms" checks everything.
        """
        unit = resolve(precision)
        if unit is Precision.WEEK:
            return self.year_week(a, bow).key == self.year_week(b, bow).key

        left = self.now(a)
        right = self.now(b)
        return all(field.matches(left, right) for field in fields_for(unit))


__all__ = [
    "Calendar",
    "DateLike",
    "round_half_up",
    "system_clock",
]
