from .core import Calendar, round_half_up, system_clock
from .duration import (
    DEFAULT_OPTIONS,
    DurationBreakdown,
    DurationOptions,
    breakdown,
    format_duration,
    since,
)
from .precision import Precision
from .range import DateRange
from .util import (
    APRIL,
    AUGUST,
    DAY,
    DECEMBER,
    FEBRUARY,
    FRIDAY,
    HOUR,
    JANUARY,
    JULY,
    JUNE,
    MARCH,
    MAY,
    MILLISECOND,
    MINUTE,
    MONDAY,
    NOVEMBER,
    OCTOBER,
    SATURDAY,
    SECOND,
    SEPTEMBER,
    SUNDAY,
    THURSDAY,
    TUESDAY,
    WEDNESDAY,
    WEEK,
)
from .week import YearWeek

# Calendar in the host's local zone, backing the module-level functions
calendar = Calendar()

to_instant = calendar.to_instant
now = calendar.now
is_valid_weekday = calendar.is_valid_weekday
nearest_weekday = calendar.nearest_weekday
future_weekday = calendar.future_weekday
past_weekday = calendar.past_weekday
day_of_week = calendar.day_of_week
day_of_year = calendar.day_of_year
is_leap_year = calendar.is_leap_year
first_of_year = calendar.first_of_year
last_of_year = calendar.last_of_year
days_in_year = calendar.days_in_year
first_of_month = calendar.first_of_month
last_of_month = calendar.last_of_month
days_in_month = calendar.days_in_month
utc_offset = calendar.utc_offset
standard_offset = calendar.standard_offset
dst_offset = calendar.dst_offset
is_dst = calendar.is_dst
year_week = calendar.year_week
round = calendar.round
ceil = calendar.ceil
floor = calendar.floor
start_of = calendar.start_of
end_of = calendar.end_of
compare = calendar.compare
between = calendar.between
equal = calendar.equal

__all__ = [
    "Calendar",
    "Precision",
    "YearWeek",
    "DateRange",
    "DurationOptions",
    "DurationBreakdown",
    "DEFAULT_OPTIONS",
    "format_duration",
    "breakdown",
    "since",
    "round_half_up",
    "system_clock",
    "calendar",
    "to_instant",
    "now",
    "is_valid_weekday",
    "nearest_weekday",
    "future_weekday",
    "past_weekday",
    "day_of_week",
    "day_of_year",
    "is_leap_year",
    "first_of_year",
    "last_of_year",
    "days_in_year",
    "first_of_month",
    "last_of_month",
    "days_in_month",
    "utc_offset",
    "standard_offset",
    "dst_offset",
    "is_dst",
    "year_week",
    "round",
    "ceil",
    "floor",
    "start_of",
    "end_of",
    "compare",
    "between",
    "equal",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "SUNDAY",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "JANUARY",
    "FEBRUARY",
    "MARCH",
    "APRIL",
    "MAY",
    "JUNE",
    "JULY",
    "AUGUST",
    "SEPTEMBER",
    "OCTOBER",
    "NOVEMBER",
    "DECEMBER",
]
