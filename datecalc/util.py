"""Utility constants for datecalc.

Time unit constants represent durations in milliseconds, which is the unit of
every Instant handled by the library.
"""

# Time unit constants (all values in milliseconds)
MILLISECOND = 1
SECOND = 1000
MINUTE = 60000
HOUR = 3600000
DAY = 86400000
WEEK = 604800000

# Days of the week, Sunday first
SUNDAY = 0
MONDAY = 1
TUESDAY = 2
WEDNESDAY = 3
THURSDAY = 4
FRIDAY = 5
SATURDAY = 6

# Months of the year, 0-based
JANUARY = 0
FEBRUARY = 1
MARCH = 2
APRIL = 3
MAY = 4
JUNE = 5
JULY = 6
AUGUST = 7
SEPTEMBER = 8
OCTOBER = 9
NOVEMBER = 10
DECEMBER = 11
