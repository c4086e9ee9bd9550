"""Precision units and the alias tokens that select them."""

import logging
from enum import Enum

from datecalc.util import DAY, HOUR, MILLISECOND, MINUTE, SECOND

logger = logging.getLogger(__name__)


class Precision(str, Enum):
    MILLISECOND = "millisecond"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


_ALIASES: dict[Precision, frozenset[str]] = {
    Precision.WEEK: frozenset({"wk", "week", "weeks"}),
    Precision.MILLISECOND: frozenset({"ms", "milli", "millisecond", "milliseconds"}),
    Precision.SECOND: frozenset({"s", "sec", "second", "seconds"}),
    Precision.MINUTE: frozenset({"min", "minute", "minutes"}),
    Precision.HOUR: frozenset({"h", "hr", "hrs", "hour", "hours"}),
    Precision.DAY: frozenset({"d", "day", "days"}),
    Precision.MONTH: frozenset({"mon", "month", "months"}),
    Precision.YEAR: frozenset({"y", "year", "years"}),
}

# Units with a fixed length in local wall-clock time
FIXED_UNITS: dict[Precision, int] = {
    Precision.MILLISECOND: MILLISECOND,
    Precision.SECOND: SECOND,
    Precision.MINUTE: MINUTE,
    Precision.HOUR: HOUR,
    Precision.DAY: DAY,
}


def resolve(precision: "Precision | str | None") -> Precision | None:
    """Map a precision token to its canonical unit.

    Tokens are matched case-insensitively against each unit's alias set
    ("s", "sec", "second" and "seconds" all select SECOND). A missing or empty
    token selects MILLISECOND. Unknown tokens resolve to None.
    """
    if isinstance(precision, Precision):
        return precision
    if not precision:
        return Precision.MILLISECOND

    token = str(precision).lower()
    for unit, aliases in _ALIASES.items():
        if token in aliases:
            return unit

    logger.debug("Unknown precision token %r", precision)
    return None
