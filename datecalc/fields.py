"""Calendar fields compared by precision-bucketed equality.

Equality at a precision compares that precision's field and every coarser
one, so "hour" checks hour, day, month and year. The cascade is the ordered
table below, finest field first, sliced at the selected precision.
"""

from datetime import datetime
from typing import Any

from typing_extensions import override

from datecalc.precision import Precision


class Field:
    def apply(self, moment: datetime) -> Any:
        raise NotImplementedError

    def matches(self, left: datetime, right: datetime) -> bool:
        return self.apply(left) == self.apply(right)


class Attribute(Field):
    def __init__(self, name: str):
        self.name: str = name

    @override
    def apply(self, moment: datetime) -> int:
        return getattr(moment, self.name)


class Millisecond(Field):
    @override
    def apply(self, moment: datetime) -> int:
        return moment.microsecond // 1000


CASCADE: tuple[tuple[Precision, Field], ...] = (
    (Precision.MILLISECOND, Millisecond()),
    (Precision.SECOND, Attribute("second")),
    (Precision.MINUTE, Attribute("minute")),
    (Precision.HOUR, Attribute("hour")),
    (Precision.DAY, Attribute("day")),
    (Precision.MONTH, Attribute("month")),
    (Precision.YEAR, Attribute("year")),
)

_CUTOFF: dict[Precision, int] = {
    precision: index for index, (precision, _) in enumerate(CASCADE)
}


def fields_for(precision: Precision | None) -> tuple[Field, ...]:
    """Return the fields compared at this precision.

    Week is not part of the cascade and, like an unknown precision, selects
    no fields here.
    """
    if precision not in _CUTOFF:
        return ()
    return tuple(field for _, field in CASCADE[_CUTOFF[precision] :])
