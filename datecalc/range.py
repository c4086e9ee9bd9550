"""An ordered pair of Instants with clamping bounds."""

from typing import Any

from typing_extensions import override

from datecalc.core import Calendar


class DateRange:
    """A span between two Instants where start always precedes end.

    Assigning a start at or after the end moves it to one millisecond before
    the end, and an end at or before the start moves it to one millisecond
    after the start.
    """

    def __init__(self, *values: Any, calendar: Calendar | None = None):
        """
        Initialize a date range.

        Args:
            *values: Two dates (in any order) for the bounds, or one date to
                extend the default range with. Without values the range runs
                from the epoch to now.
            calendar: Calendar used to read dates (default: host calendar)
        """
        self.calendar: Calendar = calendar or Calendar()
        self._start: int = 0
        self._end: int = self.calendar.to_instant()
        self.set(*values)

    def _coerce(self, value: Any) -> int:
        # Digit-only strings are millisecond counts, not dates
        if isinstance(value, str) and value.isdigit():
            value = int(value)
        return self.calendar.to_instant(value)

    @property
    def start(self) -> int:
        return self._start

    @start.setter
    def start(self, value: Any) -> None:
        instant = self._coerce(value)
        if self.calendar.compare(instant, self._end) >= 0:
            instant = self._end - 1
        self._start = instant

    @property
    def end(self) -> int:
        return self._end

    @end.setter
    def end(self, value: Any) -> None:
        instant = self._coerce(value)
        if self.calendar.compare(instant, self._start) <= 0:
            instant = self._start + 1
        self._end = instant

    @property
    def difference(self) -> int:
        return abs(self._end - self._start)

    @property
    def start_date(self):
        return self.calendar.now(self._start)

    @property
    def end_date(self):
        return self.calendar.now(self._end)

    def set(self, *values: Any) -> "DateRange":
        """Replace both bounds (two values) or extend to one value."""
        if len(values) > 2:
            raise TypeError(
                f"DateRange.set() takes at most 2 dates, got {len(values)}.\n"
                f"Example: DateRange(start, end) or range.set(start, end)"
            )
        if len(values) == 2:
            first, second = (self._coerce(value) for value in values)
            self._start = min(first, second)
            self._end = max(first, second)
        elif len(values) == 1:
            self.extend(values[0])
        return self

    def extend(self, value: Any) -> "DateRange":
        """Grow the range just enough to include `value`."""
        instant = self._coerce(value)
        if instant < self._start:
            self._start = instant
        elif instant > self._end:
            self._end = instant
        return self

    def format(
        self,
        pattern: str = "%Y-%m-%d %H:%M",
        end_pattern: str | None = None,
        delimiter: str = " to ",
    ) -> str:
        """Render both bounds with strftime patterns in the calendar's zone."""
        return delimiter.join(
            [
                self.start_date.strftime(pattern),
                self.end_date.strftime(end_pattern or pattern),
            ]
        )

    def __contains__(self, value: Any) -> bool:
        return self.calendar.between(value, self._start, self._end)

    @override
    def __str__(self) -> str:
        return self.format()

    @override
    def __repr__(self) -> str:
        return f"DateRange({self._start}→{self._end}, {self.difference}ms)"
