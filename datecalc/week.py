from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class YearWeek:
    year: int
    week: int
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"YearWeek start ({self.start}) must be <= end ({self.end})"
            )

    @property
    def key(self) -> tuple[int, int]:
        """The (year, week) pair used for week equality."""
        return (self.year, self.week)

    def __str__(self) -> str:
        """Human-friendly string showing year, week number and span."""
        return f"YearWeek({self.year}-W{self.week:02d}, {self.start}→{self.end})"
