from dataclasses import dataclass, fields
from datetime import datetime
from enum import Flag


class DateUnit(Flag):
    """Which fields a date difference should populate."""

    YEAR = 1
    MONTH = 2
    WEEK = 4
    DAY = 8
    ALL = YEAR | MONTH | WEEK | DAY


@dataclass(frozen=True, kw_only=True)
class Duration:
    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(
                    f"Duration {field.name} must be an int, "
                    f"got {type(value).__name__}: {value!r}"
                )

    @property
    def is_zero(self) -> bool:
        return not (self.years or self.months or self.weeks or self.days)

    def __neg__(self) -> "Duration":
        return Duration(
            years=-self.years,
            months=-self.months,
            weeks=-self.weeks,
            days=-self.days,
        )

    def __str__(self) -> str:
        """Compact form such as ``Duration(3y 2m 0w 5d)``."""
        return f"Duration({self.years}y {self.months}m {self.weeks}w {self.days}d)"


@dataclass(frozen=True)
class OffsetResult:
    """Result of adding or subtracting a duration.

    Attributes:
        success: False when the result falls outside the calendar's range
        date: The resulting timestamp if successful, None otherwise
    """

    success: bool
    date: datetime | None
