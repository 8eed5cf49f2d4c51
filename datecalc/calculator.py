"""Session model behind the date calculator's two modes.

``DateCalculator`` holds the inputs of the date calculation screen, runs the
engine whenever they change and keeps the results together with plain
English display text. Rendering, localization and clipboard access are left
to the caller.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any

from datecalc.calendars import GREGORIAN
from datecalc.duration import DateUnit, Duration
from datecalc.engine import DateCalculationEngine
from datecalc.timestamps import clip_time, coerce_timestamp
from datecalc.util import MAX_OFFSET

logger = logging.getLogger(__name__)

SAME_DATES_TEXT = "Same dates"
OUT_OF_BOUND_TEXT = "Date out of bound"

_UNIT_NAMES = (
    ("years", "year", "years"),
    ("months", "month", "months"),
    ("weeks", "week", "weeks"),
    ("days", "day", "days"),
)

_OFFSETS = ("years_offset", "months_offset", "days_offset")
_DATES = ("from_date", "to_date", "start_date")
_MODES = ("is_date_diff_mode", "is_add_mode")
_RESULTS = (
    "date_diff_result",
    "date_diff_result_in_days",
    "date_result",
    "is_out_of_bound",
)


def _count(value: int, singular: str, plural: str) -> str:
    return f"{value} {plural if value > 1 else singular}"


class DateCalculator:
    """Inputs and results of a date calculation session.

    Two modes share one object: difference mode compares ``from_date`` and
    ``to_date``; offset mode adds or subtracts the three offsets to or from
    ``start_date``. Change inputs with ``update()``, which recomputes once
    after applying the whole batch.

    Example:
        >>> calc = DateCalculator(today=datetime(2023, 3, 20, tzinfo=timezone.utc))
        >>> calc.update(from_date=date(2020, 1, 15))
        >>> calc.diff_text
        '3 years, 2 months, 5 days'
        >>> calc.update(is_date_diff_mode=False, days_offset=12)
        >>> calc.result_text
        'Saturday, April 1, 2023'
    """

    def __init__(
        self,
        calendar: str = GREGORIAN,
        *,
        today: Any = None,
        tz: str = "UTC",
        list_separator: str = ", ",
    ):
        """
        Initialize a calculator session.

        Args:
            calendar: Calendar identifier used for all calculations
            today: Initial value for every date input (default: now)
            tz: IANA timezone name whose calendar day the dates are clipped to
            list_separator: Separator between units in ``diff_text``
        """
        self.engine: DateCalculationEngine = DateCalculationEngine(calendar)
        self.tz: str = tz
        self.list_separator: str = list_separator

        now = coerce_timestamp(
            today if today is not None else datetime.now(timezone.utc), "today"
        )
        clipped = clip_time(now, tz)
        if clipped.weekday() != now.weekday():
            logger.info(
                "Clipping %s to %s changed the day of week", now.isoformat(), clipped
            )

        self.is_date_diff_mode: bool = True
        self.is_add_mode: bool = True
        self.from_date: datetime = clipped
        self.to_date: datetime = clipped
        # The offset start keeps its time of day
        self.start_date: datetime = now
        self.years_offset: int = 0
        self.months_offset: int = 0
        self.days_offset: int = 0

        self.date_diff_result: Duration = Duration()
        self.date_diff_result_in_days: Duration = Duration()
        self.date_result: datetime = now
        self.is_out_of_bound: bool = False

        self.recompute()

    def update(self, **inputs: Any) -> None:
        """Apply a batch of input changes and recompute.

        The batch is all or nothing: if validation or the recomputation
        fails, inputs and results keep their previous values.

        Raises:
            TypeError: If an input name is unknown or a date is malformed
            ValueError: If an offset is outside 0..MAX_OFFSET, or a date
                precedes the calendar's first year
        """
        changes: dict[str, Any] = {}
        for name, value in inputs.items():
            if name == "start_date":
                changes[name] = coerce_timestamp(value, name)
            elif name in _DATES:
                changes[name] = self._clip(value, name)
            elif name in _OFFSETS:
                changes[name] = self._check_offset(name, value)
            elif name in _MODES:
                changes[name] = bool(value)
            else:
                valid = ", ".join(_MODES + _DATES + _OFFSETS)
                raise TypeError(
                    f"Unknown calculator input: {name!r}\n" f"Valid inputs: {valid}"
                )

        previous = {name: getattr(self, name) for name in (*changes, *_RESULTS)}
        for name, value in changes.items():
            setattr(self, name, value)
        try:
            self.recompute()
        except Exception:
            for name, value in previous.items():
                setattr(self, name, value)
            raise

    def recompute(self) -> None:
        if self.is_date_diff_mode:
            self.date_diff_result = self.engine.get_date_difference(
                self.from_date, self.to_date, DateUnit.ALL
            )
            self.date_diff_result_in_days = self.engine.get_date_difference(
                self.from_date, self.to_date, DateUnit.DAY
            )
            logger.debug("Date difference: %s", self.date_diff_result)
            return

        offset = Duration(
            years=self.years_offset, months=self.months_offset, days=self.days_offset
        )
        if self.is_add_mode:
            result = self.engine.add_duration(self.start_date, offset)
        else:
            result = self.engine.subtract_duration(self.start_date, offset)

        self.is_out_of_bound = not result.success
        if result.date is not None:
            self.date_result = result.date

    @property
    def is_diff_in_days(self) -> bool:
        """True when the difference is best shown as a bare day count."""
        diff = self.date_diff_result
        return (
            self.date_diff_result_in_days.days == 0
            or diff.years == diff.months == diff.weeks == 0
        )

    @property
    def diff_text(self) -> str:
        """Difference as "Y years, M months, W weeks, D days", zero units omitted."""
        if self.date_diff_result_in_days.days == 0:
            return SAME_DATES_TEXT
        if self.is_diff_in_days:
            return _count(self.date_diff_result_in_days.days, "day", "days")

        parts = []
        for field, singular, plural in _UNIT_NAMES:
            value = getattr(self.date_diff_result, field)
            if value > 0:
                parts.append(_count(value, singular, plural))
        return self.list_separator.join(parts)

    @property
    def diff_in_days_text(self) -> str:
        """Total day count, shown only next to a decomposed difference."""
        if self.is_diff_in_days:
            return ""
        return _count(self.date_diff_result_in_days.days, "day", "days")

    @property
    def result_text(self) -> str:
        if self.is_out_of_bound:
            return OUT_OF_BOUND_TEXT
        return self.engine.calendar.format_long(self.date_result.date())

    @property
    def display_text(self) -> str:
        """Text for the active mode, as a copy command would take it."""
        if self.is_date_diff_mode:
            return self.diff_text
        return self.result_text

    def _check_offset(self, name: str, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{name} must be an int, got {type(value).__name__}")
        if not 0 <= value <= MAX_OFFSET:
            raise ValueError(
                f"{name} must be in range [0, {MAX_OFFSET}], got {value}.\n"
                f"Use is_add_mode=False to move backwards."
            )
        return value

    def _clip(self, value: Any, name: str) -> datetime:
        # A plain date already names the calendar day
        if isinstance(value, date) and not isinstance(value, datetime):
            return coerce_timestamp(value, name)
        return clip_time(coerce_timestamp(value, name), self.tz)
