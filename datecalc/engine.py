"""Calendar-aware date differences and date offsets."""

import logging
from datetime import datetime
from typing import Any

from datecalc.adapter import CalendarAdapter
from datecalc.calendars import (
    GREGORIAN,
    CalendarSystem,
    OutOfRangeError,
    calendar_system,
)
from datecalc.duration import DateUnit, Duration, OffsetResult
from datecalc.timestamps import coerce_timestamp
from datecalc.util import DAYS_PER_WEEK

logger = logging.getLogger(__name__)


class DateCalculationEngine:
    """Compute differences between dates and apply durations to dates.

    The engine holds only its calendar system, which is fixed at
    construction. Every call works on its own ``CalendarAdapter``, so one
    engine can be shared across threads.

    Example:
        >>> engine = DateCalculationEngine()
        >>> engine.get_date_difference(date(2020, 1, 15), date(2023, 3, 20))
        Duration(years=3, months=2, weeks=0, days=5)
        >>> engine.add_duration(date(2024, 1, 31), Duration(months=1)).date
        datetime.datetime(2024, 2, 29, 0, 0, tzinfo=datetime.timezone.utc)
    """

    def __init__(self, calendar: str = GREGORIAN):
        self.calendar: CalendarSystem = calendar_system(calendar)

    @property
    def calendar_identifier(self) -> str:
        return self.calendar.identifier

    def get_date_difference(
        self, from_date: Any, to_date: Any, units: DateUnit = DateUnit.ALL
    ) -> Duration:
        """Return the elapsed time between two dates, decomposed into ``units``.

        Callers should clip both dates to the same time of day (see
        ``clip_time``) to get whole-day results. The result is a magnitude:
        swapping the arguments does not change it.

        Years and months count anniversaries crossed, moving a pivot forward
        from the earlier date with day-of-month clamping; whatever is left
        over is whole days, split into weeks only when WEEK is requested.
        Units larger than a day that are not requested fold into ``days``.
        """
        start = coerce_timestamp(from_date, "from_date")
        end = coerce_timestamp(to_date, "to_date")
        if end < start:
            start, end = end, start

        pivot = CalendarAdapter(self.calendar, start)
        years = months = weeks = 0
        if DateUnit.YEAR in units:
            years = self._whole_units(pivot, end, DateUnit.YEAR)
        if DateUnit.MONTH in units:
            months = self._whole_units(pivot, end, DateUnit.MONTH)

        days = (end - pivot.timestamp).days
        if DateUnit.WEEK in units:
            weeks, days = divmod(days, DAYS_PER_WEEK)

        return Duration(years=years, months=months, weeks=weeks, days=days)

    def add_duration(self, start_date: Any, duration: Duration) -> OffsetResult:
        """Move ``start_date`` forward by ``duration``'s years, months and days.

        The time of day of ``start_date`` is preserved. ``duration.weeks`` is
        ignored. Returns an unsuccessful result when the date would fall
        outside the calendar's range.
        """
        return self._offset(start_date, duration)

    def subtract_duration(self, start_date: Any, duration: Duration) -> OffsetResult:
        """Move ``start_date`` back by ``duration``'s years, months and days."""
        return self._offset(start_date, -duration)

    def _offset(self, start_date: Any, duration: Duration) -> OffsetResult:
        # Years first: month and day rollover depend on the shifted year
        try:
            cursor = CalendarAdapter(self.calendar, start_date)
            if duration.years:
                cursor.add_years(duration.years)
            if duration.months:
                cursor.add_months(duration.months)
            if duration.days:
                cursor.add_days(duration.days)
        except OutOfRangeError as exc:
            logger.debug(
                "Offset %s from %s is out of range: %s", duration, start_date, exc
            )
            return OffsetResult(success=False, date=None)
        return OffsetResult(success=True, date=cursor.timestamp)

    def _whole_units(
        self, pivot: CalendarAdapter, end: datetime, unit: DateUnit
    ) -> int:
        """Advance ``pivot`` by the most whole ``unit``s that do not pass ``end``.

        The field difference is an upper bound on the count; step down until
        the pivot moved by that many units no longer overshoots. Each attempt
        starts from the same pivot so clamping never accumulates.
        """
        origin = pivot.timestamp
        start_year, start_month, _ = self.calendar.to_fields(origin.date())
        end_year, end_month, _ = self.calendar.to_fields(end.date())

        if unit is DateUnit.YEAR:
            count = end_year - start_year
        else:
            count = (end_year - start_year) * self.calendar.months_in_year + (
                end_month - start_month
            )

        while count > 0:
            pivot.timestamp = origin
            try:
                if unit is DateUnit.YEAR:
                    pivot.add_years(count)
                else:
                    pivot.add_months(count)
            except OutOfRangeError:
                # Clamped past the last representable day: overshoot
                count -= 1
                continue
            if pivot.timestamp <= end:
                return count
            count -= 1

        pivot.timestamp = origin
        return 0
