"""Mutable calendar cursor used by the calculation engine."""

from datetime import date, datetime, time
from typing import Any

from datecalc.calendars import CalendarSystem
from datecalc.timestamps import coerce_timestamp


class CalendarAdapter:
    """A position in a calendar system that can be read and moved field-wise.

    Fields are read in UTC. The time of day of the initial timestamp is kept
    across all moves. Moves that would leave the calendar's range raise
    ``OutOfRangeError`` and leave the cursor where it was.

    An adapter is a per-call cursor: do not share one between threads.

    Example:
        >>> cursor = CalendarAdapter(calendar_system(), date(2024, 1, 31))
        >>> cursor.add_months(1)
        >>> cursor.year, cursor.month, cursor.day
        (2024, 2, 29)
    """

    def __init__(self, calendar: CalendarSystem, timestamp: Any):
        self.calendar: CalendarSystem = calendar
        self._day: date
        self._time: time
        self.timestamp = timestamp

    @property
    def timestamp(self) -> datetime:
        return datetime.combine(self._day, self._time)

    @timestamp.setter
    def timestamp(self, value: Any) -> None:
        moment = coerce_timestamp(value)
        day = moment.date()
        self.calendar.to_fields(day)
        self._day = day
        self._time = moment.timetz()

    @property
    def year(self) -> int:
        return self.calendar.to_fields(self._day)[0]

    @year.setter
    def year(self, value: int) -> None:
        _, month, dom = self.calendar.to_fields(self._day)
        self._day = self.calendar.from_fields_clamped(value, month, dom)

    @property
    def month(self) -> int:
        return self.calendar.to_fields(self._day)[1]

    @month.setter
    def month(self, value: int) -> None:
        year, _, dom = self.calendar.to_fields(self._day)
        self.calendar.check_month(value)
        self._day = self.calendar.from_fields_clamped(year, value, dom)

    @property
    def day(self) -> int:
        return self.calendar.to_fields(self._day)[2]

    @day.setter
    def day(self, value: int) -> None:
        year, month, _ = self.calendar.to_fields(self._day)
        self._day = self.calendar.from_fields(year, month, value)

    @property
    def days_in_month(self) -> int:
        year, month, _ = self.calendar.to_fields(self._day)
        return self.calendar.days_in_month(year, month)

    def add_years(self, years: int) -> None:
        self._day = self.calendar.shift_years(self._day, years)

    def add_months(self, months: int) -> None:
        self._day = self.calendar.shift_months(self._day, months)

    def add_days(self, days: int) -> None:
        self._day = self.calendar.shift_days(self._day, days)
