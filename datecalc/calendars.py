"""Calendar systems used for year/month/day field access and rollover.

A calendar system maps Python ``date`` objects (proleptic Gregorian days) to
its own (year, month, day) fields and back, and knows how to move a day by
whole years, months or days with day-of-month clamping. The Gregorian
family shifts with python-dateutil's ``relativedelta``; the Julian and
tabular Hijri calendars convert through Julian Day numbers with
``convertdate``.
"""

from abc import ABC, abstractmethod
from calendar import monthrange
from datetime import MAXYEAR, MINYEAR, date

from convertdate import islamic, julian
from dateutil.relativedelta import relativedelta
from typing_extensions import override

GREGORIAN = "GregorianCalendar"
JULIAN = "JulianCalendar"
HIJRI = "HijriCalendar"
THAI = "ThaiCalendar"
KOREAN = "KoreanCalendar"

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

_ROMAN_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_MIN_ORDINAL = date.min.toordinal()
_MAX_ORDINAL = date.max.toordinal()

# Julian Day number of proleptic Gregorian ordinal 0 (at midnight)
_JD_OFFSET = 1721424.5


class OutOfRangeError(ValueError):
    """A calendar operation would leave the representable date range."""


class CalendarSystem(ABC):
    identifier: str
    first_year: int = 1
    months_in_year: int = 12
    MONTH_NAMES: tuple[str, ...] = _ROMAN_MONTH_NAMES
    LONG_DATE_FORMAT: str = "{weekday}, {month_name} {day}, {year}"

    def __init__(self) -> None:
        self.last_year: int = self._fields(date.max)[0]

    @abstractmethod
    def _fields(self, day: date) -> tuple[int, int, int]:
        """Return (year, month, day) of ``day`` without range checks."""

    @abstractmethod
    def _to_ordinal(self, year: int, month: int, day: int) -> int:
        """Return the proleptic Gregorian ordinal of valid calendar fields."""

    def days_in_month(self, year: int, month: int) -> int:
        self.check_month(month)
        if month == self.months_in_year:
            following = self._to_ordinal(year + 1, 1, 1)
        else:
            following = self._to_ordinal(year, month + 1, 1)
        return following - self._to_ordinal(year, month, 1)

    def to_fields(self, day: date) -> tuple[int, int, int]:
        """Return (year, month, day) of ``day`` in this calendar.

        Raises:
            OutOfRangeError: If ``day`` precedes the calendar's first year
        """
        fields = self._fields(day)
        if fields[0] < self.first_year:
            raise OutOfRangeError(
                f"{day.isoformat()} is before year {self.first_year} "
                f"of the {self.identifier}"
            )
        return fields

    def from_fields(self, year: int, month: int, day: int) -> date:
        """Return the date with the given calendar fields.

        Raises:
            OutOfRangeError: If the date is outside the representable range
            ValueError: If month or day is not valid for the calendar
        """
        self._check_year(year)
        length = self.days_in_month(year, month)
        if not 1 <= day <= length:
            raise ValueError(
                f"day must be in 1..{length} for {self.identifier} "
                f"{year}-{month:02d}, got {day}"
            )
        return self._from_ordinal(self._to_ordinal(year, month, day))

    def shift_years(self, day: date, years: int) -> date:
        year, month, dom = self.to_fields(day)
        return self.from_fields_clamped(year + years, month, dom)

    def shift_months(self, day: date, months: int) -> date:
        year, month, dom = self.to_fields(day)
        year, index = divmod(
            year * self.months_in_year + month - 1 + months, self.months_in_year
        )
        return self.from_fields_clamped(year, index + 1, dom)

    def shift_days(self, day: date, days: int) -> date:
        return self._from_ordinal(day.toordinal() + days)

    def format_long(self, day: date) -> str:
        year, month, dom = self.to_fields(day)
        return self.LONG_DATE_FORMAT.format(
            weekday=WEEKDAY_NAMES[day.weekday()],
            month_name=self.MONTH_NAMES[month - 1],
            day=dom,
            year=year,
        )

    def from_fields_clamped(self, year: int, month: int, dom: int) -> date:
        # Clamp to the last day when the target month is shorter
        self._check_year(year)
        return self.from_fields(year, month, min(dom, self.days_in_month(year, month)))

    def _from_ordinal(self, ordinal: int) -> date:
        if not _MIN_ORDINAL <= ordinal <= _MAX_ORDINAL:
            raise OutOfRangeError(
                f"Day ordinal {ordinal} is outside the supported range "
                f"{date.min.isoformat()}..{date.max.isoformat()}"
            )
        result = date.fromordinal(ordinal)
        self.to_fields(result)
        return result

    def _check_year(self, year: int) -> None:
        if not self.first_year <= year <= self.last_year:
            raise OutOfRangeError(
                f"Year {year} is outside the {self.identifier} range "
                f"{self.first_year}..{self.last_year}"
            )

    def check_month(self, month: int) -> None:
        if not 1 <= month <= self.months_in_year:
            raise ValueError(
                f"month must be in 1..{self.months_in_year} for the "
                f"{self.identifier}, got {month}"
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class GregorianCalendar(CalendarSystem):
    identifier = GREGORIAN
    year_offset: int = 0

    def __init__(self) -> None:
        self.first_year = MINYEAR + self.year_offset
        super().__init__()

    @override
    def _fields(self, day: date) -> tuple[int, int, int]:
        return day.year + self.year_offset, day.month, day.day

    @override
    def _to_ordinal(self, year: int, month: int, day: int) -> int:
        return date(year - self.year_offset, month, day).toordinal()

    @override
    def days_in_month(self, year: int, month: int) -> int:
        self.check_month(month)
        gregorian_year = year - self.year_offset
        if not MINYEAR <= gregorian_year <= MAXYEAR:
            raise OutOfRangeError(
                f"Year {year} is outside the {self.identifier} range "
                f"{self.first_year}..{self.last_year}"
            )
        return monthrange(gregorian_year, month)[1]

    @override
    def shift_years(self, day: date, years: int) -> date:
        return self._relative(day, relativedelta(years=years))

    @override
    def shift_months(self, day: date, months: int) -> date:
        return self._relative(day, relativedelta(months=months))

    def _relative(self, day: date, delta: relativedelta) -> date:
        try:
            return day + delta
        except (ValueError, OverflowError) as exc:
            raise OutOfRangeError(
                f"{day.isoformat()} {delta!r} is outside the {self.identifier} range"
            ) from exc


class ThaiCalendar(GregorianCalendar):
    """Gregorian months and days, Buddhist era years."""

    identifier = THAI
    year_offset = 543


class KoreanCalendar(GregorianCalendar):
    """Gregorian months and days, Dangi years."""

    identifier = KOREAN
    year_offset = 2333


class JulianCalendar(CalendarSystem):
    identifier = JULIAN

    @override
    def _fields(self, day: date) -> tuple[int, int, int]:
        year, month, dom = julian.from_jd(day.toordinal() + _JD_OFFSET)
        return int(year), int(month), int(dom)

    @override
    def _to_ordinal(self, year: int, month: int, day: int) -> int:
        return round(julian.to_jd(year, month, day) - _JD_OFFSET)


class HijriCalendar(CalendarSystem):
    """Tabular (arithmetic) Islamic calendar.

    Years have 354 or 355 days; odd months have 30 days, even months 29,
    and the last month gains a day in leap years.
    """

    identifier = HIJRI
    MONTH_NAMES = (
        "Muharram",
        "Safar",
        "Rabi' al-awwal",
        "Rabi' al-thani",
        "Jumada al-awwal",
        "Jumada al-thani",
        "Rajab",
        "Sha'ban",
        "Ramadan",
        "Shawwal",
        "Dhu al-Qi'dah",
        "Dhu al-Hijjah",
    )
    LONG_DATE_FORMAT = "{weekday}, {day} {month_name} {year} AH"

    @override
    def _fields(self, day: date) -> tuple[int, int, int]:
        year, month, dom = islamic.from_jd(day.toordinal() + _JD_OFFSET)
        return int(year), int(month), int(dom)

    @override
    def _to_ordinal(self, year: int, month: int, day: int) -> int:
        return round(islamic.to_jd(year, month, day) - _JD_OFFSET)


_CALENDARS: dict[str, type[CalendarSystem]] = {
    cls.identifier: cls
    for cls in (
        GregorianCalendar,
        JulianCalendar,
        HijriCalendar,
        ThaiCalendar,
        KoreanCalendar,
    )
}


def calendar_system(identifier: str = GREGORIAN) -> CalendarSystem:
    """
    Return the calendar system registered under ``identifier``.

    Args:
        identifier: Calendar identifier, e.g. "GregorianCalendar" or
            "HijriCalendar"

    Raises:
        ValueError: If the identifier is not supported

    Example:
        >>> calendar_system("HijriCalendar").to_fields(date(2023, 3, 23))
        (1444, 9, 1)
    """
    if identifier not in _CALENDARS:
        valid = ", ".join(sorted(_CALENDARS))
        raise ValueError(
            f"Unsupported calendar identifier: {identifier!r}\n"
            f"Valid identifiers: {valid}\n"
        )
    return _CALENDARS[identifier]()
