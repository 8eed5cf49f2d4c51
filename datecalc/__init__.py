from .adapter import CalendarAdapter
from .calculator import DateCalculator
from .calendars import (
    GREGORIAN,
    HIJRI,
    JULIAN,
    KOREAN,
    THAI,
    CalendarSystem,
    OutOfRangeError,
    calendar_system,
)
from .duration import DateUnit, Duration, OffsetResult
from .engine import DateCalculationEngine
from .timestamps import clip_time, coerce_timestamp
from .util import MAX_OFFSET

__all__ = [
    "DateCalculationEngine",
    "DateCalculator",
    "CalendarAdapter",
    "CalendarSystem",
    "calendar_system",
    "OutOfRangeError",
    "Duration",
    "DateUnit",
    "OffsetResult",
    "clip_time",
    "coerce_timestamp",
    "GREGORIAN",
    "JULIAN",
    "HIJRI",
    "THAI",
    "KOREAN",
    "MAX_OFFSET",
]
