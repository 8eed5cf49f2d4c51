"""Conversion of caller-supplied values into UTC timestamps."""

from datetime import date, datetime, time, timedelta, timezone
from typing import Any
from zoneinfo import ZoneInfo

from datecalc.util import EPOCH


def coerce_timestamp(value: Any, name: str = "timestamp") -> datetime:
    """Convert a value to a timezone-aware datetime in UTC.

    Accepts:
    - datetime: Must be timezone-aware, converted to UTC
    - date: Midnight UTC of that day
    - int: Unix timestamp in seconds

    Raises:
        TypeError: If value is an unsupported type or naive datetime
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return EPOCH + timedelta(seconds=value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise TypeError(
                f"{name} must be a timezone-aware datetime.\n"
                f"Got naive datetime: {value!r}\n"
                f"Hint: Add timezone info:\n"
                f"  from zoneinfo import ZoneInfo\n"
                f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))  "
                f"# or 'US/Pacific', etc.\n"
                f"  # Or use timezone.utc for UTC:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raise TypeError(
        f"{name} must be datetime, date, or int.\n"
        f"Got {type(value).__name__!r}: {value!r}\n"
        f"Examples:\n"
        f"  datetime(2025, 1, 1, tzinfo=timezone.utc)  # timezone-aware datetime\n"
        f"  date(2025, 1, 1)  # midnight UTC\n"
        f"  1735689600  # int (Unix seconds)"
    )


def clip_time(value: Any, tz: str = "UTC") -> datetime:
    """Return midnight UTC of the calendar day ``value`` falls on in ``tz``.

    Differences between clipped timestamps are always whole days, so
    daylight saving transitions in ``tz`` never leak into the result.

    Example:
        >>> clip_time(datetime(2025, 3, 9, 23, 30, tzinfo=ZoneInfo("US/Pacific")))
        datetime.datetime(2025, 3, 10, 0, 0, tzinfo=datetime.timezone.utc)
        >>> clip_time(
        ...     datetime(2025, 3, 9, 23, 30, tzinfo=ZoneInfo("US/Pacific")),
        ...     tz="US/Pacific",
        ... )
        datetime.datetime(2025, 3, 9, 0, 0, tzinfo=datetime.timezone.utc)
    """
    moment = coerce_timestamp(value)
    local = moment.astimezone(ZoneInfo(tz))
    return datetime.combine(local.date(), time.min, tzinfo=timezone.utc)
