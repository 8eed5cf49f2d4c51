"""Tests for timestamp coercion and clipping."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from datecalc import clip_time, coerce_timestamp


def test_int_is_unix_seconds():
    assert coerce_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert coerce_timestamp(86400 + 3600) == datetime(
        1970, 1, 2, 1, tzinfo=timezone.utc
    )
    assert coerce_timestamp(-86400) == datetime(1969, 12, 31, tzinfo=timezone.utc)


def test_date_is_midnight_utc():
    assert coerce_timestamp(date(2025, 1, 1)) == datetime(
        2025, 1, 1, tzinfo=timezone.utc
    )


def test_aware_datetime_is_converted_to_utc():
    moment = datetime(2025, 7, 1, 9, 0, tzinfo=ZoneInfo("US/Pacific"))

    result = coerce_timestamp(moment)

    assert result == datetime(2025, 7, 1, 16, 0, tzinfo=timezone.utc)
    assert result.tzinfo is timezone.utc


def test_naive_datetime_raises_with_hint():
    with pytest.raises(TypeError, match="Hint: Add timezone info"):
        coerce_timestamp(datetime(2025, 1, 1))


@pytest.mark.parametrize("value", ["2025-01-01", 1.5, True, None])
def test_unsupported_types_raise(value):
    with pytest.raises(TypeError, match="must be datetime, date, or int"):
        coerce_timestamp(value, "start_date")


def test_clip_time_drops_time_of_day():
    moment = datetime(2024, 3, 5, 23, 59, 59, 999999, tzinfo=timezone.utc)

    assert clip_time(moment) == datetime(2024, 3, 5, tzinfo=timezone.utc)


def test_clip_time_uses_calendar_day_in_zone():
    """Test that the day is taken in the given zone, then anchored at UTC."""
    moment = datetime(2025, 3, 9, 23, 30, tzinfo=ZoneInfo("US/Pacific"))

    assert clip_time(moment) == datetime(2025, 3, 10, tzinfo=timezone.utc)
    assert clip_time(moment, tz="US/Pacific") == datetime(
        2025, 3, 9, tzinfo=timezone.utc
    )


def test_clipped_days_across_dst_are_whole_days():
    """Test that a DST transition does not leak into day differences."""
    before = datetime(2025, 3, 8, 12, tzinfo=ZoneInfo("US/Pacific"))
    after = datetime(2025, 3, 10, 12, tzinfo=ZoneInfo("US/Pacific"))

    delta = clip_time(after, "US/Pacific") - clip_time(before, "US/Pacific")

    assert delta == timedelta(days=2)
