"""Local calendar helpers and the timestamp handler."""

from __future__ import annotations

from datetime import UTC, date, datetime

from studly.utils import (
    LOCAL_TZ,
    DateTimeHandler,
    to_local,
    week_days,
    month_label,
    is_same_day,
    start_of_week,
    weekday_label,
    start_of_month,
    with_current_time,
    truncate_to_minute,
)
from tests.conftest import local


class TestCalendarHelpers:
    """Bucketing boundaries in local time."""

    def test_start_of_week_is_monday(self, now):
        assert start_of_week(now) == local(2026, 3, 16, 0)
        assert start_of_week(local(2026, 3, 22, 23, 59)) == local(2026, 3, 16, 0)

    def test_start_of_month(self, now):
        assert start_of_month(now) == local(2026, 3, 1, 0)

    def test_week_days(self, now):
        days = week_days(now)
        assert len(days) == 7
        assert [weekday_label(day) for day in days] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert days[-1] == local(2026, 3, 22, 0)

    def test_same_day(self):
        assert is_same_day(local(2026, 3, 18, 0, 1), local(2026, 3, 18, 23, 59))
        assert not is_same_day(local(2026, 3, 18, 23, 59), local(2026, 3, 19, 0, 0))

    def test_truncate_to_minute(self, now):
        assert truncate_to_minute(now) == local(2026, 3, 18, 14, 30)

    def test_with_current_time(self, now):
        assert with_current_time(date(2026, 4, 1), now) == local(2026, 4, 1, 14, 30)
        assert with_current_time(local(2026, 4, 1, 3), now) == local(2026, 4, 1, 14, 30)

    def test_naive_values_are_local(self):
        assert to_local(datetime(2026, 3, 18, 9)) == datetime(2026, 3, 18, 9, tzinfo=LOCAL_TZ)

    def test_month_label(self):
        assert month_label(local(2026, 12, 5)) == "Dec"


class TestDateTimeHandler:
    """Timestamp parsing in the various stored formats."""

    def test_iso_with_offset(self):
        handler = DateTimeHandler(timestamp="2026-03-18T12:00:00+00:00")
        assert handler.utc_datetime == datetime(2026, 3, 18, 12, tzinfo=UTC)
        assert handler.to_iso() == "2026-03-18T12:00:00Z"

    def test_epoch_seconds_and_milliseconds(self):
        assert DateTimeHandler(timestamp=1_700_000_000).to_unix_seconds() == 1_700_000_000
        assert DateTimeHandler(timestamp=1_700_000_000_000).to_unix_seconds() == 1_700_000_000

    def test_seconds_after_2033_are_not_milliseconds(self):
        assert DateTimeHandler(timestamp=2_100_000_000).utc_datetime == datetime(2036, 7, 18, 13, 20, tzinfo=UTC)

    def test_garbage_is_none(self):
        handler = DateTimeHandler(timestamp="not a date")
        assert handler.utc_datetime is None
        assert handler.format_local() == "N/A"
