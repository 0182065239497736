# ♥♥─── Datetime Handler ─────────────────────────────────────────────────────────
from __future__ import annotations

from datetime import UTC, date, tzinfo, datetime, timedelta

from pydantic import Field, BaseModel, ConfigDict, PrivateAttr, computed_field
from dateutil.tz import tzlocal
import dateutil.parser

from studly.custom_logger import log


LOCAL_TZ: tzinfo = tzlocal()
DAYS_IN_WEEK: int = 7
MONTH_LABELS: tuple[str, ...] = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
WEEKDAY_LABELS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


# ─── DateTimeHandler Class ─────────────────────────────────────────────────────


class DateTimeHandler(BaseModel):
    """Handle various timestamp formats and provide conversions."""

    model_config = ConfigDict(arbitrary_types_allowed=True)
    MILLISECONDS_TIMESTAMP_THRESHOLD: int = 100_000_000_000

    timestamp: str | datetime | int | float | None = Field(default=None)
    _local_timezone: tzinfo = PrivateAttr(default_factory=tzlocal)

    @computed_field
    @property
    def utc_datetime(self) -> datetime | None:
        """Convert the timestamp to a UTC datetime object.

        Naive datetimes and naive ISO strings are read as local wall-clock time.
        """
        if self.timestamp is None:
            return None

        try:
            if isinstance(self.timestamp, datetime):
                return to_local(self.timestamp).astimezone(UTC)

            if isinstance(self.timestamp, int | float):
                ts_seconds = self.timestamp / 1000 if abs(self.timestamp) > self.MILLISECONDS_TIMESTAMP_THRESHOLD else self.timestamp
                return datetime.fromtimestamp(ts_seconds, tz=UTC)

            if isinstance(self.timestamp, str):
                return to_local(dateutil.parser.isoparse(self.timestamp)).astimezone(UTC)

        except (ValueError, OverflowError) as e:
            log.warning("Could not parse timestamp '{}': {}", self.timestamp, e)

        return None

    @computed_field
    @property
    def local_datetime(self) -> datetime | None:
        """Convert the UTC datetime to the local timezone."""
        if self.utc_datetime:
            return self.utc_datetime.astimezone(self._local_timezone)

        return None

    def format_local(self, fmt: str = "%Y-%m-%d %H:%M") -> str:
        """
        Format the local datetime into a string.

        :param fmt: The desired format string for strftime.
        :returns: Formatted datetime string or "N/A" if datetime is not set.
        """
        if self.local_datetime:
            return self.local_datetime.strftime(fmt)

        return "N/A"

    def to_iso(self) -> str | None:
        """Convert the UTC datetime to an ISO 8601 string with a 'Z' suffix."""
        if self.utc_datetime:
            return self.utc_datetime.isoformat().replace("+00:00", "Z")

        return None

    def to_unix_seconds(self) -> float | None:
        if self.utc_datetime:
            return self.utc_datetime.timestamp()

        return None


# ─── Local Calendar Helpers ────────────────────────────────────────────────────


def to_local(value: datetime) -> datetime:
    """Return ``value`` as an aware local datetime; naive values are taken as local wall-clock time."""
    if value.tzinfo is None:
        return value.replace(tzinfo=LOCAL_TZ)
    return value.astimezone(LOCAL_TZ)


def start_of_day(value: datetime) -> datetime:
    return to_local(value).replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(value: datetime) -> datetime:
    """Midnight of the Monday that starts the week containing ``value``."""
    day_start = start_of_day(value)
    return day_start - timedelta(days=day_start.weekday())


def start_of_month(value: datetime) -> datetime:
    return start_of_day(value).replace(day=1)


def local_date(value: datetime) -> date:
    return to_local(value).date()


def is_same_day(first: datetime, second: datetime) -> bool:
    """Check whether two instants fall on the same local calendar day."""
    return local_date(first) == local_date(second)


def truncate_to_minute(value: datetime) -> datetime:
    return to_local(value).replace(second=0, microsecond=0)


def with_current_time(day: datetime | date, now: datetime) -> datetime:
    """Combine the calendar day of ``day`` with the hour and minute of ``now``.

    :param day: The picked calendar day.
    :param now: The current instant supplying the time of day.
    :returns: A local datetime with seconds zeroed.
    """
    picked = local_date(day) if isinstance(day, datetime) else day
    current = to_local(now)
    return datetime(picked.year, picked.month, picked.day, current.hour, current.minute, tzinfo=LOCAL_TZ)


def week_days(now: datetime) -> list[datetime]:
    """The seven local midnights of the current week, Monday first."""
    monday = start_of_week(now)
    return [monday + timedelta(days=offset) for offset in range(DAYS_IN_WEEK)]


def month_label(value: datetime) -> str:
    return MONTH_LABELS[to_local(value).month - 1]


def weekday_label(value: datetime) -> str:
    return WEEKDAY_LABELS[to_local(value).weekday()]
