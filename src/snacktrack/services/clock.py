"""Local calendar clock.

Everything that groups food by day goes through a clock so that day
boundaries follow the user's timezone (local midnight to midnight) rather
than UTC or the host's timezone.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo


class LocalCalendarClock(Protocol):
    """Calendar operations in the user's local timezone."""

    def today(self) -> str:
        """Return today's date key (YYYY-MM-DD)."""

    def date_key_of(self, timestamp_ms: int) -> str:
        """Return the local date key of an epoch-millisecond timestamp."""

    def day_bounds(self, date_key: str) -> tuple[int, int]:
        """Return [start, end) epoch milliseconds of a local day."""

    def now_ms(self) -> int:
        """Return the current time in epoch milliseconds."""

    def local_hour(self, timestamp_ms: int) -> int:
        """Return the local hour of day for a timestamp."""


def to_date(date_key: str) -> date:
    """Parse a YYYY-MM-DD date key."""
    return date.fromisoformat(date_key)


def to_date_key(day: date) -> str:
    """Format a date as a zero-padded YYYY-MM-DD key."""
    return day.isoformat()


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ZoneInfoCalendarClock(LocalCalendarClock):
    """Clock backed by an IANA timezone."""

    timezone_name: str
    now: Callable[[], datetime] = field(default=_utc_now)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone_name)

    def today(self) -> str:
        return to_date_key(self.now().astimezone(self.tz).date())

    def date_key_of(self, timestamp_ms: int) -> str:
        return to_date_key(self._local(timestamp_ms).date())

    def day_bounds(self, date_key: str) -> tuple[int, int]:
        day = to_date(date_key)
        start = datetime(day.year, day.month, day.day, tzinfo=self.tz)
        following = day + timedelta(days=1)
        end = datetime(following.year, following.month, following.day, tzinfo=self.tz)
        return _to_ms(start), _to_ms(end)

    def now_ms(self) -> int:
        return _to_ms(self.now())

    def local_hour(self, timestamp_ms: int) -> int:
        return self._local(timestamp_ms).hour

    def _local(self, timestamp_ms: int) -> datetime:
        return datetime.fromtimestamp(timestamp_ms / 1000, tz=self.tz)


def _to_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)
