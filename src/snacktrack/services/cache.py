"""TTL cache for external lookups."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for ``ttl_seconds``."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class InMemoryCache(Cache):
    """Process-local cache; entries are dropped lazily once expired."""

    now: Callable[[], datetime] = _utc_now
    _entries: dict[str, _CacheEntry] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.now() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        self._entries[key] = _CacheEntry(
            value=value, expires_at=self.now() + timedelta(seconds=ttl_seconds)
        )

    def __len__(self) -> int:
        return len(self._entries)
