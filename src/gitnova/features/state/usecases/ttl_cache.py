"""
Summary: Time-to-live keyed store backing every repository-state cache.
Why: Expired entries must read as absent, never as stale values or empty results.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from gitnova.platform.logging import logger

from .ports import Clock

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class CacheEntry(Generic[T]):
    """Immutable cached value stamped with its creation time and lifetime."""

    value: T
    created_at: float
    ttl: float

    def age(self, now: float) -> float:
        return now - self.created_at

    def is_expired(self, now: float) -> bool:
        """An entry is still valid at exactly ``ttl`` seconds of age."""

        return self.age(now) > self.ttl


class TtlCache:
    """Mapping of string keys to :class:`CacheEntry` with passive expiry.

    Writes always replace the entry; reads drop entries older than their TTL.
    """

    def __init__(self, *, default_ttl: float, clock: Clock = time.monotonic) -> None:
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")
        self._entries: dict[str, CacheEntry[Any]] = {}
        self._default_ttl = default_ttl
        self._clock = clock

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    def get_entry(self, key: str) -> CacheEntry[Any] | None:
        """Return the live entry for ``key`` or ``None`` when absent or expired."""

        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache miss", extra={"cache_event": "cache.miss", "cache_key": key})
            return None

        if entry.is_expired(self._clock()):
            del self._entries[key]
            logger.debug("Cache expired", extra={"cache_event": "cache.expired", "cache_key": key})
            return None

        logger.debug("Cache hit", extra={"cache_event": "cache.hit", "cache_key": key})
        return entry

    def get(self, key: str) -> Any | None:
        entry = self.get_entry(key)
        return None if entry is None else entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> CacheEntry[Any]:
        """Store ``value`` under ``key`` with a fresh timestamp."""

        lifetime = self._default_ttl if ttl is None else ttl
        if lifetime <= 0:
            raise ValueError("ttl must be positive")
        entry = CacheEntry(value=value, created_at=self._clock(), ttl=lifetime)
        self._entries[key] = entry
        logger.debug("Cached value", extra={"cache_event": "cache.write", "cache_key": key})
        return entry

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def delete_matching(self, pattern: re.Pattern[str]) -> list[str]:
        """Remove every key that ``pattern`` finds a match in; return them sorted."""

        removed = sorted(key for key in self._entries if pattern.search(key))
        for key in removed:
            del self._entries[key]
        return removed

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        """Return stored keys, including entries that have expired but not yet been read."""

        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get_entry(key) is not None

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["CacheEntry", "TtlCache"]
