"""Key/value cache with per-entry TTL, used read-through by the fetchers.

Keys are tuples of strings built by :func:`readings_key` and
:func:`weather_key`. Parameter lists are sorted before they become part of
a key, so the same logical query always maps to the same entry.

TTLs follow how often the upstream data actually changes:
  - USGS instantaneous values publish every 15 minutes
  - Weather forecasts refresh hourly

Backends:
  - :class:`MemoryCacheStore` keeps entries in a dict (one process)
  - :class:`FileCacheStore` keeps one JSON envelope per key in a :class:`DataStore`

Any backend call may raise. The correctness of the system never depends on
the cache: callers treat a failed ``get`` as a miss and a failed ``set`` as
a no-op (see ``services/cached.py``).
"""

from __future__ import annotations

import hashlib
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from hatchcast.schemas import Coordinates
    from hatchcast.store import DataStore

CacheKey = tuple[str, ...]
Clock = Callable[[], datetime]

#: USGS data updates every 15 minutes
READINGS_TTL = timedelta(minutes=15)
#: Weather forecasts update hourly
WEATHER_TTL = timedelta(hours=1)
#: Catalog-style data that rarely changes
STATIC_TTL = timedelta(hours=24)


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(UTC)


# =============================================================================
# Keys
# =============================================================================


def readings_key(station_ids: Iterable[str], params: Iterable[str]) -> CacheKey:
    """Cache key for a USGS instantaneous-values query."""
    stations = ",".join(sorted(station_ids))
    codes = ",".join(sorted(params))
    return ("cache", "usgs", f"{stations}:{codes}")


def weather_key(coords: Coordinates) -> CacheKey:
    """Cache key for current conditions at a point (4 decimal places, ~11 m)."""
    return ("cache", "weather", f"{coords.latitude:.4f},{coords.longitude:.4f}")


# =============================================================================
# Entries
# =============================================================================


@dataclass(frozen=True)
class CacheEntry:
    """A stored value with the time it was cached and how long it stays valid."""

    value: Any
    cached_at: datetime
    ttl: timedelta

    @property
    def expires_at(self) -> datetime:
        return self.cached_at + self.ttl

    def is_fresh(self, now: datetime) -> bool:
        """An entry is a hit iff ``now - cached_at < ttl``."""
        return now - self.cached_at < self.ttl


@dataclass(frozen=True)
class CacheHit:
    """What a successful ``get`` returns."""

    value: Any
    cached_at: datetime


@dataclass
class CacheStats:
    """Hit/miss counters for one store."""

    hits: int = 0
    misses: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class CacheStore(Protocol):
    """Contract every cache backend implements.

    Implementations must be safe to call from several threads at once.
    Concurrent writes to the same key are last-write-wins.
    """

    def get(self, key: CacheKey) -> CacheHit | None: ...

    def set(self, key: CacheKey, value: Any, ttl: timedelta) -> None: ...

    def delete(self, key: CacheKey) -> None: ...

    def clear(self) -> None: ...


def _check_ttl(ttl: timedelta) -> None:
    if ttl <= timedelta(0):
        msg = f"ttl must be positive, got {ttl}"
        raise ValueError(msg)


# =============================================================================
# Backends
# =============================================================================


class MemoryCacheStore:
    """In-process cache backed by a dict and a lock."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()
        self.stats = CacheStats()

    def get(self, key: CacheKey) -> CacheHit | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.stats.misses += 1
                return None
            if not entry.is_fresh(self._clock()):
                # Expired entries are a miss even though they're still stored
                del self._entries[key]
                self.stats.misses += 1
                return None
            self.stats.hits += 1
            return CacheHit(value=entry.value, cached_at=entry.cached_at)

    def set(self, key: CacheKey, value: Any, ttl: timedelta) -> None:
        _check_ttl(ttl)
        entry = CacheEntry(value=value, cached_at=self._clock(), ttl=ttl)
        with self._lock:
            self._entries[key] = entry

    def delete(self, key: CacheKey) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.stats = CacheStats()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class FileCacheStore:
    """Cache persisted as JSON envelopes under ``live/cache/`` of a DataStore.

    Each key becomes ``live/cache/<source>/<sha1 of key>.json``; the envelope
    metadata records the original key, ``cached_at`` and ``ttl_seconds``.
    Values must be JSON-serializable.
    """

    SOURCE = "hatchcast-cache"

    def __init__(
        self,
        store: DataStore,
        clock: Clock = utc_now,
        prefix: Path = Path("live/cache"),
    ) -> None:
        self.store = store
        self.prefix = prefix
        self._clock = clock
        self._stats_lock = threading.Lock()
        self.stats = CacheStats()

    def path_for(self, key: CacheKey) -> Path:
        """Relative store path for a key."""
        source = key[1] if len(key) > 1 else "misc"
        digest = hashlib.sha1("\x1f".join(key).encode()).hexdigest()  # noqa: S324
        return self.prefix / source / f"{digest}.json"

    def get(self, key: CacheKey) -> CacheHit | None:
        path = self.path_for(key)
        envelope = self.store.read_raw(path)
        if envelope is None:
            self._count(hit=False)
            return None

        meta = envelope.get("meta", {})
        entry = CacheEntry(
            value=envelope.get("data"),
            cached_at=datetime.fromisoformat(meta["fetched_at"]),
            ttl=timedelta(seconds=float(meta["ttl_seconds"])),
        )
        if not entry.is_fresh(self._clock()):
            self.store.delete(path)
            self._count(hit=False)
            return None

        self._count(hit=True)
        return CacheHit(value=entry.value, cached_at=entry.cached_at)

    def set(self, key: CacheKey, value: Any, ttl: timedelta) -> None:
        _check_ttl(ttl)
        cached_at = self._clock()
        self.store.write(
            self.path_for(key),
            value,
            source=self.SOURCE,
            valid_until=cached_at + ttl,
            fetched_at=cached_at,
            key=list(key),
            ttl_seconds=ttl.total_seconds(),
        )

    def delete(self, key: CacheKey) -> None:
        self.store.delete(self.path_for(key))

    def clear(self) -> None:
        for path in self.store.list_files(self.prefix):
            self.store.delete(path)
        with self._stats_lock:
            self.stats = CacheStats()

    def _count(self, *, hit: bool) -> None:
        with self._stats_lock:
            if hit:
                self.stats.hits += 1
            else:
                self.stats.misses += 1
