"""
Cache-aside wrappers around the upstream readings and weather sources.

Each fetcher consults a :class:`~hatchcast.cache.CacheStore`, falls back to
its upstream source on a miss and writes the result back.

Failure policy:
  - Cache faults are absorbed. A ``get`` that raises is a miss, a ``set`` or
    ``delete`` that raises is a no-op. Both are logged at WARNING.
  - Upstream faults propagate to the caller untouched.

Payloads are stored as JSON-ready dicts and re-validated on the way out, so
the memory and file backends hold the same shape.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

from hatchcast.cache import READINGS_TTL, WEATHER_TTL, readings_key, weather_key
from hatchcast.datasources.usgs.client import DEFAULT_PARAMS
from hatchcast.schemas import Coordinates, SensorReading, WeatherSnapshot

if TYPE_CHECKING:
    from hatchcast.cache import CacheHit, CacheKey, CacheStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReadingsSource(Protocol):
    """Upstream that returns the latest sensor readings for a set of stations."""

    def fetch_readings(
        self, station_ids: Sequence[str], params: Sequence[str]
    ) -> list[SensorReading]: ...


class WeatherSource(Protocol):
    """Upstream that returns current weather at a point."""

    def fetch_weather(self, coords: Coordinates) -> WeatherSnapshot: ...


@dataclass(frozen=True)
class CacheResult(Generic[T]):
    """Data plus where it came from."""

    data: T
    cached: bool
    cached_at: datetime | None = None


class _CacheAside(Generic[T]):
    """Shared read-through logic: store get -> upstream -> store set."""

    ttl: timedelta

    def __init__(self, store: CacheStore) -> None:
        self.store = store

    def _lookup(self, key: CacheKey) -> CacheHit | None:
        try:
            hit = self.store.get(key)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Cache read failed for %s, fetching upstream: %s", key, exc)
            return None
        return hit

    def _remember(self, key: CacheKey, payload: Any) -> None:
        try:
            self.store.set(key, payload, self.ttl)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Cache write failed for %s: %s", key, exc)

    def _forget(self, key: CacheKey) -> None:
        try:
            self.store.delete(key)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Cache invalidation failed for %s: %s", key, exc)

    def _read_through(
        self,
        key: CacheKey,
        fetch: Callable[[], T],
        dump: Callable[[T], Any],
        load: Callable[[Any], T],
    ) -> CacheResult[T]:
        hit = self._lookup(key)
        if hit is not None:
            try:
                return CacheResult(data=load(hit.value), cached=True, cached_at=hit.cached_at)
            except (TypeError, ValueError) as exc:
                # Corrupt or outdated payload: treat as a miss and overwrite it
                logger.warning("Discarding unreadable cache entry %s: %s", key, exc)

        data = fetch()
        self._remember(key, dump(data))
        return CacheResult(data=data, cached=False, cached_at=None)


class CachedReadingsFetcher(_CacheAside[list[SensorReading]]):
    """USGS readings with a 15-minute cache."""

    ttl = READINGS_TTL

    def __init__(self, source: ReadingsSource, store: CacheStore) -> None:
        super().__init__(store)
        self.source = source

    def get_readings(
        self,
        station_ids: Sequence[str],
        params: Sequence[str] = DEFAULT_PARAMS,
    ) -> CacheResult[list[SensorReading]]:
        """Latest readings for ``station_ids``, from cache when fresh."""
        if not station_ids:
            return CacheResult(data=[], cached=False, cached_at=None)

        return self._read_through(
            readings_key(station_ids, params),
            fetch=lambda: self.source.fetch_readings(station_ids, params),
            dump=lambda readings: [r.model_dump(mode="json") for r in readings],
            load=lambda raw: [SensorReading.model_validate(r) for r in raw],
        )

    def invalidate(
        self, station_ids: Sequence[str], params: Sequence[str] = DEFAULT_PARAMS
    ) -> None:
        """Drop the cached readings for this station/parameter combination."""
        self._forget(readings_key(station_ids, params))


class CachedWeatherFetcher(_CacheAside[WeatherSnapshot]):
    """Current weather with a 1-hour cache."""

    ttl = WEATHER_TTL

    def __init__(self, source: WeatherSource, store: CacheStore) -> None:
        super().__init__(store)
        self.source = source

    def get_weather(self, coords: Coordinates) -> CacheResult[WeatherSnapshot]:
        """Current conditions at ``coords``, from cache when fresh."""
        return self._read_through(
            weather_key(coords),
            fetch=lambda: self.source.fetch_weather(coords),
            dump=lambda snapshot: snapshot.model_dump(mode="json"),
            load=WeatherSnapshot.model_validate,
        )

    def invalidate(self, coords: Coordinates) -> None:
        """Drop the cached weather for these coordinates."""
        self._forget(weather_key(coords))
