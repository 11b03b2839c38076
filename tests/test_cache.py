"""Tests for cache keys and the memory/file cache backends."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from hatchcast.cache import (
    READINGS_TTL,
    STATIC_TTL,
    WEATHER_TTL,
    CacheEntry,
    CacheStats,
    FileCacheStore,
    MemoryCacheStore,
    readings_key,
    weather_key,
)
from hatchcast.schemas import Coordinates
from hatchcast.store import DataStore

if TYPE_CHECKING:
    from pathlib import Path

T0 = datetime(2026, 4, 15, 12, 0, tzinfo=UTC)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class TestKeys:
    """Key builders."""

    def test_readings_key_shape(self) -> None:
        key = readings_key(["01420500"], ["00010", "00060"])
        assert key == ("cache", "usgs", "01420500:00010,00060")

    def test_readings_key_order_independent(self) -> None:
        a = readings_key(["01362500", "01362200"], ["00060", "00010"])
        b = readings_key(["01362200", "01362500"], ["00010", "00060"])
        assert a == b

    def test_readings_key_differs_by_params(self) -> None:
        assert readings_key(["01420500"], ["00010"]) != readings_key(["01420500"], ["00060"])

    def test_weather_key_rounds_to_four_places(self) -> None:
        coords = Coordinates(latitude=41.93651234, longitude=-74.92009999)
        assert weather_key(coords) == ("cache", "weather", "41.9365,-74.9201")

    def test_ttls(self) -> None:
        assert READINGS_TTL == timedelta(minutes=15)
        assert WEATHER_TTL == timedelta(hours=1)
        assert STATIC_TTL == timedelta(hours=24)


class TestCacheEntry:
    """Freshness rule."""

    def test_fresh_until_ttl(self) -> None:
        entry = CacheEntry(value=1, cached_at=T0, ttl=timedelta(minutes=15))
        assert entry.is_fresh(T0 + timedelta(minutes=14, seconds=59))
        assert not entry.is_fresh(T0 + timedelta(minutes=15))
        assert entry.expires_at == T0 + timedelta(minutes=15)

    def test_hit_rate(self) -> None:
        assert CacheStats().hit_rate == 0.0
        assert CacheStats(hits=3, misses=1).hit_rate == 0.75


class TestMemoryCacheStore:
    """In-process backend."""

    def test_round_trip(self) -> None:
        cache = MemoryCacheStore(clock=FakeClock())
        cache.set(("cache", "usgs", "k"), {"v": 1}, READINGS_TTL)

        hit = cache.get(("cache", "usgs", "k"))
        assert hit is not None
        assert hit.value == {"v": 1}
        assert hit.cached_at == T0

    def test_missing_key(self) -> None:
        cache = MemoryCacheStore(clock=FakeClock())
        assert cache.get(("cache", "usgs", "nope")) is None

    def test_expiry_is_a_miss_and_evicts(self) -> None:
        clock = FakeClock()
        cache = MemoryCacheStore(clock=clock)
        cache.set(("k",), "v", timedelta(minutes=15))

        clock.advance(timedelta(minutes=15))
        assert cache.get(("k",)) is None
        assert len(cache) == 0

    def test_overwrite_refreshes_cached_at(self) -> None:
        clock = FakeClock()
        cache = MemoryCacheStore(clock=clock)
        cache.set(("k",), "old", timedelta(minutes=15))
        clock.advance(timedelta(minutes=10))
        cache.set(("k",), "new", timedelta(minutes=15))
        clock.advance(timedelta(minutes=10))

        hit = cache.get(("k",))
        assert hit is not None
        assert hit.value == "new"

    def test_delete_and_clear(self) -> None:
        cache = MemoryCacheStore(clock=FakeClock())
        cache.set(("a",), 1, STATIC_TTL)
        cache.set(("b",), 2, STATIC_TTL)

        cache.delete(("a",))
        cache.delete(("missing",))
        assert cache.get(("a",)) is None
        assert len(cache) == 1

        cache.clear()
        assert len(cache) == 0
        assert cache.stats == CacheStats()

    def test_stats(self) -> None:
        cache = MemoryCacheStore(clock=FakeClock())
        cache.get(("k",))
        cache.set(("k",), 1, STATIC_TTL)
        cache.get(("k",))
        cache.get(("k",))
        assert cache.stats.hits == 2
        assert cache.stats.misses == 1

    def test_rejects_non_positive_ttl(self) -> None:
        cache = MemoryCacheStore(clock=FakeClock())
        with pytest.raises(ValueError, match="ttl"):
            cache.set(("k",), 1, timedelta(0))


class TestFileCacheStore:
    """Backend persisted through DataStore."""

    def test_round_trip(self, tmp_path: Path) -> None:
        cache = FileCacheStore(DataStore(tmp_path), clock=FakeClock())
        key = readings_key(["01420500"], ["00010"])
        cache.set(key, [{"station_id": "01420500"}], READINGS_TTL)

        hit = cache.get(key)
        assert hit is not None
        assert hit.value == [{"station_id": "01420500"}]
        assert hit.cached_at == T0

    def test_file_layout(self, tmp_path: Path) -> None:
        cache = FileCacheStore(DataStore(tmp_path), clock=FakeClock())
        key = weather_key(Coordinates(latitude=41.9365, longitude=-74.9201))
        cache.set(key, {"air_temp_f": 60}, WEATHER_TTL)

        path = cache.path_for(key)
        assert path.parts[:3] == ("live", "cache", "weather")
        assert (tmp_path / path).exists()

    def test_survives_new_instance(self, tmp_path: Path) -> None:
        clock = FakeClock()
        FileCacheStore(DataStore(tmp_path), clock=clock).set(("cache", "usgs", "k"), 1, STATIC_TTL)
        hit = FileCacheStore(DataStore(tmp_path), clock=clock).get(("cache", "usgs", "k"))
        assert hit is not None
        assert hit.value == 1

    def test_expiry_deletes_file(self, tmp_path: Path) -> None:
        clock = FakeClock()
        cache = FileCacheStore(DataStore(tmp_path), clock=clock)
        key = ("cache", "usgs", "k")
        cache.set(key, 1, READINGS_TTL)

        clock.advance(READINGS_TTL)
        assert cache.get(key) is None
        assert not (tmp_path / cache.path_for(key)).exists()
        assert cache.stats.misses == 1

    def test_delete_and_clear(self, tmp_path: Path) -> None:
        cache = FileCacheStore(DataStore(tmp_path), clock=FakeClock())
        cache.set(("cache", "usgs", "a"), 1, STATIC_TTL)
        cache.set(("cache", "weather", "b"), 2, STATIC_TTL)

        cache.delete(("cache", "usgs", "a"))
        assert cache.get(("cache", "usgs", "a")) is None

        cache.clear()
        assert cache.get(("cache", "weather", "b")) is None

    def test_unserializable_value_raises(self, tmp_path: Path) -> None:
        cache = FileCacheStore(DataStore(tmp_path), clock=FakeClock())
        with pytest.raises(TypeError):
            cache.set(("cache", "usgs", "k"), object(), STATIC_TTL)
