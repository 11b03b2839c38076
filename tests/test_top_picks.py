"""Tests for top-picks orchestration."""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import requests

from hatchcast.cache import FileCacheStore, MemoryCacheStore
from hatchcast.config import Settings
from hatchcast.reference.streams import STREAMS
from hatchcast.schemas import (
    Coordinates,
    EventDefinition,
    FishingQuality,
    InsectOrder,
    Location,
    Region,
    SensorReading,
    State,
    TimeOfDay,
    WeatherSnapshot,
)
from hatchcast.services.cached import CachedReadingsFetcher, CachedWeatherFetcher
from hatchcast.services.http import ThreadLocalSession
from hatchcast.top_picks import TopPicksRanker, build_cache_store, build_ranker, score_one_location

NY = ZoneInfo("America/New_York")
AS_OF = datetime(2026, 4, 15, 14, 0, tzinfo=NY)
GENERATED = datetime(2026, 4, 15, 18, 0, tzinfo=UTC)


def _location(i: int, *, coords: bool = True) -> Location:
    return Location(
        id=f"loc-{i:02d}",
        name=f"Stream {i}",
        region=Region.CATSKILLS,
        state=State.NY,
        station_ids=(f"st-{i:02d}",),
        coordinates=Coordinates(latitude=41.0 + i / 100, longitude=-74.0) if coords else None,
    )


class FakeReadings:
    """Readings keyed by station id; listed stations fail."""

    def __init__(
        self,
        temps: dict[str, float | None],
        failing: Sequence[str] = (),
        delay: float = 0.0,
    ) -> None:
        self.temps = temps
        self.failing = set(failing)
        self.delay = delay
        self.current = 0
        self.peak = 0
        self._lock = threading.Lock()

    def fetch_readings(self, station_ids: Sequence[str], params: Sequence[str]) -> list[SensorReading]:
        with self._lock:
            self.current += 1
            self.peak = max(self.peak, self.current)
        try:
            time.sleep(self.delay)
            if self.failing & set(station_ids):
                msg = f"USGS unavailable for {station_ids}"
                raise requests.ConnectionError(msg)
            return [
                SensorReading(station_id=sid, timestamp=AS_OF, water_temp_f=self.temps.get(sid))
                for sid in station_ids
            ]
        finally:
            with self._lock:
                self.current -= 1


class FakeWeather:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls = 0

    def fetch_weather(self, coords: Coordinates) -> WeatherSnapshot:
        self.calls += 1
        if self.fail:
            msg = "Open-Meteo timeout"
            raise requests.Timeout(msg)
        return WeatherSnapshot(
            timestamp=AS_OF,
            air_temp_f=60,
            cloud_cover_percent=80,
            precip_probability=10,
            wind_speed_mph=5,
            is_daylight=True,
            short_forecast="Overcast",
        )


def _ranker(
    readings: FakeReadings,
    weather: FakeWeather | None = None,
    catalog: Sequence[Location] | None = None,
    **kwargs: object,
) -> TopPicksRanker:
    store = MemoryCacheStore()
    return TopPicksRanker(
        CachedReadingsFetcher(readings, store),
        CachedWeatherFetcher(weather or FakeWeather(), store),
        catalog if catalog is not None else [_location(i) for i in range(10)],
        clock=lambda: GENERATED,
        **kwargs,  # type: ignore[arg-type]
    )


# Ten streams spread across the temperature curve
TEMPS: dict[str, float | None] = {
    f"st-{i:02d}": t for i, t in enumerate([54, 40, 66, 50, 36, 58, 45, 70, 62, 48])
}


class TestScoreOneLocation:
    """Single-location pipeline."""

    @pytest.mark.asyncio
    async def test_scores_location(self) -> None:
        store = MemoryCacheStore()
        score = await score_one_location(
            _location(0),
            CachedReadingsFetcher(FakeReadings(TEMPS), store),
            CachedWeatherFetcher(FakeWeather(), store),
            AS_OF,
        )

        assert score.location_id == "loc-00"
        assert score.water_temp_f == 54.0
        assert score.air_temp_f == 60
        assert 0 <= score.score <= 100
        assert len(score.top_predictions) <= 3
        assert score.top_predictions[0].event_id == "hendrickson"
        assert score.summary.startswith("Stream 0 | Water: 54.0°F")
        assert score.readings_cached is False
        assert score.weather_cached is False

    @pytest.mark.asyncio
    async def test_second_call_is_cached(self) -> None:
        store = MemoryCacheStore()
        readings = CachedReadingsFetcher(FakeReadings(TEMPS), store)
        weather = CachedWeatherFetcher(FakeWeather(), store)

        await score_one_location(_location(0), readings, weather, AS_OF)
        score = await score_one_location(_location(0), readings, weather, AS_OF)

        assert score.readings_cached is True
        assert score.weather_cached is True

    @pytest.mark.asyncio
    async def test_no_coordinates_skips_weather(self) -> None:
        store = MemoryCacheStore()
        weather_source = FakeWeather()
        score = await score_one_location(
            _location(0, coords=False),
            CachedReadingsFetcher(FakeReadings(TEMPS), store),
            CachedWeatherFetcher(weather_source, store),
            AS_OF,
        )
        assert score.weather is None
        assert weather_source.calls == 0

    @pytest.mark.asyncio
    async def test_weather_failure_propagates_by_default(self) -> None:
        store = MemoryCacheStore()
        with pytest.raises(requests.Timeout):
            await score_one_location(
                _location(0),
                CachedReadingsFetcher(FakeReadings(TEMPS), store),
                CachedWeatherFetcher(FakeWeather(fail=True), store),
                AS_OF,
            )

    @pytest.mark.asyncio
    async def test_weather_failure_tolerated(self) -> None:
        store = MemoryCacheStore()
        score = await score_one_location(
            _location(0),
            CachedReadingsFetcher(FakeReadings(TEMPS), store),
            CachedWeatherFetcher(FakeWeather(fail=True), store),
            AS_OF,
            tolerate_weather_errors=True,
        )
        assert score.weather is None
        assert score.air_temp_f is None


class TestTopPicksRanker:
    """Ranking across locations."""

    @pytest.mark.asyncio
    async def test_one_failing_location_is_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        readings = FakeReadings(TEMPS, failing=["st-03"], delay=0.01)
        ranker = _ranker(readings, concurrency=3)

        rankings = await ranker.rank(count=10, as_of=AS_OF)

        assert rankings.count == 9
        assert len(rankings.picks) == 9
        assert "loc-03" not in {p.location_id for p in rankings.picks}
        scores = [p.score for p in rankings.picks]
        assert scores == sorted(scores, reverse=True)
        assert readings.peak <= 3
        assert "loc-03" in caplog.text

    @pytest.mark.asyncio
    async def test_truncates_to_count(self) -> None:
        rankings = await _ranker(FakeReadings(TEMPS)).rank(count=5, as_of=AS_OF)
        assert rankings.count == 5
        assert rankings.generated_at == GENERATED
        assert rankings.picks[0].location_id == "loc-00"

    @pytest.mark.asyncio
    async def test_equal_scores_ordered_by_id(self) -> None:
        temps = {f"st-{i:02d}": 54.0 for i in range(4)}
        catalog = [_location(i) for i in (3, 1, 2, 0)]
        ranker = _ranker(FakeReadings(temps), catalog=catalog)

        first = await ranker.rank(count=4, as_of=AS_OF)
        second = await ranker.rank(count=4, as_of=AS_OF)

        assert len({p.score for p in first.picks}) == 1
        assert [p.location_id for p in first.picks] == ["loc-00", "loc-01", "loc-02", "loc-03"]
        assert [p.location_id for p in second.picks] == [p.location_id for p in first.picks]

    @pytest.mark.asyncio
    async def test_equal_scores_ordered_by_quality_tier(self) -> None:
        # Off-window morning dun: 54°F gives p 0.567 (one likely hatch, fair),
        # 56°F sits on the band edge at p 0.441 (none likely, poor). Both are
        # medium confidence, so the composite scores tie.
        dun = EventDefinition(
            id="dawn-dun",
            common_name="Dawn Dun",
            order=InsectOrder.MAYFLY,
            min_temp_f=50,
            max_temp_f=56,
            peak_months=(4,),
            time_of_day=TimeOfDay.MORNING,
        )
        temps: dict[str, float | None] = {"st-00": 56.0, "st-01": 54.0}

        for catalog in ([_location(0), _location(1)], [_location(1), _location(0)]):
            ranker = _ranker(FakeReadings(temps), catalog=catalog, hatches=[dun])
            first = await ranker.rank(count=2, as_of=AS_OF)
            second = await ranker.rank(count=2, as_of=AS_OF)

            assert first.picks[0].score == first.picks[1].score
            assert [p.location_id for p in first.picks] == ["loc-01", "loc-00"]
            assert [p.quality for p in first.picks] == [FishingQuality.FAIR, FishingQuality.POOR]
            assert [p.location_id for p in second.picks] == ["loc-01", "loc-00"]

    @pytest.mark.asyncio
    async def test_all_failing_gives_empty_rankings(self) -> None:
        readings = FakeReadings(TEMPS, failing=list(TEMPS))
        rankings = await _ranker(readings).rank(as_of=AS_OF)
        assert rankings.count == 0
        assert rankings.picks == []

    @pytest.mark.asyncio
    async def test_missing_water_temp_lands_mid_pack(self) -> None:
        temps: dict[str, float | None] = {"st-00": 54.0, "st-01": None, "st-02": 70.0}
        catalog = [_location(i) for i in range(3)]
        rankings = await _ranker(FakeReadings(temps), catalog=catalog).rank(count=3, as_of=AS_OF)
        assert [p.location_id for p in rankings.picks] == ["loc-00", "loc-01", "loc-02"]

    @pytest.mark.asyncio
    async def test_invalid_count(self) -> None:
        with pytest.raises(ValueError, match="count"):
            await _ranker(FakeReadings(TEMPS)).rank(count=0)

    def test_invalid_concurrency(self) -> None:
        with pytest.raises(ValueError, match="concurrency"):
            _ranker(FakeReadings(TEMPS), concurrency=0)

    def test_empty_catalog(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            _ranker(FakeReadings(TEMPS), catalog=[])

    @pytest.mark.asyncio
    async def test_conditions(self) -> None:
        score = await _ranker(FakeReadings(TEMPS)).conditions("loc-05", as_of=AS_OF)
        assert score.location_id == "loc-05"
        assert score.water_temp_f == 58.0

    @pytest.mark.asyncio
    async def test_conditions_unknown_id(self) -> None:
        with pytest.raises(KeyError):
            await _ranker(FakeReadings(TEMPS)).conditions("nope")


class TestBuildRanker:
    """Wiring from settings."""

    def test_memory_backend(self) -> None:
        settings = Settings(cache_backend="memory", concurrency=4)
        assert isinstance(build_cache_store(settings), MemoryCacheStore)

        ranker = build_ranker(settings)
        assert ranker.concurrency == 4
        assert ranker.catalog == STREAMS

    def test_sources_share_a_thread_local_client(self) -> None:
        ranker = build_ranker(Settings(http_timeout=3.0))
        readings_client = ranker.readings_fetcher.source.client  # type: ignore[attr-defined]
        weather_client = ranker.weather_fetcher.source.client  # type: ignore[attr-defined]

        assert isinstance(readings_client, ThreadLocalSession)
        assert readings_client is weather_client
        assert readings_client.timeout == 3.0

    def test_file_backend(self, tmp_path: Path) -> None:
        settings = Settings(cache_backend="file", data_dir=tmp_path)
        store = build_cache_store(settings)
        assert isinstance(store, FileCacheStore)
        assert store.store.base == tmp_path
