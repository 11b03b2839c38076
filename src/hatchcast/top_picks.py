"""
Rank monitored streams by current fishing conditions.

One scoring task per location runs through the bounded executor. Each task
reads station data, then weather, through the cache-aside fetchers, and
hands both to the pure prediction and scoring functions. A location whose
task fails is logged and left out; the ranking itself never fails because
some upstream was degraded.

Usage::

    from hatchcast.config import get_settings
    from hatchcast.top_picks import build_ranker

    ranker = build_ranker(get_settings())
    rankings = asyncio.run(ranker.rank(count=5))
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

from hatchcast.analysis.predictions import predict, representative_water_temp
from hatchcast.analysis.scoring import assess_quality, build_summary, score_location
from hatchcast.cache import Clock, FileCacheStore, MemoryCacheStore, utc_now
from hatchcast.datasources.usgs import UsgsSource
from hatchcast.datasources.weather import OpenMeteoSource
from hatchcast.reference.hatches import HATCHES
from hatchcast.reference.streams import STREAMS
from hatchcast.schemas import EventDefinition, Location, LocationScore, Rankings
from hatchcast.services.cached import CachedReadingsFetcher, CachedWeatherFetcher
from hatchcast.services.http import ThreadLocalSession
from hatchcast.services.pool import Fulfilled, run_bounded
from hatchcast.store import DataStore

if TYPE_CHECKING:
    from hatchcast.cache import CacheStore
    from hatchcast.config import Settings
    from hatchcast.schemas import WeatherSnapshot

logger = logging.getLogger(__name__)

#: Locations scored at once
FETCH_CONCURRENCY = 6
#: Default number of picks returned
TOP_N = 5
#: Predictions kept on each LocationScore
TOP_PREDICTIONS = 3


async def score_one_location(
    location: Location,
    readings_fetcher: CachedReadingsFetcher,
    weather_fetcher: CachedWeatherFetcher,
    as_of: datetime,
    *,
    catalog: Sequence[EventDefinition] = HATCHES,
    tolerate_weather_errors: bool = False,
) -> LocationScore:
    """
    Fetch, predict and score a single location.

    Readings come first, then weather if the location has coordinates. Fetch
    errors propagate so the executor records the location as rejected,
    except that ``tolerate_weather_errors`` downgrades a weather failure to
    "no weather".
    """
    readings_result = await asyncio.to_thread(
        readings_fetcher.get_readings, list(location.station_ids)
    )
    readings = readings_result.data

    weather: WeatherSnapshot | None = None
    weather_cached = False
    if location.coordinates is not None:
        try:
            weather_result = await asyncio.to_thread(
                weather_fetcher.get_weather, location.coordinates
            )
        except Exception as exc:
            if not tolerate_weather_errors:
                raise
            logger.warning("Weather unavailable for %s, scoring without it: %s", location.id, exc)
        else:
            weather = weather_result.data
            weather_cached = weather_result.cached

    predictions = predict(readings, weather, as_of, catalog=catalog)
    water_temp = representative_water_temp(readings)
    discharges = [r.discharge_cfs for r in readings if r.discharge_cfs is not None]

    return LocationScore(
        location=location,
        score=score_location(readings, weather, predictions),
        quality=assess_quality(water_temp, predictions, weather),
        readings=readings,
        weather=weather,
        top_predictions=predictions[:TOP_PREDICTIONS],
        water_temp_f=round(water_temp, 1) if water_temp is not None else None,
        air_temp_f=weather.air_temp_f if weather is not None else None,
        discharge_cfs=discharges[0] if discharges else None,
        summary=build_summary(location, water_temp, predictions, weather),
        readings_cached=readings_result.cached,
        weather_cached=weather_cached,
    )


def _ranking_key(score: LocationScore) -> tuple[int, int, str]:
    return (-score.score, score.quality.rank, score.location.id)


class TopPicksRanker:
    """Scores every catalog location and returns the best ``count``."""

    def __init__(
        self,
        readings_fetcher: CachedReadingsFetcher,
        weather_fetcher: CachedWeatherFetcher,
        catalog: Sequence[Location] = STREAMS,
        *,
        concurrency: int = FETCH_CONCURRENCY,
        clock: Clock = utc_now,
        hatches: Sequence[EventDefinition] = HATCHES,
        tolerate_weather_errors: bool = False,
    ) -> None:
        if concurrency < 1:
            msg = f"concurrency must be >= 1, got {concurrency}"
            raise ValueError(msg)
        if not catalog:
            msg = "location catalog is empty"
            raise ValueError(msg)

        self.readings_fetcher = readings_fetcher
        self.weather_fetcher = weather_fetcher
        self.catalog = tuple(catalog)
        self.concurrency = concurrency
        self.clock = clock
        self.hatches = tuple(hatches)
        self.tolerate_weather_errors = tolerate_weather_errors

    async def _score(self, location: Location, as_of: datetime) -> LocationScore:
        return await score_one_location(
            location,
            self.readings_fetcher,
            self.weather_fetcher,
            as_of,
            catalog=self.hatches,
            tolerate_weather_errors=self.tolerate_weather_errors,
        )

    async def rank(self, count: int = TOP_N, as_of: datetime | None = None) -> Rankings:
        """
        Score all locations and return the top ``count``.

        Sorted by score (highest first), then quality tier (excellent first),
        then location id, so equal scores always come back in the same order.

        Raises:
            ValueError: If ``count`` is less than 1.
        """
        if count < 1:
            msg = f"count must be >= 1, got {count}"
            raise ValueError(msg)

        generated_at = self.clock()
        as_of = as_of or generated_at

        outcomes = await run_bounded(
            [lambda loc=loc: self._score(loc, as_of) for loc in self.catalog],
            self.concurrency,
        )

        scores: list[LocationScore] = []
        for location, outcome in zip(self.catalog, outcomes, strict=True):
            if isinstance(outcome, Fulfilled):
                scores.append(outcome.value)
            else:
                logger.warning("Skipping %s: %s", location.id, outcome.reason)

        if len(scores) < len(self.catalog):
            logger.info("Scored %d of %d locations", len(scores), len(self.catalog))

        scores.sort(key=_ranking_key)
        picks = scores[:count]
        return Rankings(count=len(picks), generated_at=generated_at, picks=picks)

    async def conditions(self, location_id: str, as_of: datetime | None = None) -> LocationScore:
        """
        Score a single location by id.

        Raises:
            KeyError: If the id isn't in the catalog.
        """
        location = next((loc for loc in self.catalog if loc.id == location_id), None)
        if location is None:
            raise KeyError(location_id)
        return await self._score(location, as_of or self.clock())


def build_cache_store(settings: Settings) -> CacheStore:
    """Cache backend named by ``settings.cache_backend``."""
    if settings.cache_backend == "file":
        return FileCacheStore(DataStore(settings.data_dir))
    return MemoryCacheStore()


def build_ranker(settings: Settings) -> TopPicksRanker:
    """Wire the cache store, upstream sources and fetchers for one process."""
    store = build_cache_store(settings)
    client = ThreadLocalSession(timeout=settings.http_timeout)
    return TopPicksRanker(
        CachedReadingsFetcher(UsgsSource(client=client), store),
        CachedWeatherFetcher(OpenMeteoSource(client=client), store),
        STREAMS,
        concurrency=settings.concurrency,
        tolerate_weather_errors=settings.tolerate_weather_errors,
    )
