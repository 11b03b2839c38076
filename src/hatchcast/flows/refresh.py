"""
Prefect flow that ranks all monitored streams and saves a snapshot.

The snapshot at ``derived/top_picks.json`` is a serialized ``Rankings`` in
the standard store envelope, valid for one USGS publishing interval.

Run locally:
    python -m hatchcast.flows.refresh

Run with Prefect dashboard:
    prefect server start &
    python -m hatchcast.flows.refresh
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from prefect import flow, task

from hatchcast.cache import READINGS_TTL
from hatchcast.config import get_settings
from hatchcast.store import DataStore
from hatchcast.top_picks import build_ranker

store = DataStore(get_settings().data_dir)

TOP_PICKS_PATH = Path("derived/top_picks.json")


@task(name="rank-locations", retries=1, retry_delay_seconds=5)
async def rank_locations(count: int) -> dict[str, Any]:
    """Score every catalog stream and return the top ``count`` as JSON."""
    ranker = build_ranker(get_settings())
    rankings = await ranker.rank(count=count)
    return rankings.model_dump(mode="json")


@task(name="save-top-picks")
def save_top_picks(rankings: dict[str, Any]) -> Path:
    """Save rankings via store."""
    return store.write(
        TOP_PICKS_PATH,
        rankings,
        source="hatchcast",
        valid_until=datetime.now(UTC) + READINGS_TTL,
        count=rankings.get("count", 0),
    )


@flow(name="refresh-top-picks", log_prints=True)
async def refresh_top_picks(count: int | None = None, force: bool = False) -> dict[str, Any]:
    """
    Rank streams and write the snapshot.

    Skips the ranking while the previous snapshot is still fresh unless
    ``force`` is set.
    """
    if not force and store.is_fresh(TOP_PICKS_PATH):
        print("Top picks are fresh, skipping refresh.")
        rankings = store.read(TOP_PICKS_PATH) or {}
        return {"count": rankings.get("count", 0), "refreshed": False}

    count = count or get_settings().top_n
    print(f"Ranking streams (top {count})...")
    rankings = await rank_locations(count)
    output_path = save_top_picks(rankings)

    for i, pick in enumerate(rankings["picks"], 1):
        print(f"  {i}. {pick['location']['name']}: {pick['score']} ({pick['quality']})")
    print(f"Saved {rankings['count']} picks to {output_path}")

    return {"count": rankings["count"], "refreshed": True}


if __name__ == "__main__":
    result = asyncio.run(refresh_top_picks())
    print(f"Flow complete: {result}")
