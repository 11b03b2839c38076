"""hatchcast - live trout stream conditions, hatch predictions and top picks.

Architecture::

    datasources/   External APIs (USGS instantaneous values, Open-Meteo weather)
    cache.py       Key/value cache with per-entry TTL (memory or file backed)
    store.py       JSON envelope store (live/ -> derived/)
    services/      HTTP client with retry, cache-aside fetchers, bounded executor
    reference/     Static catalogs (streams, hatches) and thresholds
    analysis/      Pure logic (hatch prediction, stream scoring)
    top_picks.py   Fan-out over every stream, rank by composite score
    flows/         Prefect orchestration (refresh writes derived/top_picks.json)

Data flow: datasources -> cache -> analysis -> top_picks -> CLI / derived/

Extension points, see each package's docstring for step-by-step guides:
  - New data source:   datasources/__init__.py
  - New analysis:      analysis/__init__.py
  - New reference:     reference/__init__.py
"""

__version__ = "0.1.0"

from hatchcast.config import Settings
from hatchcast.schemas import Location, LocationScore, Rankings

__all__ = ["Location", "LocationScore", "Rankings", "Settings", "__version__"]
