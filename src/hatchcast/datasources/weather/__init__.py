"""Open-Meteo weather data source.

Fetches current conditions from Open-Meteo (free, no API key).

Public API:
  - current: fetch_current_conditions, parse_current_conditions, OpenMeteoSource
  - client: API URL, requested variables, WMO code lookup
"""

from hatchcast.datasources.weather.client import (
    OPEN_METEO_API,
    wmo_code_to_conditions,
)
from hatchcast.datasources.weather.current import (
    OpenMeteoSource,
    fetch_current_conditions,
    parse_current_conditions,
)

__all__ = [
    "OPEN_METEO_API",
    "OpenMeteoSource",
    "fetch_current_conditions",
    "parse_current_conditions",
    "wmo_code_to_conditions",
]
