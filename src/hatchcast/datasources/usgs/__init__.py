"""USGS Water Services data source.

Fetches the latest instantaneous values (water temperature, discharge,
gage height) for gauging stations.

Public API:
  - instantaneous: fetch_instantaneous_values, parse_instantaneous_values, UsgsSource
  - client: API URL, parameter codes, sentinel values
"""

from hatchcast.datasources.usgs.client import (
    DEFAULT_PARAMS,
    DISCHARGE,
    GAGE_HEIGHT,
    IV_API,
    SENTINEL_VALUES,
    WATER_TEMP,
)
from hatchcast.datasources.usgs.instantaneous import (
    UsgsSource,
    fetch_instantaneous_values,
    is_valid_reading,
    parse_instantaneous_values,
)

__all__ = [
    "DEFAULT_PARAMS",
    "DISCHARGE",
    "GAGE_HEIGHT",
    "IV_API",
    "SENTINEL_VALUES",
    "WATER_TEMP",
    "UsgsSource",
    "fetch_instantaneous_values",
    "is_valid_reading",
    "parse_instantaneous_values",
]
