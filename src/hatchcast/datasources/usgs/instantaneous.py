"""Latest instantaneous values from the USGS IV API."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any

from hatchcast.datasources.usgs.client import (
    DEFAULT_PARAMS,
    DISCHARGE,
    GAGE_HEIGHT,
    IV_API,
    SENTINEL_VALUES,
    WATER_TEMP,
)
from hatchcast.schemas import DataAvailability, ParameterStatus, SensorReading
from hatchcast.services.http import session
from hatchcast.units import c_to_f

if TYPE_CHECKING:
    from hatchcast.services.http import HttpClient

# parameter code -> DataAvailability field
_STATUS_FIELDS = {
    WATER_TEMP: "water_temp",
    DISCHARGE: "discharge",
    GAGE_HEIGHT: "gage_height",
}


def is_valid_reading(value: float) -> bool:
    """A reading is usable if it's finite and not a USGS sentinel."""
    return math.isfinite(value) and value not in SENTINEL_VALUES


def fetch_instantaneous_values(
    station_ids: Sequence[str],
    params: Sequence[str] = DEFAULT_PARAMS,
    *,
    client: HttpClient | None = None,
) -> dict[str, Any]:
    """
    Fetch the latest instantaneous values for a set of stations.

    Args:
        station_ids: USGS site numbers (e.g. ``["01420500"]``).
        params: USGS parameter codes.
        client: Client to use instead of the shared session.

    Returns:
        Raw API response dict (``value.timeSeries`` holds one series per
        station/parameter pair).

    Raises:
        requests.HTTPError: If the API request fails.
    """
    query: dict[str, str] = {
        "format": "json",
        "sites": ",".join(station_ids),
        "parameterCd": ",".join(params),
        "siteStatus": "active",
    }
    resp = (client or session).get(IV_API, params=query)
    resp.raise_for_status()
    result: dict[str, Any] = resp.json()
    return result


def _latest_value(series: dict[str, Any]) -> dict[str, Any] | None:
    """Last point of the first value block (USGS lists points chronologically)."""
    blocks = series.get("values") or []
    points = blocks[0].get("value", []) if blocks else []
    return points[-1] if points else None


def parse_instantaneous_values(raw: dict[str, Any]) -> list[SensorReading]:
    """
    Convert a USGS IV response into one SensorReading per station.

    Sentinel and unparseable values become ``None`` with the matching
    availability status. Stations where no parameter produced a valid
    timestamp are dropped; stations with partial data are kept.

    Raises:
        ValueError: If the response doesn't have a ``value.timeSeries`` list.
    """
    try:
        time_series: list[dict[str, Any]] = raw["value"]["timeSeries"]
    except (KeyError, TypeError):
        msg = "USGS response missing value.timeSeries"
        raise ValueError(msg) from None

    stations: dict[str, dict[str, Any]] = {}
    availability: dict[str, DataAvailability] = {}

    for series in time_series:
        source_info = series.get("sourceInfo", {})
        site_codes = source_info.get("siteCode") or [{}]
        station_id = site_codes[0].get("value")
        if not station_id:
            continue

        station = stations.setdefault(
            station_id,
            {"station_id": station_id, "station_name": source_info.get("siteName", "")},
        )
        status = availability.setdefault(station_id, DataAvailability())

        var_codes = series.get("variable", {}).get("variableCode") or [{}]
        param = var_codes[0].get("value")
        field = _STATUS_FIELDS.get(param)
        if field is None:
            continue

        latest = _latest_value(series)
        if latest is None:
            # Sensor equipped but nothing reported
            setattr(status, field, ParameterStatus.NO_DATA)
            continue

        try:
            value = float(latest["value"])
        except (KeyError, TypeError, ValueError):
            setattr(status, field, ParameterStatus.NO_DATA)
            continue

        if not math.isfinite(value):
            setattr(status, field, ParameterStatus.NO_DATA)
            continue
        if value in SENTINEL_VALUES:
            setattr(status, field, ParameterStatus.SENTINEL)
            continue

        setattr(status, field, ParameterStatus.AVAILABLE)
        observed = datetime.fromisoformat(latest["dateTime"])
        if station.get("timestamp") is None or observed > station["timestamp"]:
            station["timestamp"] = observed

        if param == WATER_TEMP:
            station["water_temp_c"] = value
            station["water_temp_f"] = c_to_f(value)
        elif param == DISCHARGE:
            station["discharge_cfs"] = value
        else:
            station["gage_height_ft"] = value

    return [
        SensorReading(**station, availability=availability[station_id])
        for station_id, station in stations.items()
        if station.get("timestamp") is not None
    ]


class UsgsSource:
    """ReadingsSource backed by the live USGS API."""

    def __init__(self, client: HttpClient | None = None) -> None:
        self.client = client

    def fetch_readings(
        self, station_ids: Sequence[str], params: Sequence[str] = DEFAULT_PARAMS
    ) -> list[SensorReading]:
        if not station_ids:
            return []
        raw = fetch_instantaneous_values(station_ids, params, client=self.client)
        return parse_instantaneous_values(raw)
