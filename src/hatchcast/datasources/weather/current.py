"""Current conditions from the Open-Meteo Forecast API."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

from hatchcast.datasources.weather.client import (
    CURRENT_VARS,
    OPEN_METEO_API,
    wmo_code_to_conditions,
)
from hatchcast.schemas import Coordinates, WeatherSnapshot
from hatchcast.services.http import session

if TYPE_CHECKING:
    from hatchcast.services.http import HttpClient

DEFAULT_TIMEZONE = "America/New_York"


def fetch_current_conditions(
    lat: float,
    lon: float,
    *,
    timezone: str = DEFAULT_TIMEZONE,
    client: HttpClient | None = None,
) -> dict[str, Any]:
    """
    Fetch current weather conditions from Open-Meteo.

    Args:
        lat: Latitude.
        lon: Longitude.
        timezone: Timezone for the returned local timestamp.
        client: Client to use instead of the shared session.

    Returns:
        Raw API response dict with a ``current`` key.
    """
    params: dict[str, str | float] = {
        "latitude": lat,
        "longitude": lon,
        "current": ",".join(CURRENT_VARS),
        "temperature_unit": "fahrenheit",
        "wind_speed_unit": "mph",
        "timezone": timezone,
    }
    resp = (client or session).get(OPEN_METEO_API, params=params)
    resp.raise_for_status()
    result: dict[str, Any] = resp.json()
    return result


def parse_current_conditions(
    raw: dict[str, Any], timezone: str = DEFAULT_TIMEZONE
) -> WeatherSnapshot:
    """
    Convert an Open-Meteo ``current`` block into a WeatherSnapshot.

    Open-Meteo returns naive local times, so the configured timezone is
    attached. A missing precipitation probability counts as 0%.

    Raises:
        ValueError: If the response has no ``current`` block or a required
            variable is missing.
    """
    current = raw.get("current")
    if not current:
        msg = "Open-Meteo response missing 'current' block"
        raise ValueError(msg)

    try:
        timestamp = datetime.fromisoformat(current["time"])
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=ZoneInfo(timezone))

        return WeatherSnapshot(
            timestamp=timestamp,
            air_temp_f=current["temperature_2m"],
            cloud_cover_percent=current["cloud_cover"],
            precip_probability=current.get("precipitation_probability") or 0,
            wind_speed_mph=current["wind_speed_10m"],
            is_daylight=bool(current["is_day"]),
            short_forecast=wmo_code_to_conditions(current.get("weather_code")),
        )
    except KeyError as exc:
        msg = f"Open-Meteo response missing {exc.args[0]!r}"
        raise ValueError(msg) from None


class OpenMeteoSource:
    """WeatherSource backed by the live Open-Meteo API."""

    def __init__(
        self, timezone: str = DEFAULT_TIMEZONE, client: HttpClient | None = None
    ) -> None:
        self.timezone = timezone
        self.client = client

    def fetch_weather(self, coords: Coordinates) -> WeatherSnapshot:
        raw = fetch_current_conditions(
            coords.latitude, coords.longitude, timezone=self.timezone, client=self.client
        )
        return parse_current_conditions(raw, timezone=self.timezone)
