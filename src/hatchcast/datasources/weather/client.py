"""Open-Meteo API client constants and shared configuration.

API docs:
  - Forecast (current conditions): https://open-meteo.com/en/docs
"""

OPEN_METEO_API = "https://api.open-meteo.com/v1/forecast"

# Variables requested in the ``current`` block
CURRENT_VARS = [
    "temperature_2m",
    "cloud_cover",
    "precipitation_probability",
    "wind_speed_10m",
    "is_day",
    "weather_code",
]

# WMO Weather Interpretation Codes (https://open-meteo.com/en/docs)
WMO_CONDITIONS: dict[int, str] = {
    0: "Clear",
    1: "Mostly Clear",
    2: "Partly Cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Freezing Fog",
    51: "Light Drizzle",
    53: "Drizzle",
    55: "Heavy Drizzle",
    56: "Light Freezing Drizzle",
    57: "Freezing Drizzle",
    61: "Light Rain",
    63: "Rain",
    65: "Heavy Rain",
    66: "Light Freezing Rain",
    67: "Freezing Rain",
    71: "Light Snow",
    73: "Snow",
    75: "Heavy Snow",
    77: "Snow Grains",
    80: "Light Showers",
    81: "Showers",
    82: "Heavy Showers",
    85: "Light Snow Showers",
    86: "Snow Showers",
    95: "Thunderstorm",
    96: "Thunderstorm w/ Hail",
    99: "Heavy Thunderstorm",
}


def wmo_code_to_conditions(code: int | None) -> str:
    """Convert a WMO weather code to a short forecast string."""
    if code is None:
        return ""
    return WMO_CONDITIONS.get(code, f"Unknown ({code})")
