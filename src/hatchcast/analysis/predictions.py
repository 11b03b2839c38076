"""Hatch prediction from water temperature, season and weather.

A weighted heuristic: each catalog hatch gets a temperature fit, a calendar
fit and a condition fit (sky x time of day), and the product is its
probability. Nothing here reads a clock or does I/O, so the same inputs
always give the same predictions.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from hatchcast.reference.conditions import (
    ADJACENT_MONTH_FIT,
    DAYLIGHT_HOURS,
    HIGH_CONFIDENCE,
    MEDIUM_CONFIDENCE,
    NEUTRAL_SKY_FIT,
    NO_WEATHER_SKY_FIT,
    OFF_WINDOW_DARK_FIT,
    OFF_WINDOW_DAYLIGHT_FIT,
    OVERCAST_CLOUD_PERCENT,
    OVERCAST_MATCH_FIT,
    OVERCAST_MISS_FIT,
    OVERCAST_PRECIP_PERCENT,
    RANGE_EDGE_FIT,
    TEMP_MARGIN_F,
    TIME_WINDOWS,
    UNKNOWN_TEMP_FIT,
)
from hatchcast.reference.hatches import HATCHES
from hatchcast.schemas import (
    Confidence,
    EventDefinition,
    EventPrediction,
    SensorReading,
    TimeOfDay,
    WeatherSnapshot,
)


def representative_water_temp(readings: Iterable[SensorReading]) -> float | None:
    """Mean water temperature across stations that report one, else None."""
    temps = [r.water_temp_f for r in readings if r.water_temp_f is not None]
    if not temps:
        return None
    return sum(temps) / len(temps)


def temperature_fit(temp_f: float, hatch: EventDefinition) -> float:
    """
    How well ``temp_f`` matches a hatch's emergence range.

    1.0 at the midpoint, ``RANGE_EDGE_FIT`` at either edge, then a linear
    fade to 0 over ``TEMP_MARGIN_F`` degrees outside the range.
    """
    low, high = hatch.min_temp_f, hatch.max_temp_f
    if low <= temp_f <= high:
        half_range = (high - low) / 2
        if half_range == 0:
            return 1.0
        midpoint = low + half_range
        return 1.0 - (1.0 - RANGE_EDGE_FIT) * abs(temp_f - midpoint) / half_range

    gap = low - temp_f if temp_f < low else temp_f - high
    if gap >= TEMP_MARGIN_F:
        return 0.0
    return RANGE_EDGE_FIT * (1.0 - gap / TEMP_MARGIN_F)


def calendar_fit(month: int, hatch: EventDefinition) -> float:
    """1.0 in a peak month, a partial fit in the months either side."""
    if month in hatch.peak_months:
        return 1.0
    previous_month = (month - 2) % 12 + 1
    next_month = month % 12 + 1
    if previous_month in hatch.peak_months or next_month in hatch.peak_months:
        return ADJACENT_MONTH_FIT
    return 0.0


def is_overcast(weather: WeatherSnapshot) -> bool:
    return (
        weather.cloud_cover_percent >= OVERCAST_CLOUD_PERCENT
        or weather.precip_probability >= OVERCAST_PRECIP_PERCENT
    )


def sky_fit(hatch: EventDefinition, weather: WeatherSnapshot | None) -> float:
    if weather is None:
        return NO_WEATHER_SKY_FIT
    if not hatch.prefers_overcast:
        return NEUTRAL_SKY_FIT
    return OVERCAST_MATCH_FIT if is_overcast(weather) else OVERCAST_MISS_FIT


def in_time_window(time_of_day: TimeOfDay, hour: int) -> bool:
    window = TIME_WINDOWS.get(time_of_day)
    if window is None:
        return True
    start, end = window
    return start <= hour <= end


def time_fit(hatch: EventDefinition, hour: int, weather: WeatherSnapshot | None) -> float:
    if in_time_window(hatch.time_of_day, hour):
        return 1.0
    if weather is not None:
        daylight = weather.is_daylight
    else:
        daylight = DAYLIGHT_HOURS[0] <= hour < DAYLIGHT_HOURS[1]
    return OFF_WINDOW_DAYLIGHT_FIT if daylight else OFF_WINDOW_DARK_FIT


def confidence_for(probability: float, temperature_known: bool = True) -> Confidence:
    if not temperature_known:
        return Confidence.LOW
    if probability >= HIGH_CONFIDENCE:
        return Confidence.HIGH
    if probability >= MEDIUM_CONFIDENCE:
        return Confidence.MEDIUM
    return Confidence.LOW


def _local_time(as_of: datetime, weather: WeatherSnapshot | None) -> datetime:
    """Express ``as_of`` in the stream's timezone when the weather carries one."""
    if weather is None or weather.timestamp.tzinfo is None or as_of.tzinfo is None:
        return as_of
    return as_of.astimezone(weather.timestamp.tzinfo)


def _rationale(
    hatch: EventDefinition,
    water_temp: float | None,
    month_fit: float,
    weather: WeatherSnapshot | None,
    hour: int,
) -> str:
    parts: list[str] = []

    if water_temp is None:
        parts.append("no water temperature available")
    else:
        band = f"{hatch.min_temp_f:g}-{hatch.max_temp_f:g}°F"
        if hatch.min_temp_f <= water_temp <= hatch.max_temp_f:
            parts.append(f"water {water_temp:.1f}°F within {band}")
        elif water_temp < hatch.min_temp_f:
            parts.append(f"water {water_temp:.1f}°F below {band}")
        else:
            parts.append(f"water {water_temp:.1f}°F above {band}")

    parts.append("peak season" if month_fit == 1.0 else "edge of season")

    if weather is not None and hatch.prefers_overcast:
        parts.append("overcast favors emergence" if is_overcast(weather) else "bright sky")

    if hatch.time_of_day != TimeOfDay.ANY:
        where = "inside" if in_time_window(hatch.time_of_day, hour) else "outside"
        parts.append(f"{where} {hatch.time_of_day.value} window")

    return "; ".join(parts)


def predict(
    readings: Sequence[SensorReading],
    weather: WeatherSnapshot | None,
    as_of: datetime,
    catalog: Sequence[EventDefinition] = HATCHES,
) -> list[EventPrediction]:
    """
    Score every hatch in ``catalog`` against current conditions.

    Args:
        readings: Latest station readings for one location (may be empty).
        weather: Current weather, or None if unavailable.
        as_of: Reference time for month and hour. Converted to the weather
            timestamp's timezone when both are timezone-aware.
        catalog: Hatch definitions to evaluate.

    Returns:
        Predictions with non-zero probability, most likely first. Ties are
        broken by common name then id.
    """
    water_temp = representative_water_temp(readings)
    local = _local_time(as_of, weather)
    temperature_known = water_temp is not None

    predictions: list[EventPrediction] = []
    for hatch in catalog:
        month_fit = calendar_fit(local.month, hatch)
        if month_fit == 0.0:
            continue
        temp_fit = temperature_fit(water_temp, hatch) if temperature_known else UNKNOWN_TEMP_FIT
        condition_fit = sky_fit(hatch, weather) * time_fit(hatch, local.hour, weather)

        probability = round(min(1.0, max(0.0, temp_fit * month_fit * condition_fit)), 3)
        if probability <= 0.0:
            continue

        predictions.append(
            EventPrediction(
                hatch=hatch,
                probability=probability,
                confidence=confidence_for(probability, temperature_known),
                rationale=_rationale(hatch, water_temp, month_fit, weather, local.hour),
            )
        )

    predictions.sort(key=lambda p: (-p.probability, p.hatch.common_name, p.hatch.id))
    return predictions
