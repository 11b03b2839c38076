"""Composite 0-100 stream score, quality tier and summary text.

The score is three capped components:

  - water temperature (40): trout activity band
  - hatches (30): how many likely hatches the predictor found
  - comfort (30): wind, rain chance and air temperature for the angler

A missing input scores its component's neutral midpoint so a stream with a
dead sensor lands mid-pack instead of at the bottom.
"""

from __future__ import annotations

from collections.abc import Sequence

from hatchcast.analysis.predictions import representative_water_temp
from hatchcast.reference.conditions import (
    COLD_BREAK_F,
    COMFORT_MAX_POINTS,
    COMFORTABLE_AIR_F,
    EXTRA_HIGH_HATCH_POINTS,
    HATCH_MAX_POINTS,
    HIGH_HATCH_FULL_CREDIT,
    HIGH_HATCH_POINTS,
    LETHAL_HIGH_F,
    LETHAL_LOW_F,
    LIKELY_PROBABILITY,
    MAX_FISHABLE_WIND_MPH,
    MEDIUM_CONFIDENCE,
    MEDIUM_HATCH_POINTS,
    MISSING_COMFORT_POINTS,
    MISSING_HATCH_POINTS,
    MISSING_TEMPERATURE_POINTS,
    OPTIMAL_HIGH_F,
    OPTIMAL_LOW_F,
    PRECIP_FLOOR_POINTS,
    PRECIP_POINTS,
    TEMPERATURE_MAX_POINTS,
    TOLERABLE_AIR_F,
    WIND_POINTS,
)
from hatchcast.schemas import (
    Confidence,
    EventPrediction,
    FishingQuality,
    Location,
    SensorReading,
    WeatherSnapshot,
)


def _ramp(value: float, start: float, end: float, from_points: float, to_points: float) -> float:
    """Linear interpolation of points across ``[start, end]``."""
    return from_points + (value - start) / (end - start) * (to_points - from_points)


def is_lethal(water_temp_f: float) -> bool:
    return water_temp_f < LETHAL_LOW_F or water_temp_f > LETHAL_HIGH_F


def temperature_points(water_temp_f: float | None) -> float:
    """
    Water temperature component (0-40).

    Lethal (<38 or >68) scores 0, the 48-62 optimal band scores the full 40,
    and the shoulders ramp linearly in between.
    """
    if water_temp_f is None:
        return MISSING_TEMPERATURE_POINTS
    t = water_temp_f
    if is_lethal(t):
        return 0.0
    if t < COLD_BREAK_F:
        return _ramp(t, LETHAL_LOW_F, COLD_BREAK_F, 10, 20)
    if t < OPTIMAL_LOW_F:
        return _ramp(t, COLD_BREAK_F, OPTIMAL_LOW_F, 20, TEMPERATURE_MAX_POINTS)
    if t <= OPTIMAL_HIGH_F:
        return TEMPERATURE_MAX_POINTS
    return _ramp(t, OPTIMAL_HIGH_F, LETHAL_HIGH_F, TEMPERATURE_MAX_POINTS, 10)


def hatch_points(predictions: Sequence[EventPrediction], temperature_known: bool = True) -> float:
    """
    Hatch component (0-30).

    The first three high-confidence hatches are worth the most; extras and
    medium-confidence hatches add a little. Without a water temperature the
    predictions are guesswork, so the neutral midpoint is used.
    """
    if not temperature_known:
        return MISSING_HATCH_POINTS

    high = sum(1 for p in predictions if p.confidence == Confidence.HIGH)
    medium = sum(1 for p in predictions if p.confidence == Confidence.MEDIUM)

    full_credit = min(high, HIGH_HATCH_FULL_CREDIT)
    points = (
        full_credit * HIGH_HATCH_POINTS
        + (high - full_credit) * EXTRA_HIGH_HATCH_POINTS
        + medium * MEDIUM_HATCH_POINTS
    )
    return min(points, HATCH_MAX_POINTS)


def _band_points(value: float, bands: tuple[tuple[float, int], ...], floor: int) -> int:
    for upper, points in bands:
        if value <= upper:
            return points
    return floor


def comfort_points(weather: WeatherSnapshot | None) -> float:
    """Angler comfort component (0-30): wind + precipitation + air temp."""
    if weather is None:
        return MISSING_COMFORT_POINTS

    wind = _band_points(weather.wind_speed_mph, WIND_POINTS, 0)
    precip = _band_points(weather.precip_probability, PRECIP_POINTS, PRECIP_FLOOR_POINTS)

    air = weather.air_temp_f
    if COMFORTABLE_AIR_F[0] <= air <= COMFORTABLE_AIR_F[1]:
        air_points = 10
    elif TOLERABLE_AIR_F[0] <= air <= TOLERABLE_AIR_F[1]:
        air_points = 5
    else:
        air_points = 1

    return min(wind + precip + air_points, COMFORT_MAX_POINTS)


def score_location(
    readings: Sequence[SensorReading],
    weather: WeatherSnapshot | None,
    predictions: Sequence[EventPrediction],
) -> int:
    """Composite score for one location, rounded and clamped to 0-100."""
    water_temp = representative_water_temp(readings)
    total = (
        temperature_points(water_temp)
        + hatch_points(predictions, temperature_known=water_temp is not None)
        + comfort_points(weather)
    )
    return max(0, min(100, round(total)))


def assess_quality(
    water_temp_f: float | None,
    predictions: Sequence[EventPrediction],
    weather: WeatherSnapshot | None,
) -> FishingQuality:
    """Qualitative tier. Also the ranking tie-break for equal scores."""
    if water_temp_f is not None and is_lethal(water_temp_f):
        return FishingQuality.POOR
    if weather is not None and weather.wind_speed_mph > MAX_FISHABLE_WIND_MPH:
        return FishingQuality.FAIR

    likely = sum(1 for p in predictions if p.probability >= LIKELY_PROBABILITY)
    if likely >= 3:
        return FishingQuality.EXCELLENT
    if likely == 2:
        return FishingQuality.GOOD
    if likely == 1:
        return FishingQuality.FAIR
    return FishingQuality.POOR


def build_summary(
    location: Location,
    water_temp_f: float | None,
    predictions: Sequence[EventPrediction],
    weather: WeatherSnapshot | None,
) -> str:
    """One-line summary, e.g. ``"Beaverkill | Water: 54.0°F | Likely hatches: Hendrickson"``."""
    parts = [location.name]

    if water_temp_f is not None:
        parts.append(f"Water: {water_temp_f:.1f}°F")

    if weather is not None:
        air = f"Air: {weather.air_temp_f:.0f}°F"
        parts.append(f"{air}, {weather.short_forecast}" if weather.short_forecast else air)

    notable = [p.hatch.common_name for p in predictions if p.probability >= MEDIUM_CONFIDENCE][:3]
    if notable:
        parts.append(f"Likely hatches: {', '.join(notable)}")
    else:
        parts.append("No significant hatches expected")

    return " | ".join(parts)
