"""Thresholds for hatch prediction and stream scoring.

All temperatures are °F. Changing these shifts every prediction and score,
so tests pin the behavior at the breakpoints.
"""

from __future__ import annotations

from hatchcast.schemas import TimeOfDay

# -----------------------------------------------------------------------------
# Hatch prediction
# -----------------------------------------------------------------------------

# Degrees beyond a hatch's range over which the temperature fit fades to 0.
# At 32°F every hatch with a minimum above 35°F gets no temperature fit.
TEMP_MARGIN_F: float = 3.0

# Fit at the edge of a hatch's range (1.0 at the midpoint).
RANGE_EDGE_FIT: float = 0.7

# Used when no station reports water temperature. Confidence is capped at low.
UNKNOWN_TEMP_FIT: float = 0.5

# Calendar fit in a month adjacent to the peak season.
ADJACENT_MONTH_FIT: float = 0.5

# Sky is "overcast" at or above either of these.
OVERCAST_CLOUD_PERCENT: float = 70.0
OVERCAST_PRECIP_PERCENT: float = 40.0

OVERCAST_MATCH_FIT: float = 1.0
OVERCAST_MISS_FIT: float = 0.6
NEUTRAL_SKY_FIT: float = 0.9
NO_WEATHER_SKY_FIT: float = 0.8

# Inclusive local-hour windows.
TIME_WINDOWS: dict[TimeOfDay, tuple[int, int]] = {
    TimeOfDay.MORNING: (6, 11),
    TimeOfDay.MIDDAY: (10, 14),
    TimeOfDay.AFTERNOON: (13, 17),
    TimeOfDay.EVENING: (16, 21),
}
OFF_WINDOW_DAYLIGHT_FIT: float = 0.7
OFF_WINDOW_DARK_FIT: float = 0.4

# Daylight approximation when there's no weather: [start, end) local hour.
DAYLIGHT_HOURS: tuple[int, int] = (6, 20)

HIGH_CONFIDENCE: float = 0.6
MEDIUM_CONFIDENCE: float = 0.3

# A prediction at or above this counts as "likely" for quality and summaries.
LIKELY_PROBABILITY: float = 0.5

# -----------------------------------------------------------------------------
# Stream scoring
# -----------------------------------------------------------------------------

# Trout stress outside this band.
LETHAL_LOW_F: float = 38.0
LETHAL_HIGH_F: float = 68.0

# Optimal trout feeding band.
OPTIMAL_LOW_F: float = 48.0
OPTIMAL_HIGH_F: float = 62.0

# Ramp breakpoint between "cold" and "cool".
COLD_BREAK_F: float = 42.0

TEMPERATURE_MAX_POINTS: int = 40
HATCH_MAX_POINTS: int = 30
COMFORT_MAX_POINTS: int = 30

# Neutral midpoints for missing inputs.
MISSING_TEMPERATURE_POINTS: int = 20
MISSING_HATCH_POINTS: int = 15
MISSING_COMFORT_POINTS: int = 15

HIGH_HATCH_POINTS: int = 8
HIGH_HATCH_FULL_CREDIT: int = 3
EXTRA_HIGH_HATCH_POINTS: int = 3
MEDIUM_HATCH_POINTS: int = 2

# Wind above this makes casting hard and drops quality to fair.
MAX_FISHABLE_WIND_MPH: float = 20.0

# (upper bound inclusive, points)
WIND_POINTS: tuple[tuple[float, int], ...] = ((5, 10), (10, 8), (15, 5), (20, 2))
PRECIP_POINTS: tuple[tuple[float, int], ...] = ((20, 10), (40, 7), (60, 4))
PRECIP_FLOOR_POINTS: int = 1

COMFORTABLE_AIR_F: tuple[float, float] = (45.0, 75.0)
TOLERABLE_AIR_F: tuple[float, float] = (35.0, 85.0)
