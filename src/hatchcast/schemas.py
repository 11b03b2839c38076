"""
Domain models for hatchcast.

Pydantic models for data from external APIs and internal processing.
These define the canonical schema - datasources normalize API responses to these.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# Geographic
# =============================================================================


class Coordinates(BaseModel):
    """Geographic point."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class Region(StrEnum):
    """Fishing regions covered by the stream catalog."""

    CATSKILLS = "catskills"
    CROTON = "croton"
    RARITAN = "raritan"
    DELAWARE = "delaware"
    CONNECTICUT = "connecticut"
    NC_HIGHCOUNTRY = "nc-highcountry"
    NC_FOOTHILLS = "nc-foothills"


class State(StrEnum):
    """US states covered by the stream catalog."""

    NY = "NY"
    NJ = "NJ"
    CT = "CT"
    NC = "NC"


class Location(BaseModel):
    """A monitored stream with its USGS gauging stations."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable slug, e.g. 'beaverkill'")
    name: str
    region: Region
    state: State
    station_ids: tuple[str, ...] = Field(default=(), description="USGS site numbers")
    coordinates: Coordinates | None = None


# =============================================================================
# Sensor readings
# =============================================================================


class ParameterStatus(StrEnum):
    """Why a sensor parameter does or doesn't have a value."""

    AVAILABLE = "available"
    NOT_EQUIPPED = "not_equipped"
    SENTINEL = "sentinel"
    NO_DATA = "no_data"


class DataAvailability(BaseModel):
    """Per-parameter availability for a single station."""

    water_temp: ParameterStatus = ParameterStatus.NOT_EQUIPPED
    discharge: ParameterStatus = ParameterStatus.NOT_EQUIPPED
    gage_height: ParameterStatus = ParameterStatus.NOT_EQUIPPED


class DataCompleteness(StrEnum):
    """Overall data quality for a set of station readings."""

    FULL = "full"
    PARTIAL = "partial"
    LIMITED = "limited"


class SensorReading(BaseModel):
    """Latest instantaneous values from one gauging station.

    ``None`` means the station isn't instrumented for that parameter or
    returned no valid value. It is never the same thing as a ``0.0`` reading.
    """

    station_id: str
    station_name: str = ""
    timestamp: datetime
    water_temp_f: float | None = None
    water_temp_c: float | None = None
    discharge_cfs: float | None = None
    gage_height_ft: float | None = None
    availability: DataAvailability | None = None


def compute_data_completeness(readings: list[SensorReading]) -> DataCompleteness:
    """Summarize how complete a set of station readings is.

    Water temperature is the key signal, so any set without it is ``limited``
    even if flow and gage height are present.
    """
    if not readings:
        return DataCompleteness.LIMITED

    # Readings cached before availability tracking can't be assessed
    if any(r.availability is None for r in readings):
        return DataCompleteness.LIMITED

    statuses = [r.availability for r in readings if r.availability is not None]
    if all(
        a.water_temp == a.discharge == a.gage_height == ParameterStatus.AVAILABLE
        for a in statuses
    ):
        return DataCompleteness.FULL

    if not any(a.water_temp == ParameterStatus.AVAILABLE for a in statuses):
        return DataCompleteness.LIMITED

    return DataCompleteness.PARTIAL


# =============================================================================
# Weather
# =============================================================================


class WeatherSnapshot(BaseModel):
    """Current weather conditions at a location."""

    timestamp: datetime
    air_temp_f: float
    cloud_cover_percent: float = Field(..., ge=0, le=100)
    precip_probability: float = Field(..., ge=0, le=100)
    wind_speed_mph: float = Field(..., ge=0)
    is_daylight: bool
    short_forecast: str = ""


# =============================================================================
# Hatches
# =============================================================================


class InsectOrder(StrEnum):
    """Aquatic insect orders that produce fishable hatches."""

    MAYFLY = "mayfly"
    CADDISFLY = "caddisfly"
    STONEFLY = "stonefly"
    MIDGE = "midge"


class TimeOfDay(StrEnum):
    """When during the day a hatch typically comes off."""

    MORNING = "morning"
    MIDDAY = "midday"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    ANY = "any"


class EventDefinition(BaseModel):
    """Static catalog entry describing when an insect hatch occurs."""

    model_config = ConfigDict(frozen=True)

    id: str
    common_name: str
    scientific_name: str | None = None
    order: InsectOrder
    min_temp_f: float
    max_temp_f: float
    peak_months: tuple[int, ...]
    time_of_day: TimeOfDay = TimeOfDay.ANY
    prefers_overcast: bool = False
    hook_sizes: tuple[int, ...] = ()
    notes: str | None = None

    @model_validator(mode="after")
    def _check_ranges(self) -> EventDefinition:
        if self.min_temp_f > self.max_temp_f:
            msg = f"{self.id}: min_temp_f {self.min_temp_f} > max_temp_f {self.max_temp_f}"
            raise ValueError(msg)
        bad = [m for m in self.peak_months if not 1 <= m <= 12]
        if bad:
            msg = f"{self.id}: peak months out of range: {bad}"
            raise ValueError(msg)
        return self


class Confidence(StrEnum):
    """Qualitative confidence tier for a prediction."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EventPrediction(BaseModel):
    """A scored hatch candidate. Recomputed per request, never persisted."""

    hatch: EventDefinition
    probability: float = Field(..., ge=0, le=1)
    confidence: Confidence
    rationale: str

    @property
    def event_id(self) -> str:
        return self.hatch.id


# =============================================================================
# Scoring
# =============================================================================


class FishingQuality(StrEnum):
    """Overall fishing quality tier, used as the ranking tie-break."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @property
    def rank(self) -> int:
        """Sort position, best tier first."""
        return list(FishingQuality).index(self)


class LocationScore(BaseModel):
    """Result of scoring one location for a ranking request."""

    location: Location
    score: int = Field(..., ge=0, le=100)
    quality: FishingQuality
    readings: list[SensorReading] = Field(default_factory=list)
    weather: WeatherSnapshot | None = None
    top_predictions: list[EventPrediction] = Field(default_factory=list)
    water_temp_f: float | None = None
    air_temp_f: float | None = None
    discharge_cfs: float | None = None
    summary: str = ""
    readings_cached: bool = False
    weather_cached: bool = False

    @property
    def location_id(self) -> str:
        return self.location.id


class Rankings(BaseModel):
    """Ordered top picks plus response metadata."""

    count: int
    generated_at: datetime
    picks: list[LocationScore] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_count(self) -> Rankings:
        if self.count != len(self.picks):
            msg = f"count {self.count} does not match {len(self.picks)} picks"
            raise ValueError(msg)
        return self
