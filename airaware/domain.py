"""Domain vocabulary and strict schemas for AQI estimation and forecasting.

These are the value objects that flow between the provider clients, the AQI
core and the HTTP layer. All of them are frozen; a new object is built for
every request. No interpretation logic lives here beyond field validation.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _FrozenModel(BaseModel):
    """Immutable base model that rejects unknown fields and NaN/inf floats."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)


class AQICategory(str, Enum):
    """US EPA severity bands, declared from least to most severe."""
    GOOD = "good"
    MODERATE = "moderate"
    UNHEALTHY_FOR_SENSITIVE = "unhealthy_for_sensitive"
    UNHEALTHY = "unhealthy"
    VERY_UNHEALTHY = "very_unhealthy"
    HAZARDOUS = "hazardous"

    @property
    def label(self) -> str:
        return _CATEGORY_TEXT[self][0]

    @property
    def description(self) -> str:
        return _CATEGORY_TEXT[self][1]

    @property
    def upper_bound(self) -> Optional[int]:
        """Highest AQI (inclusive) in this band; None for the open-ended top band."""
        return _CATEGORY_UPPER_BOUNDS[self]

    @property
    def severity(self) -> int:
        """0 for GOOD up to 5 for HAZARDOUS."""
        return list(AQICategory).index(self)


_CATEGORY_TEXT = {
    AQICategory.GOOD: ("Good", "Air quality is satisfactory"),
    AQICategory.MODERATE: ("Moderate", "Air quality is acceptable"),
    AQICategory.UNHEALTHY_FOR_SENSITIVE: (
        "Unhealthy for Sensitive Groups",
        "Sensitive groups may experience health effects",
    ),
    AQICategory.UNHEALTHY: ("Unhealthy", "Everyone may begin to experience health effects"),
    AQICategory.VERY_UNHEALTHY: ("Very Unhealthy", "Health alert: everyone may experience serious effects"),
    AQICategory.HAZARDOUS: ("Hazardous", "Health warning of emergency conditions"),
}

_CATEGORY_UPPER_BOUNDS = {
    AQICategory.GOOD: 50,
    AQICategory.MODERATE: 100,
    AQICategory.UNHEALTHY_FOR_SENSITIVE: 150,
    AQICategory.UNHEALTHY: 200,
    AQICategory.VERY_UNHEALTHY: 300,
    AQICategory.HAZARDOUS: None,
}


class PollutantReading(_FrozenModel):
    """Latest pollutant concentrations near a location (µg/m³ or ppb)."""
    pm25: Optional[float] = Field(default=None, ge=0)
    pm10: Optional[float] = Field(default=None, ge=0)
    no2: Optional[float] = Field(default=None, ge=0)
    o3: Optional[float] = Field(default=None, ge=0)
    location: str
    source: str


class WeatherObservation(_FrozenModel):
    """One forecast time step from the weather provider."""
    timestamp_millis: int
    temperature_c: float
    humidity_percent: int = Field(ge=0, le=100)
    wind_speed_mps: float = Field(ge=0)
    weather_description: str = ""


class ForecastPoint(_FrozenModel):
    """Predicted AQI for one forecast step, with display-ready weather fields."""
    timestamp_millis: int
    hour_label: str
    aqi: int = Field(ge=0, le=500)
    temperature_c: int
    wind_speed_mps: str
    humidity_percent: int
    weather_description: str


class WeatherForecast(_FrozenModel):
    """Ordered forecast steps plus the location's offset from UTC."""
    observations: List[WeatherObservation] = Field(default_factory=list)
    utc_offset_seconds: int = 0


class CurrentWeather(_FrozenModel):
    """Current conditions at a location."""
    temperature_c: int
    humidity_percent: int = Field(ge=0, le=100)
    wind_speed_mps: float = Field(ge=0)
    wind_direction_deg: Optional[float] = None
    pressure_hpa: Optional[float] = None
    description: str = ""
    icon: Optional[str] = None
    location: Optional[str] = None


class AirQualityReport(_FrozenModel):
    """AQI derived from a pollutant reading, with its category."""
    aqi: int
    category: AQICategory
    reading: PollutantReading


class RecommendationProfile(_FrozenModel):
    """Profile fields the recommendation generator personalizes on."""
    role: str
    health_conditions: List[str] = Field(default_factory=list)
    location_name: Optional[str] = None
