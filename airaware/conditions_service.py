"""Combine provider data with the AQI core for a single location."""
from __future__ import annotations

import datetime as dt
from typing import List

from airaware.aqi_categories import classify
from airaware.aqi_estimator import estimate_aqi
from airaware.data_sources import EnvironmentDataSource, build_data_source
from airaware.domain import AirQualityReport, CurrentWeather, ForecastPoint, PollutantReading
from airaware.forecast_projector import FORECAST_HORIZON_POINTS, project_forecast
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="conditions_service")

# Regional estimate shown when no monitoring station reports near the user.
DEFAULT_ESTIMATED_AQI = 75
DEFAULT_READING = PollutantReading(
    pm25=15,
    pm10=25,
    no2=20,
    o3=50,
    location="Estimated",
    source="default",
)


def get_air_quality(
    latitude: float,
    longitude: float,
    *,
    data_source: EnvironmentDataSource | None = None,
) -> AirQualityReport:
    """
    Fetch the latest pollutant reading near a location and derive its AQI.

    Falls back to DEFAULT_READING / DEFAULT_ESTIMATED_AQI when no station has
    data, and to the estimator's default when the station reports no PM2.5.
    """
    ds = data_source or build_data_source()
    reading = ds.fetch_latest_reading(latitude, longitude)

    if reading is None:
        logger.info(
            "No station data; using default estimate",
            extra={"latitude": latitude, "longitude": longitude, "aqi": DEFAULT_ESTIMATED_AQI},
        )
        return AirQualityReport(
            aqi=DEFAULT_ESTIMATED_AQI,
            category=classify(DEFAULT_ESTIMATED_AQI),
            reading=DEFAULT_READING,
        )

    aqi = estimate_aqi(reading.pm25)
    logger.info(
        "Computed AQI from station reading",
        extra={"location": reading.location, "pm25": reading.pm25, "aqi": aqi},
    )
    return AirQualityReport(aqi=aqi, category=classify(aqi), reading=reading)


def get_current_weather(
    latitude: float,
    longitude: float,
    *,
    data_source: EnvironmentDataSource | None = None,
) -> CurrentWeather:
    """Fetch current weather for a location."""
    ds = data_source or build_data_source()
    return ds.fetch_current_weather(latitude, longitude)


def get_forecast(
    latitude: float,
    longitude: float,
    current_aqi: float,
    *,
    horizon: int = FORECAST_HORIZON_POINTS,
    data_source: EnvironmentDataSource | None = None,
) -> List[ForecastPoint]:
    """
    Project `current_aqi` over the location's upcoming weather forecast.

    Hours of day are evaluated in the location's own UTC offset as reported
    by the weather provider.
    """
    ds = data_source or build_data_source()
    forecast = ds.fetch_weather_forecast(latitude, longitude)
    tz = dt.timezone(dt.timedelta(seconds=forecast.utc_offset_seconds))

    points = project_forecast(current_aqi, forecast.observations, tz=tz, horizon=horizon)
    logger.info(
        "Forecast points generated",
        extra={"latitude": latitude, "longitude": longitude, "points": len(points)},
    )
    return points
