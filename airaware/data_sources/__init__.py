"""Data source factories for plugging different pollutant/weather backends."""

from .base import CallableEnvironmentDataSource, EnvironmentDataSource
from .factory import build_data_source
from .openaq_client import fetch_latest_reading
from .openweather_client import fetch_current_weather, fetch_weather_forecast

__all__ = [
    "build_data_source",
    "EnvironmentDataSource",
    "CallableEnvironmentDataSource",
    "fetch_latest_reading",
    "fetch_current_weather",
    "fetch_weather_forecast",
]
