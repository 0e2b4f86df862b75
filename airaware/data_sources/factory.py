"""Factory helpers for choosing a data source at startup."""

from __future__ import annotations

from airaware import config
from airaware.data_sources.base import CallableEnvironmentDataSource, EnvironmentDataSource
from airaware.data_sources.openaq_client import fetch_latest_reading
from airaware.data_sources.openweather_client import fetch_current_weather, fetch_weather_forecast
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "live"


def build_data_source(settings: config.Settings | None = None) -> EnvironmentDataSource:
    """Instantiate the configured data source."""
    settings = settings or config.settings
    source = (settings.data_source or DEFAULT_SOURCE_NAME).lower()

    if source == "live":
        logger.info(
            "Using OpenAQ + OpenWeatherMap data source",
            extra={
                "openaq_url": mask_url(settings.openaq_base_url),
                "openweather_url": mask_url(settings.openweather_base_url),
                "openweather_key_set": bool(settings.openweather_api_key),
            },
        )
        return CallableEnvironmentDataSource(
            latest_reading=fetch_latest_reading,
            current_weather=fetch_current_weather,
            weather_forecast=fetch_weather_forecast,
        )

    raise ValueError(f"Unknown data source '{source}'")
