"""Helpers for fetching current weather and the 3-hourly forecast from OpenWeatherMap."""
from __future__ import annotations

from pydantic import ValidationError

from airaware.aqi_estimator import round_half_up
from airaware.config import settings
from airaware.data_sources.http_session import build_session, get_json
from airaware.domain import CurrentWeather, WeatherForecast, WeatherObservation
from airaware.errors import ConfigurationError, DataSourceError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/openweather")

session = build_session()

OPENWEATHER_SOURCE = "OpenWeatherMap"


def _base_params(latitude: float, longitude: float) -> dict:
    """Query parameters common to every OpenWeatherMap call (metric units)."""
    if not settings.openweather_api_key:
        raise ConfigurationError("AIRAWARE_OPENWEATHER_API_KEY is not configured")
    return {
        "lat": latitude,
        "lon": longitude,
        "units": "metric",
        "appid": settings.openweather_api_key,
    }


def parse_current(data: dict) -> CurrentWeather:
    """Convert a `/weather` payload into CurrentWeather."""
    try:
        main = data["main"]
        wind = data.get("wind") or {}
        weather = (data.get("weather") or [{}])[0]
        return CurrentWeather(
            temperature_c=round_half_up(main["temp"]),
            humidity_percent=main["humidity"],
            wind_speed_mps=wind.get("speed", 0.0),
            wind_direction_deg=wind.get("deg"),
            pressure_hpa=main.get("pressure"),
            description=weather.get("description", ""),
            icon=weather.get("icon"),
            location=data.get("name"),
        )
    except (KeyError, TypeError, ValidationError) as exc:
        raise DataSourceError(f"{OPENWEATHER_SOURCE} returned malformed current weather: {exc}") from exc


def parse_forecast(data: dict) -> WeatherForecast:
    """Convert a `/forecast` payload into an ordered WeatherForecast."""
    observations: list[WeatherObservation] = []
    try:
        for item in data.get("list") or []:
            weather = (item.get("weather") or [{}])[0]
            observations.append(
                WeatherObservation(
                    timestamp_millis=int(item["dt"]) * 1000,
                    temperature_c=item["main"]["temp"],
                    humidity_percent=item["main"]["humidity"],
                    wind_speed_mps=item["wind"]["speed"],
                    weather_description=weather.get("description", ""),
                )
            )
        offset = int((data.get("city") or {}).get("timezone") or 0)
    except (KeyError, TypeError, ValueError) as exc:
        # pydantic's ValidationError is a ValueError subclass
        raise DataSourceError(f"{OPENWEATHER_SOURCE} returned a malformed forecast: {exc}") from exc

    return WeatherForecast(observations=observations, utc_offset_seconds=offset)


def fetch_current_weather(latitude: float, longitude: float) -> CurrentWeather:
    """Fetch current conditions for the given coordinates."""
    data = get_json(
        session,
        f"{settings.openweather_base_url}/weather",
        _base_params(latitude, longitude),
        provider=OPENWEATHER_SOURCE,
    )
    return parse_current(data)


def fetch_weather_forecast(latitude: float, longitude: float) -> WeatherForecast:
    """Fetch the 5-day / 3-hour forecast for the given coordinates."""
    data = get_json(
        session,
        f"{settings.openweather_base_url}/forecast",
        _base_params(latitude, longitude),
        provider=OPENWEATHER_SOURCE,
    )
    forecast = parse_forecast(data)
    logger.debug(
        "Parsed OpenWeatherMap forecast",
        extra={"steps": len(forecast.observations), "utc_offset_seconds": forecast.utc_offset_seconds},
    )
    return forecast
