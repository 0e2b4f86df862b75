"""Interfaces and helpers for pollutant and weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from airaware.domain import CurrentWeather, PollutantReading, WeatherForecast


class EnvironmentDataSource(Protocol):
    """Interface for anything that can provide pollutant and weather data."""

    def fetch_latest_reading(self, latitude: float, longitude: float) -> Optional[PollutantReading]:
        """Return the nearest pollutant reading, or None when no station reports."""
        ...

    def fetch_current_weather(self, latitude: float, longitude: float) -> CurrentWeather:
        """Return current weather conditions."""
        ...

    def fetch_weather_forecast(self, latitude: float, longitude: float) -> WeatherForecast:
        """Return the ordered weather forecast."""
        ...


@dataclass
class CallableEnvironmentDataSource(EnvironmentDataSource):
    """Wrap three callables so providers can be swapped (or faked in tests)."""

    latest_reading: Callable[..., Optional[PollutantReading]]
    current_weather: Callable[..., CurrentWeather]
    weather_forecast: Callable[..., WeatherForecast]

    def fetch_latest_reading(self, *args, **kwargs) -> Optional[PollutantReading]:
        """Delegate to the configured pollutant callable."""
        return self.latest_reading(*args, **kwargs)

    def fetch_current_weather(self, *args, **kwargs) -> CurrentWeather:
        """Delegate to the configured current-weather callable."""
        return self.current_weather(*args, **kwargs)

    def fetch_weather_forecast(self, *args, **kwargs) -> WeatherForecast:
        """Delegate to the configured forecast callable."""
        return self.weather_forecast(*args, **kwargs)
