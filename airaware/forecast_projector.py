"""Short-term AQI projection from a weather forecast.

Each forecast step starts from the current AQI and adds independent
heuristic modifiers for wind dispersion, humidity trapping, traffic by hour
of day and ozone formation with heat. The thresholds are a product decision,
not a calibrated model, and are kept exactly as tuned: strict `>`/`<`
comparisons and inclusive hour bands.
"""

from __future__ import annotations

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence

from airaware.aqi_estimator import round_half_up
from airaware.domain import ForecastPoint, WeatherObservation
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="forecast_projector")

# 12 hours at the provider's 3-hour sampling.
FORECAST_HORIZON_POINTS = 4

AQI_MIN = 0
AQI_MAX = 500


def wind_modifier(wind_speed_mps: float) -> int:
    """Stronger wind disperses pollutants; still air lets them build up."""
    if wind_speed_mps > 5:
        return -15
    if wind_speed_mps > 3:
        return -5
    if wind_speed_mps < 1:
        return 10
    return 0


def humidity_modifier(humidity_percent: float) -> int:
    """Humid air traps particulates near the ground."""
    if humidity_percent > 80:
        return 10
    if humidity_percent > 60:
        return 5
    if humidity_percent < 30:
        return -5
    return 0


def traffic_modifier(local_hour: int) -> int:
    """Rush hours add traffic emissions; late night has little traffic."""
    if 7 <= local_hour <= 9 or 17 <= local_hour <= 19:
        return 20
    if local_hour >= 22 or local_hour <= 5:
        return -10
    return 0


def temperature_modifier(temperature_c: float) -> int:
    """Heat drives ground-level ozone formation."""
    if temperature_c > 30:
        return 10
    if temperature_c > 25:
        return 5
    return 0


def local_time(timestamp_millis: int, tz: dt.tzinfo) -> dt.datetime:
    """Epoch milliseconds as an aware datetime in `tz`."""
    return dt.datetime.fromtimestamp(timestamp_millis / 1000, tz=tz)


def hour_label(moment: dt.datetime) -> str:
    """12-hour clock label without minutes, e.g. "8 AM" or "12 PM"."""
    hour12 = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour12} {suffix}"


def one_decimal(value: float) -> str:
    """Format with one decimal place, halves rounded away from zero on the exact binary value."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def total_modifier(observation: WeatherObservation, local_hour: int) -> int:
    """Sum of all four modifiers for one observation."""
    return (
        wind_modifier(observation.wind_speed_mps)
        + humidity_modifier(observation.humidity_percent)
        + traffic_modifier(local_hour)
        + temperature_modifier(observation.temperature_c)
    )


def project_point(current_aqi: float, observation: WeatherObservation, *, tz: dt.tzinfo = dt.timezone.utc) -> ForecastPoint:
    """Predict the AQI for a single forecast step."""
    moment = local_time(observation.timestamp_millis, tz)
    modifier = total_modifier(observation, moment.hour)
    predicted = max(AQI_MIN, min(AQI_MAX, round_half_up(current_aqi + modifier)))

    return ForecastPoint(
        timestamp_millis=observation.timestamp_millis,
        hour_label=hour_label(moment),
        aqi=predicted,
        temperature_c=round_half_up(observation.temperature_c),
        wind_speed_mps=one_decimal(observation.wind_speed_mps),
        humidity_percent=observation.humidity_percent,
        weather_description=observation.weather_description,
    )


def project_forecast(
    current_aqi: float,
    observations: Sequence[WeatherObservation],
    *,
    tz: dt.tzinfo = dt.timezone.utc,
    horizon: int = FORECAST_HORIZON_POINTS,
) -> List[ForecastPoint]:
    """
    Project `current_aqi` over the first `horizon` observations, in order.

    `horizon` never exceeds FORECAST_HORIZON_POINTS (12 hours at 3-hour steps).

    Hours of day are read in `tz`, which should be the location's local zone
    so rush-hour and night bands line up with local traffic. An empty series
    yields an empty list.
    """
    horizon = min(horizon, FORECAST_HORIZON_POINTS)
    points = [project_point(current_aqi, obs, tz=tz) for obs in list(observations)[:horizon]]
    logger.debug(
        "Projected AQI forecast",
        extra={"current_aqi": current_aqi, "input_steps": len(observations), "points": len(points)},
    )
    return points
