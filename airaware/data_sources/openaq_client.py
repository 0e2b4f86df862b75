"""Fetch the latest pollutant measurements near a coordinate from OpenAQ."""
from __future__ import annotations

import math
from typing import Any, Iterable, Optional

from airaware.config import settings
from airaware.data_sources.http_session import build_session, get_json
from airaware.domain import PollutantReading
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/openaq")

session = build_session()

OPENAQ_SOURCE = "OpenAQ"
POLLUTANT_PARAMETERS = ("pm25", "pm10", "no2", "o3")


def _clean_value(parameter: str, value: Any) -> Optional[float]:
    """Return a usable concentration, or None for missing/negative/non-numeric values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("Discarding non-numeric OpenAQ value", extra={"parameter": parameter, "value": value})
        return None
    if not math.isfinite(number) or number < 0:
        logger.warning("Discarding out-of-range OpenAQ value", extra={"parameter": parameter, "value": value})
        return None
    return number


def _first_values(measurements: Iterable[dict]) -> dict[str, Optional[float]]:
    """Map each pollutant to the first value reported for it."""
    values: dict[str, Optional[float]] = {}
    for m in measurements:
        parameter = m.get("parameter")
        if parameter in POLLUTANT_PARAMETERS and parameter not in values:
            values[parameter] = _clean_value(parameter, m.get("value"))
    return values


def parse_latest(data: dict) -> Optional[PollutantReading]:
    """Convert an OpenAQ `latest` payload into a reading; None when it has no results."""
    results = data.get("results") or []
    if not results:
        return None

    result = results[0]
    values = _first_values(result.get("measurements") or [])
    return PollutantReading(
        pm25=values.get("pm25"),
        pm10=values.get("pm10"),
        no2=values.get("no2"),
        o3=values.get("o3"),
        location=result.get("location") or "Unknown",
        source=OPENAQ_SOURCE,
    )


def fetch_latest_reading(latitude: float, longitude: float) -> Optional[PollutantReading]:
    """Return the nearest station's latest reading within the configured radius, if any."""
    params = {
        "coordinates": f"{latitude},{longitude}",
        "radius": settings.openaq_radius_m,
        "limit": 1,
    }
    data = get_json(
        session,
        f"{settings.openaq_base_url}/latest",
        params,
        provider=OPENAQ_SOURCE,
        headers={"Accept": "application/json"},
    )
    reading = parse_latest(data)
    if reading is None:
        logger.info("No OpenAQ station data near location", extra={"latitude": latitude, "longitude": longitude})
    return reading
