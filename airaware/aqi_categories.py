"""Map an AQI value onto its US EPA severity category."""

from __future__ import annotations

from airaware.domain import AQICategory

# Ascending; the first bound the AQI does not exceed wins.
_THRESHOLDS = (
    (50, AQICategory.GOOD),
    (100, AQICategory.MODERATE),
    (150, AQICategory.UNHEALTHY_FOR_SENSITIVE),
    (200, AQICategory.UNHEALTHY),
    (300, AQICategory.VERY_UNHEALTHY),
)


def classify(aqi: float) -> AQICategory:
    """Return the category for `aqi`; anything above 300 is HAZARDOUS."""
    for upper, category in _THRESHOLDS:
        if aqi <= upper:
            return category
    return AQICategory.HAZARDOUS
