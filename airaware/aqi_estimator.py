"""PM2.5 concentration to US EPA AQI.

The AQI is a piecewise-linear transform of the concentration: each breakpoint
band maps a concentration sub-range onto an AQI sub-range, and the value is
interpolated inside its band. Concentrations above the top band keep the top
band's slope rather than saturating at 500.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Optional

from airaware.errors import InvalidMeasurement

# AQI reported when no PM2.5 measurement is available (top of "Good").
DEFAULT_AQI = 50


class Breakpoint(NamedTuple):
    """One concentration band and the AQI band it maps onto."""
    conc_lo: float
    conc_hi: float
    aqi_lo: int
    aqi_hi: int


PM25_BREAKPOINTS = (
    Breakpoint(0.0, 12.0, 0, 50),
    Breakpoint(12.1, 35.4, 51, 100),
    Breakpoint(35.5, 55.4, 101, 150),
    Breakpoint(55.5, 150.4, 151, 200),
    Breakpoint(150.5, 250.4, 201, 300),
    Breakpoint(250.5, 500.4, 301, 500),
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def _band_for(concentration: float) -> Breakpoint:
    """First band whose upper bound covers `concentration`, else the top band."""
    for band in PM25_BREAKPOINTS:
        if concentration <= band.conc_hi:
            return band
    return PM25_BREAKPOINTS[-1]


def estimate_aqi(pm25: Optional[float]) -> int:
    """
    Convert a PM2.5 concentration (µg/m³) to an AQI integer.

    Returns DEFAULT_AQI when `pm25` is None. Raises InvalidMeasurement for
    negative or non-finite concentrations.
    """
    if pm25 is None:
        return DEFAULT_AQI

    c = float(pm25)
    if not math.isfinite(c) or c < 0:
        raise InvalidMeasurement(f"PM2.5 concentration must be a finite, non-negative number, got {pm25!r}")

    band = _band_for(c)
    slope = (band.aqi_hi - band.aqi_lo) / (band.conc_hi - band.conc_lo)
    return round_half_up(band.aqi_lo + slope * (c - band.conc_lo))
