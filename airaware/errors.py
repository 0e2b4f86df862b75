"""Exception types shared by the AQI core, provider clients and the HTTP API."""


class AirAwareError(Exception):
    """Base class for errors raised by this package."""


class InvalidMeasurement(AirAwareError, ValueError):
    """A pollutant or weather value is negative, non-finite or out of range."""


class DataSourceError(AirAwareError):
    """An upstream provider failed or returned an unusable payload."""


class ConfigurationError(AirAwareError):
    """A required setting (usually a provider API key) is missing."""
