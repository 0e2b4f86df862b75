"""Application configuration pulled from environment variables via pydantic."""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the AirAware service."""
    model_config = SettingsConfigDict(env_prefix="AIRAWARE_", extra="ignore")

    data_source: str = "live"  # options: live
    openaq_base_url: str = "https://api.openaq.org/v2"
    openaq_radius_m: int = 25000
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    openweather_api_key: str | None = None
    http_timeout_seconds: float = 10.0
    http_cache_seconds: int = 600
    http_retries: int = 3
    forecast_points: int = Field(default=4, ge=1, le=4)
    api_key: str | None = None
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    @field_validator("openaq_base_url", "openweather_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'openweather_api_key', 'api_key'})}")
