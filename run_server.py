import os

import uvicorn

from airaware.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

setup_logging(job_name="airaware_api")
logger = get_tagged_logger(__name__, tag="server")


def warn_on_missing_keys() -> None:
    """
    Log a clear warning when provider credentials are absent. The server still
    starts; /v1/weather and /v1/forecast answer 500 until
    AIRAWARE_OPENWEATHER_API_KEY is set.
    """
    if not settings.openweather_api_key:
        logger.warning("AIRAWARE_OPENWEATHER_API_KEY is not set; weather and forecast endpoints will fail.")
    if not settings.api_key:
        logger.info("AIRAWARE_API_KEY is not set; the API accepts unauthenticated requests.")


if __name__ == "__main__":
    warn_on_missing_keys()

    uvicorn.run(
        "airaware.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
