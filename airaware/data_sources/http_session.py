"""Cached, retrying HTTP session and JSON fetch helper shared by provider clients."""
from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import urlencode

import requests
import requests_cache
from retry_requests import retry

from airaware.config import settings
from airaware.errors import DataSourceError
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="data_sources/http_session")


def build_session(cache_name: str = ".cache") -> requests.Session:
    """Return a session that caches responses and retries transient 5xx errors."""
    cache_session = requests_cache.CachedSession(cache_name, expire_after=settings.http_cache_seconds)
    return retry(cache_session, retries=settings.http_retries, backoff_factor=0.2)


def get_json(
    session: requests.Session,
    url: str,
    params: Mapping[str, Any],
    *,
    provider: str,
    headers: Mapping[str, str] | None = None,
) -> dict:
    """GET `url` and decode the JSON body, raising DataSourceError on any failure."""
    logger.debug("Provider GET", extra={"provider": provider, "url": mask_url(f"{url}?{urlencode(params)}")})
    try:
        resp = session.get(url, params=params, headers=headers, timeout=settings.http_timeout_seconds)
        resp.raise_for_status()
        data = resp.json()
    except (requests.exceptions.RequestException, ValueError) as exc:
        logger.warning("Provider request failed", extra={"provider": provider, "error": str(exc)})
        raise DataSourceError(f"{provider} API error: {exc}") from exc

    if not isinstance(data, dict):
        raise DataSourceError(f"{provider} API returned an unexpected payload")
    return data
