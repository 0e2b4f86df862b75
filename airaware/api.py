"""HTTP API for the air-quality dashboard."""

import hmac
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from pydantic import BaseModel, Field

from .aqi_categories import classify
from .aqi_estimator import estimate_aqi
from .conditions_service import get_air_quality, get_current_weather, get_forecast
from .config import settings
from .data_sources import build_data_source
from .domain import AirQualityReport, CurrentWeather, ForecastPoint, RecommendationProfile
from .recommendations import build_recommendation_messages
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="api")


def require_api_key(x_api_key: str | None = Header(default=None)):
    """Validate the X-API-Key header against the configured static key, if any."""
    if not settings.api_key:
        logger.debug("No API key configured; allowing all requests")
        return

    if not x_api_key:
        logger.debug("No API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])
DATA_SOURCE = build_data_source(settings)


class LocationRequest(BaseModel):
    """Coordinates of the user's location."""
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class ForecastRequest(LocationRequest):
    """Coordinates plus the AQI the projection starts from."""
    current_aqi: float = Field(ge=0)


class RecommendationRequest(BaseModel):
    """Profile and current conditions for the recommendation generator."""
    role: str
    health_conditions: List[str] = Field(default_factory=list)
    location_name: Optional[str] = None
    aqi: int = Field(ge=0)
    temperature: float
    humidity: float = Field(ge=0, le=100)


class AirQualityResponse(BaseModel):
    """AQI, category and the pollutant values behind it."""
    aqi: int
    category: str
    label: str
    description: str
    pm25: Optional[float] = None
    pm10: Optional[float] = None
    no2: Optional[float] = None
    o3: Optional[float] = None
    location: str
    source: str


class ForecastResponse(BaseModel):
    """Projected AQI points, in forecast order."""
    forecast: List[ForecastPoint]


class EstimateResponse(BaseModel):
    """AQI estimate for a bare PM2.5 concentration."""
    aqi: int
    category: str
    label: str
    description: str


class RecommendationMessagesResponse(BaseModel):
    """Chat messages ready to hand to the recommendation generator."""
    category: str
    label: str
    messages: List[dict]


def _air_quality_response(report: AirQualityReport) -> AirQualityResponse:
    """Flatten a report into the serialized API shape."""
    reading = report.reading
    return AirQualityResponse(
        aqi=report.aqi,
        category=report.category.value,
        label=report.category.label,
        description=report.category.description,
        pm25=reading.pm25,
        pm10=reading.pm10,
        no2=reading.no2,
        o3=reading.o3,
        location=reading.location,
        source=reading.source,
    )


@router.post("/air-quality", response_model=AirQualityResponse)
def air_quality(req: LocationRequest):
    """Return the latest AQI near the given coordinates."""
    logger.info("Fetching air quality", extra={"lat": req.lat, "lng": req.lng})
    report = get_air_quality(req.lat, req.lng, data_source=DATA_SOURCE)
    return _air_quality_response(report)


@router.post("/weather", response_model=CurrentWeather)
def weather(req: LocationRequest):
    """Return current weather at the given coordinates."""
    logger.info("Fetching weather", extra={"lat": req.lat, "lng": req.lng})
    return get_current_weather(req.lat, req.lng, data_source=DATA_SOURCE)


@router.post("/forecast", response_model=ForecastResponse)
def forecast(req: ForecastRequest):
    """Project the current AQI over the next forecast steps."""
    logger.info("Fetching forecast", extra={"lat": req.lat, "lng": req.lng, "current_aqi": req.current_aqi})
    points = get_forecast(
        req.lat,
        req.lng,
        req.current_aqi,
        horizon=settings.forecast_points,
        data_source=DATA_SOURCE,
    )
    return ForecastResponse(forecast=points)


@router.get("/aqi/estimate", response_model=EstimateResponse)
def estimate(pm25: Optional[float] = Query(default=None)):
    """Convert a PM2.5 concentration to AQI without contacting any provider."""
    aqi = estimate_aqi(pm25)
    category = classify(aqi)
    return EstimateResponse(aqi=aqi, category=category.value, label=category.label, description=category.description)


@router.post("/recommendations/request", response_model=RecommendationMessagesResponse)
def recommendation_request(req: RecommendationRequest):
    """Build the prompt the external recommendation generator expects."""
    profile = RecommendationProfile(
        role=req.role,
        health_conditions=req.health_conditions,
        location_name=req.location_name,
    )
    logger.info("Building recommendation request", extra={"role": req.role, "aqi": req.aqi})
    category = classify(req.aqi)
    messages = build_recommendation_messages(profile, req.aqi, req.temperature, req.humidity)
    return RecommendationMessagesResponse(category=category.value, label=category.label, messages=messages)
