"""FastAPI application setup for AirAware."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import router as api_router
from .config import settings
from .errors import ConfigurationError, DataSourceError, InvalidMeasurement
from utils.logging_utils import get_tagged_logger, setup_logging

setup_logging(job_name="airaware_api")
logger = get_tagged_logger(__name__, tag="main")

app = FastAPI(title="AirAware")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type", "x-api-key"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(RequestValidationError)
def request_validation_handler(_request: Request, exc: RequestValidationError):
    return _error(422, _validation_message(exc))


@app.exception_handler(StarletteHTTPException)
def http_exception_handler(_request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(InvalidMeasurement)
def invalid_measurement_handler(_request: Request, exc: InvalidMeasurement):
    return _error(422, str(exc))


@app.exception_handler(DataSourceError)
def data_source_error_handler(request: Request, exc: DataSourceError):
    logger.error("Upstream provider failed", extra={"path": request.url.path, "error": str(exc)})
    return _error(status.HTTP_502_BAD_GATEWAY, str(exc))


@app.exception_handler(ConfigurationError)
def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("Service misconfigured", extra={"path": request.url.path, "error": str(exc)})
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


@app.get("/health")
def health():
    """Liveness check."""
    return {"status": "ok"}


# API routes
app.include_router(api_router, prefix="/v1")
