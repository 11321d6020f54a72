"""Error envelope construction and application-wide exception handlers."""

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weather_relay.config import CORS_ALLOW_ORIGINS
from weather_relay.weather.models import ErrorEnvelope

logger = logging.getLogger(__name__)

NOT_FOUND_ERROR = "Weather data not found"
BAD_REQUEST_ERROR = "Bad Request"
INTERNAL_ERROR = "Internal Server Error"
DEFAULT_INTERNAL_MESSAGE = "Unexpected error occurred"


class WeatherNotFoundError(Exception):
    """Raised when the upstream provider returns no usable weather data."""
    pass


class InvalidRequestError(ValueError):
    """Raised when caller input passes schema validation but is unusable."""
    pass


def build_error_envelope(message: str, status_code: int, error: str) -> ErrorEnvelope:
    """Build an error envelope stamped with the current UTC instant.

    Args:
        message: Human readable error message
        status_code: HTTP status code the envelope is returned with
        error: Error category

    Returns:
        ErrorEnvelope instance
    """
    timestamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return ErrorEnvelope(error=error, message=message, timestamp=timestamp, status=status_code)


def error_response(message: str, status_code: int, error: str, headers: Optional[dict] = None) -> JSONResponse:
    """Render an error envelope as a JSON response with a matching status code."""
    envelope = build_error_envelope(message, status_code, error)
    return JSONResponse(status_code=status_code, content=envelope.model_dump(), headers=headers)


def _describe_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())[1:]) or "request"
        messages.append(f"{location}: {err.get('msg')}")
    return "; ".join(messages) or "Invalid request"


def _cors_headers(request: Request) -> dict:
    # 500 responses are rendered outside CORSMiddleware, so repeat its headers here
    origin = request.headers.get("origin")
    if origin is None:
        return {}
    if "*" in CORS_ALLOW_ORIGINS:
        return {"Access-Control-Allow-Origin": "*"}
    if origin in CORS_ALLOW_ORIGINS:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


async def weather_not_found_handler(_request: Request, exc: WeatherNotFoundError) -> JSONResponse:
    return error_response(str(exc), 404, NOT_FOUND_ERROR)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_validation_error(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return error_response(message, 400, BAD_REQUEST_ERROR)


async def invalid_request_handler(request: Request, exc: InvalidRequestError) -> JSONResponse:
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return error_response(str(exc) or "Invalid request", 400, BAD_REQUEST_ERROR)


async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        phrase = HTTPStatus(exc.status_code).phrase
    except ValueError:
        phrase = "Error"
    return error_response(str(exc.detail), exc.status_code, phrase, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error processing {request.method} {request.url.path}")
    return error_response(str(exc) or DEFAULT_INTERNAL_MESSAGE, 500, INTERNAL_ERROR, headers=_cors_headers(request))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that turn every failure into an error envelope."""
    app.add_exception_handler(WeatherNotFoundError, weather_not_found_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(InvalidRequestError, invalid_request_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
