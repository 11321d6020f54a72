"""API endpoints for the weather relay service."""

import logging
import re
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.responses import Response

from weather_relay.config import API_PREFIX
from weather_relay.errors import InvalidRequestError
from weather_relay.weather.models import WeatherPayload
from weather_relay.weather.service import WeatherService

logger = logging.getLogger(__name__)

router = APIRouter(prefix=API_PREFIX, tags=["weather"])

ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def get_weather_service(request: Request) -> WeatherService:
    """Dependency returning the service bound to the shared upstream client."""
    return WeatherService(client=request.app.state.weather_client)


def _relay(payload: WeatherPayload) -> Response:
    return Response(content=payload.content, media_type=payload.media_type)


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse an extended-format ISO-8601 calendar date (YYYY-MM-DD).

    Args:
        value: Raw query value, or None when the parameter was omitted

    Returns:
        Parsed date, or None when no value was given

    Raises:
        InvalidRequestError: If the value is not a valid YYYY-MM-DD date
    """
    if value is None:
        return None

    if not ISO_DATE_PATTERN.fullmatch(value):
        raise InvalidRequestError(f"date must be an ISO-8601 calendar date (YYYY-MM-DD), got {value!r}")

    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidRequestError(f"date is not a valid calendar date: {value!r}")


# Literal routes first so they are not captured by /{city}
@router.get("/history")
async def get_historical_weather(
    city: str = Query(..., min_length=1, description="City name or \"lat,lon\""),
    day: Optional[str] = Query(
        None,
        alias="date",
        description="ISO date (YYYY-MM-DD), defaults to yesterday"
    ),
    weather_service: WeatherService = Depends(get_weather_service)
) -> Response:
    """Get hourly historical weather for a single day.

    Args:
        city: City name or coordinates
        day: ISO calendar date to fetch, defaults to yesterday
        weather_service: Injected weather service

    Returns:
        Raw provider payload
    """
    payload = await weather_service.get_historical(city, parse_iso_date(day))
    logger.info(f"Relayed historical weather for {city!r}")
    return _relay(payload)


@router.get("/alerts")
async def get_weather_alerts(
    city: str = Query(..., min_length=1, description="City name or \"lat,lon\""),
    weather_service: WeatherService = Depends(get_weather_service)
) -> Response:
    """Get active weather alerts, or a canned payload when there are none."""
    payload = await weather_service.get_alerts(city)
    return _relay(payload)


@router.get("/{city}")
async def get_current_weather(
    city: str = Path(..., min_length=1, description="City name or \"lat,lon\""),
    weather_service: WeatherService = Depends(get_weather_service)
) -> Response:
    """Get current conditions and the daily forecast."""
    payload = await weather_service.get_current_and_forecast(city)
    logger.info(f"Relayed current weather for {city!r}")
    return _relay(payload)
