"""Weather service deciding what to request from the provider and how to answer."""

import logging
from datetime import date, timedelta
from typing import Callable, Optional

from weather_relay.config import (
    ALERTS_FAIL_OPEN, INCLUDE_CURRENT_AND_FORECAST, INCLUDE_HISTORICAL, INCLUDE_ALERTS
)
from weather_relay.errors import InvalidRequestError, WeatherNotFoundError
from weather_relay.weather.client import VisualCrossingClient
from weather_relay.weather.models import NoAlertsPayload, UpstreamResult, WeatherPayload

logger = logging.getLogger(__name__)

CURRENT_NOT_FOUND_MESSAGE = "Unable to fetch weather for this location. Check city name or coordinates."
HISTORICAL_NOT_FOUND_MESSAGE = "Unable to fetch historical weather. Check city or date."
NO_ALERTS_MESSAGE = "No active weather alerts for this location."
ALERTS_UNAVAILABLE_MESSAGE = "Unable to fetch alert data. Please check city or API key."


class WeatherService:
    """Service relaying weather requests to the upstream provider."""

    def __init__(
        self,
        client: VisualCrossingClient,
        today: Callable[[], date] = date.today,
        alerts_fail_open: bool = ALERTS_FAIL_OPEN
    ):
        """Initialize the weather service.

        Args:
            client: Shared upstream client
            today: Returns the server-local current date
            alerts_fail_open: Answer alert lookups with a canned payload when
                the provider fails, instead of raising WeatherNotFoundError
        """
        self.client = client
        self.today = today
        self.alerts_fail_open = alerts_fail_open

    async def get_current_and_forecast(self, city: str) -> WeatherPayload:
        """Get current conditions and the daily forecast for a location.

        Raises:
            InvalidRequestError: If city is blank
            WeatherNotFoundError: If the provider returned no data
        """
        city = _require_city(city)
        result = await self.client.fetch(city, INCLUDE_CURRENT_AND_FORECAST)
        return _payload_or_raise(result, CURRENT_NOT_FOUND_MESSAGE)

    async def get_historical(self, city: str, day: Optional[date] = None) -> WeatherPayload:
        """Get hourly weather for a single past day.

        Args:
            city: City name or "lat,lon"
            day: Day to fetch, defaults to yesterday (server local date)

        Raises:
            InvalidRequestError: If city is blank
            WeatherNotFoundError: If the provider returned no data
        """
        city = _require_city(city)
        if day is None:
            day = self.today() - timedelta(days=1)
            logger.info(f"No date given, defaulting to {day.isoformat()}")

        result = await self.client.fetch(city, INCLUDE_HISTORICAL, start_date=day, end_date=day)
        return _payload_or_raise(result, HISTORICAL_NOT_FOUND_MESSAGE)

    async def get_alerts(self, city: str) -> WeatherPayload:
        """Get active weather alerts for a location.

        Provider failures are reported inside a canned payload rather than as
        an error unless the service was configured to fail closed.

        Raises:
            InvalidRequestError: If city is blank
            WeatherNotFoundError: If the provider failed and alerts_fail_open is off
        """
        city = _require_city(city)
        result = await self.client.fetch(city, INCLUDE_ALERTS)

        if result.error is not None:
            if not self.alerts_fail_open:
                raise WeatherNotFoundError(ALERTS_UNAVAILABLE_MESSAGE)
            logger.info(f"Alerts unavailable for {city!r} ({result.error}), returning canned payload")
            return _canned(ALERTS_UNAVAILABLE_MESSAGE)

        if not result.body or b"alerts" not in result.body:
            return _canned(NO_ALERTS_MESSAGE)

        return WeatherPayload(content=result.body, media_type=result.content_type)


def _require_city(city: Optional[str]) -> str:
    if city is None or not city.strip():
        raise InvalidRequestError("city must not be empty")
    return city


def _payload_or_raise(result: UpstreamResult, message: str) -> WeatherPayload:
    if not result.ok:
        logger.info(f"Upstream fetch failed: {result.error or 'empty body'}")
        raise WeatherNotFoundError(message)
    return WeatherPayload(content=result.body, media_type=result.content_type)


def _canned(message: str) -> WeatherPayload:
    return WeatherPayload(content=NoAlertsPayload(message=message).model_dump_json().encode())
