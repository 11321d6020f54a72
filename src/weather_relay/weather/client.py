"""HTTP client for the Visual Crossing timeline API."""

import logging
from datetime import date
from typing import Optional
from urllib.parse import quote

import httpx

from weather_relay.config import (
    VISUAL_CROSSING_BASE_URL, UNIT_GROUP
)
from weather_relay.weather.models import UpstreamResult

logger = logging.getLogger(__name__)


class VisualCrossingClient:
    """Async client relaying timeline requests to Visual Crossing."""

    def __init__(
        self,
        api_key: str,
        base_url: str = VISUAL_CROSSING_BASE_URL,
        unit_group: str = UNIT_GROUP,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize the weather client.

        Args:
            api_key: Visual Crossing API key
            base_url: Base URL of the timeline endpoint
            unit_group: Unit system requested from the provider
            transport: Optional httpx transport (used to stub the provider)

        Raises:
            ValueError: If no API key is configured
        """
        if not api_key:
            raise ValueError("VISUAL_CROSSING_API_KEY is not set")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.unit_group = unit_group
        self.client = httpx.AsyncClient(transport=transport, follow_redirects=True)

    def build_path(
        self,
        location: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> str:
        """Build the timeline URL for a location and optional date range."""
        path = f"{self.base_url}/{quote(location, safe=',')}"
        if start_date is not None:
            path += f"/{start_date.isoformat()}/{(end_date or start_date).isoformat()}"
        return path

    async def fetch(
        self,
        location: str,
        include: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> UpstreamResult:
        """Fetch the raw timeline document for a location.

        Args:
            location: City name or "lat,lon"
            include: Comma separated data categories to request
            start_date: First day of the range (optional)
            end_date: Last day of the range (defaults to start_date)

        Returns:
            UpstreamResult holding either the undecoded body or the failure reason
        """
        url = self.build_path(location, start_date, end_date)
        params = {"unitGroup": self.unit_group, "key": self.api_key, "include": include}

        logger.info(f"Fetching timeline for location={location!r}, include={include}, "
                    f"range={start_date}/{end_date or start_date}")

        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(f"HTTP error from Visual Crossing for {location!r}: {e.response.status_code}")
            return UpstreamResult(error=f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.warning(f"Request error to Visual Crossing for {location!r}: {type(e).__name__}")
            return UpstreamResult(error=type(e).__name__)

        if not response.content:
            logger.warning(f"Empty response from Visual Crossing for {location!r}")
            return UpstreamResult(body=b"")

        content_type = response.headers.get("content-type", "application/json")
        logger.info(f"Fetched {len(response.content)} bytes for {location!r}")
        return UpstreamResult(body=response.content, content_type=content_type)

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
