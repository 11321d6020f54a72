"""Shared fixtures: an in-process stand-in for the Visual Crossing API."""

from datetime import date
from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from weather_relay.api.endpoints import get_weather_service
from weather_relay.main import create_app
from weather_relay.weather.client import VisualCrossingClient
from weather_relay.weather.service import WeatherService

TODAY = date(2024, 3, 15)
TIMELINE_PATH = "/VisualCrossingWebServices/rest/services/timeline"


class StubUpstream:
    """Records outgoing requests and answers them with a configurable response."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200,
            text='{"resolvedAddress": "London"}',
            headers={"content-type": "application/json"},
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def respond_with(
        self, status_code: int = 200, text: str = "", content_type: str = "application/json", content: bytes = None
    ):
        body = content if content is not None else text.encode()
        self.responder = lambda request: httpx.Response(
            status_code, content=body, headers={"content-type": content_type}
        )

    def fail_with(self, exc_type=httpx.ConnectError):
        def raise_error(request):
            raise exc_type("upstream unreachable", request=request)

        self.responder = raise_error

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request reached the upstream"
        return self.requests[-1]


@pytest.fixture
def timeline_path() -> str:
    return TIMELINE_PATH


@pytest.fixture
def upstream() -> StubUpstream:
    return StubUpstream()


@pytest.fixture
def weather_client(upstream) -> VisualCrossingClient:
    return VisualCrossingClient(api_key="test-key", transport=httpx.MockTransport(upstream))


@pytest.fixture
def app(weather_client):
    app = create_app()
    app.dependency_overrides[get_weather_service] = lambda: WeatherService(
        client=weather_client, today=lambda: TODAY, alerts_fail_open=True
    )
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
