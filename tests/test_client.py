"""Tests for the Visual Crossing client."""

from datetime import date

import httpx
import pytest

from weather_relay.weather.client import VisualCrossingClient


async def test_fetch_builds_timeline_request(weather_client, upstream, timeline_path):
    result = await weather_client.fetch("London", "current,days,alerts")

    request = upstream.last_request
    assert request.method == "GET"
    assert request.url.path == f"{timeline_path}/London"
    assert request.url.params["unitGroup"] == "metric"
    assert request.url.params["key"] == "test-key"
    assert request.url.params["include"] == "current,days,alerts"
    assert result.ok
    assert result.body == b'{"resolvedAddress": "London"}'


async def test_fetch_appends_date_range(weather_client, upstream, timeline_path):
    await weather_client.fetch("Paris", "hours,alerts", start_date=date(2024, 3, 14), end_date=date(2024, 3, 14))

    assert upstream.last_request.url.path == f"{timeline_path}/Paris/2024-03-14/2024-03-14"


async def test_fetch_escapes_location(weather_client, upstream, timeline_path):
    await weather_client.fetch("New York", "alerts")

    assert f"{timeline_path}/New%20York?".encode() in upstream.last_request.url.raw_path


async def test_fetch_keeps_coordinates_readable(weather_client, upstream, timeline_path):
    await weather_client.fetch("51.5072,-0.1276", "alerts")

    assert upstream.last_request.url.path == f"{timeline_path}/51.5072,-0.1276"


async def test_fetch_relays_content_type(weather_client, upstream):
    upstream.respond_with(text="a,b\n1,2", content_type="text/csv")

    result = await weather_client.fetch("London", "days")

    assert result.content_type == "text/csv"
    assert result.body == b"a,b\n1,2"


@pytest.mark.parametrize("status_code", [400, 401, 404, 429, 500])
async def test_fetch_reports_http_errors(weather_client, upstream, status_code):
    upstream.respond_with(status_code=status_code, text="Bad API Request:Invalid location")

    result = await weather_client.fetch("Atlantis", "current,days,alerts")

    assert not result.ok
    assert result.error == f"HTTP {status_code}"
    assert result.body is None


@pytest.mark.parametrize("exc_type", [httpx.ConnectError, httpx.ReadTimeout])
async def test_fetch_reports_transport_errors(weather_client, upstream, exc_type):
    upstream.fail_with(exc_type)

    result = await weather_client.fetch("London", "alerts")

    assert not result.ok
    assert result.error == exc_type.__name__


async def test_fetch_treats_empty_body_as_not_ok(weather_client, upstream):
    upstream.respond_with(text="")

    result = await weather_client.fetch("London", "alerts")

    assert result.error is None
    assert result.body == b""
    assert not result.ok


async def test_error_does_not_leak_api_key(weather_client, upstream):
    upstream.respond_with(status_code=401)

    result = await weather_client.fetch("London", "alerts")

    assert "test-key" not in result.error


async def test_fetch_keeps_body_bytes_undecoded(weather_client, upstream):
    raw = b'{"name":"S\xe3o Paulo"}'
    upstream.respond_with(content=raw, content_type="application/json; charset=ISO-8859-1")

    result = await weather_client.fetch("Sao Paulo", "days")

    assert result.body == raw
    assert result.content_type == "application/json; charset=ISO-8859-1"


def test_api_key_must_be_passed_explicitly():
    with pytest.raises(TypeError):
        VisualCrossingClient()


def test_missing_api_key_is_rejected():
    with pytest.raises(ValueError):
        VisualCrossingClient(api_key="")


async def test_context_manager_closes_client(upstream):
    async with VisualCrossingClient(api_key="k", transport=httpx.MockTransport(upstream)) as vc:
        await vc.fetch("London", "alerts")

    assert vc.client.is_closed
