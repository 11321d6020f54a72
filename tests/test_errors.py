"""Tests for error envelope construction."""

from datetime import datetime, timedelta, timezone

from weather_relay.errors import build_error_envelope, error_response


def test_envelope_fields():
    envelope = build_error_envelope("Unable to fetch", 404, "Weather data not found")

    assert envelope.error == "Weather data not found"
    assert envelope.message == "Unable to fetch"
    assert envelope.status == 404


def test_envelope_timestamp_is_current_utc_instant():
    envelope = build_error_envelope("boom", 500, "Internal Server Error")

    assert envelope.timestamp.endswith("Z")
    stamped = datetime.fromisoformat(envelope.timestamp.replace("Z", "+00:00"))
    assert abs(datetime.now(timezone.utc) - stamped) < timedelta(seconds=5)


def test_error_response_status_matches_envelope():
    response = error_response("bad date", 400, "Bad Request")

    assert response.status_code == 400
    assert b'"status":400' in response.body
    assert b'"error":"Bad Request"' in response.body
