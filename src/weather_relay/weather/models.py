"""Data models for the weather relay service."""

from typing import List, Optional

from pydantic import BaseModel, Field


class UpstreamResult(BaseModel):
    """Outcome of a single call to the upstream provider.

    Exactly one of ``body`` or ``error`` is meaningful: a result is ``ok`` only
    when no error was recorded and the provider returned a non-empty body.
    """
    body: Optional[bytes] = Field(None, description="Undecoded response body, relayed verbatim")
    content_type: str = Field("application/json", description="Content type reported by the provider")
    error: Optional[str] = Field(None, description="Reason the fetch failed")

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.body)


class WeatherPayload(BaseModel):
    """Opaque payload handed back to the router."""
    content: bytes = Field(..., description="Response body bytes")
    media_type: str = Field("application/json", description="Response content type")


class NoAlertsPayload(BaseModel):
    """Canned alerts response used when the provider has nothing to report."""
    alerts: List[dict] = Field(default_factory=list, description="Always empty")
    message: str = Field(..., description="Why no alerts are returned")


class ErrorEnvelope(BaseModel):
    """Uniform error response model."""
    error: str = Field(..., description="Error category")
    message: str = Field(..., description="Human readable error message")
    timestamp: str = Field(..., description="ISO-8601 instant the error was produced")
    status: int = Field(..., description="HTTP status code")
