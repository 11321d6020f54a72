"""Configuration settings for the weather relay service."""

import os
from typing import Final, List
from dotenv import load_dotenv

load_dotenv()

# Upstream provider configuration
VISUAL_CROSSING_BASE_URL: Final[str] = (
    "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
)
VISUAL_CROSSING_API_KEY: str = os.getenv("VISUAL_CROSSING_API_KEY", "")
UNIT_GROUP: Final[str] = "metric"

# Include categories requested per operation
INCLUDE_CURRENT_AND_FORECAST: Final[str] = "current,days,alerts"
INCLUDE_HISTORICAL: Final[str] = "hours,alerts"
INCLUDE_ALERTS: Final[str] = "alerts"

# Service metadata
SERVICE_NAME: Final[str] = "Weather Relay Service"
SERVICE_VERSION: Final[str] = "0.1.0"

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
API_PREFIX: Final[str] = "/api/weather"

# CORS
CORS_ALLOW_ORIGINS: List[str] = [
    origin.strip() for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()
]

# Alerts policy: return a canned payload instead of an error when the provider fails
ALERTS_FAIL_OPEN: bool = os.getenv("ALERTS_FAIL_OPEN", "true").lower() == "true"
