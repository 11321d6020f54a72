"""Main FastAPI application for the weather relay service."""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weather_relay.api.endpoints import router as weather_router
from weather_relay.config import (
    HOST, PORT, DEBUG, API_PREFIX, CORS_ALLOW_ORIGINS, ALERTS_FAIL_OPEN,
    VISUAL_CROSSING_API_KEY, SERVICE_NAME, SERVICE_VERSION
)
from weather_relay.errors import register_exception_handlers
from weather_relay.logging_config import configure_logging
from weather_relay.middleware.request_logging import RequestLoggingMiddleware
from weather_relay.weather.client import VisualCrossingClient

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    try:
        app.state.weather_client = VisualCrossingClient(api_key=VISUAL_CROSSING_API_KEY)
        logger.info(f"Starting Weather Relay Service (alerts fail-open: {ALERTS_FAIL_OPEN})")
    except Exception as e:
        logger.error(f"Startup error: {e}")
        logger.error(traceback.format_exc())
        raise

    try:
        yield
    finally:
        logger.info("Shutting down Weather Relay Service")
        await app.state.weather_client.aclose()


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=SERVICE_NAME,
        description="REST API relaying current, historical and alert weather data from Visual Crossing",
        version=SERVICE_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)
    app.include_router(weather_router)

    @app.get("/health", tags=["root"])
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy", "service": "weather-relay"}

    @app.get("/api", tags=["root"])
    async def api_info() -> dict:
        """API information endpoint.

        Returns:
            Basic service information
        """
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "docs": "/docs",
            "routes": {
                "current": f"{API_PREFIX}/{{city}}",
                "history": f"{API_PREFIX}/history?city={{city}}&date={{YYYY-MM-DD}}",
                "alerts": f"{API_PREFIX}/alerts?city={{city}}",
            },
            "data_source": "Visual Crossing Timeline API"
        }

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        "weather_relay.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
