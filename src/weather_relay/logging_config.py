"""Centralized logging configuration."""

import logging.config

from weather_relay.config import LOG_LEVEL

# Loggers owned by the server stack; they get our handler and stop propagating
SERVER_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "fastapi")


def build_logging_config(level: str = LOG_LEVEL) -> dict:
    """Build a dictConfig mapping that routes all service logs to stdout."""
    server_loggers = {
        name: {"level": level, "handlers": ["console"], "propagate": False}
        for name in SERVER_LOGGERS
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "": {"level": level, "handlers": ["console"]},
            # httpx logs request URLs at INFO, and those carry the API key
            "httpx": {"level": "WARNING", "handlers": ["console"], "propagate": False},
            **server_loggers,
        },
    }


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Apply the service logging configuration."""
    logging.config.dictConfig(build_logging_config(level))
