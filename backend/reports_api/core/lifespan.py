"""
Application lifespan handler.
Configures logging and validates settings before the API serves requests.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from shared.config.settings import settings
from shared.config.logging import setup_logging, reports_api_logger as logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    setup_logging()

    config_errors = settings.validate_settings()
    if config_errors:
        for error in config_errors:
            logger.error("Configuration error: %s", error)
        if settings.environment == "production":
            raise RuntimeError(
                f"Production configuration errors: {'; '.join(config_errors)}. "
                "Server will not start with invalid configuration."
            )
        logger.warning("Running with invalid settings (acceptable for development only)")

    logger.info(
        "Starting reports API",
        port=settings.rest_api_port,
        env=settings.environment,
        timezone=settings.timezone,
        currency=settings.currency_code,
    )

    yield

    logger.info("Shutting down reports API")
