"""Main application entry point for the restaurant availability service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os

from fastapi import FastAPI

from restaurant_availability_service.auth.api_key_validator import parse_api_keys
from restaurant_availability_service.handlers.api_handler import create_app
from restaurant_availability_service.localization.messages import DEFAULT_LOCALE
from restaurant_availability_service.observability import configure_logging, setup_observability
from restaurant_availability_service.services.availability_service import AvailabilityService
from restaurant_availability_service.services.restaurant_service_client import (
    RestaurantServiceClient,
)

logger = logging.getLogger(__name__)

DEVELOPMENT_ADMIN_KEY = "dummy-key-for-development"


def create_restaurant_client() -> RestaurantServiceClient:
    """Create the platform restaurant API client from environment variables.

    Returns:
        Configured RestaurantServiceClient

    Raises:
        ValueError: If RESTAURANT_SERVICE_BASE_URL is not set
    """
    base_url = os.getenv("RESTAURANT_SERVICE_BASE_URL")
    if not base_url:
        raise ValueError("RESTAURANT_SERVICE_BASE_URL must be set in environment")

    api_key = os.getenv("RESTAURANT_SERVICE_API_KEY") or None
    timeout = float(os.getenv("RESTAURANT_SERVICE_TIMEOUT_SECONDS", "5"))

    logger.info(f"Restaurant service client configured - URL: {base_url}")
    return RestaurantServiceClient(base_url=base_url, api_key=api_key, timeout=timeout)


def create_availability_service(restaurant_client: RestaurantServiceClient) -> AvailabilityService:
    """Create the availability service from environment variables.

    Raises:
        ValueError: If RESTAURANT_TIMEZONE is not a known IANA timezone
    """
    timezone_name = os.getenv("RESTAURANT_TIMEZONE") or None
    default_locale = os.getenv("DISPLAY_LOCALE", DEFAULT_LOCALE)

    logger.info(
        f"Availability service configured - timezone: {timezone_name or 'server local'}, "
        f"locale: {default_locale}"
    )
    return AvailabilityService(
        restaurant_client=restaurant_client,
        timezone_name=timezone_name,
        default_locale=default_locale,
    )


def get_admin_api_keys() -> list[str]:
    """Read admin API keys, falling back to a development key with a warning."""
    api_keys = parse_api_keys(os.getenv("ADMIN_API_KEY"))
    if not api_keys:
        logger.warning("No ADMIN_API_KEY configured - admin endpoints use the development key")
        api_keys = [DEVELOPMENT_ADMIN_KEY]
    return api_keys


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the platform restaurant client
    3. Creates the availability service
    4. Creates the FastAPI app
    5. Sets up observability

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing restaurant availability service...")

    restaurant_client = create_restaurant_client()
    availability_service = create_availability_service(restaurant_client)

    app = create_app(
        availability_service=availability_service,
        api_keys=get_admin_api_keys(),
    )

    setup_observability(app)

    logger.info("Restaurant availability service initialized successfully")
    return app


# The application is only built outside tests so test collection needs no environment
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8002"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
