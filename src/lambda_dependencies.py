"""Cached dependency factory for the Lambda handler.

Dependencies are created once per Lambda container and reused across warm
invocations.
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

_restaurant_client: RestaurantServiceClient | None = None
_availability_service: AvailabilityService | None = None
_fastapi_app: FastAPI | None = None


def get_restaurant_client() -> RestaurantServiceClient:
    """Create or retrieve the cached platform restaurant client.

    Raises:
        ValueError: If RESTAURANT_SERVICE_BASE_URL is not set
    """
    global _restaurant_client

    if _restaurant_client is not None:
        return _restaurant_client

    base_url = os.getenv("RESTAURANT_SERVICE_BASE_URL")
    if not base_url:
        raise ValueError("RESTAURANT_SERVICE_BASE_URL must be set in environment")

    _restaurant_client = RestaurantServiceClient(
        base_url=base_url,
        api_key=os.getenv("RESTAURANT_SERVICE_API_KEY") or None,
        timeout=float(os.getenv("RESTAURANT_SERVICE_TIMEOUT_SECONDS", "5")),
    )

    logger.info("Restaurant service client initialized")
    return _restaurant_client


def get_availability_service() -> AvailabilityService:
    """Create or retrieve the cached availability service."""
    global _availability_service

    if _availability_service is not None:
        return _availability_service

    _availability_service = AvailabilityService(
        restaurant_client=get_restaurant_client(),
        timezone_name=os.getenv("RESTAURANT_TIMEZONE") or None,
        default_locale=os.getenv("DISPLAY_LOCALE", DEFAULT_LOCALE),
    )

    logger.info("Availability service initialized")
    return _availability_service


def get_fastapi_app() -> FastAPI:
    """Create or retrieve the cached FastAPI application."""
    global _fastapi_app

    if _fastapi_app is not None:
        return _fastapi_app

    api_keys = parse_api_keys(os.getenv("ADMIN_API_KEY"))
    if not api_keys:
        logger.warning("No ADMIN_API_KEY configured - using development key")
        api_keys = ["dummy-key-for-development"]

    _fastapi_app = create_app(
        availability_service=get_availability_service(),
        api_keys=api_keys,
    )
    setup_observability(_fastapi_app)

    logger.info("FastAPI application initialized")
    return _fastapi_app


def initialize_lambda_environment() -> None:
    """Configure logging once during Lambda cold start."""
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Lambda environment initialized")
