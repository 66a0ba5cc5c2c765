"""FastAPI application exposing restaurant availability."""

import logging
from datetime import datetime
from typing import Any

from fastapi import Depends, FastAPI, Header, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from restaurant_availability_service.auth.api_dependencies import require_admin_key
from restaurant_availability_service.auth.api_key_validator import APIKeyValidator
from restaurant_availability_service.localization.messages import parse_accept_language
from restaurant_availability_service.models.schedule_models import RestaurantSchedule
from restaurant_availability_service.models.status_models import (
    OrderEligibility,
    RestaurantStatus,
    RestaurantStatusEntry,
)
from restaurant_availability_service.services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class AvailabilityQuery(BaseModel):
    """Inline schedule to evaluate, optionally at a fixed instant."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    restaurant: RestaurantSchedule = Field(..., description="Restaurant schedule record")
    at: datetime | None = Field(None, description="Instant to evaluate, defaults to now")


def requested_locale(locale: str | None, accept_language: str | None) -> str | None:
    """Pick the locale from the query string, falling back to Accept-Language."""
    return locale or parse_accept_language(accept_language)


def create_app(
    availability_service: AvailabilityService,
    api_keys: list[str],
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        availability_service: Service for resolving restaurant availability
        api_keys: List of valid API keys for the admin endpoints

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Restaurant Availability API",
        description="Open/closed status and order eligibility for restaurants",
        version="1.0.0",
    )

    app.state.availability_service = availability_service
    app.state.api_key_validator = APIKeyValidator(api_keys=api_keys)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.get(
        "/restaurants/open",
        response_model=list[RestaurantStatusEntry],
        response_model_exclude_none=True,
        tags=["Restaurant Status"],
    )
    async def list_open_restaurants(
        locale: str | None = None,
        accept_language: str | None = Header(None),
    ) -> list[RestaurantStatusEntry]:
        """List restaurants that are open right now.

        Raises:
            HTTPException: 502 if the platform listing could not be loaded
        """
        service: AvailabilityService = app.state.availability_service
        entries = await service.list_open_restaurants(
            locale=requested_locale(locale, accept_language)
        )
        if entries is None:
            raise HTTPException(status_code=502, detail="Restaurant listing unavailable")
        return entries

    @app.get(
        "/restaurants/{restaurant_id}/status",
        response_model=RestaurantStatus,
        response_model_exclude_none=True,
        tags=["Restaurant Status"],
    )
    async def get_restaurant_status(
        restaurant_id: str,
        locale: str | None = None,
        accept_language: str | None = Header(None),
    ) -> RestaurantStatus:
        """Get the current status of a restaurant.

        Raises:
            HTTPException: 404 if the restaurant could not be loaded
        """
        service: AvailabilityService = app.state.availability_service
        status = await service.get_restaurant_status(
            restaurant_id, locale=requested_locale(locale, accept_language)
        )
        if status is None:
            raise HTTPException(status_code=404, detail=f"Restaurant {restaurant_id} not found")
        return status

    @app.get(
        "/restaurants/{restaurant_id}/order-eligibility",
        response_model=OrderEligibility,
        response_model_exclude_none=True,
        tags=["Order Eligibility"],
    )
    async def get_order_eligibility(
        restaurant_id: str,
        locale: str | None = None,
        accept_language: str | None = Header(None),
    ) -> OrderEligibility:
        """Check whether a new order may be placed at a restaurant now.

        Raises:
            HTTPException: 404 if the restaurant could not be loaded
        """
        service: AvailabilityService = app.state.availability_service
        eligibility = await service.get_restaurant_order_eligibility(
            restaurant_id, locale=requested_locale(locale, accept_language)
        )
        if eligibility is None:
            raise HTTPException(status_code=404, detail=f"Restaurant {restaurant_id} not found")
        return eligibility

    @app.post(
        "/availability/status",
        response_model=RestaurantStatus,
        response_model_exclude_none=True,
        tags=["Restaurant Status"],
    )
    async def evaluate_status(
        query: AvailabilityQuery,
        locale: str | None = None,
        accept_language: str | None = Header(None),
    ) -> RestaurantStatus:
        """Evaluate the status of an inline restaurant schedule."""
        service: AvailabilityService = app.state.availability_service
        return service.get_status(
            query.restaurant, locale=requested_locale(locale, accept_language), at=query.at
        )

    @app.post(
        "/availability/order-eligibility",
        response_model=OrderEligibility,
        response_model_exclude_none=True,
        tags=["Order Eligibility"],
    )
    async def evaluate_order_eligibility(
        query: AvailabilityQuery,
        locale: str | None = None,
        accept_language: str | None = Header(None),
    ) -> OrderEligibility:
        """Evaluate order eligibility for an inline restaurant schedule."""
        service: AvailabilityService = app.state.availability_service
        return service.get_order_eligibility(
            query.restaurant, locale=requested_locale(locale, accept_language), at=query.at
        )

    @app.get("/admin/restaurants/{restaurant_id}/schedule", tags=["Admin"])
    async def get_normalised_schedule(
        restaurant_id: str,
        _api_key: str = Depends(require_admin_key),
    ) -> dict[str, Any]:
        """Get a restaurant's schedule as the resolver sees it, with defaults applied.

        Raises:
            HTTPException: 404 if the restaurant could not be loaded
        """
        service: AvailabilityService = app.state.availability_service
        schedule = await service.restaurant_client.get_restaurant(restaurant_id)
        if schedule is None:
            raise HTTPException(status_code=404, detail=f"Restaurant {restaurant_id} not found")

        logger.info(f"Admin schedule lookup for restaurant {restaurant_id}")
        return schedule.to_platform_record()

    return app
