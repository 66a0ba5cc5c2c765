"""Client for reading restaurant records from the delivery platform API."""

import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError

from restaurant_availability_service.models.schedule_models import RestaurantSchedule
from restaurant_availability_service.observability.metrics import (
    record_restaurant_lookup_failure,
    record_restaurant_service_call,
)

logger = logging.getLogger(__name__)


class RestaurantServiceClient:
    """HTTP client for fetching restaurant schedules from the platform.

    The platform exposes restaurants publicly under ``/api/restaurants``. Only
    the availability fields are kept; everything else in the record is ignored.
    """

    def __init__(self, base_url: str, api_key: str | None = None, timeout: float = 5.0) -> None:
        """Initialize the restaurant service client.

        Args:
            base_url: Base URL of the platform (e.g., "https://delivery.example.com")
            api_key: Optional API key sent as X-API-Key
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    async def _get_json(self, url: str, operation: str) -> Any:
        started = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, headers=self._headers())
                response.raise_for_status()
                return response.json()
        finally:
            record_restaurant_service_call(operation, time.perf_counter() - started)

    async def get_restaurant(self, restaurant_id: str) -> RestaurantSchedule | None:
        """Fetch the schedule of a single restaurant.

        Args:
            restaurant_id: The restaurant to fetch

        Returns:
            RestaurantSchedule, or None if the restaurant does not exist or the fetch fails
        """
        url = f"{self.base_url}/api/restaurants/{restaurant_id}"

        try:
            data = await self._get_json(url, "get_restaurant")
            schedule = RestaurantSchedule.model_validate(data)

        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.info(f"Restaurant {restaurant_id} not found")
                return None
            logger.error(f"Failed to fetch restaurant {restaurant_id}: {e}")
            record_restaurant_lookup_failure("get_restaurant")
            return None

        except (httpx.RequestError, ValueError, ValidationError) as e:
            logger.error(f"Failed to fetch restaurant {restaurant_id}: {e}")
            record_restaurant_lookup_failure("get_restaurant")
            return None

        # Some payloads omit the id of the requested record
        if schedule.restaurant_id is None:
            schedule = schedule.model_copy(update={"restaurant_id": restaurant_id})

        return schedule

    async def list_restaurants(self) -> list[RestaurantSchedule] | None:
        """Fetch the schedules of all restaurants.

        Entries that are not JSON objects or fail validation are skipped.

        Returns:
            List of RestaurantSchedule objects, empty list if none exist, or None on failure
        """
        url = f"{self.base_url}/api/restaurants"

        try:
            data = await self._get_json(url, "list_restaurants")

        except (httpx.HTTPStatusError, httpx.RequestError, ValueError) as e:
            logger.error(f"Failed to list restaurants: {e}")
            record_restaurant_lookup_failure("list_restaurants")
            return None

        # The listing must be a JSON array
        if not isinstance(data, list):
            logger.error(f"Unexpected restaurant listing payload: {type(data).__name__}")
            record_restaurant_lookup_failure("list_restaurants")
            return None

        schedules = []
        for record in data:
            if not isinstance(record, dict):
                logger.warning(f"Skipping malformed restaurant entry: {record!r}")
                continue
            try:
                schedules.append(RestaurantSchedule.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping invalid restaurant entry {record.get('id')!r}: {e}")

        return schedules
