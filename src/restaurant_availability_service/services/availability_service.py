"""Availability service binding the resolver to a clock, timezone and locale."""

import logging
from collections.abc import Callable
from datetime import datetime

import pytz

from restaurant_availability_service.localization.messages import (
    DEFAULT_LOCALE,
    MessageCatalog,
    get_message_catalog,
)
from restaurant_availability_service.models.schedule_models import RestaurantSchedule
from restaurant_availability_service.models.status_models import (
    OrderEligibility,
    RestaurantStatus,
    RestaurantStatusEntry,
)
from restaurant_availability_service.observability.decorators import traced
from restaurant_availability_service.observability.metrics import (
    record_order_eligibility,
    record_status_resolution,
)
from restaurant_availability_service.services.availability_resolver import (
    decide_availability,
    describe_decision,
    resolve_order_eligibility,
)
from restaurant_availability_service.services.restaurant_service_client import (
    RestaurantServiceClient,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def to_restaurant_local_time(value: datetime, timezone_name: str | None) -> datetime:
    """Convert an instant to restaurant local time.

    Naive datetimes are taken as already local. Aware datetimes are converted
    when a timezone is configured and used as given otherwise.

    Args:
        value: The instant to convert
        timezone_name: IANA timezone of the restaurants (e.g., "Asia/Riyadh")

    Returns:
        Datetime whose wall-clock fields are restaurant local time
    """
    if timezone_name is None or value.tzinfo is None:
        return value

    return value.astimezone(pytz.timezone(timezone_name))


class AvailabilityService:
    """Service for resolving restaurant availability.

    Wraps the pure availability rules with an injectable clock, the
    restaurants' timezone and a default display locale, and records metrics
    for every resolution. Restaurant records are read through the platform's
    restaurant API.
    """

    def __init__(
        self,
        restaurant_client: RestaurantServiceClient,
        clock: Clock = datetime.now,
        timezone_name: str | None = None,
        default_locale: str = DEFAULT_LOCALE,
    ) -> None:
        """Initialize the AvailabilityService.

        Args:
            restaurant_client: Client for fetching restaurant schedules
            clock: Source of the current time
            timezone_name: IANA timezone of the restaurants, None for naive local time
            default_locale: Locale used when a request does not ask for one

        Raises:
            ValueError: If timezone_name is not a known IANA timezone
        """
        if timezone_name is not None:
            try:
                pytz.timezone(timezone_name)
            except pytz.UnknownTimeZoneError as e:
                raise ValueError(f"Unknown restaurant timezone: {timezone_name}") from e

        self.restaurant_client = restaurant_client
        self.clock = clock
        self.timezone_name = timezone_name
        self.default_locale = default_locale

    def current_time(self) -> datetime:
        """Read the clock in restaurant local time."""
        return to_restaurant_local_time(self.clock(), self.timezone_name)

    def catalog_for(self, locale: str | None) -> MessageCatalog:
        """Resolve a requested locale, falling back to the service default."""
        return get_message_catalog(locale, default=self.default_locale)

    def _local_time(self, at: datetime | None) -> datetime:
        if at is None:
            return self.current_time()
        return to_restaurant_local_time(at, self.timezone_name)

    @traced("availability.get_status")
    def get_status(
        self,
        schedule: RestaurantSchedule,
        locale: str | None = None,
        at: datetime | None = None,
    ) -> RestaurantStatus:
        """Compute the status of a restaurant.

        Args:
            schedule: Restaurant schedule
            locale: Requested display locale
            at: Instant to evaluate instead of the current time

        Returns:
            RestaurantStatus for the restaurant
        """
        decision = decide_availability(schedule, self._local_time(at))
        record_status_resolution(decision.state.value, decision.status_color.value)
        return describe_decision(decision, self.catalog_for(locale))

    @traced("availability.get_order_eligibility")
    def get_order_eligibility(
        self,
        schedule: RestaurantSchedule,
        locale: str | None = None,
        at: datetime | None = None,
    ) -> OrderEligibility:
        """Decide whether an order may be placed at a restaurant.

        Args:
            schedule: Restaurant schedule
            locale: Requested display locale
            at: Instant to evaluate instead of the current time

        Returns:
            OrderEligibility for the restaurant
        """
        # Resolve in restaurant local time and the requested language
        eligibility = resolve_order_eligibility(
            schedule, now=self._local_time(at), catalog=self.catalog_for(locale)
        )
        record_order_eligibility(eligibility.can_order)

        if not eligibility.can_order:
            logger.info(f"Ordering blocked for restaurant {schedule.restaurant_id or '<inline>'}")

        return eligibility

    @traced("availability.get_restaurant_status")
    async def get_restaurant_status(
        self, restaurant_id: str, locale: str | None = None
    ) -> RestaurantStatus | None:
        """Fetch a restaurant and compute its status.

        Args:
            restaurant_id: The restaurant to check
            locale: Requested display locale

        Returns:
            RestaurantStatus, or None if the restaurant could not be loaded
        """
        schedule = await self.restaurant_client.get_restaurant(restaurant_id)
        if schedule is None:
            return None

        return self.get_status(schedule, locale=locale)

    @traced("availability.get_restaurant_order_eligibility")
    async def get_restaurant_order_eligibility(
        self, restaurant_id: str, locale: str | None = None
    ) -> OrderEligibility | None:
        """Fetch a restaurant and decide whether it accepts orders now.

        Args:
            restaurant_id: The restaurant to check
            locale: Requested display locale

        Returns:
            OrderEligibility, or None if the restaurant could not be loaded
        """
        schedule = await self.restaurant_client.get_restaurant(restaurant_id)
        if schedule is None:
            return None

        return self.get_order_eligibility(schedule, locale=locale)

    @traced("availability.list_open_restaurants")
    async def list_open_restaurants(
        self, locale: str | None = None
    ) -> list[RestaurantStatusEntry] | None:
        """List every restaurant that is open right now.

        All restaurants are evaluated against the same instant.

        Args:
            locale: Requested display locale

        Returns:
            Status entries of open restaurants, or None if the listing could not be loaded
        """
        # Fetch every restaurant from the platform
        schedules = await self.restaurant_client.list_restaurants()
        if schedules is None:
            return None

        # Evaluate all of them at one instant
        now = self.current_time()
        entries = []
        for schedule in schedules:
            if schedule.restaurant_id is None:
                logger.warning("Skipping restaurant without an id in listing")
                continue

            status = self.get_status(schedule, locale=locale, at=now)
            if status.is_open:
                entries.append(RestaurantStatusEntry(restaurant_id=schedule.restaurant_id, status=status))

        logger.info(f"{len(entries)} of {len(schedules)} restaurants open")
        return entries
