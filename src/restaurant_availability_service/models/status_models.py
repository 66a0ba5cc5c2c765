"""Restaurant status and order eligibility models.

``AvailabilityDecision`` is the locale-free outcome of the availability rules.
``RestaurantStatus`` and ``OrderEligibility`` are the customer-facing shapes
built from it. None of these are persisted; they are recomputed on every call.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from restaurant_availability_service.models.schedule_models import Weekday


class StatusColor(str, Enum):
    """Traffic-light hint for rendering a restaurant's status badge."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class AvailabilityState(str, Enum):
    """Why a restaurant is open or closed right now."""

    TEMPORARILY_CLOSED = "temporarily_closed"
    MANUALLY_CLOSED = "manually_closed"
    CLOSED_TODAY = "closed_today"
    OPEN = "open"
    CLOSING_SOON = "closing_soon"
    OPENS_LATER_TODAY = "opens_later_today"
    OPENS_NEXT_WORKING_DAY = "opens_next_working_day"


@dataclass(frozen=True)
class AvailabilityDecision:
    """Outcome of evaluating a restaurant schedule at one instant.

    Attributes:
        state: Which rule decided the outcome
        is_open: Whether the restaurant accepts customers now
        status_color: Badge colour for the state
        opening_time: Normalised opening time (HH:MM)
        closing_time: Normalised closing time (HH:MM)
        next_open_day: Day the restaurant next opens, for closures that span days
        next_open_is_tomorrow: Whether next_open_day is the calendar day after today
        minutes_until_close: Minutes left before closing, only while open
        temporary_close_reason: Staff-provided reason for a temporary closure
    """

    state: AvailabilityState
    is_open: bool
    status_color: StatusColor
    opening_time: str
    closing_time: str
    next_open_day: Weekday | None = None
    next_open_is_tomorrow: bool = False
    minutes_until_close: int | None = None
    temporary_close_reason: str | None = None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RestaurantStatus(_CamelModel):
    """Current status of a restaurant as shown to customers."""

    is_open: bool = Field(..., description="Whether the restaurant is open now")
    next_open_time: str | None = Field(
        None, description="When the restaurant opens next, only set while closed"
    )
    close_time: str | None = Field(
        None, description="Configured closing time, only set while open"
    )
    message: str = Field(..., description="Localised status explanation")
    status_color: StatusColor = Field(..., description="Badge colour")


class OrderEligibility(_CamelModel):
    """Whether a new order may be placed at a restaurant right now."""

    can_order: bool = Field(..., description="True iff the restaurant is open")
    message: str | None = Field(
        None, description="Localised refusal notice, only set when ordering is blocked"
    )


class RestaurantStatusEntry(_CamelModel):
    """Status of one restaurant in a listing."""

    restaurant_id: str = Field(..., description="Restaurant identifier")
    status: RestaurantStatus = Field(..., description="Current status")
