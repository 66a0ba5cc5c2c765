"""Restaurant availability rules.

Decides whether a restaurant is open at a given instant and whether customers
may order from it. Everything here is pure: the current time is passed in and
nothing is cached, so the functions are safe to call from any number of
concurrent requests.

Rules are evaluated in a fixed order and the first match wins:

1. Temporary closure overrides everything.
2. The manual open/closed toggle overrides the schedule.
3. Days outside the restaurant's working days are closed.
4. The daily opening window decides the rest. A closing time earlier than the
   opening time means the window runs past midnight.
"""

import logging
from datetime import datetime

from restaurant_availability_service.localization.messages import (
    MessageCatalog,
    get_message_catalog,
)
from restaurant_availability_service.models.schedule_models import (
    MINUTES_PER_DAY,
    RestaurantSchedule,
    Weekday,
)
from restaurant_availability_service.models.status_models import (
    AvailabilityDecision,
    AvailabilityState,
    OrderEligibility,
    RestaurantStatus,
    StatusColor,
)

logger = logging.getLogger(__name__)

CLOSING_SOON_MINUTES = 30


def is_time_in_window(current_minutes: int, opening_minutes: int, closing_minutes: int) -> bool:
    """Check whether a time of day falls inside the opening window.

    Both ends are inclusive. When closing is not after opening the window
    wraps midnight, so equal opening and closing times count as open all day.
    """
    if closing_minutes <= opening_minutes:
        return current_minutes >= opening_minutes or current_minutes <= closing_minutes

    return opening_minutes <= current_minutes <= closing_minutes


def minutes_until(current_minutes: int, target_minutes: int) -> int:
    """Minutes from ``current_minutes`` until the next ``target_minutes``."""
    if target_minutes < current_minutes:
        return (MINUTES_PER_DAY - current_minutes) + target_minutes

    return target_minutes - current_minutes


def next_working_day(current_day: Weekday, working_days: frozenset[Weekday]) -> Weekday:
    """Find the next working day after ``current_day``.

    Scans at most a full week forward, so a restaurant working only on
    ``current_day`` reopens on the same weekday next week.
    """
    for offset in range(1, 8):
        candidate = current_day.following(offset)
        if candidate in working_days:
            return candidate

    # Unreachable for the non-empty sets RestaurantSchedule guarantees
    return min(working_days, default=Weekday.SUNDAY)


def decide_availability(schedule: RestaurantSchedule, now: datetime) -> AvailabilityDecision:
    """Evaluate the availability rules for a restaurant at one instant.

    Args:
        schedule: Restaurant schedule with defaults applied
        now: Current time in restaurant local time

    Returns:
        AvailabilityDecision describing the outcome without any message text
    """
    opening_time = schedule.opening_time
    closing_time = schedule.closing_time

    if schedule.is_temporarily_closed:
        return AvailabilityDecision(
            state=AvailabilityState.TEMPORARILY_CLOSED,
            is_open=False,
            status_color=StatusColor.RED,
            opening_time=opening_time,
            closing_time=closing_time,
            temporary_close_reason=schedule.temporary_close_reason,
        )

    if not schedule.is_open:
        return AvailabilityDecision(
            state=AvailabilityState.MANUALLY_CLOSED,
            is_open=False,
            status_color=StatusColor.RED,
            opening_time=opening_time,
            closing_time=closing_time,
        )

    current_day = Weekday.from_datetime(now)

    if current_day not in schedule.working_days:
        next_day = next_working_day(current_day, schedule.working_days)
        return AvailabilityDecision(
            state=AvailabilityState.CLOSED_TODAY,
            is_open=False,
            status_color=StatusColor.RED,
            opening_time=opening_time,
            closing_time=closing_time,
            next_open_day=next_day,
            next_open_is_tomorrow=next_day == current_day.following(),
        )

    current_minutes = now.hour * 60 + now.minute
    opening_minutes = schedule.opening_minutes
    closing_minutes = schedule.closing_minutes

    if is_time_in_window(current_minutes, opening_minutes, closing_minutes):
        remaining = minutes_until(current_minutes, closing_minutes)
        closing_soon = remaining <= CLOSING_SOON_MINUTES
        return AvailabilityDecision(
            state=AvailabilityState.CLOSING_SOON if closing_soon else AvailabilityState.OPEN,
            is_open=True,
            status_color=StatusColor.YELLOW if closing_soon else StatusColor.GREEN,
            opening_time=opening_time,
            closing_time=closing_time,
            minutes_until_close=remaining,
        )

    if current_minutes < opening_minutes:
        return AvailabilityDecision(
            state=AvailabilityState.OPENS_LATER_TODAY,
            is_open=False,
            status_color=StatusColor.RED,
            opening_time=opening_time,
            closing_time=closing_time,
            next_open_day=current_day,
        )

    next_day = next_working_day(current_day, schedule.working_days)
    return AvailabilityDecision(
        state=AvailabilityState.OPENS_NEXT_WORKING_DAY,
        is_open=False,
        status_color=StatusColor.RED,
        opening_time=opening_time,
        closing_time=closing_time,
        next_open_day=next_day,
        next_open_is_tomorrow=next_day == current_day.following(),
    )


def describe_decision(decision: AvailabilityDecision, catalog: MessageCatalog) -> RestaurantStatus:
    """Render a decision as a customer-facing status.

    Args:
        decision: Outcome of ``decide_availability``
        catalog: Message catalog for the display locale

    Returns:
        RestaurantStatus with localised message and hints
    """
    state = decision.state
    opening_time = decision.opening_time

    if state is AvailabilityState.TEMPORARILY_CLOSED:
        return RestaurantStatus(
            is_open=False,
            message=decision.temporary_close_reason or catalog.temporarily_closed,
            status_color=decision.status_color,
        )

    if state is AvailabilityState.MANUALLY_CLOSED:
        return RestaurantStatus(
            is_open=False,
            message=catalog.closed,
            status_color=decision.status_color,
        )

    if state in (AvailabilityState.OPEN, AvailabilityState.CLOSING_SOON):
        template = catalog.closing_soon if state is AvailabilityState.CLOSING_SOON else catalog.open_until
        return RestaurantStatus(
            is_open=True,
            close_time=decision.closing_time,
            message=template.format(time=decision.closing_time),
            status_color=decision.status_color,
        )

    if state is AvailabilityState.OPENS_LATER_TODAY:
        return RestaurantStatus(
            is_open=False,
            next_open_time=catalog.next_open_time.format(day=catalog.today, time=opening_time),
            message=catalog.opens_later_today.format(time=opening_time),
            status_color=decision.status_color,
        )

    next_day = decision.next_open_day if decision.next_open_day is not None else Weekday.SUNDAY

    if state is AvailabilityState.CLOSED_TODAY:
        # Closed-today notices always name the day, even when it is tomorrow
        day_label = message_day = catalog.day_name(next_day)
        template = catalog.closed_today
    elif decision.next_open_is_tomorrow:
        day_label = catalog.tomorrow
        message_day = catalog.tomorrow_in_message
        template = catalog.opens_on_day
    else:
        day_label = message_day = catalog.day_name(next_day)
        template = catalog.opens_on_day

    return RestaurantStatus(
        is_open=False,
        next_open_time=catalog.next_open_time.format(day=day_label, time=opening_time),
        message=template.format(day=message_day, time=opening_time),
        status_color=decision.status_color,
    )


def resolve_status(
    schedule: RestaurantSchedule,
    now: datetime | None = None,
    catalog: MessageCatalog | None = None,
) -> RestaurantStatus:
    """Compute the current status of a restaurant.

    Args:
        schedule: Restaurant schedule with defaults applied
        now: Current time in restaurant local time (defaults to the system clock)
        catalog: Message catalog (defaults to the platform display locale)

    Returns:
        RestaurantStatus for the restaurant at ``now``
    """
    if now is None:
        now = datetime.now()
    if catalog is None:
        catalog = get_message_catalog()

    decision = decide_availability(schedule, now)
    logger.debug(
        f"Restaurant {schedule.restaurant_id or '<inline>'} resolved to {decision.state.value} "
        f"at {now.isoformat()}"
    )
    return describe_decision(decision, catalog)


def resolve_order_eligibility(
    schedule: RestaurantSchedule,
    now: datetime | None = None,
    catalog: MessageCatalog | None = None,
) -> OrderEligibility:
    """Decide whether a new order may be placed at a restaurant.

    Args:
        schedule: Restaurant schedule with defaults applied
        now: Current time in restaurant local time (defaults to the system clock)
        catalog: Message catalog (defaults to the platform display locale)

    Returns:
        OrderEligibility with a refusal notice when the restaurant is closed
    """
    if catalog is None:
        catalog = get_message_catalog()

    status = resolve_status(schedule, now=now, catalog=catalog)
    if status.is_open:
        return OrderEligibility(can_order=True)

    return OrderEligibility(
        can_order=False,
        message=catalog.order_refused.format(message=status.message),
    )
