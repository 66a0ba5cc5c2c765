"""Custom metrics for the restaurant availability service."""

from opentelemetry import metrics

meter = metrics.get_meter("availability-svc")

status_resolution_counter = meter.create_counter(
    name="restaurant_status_resolutions_total",
    description="Number of restaurant status resolutions by outcome",
    unit="1",
)

order_eligibility_counter = meter.create_counter(
    name="order_eligibility_checks_total",
    description="Number of order eligibility checks by result",
    unit="1",
)

restaurant_lookup_failure_counter = meter.create_counter(
    name="restaurant_lookup_failures_total",
    description="Number of failed restaurant lookups against the platform API",
    unit="1",
)

restaurant_service_response_time = meter.create_histogram(
    name="restaurant_service_response_time_seconds",
    description="Response time for platform restaurant API calls",
    unit="s",
)


def record_status_resolution(state: str, status_color: str) -> None:
    """Record a resolved restaurant status.

    Args:
        state: Availability state that decided the outcome (e.g., "closing_soon")
        status_color: Badge colour returned to the caller
    """
    status_resolution_counter.add(1, {"state": state, "status_color": status_color})


def record_order_eligibility(can_order: bool) -> None:
    """Record the result of an order eligibility check."""
    order_eligibility_counter.add(1, {"can_order": str(can_order).lower()})


def record_restaurant_lookup_failure(operation: str) -> None:
    """Record a failed call to the platform restaurant API.

    Args:
        operation: Client operation that failed (e.g., "get_restaurant")
    """
    restaurant_lookup_failure_counter.add(1, {"operation": operation})


def record_restaurant_service_call(operation: str, duration_seconds: float) -> None:
    """Record the duration of a platform restaurant API call.

    Args:
        operation: Client operation performed
        duration_seconds: Duration in seconds
    """
    restaurant_service_response_time.record(duration_seconds, {"operation": operation})
