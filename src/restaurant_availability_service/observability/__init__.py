"""Logging, OpenTelemetry instrumentation and custom metrics."""

from restaurant_availability_service.observability.config import configure_logging, setup_observability
from restaurant_availability_service.observability.decorators import traced

__all__ = ["setup_observability", "configure_logging", "traced"]
