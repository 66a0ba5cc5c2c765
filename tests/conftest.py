"""Shared pytest fixtures and configuration for all tests."""

import os
from datetime import datetime

import pytest

# Entry points skip building the real application in test mode
os.environ.setdefault("ENVIRONMENT", "test")


@pytest.fixture
def mock_restaurant_id() -> str:
    """Fixture providing a standard test restaurant ID."""
    return "rest_123456"


@pytest.fixture
def wednesday_afternoon() -> datetime:
    """Fixture providing Wednesday 2024-01-17 at 14:00."""
    return datetime(2024, 1, 17, 14, 0)


@pytest.fixture
def mock_restaurant_record() -> dict:
    """Fixture providing a restaurant record as returned by the platform API."""
    return {
        "id": "rest_123456",
        "name": "Shawarma House",
        "description": "Grilled shawarma and sides",
        "image": "https://example.com/shawarma.jpg",
        "rating": "4.6",
        "reviewCount": 120,
        "deliveryTime": "30-45 min",
        "isOpen": True,
        "minimumOrder": "25.00",
        "deliveryFee": "5.00",
        "categoryId": "cat_1",
        "openingTime": "08:00",
        "closingTime": "23:00",
        "workingDays": "0,1,2,3,4,5,6",
        "isTemporarilyClosed": False,
        "temporaryCloseReason": None,
        "createdAt": "2024-01-01T00:00:00Z",
    }


@pytest.fixture
def mock_api_gateway_event() -> dict:
    """Fixture providing an API Gateway HTTP API (v2) request event."""
    return {
        "version": "2.0",
        "routeKey": "GET /health",
        "rawPath": "/health",
        "rawQueryString": "",
        "headers": {"host": "api.example.com"},
        "requestContext": {
            "http": {"method": "GET", "path": "/health", "sourceIp": "127.0.0.1"},
            "requestId": "request-id",
        },
        "isBase64Encoded": False,
    }
