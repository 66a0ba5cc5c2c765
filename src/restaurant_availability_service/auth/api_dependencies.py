"""FastAPI dependencies for admin authentication."""

from typing import Annotated

from fastapi import Header, HTTPException, Request

from restaurant_availability_service.auth.api_key_validator import APIKeyValidator


def get_api_key_from_header(x_api_key: str | None, validator: APIKeyValidator) -> str:
    """Validate the API key taken from the X-API-Key header.

    Args:
        x_api_key: API key from the X-API-Key header
        validator: Validator holding the accepted keys

    Returns:
        str: The validated API key

    Raises:
        HTTPException: 401 if API key is missing or invalid
    """
    if not x_api_key:
        raise HTTPException(status_code=401, detail="Missing API key")

    if not validator.validate(x_api_key):
        raise HTTPException(status_code=401, detail="Invalid API key")

    return x_api_key


def require_admin_key(
    request: Request,
    x_api_key: Annotated[str | None, Header()] = None,
) -> str:
    """Dependency validating the admin key against the app's configured validator.

    Raises:
        HTTPException: 401 if API key is missing or invalid
    """
    validator: APIKeyValidator = request.app.state.api_key_validator
    return get_api_key_from_header(x_api_key=x_api_key, validator=validator)
