"""API key validation for admin endpoints.

Admin keys are configured as a comma-separated list and compared in constant
time against the X-API-Key header.
"""

import hmac


class APIKeyValidator:
    """Validates API keys for admin endpoint authentication."""

    def __init__(self, api_keys: list[str]) -> None:
        """Initialize validator with list of valid API keys.

        Args:
            api_keys: List of valid API key strings

        Raises:
            ValueError: If api_keys list is empty
        """
        if not api_keys:
            raise ValueError("At least one API key must be provided")

        self.api_keys = frozenset(api_keys)

    def validate(self, api_key: str) -> bool:
        """Validate an API key.

        Args:
            api_key: The API key to validate

        Returns:
            bool: True if valid, False otherwise
        """
        if not api_key:
            return False

        candidate = api_key.encode()
        # Check every key so timing does not reveal which one matched
        matched = False
        for key in self.api_keys:
            matched |= hmac.compare_digest(candidate, key.encode())
        return matched


def parse_api_keys(raw_keys: str | None) -> list[str]:
    """Split a comma-separated key list, dropping blanks and surrounding spaces."""
    if not raw_keys:
        return []
    return [key.strip() for key in raw_keys.split(",") if key.strip()]
