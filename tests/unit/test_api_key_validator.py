"""Unit tests for API key validation."""

import pytest

from restaurant_availability_service.auth.api_key_validator import APIKeyValidator, parse_api_keys


@pytest.mark.unit
class TestAPIKeyValidator:
    """Test suite for APIKeyValidator."""

    def test_validator_initialization_with_empty_list_raises_error(self) -> None:
        """Test that initializing with empty key list raises ValueError."""
        with pytest.raises(ValueError, match="At least one API key must be provided"):
            APIKeyValidator(api_keys=[])

    def test_duplicate_keys_are_collapsed(self) -> None:
        """Test that repeated keys are stored once."""
        validator = APIKeyValidator(api_keys=["key1", "key1", "key2"])
        assert validator.api_keys == frozenset({"key1", "key2"})

    def test_validate_accepts_any_configured_key(self) -> None:
        """Test that validate accepts any of multiple valid keys."""
        validator = APIKeyValidator(api_keys=["key1", "key2", "key3"])
        assert validator.validate("key1") is True
        assert validator.validate("key3") is True
        assert validator.validate("invalid") is False

    def test_validate_returns_false_for_empty_key(self) -> None:
        """Test that validate returns False for empty string."""
        validator = APIKeyValidator(api_keys=["valid-key"])
        assert validator.validate("") is False

    def test_validate_is_case_sensitive(self) -> None:
        """Test that API key validation is case-sensitive."""
        validator = APIKeyValidator(api_keys=["TestKey123"])
        assert validator.validate("TestKey123") is True
        assert validator.validate("testkey123") is False

    def test_validate_does_not_strip_whitespace(self) -> None:
        """Test that surrounding whitespace makes a key invalid."""
        validator = APIKeyValidator(api_keys=["admin-key"])
        assert validator.validate(" admin-key") is False

    def test_validate_handles_non_ascii_keys(self) -> None:
        """Test that keys are compared as bytes."""
        validator = APIKeyValidator(api_keys=["مفتاح-سري"])
        assert validator.validate("مفتاح-سري") is True
        assert validator.validate("مفتاح") is False


@pytest.mark.unit
class TestParseAPIKeys:
    """Test suite for parse_api_keys."""

    def test_splits_comma_separated_keys(self) -> None:
        """Test parsing a comma-separated list with spaces."""
        assert parse_api_keys("key1, key2 ,key3") == ["key1", "key2", "key3"]

    def test_drops_blank_entries(self) -> None:
        """Test that empty entries are ignored."""
        assert parse_api_keys("key1,, ,key2,") == ["key1", "key2"]

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing_value_returns_empty_list(self, raw: str | None) -> None:
        """Test unset configuration."""
        assert parse_api_keys(raw) == []
