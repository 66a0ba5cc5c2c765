"""Unit tests for restaurant schedule models."""

import json
from datetime import datetime, time

import pytest

from restaurant_availability_service.models.schedule_models import (
    ALL_WEEKDAYS,
    RestaurantSchedule,
    Weekday,
    clock_time_to_minutes,
    parse_clock_time,
    parse_flag,
    parse_working_days,
)


@pytest.mark.unit
class TestWeekday:
    """Test suite for the Weekday enum."""

    def test_sunday_is_zero_and_saturday_is_six(self) -> None:
        """Test that weekdays use the platform's Sunday-first numbering."""
        assert Weekday.SUNDAY == 0
        assert Weekday.MONDAY == 1
        assert Weekday.SATURDAY == 6

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (datetime(2024, 1, 14, 12, 0), Weekday.SUNDAY),
            (datetime(2024, 1, 15, 12, 0), Weekday.MONDAY),
            (datetime(2024, 1, 17, 12, 0), Weekday.WEDNESDAY),
            (datetime(2024, 1, 20, 12, 0), Weekday.SATURDAY),
        ],
    )
    def test_from_datetime(self, value: datetime, expected: Weekday) -> None:
        """Test conversion from Python's Monday-first weekday."""
        assert Weekday.from_datetime(value) == expected

    def test_following_wraps_around_the_week(self) -> None:
        """Test that the day after Saturday is Sunday."""
        assert Weekday.SATURDAY.following() == Weekday.SUNDAY
        assert Weekday.FRIDAY.following(3) == Weekday.MONDAY
        assert Weekday.MONDAY.following(7) == Weekday.MONDAY


@pytest.mark.unit
class TestParseClockTime:
    """Test suite for time of day parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("08:00", "08:00"),
            ("8:30", "08:30"),
            ("23:59", "23:59"),
            ("22:00:00", "22:00"),
            (" 09:15 ", "09:15"),
            (time(6, 45), "06:45"),
        ],
    )
    def test_valid_values_are_normalised(self, value: object, expected: str) -> None:
        """Test that valid times are zero-padded HH:MM."""
        assert parse_clock_time(value, "12:00") == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "24:00", "12:60", "noon", "1200", 1200])
    def test_invalid_values_fall_back_to_default(self, value: object) -> None:
        """Test that missing or malformed times use the default."""
        assert parse_clock_time(value, "12:00") == "12:00"

    def test_clock_time_to_minutes(self) -> None:
        """Test conversion to minutes since midnight."""
        assert clock_time_to_minutes("00:00") == 0
        assert clock_time_to_minutes("08:30") == 510
        assert clock_time_to_minutes("23:59") == 1439


@pytest.mark.unit
class TestParseWorkingDays:
    """Test suite for working day parsing."""

    def test_comma_separated_string(self) -> None:
        """Test parsing the platform's comma-separated form."""
        assert parse_working_days("5,6") == {Weekday.FRIDAY, Weekday.SATURDAY}

    def test_whitespace_is_ignored(self) -> None:
        """Test that tokens are trimmed."""
        assert parse_working_days(" 1, 3 ,5 ") == {Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY}

    def test_list_of_integers(self) -> None:
        """Test parsing a list of integers."""
        assert parse_working_days([0, 6]) == {Weekday.SUNDAY, Weekday.SATURDAY}

    def test_out_of_range_and_non_numeric_entries_are_skipped(self) -> None:
        """Test that invalid entries are dropped while valid ones are kept."""
        assert parse_working_days("1,x,9,-1,3") == {Weekday.MONDAY, Weekday.WEDNESDAY}

    @pytest.mark.parametrize("value", [None, "", ",,", "x,y", [], "7,8"])
    def test_missing_or_unparseable_defaults_to_every_day(self, value: object) -> None:
        """Test that nothing valid means every day is a working day."""
        assert parse_working_days(value) == ALL_WEEKDAYS

    @pytest.mark.parametrize("value", [float("inf"), [float("inf")], [float("-inf"), float("nan")]])
    def test_non_finite_numbers_default_to_every_day(self, value: object) -> None:
        """Test that infinities from JSON such as 1e400 never raise."""
        assert parse_working_days(value) == ALL_WEEKDAYS

    def test_only_whole_numbers_name_days(self) -> None:
        """Test that floats and bools are skipped next to valid entries."""
        assert parse_working_days([2.0, True, 1e400, 4, "5"]) == {Weekday.THURSDAY, Weekday.FRIDAY}

    def test_schedule_with_overflowing_working_days_from_json(self) -> None:
        """Test validating a decoded record whose working days overflow int."""
        schedule = RestaurantSchedule.model_validate(json.loads('{"id": 7, "workingDays": [1e400]}'))

        assert schedule.working_days == ALL_WEEKDAYS


@pytest.mark.unit
class TestParseFlag:
    """Test suite for boolean flag parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(True, True), (False, False), (1, True), (0, False), ("true", True), ("FALSE", False)],
    )
    def test_recognised_values(self, value: object, expected: bool) -> None:
        """Test that common boolean encodings are understood."""
        assert parse_flag(value, default=not expected) is expected

    def test_unrecognised_value_uses_default(self) -> None:
        """Test that garbage falls back to the default."""
        assert parse_flag("maybe", default=True) is True
        assert parse_flag(5, default=False) is False


@pytest.mark.unit
class TestRestaurantSchedule:
    """Test suite for RestaurantSchedule model."""

    def test_defaults(self) -> None:
        """Test that an empty record gets the platform defaults."""
        schedule = RestaurantSchedule()

        assert schedule.restaurant_id is None
        assert schedule.is_open is True
        assert schedule.is_temporarily_closed is False
        assert schedule.temporary_close_reason is None
        assert schedule.opening_time == "08:00"
        assert schedule.closing_time == "23:00"
        assert schedule.working_days == ALL_WEEKDAYS

    def test_parses_platform_record(self, mock_restaurant_record: dict) -> None:
        """Test validation of a full camelCase platform record."""
        record = {**mock_restaurant_record, "workingDays": "5,6", "closingTime": "02:00"}

        schedule = RestaurantSchedule.model_validate(record)

        assert schedule.restaurant_id == "rest_123456"
        assert schedule.closing_time == "02:00"
        assert schedule.working_days == {Weekday.FRIDAY, Weekday.SATURDAY}
        assert schedule.is_overnight is True

    def test_accepts_snake_case_names(self) -> None:
        """Test construction with Python field names."""
        schedule = RestaurantSchedule(
            restaurant_id="rest_1",
            is_temporarily_closed=True,
            temporary_close_reason="Out of bread",
            working_days="1,2",
        )

        assert schedule.is_temporarily_closed is True
        assert schedule.temporary_close_reason == "Out of bread"
        assert schedule.working_days == {Weekday.MONDAY, Weekday.TUESDAY}

    def test_null_fields_use_defaults(self) -> None:
        """Test that explicit nulls on optional fields never raise."""
        schedule = RestaurantSchedule.model_validate(
            {
                "openingTime": None,
                "closingTime": None,
                "workingDays": None,
                "isTemporarilyClosed": None,
                "temporaryCloseReason": "   ",
            }
        )

        assert schedule.opening_time == "08:00"
        assert schedule.closing_time == "23:00"
        assert schedule.working_days == ALL_WEEKDAYS
        assert schedule.is_temporarily_closed is False
        assert schedule.temporary_close_reason is None

    def test_explicit_null_open_toggle_means_closed(self) -> None:
        """Test that a null isOpen is treated as closed, while a missing one is open."""
        assert RestaurantSchedule.model_validate({"isOpen": None}).is_open is False
        assert RestaurantSchedule.model_validate({}).is_open is True

    def test_numeric_id_is_coerced_to_string(self) -> None:
        """Test that numeric identifiers are accepted."""
        assert RestaurantSchedule.model_validate({"id": 42}).restaurant_id == "42"

    def test_minutes_properties(self) -> None:
        """Test opening and closing minutes since midnight."""
        schedule = RestaurantSchedule(opening_time="22:00", closing_time="02:00")

        assert schedule.opening_minutes == 1320
        assert schedule.closing_minutes == 120
        assert schedule.is_overnight is True

    def test_schedule_is_immutable(self) -> None:
        """Test that schedules cannot be mutated after validation."""
        schedule = RestaurantSchedule()

        with pytest.raises(ValueError):
            schedule.is_open = False  # type: ignore[misc]

    def test_to_platform_record(self) -> None:
        """Test conversion back to the platform's record format."""
        schedule = RestaurantSchedule(restaurant_id="rest_1", opening_time="9:00", working_days=[6, 5])

        record = schedule.to_platform_record()

        assert record == {
            "id": "rest_1",
            "isOpen": True,
            "isTemporarilyClosed": False,
            "temporaryCloseReason": None,
            "openingTime": "09:00",
            "closingTime": "23:00",
            "workingDays": "5,6",
        }
