"""Restaurant schedule models.

These models represent the availability-related subset of a restaurant record
as stored by the delivery platform. Records arrive with camelCase keys from the
platform API and are normalised here so the resolver never has to deal with
missing or malformed values.
"""

import logging
import re
from collections.abc import Iterable
from datetime import datetime, time
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

DEFAULT_OPENING_TIME = "08:00"
DEFAULT_CLOSING_TIME = "23:00"

MINUTES_PER_DAY = 24 * 60

_CLOCK_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


class Weekday(IntEnum):
    """Day of week using the platform's numbering (0=Sunday, 6=Saturday).

    Note this differs from ``date.weekday()``, where Monday is 0.
    """

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def from_datetime(cls, value: datetime) -> "Weekday":
        """Get the platform weekday of a datetime.

        Args:
            value: Datetime in restaurant local time

        Returns:
            Weekday: Day of week with Sunday as 0
        """
        return cls((value.weekday() + 1) % 7)

    def following(self, days: int = 1) -> "Weekday":
        """Return the weekday ``days`` after this one, wrapping around the week."""
        return Weekday((self.value + days) % 7)


ALL_WEEKDAYS: frozenset[Weekday] = frozenset(Weekday)


def parse_clock_time(value: Any, default: str) -> str:
    """Normalise a time of day to zero-padded ``HH:MM``.

    Accepts ``H:MM``, ``HH:MM`` and ``HH:MM:SS`` strings as well as
    ``datetime.time`` values. Seconds are dropped.

    Args:
        value: Raw value from the restaurant record
        default: Value to use when ``value`` is missing or malformed

    Returns:
        str: Normalised ``HH:MM`` string
    """
    if isinstance(value, time):
        return value.strftime("%H:%M")

    if value is None or (isinstance(value, str) and not value.strip()):
        return default

    match = _CLOCK_TIME_PATTERN.match(str(value).strip())
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        if 0 <= hours <= 23 and 0 <= minutes <= 59:
            return f"{hours:02d}:{minutes:02d}"

    logger.warning(f"Invalid time of day {value!r}, falling back to {default}")
    return default


def clock_time_to_minutes(value: str) -> int:
    """Convert a normalised ``HH:MM`` string to minutes since midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def parse_flag(value: Any, default: bool) -> bool:
    """Coerce a boolean flag from the restaurant record.

    Args:
        value: Raw flag value (bool, 0/1 or a string such as "true")
        default: Value to use when ``value`` cannot be interpreted

    Returns:
        bool: Parsed flag
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False

    logger.warning(f"Invalid flag value {value!r}, falling back to {default}")
    return default


def parse_working_days(value: Any) -> frozenset[Weekday]:
    """Parse the working days of a restaurant.

    The platform stores working days as a comma-separated string of integers
    ("0,1,2,3,4,5,6"). Lists of integers are accepted too. Entries that are not
    whole numbers from 0 to 6 are skipped; if nothing valid remains every day
    is a working day.

    Args:
        value: Raw working days value

    Returns:
        frozenset[Weekday]: Non-empty set of working days
    """
    if value is None:
        return ALL_WEEKDAYS

    if isinstance(value, str):
        tokens: Iterable[Any] = value.split(",")
    elif isinstance(value, Iterable):
        tokens = value
    else:
        tokens = [value]

    days: set[Weekday] = set()
    invalid: list[Any] = []
    for token in tokens:
        raw = token.strip() if isinstance(token, str) else token
        if raw == "":
            continue
        # Only whole numbers name a day; floats, bools and signed strings do not
        is_whole_number = isinstance(raw, int) or (isinstance(raw, str) and raw.isdigit())
        if isinstance(raw, bool) or not is_whole_number:
            invalid.append(token)
            continue
        try:
            days.add(Weekday(int(raw)))
        except ValueError:
            invalid.append(token)

    if invalid:
        logger.warning(f"Ignoring invalid working day entries: {invalid!r}")

    return frozenset(days) if days else ALL_WEEKDAYS


class RestaurantSchedule(BaseModel):
    """Availability fields of a restaurant record.

    Construct with snake_case names in Python or validate the platform's
    camelCase JSON directly. Unrelated restaurant fields are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    restaurant_id: str | None = Field(None, alias="id", description="Restaurant identifier")
    is_open: bool = Field(default=True, description="Manual open/closed toggle")
    is_temporarily_closed: bool = Field(
        default=False, description="Manual temporary closure override"
    )
    temporary_close_reason: str | None = Field(
        None, description="Reason shown to customers while temporarily closed"
    )
    opening_time: str = Field(default=DEFAULT_OPENING_TIME, description="Daily opening time")
    closing_time: str = Field(default=DEFAULT_CLOSING_TIME, description="Daily closing time")
    working_days: frozenset[Weekday] = Field(
        default=ALL_WEEKDAYS, description="Days of the week the schedule applies to"
    )

    @field_validator("restaurant_id", mode="before")
    @classmethod
    def coerce_restaurant_id(cls, v: Any) -> str | None:
        """Accept numeric and UUID identifiers."""
        return None if v is None else str(v)

    @field_validator("is_open", mode="before")
    @classmethod
    def coerce_is_open(cls, v: Any) -> bool:
        """Treat an explicit null toggle as closed."""
        if v is None:
            return False
        return parse_flag(v, default=True)

    @field_validator("is_temporarily_closed", mode="before")
    @classmethod
    def coerce_is_temporarily_closed(cls, v: Any) -> bool:
        """Treat an explicit null override as not closed."""
        if v is None:
            return False
        return parse_flag(v, default=False)

    @field_validator("temporary_close_reason", mode="before")
    @classmethod
    def blank_reason_is_none(cls, v: Any) -> str | None:
        """Drop empty reasons so the generic message is used instead."""
        if v is None:
            return None
        reason = str(v).strip()
        return reason or None

    @field_validator("opening_time", mode="before")
    @classmethod
    def normalise_opening_time(cls, v: Any) -> str:
        """Normalise the opening time, defaulting to 08:00."""
        return parse_clock_time(v, DEFAULT_OPENING_TIME)

    @field_validator("closing_time", mode="before")
    @classmethod
    def normalise_closing_time(cls, v: Any) -> str:
        """Normalise the closing time, defaulting to 23:00."""
        return parse_clock_time(v, DEFAULT_CLOSING_TIME)

    @field_validator("working_days", mode="before")
    @classmethod
    def normalise_working_days(cls, v: Any) -> frozenset[Weekday]:
        """Parse working days, defaulting to every day."""
        return parse_working_days(v)

    @property
    def opening_minutes(self) -> int:
        """Opening time as minutes since midnight."""
        return clock_time_to_minutes(self.opening_time)

    @property
    def closing_minutes(self) -> int:
        """Closing time as minutes since midnight."""
        return clock_time_to_minutes(self.closing_time)

    @property
    def is_overnight(self) -> bool:
        """Whether the daily window wraps past midnight."""
        return self.closing_minutes < self.opening_minutes

    def to_platform_record(self) -> dict[str, Any]:
        """Convert back to the platform's camelCase record format.

        Returns:
            dict: Record with working days in comma-separated form
        """
        record: dict[str, Any] = {
            "isOpen": self.is_open,
            "isTemporarilyClosed": self.is_temporarily_closed,
            "temporaryCloseReason": self.temporary_close_reason,
            "openingTime": self.opening_time,
            "closingTime": self.closing_time,
            "workingDays": ",".join(str(day.value) for day in sorted(self.working_days)),
        }

        if self.restaurant_id is not None:
            record["id"] = self.restaurant_id

        return record
