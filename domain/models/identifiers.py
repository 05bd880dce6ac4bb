"""
Validated identifier and date value types.

``UUIDString`` and ``DateString`` are ``str`` subclasses that can only be
obtained through ``parse()``. A raw string never crosses the persistence
boundary as a foreign key or workout date without passing these checks.
"""

import re
from datetime import date
from typing import Any

from domain.exceptions import InvalidDateError, InvalidIdentifierError

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_valid_uuid(value: Any) -> bool:
    """Return True if ``value`` is a string shaped like a UUID."""
    if not value or not isinstance(value, str):
        return False
    return UUID_PATTERN.match(value) is not None


def is_valid_date(value: Any) -> bool:
    """Return True if ``value`` is a real calendar date in YYYY-MM-DD form."""
    if not value or not isinstance(value, str):
        return False
    if DATE_PATTERN.match(value) is None:
        return False
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return False
    return parsed.isoformat() == value


class UUIDString(str):
    """A string known to be a well-formed UUID."""

    __slots__ = ()

    def __new__(cls, value: str):
        if not is_valid_uuid(value):
            raise InvalidIdentifierError(f"Invalid UUID: {value}")
        return super().__new__(cls, value)

    @classmethod
    def parse(cls, value: Any) -> "UUIDString":
        """
        Validate and wrap a raw value.

        Raises:
            InvalidIdentifierError: If the value is not a UUID string
        """
        if isinstance(value, cls):
            return value
        return cls(value)


class DateString(str):
    """A string known to be a valid ISO calendar date (YYYY-MM-DD)."""

    __slots__ = ()

    def __new__(cls, value: str):
        if not is_valid_date(value):
            raise InvalidDateError(f"Invalid date string: {value}")
        return super().__new__(cls, value)

    @classmethod
    def parse(cls, value: Any) -> "DateString":
        """
        Validate and wrap a raw value.

        Raises:
            InvalidDateError: If the value is not a YYYY-MM-DD date
        """
        if isinstance(value, cls):
            return value
        return cls(value)

    @classmethod
    def from_date(cls, value: date) -> "DateString":
        return cls(value.isoformat())

    def to_date(self) -> date:
        return date.fromisoformat(self)
