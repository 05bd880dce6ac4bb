"""
Lenient numeric coercion for loosely typed session and storage values.
"""

import math
from numbers import Real
from typing import Any, Optional


def to_number(value: Any) -> Optional[float]:
    """
    Coerce a value to a finite float.

    Accepts ints, floats, bools and numeric strings (surrounding whitespace
    ignored). Returns None for anything else, including NaN and infinities.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, Real):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def to_nullable_number(value: Any) -> Optional[float]:
    """Coerce storage values; missing or non-finite values become None."""
    if value is None:
        return None
    return to_number(value)


def to_number_or_zero(value: Any) -> float:
    """Coerce a value for persistence; anything non-numeric (or zero) becomes 0."""
    number = to_number(value)
    if not number:
        return 0
    # integral values stay ints so integer columns accept them
    return int(number) if number.is_integer() else number


def is_valid_number(value: Any, minimum: float = 0, maximum: float = float(2**53 - 1)) -> bool:
    """Return True if ``value`` coerces to a finite number within ``[minimum, maximum]``."""
    number = to_number(value)
    return number is not None and minimum <= number <= maximum
