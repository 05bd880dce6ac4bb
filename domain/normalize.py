"""
Exercise name normalization.

The same canonical form is used before writing an exercise row and before
looking one up by name, so lookups and writes always key on identical text.
"""

import re
from typing import Any

from domain.constants import SANITIZE_MAX_LENGTH

_UNSAFE_CHARS = re.compile(r"[<>]")
_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_string(value: Any, max_length: int = SANITIZE_MAX_LENGTH) -> str:
    """
    Sanitize free-text input.

    - Non-string input becomes an empty string
    - Leading/trailing whitespace is stripped
    - Length is capped at ``max_length``
    - Angle brackets are removed

    Args:
        value: Raw user-provided value
        max_length: Maximum allowed length before further processing

    Returns:
        Sanitized string
    """
    if not isinstance(value, str):
        return ""

    sanitized = value.strip()[:max_length]
    return _UNSAFE_CHARS.sub("", sanitized)


def normalize_exercise_name(name: Any) -> str:
    """
    Canonicalize an exercise name.

    Sanitizes the input, trims it and collapses internal whitespace runs
    to a single space.

    Examples:
        >>> normalize_exercise_name("  Bench   Press  ")
        'Bench Press'
        >>> normalize_exercise_name("<b>Squat</b>")
        'bSquat/b'
    """
    sanitized = sanitize_string(name)
    return _WHITESPACE_RUN.sub(" ", sanitized.strip())
