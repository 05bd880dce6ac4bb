"""
Domain exceptions.

Input validation failures raised before any I/O happens. All of them carry
a human-readable message that is safe to show to the user as-is.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from domain.validation import WorkoutValidationError


class WorkoutError(Exception):
    """Base class for every error raised by the workout core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class WorkoutInputError(WorkoutError, ValueError):
    """Input was rejected before reaching storage. Never retried."""


class InvalidIdentifierError(WorkoutInputError):
    """A value that should be a UUID is not one."""


class InvalidDateError(WorkoutInputError):
    """A value that should be a YYYY-MM-DD calendar date is not one."""


class EmptyWorkoutError(WorkoutInputError):
    """The workout has no exercises or no sets at all."""


class WorkoutValidationFailed(WorkoutInputError):
    """The validation engine reported one or more violations."""

    def __init__(
        self,
        message: str,
        errors: Optional[List["WorkoutValidationError"]] = None,
    ):
        super().__init__(message)
        self.errors = list(errors or [])


class LastSetRemovalError(WorkoutInputError):
    """Attempted to remove the only remaining set of an exercise."""
