"""
Application-layer exceptions.

These exceptions are used across application, infrastructure and API layers.
Input errors are re-exported from the domain so callers have one import
location for the whole taxonomy.
"""

from enum import Enum
from typing import Optional

from domain.exceptions import (
    EmptyWorkoutError,
    InvalidDateError,
    InvalidIdentifierError,
    LastSetRemovalError,
    WorkoutError,
    WorkoutInputError,
    WorkoutValidationFailed,
)


class SaveCooldownError(WorkoutError):
    """A save was attempted before the cooldown since the previous save elapsed."""


class SaveInProgressError(WorkoutError):
    """A save was attempted while another save from the same flow is running."""


class NoTemplatesError(WorkoutInputError):
    """Storage returned no workout templates."""


class StorageErrorCategory(str, Enum):
    """Generic categories for errors reported by the storage backend."""

    PERMISSION = "permission"
    MISSING_SCHEMA = "missing_schema"
    DUPLICATE = "duplicate"
    FOREIGN_KEY = "foreign_key"
    CONSTRAINT = "constraint"
    UNKNOWN = "unknown"


class StorageError(WorkoutError):
    """
    Error raised by the storage collaborator.

    ``message`` is the generic, user-facing text. The backend's own message
    and code are kept in ``detail`` / ``code`` for operators and are never
    shown to end users outside development.
    """

    def __init__(
        self,
        message: str,
        *,
        category: StorageErrorCategory = StorageErrorCategory.UNKNOWN,
        code: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.category = category
        self.code = code
        self.detail = detail


class WeightHistoryFormatError(StorageError):
    """The weight history lookup returned rows in an unexpected shape."""


__all__ = [
    "WorkoutError",
    "WorkoutInputError",
    "InvalidIdentifierError",
    "InvalidDateError",
    "EmptyWorkoutError",
    "WorkoutValidationFailed",
    "LastSetRemovalError",
    "NoTemplatesError",
    "SaveCooldownError",
    "SaveInProgressError",
    "StorageErrorCategory",
    "StorageError",
    "WeightHistoryFormatError",
]
