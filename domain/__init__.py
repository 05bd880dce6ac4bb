"""
Domain layer for the workout tracker.

Pure models, validation and aggregation logic that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    DateString,
    ExerciseEntry,
    ExerciseWeights,
    SetEntry,
    UUIDString,
    WorkoutPayload,
)
from domain.normalize import normalize_exercise_name
from domain.validation import (
    WorkoutValidationError,
    format_validation_errors,
    validate_workout,
)

__all__ = [
    "DateString",
    "ExerciseEntry",
    "ExerciseWeights",
    "SetEntry",
    "UUIDString",
    "WorkoutPayload",
    "normalize_exercise_name",
    "WorkoutValidationError",
    "format_validation_errors",
    "validate_workout",
]
