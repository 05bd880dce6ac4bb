"""
Workout validation engine.

Enforces structural and numeric bounds on an in-progress workout and
reports every violation as a structured error. An empty result means the
workout is valid.

Rules, in order:
1. Exercise count within [0, MAX_EXERCISES]. A violation short-circuits
   and is reported as a single error for the whole workout.
2. Per exercise: name length <= EXERCISE_NAME_MAX_LENGTH.
3. Per exercise: set count within [0, MAX_SETS_PER_EXERCISE].
4. Per set (1-indexed): reps in [1, MAX_REPS], then weight in [0, MAX_WEIGHT_KG].

Errors from rules 2-4 accumulate across all exercises and sets. Rules 2 and
3 report ``set_index=0`` and ``field="weight"`` as a placeholder because the
violation does not belong to a specific set field.
"""

from dataclasses import dataclass
from typing import List, Literal, Sequence, Sized

from domain.constants import (
    EXERCISE_NAME_MAX_LENGTH,
    MAX_EXERCISES,
    MAX_REPS,
    MAX_SETS_PER_EXERCISE,
    MAX_WEIGHT_KG,
)
from domain.models.workout import ExerciseEntry, SetEntry
from domain.numbers import is_valid_number

ValidationField = Literal["weight", "reps"]


@dataclass(frozen=True)
class WorkoutValidationError:
    """A single validation violation."""

    exercise_name: str
    set_index: int
    field: ValidationField
    message: str

    def to_dict(self) -> dict:
        return {
            "exercise_name": self.exercise_name,
            "set_index": self.set_index,
            "field": self.field,
            "message": self.message,
        }


def is_valid_length(items: Sized, minimum: int = 0, maximum: int = 1000) -> bool:
    return minimum <= len(items) <= maximum


def _validate_exercise_count(exercises: Sequence[ExerciseEntry]) -> List[WorkoutValidationError]:
    if not is_valid_length(exercises, 0, MAX_EXERCISES):
        return [
            WorkoutValidationError(
                exercise_name="Workout",
                set_index=0,
                field="weight",
                message=f"Too many exercises in workout (max {MAX_EXERCISES})",
            )
        ]
    return []


def _validate_exercise_name(exercise: ExerciseEntry) -> List[WorkoutValidationError]:
    if len(exercise.name) > EXERCISE_NAME_MAX_LENGTH:
        return [
            WorkoutValidationError(
                exercise_name=exercise.name,
                set_index=0,
                field="weight",
                message=f"Exercise name too long (max {EXERCISE_NAME_MAX_LENGTH} characters)",
            )
        ]
    return []


def _validate_set_count(exercise: ExerciseEntry) -> List[WorkoutValidationError]:
    if not is_valid_length(exercise.sets, 0, MAX_SETS_PER_EXERCISE):
        return [
            WorkoutValidationError(
                exercise_name=exercise.name,
                set_index=0,
                field="weight",
                message=f"Too many sets in exercise (max {MAX_SETS_PER_EXERCISE})",
            )
        ]
    return []


def _validate_set(set_entry: SetEntry, exercise_name: str, index: int) -> List[WorkoutValidationError]:
    errors: List[WorkoutValidationError] = []

    if not is_valid_number(set_entry.reps, 1, MAX_REPS):
        errors.append(
            WorkoutValidationError(
                exercise_name=exercise_name,
                set_index=index + 1,
                field="reps",
                message=f"reps must be between 1 and {MAX_REPS}",
            )
        )

    if not is_valid_number(set_entry.weight, 0, MAX_WEIGHT_KG):
        errors.append(
            WorkoutValidationError(
                exercise_name=exercise_name,
                set_index=index + 1,
                field="weight",
                message=f"weight must be between 0 and {MAX_WEIGHT_KG}",
            )
        )

    return errors


def validate_workout(exercises: Sequence[ExerciseEntry]) -> List[WorkoutValidationError]:
    """
    Validate workout data before saving.

    Args:
        exercises: Session exercises in display order

    Returns:
        List of validation errors (empty if valid)
    """
    errors = _validate_exercise_count(exercises)
    if errors:
        return errors

    for exercise in exercises:
        errors.extend(_validate_exercise_name(exercise))
        errors.extend(_validate_set_count(exercise))
        for index, set_entry in enumerate(exercise.sets):
            errors.extend(_validate_set(set_entry, exercise.name, index))

    return errors


def format_validation_errors(errors: Sequence[WorkoutValidationError]) -> str:
    """Format validation errors as one ``"<name> — Set <n>: <message>"`` line each."""
    return "\n".join(
        f"{error.exercise_name} — Set {error.set_index}: {error.message}"
        for error in errors
    )
