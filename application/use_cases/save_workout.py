"""
SaveWorkout Use Case.

Validates an in-progress workout and persists it as one logical write.

Every step before the repository call is a hard precondition; a failure
aborts the save before storage is touched, so a partially validated
reference is never persisted.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Mapping, Optional, Sequence

from application.exceptions import (
    EmptyWorkoutError,
    InvalidIdentifierError,
    StorageError,
    WorkoutValidationFailed,
)
from application.ports import WorkoutRepository
from domain.models import (
    DateString,
    ExerciseEntry,
    ExercisePayload,
    SetPayload,
    UUIDString,
    WorkoutPayload,
    is_valid_uuid,
)
from domain.numbers import to_number_or_zero
from domain.validation import format_validation_errors, validate_workout

logger = logging.getLogger(__name__)


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


class SaveWorkoutUseCase:
    """
    Use case for saving workouts with validation.

    Orchestrates the following workflow:
    1. Reject empty workouts (no exercises, or no sets at all)
    2. Validate template and template exercise identifiers
    3. Run the validation engine
    4. Resolve the workout date
    5. Build the persistence payload
    6. Persist via repository and validate the returned identifier

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = SaveWorkoutUseCase(workout_repo=workout_repo)
        >>> workout_id = use_case.execute(
        ...     template_id=None,
        ...     exercises=exercises,
        ...     template_exercise_map={},
        ... )
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        *,
        today: Callable[[], date] = utc_today,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            workout_repo: Repository for persisting workouts
            today: Clock used when no date is given (UTC date by default)
        """
        self._workout_repo = workout_repo
        self._today = today

    def execute(
        self,
        template_id: Optional[str],
        exercises: Sequence[ExerciseEntry],
        template_exercise_map: Mapping[str, str],
        date: Optional[str] = None,
    ) -> UUIDString:
        """
        Execute the save workout workflow.

        Args:
            template_id: Template the session was started from, if any
            exercises: Session exercises in display order
            template_exercise_map: Session exercise id -> template exercise id
            date: Optional YYYY-MM-DD date; defaults to today (UTC)

        Returns:
            The generated workout id

        Raises:
            EmptyWorkoutError: No exercises, or no exercise has a set
            InvalidIdentifierError: Malformed template / template exercise id
            WorkoutValidationFailed: The validation engine reported errors
            InvalidDateError: Malformed date
            StorageError: Persistence failed or returned a malformed id
        """
        if not exercises:
            raise EmptyWorkoutError("Cannot save workout: at least one exercise is required.")

        if not any(exercise.sets for exercise in exercises):
            raise EmptyWorkoutError("Cannot save workout: at least one set is required.")

        self._validate_ids(template_id, template_exercise_map)

        validation_errors = validate_workout(exercises)
        if validation_errors:
            logger.warning(
                "Workout validation failed with %d error(s)", len(validation_errors)
            )
            raise WorkoutValidationFailed(
                f"Cannot save workout:\n{format_validation_errors(validation_errors)}",
                validation_errors,
            )

        workout_date = DateString.parse(date if date is not None else self._today().isoformat())
        payload = self._build_payload(workout_date, template_id, exercises, template_exercise_map)

        logger.info(
            "Saving workout for %s with %d exercise(s)", workout_date, len(payload.exercises)
        )
        raw_id = self._workout_repo.save_workout(payload)

        if not isinstance(raw_id, str) or not is_valid_uuid(raw_id):
            logger.error("Storage returned a malformed workout id: %r", raw_id)
            raise StorageError("Failed to save workout.")

        workout_id = UUIDString.parse(raw_id)
        logger.info(f"Workout saved successfully: {workout_id}")
        return workout_id

    @staticmethod
    def _validate_ids(
        template_id: Optional[str],
        template_exercise_map: Mapping[str, str],
    ) -> None:
        if template_id and not is_valid_uuid(template_id):
            raise InvalidIdentifierError("Invalid template ID format.")

        for template_exercise_id in template_exercise_map.values():
            if not is_valid_uuid(template_exercise_id):
                raise InvalidIdentifierError("Invalid template exercise ID format.")

    @staticmethod
    def _build_payload(
        workout_date: DateString,
        template_id: Optional[str],
        exercises: Sequence[ExerciseEntry],
        template_exercise_map: Mapping[str, str],
    ) -> WorkoutPayload:
        exercise_payloads = []
        for exercise in exercises:
            template_exercise_id = template_exercise_map.get(exercise.id)
            exercise_payloads.append(
                ExercisePayload(
                    name=exercise.name,
                    template_exercise_id=(
                        UUIDString.parse(template_exercise_id) if template_exercise_id else None
                    ),
                    sets=[
                        SetPayload(
                            weight=to_number_or_zero(set_entry.weight),
                            reps=to_number_or_zero(set_entry.reps),
                        )
                        for set_entry in exercise.sets
                    ],
                )
            )

        return WorkoutPayload(
            date=workout_date,
            template_id=UUIDString.parse(template_id) if template_id else None,
            exercises=exercise_payloads,
        )
