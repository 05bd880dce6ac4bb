"""
Supabase implementation of WorkoutRepository.

The default path calls the ``save_workout_atomic`` database function, which
inserts the workout, its exercises and their sets in one transaction.

With ``atomic=False`` the rows are inserted one request at a time. That
path is for databases without the function: a failure part way through
leaves the rows written so far in place.
"""
import logging
from typing import Any, Dict, List

from supabase import Client

from application.exceptions import StorageError
from domain.models import ExercisePayload, WorkoutPayload
from domain.normalize import normalize_exercise_name
from infrastructure.db.errors import raise_storage_error

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save workout."


class SupabaseWorkoutRepository:
    """
    Supabase implementation of WorkoutRepository protocol.

    Usage:
        repo = SupabaseWorkoutRepository(client)
        workout_id = repo.save_workout(payload)
    """

    def __init__(self, client: Client, *, atomic: bool = True):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            atomic: Save through the transactional database function
        """
        self._client = client
        self._atomic = atomic

    def save_workout(self, payload: WorkoutPayload) -> Any:
        if self._atomic:
            return self._save_atomic(payload)
        return self._save_sequential(payload)

    @staticmethod
    def _exercise_params(exercise: ExercisePayload) -> Dict[str, Any]:
        return {
            "name": normalize_exercise_name(exercise.name),
            "templateExerciseId": (
                str(exercise.template_exercise_id) if exercise.template_exercise_id else None
            ),
            "sets": [set_payload.to_dict() for set_payload in exercise.sets],
        }

    def _save_atomic(self, payload: WorkoutPayload) -> Any:
        params = {
            "p_date": str(payload.date),
            "p_template_id": str(payload.template_id) if payload.template_id else None,
            "p_exercises": [self._exercise_params(exercise) for exercise in payload.exercises],
        }

        try:
            result = self._client.rpc("save_workout_atomic", params).execute()
        except Exception as e:
            raise_storage_error(e, SAVE_FAILED_MESSAGE)

        if not result.data:
            logger.error("save_workout_atomic returned no workout id")
            raise StorageError(SAVE_FAILED_MESSAGE)

        logger.info(f"Saved workout {result.data} with {len(payload.exercises)} exercise(s)")
        return result.data

    def _save_sequential(self, payload: WorkoutPayload) -> Any:
        workout_row: Dict[str, Any] = {"date": str(payload.date)}
        if payload.template_id:
            workout_row["template_id"] = str(payload.template_id)

        workout_id = self._insert_returning_id("workouts", workout_row, SAVE_FAILED_MESSAGE)

        for exercise in payload.exercises:
            if not exercise.sets:
                continue

            exercise_row: Dict[str, Any] = {
                "workout_id": workout_id,
                "name": normalize_exercise_name(exercise.name),
            }
            if exercise.template_exercise_id:
                exercise_row["template_exercise_id"] = str(exercise.template_exercise_id)

            exercise_id = self._insert_returning_id(
                "exercises", exercise_row, f"Failed to create exercise: {exercise.name}."
            )

            set_rows: List[Dict[str, Any]] = [
                {"exercise_id": exercise_id, **set_payload.to_dict()}
                for set_payload in exercise.sets
            ]
            try:
                self._client.table("sets").insert(set_rows).execute()
            except Exception as e:
                logger.warning(f"Workout {workout_id} partially saved")
                raise_storage_error(e, f"Failed to create sets for exercise: {exercise.name}.")

        logger.info(f"Saved workout {workout_id} row by row")
        return workout_id

    def _insert_returning_id(self, table: str, row: Dict[str, Any], failure_message: str) -> Any:
        try:
            result = self._client.table(table).insert(row).execute()
        except Exception as e:
            raise_storage_error(e, failure_message)

        if not result.data:
            logger.error(f"Insert into {table} returned no rows")
            raise StorageError(failure_message)
        return result.data[0].get("id")
