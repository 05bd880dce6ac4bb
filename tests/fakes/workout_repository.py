"""
Fake Workout Repository for testing.

This module provides an in-memory implementation of WorkoutRepository
for fast, isolated testing without database dependencies.
"""
from typing import Any, Dict, List, Optional
import copy
import uuid

from domain.models import WorkoutPayload
from domain.normalize import normalize_exercise_name

_UNSET = object()


class FakeWorkoutRepository:
    """
    In-memory fake implementation of WorkoutRepository for testing.

    Stores saved workouts in a dict keyed by workout ID, recording each
    payload it receives. Can simulate failures and odd return values.

    Usage:
        repo = FakeWorkoutRepository()
        workout_id = repo.save_workout(payload)
        assert repo.call_count == 1
    """

    def __init__(self):
        """Initialize with empty storage."""
        self._workouts: Dict[str, Dict[str, Any]] = {}
        self.payloads: List[WorkoutPayload] = []
        self._failure: Optional[Exception] = None
        self._return_value: Any = _UNSET

    def reset(self) -> None:
        """Clear stored workouts, recorded calls and simulated behaviour."""
        self._workouts.clear()
        self.payloads.clear()
        self._failure = None
        self._return_value = _UNSET

    def seed(self, workouts: List[Dict[str, Any]]) -> None:
        """Seed the repository with already-saved workout dicts."""
        for workout in workouts:
            workout_id = workout.get("id") or str(uuid.uuid4())
            self._workouts[workout_id] = {**workout, "id": workout_id}

    def get_all(self) -> List[Dict[str, Any]]:
        """Get all stored workouts (test helper)."""
        return [copy.deepcopy(w) for w in self._workouts.values()]

    @property
    def call_count(self) -> int:
        return len(self.payloads)

    @property
    def last_payload(self) -> Optional[WorkoutPayload]:
        return self.payloads[-1] if self.payloads else None

    def simulate_failure(self, error: Exception) -> None:
        """Make the next saves raise ``error``."""
        self._failure = error

    def return_value(self, value: Any) -> None:
        """Make saves return ``value`` instead of a generated id."""
        self._return_value = value

    # =========================================================================
    # WorkoutRepository Protocol Methods
    # =========================================================================

    def save_workout(self, payload: WorkoutPayload) -> Any:
        """Save a workout payload to in-memory storage."""
        self.payloads.append(payload)

        if self._failure is not None:
            raise self._failure
        if self._return_value is not _UNSET:
            return self._return_value

        workout_id = str(uuid.uuid4())
        self._workouts[workout_id] = {
            "id": workout_id,
            "date": str(payload.date),
            "template_id": str(payload.template_id) if payload.template_id else None,
            "exercises": [
                {
                    "name": normalize_exercise_name(exercise.name),
                    "template_exercise_id": (
                        str(exercise.template_exercise_id)
                        if exercise.template_exercise_id else None
                    ),
                    "sets": [s.to_dict() for s in exercise.sets],
                }
                for exercise in payload.exercises
            ],
        }
        return workout_id
