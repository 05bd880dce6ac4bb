"""Application services composing the use cases into a single surface."""

from application.services.workout_service import WorkoutService

__all__ = ["WorkoutService"]
