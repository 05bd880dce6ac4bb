"""
Application Use Cases for the workout tracker.

This package contains application-level use cases that orchestrate domain
logic and coordinate between ports/adapters. Use cases are the entry points
for business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return domain models, not API responses

Usage:
    from application.use_cases import SaveWorkoutUseCase

    save_use_case = SaveWorkoutUseCase(workout_repo=workout_repo)
    workout_id = save_use_case.execute(
        template_id=None,
        exercises=exercises,
        template_exercise_map={},
    )
"""

from application.use_cases.get_last_weights import GetLastWeightsUseCase
from application.use_cases.load_templates import LoadTemplatesUseCase
from application.use_cases.save_workout import SaveWorkoutUseCase

__all__ = [
    "GetLastWeightsUseCase",
    "LoadTemplatesUseCase",
    "SaveWorkoutUseCase",
]
