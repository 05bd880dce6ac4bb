"""
Workouts router for validating and saving workouts.

This router contains endpoints for:
- /workouts/validate - Dry-run the validation engine
- /workouts - Save a workout with its exercises and sets

Saves go through the process-wide save gate: a second save within the
cooldown, or while one is running, is rejected with 429 and never reaches
storage.
"""

import logging

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from api.deps import get_save_gate, get_workout_service, require_site_access
from api.schemas import (
    SaveWorkoutRequest,
    SaveWorkoutResponse,
    ValidateWorkoutRequest,
    ValidateWorkoutResponse,
    ValidationErrorResponse,
)
from application.save_gate import SaveGate
from application.services import WorkoutService
from domain.validation import format_validation_errors, validate_workout

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Workouts"],
    dependencies=[Depends(require_site_access)],
)


@router.post("/workouts/validate", response_model=ValidateWorkoutResponse)
def validate_workout_endpoint(request: ValidateWorkoutRequest):
    """Validate a workout without saving it. Always 200; see ``valid``."""
    errors = validate_workout(request.to_entries())
    return ValidateWorkoutResponse(
        valid=not errors,
        errors=[ValidationErrorResponse.from_domain(e) for e in errors],
        message=format_validation_errors(errors),
    )


@router.post("/workouts", status_code=201, response_model=SaveWorkoutResponse)
async def save_workout_endpoint(
    request: SaveWorkoutRequest,
    service: WorkoutService = Depends(get_workout_service),
    save_gate: SaveGate = Depends(get_save_gate),
):
    """
    Save a workout.

    Delegates business logic to WorkoutService.save_workout; the save runs
    in the threadpool while the gate is held on the event loop.
    """
    with save_gate.saving():
        workout_id = await run_in_threadpool(
            service.save_workout,
            request.template_id,
            request.to_entries(),
            request.template_exercise_map,
            request.date,
        )

    logger.info(f"Workout saved: {workout_id}")
    return SaveWorkoutResponse(workout_id=str(workout_id))
