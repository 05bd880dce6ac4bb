"""
Exercises router for weight history lookups.

This router contains endpoints for:
- GET /exercises/last-weights?name= - Last weights for one exercise
- POST /exercises/last-weights - Last weights for many exercises at once
"""

import logging

from fastapi import APIRouter, Depends, Query

from api.deps import get_workout_service, require_site_access
from api.schemas import (
    ExerciseWeightsResponse,
    LastWeightsBatchRequest,
    LastWeightsBatchResponse,
    LastWeightsResponse,
)
from application.services import WorkoutService
from domain.normalize import normalize_exercise_name

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/exercises",
    tags=["Exercises"],
    dependencies=[Depends(require_site_access)],
)


@router.get("/last-weights", response_model=LastWeightsResponse)
def get_last_weights(
    name: str = Query(..., description="Exercise name (normalized before lookup)"),
    service: WorkoutService = Depends(get_workout_service),
):
    """
    Get the working weight, max weight and last reps for one exercise.

    All values are null when the exercise has no history.
    """
    weights = service.get_last_weights(name)
    return LastWeightsResponse(
        exercise_name=normalize_exercise_name(name),
        **weights.to_dict(),
    )


@router.post("/last-weights", response_model=LastWeightsBatchResponse)
def get_last_weights_batch(
    request: LastWeightsBatchRequest,
    service: WorkoutService = Depends(get_workout_service),
):
    """
    Get weight summaries for many exercises in one lookup.

    Results are keyed by normalized name; names without history are omitted.
    """
    by_name = service.get_last_weights_batch(request.names)
    return LastWeightsBatchResponse(
        weights={
            name: ExerciseWeightsResponse.from_domain(weights)
            for name, weights in by_name.items()
        }
    )
