"""
Pydantic schemas for API requests and responses.

Organized by feature/domain:
- workouts: Templates, workout validation/save and weight history models
"""

from api.schemas.workouts import (
    ExerciseModel,
    ExerciseWeightsResponse,
    LastWeightsBatchRequest,
    LastWeightsBatchResponse,
    LastWeightsResponse,
    SaveWorkoutRequest,
    SaveWorkoutResponse,
    SetModel,
    TemplateExercisesResponse,
    TemplateOptionResponse,
    ValidateWorkoutRequest,
    ValidateWorkoutResponse,
    ValidationErrorResponse,
)

__all__ = [
    "ExerciseModel",
    "ExerciseWeightsResponse",
    "LastWeightsBatchRequest",
    "LastWeightsBatchResponse",
    "LastWeightsResponse",
    "SaveWorkoutRequest",
    "SaveWorkoutResponse",
    "SetModel",
    "TemplateExercisesResponse",
    "TemplateOptionResponse",
    "ValidateWorkoutRequest",
    "ValidateWorkoutResponse",
    "ValidationErrorResponse",
]
