"""
Workout Schemas.

Request and response models for the template, workout and weight history
routes. Set weights and reps are accepted as sent (numbers, numeric strings
or null) and judged by the validation engine rather than by pydantic, so a
bad value produces a per-set validation message instead of a 422.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from domain.models import (
    ExerciseEntry,
    ExerciseWeights,
    SetEntry,
    TemplateExercises,
)
from domain.validation import WorkoutValidationError


# =============================================================================
# Session exercises
# =============================================================================


class SetModel(BaseModel):
    """A set as entered in the session."""
    id: str
    weight: Any = 0
    reps: Any = 0
    done: bool = False

    def to_entry(self) -> SetEntry:
        return SetEntry(id=self.id, weight=self.weight, reps=self.reps, done=self.done)


class ExerciseModel(BaseModel):
    """An exercise with its ordered sets."""
    id: str
    name: str
    sets: List[SetModel] = Field(default_factory=list)

    def to_entry(self) -> ExerciseEntry:
        return ExerciseEntry(
            id=self.id,
            name=self.name,
            sets=[set_model.to_entry() for set_model in self.sets],
        )

    @classmethod
    def from_entry(cls, entry: ExerciseEntry) -> "ExerciseModel":
        return cls(
            id=entry.id,
            name=entry.name,
            sets=[
                SetModel(id=s.id, weight=s.weight, reps=s.reps, done=s.done)
                for s in entry.sets
            ],
        )


# =============================================================================
# Templates
# =============================================================================


class TemplateOptionResponse(BaseModel):
    id: str
    label: str


class TemplateExercisesResponse(BaseModel):
    """Exercises seeded from a template, ready to become a session."""
    exercises: List[ExerciseModel]
    template_exercise_map: Dict[str, str]

    @classmethod
    def from_domain(cls, seeded: TemplateExercises) -> "TemplateExercisesResponse":
        return cls(
            exercises=[ExerciseModel.from_entry(e) for e in seeded.exercises],
            template_exercise_map=dict(seeded.template_exercise_map),
        )


# =============================================================================
# Validation & Save
# =============================================================================


class ValidateWorkoutRequest(BaseModel):
    exercises: List[ExerciseModel] = Field(default_factory=list)

    def to_entries(self) -> List[ExerciseEntry]:
        return [exercise.to_entry() for exercise in self.exercises]


class ValidationErrorResponse(BaseModel):
    exercise_name: str
    set_index: int
    field: str
    message: str

    @classmethod
    def from_domain(cls, error: WorkoutValidationError) -> "ValidationErrorResponse":
        return cls(**error.to_dict())


class ValidateWorkoutResponse(BaseModel):
    """Result of a dry-run validation. ``message`` is empty when valid."""
    valid: bool
    errors: List[ValidationErrorResponse]
    message: str = ""


class SaveWorkoutRequest(BaseModel):
    """Request body for POST /workouts."""
    template_id: Optional[str] = Field(
        default=None,
        description="Template the workout was started from",
    )
    exercises: List[ExerciseModel] = Field(default_factory=list)
    template_exercise_map: Dict[str, str] = Field(
        default_factory=dict,
        description="Session exercise id -> template exercise id",
    )
    date: Optional[str] = Field(
        default=None,
        description="Workout date (YYYY-MM-DD). Defaults to today (UTC).",
    )

    def to_entries(self) -> List[ExerciseEntry]:
        return [exercise.to_entry() for exercise in self.exercises]


class SaveWorkoutResponse(BaseModel):
    workout_id: str


# =============================================================================
# Weight history
# =============================================================================


class ExerciseWeightsResponse(BaseModel):
    working_weight: Optional[float] = None
    max_weight: Optional[float] = None
    last_reps: Optional[float] = None

    @classmethod
    def from_domain(cls, weights: ExerciseWeights) -> "ExerciseWeightsResponse":
        return cls(**weights.to_dict())


class LastWeightsResponse(ExerciseWeightsResponse):
    exercise_name: str


class LastWeightsBatchRequest(BaseModel):
    names: List[str] = Field(default_factory=list)


class LastWeightsBatchResponse(BaseModel):
    """Weights keyed by normalized exercise name; unknown names are absent."""
    weights: Dict[str, ExerciseWeightsResponse]
