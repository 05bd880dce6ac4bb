"""
Domain models for the workout tracker.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services):
- ExerciseEntry / SetEntry: the mutable in-progress session
- WorkoutPayload / ExercisePayload / SetPayload: the persistence boundary
- WorkoutTemplate / TemplateExercise / TemplateOption: read-only templates
- ExerciseWeights: derived weight history summary
- UUIDString / DateString: validated identifier and date value types

Usage:
    >>> from domain.models import ExerciseEntry, SetEntry

    >>> bench = ExerciseEntry(
    ...     id="exercise-1",
    ...     name="Bench Press",
    ...     sets=[SetEntry(id="set-1", weight=60, reps=8)],
    ... )
"""

from domain.models.identifiers import (
    DateString,
    UUIDString,
    is_valid_date,
    is_valid_uuid,
)
from domain.models.workout import (
    ExerciseEntry,
    ExercisePayload,
    ExerciseWeights,
    SetEntry,
    SetPayload,
    TemplateExercise,
    TemplateExercises,
    TemplateOption,
    WorkoutPayload,
    WorkoutTemplate,
)

__all__ = [
    # Session state
    "ExerciseEntry",
    "SetEntry",
    # Persistence payloads
    "WorkoutPayload",
    "ExercisePayload",
    "SetPayload",
    # Templates
    "WorkoutTemplate",
    "TemplateExercise",
    "TemplateExercises",
    "TemplateOption",
    # Derived
    "ExerciseWeights",
    # Value types
    "UUIDString",
    "DateString",
    "is_valid_uuid",
    "is_valid_date",
]
