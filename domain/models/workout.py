"""
Workout session state and persistence payloads.

``ExerciseEntry`` / ``SetEntry`` hold the mutable in-progress session: the
exercises loaded from a template and the sets the user has entered so far.
Their numeric fields are loose (``Any``) because session state
can carry stray values; the validation engine and payload coercion deal with
them before anything reaches storage.

``WorkoutPayload`` and friends are the persistence boundary. They are frozen
and are built fresh for every save.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from domain.models.identifiers import DateString, UUIDString


@dataclass
class SetEntry:
    """A single set in the session. ``done`` is session-only and never persisted."""

    id: str
    weight: Any = 0
    reps: Any = 0
    done: bool = False


@dataclass
class ExerciseEntry:
    """An exercise in the session with its ordered sets (order = entry order)."""

    id: str
    name: str
    sets: List[SetEntry] = field(default_factory=list)

    def find_set(self, set_id: str) -> Optional[SetEntry]:
        for set_entry in self.sets:
            if set_entry.id == set_id:
                return set_entry
        return None


@dataclass(frozen=True)
class SetPayload:
    weight: float
    reps: float

    def to_dict(self) -> Dict[str, Any]:
        return {"weight": self.weight, "reps": self.reps}


@dataclass(frozen=True)
class ExercisePayload:
    name: str
    sets: List[SetPayload]
    template_exercise_id: Optional[UUIDString] = None


@dataclass(frozen=True)
class WorkoutPayload:
    """Everything needed to persist one workout with its exercises and sets."""

    date: DateString
    exercises: List[ExercisePayload]
    template_id: Optional[UUIDString] = None


@dataclass(frozen=True)
class WorkoutTemplate:
    id: UUIDString
    name: str
    created_at: Optional[str] = None


@dataclass(frozen=True)
class TemplateExercise:
    id: UUIDString
    template_id: UUIDString
    name: str
    sort_order: int = 0
    created_at: Optional[str] = None


@dataclass(frozen=True)
class TemplateOption:
    """A selectable template (id + display label)."""

    id: UUIDString
    label: str


@dataclass
class TemplateExercises:
    """Exercises seeded from a template plus the session-id -> template-exercise-id map."""

    exercises: List[ExerciseEntry]
    template_exercise_map: Dict[str, str]


@dataclass(frozen=True)
class ExerciseWeights:
    """
    Weight history summary for one exercise.

    Attributes:
        working_weight: Most frequent weight in the latest session
        max_weight: Heaviest weight in the latest session
        last_reps: Reps of the most recently logged set
    """

    working_weight: Optional[float] = None
    max_weight: Optional[float] = None
    last_reps: Optional[float] = None

    @classmethod
    def empty(cls) -> "ExerciseWeights":
        return cls()

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {
            "working_weight": self.working_weight,
            "max_weight": self.max_weight,
            "last_reps": self.last_reps,
        }
