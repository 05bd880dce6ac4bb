"""
Workout Service.

The public operation surface consumed by the HTTP layer and the workout
session: template loading, validation, saving and weight history.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from application.ports import TemplateRepository, WeightHistoryRepository, WorkoutRepository
from application.use_cases import (
    GetLastWeightsUseCase,
    LoadTemplatesUseCase,
    SaveWorkoutUseCase,
)
from domain.models import (
    ExerciseEntry,
    ExerciseWeights,
    TemplateExercises,
    TemplateOption,
    UUIDString,
)
from domain.validation import (
    WorkoutValidationError,
    format_validation_errors,
    validate_workout,
)


class WorkoutService:
    """
    Facade over the workout use cases.

    Args:
        template_repo: Template reads
        workout_repo: Workout writes
        weight_repo: Weight history reads
        batch_weight_lookup: Use the single-round-trip batched lookup for
            many names (default). When False, names are looked up one by one.
    """

    def __init__(
        self,
        template_repo: TemplateRepository,
        workout_repo: WorkoutRepository,
        weight_repo: WeightHistoryRepository,
        *,
        batch_weight_lookup: bool = True,
        save_use_case: Optional[SaveWorkoutUseCase] = None,
    ) -> None:
        self._templates = LoadTemplatesUseCase(template_repo)
        self._save = save_use_case or SaveWorkoutUseCase(workout_repo)
        self._weights = GetLastWeightsUseCase(weight_repo)
        self._batch_weight_lookup = batch_weight_lookup

    def load_workout_template_options(self) -> List[TemplateOption]:
        return self._templates.load_options()

    def load_template_exercises(self, template_id: str) -> TemplateExercises:
        return self._templates.load_exercises(template_id)

    def validate_workout(self, exercises: Sequence[ExerciseEntry]) -> List[WorkoutValidationError]:
        return validate_workout(exercises)

    def format_validation_errors(self, errors: Sequence[WorkoutValidationError]) -> str:
        return format_validation_errors(errors)

    def save_workout(
        self,
        template_id: Optional[str],
        exercises: Sequence[ExerciseEntry],
        template_exercise_map: Mapping[str, str],
        date: Optional[str] = None,
    ) -> UUIDString:
        return self._save.execute(template_id, exercises, template_exercise_map, date)

    def get_last_weights(self, name: str) -> ExerciseWeights:
        return self._weights.execute(name)

    def get_last_weights_batch(self, names: Iterable[str]) -> Dict[str, ExerciseWeights]:
        if self._batch_weight_lookup:
            return self._weights.execute_batch(names)
        return self._weights.execute_each(names)
