"""
Repository Interfaces (Ports) for the workout tracker.

This package defines abstract interfaces that decouple application logic
from infrastructure (database, external services). Implementations are
provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the application needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutRepository

    class SaveWorkoutUseCase:
        def __init__(self, workout_repo: WorkoutRepository):
            self._workout_repo = workout_repo
"""

from application.ports.workout_repository import WorkoutRepository
from application.ports.template_repository import TemplateRepository
from application.ports.weight_history_repository import WeightHistoryRepository

__all__ = [
    "WorkoutRepository",
    "TemplateRepository",
    "WeightHistoryRepository",
]
