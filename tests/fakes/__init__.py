"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeTemplateRepository, create_template_repo

    repo = create_template_repo()
    push = repo.list_templates()[0]
"""
from typing import Sequence

from tests.fakes.template_repository import FakeTemplateRepository
from tests.fakes.weight_history_repository import FakeWeightHistoryRepository
from tests.fakes.workout_repository import FakeWorkoutRepository


# =============================================================================
# Factory Functions
# =============================================================================


def create_template_repo(
    *,
    templates: Sequence[tuple] = (
        ("Push Day", ("Bench Press", "Overhead Press", "Triceps Extension")),
        ("Pull Day", ("Deadlift", "Bent-Over Row")),
    ),
) -> FakeTemplateRepository:
    """
    Create a FakeTemplateRepository with templates.

    Args:
        templates: (name, exercise names) pairs, oldest first

    Returns:
        Pre-populated FakeTemplateRepository
    """
    repo = FakeTemplateRepository()
    for name, exercise_names in templates:
        repo.add_template(name, exercise_names)
    return repo


__all__ = [
    "FakeTemplateRepository",
    "FakeWeightHistoryRepository",
    "FakeWorkoutRepository",
    "create_template_repo",
]
