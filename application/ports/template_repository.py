"""
Template Repository Interface (Port).

Read-only access to workout templates and their ordered exercises.
"""
from typing import List, Protocol

from domain.models import TemplateExercise, UUIDString, WorkoutTemplate


class TemplateRepository(Protocol):
    """Abstract interface for workout template reads."""

    def list_templates(self) -> List[WorkoutTemplate]:
        """
        Get all workout templates.

        Returns:
            Templates ordered by creation time ascending

        Raises:
            StorageError: If the query fails
        """
        ...

    def list_template_exercises(self, template_id: UUIDString) -> List[TemplateExercise]:
        """
        Get the exercises of a template.

        Args:
            template_id: Validated template UUID

        Returns:
            Template exercises ordered by sort order ascending

        Raises:
            StorageError: If the query fails
        """
        ...
