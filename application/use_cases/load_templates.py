"""
LoadTemplates Use Case.

Loads workout templates as selectable options and seeds a session with a
template's exercises.
"""

import logging
from typing import List

from application.exceptions import InvalidIdentifierError
from application.ports import TemplateRepository
from domain.models import (
    ExerciseEntry,
    TemplateExercises,
    TemplateOption,
    UUIDString,
    is_valid_uuid,
)

logger = logging.getLogger(__name__)


def session_exercise_id(template_exercise_id: str) -> str:
    """Session-scoped id for an exercise seeded from a template exercise."""
    return f"exercise-{template_exercise_id}"


class LoadTemplatesUseCase:
    """
    Use case for reading workout templates.

    Usage:
        >>> use_case = LoadTemplatesUseCase(template_repo=template_repo)
        >>> options = use_case.load_options()
        >>> seeded = use_case.load_exercises(options[0].id)
    """

    def __init__(self, template_repo: TemplateRepository) -> None:
        self._template_repo = template_repo

    def load_options(self) -> List[TemplateOption]:
        """Load all templates as ``{id, label}`` options, oldest first."""
        templates = self._template_repo.list_templates()
        logger.debug("Loaded %d workout template(s)", len(templates))
        return [TemplateOption(id=template.id, label=template.name) for template in templates]

    def load_exercises(self, template_id: str) -> TemplateExercises:
        """
        Load a template's exercises as empty session exercises.

        Args:
            template_id: Template UUID

        Returns:
            TemplateExercises with one set-less ExerciseEntry per template
            exercise (in sort order) and the session id -> template exercise
            id map used when saving

        Raises:
            InvalidIdentifierError: If template_id is not a UUID
        """
        if not is_valid_uuid(template_id):
            raise InvalidIdentifierError("Invalid template ID format.")

        template_exercises = self._template_repo.list_template_exercises(
            UUIDString.parse(template_id)
        )

        exercises: List[ExerciseEntry] = []
        template_exercise_map = {}
        for template_exercise in template_exercises:
            exercise_id = session_exercise_id(template_exercise.id)
            template_exercise_map[exercise_id] = str(template_exercise.id)
            exercises.append(ExerciseEntry(id=exercise_id, name=template_exercise.name, sets=[]))

        return TemplateExercises(exercises=exercises, template_exercise_map=template_exercise_map)
