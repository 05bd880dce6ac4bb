"""
Supabase implementation of TemplateRepository.

Reads the workout_templates and workout_template_exercises tables. Rows
are converted to domain models here; identifiers are validated so a
malformed row never reaches the session.
"""
import logging
from typing import Any, Dict, List

from supabase import Client

from application.exceptions import InvalidIdentifierError, StorageError
from domain.models import TemplateExercise, UUIDString, WorkoutTemplate
from infrastructure.db.errors import raise_storage_error

logger = logging.getLogger(__name__)


class SupabaseTemplateRepository:
    """
    Supabase implementation of TemplateRepository protocol.

    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client):
        self._client = client

    def list_templates(self) -> List[WorkoutTemplate]:
        """Get all templates, oldest first."""
        try:
            result = (
                self._client.table("workout_templates")
                .select("id, name, created_at")
                .order("created_at")
                .execute()
            )
        except Exception as e:
            raise_storage_error(e, "Failed to load workout templates.")

        try:
            return [self._to_template(row) for row in result.data or []]
        except InvalidIdentifierError as e:
            logger.error(f"Malformed workout template row: {e}")
            raise StorageError("Failed to load workout templates.", detail=str(e)) from e

    def list_template_exercises(self, template_id: UUIDString) -> List[TemplateExercise]:
        """Get a template's exercises in sort order."""
        try:
            result = (
                self._client.table("workout_template_exercises")
                .select("id, template_id, name, sort_order, created_at")
                .eq("template_id", str(template_id))
                .order("sort_order")
                .execute()
            )
        except Exception as e:
            raise_storage_error(e, "Failed to load workout template exercises.")

        try:
            return [self._to_template_exercise(row) for row in result.data or []]
        except InvalidIdentifierError as e:
            logger.error(f"Malformed template exercise row: {e}")
            raise StorageError("Failed to load workout template exercises.", detail=str(e)) from e

    @staticmethod
    def _to_template(row: Dict[str, Any]) -> WorkoutTemplate:
        return WorkoutTemplate(
            id=UUIDString.parse(row.get("id")),
            name=row.get("name") or "",
            created_at=row.get("created_at"),
        )

    @staticmethod
    def _to_template_exercise(row: Dict[str, Any]) -> TemplateExercise:
        return TemplateExercise(
            id=UUIDString.parse(row.get("id")),
            template_id=UUIDString.parse(row.get("template_id")),
            name=row.get("name") or "",
            sort_order=row.get("sort_order") or 0,
            created_at=row.get("created_at"),
        )
