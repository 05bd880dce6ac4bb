"""
Supabase implementation of WeightHistoryRepository.

The batched lookup calls the ``get_last_exercise_weights_batch`` database
function. The single-exercise lookup reads raw rows from ``sets`` joined
with their ``exercises`` row; aggregation happens in the domain layer.
"""
import logging
from typing import Any, Dict, List, Sequence

from supabase import Client

from infrastructure.db.errors import raise_storage_error

logger = logging.getLogger(__name__)

WEIGHTS_FAILED_MESSAGE = "Failed to load exercise weights."


class SupabaseWeightHistoryRepository:
    """Supabase implementation of WeightHistoryRepository protocol."""

    def __init__(self, client: Client):
        self._client = client

    def get_last_weights_batch(self, names: Sequence[str]) -> Any:
        try:
            result = self._client.rpc(
                "get_last_exercise_weights_batch",
                {"p_exercise_names": list(names)},
            ).execute()
        except Exception as e:
            raise_storage_error(e, WEIGHTS_FAILED_MESSAGE)

        return result.data

    def get_exercise_sets(self, name: str, *, exact: bool = True) -> List[Dict[str, Any]]:
        escaped = self._escape_ilike(name)
        pattern = escaped if exact else f"%{escaped}%"

        try:
            result = (
                self._client.table("sets")
                .select("weight, reps, created_at, exercise_id, exercises!inner(id, name, created_at)")
                .ilike("exercises.name", pattern)
                .execute()
            )
        except Exception as e:
            raise_storage_error(e, WEIGHTS_FAILED_MESSAGE)

        rows = result.data or []
        if exact:
            # PostgREST reads "*" in like patterns as "%", which no escape prevents
            wanted = name.casefold()
            rows = [row for row in rows if self._exercise_name(row).casefold() == wanted]
        logger.debug(f"Found {len(rows)} historical set(s) for {name!r}")
        return rows

    @staticmethod
    def _exercise_name(row: Dict[str, Any]) -> str:
        exercise = row.get("exercises")
        if isinstance(exercise, list):
            exercise = exercise[0] if exercise else None
        name = exercise.get("name") if isinstance(exercise, dict) else None
        return name if isinstance(name, str) else ""

    @staticmethod
    def _escape_ilike(value: str) -> str:
        """Backslash-escape ILIKE wildcards (``%``, ``_``, ``\\``) so they match literally."""
        return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
