"""
Weight History Repository Interface (Port).

Queries prior sets so the application can prefill new sets with the
weights and reps the user logged last time.
"""
from typing import Any, Dict, List, Protocol, Sequence


class WeightHistoryRepository(Protocol):
    """Abstract interface for historical set lookups."""

    def get_last_weights_batch(self, names: Sequence[str]) -> Any:
        """
        Look up weight summaries for many exercises in one round-trip.

        Args:
            names: Normalized, de-duplicated exercise names

        Returns:
            Raw rows as returned by storage, expected to be a list of
            ``{exercise_name, working_weight, max_weight, last_reps}`` dicts.
            Shape checking is the caller's job.

        Raises:
            StorageError: If the lookup fails
        """
        ...

    def get_exercise_sets(self, name: str, *, exact: bool = True) -> List[Dict[str, Any]]:
        """
        Get all historical sets for an exercise name, joined with their exercise.

        Matching is case-insensitive. With ``exact=False`` the name is
        matched as a substring.

        Args:
            name: Normalized exercise name
            exact: Whether to match the whole name

        Returns:
            Rows of ``{weight, reps, created_at, exercise_id,
            exercises: {id, name, created_at}}``

        Raises:
            StorageError: If the query fails
        """
        ...
