"""
Workout Repository Interface (Port).

This module defines the abstract interface for workout persistence.
Implementations may use Supabase, in-memory storage, or other backends.
"""
from typing import Any, Protocol

from domain.models import WorkoutPayload


class WorkoutRepository(Protocol):
    """
    Abstract interface for workout persistence operations.

    A save creates the workout row plus its exercises and sets as one
    logical write. Implementations backed by a single transaction are
    preferred; a multi-step implementation must raise on any failed step
    and must never create exercise rows for exercises without sets.
    """

    def save_workout(self, payload: WorkoutPayload) -> Any:
        """
        Persist a workout with its exercises and sets.

        Args:
            payload: Validated workout payload (date, optional template id,
                exercises with their sets)

        Returns:
            The generated workout identifier as reported by storage. Callers
            must validate its shape before trusting it.

        Raises:
            StorageError: If any part of the write fails
        """
        ...
