"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseTemplateRepository,
        SupabaseWorkoutRepository,
        SupabaseWeightHistoryRepository,
    )

    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    template_repo = SupabaseTemplateRepository(client)
    workout_repo = SupabaseWorkoutRepository(client, atomic=True)
    weight_repo = SupabaseWeightHistoryRepository(client)
"""

from infrastructure.db.errors import classify_storage_error, raise_storage_error
from infrastructure.db.template_repository import SupabaseTemplateRepository
from infrastructure.db.weight_history_repository import SupabaseWeightHistoryRepository
from infrastructure.db.workout_repository import SupabaseWorkoutRepository

__all__ = [
    # Templates
    "SupabaseTemplateRepository",

    # Workout persistence
    "SupabaseWorkoutRepository",

    # Weight history
    "SupabaseWeightHistoryRepository",

    # Error mapping
    "classify_storage_error",
    "raise_storage_error",
]
