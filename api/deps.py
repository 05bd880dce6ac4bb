"""
Dependency providers for the workout tracker routers.

Routers depend on the ports (TemplateRepository, WorkoutRepository,
WeightHistoryRepository) and on WorkoutService; the Supabase adapters are
only named here. Tests swap them through ``app.dependency_overrides``:

    app.dependency_overrides[get_template_repo] = lambda: FakeTemplateRepository()

Lifetimes:
- Settings, the Supabase client and the save gate live for the process
- Repositories and the WorkoutService are built per request
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    TemplateRepository,
    WeightHistoryRepository,
    WorkoutRepository,
)
from application.save_gate import SaveGate
from application.services import WorkoutService

# Concrete implementations
from infrastructure import (
    SupabaseTemplateRepository,
    SupabaseWeightHistoryRepository,
    SupabaseWorkoutRepository,
)

from backend.auth import verify_site_access
from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Create the process-wide Supabase client on first use.

    Returns None until SUPABASE_URL and a key are configured.
    """
    settings = _get_settings()
    url, key = settings.supabase_url, settings.supabase_key
    if not (url and key):
        return None
    return create_client(url, key)


def get_supabase_client_required() -> Client:
    """The Supabase client, or HTTP 503 when storage is not configured."""
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Workout storage is not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_template_repo(
    client: Client = Depends(get_supabase_client_required),
) -> TemplateRepository:
    return SupabaseTemplateRepository(client)


def get_workout_repo(
    client: Client = Depends(get_supabase_client_required),
    settings: Settings = Depends(get_settings),
) -> WorkoutRepository:
    """
    Get WorkoutRepository implementation.

    Saves go through the atomic database function unless
    ATOMIC_WORKOUT_SAVE is disabled.
    """
    return SupabaseWorkoutRepository(client, atomic=settings.atomic_workout_save)


def get_weight_history_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WeightHistoryRepository:
    return SupabaseWeightHistoryRepository(client)


# =============================================================================
# Service Providers
# =============================================================================


def get_workout_service(
    template_repo: TemplateRepository = Depends(get_template_repo),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    weight_repo: WeightHistoryRepository = Depends(get_weight_history_repo),
    settings: Settings = Depends(get_settings),
) -> WorkoutService:
    """Get a WorkoutService wired with the request's repositories."""
    return WorkoutService(
        template_repo,
        workout_repo,
        weight_repo,
        batch_weight_lookup=settings.batch_weight_lookup,
    )


@lru_cache
def get_save_gate() -> SaveGate:
    """
    Get the process-wide save gate (cached).

    Shared by every request so the save cooldown holds across clients.
    Clear with get_save_gate.cache_clear() in tests.
    """
    return SaveGate(cooldown_ms=_get_settings().save_cooldown_ms)


# =============================================================================
# Site Access
# =============================================================================


def require_site_access(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> Optional[str]:
    """
    Enforce HTTP Basic site protection when SITE_PASSWORD is configured.

    Returns:
        The authenticated username, or None when protection is disabled

    Raises:
        HTTPException: 401 with a Basic challenge
    """
    return verify_site_access(authorization, settings)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_template_repo",
    "get_workout_repo",
    "get_weight_history_repo",
    # Services
    "get_workout_service",
    "get_save_gate",
    # Site access
    "require_site_access",
]
