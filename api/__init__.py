"""
HTTP surface of the workout tracker.

deps.py wires ports to Supabase adapters, errors.py maps WorkoutError
subclasses to status codes, routers/ and schemas/ hold the endpoints and
their pydantic models.
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_template_repo,
    get_workout_repo,
    get_weight_history_repo,
    get_workout_service,
    get_save_gate,
    require_site_access,
)

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
