"""
Workout tracker configuration.

Values come from the process environment or a local ``.env`` file; names are
matched case-insensitively (``SUPABASE_URL`` sets ``supabase_url``).

Usage:
    from backend.settings import Settings, get_settings

    # Route handlers take settings as a dependency
    @router.get("/templates")
    def list_templates(settings: Settings = Depends(get_settings)):
        ...

    # Tests build their own instance and skip the .env file
    settings = Settings(environment="test", site_password="secret", _env_file=None)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.constants import SAVE_COOLDOWN_MS

ENVIRONMENTS = frozenset({"development", "staging", "production", "test"})
LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    """Environment-driven settings for the workout tracker API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Runtime
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="production",
        description="development, staging, production or test; only development shows raw storage errors",
    )
    log_level: str = Field(default="INFO", description="Root logger level")

    # -------------------------------------------------------------------------
    # Storage (Supabase)
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(default=None, description="Project URL")
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Service role key; bypasses row-level security",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Anon key; used when no service role key is set",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        return self.supabase_service_role_key or self.supabase_anon_key

    # -------------------------------------------------------------------------
    # Site Access - HTTP Basic
    # -------------------------------------------------------------------------
    site_username: str = Field(default="admin")
    site_password: Optional[str] = Field(
        default=None,
        description="Enables HTTP Basic protection of every route but /health",
    )

    @property
    def basic_auth_enabled(self) -> bool:
        return bool(self.site_password)

    # -------------------------------------------------------------------------
    # Workout Saving
    # -------------------------------------------------------------------------
    save_cooldown_ms: int = Field(
        default=SAVE_COOLDOWN_MS,
        ge=0,
        description="Minimum milliseconds between two accepted saves",
    )
    atomic_workout_save: bool = Field(
        default=True,
        description="Save through the save_workout_atomic database function",
    )
    batch_weight_lookup: bool = Field(
        default=True,
        description="Use get_last_exercise_weights_batch for multi-exercise lookups",
    )

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------
    cors_allowed_origins: str = Field(
        default="",
        description="Extra CORS origins, comma separated",
    )

    @property
    def cors_allowed_origins_list(self) -> list[str]:
        return [
            origin.strip()
            for origin in self.cors_allowed_origins.split(",")
            if origin.strip()
        ]

    # -------------------------------------------------------------------------
    # Error Reporting
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(default=None)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        environment = v.lower()
        if environment not in ENVIRONMENTS:
            raise ValueError(
                f"Unknown environment '{v}', expected one of {sorted(ENVIRONMENTS)}"
            )
        return environment

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}', expected one of {sorted(LOG_LEVELS)}")
        return level

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Development mode exposes raw storage errors in API responses."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Return the process-wide Settings, read once.

    Call ``get_settings.cache_clear()`` after changing the environment.
    """
    return Settings()
