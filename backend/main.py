"""
FastAPI app factory for the workout tracker.

``create_app`` wires logging, Sentry, CORS, the exception handlers and the
routers for one Settings instance. Tests pass their own settings; uvicorn
serves the module-level ``app``:

    uvicorn backend.main:app --reload

    test_app = create_app(Settings(environment="test", _env_file=None))
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

LOCAL_ORIGINS = ["http://localhost:3000", "http://localhost:3001"]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the workout tracker app; settings default to ``get_settings()``."""
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)
    _init_sentry(settings)

    app = FastAPI(
        title="Workout Tracker API",
        description="Workout logging: templates, sets, saving and weight history",
        version="1.0.0",
    )
    _configure_cors(app, settings)

    from api.errors import register_exception_handlers

    register_exception_handlers(app, settings)
    _include_routers(app)
    _log_feature_flags(settings)
    return app


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op once handlers exist
    logging.getLogger().setLevel(settings.log_level)


def _init_sentry(settings: Settings) -> None:
    if not settings.sentry_dsn:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1,
        profiles_sample_rate=0.1,
    )
    logger.info("Sentry enabled for workout-tracker-api (%s)", settings.environment)


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=LOCAL_ORIGINS + settings.cors_allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    from api.routers import (
        exercises_router,
        health_router,
        templates_router,
        workouts_router,
    )

    # /health stays outside site auth for load balancer probes
    app.include_router(health_router)
    for router in (templates_router, workouts_router, exercises_router):
        app.include_router(router)


def _log_feature_flags(settings: Settings) -> None:
    if not settings.atomic_workout_save:
        logger.warning("ATOMIC_WORKOUT_SAVE is disabled: saves are not transactional")
    if not settings.batch_weight_lookup:
        logger.info("BATCH_WEIGHT_LOOKUP is disabled: weights are looked up per exercise")
    if settings.basic_auth_enabled:
        logger.info("Site protection (HTTP Basic) is enabled")


app = create_app()
