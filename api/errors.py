"""
Exception handlers mapping the workout error taxonomy onto HTTP responses.

- WorkoutInputError family -> 400 with the message (plus ``errors`` for
  validation failures)
- SaveCooldownError / SaveInProgressError -> 429
- StorageError -> 502 with the sanitized message; the backend's own text
  is only shown in development
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from application.exceptions import (
    SaveCooldownError,
    SaveInProgressError,
    StorageError,
    WorkoutInputError,
    WorkoutValidationFailed,
)
from backend.settings import Settings

logger = logging.getLogger(__name__)


def user_error_message(exc: BaseException, default: str, settings: Settings) -> str:
    """
    Pick the message shown to the user for an error.

    In development the underlying message is shown (for storage errors, the
    backend's own detail). Elsewhere ``default`` is returned.
    """
    if not settings.is_development:
        return default
    if isinstance(exc, StorageError):
        return exc.detail or exc.message
    return str(exc) or default


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Register the workout error handlers on an app."""

    async def handle_input_error(request: Request, exc: WorkoutInputError) -> JSONResponse:
        body = {"detail": exc.message}
        if isinstance(exc, WorkoutValidationFailed):
            body["errors"] = [error.to_dict() for error in exc.errors]
        return JSONResponse(status_code=400, content=body)

    async def handle_save_rejected(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=429, content={"detail": str(exc)})

    async def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
        logger.error(
            f"{request.method} {request.url.path} failed: "
            f"[{exc.category.value}] {exc.detail or exc.message}"
        )
        return JSONResponse(
            status_code=502,
            content={
                "detail": user_error_message(exc, exc.message, settings),
                "category": exc.category.value,
            },
        )

    app.add_exception_handler(WorkoutInputError, handle_input_error)
    app.add_exception_handler(SaveCooldownError, handle_save_rejected)
    app.add_exception_handler(SaveInProgressError, handle_save_rejected)
    app.add_exception_handler(StorageError, handle_storage_error)
