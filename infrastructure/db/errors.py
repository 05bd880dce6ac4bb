"""
Storage error classification.

Supabase raises ``postgrest.exceptions.APIError`` (and friends) carrying a
Postgres or PostgREST ``code`` and the backend's ``message``. These are
mapped to a generic StorageErrorCategory and a safe, user-facing message;
the backend text is logged and kept on the exception for operators only.
"""
import logging
from typing import NoReturn, Optional, Tuple

from application.exceptions import StorageError, StorageErrorCategory

logger = logging.getLogger(__name__)

_CODE_CATEGORIES = {
    "42501": StorageErrorCategory.PERMISSION,
    "PGRST301": StorageErrorCategory.PERMISSION,
    "PGRST302": StorageErrorCategory.PERMISSION,
    "42P01": StorageErrorCategory.MISSING_SCHEMA,
    "PGRST205": StorageErrorCategory.MISSING_SCHEMA,
    "PGRST202": StorageErrorCategory.MISSING_SCHEMA,
    "23505": StorageErrorCategory.DUPLICATE,
    "23503": StorageErrorCategory.FOREIGN_KEY,
    "23514": StorageErrorCategory.CONSTRAINT,
    "23502": StorageErrorCategory.CONSTRAINT,
    "22P02": StorageErrorCategory.CONSTRAINT,
}

# Checked in order; "foreign key" messages also contain "violates".
_TEXT_CATEGORIES: Tuple[Tuple[str, StorageErrorCategory], ...] = (
    ("permission denied", StorageErrorCategory.PERMISSION),
    ("row-level security", StorageErrorCategory.PERMISSION),
    ("does not exist", StorageErrorCategory.MISSING_SCHEMA),
    ("schema cache", StorageErrorCategory.MISSING_SCHEMA),
    ("duplicate", StorageErrorCategory.DUPLICATE),
    ("foreign key", StorageErrorCategory.FOREIGN_KEY),
    ("violates", StorageErrorCategory.CONSTRAINT),
)

USER_MESSAGES = {
    StorageErrorCategory.PERMISSION: "You do not have permission to perform this action.",
    StorageErrorCategory.MISSING_SCHEMA: "Database is not set up correctly.",
    StorageErrorCategory.DUPLICATE: "Duplicate entry.",
    StorageErrorCategory.FOREIGN_KEY: "Invalid reference.",
    StorageErrorCategory.CONSTRAINT: "Data validation failed.",
}


def _error_code(error: object) -> Optional[str]:
    code = getattr(error, "code", None)
    return str(code) if code else None


def _error_text(error: object) -> str:
    message = getattr(error, "message", None)
    if message is None:
        message = str(error)
    return str(message)


def classify_storage_error(error: object) -> StorageErrorCategory:
    """
    Map a backend error to a generic category.

    The error code is used when it is known; otherwise the message text is
    searched for well-known phrases.
    """
    code = _error_code(error)
    if code and code in _CODE_CATEGORIES:
        return _CODE_CATEGORIES[code]

    text = _error_text(error).lower()
    for phrase, category in _TEXT_CATEGORIES:
        if phrase in text:
            return category
    return StorageErrorCategory.UNKNOWN


def to_storage_error(error: object, default_message: str) -> StorageError:
    """Build a StorageError with a sanitized message for a backend error."""
    category = classify_storage_error(error)
    return StorageError(
        USER_MESSAGES.get(category, default_message),
        category=category,
        code=_error_code(error),
        detail=_error_text(error),
    )


def raise_storage_error(error: object, default_message: str) -> NoReturn:
    """
    Log a backend error and raise it as a StorageError.

    Args:
        error: The exception raised by the Supabase client
        default_message: User-facing message when the error is not recognised
    """
    storage_error = to_storage_error(error, default_message)
    logger.error(
        f"{default_message} [{storage_error.category.value}] "
        f"code={storage_error.code} detail={storage_error.detail}"
    )
    if isinstance(error, BaseException):
        raise storage_error from error
    raise storage_error
