"""
Site protection with HTTP Basic authentication.

When SITE_PASSWORD is set every protected route requires the configured
username and password; when it is unset the check is a no-op. Credentials
are compared in constant time.
"""
import base64
import binascii
import logging
import secrets
from typing import NoReturn, Optional

from fastapi import HTTPException

from backend.settings import Settings

logger = logging.getLogger(__name__)

BASIC_AUTH_REALM = "Workout Tracker"

UNAUTHORIZED_HEADERS = {
    "WWW-Authenticate": f'Basic realm="{BASIC_AUTH_REALM}", charset="UTF-8"',
    "Cache-Control": "no-store",
}


def _unauthorized() -> NoReturn:
    raise HTTPException(
        status_code=401,
        detail="Authentication required.",
        headers=UNAUTHORIZED_HEADERS,
    )


def parse_basic_credentials(authorization: Optional[str]) -> Optional[tuple[str, str]]:
    """
    Decode a ``Basic <base64(user:password)>`` header.

    Returns:
        (username, password), or None if the header is missing or malformed
    """
    if not authorization or not authorization.startswith("Basic "):
        return None

    try:
        decoded = base64.b64decode(authorization[6:], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    username, separator, password = decoded.partition(":")
    if not separator:
        return None
    return username, password


def _matches(provided: str, expected: str) -> bool:
    return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def verify_site_access(authorization: Optional[str], settings: Settings) -> Optional[str]:
    """
    Check an Authorization header against the site credentials.

    Returns:
        The authenticated username, or None when protection is disabled

    Raises:
        HTTPException: 401 with a Basic challenge if credentials are
            missing or wrong
    """
    if not settings.basic_auth_enabled:
        return None

    credentials = parse_basic_credentials(authorization)
    if credentials is None:
        _unauthorized()

    username, password = credentials
    # evaluate both so timing does not reveal which one failed
    username_ok = _matches(username, settings.site_username)
    password_ok = _matches(password, settings.site_password or "")
    if not (username_ok and password_ok):
        logger.warning("Rejected site credentials")
        _unauthorized()

    return username
