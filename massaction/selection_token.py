"""
Signed round-trip of the section options offered at render time.

The form carries the token back on submit; the submit handler compares its
allowed values with a fresh computation so a course that changed in between
is caught instead of validated against a different option set.
"""

import os
from datetime import datetime, timedelta, timezone

import jwt

from .config import get_selection_token_ttl_minutes
from .errors import StaleSelectionError

TOKEN_ALGORITHM = "HS256"


def _get_secret() -> str:
    secret = os.environ.get("JWT_SECRET")
    if not secret:
        raise ValueError("JWT_SECRET environment variable not set")
    return secret


def create_selection_token(target_course_id: int, allowed_values: list[int]) -> str:
    """Sign the allowed values offered for a target course."""
    now = datetime.now(timezone.utc)
    payload = {
        "course": target_course_id,
        "allowed": list(allowed_values),
        "iat": now,
        "exp": now + timedelta(minutes=get_selection_token_ttl_minutes()),
    }
    return jwt.encode(payload, _get_secret(), algorithm=TOKEN_ALGORITHM)


def read_selection_token(token: str, target_course_id: int) -> list[int]:
    """
    Verify a selection token and return the allowed values it carries.

    Raises:
        StaleSelectionError: Bad signature, expired, or issued for another course
    """
    try:
        payload = jwt.decode(token, _get_secret(), algorithms=[TOKEN_ALGORITHM])
    except jwt.InvalidTokenError as e:
        raise StaleSelectionError(f"Invalid selection token: {e}") from e

    if payload.get("course") != target_course_id:
        raise StaleSelectionError("Selection token was issued for another course")

    return [int(value) for value in payload.get("allowed", [])]
