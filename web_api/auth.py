"""
JWT authentication utilities for the web API.

Security measures implemented:
- HS256 signing algorithm with 256-bit secret
- Token expiration (24 hours)
- HttpOnly cookies (set by the login frontend)
"""

import os
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import HTTPException, Request

JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_HOURS = 24


def _get_secret() -> str:
    secret = os.environ.get("JWT_SECRET")
    if not secret:
        raise ValueError("JWT_SECRET environment variable not set")
    return secret


def create_jwt(user_id: int, username: str) -> str:
    """
    Create a signed JWT token for an authenticated user.

    Args:
        user_id: The platform user ID
        username: The user's login name

    Returns:
        Signed JWT token string
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "username": username,
        "iat": now,
        "exp": now + timedelta(hours=JWT_EXPIRATION_HOURS),
    }
    return jwt.encode(payload, _get_secret(), algorithm=JWT_ALGORITHM)


def verify_jwt(token: str) -> dict | None:
    """
    Verify and decode a JWT token.

    Returns:
        Decoded payload dict if valid, None if invalid
    """
    try:
        return jwt.decode(token, _get_secret(), algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None


async def get_current_user(request: Request) -> dict:
    """
    FastAPI dependency to get the current authenticated user.

    Extracts the session cookie and validates the JWT.

    Returns:
        The decoded JWT payload with `user_id` (int) added

    Raises:
        HTTPException: 401 if not authenticated or invalid token
    """
    token = request.cookies.get("session")
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    payload = verify_jwt(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    try:
        payload["user_id"] = int(payload["sub"])
    except (KeyError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return payload
