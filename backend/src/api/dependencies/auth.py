"""
Authentication Dependencies

FastAPI dependencies for JWT bearer authentication.

Dependency Hierarchy:
=====================
    get_current_user_token()  ← Extract and validate JWT from header
           │
           ▼
    get_current_user()        ← {"user_id": int, "email": str}

    get_optional_user()       ← Same, or None when no header is sent
                                (public routes that decorate per viewer)

Type Aliases:
=============
    CurrentUser   - Authenticated user from JWT (401 when missing)
    OptionalUser  - Authenticated user or None

Usage:
======
    @router.get("/me")
    async def get_me(current_user: CurrentUser):
        return current_user["user_id"]
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.config.settings import settings
from src.shared.core.exceptions import AuthenticationError
from src.shared.utils.security import SecurityUtils


# auto_error=False so a missing header surfaces as our 401 AuthenticationError
security = HTTPBearer(auto_error=False)


async def get_current_user_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> dict:
    """
    Extract and validate JWT token from Authorization header.

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is missing or invalid
    """
    if not credentials:
        raise AuthenticationError("Authorization header required")

    try:
        return SecurityUtils.decode_access_token(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e


def _user_from_payload(payload: dict) -> dict:
    user_id = payload.get("user_id")
    if not isinstance(user_id, int):
        raise AuthenticationError("Invalid token payload")
    return {
        "user_id": user_id,
        "email": payload.get("email"),
    }


async def get_current_user(
    token: Annotated[dict, Depends(get_current_user_token)],
) -> dict:
    """
    Get current authenticated user from token.

    Raises:
        AuthenticationError: If user_id is missing from the token
    """
    return _user_from_payload(token)


async def get_optional_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> Optional[dict]:
    """Authenticated user when a valid bearer token is sent, otherwise None."""
    if not credentials:
        return None
    try:
        payload = SecurityUtils.decode_access_token(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError:
        return None
    user_id = payload.get("user_id")
    return {"user_id": user_id, "email": payload.get("email")} if isinstance(user_id, int) else None


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

CurrentUser = Annotated[dict, Depends(get_current_user)]
OptionalUser = Annotated[Optional[dict], Depends(get_optional_user)]
