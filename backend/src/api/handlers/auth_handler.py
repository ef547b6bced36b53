"""
Authentication Handler

Signup, login, token refresh and the current-user lookup.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
          ↘ Utils  ↗

Handlers only parse requests, call services and shape responses.
Service exceptions propagate to the global error handlers, which map
their ErrorKind to a status code.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import CurrentUser
from src.api.dependencies.services import get_auth_service, get_user_service
from src.shared.core.logging import logger
from src.shared.schemas.common import MessageResponse
from src.shared.schemas.user import (
    AuthResponse,
    RefreshTokenRequest,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from src.shared.services.auth_service import AuthService
from src.shared.services.user_service import UserService


router = APIRouter()


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    user_data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user.

    Creates the account and returns an access token for it.

    Raises:
        400: If email already registered
    """
    user, access_token, expires_in = await auth_service.signup(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
    )
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
        expires_in=expires_in,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate user and return JWT token.

    Raises:
        401: If credentials are invalid or the account is not activated
    """
    user, access_token, expires_in = await auth_service.login(
        email=credentials.email,
        password=credentials.password,
    )
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
        expires_in=expires_in,
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: CurrentUser):
    """
    Log out. Tokens are stateless, so the client simply discards its token.
    """
    logger.info("User logged out", user_id=current_user["user_id"])
    return MessageResponse(message="Logged out")


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    body: RefreshTokenRequest,
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Exchange a still-valid token for a fresh one."""
    access_token, expires_in = await auth_service.refresh_token(body.token)
    return TokenResponse(access_token=access_token, expires_in=expires_in)


@router.get("/me", response_model=UserResponse)
async def me(
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.get_user(current_user["user_id"])
