"""
User Handler

Profiles, account settings, password reset and activation, plus the public
per-user listings of items and coordinates.

Route order matters: the literal paths (/me, /profile, /password...) are
declared before /{user_id} so they are not captured as ids.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import CurrentUser, OptionalUser, Pagination
from src.api.dependencies.services import (
    get_auth_service,
    get_coordinate_service,
    get_item_service,
    get_user_service,
)
from src.shared.core.exceptions import ForbiddenError
from src.shared.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta
from src.shared.schemas.coordinate import CoordinateResponse
from src.shared.schemas.item import ItemResponse
from src.shared.schemas.user import (
    ActivationRequest,
    PasswordChange,
    PasswordReset,
    PasswordResetRequest,
    ProfileUpdate,
    ResendActivationRequest,
    UserResponse,
    UserUpdate,
)
from src.shared.services.auth_service import AuthService
from src.shared.services.coordinate_service import CoordinateService
from src.shared.services.item_service import ItemService
from src.shared.services.user_service import UserService


router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════════
# CURRENT USER
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("", response_model=PaginatedResponse[UserResponse])
async def list_users(
    current_user: CurrentUser,
    pagination: Pagination,
    user_service: UserService = Depends(get_user_service),
):
    users, total = await user_service.list_users(pagination.limit, pagination.offset)
    return PaginatedResponse[UserResponse](
        data=[UserResponse.model_validate(u) for u in users],
        pagination=PaginationMeta.from_params(pagination, total),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.get_user(current_user["user_id"])


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    """Update display name and avatar of the caller."""
    return await user_service.update_profile(current_user["user_id"], data)


@router.put("/password", response_model=MessageResponse)
async def change_password(
    data: PasswordChange,
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    """
    Change the caller's password.

    Raises:
        400: If the current password is wrong
    """
    await user_service.change_password(
        current_user["user_id"],
        data.old_password,
        data.new_password,
    )
    return MessageResponse(message="Password updated")


# ═══════════════════════════════════════════════════════════════════════════════
# PASSWORD RESET & ACTIVATION (public)
# ═══════════════════════════════════════════════════════════════════════════════


@router.post("/password/reset", response_model=MessageResponse)
async def request_password_reset(
    data: PasswordResetRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Issue a password reset token. The token is delivered out of band and
    never returned in the response.
    """
    await auth_service.request_password_reset(data.email)
    return MessageResponse(message="Password reset instructions sent")


@router.put("/password/reset", response_model=MessageResponse)
async def reset_password(
    data: PasswordReset,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Set a new password with a reset token.

    Raises:
        400: If the token is invalid, expired or already used
    """
    await auth_service.reset_password(data.token, data.new_password)
    return MessageResponse(message="Password has been reset")


@router.post("/activate", response_model=UserResponse)
async def activate(
    data: ActivationRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.activate_account(data.token)


@router.post("/activate/resend", response_model=MessageResponse)
async def resend_activation(
    data: ResendActivationRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    await auth_service.resend_activation(data.email)
    return MessageResponse(message="Activation instructions sent")


# ═══════════════════════════════════════════════════════════════════════════════
# BY ID
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: UserUpdate,
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    """
    Update a user. Only the user themself may do this.

    Raises:
        403: If `user_id` is not the caller
        400: If the new email is already registered
    """
    if user_id != current_user["user_id"]:
        raise ForbiddenError("you can only update your own account")
    return await user_service.update_user(user_id, data)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    if user_id != current_user["user_id"]:
        raise ForbiddenError("you can only delete your own account")
    await user_service.delete_user(user_id)
    return MessageResponse(message="User deleted")


@router.get("/{user_id}/items", response_model=PaginatedResponse[ItemResponse])
async def get_user_items(
    user_id: int,
    pagination: Pagination,
    user_service: UserService = Depends(get_user_service),
    item_service: ItemService = Depends(get_item_service),
):
    await user_service.get_user(user_id)
    page = await item_service.get_user_items(user_id, pagination.limit, pagination.offset)
    return PaginatedResponse[ItemResponse](
        data=[ItemResponse.model_validate(i) for i in page.items],
        pagination=PaginationMeta.from_params(pagination, page.total),
    )


@router.get("/{user_id}/coordinates", response_model=PaginatedResponse[CoordinateResponse])
async def get_user_coordinates(
    user_id: int,
    pagination: Pagination,
    viewer: OptionalUser,
    user_service: UserService = Depends(get_user_service),
    coordinate_service: CoordinateService = Depends(get_coordinate_service),
):
    await user_service.get_user(user_id)
    coordinates, total = await coordinate_service.get_user_coordinates(
        user_id, pagination.limit, pagination.offset
    )
    return PaginatedResponse[CoordinateResponse](
        data=await coordinate_service.decorate(coordinates, viewer and viewer["user_id"]),
        pagination=PaginationMeta.from_params(pagination, total),
    )
