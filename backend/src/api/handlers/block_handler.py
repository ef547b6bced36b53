"""
Block Handler

Block edges. A block stops the blocked user from following or commenting
on the blocker, and hides the blocked user from the blocker's timeline.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import CurrentUser
from src.api.dependencies.services import get_social_service
from src.shared.schemas.common import MessageResponse
from src.shared.schemas.social import BlockStatusResponse
from src.shared.schemas.user import UserResponse
from src.shared.services.social_service import SocialService


router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def get_blocked_users(
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    return await social_service.get_blocked_users(current_user["user_id"])


@router.get("/status/{user_id}", response_model=BlockStatusResponse)
async def block_status(
    user_id: int,
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    return BlockStatusResponse(
        user_id=user_id,
        is_blocked=await social_service.is_blocked(current_user["user_id"], user_id),
    )


@router.post(
    "/{user_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def block_user(
    user_id: int,
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    """
    Raises:
        404: No such user
        400: Blocking yourself, or already blocked
    """
    await social_service.block_user(current_user["user_id"], user_id)
    return MessageResponse(message="User blocked")


@router.delete("/{user_id}", response_model=MessageResponse)
async def unblock_user(
    user_id: int,
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    await social_service.unblock_user(current_user["user_id"], user_id)
    return MessageResponse(message="User unblocked")
