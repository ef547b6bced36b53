"""
Follow Handler

Follow edges between users. Following notifies the followed user.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import CurrentUser, Pagination
from src.api.dependencies.services import get_social_service
from src.shared.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta
from src.shared.schemas.social import FollowStatusResponse
from src.shared.schemas.user import UserResponse
from src.shared.services.social_service import SocialService


router = APIRouter()


@router.get("/followers", response_model=PaginatedResponse[UserResponse])
async def get_followers(
    current_user: CurrentUser,
    pagination: Pagination,
    social_service: SocialService = Depends(get_social_service),
):
    users, total = await social_service.get_followers(
        current_user["user_id"], pagination.limit, pagination.offset
    )
    return PaginatedResponse[UserResponse](
        data=[UserResponse.model_validate(u) for u in users],
        pagination=PaginationMeta.from_params(pagination, total),
    )


@router.get("/following", response_model=PaginatedResponse[UserResponse])
async def get_following(
    current_user: CurrentUser,
    pagination: Pagination,
    social_service: SocialService = Depends(get_social_service),
):
    users, total = await social_service.get_following(
        current_user["user_id"], pagination.limit, pagination.offset
    )
    return PaginatedResponse[UserResponse](
        data=[UserResponse.model_validate(u) for u in users],
        pagination=PaginationMeta.from_params(pagination, total),
    )


@router.get("/status/{user_id}", response_model=FollowStatusResponse)
async def follow_status(
    user_id: int,
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    return FollowStatusResponse(
        user_id=user_id,
        is_following=await social_service.is_following(current_user["user_id"], user_id),
    )


@router.post(
    "/{user_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def follow_user(
    user_id: int,
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    """
    Follow a user.

    Raises:
        404: No such user
        400: Following yourself, or already following
        403: The target has blocked the caller
    """
    await social_service.follow_user(current_user["user_id"], user_id)
    return MessageResponse(message="User followed")


@router.delete("/{user_id}", response_model=MessageResponse)
async def unfollow_user(
    user_id: int,
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    await social_service.unfollow_user(current_user["user_id"], user_id)
    return MessageResponse(message="User unfollowed")
