"""
Comment Handler

Comments on coordinates. Listing lives under /coordinates/{id}/comments.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import CurrentUser
from src.api.dependencies.services import get_social_service
from src.shared.schemas.common import MessageResponse
from src.shared.schemas.social import CommentCreate, CommentResponse, CommentUpdate
from src.shared.services.social_service import SocialService


router = APIRouter()


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    data: CommentCreate,
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    """
    Comment on a coordinate and notify its owner.

    Raises:
        404: No such coordinate
        403: The coordinate's owner has blocked the caller
    """
    return await social_service.create_comment(
        current_user["user_id"],
        data.coordinate_id,
        data.comment,
    )


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    data: CommentUpdate,
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    return await social_service.update_comment(current_user["user_id"], comment_id, data.comment)


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    await social_service.delete_comment(current_user["user_id"], comment_id)
    return MessageResponse(message="Comment deleted")
