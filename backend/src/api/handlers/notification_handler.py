"""
Notification Handler

The caller's inbox of follow, like and comment notifications.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import CurrentUser, Pagination
from src.api.dependencies.services import get_social_service
from src.shared.schemas.common import PaginationMeta
from src.shared.schemas.social import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from src.shared.services.social_service import SocialService


router = APIRouter()


@router.get("", response_model=NotificationListResponse)
async def get_notifications(
    current_user: CurrentUser,
    pagination: Pagination,
    social_service: SocialService = Depends(get_social_service),
):
    """
    Newest first. `pagination.total` counts all notifications; the unread
    count is reported separately.
    """
    notifications, total, unread = await social_service.get_notifications(
        current_user["user_id"], pagination.limit, pagination.offset
    )
    return NotificationListResponse(
        data=[NotificationResponse.model_validate(n) for n in notifications],
        pagination=PaginationMeta.from_params(pagination, total),
        unread_count=unread,
    )


@router.get("/unread", response_model=list[NotificationResponse])
async def get_unread_notifications(
    current_user: CurrentUser,
    pagination: Pagination,
    social_service: SocialService = Depends(get_social_service),
):
    return await social_service.get_unread_notifications(
        current_user["user_id"], pagination.limit, pagination.offset
    )


@router.get("/unread/count", response_model=UnreadCountResponse)
async def get_unread_count(
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    return UnreadCountResponse(
        unread_count=await social_service.get_unread_notification_count(current_user["user_id"])
    )


@router.put("/read_all", response_model=MarkAllReadResponse)
async def mark_all_as_read(
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    updated = await social_service.mark_all_notifications_as_read(current_user["user_id"])
    return MarkAllReadResponse(updated=updated)


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_as_read(
    notification_id: int,
    current_user: CurrentUser,
    social_service: SocialService = Depends(get_social_service),
):
    """
    Raises:
        404: No such notification
        403: The notification belongs to another user
    """
    return await social_service.mark_notification_as_read(
        current_user["user_id"], notification_id
    )
