"""
Social Schemas

Comments, follow / block status and notifications.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.shared.models.enums import NotificationAction
from src.shared.schemas.common import BaseSchema, PaginationMeta


# ═══════════════════════════════════════════════════════════════════════════════
# COMMENTS
# ═══════════════════════════════════════════════════════════════════════════════


class CommentCreate(BaseModel):
    coordinate_id: int
    comment: str = Field(min_length=1, max_length=1000)


class CommentUpdate(BaseModel):
    comment: str = Field(min_length=1, max_length=1000)


class CommentResponse(BaseSchema):
    id: int
    user_id: int
    coordinate_id: int
    comment: str
    created_at: datetime
    updated_at: datetime


# ═══════════════════════════════════════════════════════════════════════════════
# FOLLOW / BLOCK
# ═══════════════════════════════════════════════════════════════════════════════


class FollowStatusResponse(BaseModel):
    user_id: int
    is_following: bool


class BlockStatusResponse(BaseModel):
    user_id: int
    is_blocked: bool


# ═══════════════════════════════════════════════════════════════════════════════
# NOTIFICATIONS
# ═══════════════════════════════════════════════════════════════════════════════


class NotificationResponse(BaseSchema):
    id: int
    sender_id: int
    receiver_id: int
    action: NotificationAction
    coordinate_id: Optional[int] = None
    comment_id: Optional[int] = None
    like_coordinate_id: Optional[int] = None
    checked: bool
    created_at: datetime


class NotificationListResponse(BaseModel):
    """
    Receiver inbox page.

    pagination.total counts every notification of the receiver;
    unread_count is reported separately.
    """

    data: list[NotificationResponse]
    pagination: PaginationMeta
    unread_count: int


class UnreadCountResponse(BaseModel):
    unread_count: int


class MarkAllReadResponse(BaseModel):
    updated: int
    message: str = "All notifications marked as read"
