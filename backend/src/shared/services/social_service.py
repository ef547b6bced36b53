"""
Social Service

Business rules for the social graph and interactions: comments, follow
edges, block edges and notifications.

Rule Overview:
==============
    follow_user(A, B)
        B missing              → NotFoundError
        A == B                 → InvalidOperationError("cannot follow yourself")
        edge A→B exists        → ConflictError("already following")
        B has blocked A        → ForbiddenError
        ok                     → insert edge, notify B (follow)

    block_user(A, B)
        B missing              → NotFoundError
        A == B                 → InvalidOperationError("cannot block yourself")
        edge A→B exists        → ConflictError("already blocked")
        ok                     → insert edge (follow edges are left as they are)

    create_comment(U, C, text)
        C missing              → NotFoundError
        owner(C) blocked U     → ForbiddenError
        ok                     → insert, notify owner unless owner == U

Notification Side Effects:
==========================
notify() runs the insert in its own SAVEPOINT. A failure there is logged and
discarded: the savepoint is rolled back, the primary action stays in the
request transaction and is committed as usual. Self-directed events never
produce a notification.

Usage:
======
    service = SocialService(db)
    await service.follow_user(follower_id=3, followed_id=7)
    notifications, total, unread = await service.get_notifications(7, limit=20, offset=0)
"""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import (
    CommentNotFoundError,
    ConflictError,
    CoordinateNotFoundError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    NotificationNotFoundError,
    UserNotFoundError,
)
from src.shared.core.logging import logger
from src.shared.models.block import Block
from src.shared.models.comment import Comment
from src.shared.models.enums import NotificationAction
from src.shared.models.notification import Notification
from src.shared.models.relationship import Relationship
from src.shared.models.user import User
from src.shared.repositories.block_repository import BlockRepository
from src.shared.repositories.comment_repository import CommentRepository
from src.shared.repositories.coordinate_repository import CoordinateRepository
from src.shared.repositories.notification_repository import NotificationRepository
from src.shared.repositories.relationship_repository import RelationshipRepository
from src.shared.repositories.user_repository import UserRepository


class SocialService:
    """
    Service for comments, follows, blocks and notifications.

    Attributes:
        session: Database session
        users / coordinates / comments / relationships / blocks / notifications:
            Repositories sharing that session
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.coordinates = CoordinateRepository(session)
        self.comments = CommentRepository(session)
        self.relationships = RelationshipRepository(session)
        self.blocks = BlockRepository(session)
        self.notifications = NotificationRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # COMMENTS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_comment(self, user_id: int, coordinate_id: int, text: str) -> Comment:
        """
        Comment on a coordinate.

        Raises:
            CoordinateNotFoundError: Coordinate does not exist
            ForbiddenError: The coordinate owner has blocked the commenter
        """
        coordinate = await self.coordinates.get(coordinate_id)
        if not coordinate:
            raise CoordinateNotFoundError(coordinate_id)

        if await self.blocks.is_blocked(coordinate.user_id, user_id):
            raise ForbiddenError("you are blocked by the owner of this coordinate")

        comment = await self.comments.create(
            user_id=user_id,
            coordinate_id=coordinate_id,
            comment=text,
        )
        logger.info(
            "Comment created",
            comment_id=comment.id,
            user_id=user_id,
            coordinate_id=coordinate_id,
        )

        await self.notify(
            sender_id=user_id,
            receiver_id=coordinate.user_id,
            action=NotificationAction.COMMENT,
            coordinate_id=coordinate_id,
            comment_id=comment.id,
        )
        return comment

    async def get_comments(
        self,
        coordinate_id: int,
        limit: int,
        offset: int,
    ) -> tuple[list[Comment], int]:
        if not await self.coordinates.exists(coordinate_id):
            raise CoordinateNotFoundError(coordinate_id)
        return await self.comments.get_by_coordinate_id(coordinate_id, limit, offset)

    async def update_comment(self, user_id: int, comment_id: int, text: str) -> Comment:
        comment = await self._owned_comment(user_id, comment_id)
        return await self.comments.apply(comment, {"comment": text})

    async def delete_comment(self, user_id: int, comment_id: int) -> None:
        comment = await self._owned_comment(user_id, comment_id)
        await self.comments.delete_instance(comment)
        logger.info("Comment deleted", comment_id=comment_id, user_id=user_id)

    async def _owned_comment(self, user_id: int, comment_id: int) -> Comment:
        comment = await self.comments.get(comment_id)
        if not comment:
            raise CommentNotFoundError(comment_id)
        if comment.user_id != user_id:
            raise ForbiddenError("you can only modify your own comments")
        return comment

    # ═══════════════════════════════════════════════════════════════════════════
    # FOLLOW
    # ═══════════════════════════════════════════════════════════════════════════

    async def follow_user(self, follower_id: int, followed_id: int) -> Relationship:
        """
        Create the follow edge follower → followed.

        Raises:
            UserNotFoundError: followed_id does not exist
            InvalidOperationError: follower_id == followed_id
            ForbiddenError: followed has blocked follower (checked before the
                edge, so it wins over "already following")
            ConflictError: Edge already exists
        """
        if not await self.users.exists(followed_id):
            raise UserNotFoundError(followed_id)

        if follower_id == followed_id:
            raise InvalidOperationError("cannot follow yourself")

        if await self.blocks.is_blocked(followed_id, follower_id):
            raise ForbiddenError("you are blocked by this user")

        if await self.relationships.is_following(follower_id, followed_id):
            raise ConflictError("already following")

        edge = await self.relationships.create_guarded(
            follower_id=follower_id,
            followed_id=followed_id,
        )
        if edge is None:
            raise ConflictError("already following")

        logger.info("User followed", follower_id=follower_id, followed_id=followed_id)

        await self.notify(
            sender_id=follower_id,
            receiver_id=followed_id,
            action=NotificationAction.FOLLOW,
        )
        return edge

    async def unfollow_user(self, follower_id: int, followed_id: int) -> None:
        edge = await self.relationships.get_edge(follower_id, followed_id)
        if not edge:
            raise NotFoundError("not following")
        await self.relationships.delete_instance(edge)
        logger.info("User unfollowed", follower_id=follower_id, followed_id=followed_id)

    async def get_followers(self, user_id: int, limit: int, offset: int) -> tuple[list[User], int]:
        return await self.relationships.get_followers(user_id, limit, offset)

    async def get_following(self, user_id: int, limit: int, offset: int) -> tuple[list[User], int]:
        return await self.relationships.get_following(user_id, limit, offset)

    async def is_following(self, follower_id: int, followed_id: int) -> bool:
        return await self.relationships.is_following(follower_id, followed_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # BLOCK
    # ═══════════════════════════════════════════════════════════════════════════

    async def block_user(self, blocker_id: int, blocked_id: int) -> Block:
        """
        Create the block edge blocker → blocked.

        Existing follow edges in either direction are not removed.

        Raises:
            UserNotFoundError: blocked_id does not exist
            InvalidOperationError: blocker_id == blocked_id
            ConflictError: Edge already exists
        """
        if not await self.users.exists(blocked_id):
            raise UserNotFoundError(blocked_id)

        if blocker_id == blocked_id:
            raise InvalidOperationError("cannot block yourself")

        if await self.blocks.is_blocked(blocker_id, blocked_id):
            raise ConflictError("already blocked")

        edge = await self.blocks.create_guarded(blocker_id=blocker_id, blocked_id=blocked_id)
        if edge is None:
            raise ConflictError("already blocked")

        logger.info("User blocked", blocker_id=blocker_id, blocked_id=blocked_id)
        return edge

    async def unblock_user(self, blocker_id: int, blocked_id: int) -> None:
        edge = await self.blocks.get_edge(blocker_id, blocked_id)
        if not edge:
            raise NotFoundError("not blocked")
        await self.blocks.delete_instance(edge)
        logger.info("User unblocked", blocker_id=blocker_id, blocked_id=blocked_id)

    async def get_blocked_users(self, user_id: int) -> list[User]:
        return await self.blocks.get_blocked_users(user_id)

    async def is_blocked(self, blocker_id: int, blocked_id: int) -> bool:
        return await self.blocks.is_blocked(blocker_id, blocked_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # NOTIFICATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_notification(
        self,
        *,
        sender_id: int,
        receiver_id: int,
        action: NotificationAction,
        coordinate_id: Optional[int] = None,
        comment_id: Optional[int] = None,
        like_coordinate_id: Optional[int] = None,
    ) -> Notification:
        """Insert a notification row. Internal entry point, no route exposes it."""
        return await self.notifications.create(
            sender_id=sender_id,
            receiver_id=receiver_id,
            action=action.value,
            coordinate_id=coordinate_id,
            comment_id=comment_id,
            like_coordinate_id=like_coordinate_id,
            checked=False,
        )

    async def notify(
        self,
        *,
        sender_id: int,
        receiver_id: int,
        action: NotificationAction,
        coordinate_id: Optional[int] = None,
        comment_id: Optional[int] = None,
        like_coordinate_id: Optional[int] = None,
    ) -> Optional[Notification]:
        """
        Best-effort notification for a social action.

        Returns:
            The notification, or None when self-directed or when the write failed
        """
        if sender_id == receiver_id:
            return None

        try:
            async with self.session.begin_nested():
                return await self.create_notification(
                    sender_id=sender_id,
                    receiver_id=receiver_id,
                    action=action,
                    coordinate_id=coordinate_id,
                    comment_id=comment_id,
                    like_coordinate_id=like_coordinate_id,
                )
        except SQLAlchemyError as e:
            logger.warning(
                "Notification creation failed",
                action=action.value,
                sender_id=sender_id,
                receiver_id=receiver_id,
                error=str(e),
            )
            return None

    async def get_notifications(
        self,
        user_id: int,
        limit: int,
        offset: int,
    ) -> tuple[list[Notification], int, int]:
        """
        Inbox page for a receiver.

        Returns:
            (notifications, total notifications, unread count)
        """
        notifications, total = await self.notifications.get_by_receiver(user_id, limit, offset)
        unread = await self.notifications.count_unread(user_id)
        return notifications, total, unread

    async def get_unread_notifications(
        self,
        user_id: int,
        limit: int,
        offset: int,
    ) -> list[Notification]:
        return await self.notifications.get_unread(user_id, limit, offset)

    async def get_unread_notification_count(self, user_id: int) -> int:
        return await self.notifications.count_unread(user_id)

    async def mark_notification_as_read(self, user_id: int, notification_id: int) -> Notification:
        """
        Raises:
            NotificationNotFoundError: No such notification
            ForbiddenError: The caller is not the receiver
        """
        notification = await self.notifications.get(notification_id)
        if not notification:
            raise NotificationNotFoundError(notification_id)
        if notification.receiver_id != user_id:
            raise ForbiddenError("you can only read your own notifications")
        return await self.notifications.apply(notification, {"checked": True})

    async def mark_all_notifications_as_read(self, user_id: int) -> int:
        updated = await self.notifications.mark_all_as_read(user_id)
        logger.info("Notifications marked as read", user_id=user_id, updated=updated)
        return updated
