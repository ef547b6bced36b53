"""Notification inbox and best-effort delivery."""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from src.shared.core.exceptions import ForbiddenError, NotificationNotFoundError
from src.shared.models.enums import NotificationAction
from src.shared.services.coordinate_service import CoordinateService
from src.shared.services.social_service import SocialService


@pytest.fixture
def social(db):
    return SocialService(db)


async def test_mark_all_as_read_is_receiver_scoped(social, make_user):
    a, b, c = await make_user(), await make_user(), await make_user()
    await social.follow_user(b.id, a.id)
    await social.follow_user(c.id, a.id)
    await social.follow_user(a.id, b.id)

    assert await social.get_unread_notification_count(a.id) == 2

    updated = await social.mark_all_notifications_as_read(a.id)

    assert updated == 2
    assert await social.get_unread_notification_count(a.id) == 0
    assert await social.get_unread_notification_count(b.id) == 1
    notifications, total, unread = await social.get_notifications(a.id, 20, 0)
    assert total == 2
    assert unread == 0
    assert all(n.checked for n in notifications)


async def test_inbox_total_and_unread_are_separate(social, make_user):
    a, b, c = await make_user(), await make_user(), await make_user()
    await social.follow_user(b.id, a.id)
    await social.follow_user(c.id, a.id)

    notifications, _, _ = await social.get_notifications(a.id, 20, 0)
    await social.mark_notification_as_read(a.id, notifications[0].id)

    page, total, unread = await social.get_notifications(a.id, 1, 0)
    assert len(page) == 1
    assert total == 2
    assert unread == 1
    unread_rows = await social.get_unread_notifications(a.id, 20, 0)
    assert [n.id for n in unread_rows] == [notifications[1].id]


async def test_mark_as_read_checks_receiver(social, make_user):
    a, b, c = await make_user(), await make_user(), await make_user()
    await social.follow_user(b.id, a.id)
    notifications, _, _ = await social.get_notifications(a.id, 20, 0)

    with pytest.raises(ForbiddenError):
        await social.mark_notification_as_read(c.id, notifications[0].id)
    with pytest.raises(NotificationNotFoundError):
        await social.mark_notification_as_read(a.id, 12345)

    marked = await social.mark_notification_as_read(a.id, notifications[0].id)
    assert marked.checked is True


async def test_self_directed_notification_is_skipped(social, make_user):
    a = await make_user()
    result = await social.notify(
        sender_id=a.id, receiver_id=a.id, action=NotificationAction.FOLLOW
    )
    assert result is None


async def test_failed_notification_write_is_contained(social, make_user):
    a = await make_user()

    # receiver does not exist: the FK violation is rolled back to the savepoint
    result = await social.notify(
        sender_id=a.id, receiver_id=99999, action=NotificationAction.FOLLOW
    )

    assert result is None
    # session still usable
    assert await social.users.exists(a.id)


async def test_notification_failure_does_not_undo_like(db, storage, make_user, make_coordinate, monkeypatch):
    a, b = await make_user(), await make_user()
    c1 = await make_coordinate(a)

    async def broken(self, **kwargs):
        raise SQLAlchemyError("notifications table unavailable")

    monkeypatch.setattr(SocialService, "create_notification", broken)

    coordinates = CoordinateService(db, storage)
    await coordinates.like_coordinate(b.id, c1.id)

    assert await coordinates.count_likes(c1.id) == 1
    assert await coordinates.social.get_unread_notification_count(a.id) == 0


async def test_notification_failure_does_not_undo_follow(social, make_user, monkeypatch):
    a, b = await make_user(), await make_user()

    async def broken(self, **kwargs):
        raise SQLAlchemyError("boom")

    monkeypatch.setattr(SocialService, "create_notification", broken)

    await social.follow_user(a.id, b.id)
    assert await social.is_following(a.id, b.id)
