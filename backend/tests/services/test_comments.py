"""Comments on coordinates."""

import pytest

from src.shared.core.exceptions import (
    CommentNotFoundError,
    CoordinateNotFoundError,
    ForbiddenError,
)
from src.shared.models.enums import NotificationAction
from src.shared.repositories.notification_repository import NotificationRepository
from src.shared.services.social_service import SocialService


@pytest.fixture
def social(db):
    return SocialService(db)


async def test_comment_notifies_owner(social, db, make_user, make_coordinate):
    a, b = await make_user(), await make_user()
    c1 = await make_coordinate(a)

    comment = await social.create_comment(b.id, c1.id, "love the shoes")

    notifications, total = await NotificationRepository(db).get_by_receiver(a.id, 20, 0)
    assert total == 1
    n = notifications[0]
    assert n.action == NotificationAction.COMMENT.value
    assert (n.sender_id, n.receiver_id) == (b.id, a.id)
    assert (n.coordinate_id, n.comment_id) == (c1.id, comment.id)


async def test_commenting_own_coordinate_does_not_notify(social, db, make_user, make_coordinate):
    a = await make_user()
    c1 = await make_coordinate(a)

    await social.create_comment(a.id, c1.id, "note to self")

    assert (await NotificationRepository(db).get_by_receiver(a.id, 20, 0))[1] == 0


async def test_comment_on_missing_coordinate(social, make_user):
    a = await make_user()
    with pytest.raises(CoordinateNotFoundError):
        await social.create_comment(a.id, 31337, "hello")


async def test_only_author_edits_or_deletes(social, make_user, make_coordinate):
    a, b = await make_user(), await make_user()
    c1 = await make_coordinate(a)
    comment = await social.create_comment(b.id, c1.id, "first")

    with pytest.raises(ForbiddenError):
        await social.update_comment(a.id, comment.id, "hijack")
    with pytest.raises(ForbiddenError):
        await social.delete_comment(a.id, comment.id)

    updated = await social.update_comment(b.id, comment.id, "edited")
    assert updated.comment == "edited"

    await social.delete_comment(b.id, comment.id)
    with pytest.raises(CommentNotFoundError):
        await social.update_comment(b.id, comment.id, "gone")


async def test_list_comments(social, make_user, make_coordinate):
    a, b = await make_user(), await make_user()
    c1 = await make_coordinate(a)
    for text in ("one", "two", "three"):
        await social.create_comment(b.id, c1.id, text)

    comments, total = await social.get_comments(c1.id, 2, 0)
    assert total == 3
    assert len(comments) == 2

    with pytest.raises(CoordinateNotFoundError):
        await social.get_comments(999, 20, 0)
