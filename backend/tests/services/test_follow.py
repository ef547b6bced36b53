"""Follow edges: validation order, uniqueness, notifications."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from src.shared.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    UserNotFoundError,
)
from src.shared.models import Relationship
from src.shared.models.enums import NotificationAction
from src.shared.repositories.notification_repository import NotificationRepository
from src.shared.repositories.relationship_repository import RelationshipRepository
from src.shared.services.social_service import SocialService


@pytest.fixture
def social(db):
    return SocialService(db)


async def test_follow_once_then_conflict(social, make_user):
    a, b = await make_user(), await make_user()

    edge = await social.follow_user(a.id, b.id)
    assert (edge.follower_id, edge.followed_id) == (a.id, b.id)
    assert await social.is_following(a.id, b.id)
    assert not await social.is_following(b.id, a.id)

    with pytest.raises(ConflictError, match="already following"):
        await social.follow_user(a.id, b.id)


async def test_follow_self_is_invalid(social, make_user):
    a = await make_user()
    with pytest.raises(InvalidOperationError, match="cannot follow yourself"):
        await social.follow_user(a.id, a.id)


async def test_follow_unknown_user(social, make_user):
    a = await make_user()
    with pytest.raises(UserNotFoundError):
        await social.follow_user(a.id, 9999)


async def test_follow_blocked_by_target_is_forbidden(social, make_user):
    a, b = await make_user(), await make_user()
    await social.block_user(b.id, a.id)

    with pytest.raises(ForbiddenError, match="blocked"):
        await social.follow_user(a.id, b.id)


async def test_blocked_follower_gets_forbidden_even_when_already_following(social, make_user):
    a, b = await make_user(), await make_user()
    await social.follow_user(a.id, b.id)
    await social.block_user(b.id, a.id)

    # block does not remove the edge
    assert await social.is_following(a.id, b.id)
    with pytest.raises(ForbiddenError):
        await social.follow_user(a.id, b.id)


async def test_block_is_directional_for_follow(social, make_user):
    a, b = await make_user(), await make_user()
    await social.block_user(a.id, b.id)

    # a blocked b, so a may still follow b
    await social.follow_user(a.id, b.id)
    assert await social.is_following(a.id, b.id)


async def test_unfollow(social, make_user):
    a, b = await make_user(), await make_user()

    with pytest.raises(NotFoundError, match="not following"):
        await social.unfollow_user(a.id, b.id)

    await social.follow_user(a.id, b.id)
    await social.unfollow_user(a.id, b.id)
    assert not await social.is_following(a.id, b.id)

    # and can follow again afterwards
    await social.follow_user(a.id, b.id)
    assert await social.is_following(a.id, b.id)


async def test_follow_notifies_followed_user(social, db, make_user):
    a, b = await make_user(), await make_user()
    await social.follow_user(a.id, b.id)

    notifications, total = await NotificationRepository(db).get_by_receiver(b.id, 20, 0)
    assert total == 1
    assert notifications[0].action == NotificationAction.FOLLOW.value
    assert (notifications[0].sender_id, notifications[0].receiver_id) == (a.id, b.id)
    assert notifications[0].checked is False


async def test_followers_and_following_lists(social, make_user):
    a, b, c = await make_user(), await make_user(), await make_user()
    await social.follow_user(b.id, a.id)
    await social.follow_user(c.id, a.id)
    await social.follow_user(a.id, c.id)

    followers, total = await social.get_followers(a.id, 20, 0)
    assert total == 2
    # most recent edge first
    assert [u.id for u in followers] == [c.id, b.id]

    page, total = await social.get_followers(a.id, 1, 1)
    assert total == 2
    assert [u.id for u in page] == [b.id]

    following, total = await social.get_following(a.id, 20, 0)
    assert total == 1
    assert [u.id for u in following] == [c.id]


async def test_duplicate_that_slips_past_the_check_still_conflicts(social, db, make_user, monkeypatch):
    a, b = await make_user(), await make_user()
    await social.follow_user(a.id, b.id)

    async def not_following(self, follower_id, followed_id):
        return False

    monkeypatch.setattr(RelationshipRepository, "is_following", not_following)

    with pytest.raises(ConflictError, match="already following"):
        await social.follow_user(a.id, b.id)

    edges = await db.execute(select(func.count()).select_from(Relationship))
    assert edges.scalar_one() == 1


async def test_missing_follower_is_not_reported_as_duplicate(social, make_user):
    b = await make_user()

    # a token can outlive its user; the foreign key rejects the edge
    with pytest.raises(IntegrityError):
        await social.follow_user(4242, b.id)

    assert not await social.is_following(4242, b.id)
