"""Likes on coordinates."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from src.shared.core.exceptions import ConflictError, CoordinateNotFoundError, NotFoundError
from src.shared.models import LikeCoordinate
from src.shared.models.enums import NotificationAction
from src.shared.repositories.like_coordinate_repository import LikeCoordinateRepository
from src.shared.repositories.notification_repository import NotificationRepository
from src.shared.services.coordinate_service import CoordinateService


@pytest.fixture
def coordinates(db, storage):
    return CoordinateService(db, storage)


async def test_like_twice_conflicts(coordinates, make_user, make_coordinate):
    a, b = await make_user(), await make_user()
    c1 = await make_coordinate(a)

    await coordinates.like_coordinate(b.id, c1.id)
    with pytest.raises(ConflictError, match="already liked"):
        await coordinates.like_coordinate(b.id, c1.id)
    assert await coordinates.count_likes(c1.id) == 1


async def test_unlike_then_like_again(coordinates, make_user, make_coordinate):
    a, b = await make_user(), await make_user()
    c1 = await make_coordinate(a)

    await coordinates.like_coordinate(b.id, c1.id)
    await coordinates.unlike_coordinate(b.id, c1.id)
    assert not await coordinates.is_liked_by_user(b.id, c1.id)

    await coordinates.like_coordinate(b.id, c1.id)
    assert await coordinates.is_liked_by_user(b.id, c1.id)


async def test_unlike_without_like(coordinates, make_user, make_coordinate):
    a = await make_user()
    c1 = await make_coordinate(a)
    with pytest.raises(NotFoundError, match="not liked"):
        await coordinates.unlike_coordinate(a.id, c1.id)


async def test_like_unknown_coordinate(coordinates, make_user):
    a = await make_user()
    with pytest.raises(CoordinateNotFoundError):
        await coordinates.like_coordinate(a.id, 777)


async def test_like_notifies_owner_once(coordinates, db, make_user, make_coordinate):
    a, b = await make_user(), await make_user()
    c1 = await make_coordinate(a)

    like = await coordinates.like_coordinate(b.id, c1.id)

    notifications, total = await NotificationRepository(db).get_by_receiver(a.id, 20, 0)
    assert total == 1
    n = notifications[0]
    assert n.action == NotificationAction.LIKE.value
    assert (n.sender_id, n.receiver_id) == (b.id, a.id)
    assert n.coordinate_id == c1.id
    assert n.like_coordinate_id == like.id


async def test_liking_own_coordinate_does_not_notify(coordinates, db, make_user, make_coordinate):
    a = await make_user()
    c1 = await make_coordinate(a)

    await coordinates.like_coordinate(a.id, c1.id)

    assert await coordinates.count_likes(c1.id) == 1
    assert (await NotificationRepository(db).get_by_receiver(a.id, 20, 0))[1] == 0


async def test_decorate_reports_counts_and_viewer_state(coordinates, make_user, make_coordinate):
    a, b, c = await make_user(), await make_user(), await make_user()
    c1 = await make_coordinate(a)
    c2 = await make_coordinate(a)
    await coordinates.like_coordinate(b.id, c1.id)
    await coordinates.like_coordinate(c.id, c1.id)

    responses = await coordinates.decorate([c1, c2], viewer_id=b.id)
    by_id = {r.id: r for r in responses}
    assert (by_id[c1.id].like_count, by_id[c1.id].is_liked) == (2, True)
    assert (by_id[c2.id].like_count, by_id[c2.id].is_liked) == (0, False)

    anonymous = await coordinates.decorate([c1])
    assert anonymous[0].is_liked is False


async def test_duplicate_like_that_slips_past_the_check_still_conflicts(
    coordinates, db, make_user, make_coordinate, monkeypatch
):
    a, b = await make_user(), await make_user()
    c1 = await make_coordinate(a)
    await coordinates.like_coordinate(b.id, c1.id)

    async def not_liked(self, user_id, coordinate_id):
        return False

    monkeypatch.setattr(LikeCoordinateRepository, "exists_for", not_liked)

    with pytest.raises(ConflictError, match="already liked"):
        await coordinates.like_coordinate(b.id, c1.id)

    likes = await db.execute(select(func.count()).select_from(LikeCoordinate))
    assert likes.scalar_one() == 1


async def test_like_from_missing_user_is_not_a_duplicate(coordinates, make_user, make_coordinate):
    a = await make_user()
    c1 = await make_coordinate(a)

    with pytest.raises(IntegrityError):
        await coordinates.like_coordinate(4242, c1.id)

    assert await coordinates.count_likes(c1.id) == 0
