"""Timeline assembled from followed users' recent coordinates."""

import pytest

from src.config.settings import settings
from src.shared.services.coordinate_service import CoordinateService
from src.shared.services.social_service import SocialService


@pytest.fixture
def coordinates(db, storage):
    return CoordinateService(db, storage)


@pytest.fixture
def social(db):
    return SocialService(db)


async def test_timeline_includes_only_direct_follows(coordinates, social, make_user, make_coordinate):
    a, b, c = await make_user(), await make_user(), await make_user()
    await social.follow_user(a.id, b.id)
    await social.follow_user(b.id, c.id)
    b_coord = await make_coordinate(b)
    await make_coordinate(c)
    await make_coordinate(a)

    timeline = await coordinates.get_timeline_coordinates(a.id)

    assert [co.id for co in timeline] == [b_coord.id]


async def test_timeline_caps_each_followed_user(coordinates, social, make_user, make_coordinate):
    a, b = await make_user(), await make_user()
    await social.follow_user(a.id, b.id)
    created = [await make_coordinate(b) for _ in range(settings.TIMELINE_PER_USER_LIMIT + 2)]

    timeline = await coordinates.get_timeline_coordinates(a.id)

    assert len(timeline) == settings.TIMELINE_PER_USER_LIMIT
    newest = [co.id for co in reversed(created)][: settings.TIMELINE_PER_USER_LIMIT]
    assert [co.id for co in timeline] == newest


async def test_timeline_skips_users_the_viewer_blocked(coordinates, social, make_user, make_coordinate):
    a, b, c = await make_user(), await make_user(), await make_user()
    await social.follow_user(a.id, b.id)
    await social.follow_user(a.id, c.id)
    await make_coordinate(b)
    c_coord = await make_coordinate(c)

    await social.block_user(a.id, b.id)
    timeline = await coordinates.get_timeline_coordinates(a.id)

    assert [co.id for co in timeline] == [c_coord.id]


async def test_timeline_ignores_limit_and_offset(coordinates, social, make_user, make_coordinate):
    a, b = await make_user(), await make_user()
    await social.follow_user(a.id, b.id)
    for _ in range(3):
        await make_coordinate(b)

    timeline = await coordinates.get_timeline_coordinates(a.id, limit=1, offset=5)

    assert len(timeline) == 3


async def test_timeline_is_empty_without_follows(coordinates, make_user, make_coordinate):
    a, b = await make_user(), await make_user()
    await make_coordinate(b)
    assert await coordinates.get_timeline_coordinates(a.id) == []
