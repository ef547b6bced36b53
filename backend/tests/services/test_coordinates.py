"""Coordinate writes keep the item links consistent."""

import pytest
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError

from src.shared.core.exceptions import (
    CoordinateNotFoundError,
    ForbiddenError,
    ItemNotFoundError,
)
from src.shared.repositories.coordinate_repository import CoordinateRepository
from src.shared.repositories.item_repository import ItemRepository
from src.shared.schemas.coordinate import CoordinateCreate, CoordinateFilter, CoordinateUpdate
from src.shared.services.coordinate_service import CoordinateService


@pytest.fixture
def coordinates(db, storage):
    return CoordinateService(db, storage)


async def linked_ids(db, coordinate_id):
    return sorted(i.id for i in await ItemRepository(db).get_by_coordinate_id(coordinate_id))


async def test_create_links_items(coordinates, db, make_user, make_item):
    a = await make_user()
    top, shoes = await make_item(a), await make_item(a, super_item="shoes")

    coordinate = await coordinates.create_coordinate(
        a.id, CoordinateCreate(season=2, tpo=2, item_ids=[top.id, shoes.id, top.id])
    )

    assert sorted(i.id for i in coordinate.items) == sorted([top.id, shoes.id])
    assert await linked_ids(db, coordinate.id) == sorted([top.id, shoes.id])


async def test_create_with_foreign_item_leaves_nothing_behind(coordinates, db, make_user, make_item):
    a, b = await make_user(), await make_user()
    mine, theirs = await make_item(a), await make_item(b)

    with pytest.raises(ForbiddenError):
        await coordinates.create_coordinate(
            a.id, CoordinateCreate(season=1, tpo=1, item_ids=[mine.id, theirs.id])
        )

    _, total = await coordinates.get_user_coordinates(a.id, 20, 0)
    assert total == 0
    await db.refresh(mine)
    assert mine.coordinate_id is None


async def test_create_with_missing_item(coordinates, make_user, make_item):
    a = await make_user()
    item = await make_item(a)
    with pytest.raises(ItemNotFoundError):
        await coordinates.create_coordinate(
            a.id, CoordinateCreate(season=1, tpo=1, item_ids=[item.id, 5555])
        )


async def test_update_replaces_item_set(coordinates, db, make_user, make_item, make_coordinate):
    a = await make_user()
    old1, old2, new = await make_item(a), await make_item(a), await make_item(a)
    coordinate = await make_coordinate(a, items=[old1, old2])

    updated = await coordinates.update_coordinate(
        a.id, coordinate.id, CoordinateUpdate(memo="rainy day", item_ids=[new.id])
    )

    assert updated.memo == "rainy day"
    assert [i.id for i in updated.items] == [new.id]
    assert await linked_ids(db, coordinate.id) == [new.id]


async def test_update_without_item_ids_keeps_links(coordinates, db, make_user, make_item, make_coordinate):
    a = await make_user()
    item = await make_item(a)
    coordinate = await make_coordinate(a, items=[item], rating=2)

    updated = await coordinates.update_coordinate(a.id, coordinate.id, CoordinateUpdate(rating=5))

    assert updated.rating == 5
    assert updated.season == coordinate.season
    assert await linked_ids(db, coordinate.id) == [item.id]


async def test_update_with_foreign_item_keeps_previous_state(coordinates, db, make_user, make_item, make_coordinate):
    a, b = await make_user(), await make_user()
    mine, theirs = await make_item(a), await make_item(b)
    coordinate = await make_coordinate(a, items=[mine], memo="before")

    with pytest.raises(ForbiddenError):
        await coordinates.update_coordinate(
            a.id, coordinate.id, CoordinateUpdate(memo="after", item_ids=[theirs.id])
        )

    reloaded = await coordinates.get_coordinate(coordinate.id)
    assert reloaded.memo == "before"
    assert await linked_ids(db, coordinate.id) == [mine.id]


async def test_only_owner_updates_or_deletes(coordinates, make_user, make_coordinate):
    a, b = await make_user(), await make_user()
    coordinate = await make_coordinate(a)

    with pytest.raises(ForbiddenError):
        await coordinates.update_coordinate(b.id, coordinate.id, CoordinateUpdate(memo="x"))
    with pytest.raises(ForbiddenError):
        await coordinates.delete_coordinate(b.id, coordinate.id)


async def test_delete_detaches_items(coordinates, db, make_user, make_item, make_coordinate):
    a = await make_user()
    item = await make_item(a)
    coordinate = await make_coordinate(a, items=[item])

    await coordinates.delete_coordinate(a.id, coordinate.id)

    with pytest.raises(CoordinateNotFoundError):
        await coordinates.get_coordinate(coordinate.id)
    await db.refresh(item)
    assert item.coordinate_id is None


async def test_search_and_statistics(coordinates, make_user, make_coordinate):
    a, b = await make_user(), await make_user()
    await make_coordinate(a, season=1, tpo=1, rating=4)
    await make_coordinate(a, season=1, tpo=3, rating=2)
    summer = await make_coordinate(a, season=2, tpo=3, rating=0)
    await make_coordinate(b, season=2, tpo=3)
    await coordinates.like_coordinate(b.id, summer.id)

    found, total = await coordinates.search_coordinates(CoordinateFilter(user_id=a.id, season=2))
    assert total == 1
    assert found[0].id == summer.id

    found, total = await coordinates.search_coordinates(CoordinateFilter(min_rating=3))
    assert total == 1

    stats = await coordinates.get_user_coordinate_statistics(a.id)
    assert stats.total_coordinates == 3
    assert stats.season_count == {1: 2, 2: 1}
    assert stats.tpo_count == {1: 1, 3: 2}
    assert stats.total_likes == 1
    assert stats.average_rating == pytest.approx(3.0)


async def test_create_rolls_back_when_linking_fails(coordinates, make_user, make_item, monkeypatch):
    a = await make_user()
    item = await make_item(a)

    async def broken(self, item_ids, coordinate_id):
        raise SQLAlchemyError("link failed")

    monkeypatch.setattr(ItemRepository, "link_to_coordinate", broken)

    with pytest.raises(SQLAlchemyError):
        await coordinates.create_coordinate(
            a.id, CoordinateCreate(season=1, tpo=1, item_ids=[item.id])
        )

    _, total = await coordinates.get_user_coordinates(a.id, 20, 0)
    assert total == 0


async def test_delete_rolls_back_when_delete_fails(coordinates, db, make_user, make_item, make_coordinate, monkeypatch):
    a = await make_user()
    item = await make_item(a)
    coordinate = await make_coordinate(a, items=[item])

    async def broken(self, instance):
        raise SQLAlchemyError("delete failed")

    monkeypatch.setattr(CoordinateRepository, "delete_instance", broken)

    with pytest.raises(SQLAlchemyError):
        await coordinates.delete_coordinate(a.id, coordinate.id)

    assert await linked_ids(db, coordinate.id) == [item.id]


def test_silhouette_bounds_follow_their_tables():
    assert CoordinateCreate(season=1, tpo=1, si_bottom_length=6).si_bottom_length == 6
    with pytest.raises(SchemaValidationError):
        CoordinateCreate(season=1, tpo=1, si_bottom_length=7)
    with pytest.raises(SchemaValidationError):
        CoordinateUpdate(si_bottom_type=3)
    with pytest.raises(SchemaValidationError):
        CoordinateCreate(season=6, tpo=1)
