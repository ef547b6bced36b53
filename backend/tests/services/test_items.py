"""Wardrobe items: ownership, batch delete, search, statistics."""

import io

import pytest
from fastapi import UploadFile
from pydantic import ValidationError as SchemaValidationError
from starlette.datastructures import Headers

from src.shared.core.exceptions import ForbiddenError, ItemNotFoundError
from src.shared.schemas.item import ItemCreate, ItemFilter, ItemUpdate
from src.shared.services.item_service import ItemService


@pytest.fixture
def items(db, storage):
    return ItemService(db, storage)


async def test_create_and_partial_update(items, make_user):
    a = await make_user()
    item = await items.create_item(
        a.id, ItemCreate(super_item="outer", season=4, tpo=1, color=3, rating=4)
    )

    updated = await items.update_item(a.id, item.id, ItemUpdate(memo="dry clean only"))

    assert updated.memo == "dry clean only"
    assert (updated.super_item, updated.season, updated.rating) == ("outer", 4, 4)


def test_item_schema_rejects_unknown_category_and_ranges():
    with pytest.raises(SchemaValidationError):
        ItemCreate(super_item="cape", season=1, tpo=1, color=1)
    with pytest.raises(SchemaValidationError):
        ItemCreate(super_item="tops", season=6, tpo=1, color=1)
    with pytest.raises(SchemaValidationError):
        ItemUpdate(color=16)


async def test_only_owner_modifies(items, make_user, make_item):
    a, b = await make_user(), await make_user()
    item = await make_item(a)

    with pytest.raises(ForbiddenError):
        await items.update_item(b.id, item.id, ItemUpdate(rating=1))
    with pytest.raises(ForbiddenError):
        await items.delete_item(b.id, item.id)
    with pytest.raises(ItemNotFoundError):
        await items.get_item(404404)


async def test_batch_delete_skips_missing_ids(items, make_user, make_item):
    a = await make_user()
    first, second, keep = await make_item(a), await make_item(a), await make_item(a)

    deleted = await items.delete_user_items(a.id, [first.id, second.id, 9999])

    assert deleted == 2
    page = await items.get_user_items(a.id, 20, 0)
    assert [i.id for i in page.items] == [keep.id]


async def test_batch_delete_with_foreign_item_deletes_nothing(items, make_user, make_item):
    a, b = await make_user(), await make_user()
    mine, theirs = await make_item(a), await make_item(b)

    with pytest.raises(ForbiddenError):
        await items.delete_user_items(a.id, [mine.id, theirs.id])

    assert (await items.get_user_items(a.id, 20, 0)).total == 1


async def test_search_filters(items, make_user, make_item):
    a, b = await make_user(), await make_user()
    await make_item(a, super_item="shoes", color=1, rating=5)
    await make_item(a, super_item="shoes", color=2, rating=1)
    await make_item(b, super_item="shoes", color=1, rating=5)
    await make_item(a, super_item="bag", color=1)

    page = await items.search_items(ItemFilter(super_item="shoes", color=1))
    assert page.total == 2

    page = await items.search_items(ItemFilter(user_id=a.id, min_rating=2))
    assert page.total == 1

    page = await items.search_items(ItemFilter(per_page=1, page=2))
    assert page.total == 4
    assert len(page.items) == 1


async def test_statistics(items, make_user, make_item):
    a = await make_user()
    await make_item(a, super_item="tops", season=1, rating=4)
    await make_item(a, super_item="tops", season=2, rating=0)
    await make_item(a, super_item="shoes", season=2, rating=2)

    stats = await items.get_user_item_statistics(a.id)

    assert stats.total_items == 3
    assert stats.category_count == {"tops": 2, "shoes": 1}
    assert stats.season_count == {1: 1, 2: 2}
    assert stats.average_rating == pytest.approx(3.0)


async def test_picture_upload_replaces_previous(db, items, make_user, make_item, tmp_path):
    a = await make_user()
    item = await make_item(a)

    def png(data):
        return UploadFile(
            file=io.BytesIO(data),
            filename="item.png",
            headers=Headers({"content-type": "image/png"}),
        )

    first = await items.upload_item_picture(a.id, item.id, png(b"one"))
    first_url = first.picture
    second = await items.upload_item_picture(a.id, item.id, png(b"two"))

    assert second.picture != first_url
    # the replaced file outlives the transaction that replaced it
    assert len(list((tmp_path / "uploads" / "items").iterdir())) == 2

    await db.commit()
    stored = list((tmp_path / "uploads" / "items").iterdir())
    assert len(stored) == 1
    assert stored[0].read_bytes() == b"two"


def test_code_bounds_follow_the_enums():
    assert ItemCreate(super_item="tops", season=5, tpo=5, color=15).color == 15
    with pytest.raises(SchemaValidationError):
        ItemCreate(super_item="tops", season=1, tpo=1, color=16)
    with pytest.raises(SchemaValidationError):
        ItemUpdate(season=6)
    with pytest.raises(SchemaValidationError):
        ItemFilter(tpo=0)
