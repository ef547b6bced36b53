"""
Item Handler

CRUD for wardrobe items, search, statistics, batch deletion and picture
upload. Reads are public; writes act on the caller's own items.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from src.api.dependencies import CurrentUser, Pagination
from src.api.dependencies.services import get_item_service
from src.shared.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta
from src.shared.schemas.item import (
    BatchDeleteItemsRequest,
    BatchDeleteResponse,
    ItemCreate,
    ItemFilter,
    ItemResponse,
    ItemStatistics,
    ItemUpdate,
)
from src.shared.services.item_service import ItemService


router = APIRouter()


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_item(
    data: ItemCreate,
    current_user: CurrentUser,
    item_service: ItemService = Depends(get_item_service),
):
    """
    Create an item owned by the caller.

    Raises:
        400: Unknown category, or season/tpo/color/rating out of range
    """
    return await item_service.create_item(current_user["user_id"], data)


@router.get("", response_model=PaginatedResponse[ItemResponse])
async def list_my_items(
    current_user: CurrentUser,
    pagination: Pagination,
    item_service: ItemService = Depends(get_item_service),
):
    page = await item_service.get_user_items(
        current_user["user_id"], pagination.limit, pagination.offset
    )
    return PaginatedResponse[ItemResponse](
        data=[ItemResponse.model_validate(i) for i in page.items],
        pagination=PaginationMeta.from_params(pagination, page.total),
    )


@router.get("/search", response_model=PaginatedResponse[ItemResponse])
async def search_items(
    filters: Annotated[ItemFilter, Query()],
    item_service: ItemService = Depends(get_item_service),
):
    """
    Search items by season, tpo, color, category, rating range and owner.
    """
    page = await item_service.search_items(filters)
    return PaginatedResponse[ItemResponse](
        data=[ItemResponse.model_validate(i) for i in page.items],
        pagination=PaginationMeta.create(filters.page, filters.per_page, page.total),
    )


@router.get("/statistics", response_model=ItemStatistics)
async def item_statistics(
    current_user: CurrentUser,
    item_service: ItemService = Depends(get_item_service),
):
    return await item_service.get_user_item_statistics(current_user["user_id"])


@router.delete("", response_model=BatchDeleteResponse)
async def delete_items(
    body: BatchDeleteItemsRequest,
    current_user: CurrentUser,
    item_service: ItemService = Depends(get_item_service),
):
    """
    Delete several of the caller's items at once. Unknown ids are skipped.

    Raises:
        403: If any id belongs to another user (nothing is deleted)
    """
    deleted = await item_service.delete_user_items(current_user["user_id"], body.item_ids)
    return BatchDeleteResponse(
        deleted_count=deleted,
        message=f"{deleted} items deleted",
    )


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(
    item_id: int,
    item_service: ItemService = Depends(get_item_service),
):
    return await item_service.get_item(item_id)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: int,
    data: ItemUpdate,
    current_user: CurrentUser,
    item_service: ItemService = Depends(get_item_service),
):
    return await item_service.update_item(current_user["user_id"], item_id, data)


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_item(
    item_id: int,
    current_user: CurrentUser,
    item_service: ItemService = Depends(get_item_service),
):
    await item_service.delete_item(current_user["user_id"], item_id)
    return MessageResponse(message="Item deleted")


@router.post("/{item_id}/picture", response_model=ItemResponse)
async def upload_item_picture(
    item_id: int,
    current_user: CurrentUser,
    file: UploadFile = File(...),
    item_service: ItemService = Depends(get_item_service),
):
    """
    Upload or replace the item's picture.

    Raises:
        400: Not an image, empty, or larger than MAX_UPLOAD_SIZE
    """
    return await item_service.upload_item_picture(current_user["user_id"], item_id, file)
