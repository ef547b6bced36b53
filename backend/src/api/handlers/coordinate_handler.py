"""
Coordinate Handler

Outfits ("coordinates"): CRUD, search, the follow timeline, statistics,
picture upload and likes.

Every coordinate in a response carries like_count and, for an
authenticated viewer, is_liked.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from src.api.dependencies import CurrentUser, OptionalUser, Pagination
from src.api.dependencies.services import get_coordinate_service, get_social_service
from src.shared.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta
from src.shared.schemas.coordinate import (
    CoordinateCreate,
    CoordinateFilter,
    CoordinateResponse,
    CoordinateStatistics,
    CoordinateUpdate,
    LikeStatusResponse,
)
from src.shared.schemas.social import CommentResponse
from src.shared.services.coordinate_service import CoordinateService
from src.shared.services.social_service import SocialService


router = APIRouter()


def _viewer_id(viewer: dict | None) -> int | None:
    return viewer["user_id"] if viewer else None


# ═══════════════════════════════════════════════════════════════════════════════
# COLLECTION
# ═══════════════════════════════════════════════════════════════════════════════


@router.post(
    "",
    response_model=CoordinateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_coordinate(
    data: CoordinateCreate,
    current_user: CurrentUser,
    coordinate_service: CoordinateService = Depends(get_coordinate_service),
):
    """
    Create a coordinate from the caller's items.

    Raises:
        404: A referenced item does not exist
        403: A referenced item belongs to another user
    """
    user_id = current_user["user_id"]
    coordinate = await coordinate_service.create_coordinate(user_id, data)
    return (await coordinate_service.decorate([coordinate], user_id))[0]


@router.get("", response_model=PaginatedResponse[CoordinateResponse])
async def list_my_coordinates(
    current_user: CurrentUser,
    pagination: Pagination,
    coordinate_service: CoordinateService = Depends(get_coordinate_service),
):
    user_id = current_user["user_id"]
    coordinates, total = await coordinate_service.get_user_coordinates(
        user_id, pagination.limit, pagination.offset
    )
    return PaginatedResponse[CoordinateResponse](
        data=await coordinate_service.decorate(coordinates, user_id),
        pagination=PaginationMeta.from_params(pagination, total),
    )


@router.get("/search", response_model=PaginatedResponse[CoordinateResponse])
async def search_coordinates(
    filters: Annotated[CoordinateFilter, Query()],
    viewer: OptionalUser,
    coordinate_service: CoordinateService = Depends(get_coordinate_service),
):
    coordinates, total = await coordinate_service.search_coordinates(filters)
    return PaginatedResponse[CoordinateResponse](
        data=await coordinate_service.decorate(coordinates, _viewer_id(viewer)),
        pagination=PaginationMeta.create(filters.page, filters.per_page, total),
    )


@router.get("/timeline", response_model=PaginatedResponse[CoordinateResponse])
async def timeline(
    current_user: CurrentUser,
    pagination: Pagination,
    coordinate_service: CoordinateService = Depends(get_coordinate_service),
):
    """
    Recent coordinates of followed users, newest first per user.

    At most TIMELINE_PER_USER_LIMIT coordinates per followed user; users the
    caller blocked are skipped. page/per_page are echoed but not applied.
    """
    user_id = current_user["user_id"]
    coordinates = await coordinate_service.get_timeline_coordinates(
        user_id, pagination.limit, pagination.offset
    )
    return PaginatedResponse[CoordinateResponse](
        data=await coordinate_service.decorate(coordinates, user_id),
        pagination=PaginationMeta.from_params(pagination, len(coordinates)),
    )


@router.get("/statistics", response_model=CoordinateStatistics)
async def coordinate_statistics(
    current_user: CurrentUser,
    coordinate_service: CoordinateService = Depends(get_coordinate_service),
):
    return await coordinate_service.get_user_coordinate_statistics(current_user["user_id"])


# ═══════════════════════════════════════════════════════════════════════════════
# SINGLE COORDINATE
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/{coordinate_id}", response_model=CoordinateResponse)
async def get_coordinate(
    coordinate_id: int,
    viewer: OptionalUser,
    coordinate_service: CoordinateService = Depends(get_coordinate_service),
):
    return await coordinate_service.get_coordinate_with_details(
        coordinate_id, _viewer_id(viewer)
    )


@router.put("/{coordinate_id}", response_model=CoordinateResponse)
async def update_coordinate(
    coordinate_id: int,
    data: CoordinateUpdate,
    current_user: CurrentUser,
    coordinate_service: CoordinateService = Depends(get_coordinate_service),
):
    """
    Update a coordinate. Sending `item_ids` replaces its whole item set.
    """
    user_id = current_user["user_id"]
    coordinate = await coordinate_service.update_coordinate(user_id, coordinate_id, data)
    return (await coordinate_service.decorate([coordinate], user_id))[0]


@router.delete("/{coordinate_id}", response_model=MessageResponse)
async def delete_coordinate(
    coordinate_id: int,
    current_user: CurrentUser,
    coordinate_service: CoordinateService = Depends(get_coordinate_service),
):
    await coordinate_service.delete_coordinate(current_user["user_id"], coordinate_id)
    return MessageResponse(message="Coordinate deleted")


@router.post("/{coordinate_id}/picture", response_model=CoordinateResponse)
async def upload_coordinate_picture(
    coordinate_id: int,
    current_user: CurrentUser,
    file: UploadFile = File(...),
    coordinate_service: CoordinateService = Depends(get_coordinate_service),
):
    user_id = current_user["user_id"]
    coordinate = await coordinate_service.upload_coordinate_picture(user_id, coordinate_id, file)
    return (await coordinate_service.decorate([coordinate], user_id))[0]


@router.get("/{coordinate_id}/comments", response_model=PaginatedResponse[CommentResponse])
async def get_coordinate_comments(
    coordinate_id: int,
    pagination: Pagination,
    social_service: SocialService = Depends(get_social_service),
):
    comments, total = await social_service.get_comments(
        coordinate_id, pagination.limit, pagination.offset
    )
    return PaginatedResponse[CommentResponse](
        data=[CommentResponse.model_validate(c) for c in comments],
        pagination=PaginationMeta.from_params(pagination, total),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# LIKES
# ═══════════════════════════════════════════════════════════════════════════════


@router.post(
    "/{coordinate_id}/like",
    response_model=LikeStatusResponse,
    status_code=status.HTTP_201_CREATED,
)
async def like_coordinate(
    coordinate_id: int,
    current_user: CurrentUser,
    coordinate_service: CoordinateService = Depends(get_coordinate_service),
):
    """
    Like a coordinate. The owner is notified unless they liked their own.

    Raises:
        404: No such coordinate
        400: Already liked
    """
    await coordinate_service.like_coordinate(current_user["user_id"], coordinate_id)
    return LikeStatusResponse(
        coordinate_id=coordinate_id,
        is_liked=True,
        like_count=await coordinate_service.count_likes(coordinate_id),
    )


@router.delete("/{coordinate_id}/like", response_model=LikeStatusResponse)
async def unlike_coordinate(
    coordinate_id: int,
    current_user: CurrentUser,
    coordinate_service: CoordinateService = Depends(get_coordinate_service),
):
    await coordinate_service.unlike_coordinate(current_user["user_id"], coordinate_id)
    return LikeStatusResponse(
        coordinate_id=coordinate_id,
        is_liked=False,
        like_count=await coordinate_service.count_likes(coordinate_id),
    )
