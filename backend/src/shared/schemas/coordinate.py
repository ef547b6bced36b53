"""
Coordinate Schemas

Request/response models for coordinate (outfit) endpoints.

Validation Ranges:
==================
    season / tpo       1-5
    si_top_length      0-3     si_top_sleeve     0-5
    si_bottom_length   0-6     si_bottom_type    0-2
    si_dress_length    0-6     si_dress_sleeve   0-5
    si_outer_length    0-3     si_outer_sleeve   0-3
    si_shoe_size       >= 0
    rating             0-5
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.shared.models.enums import (
    MAX_RATING,
    MIN_RATING,
    SILHOUETTE_MAX,
    Season,
    TPO,
    value_range,
)
from src.shared.schemas.common import BaseSchema, DEFAULT_PER_PAGE, MAX_PER_PAGE
from src.shared.schemas.item import ItemResponse

_SEASON = value_range(Season)
_TPO = value_range(TPO)


class CoordinateCreate(BaseModel):
    """Schema for creating a coordinate from some of the caller's items."""

    season: int = Field(**_SEASON)
    tpo: int = Field(**_TPO)
    picture: str = Field(default="", max_length=500)
    si_top_length: int = Field(default=0, ge=0, le=SILHOUETTE_MAX["si_top_length"])
    si_top_sleeve: int = Field(default=0, ge=0, le=SILHOUETTE_MAX["si_top_sleeve"])
    si_bottom_length: int = Field(default=0, ge=0, le=SILHOUETTE_MAX["si_bottom_length"])
    si_bottom_type: int = Field(default=0, ge=0, le=SILHOUETTE_MAX["si_bottom_type"])
    si_dress_length: int = Field(default=0, ge=0, le=SILHOUETTE_MAX["si_dress_length"])
    si_dress_sleeve: int = Field(default=0, ge=0, le=SILHOUETTE_MAX["si_dress_sleeve"])
    si_outer_length: int = Field(default=0, ge=0, le=SILHOUETTE_MAX["si_outer_length"])
    si_outer_sleeve: int = Field(default=0, ge=0, le=SILHOUETTE_MAX["si_outer_sleeve"])
    si_shoe_size: float = Field(default=0, ge=0)
    memo: str = Field(default="", max_length=1000)
    rating: int = Field(default=0, ge=MIN_RATING, le=MAX_RATING)
    item_ids: list[int] = Field(default_factory=list)


class CoordinateUpdate(BaseModel):
    """
    Partial coordinate update.

    item_ids, when present, replaces the full item set (an empty list
    detaches every item).
    """

    season: Optional[int] = Field(default=None, **_SEASON)
    tpo: Optional[int] = Field(default=None, **_TPO)
    picture: Optional[str] = Field(default=None, max_length=500)
    si_top_length: Optional[int] = Field(default=None, ge=0, le=SILHOUETTE_MAX["si_top_length"])
    si_top_sleeve: Optional[int] = Field(default=None, ge=0, le=SILHOUETTE_MAX["si_top_sleeve"])
    si_bottom_length: Optional[int] = Field(default=None, ge=0, le=SILHOUETTE_MAX["si_bottom_length"])
    si_bottom_type: Optional[int] = Field(default=None, ge=0, le=SILHOUETTE_MAX["si_bottom_type"])
    si_dress_length: Optional[int] = Field(default=None, ge=0, le=SILHOUETTE_MAX["si_dress_length"])
    si_dress_sleeve: Optional[int] = Field(default=None, ge=0, le=SILHOUETTE_MAX["si_dress_sleeve"])
    si_outer_length: Optional[int] = Field(default=None, ge=0, le=SILHOUETTE_MAX["si_outer_length"])
    si_outer_sleeve: Optional[int] = Field(default=None, ge=0, le=SILHOUETTE_MAX["si_outer_sleeve"])
    si_shoe_size: Optional[float] = Field(default=None, ge=0)
    memo: Optional[str] = Field(default=None, max_length=1000)
    rating: Optional[int] = Field(default=None, ge=MIN_RATING, le=MAX_RATING)
    item_ids: Optional[list[int]] = None


class CoordinateFilter(BaseModel):
    """Query parameters for coordinate search."""

    user_id: Optional[int] = None
    season: Optional[int] = Field(default=None, **_SEASON)
    tpo: Optional[int] = Field(default=None, **_TPO)
    min_rating: Optional[int] = Field(default=None, ge=MIN_RATING, le=MAX_RATING)
    max_rating: Optional[int] = Field(default=None, ge=MIN_RATING, le=MAX_RATING)
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


class CoordinateResponse(BaseSchema):
    """
    Coordinate with its items and like decoration.

    like_count / is_liked are filled in by CoordinateService, not read
    from the ORM row.
    """

    id: int
    user_id: int
    season: int
    tpo: int
    picture: str
    si_top_length: int
    si_top_sleeve: int
    si_bottom_length: int
    si_bottom_type: int
    si_dress_length: int
    si_dress_sleeve: int
    si_outer_length: int
    si_outer_sleeve: int
    si_shoe_size: float
    memo: str
    rating: int
    items: list[ItemResponse] = Field(default_factory=list)
    like_count: int = 0
    is_liked: bool = False
    created_at: datetime
    updated_at: datetime


class CoordinateStatistics(BaseModel):
    total_coordinates: int
    season_count: dict[int, int]
    tpo_count: dict[int, int]
    total_likes: int
    average_rating: float


class LikeStatusResponse(BaseModel):
    coordinate_id: int
    is_liked: bool
    like_count: int
