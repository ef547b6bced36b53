"""
Item Schemas

Request/response models for wardrobe item endpoints.

Validation Ranges:
==================
    season      1-5   (Season)
    tpo         1-5   (TPO)
    color       1-15  (Color)
    rating      0-5
    super_item  one of SUPER_ITEM_CATEGORIES
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.shared.models.enums import (
    MAX_RATING,
    MIN_RATING,
    SUPER_ITEM_CATEGORIES,
    Color,
    Season,
    TPO,
    value_range,
)
from src.shared.schemas.common import BaseSchema, DEFAULT_PER_PAGE, MAX_PER_PAGE

_SEASON = value_range(Season)
_TPO = value_range(TPO)
_COLOR = value_range(Color)


def _check_super_item(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in SUPER_ITEM_CATEGORIES:
        raise ValueError(f"super_item must be one of: {', '.join(SUPER_ITEM_CATEGORIES)}")
    return value


class ItemCreate(BaseModel):
    """Schema for creating an item."""

    super_item: str
    season: int = Field(**_SEASON)
    tpo: int = Field(**_TPO)
    color: int = Field(**_COLOR)
    content: str = Field(default="", max_length=255)
    memo: str = Field(default="", max_length=1000)
    picture: str = Field(default="", max_length=500)
    rating: int = Field(default=0, ge=MIN_RATING, le=MAX_RATING)

    @field_validator("super_item")
    @classmethod
    def check_super_item(cls, value: Optional[str]) -> Optional[str]:
        return _check_super_item(value)


class ItemUpdate(BaseModel):
    """
    Partial item update. Fields omitted from the request are left untouched.
    """

    super_item: Optional[str] = None
    season: Optional[int] = Field(default=None, **_SEASON)
    tpo: Optional[int] = Field(default=None, **_TPO)
    color: Optional[int] = Field(default=None, **_COLOR)
    content: Optional[str] = Field(default=None, max_length=255)
    memo: Optional[str] = Field(default=None, max_length=1000)
    picture: Optional[str] = Field(default=None, max_length=500)
    rating: Optional[int] = Field(default=None, ge=MIN_RATING, le=MAX_RATING)

    @field_validator("super_item")
    @classmethod
    def check_super_item(cls, value: Optional[str]) -> Optional[str]:
        return _check_super_item(value)


class ItemFilter(BaseModel):
    """Query parameters for item search."""

    user_id: Optional[int] = None
    season: Optional[int] = Field(default=None, **_SEASON)
    tpo: Optional[int] = Field(default=None, **_TPO)
    color: Optional[int] = Field(default=None, **_COLOR)
    super_item: Optional[str] = None
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


class BatchDeleteItemsRequest(BaseModel):
    item_ids: list[int] = Field(min_length=1, max_length=100)


class ItemResponse(BaseSchema):
    """Schema for item response."""

    id: int
    user_id: int
    coordinate_id: Optional[int] = None
    super_item: str
    season: int
    tpo: int
    color: int
    content: str
    memo: str
    picture: str
    rating: int
    created_at: datetime
    updated_at: datetime


class ItemStatistics(BaseModel):
    """Wardrobe breakdown for one user."""

    total_items: int
    category_count: dict[str, int]
    season_count: dict[int, int]
    tpo_count: dict[int, int]
    color_count: dict[int, int]
    average_rating: float


class BatchDeleteResponse(BaseModel):
    deleted_count: int
    message: str
