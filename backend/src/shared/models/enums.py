"""
Enums used across the application.

Wardrobe attributes are stored as small integers; the IntEnum values are the
persisted values. Silhouette attributes accept 0 for "not specified".
"""

from enum import Enum, IntEnum


class Season(IntEnum):
    """Season an item or coordinate is meant for."""

    SPRING = 1
    SUMMER = 2
    AUTUMN = 3
    WINTER = 4
    ALL_SEASON = 5


class TPO(IntEnum):
    """Time / place / occasion."""

    WORK = 1
    CASUAL = 2
    FORMAL = 3
    SPORTS = 4
    HOME = 5


class Color(IntEnum):
    """Dominant item color."""

    BLACK = 1
    WHITE = 2
    GRAY = 3
    BROWN = 4
    BEIGE = 5
    GREEN = 6
    BLUE = 7
    PURPLE = 8
    YELLOW = 9
    PINK = 10
    RED = 11
    ORANGE = 12
    SILVER = 13
    GOLD = 14
    OTHER = 15


class NotificationAction(str, Enum):
    """Social event that produced a notification."""

    FOLLOW = "follow"
    LIKE = "like"
    COMMENT = "comment"


# Item categories ("super items")
SUPER_ITEM_CATEGORIES: tuple[str, ...] = (
    "outer",
    "tops",
    "bottoms",
    "one-piece",
    "shoes",
    "bag",
    "accessory",
    "hat",
    "other",
)

# Inclusive upper bounds for coordinate silhouette fields (lower bound is 0)
SILHOUETTE_MAX: dict[str, int] = {
    "si_top_length": 3,
    "si_top_sleeve": 5,
    "si_bottom_length": 6,
    "si_bottom_type": 2,
    "si_dress_length": 6,
    "si_dress_sleeve": 5,
    "si_outer_length": 3,
    "si_outer_sleeve": 3,
}

MIN_RATING = 0
MAX_RATING = 5


def value_range(enum_cls: type[IntEnum]) -> dict[str, int]:
    """`ge`/`le` keyword bounds spanning every member of an IntEnum."""
    values = [member.value for member in enum_cls]
    return {"ge": min(values), "le": max(values)}
