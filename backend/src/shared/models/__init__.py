"""
Speadwear SQLAlchemy Models

Model Hierarchy:
================
    User
       ├── items (Item[])
       └── coordinates (Coordinate[])
              └── items (Item[])           ← Item.coordinate_id

    Social edges (all reference users.id):
       Relationship   follower_id → followed_id
       Block          blocker_id  → blocked_id
       LikeCoordinate user_id     → coordinate_id
       Comment        user_id     → coordinate_id
       Notification   sender_id   → receiver_id (+ optional coordinate/comment/like)

Usage:
======
    from src.shared.models import User, Coordinate, Item
"""

from src.shared.models.base import Base, IdMixin, TimestampMixin
from src.shared.models.enums import (
    Season,
    TPO,
    Color,
    NotificationAction,
    SUPER_ITEM_CATEGORIES,
    SILHOUETTE_MAX,
)
from src.shared.models.user import User
from src.shared.models.item import Item
from src.shared.models.coordinate import Coordinate
from src.shared.models.comment import Comment
from src.shared.models.like_coordinate import LikeCoordinate
from src.shared.models.relationship import Relationship
from src.shared.models.block import Block
from src.shared.models.notification import Notification

__all__ = [
    # Base classes and mixins
    "Base",
    "IdMixin",
    "TimestampMixin",
    # Enums
    "Season",
    "TPO",
    "Color",
    "NotificationAction",
    "SUPER_ITEM_CATEGORIES",
    "SILHOUETTE_MAX",
    # Models
    "User",
    "Item",
    "Coordinate",
    "Comment",
    "LikeCoordinate",
    "Relationship",
    "Block",
    "Notification",
]
