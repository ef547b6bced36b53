"""
Repository Pattern Implementations

Repositories encapsulate queries; services compose them with business rules.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]             ← Generic CRUD operations
         │
         ├── UserRepository               ← Email lookup, directory
         ├── ItemRepository               ← Search, coordinate links, stats
         ├── CoordinateRepository         ← Eager items, search, stats
         ├── CommentRepository            ← Per-coordinate listing
         ├── LikeCoordinateRepository     ← Like rows and counts
         ├── RelationshipRepository       ← Follow edges, followers/following
         ├── BlockRepository              ← Block edges
         └── NotificationRepository       ← Receiver inbox, read state

Usage Example:
==============
    async def like(db: AsyncSession, user_id: int, coordinate_id: int):
        likes = LikeCoordinateRepository(db)
        if await likes.exists_for(user_id, coordinate_id):
            raise ConflictError("already liked")
        return await likes.create(user_id=user_id, coordinate_id=coordinate_id)
"""

from src.shared.repositories.base import BaseRepository
from src.shared.repositories.user_repository import UserRepository
from src.shared.repositories.item_repository import ItemRepository
from src.shared.repositories.coordinate_repository import CoordinateRepository
from src.shared.repositories.comment_repository import CommentRepository
from src.shared.repositories.like_coordinate_repository import LikeCoordinateRepository
from src.shared.repositories.relationship_repository import RelationshipRepository
from src.shared.repositories.block_repository import BlockRepository
from src.shared.repositories.notification_repository import NotificationRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ItemRepository",
    "CoordinateRepository",
    "CommentRepository",
    "LikeCoordinateRepository",
    "RelationshipRepository",
    "BlockRepository",
    "NotificationRepository",
]
