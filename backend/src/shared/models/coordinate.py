"""
Coordinate Entity Model

An outfit: a photo plus silhouette descriptors, composed of the owner's items.

Model Hierarchy:
================
    Coordinate
       ├── items    (Item[])            - Items whose coordinate_id points here
       ├── comments (Comment[])         - ON DELETE CASCADE
       └── likes    (LikeCoordinate[])  - ON DELETE CASCADE

Silhouette Fields:
==================
    si_top_length    0-3      si_top_sleeve    0-5
    si_bottom_length 0-6      si_bottom_type   0-2
    si_dress_length  0-6      si_dress_sleeve  0-5
    si_outer_length  0-3      si_outer_sleeve  0-3
    si_shoe_size     free     (0 = not specified everywhere)
"""

from typing import TYPE_CHECKING

from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, IdMixin, TimestampMixin


if TYPE_CHECKING:
    from src.shared.models.user import User
    from src.shared.models.item import Item


class Coordinate(Base, IdMixin, TimestampMixin):
    """Outfit composed of items."""

    __tablename__ = "coordinates"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    season: Mapped[int] = mapped_column(Integer, nullable=False)
    tpo: Mapped[int] = mapped_column(Integer, nullable=False)
    picture: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    # ═══════════════════════════════════════════════════════════════════════════
    # SILHOUETTE
    # ═══════════════════════════════════════════════════════════════════════════

    si_top_length: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    si_top_sleeve: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    si_bottom_length: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    si_bottom_type: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    si_dress_length: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    si_dress_sleeve: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    si_outer_length: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    si_outer_sleeve: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    si_shoe_size: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    memo: Mapped[str] = mapped_column(Text, nullable=False, default="")
    rating: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    user: Mapped["User"] = relationship("User", back_populates="coordinates")

    # Loaded explicitly with selectinload(); items are detached by the service
    # before a coordinate is deleted, the FK's SET NULL covers the rest.
    items: Mapped[list["Item"]] = relationship(
        "Item",
        back_populates="coordinate",
        passive_deletes=True,
        order_by="Item.id",
    )

    def __repr__(self) -> str:
        return f"<Coordinate(id={self.id}, user_id={self.user_id})>"
