"""
Item Entity Model

A single piece of clothing in a user's wardrobe.

    User 1 ──── * Item * ──── 0..1 Coordinate

An item may belong to at most one coordinate at a time. coordinate_id is
maintained by CoordinateService together with the coordinate row itself.

SAMPLE ITEM RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 7                                                         │
│ user_id          │ 42                                                        │
│ coordinate_id    │ 3 (or null)                                               │
│ super_item       │ "tops"                                                    │
│ season / tpo     │ 2 / 2                                                     │
│ color            │ 2                                                         │
│ content          │ "linen shirt"                                             │
│ memo             │ "bought in Kyoto"                                         │
│ picture          │ "/uploads/items/ab12...jpg"                               │
│ rating           │ 4                                                         │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, IdMixin, TimestampMixin


if TYPE_CHECKING:
    from src.shared.models.user import User
    from src.shared.models.coordinate import Coordinate


class Item(Base, IdMixin, TimestampMixin):
    """Wardrobe item."""

    __tablename__ = "items"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    coordinate_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("coordinates.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    super_item: Mapped[str] = mapped_column(String(50), nullable=False)
    season: Mapped[int] = mapped_column(Integer, nullable=False)
    tpo: Mapped[int] = mapped_column(Integer, nullable=False)
    color: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    memo: Mapped[str] = mapped_column(Text, nullable=False, default="")
    picture: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    rating: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    user: Mapped["User"] = relationship("User", back_populates="items")

    coordinate: Mapped[Optional["Coordinate"]] = relationship(
        "Coordinate",
        back_populates="items",
    )

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, user_id={self.user_id}, super_item={self.super_item})>"
