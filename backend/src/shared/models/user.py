"""
User Entity Model

Represents a registered Speadwear user.

Model Hierarchy:
================
    User
       ├── items        (Item[])        - Wardrobe
       └── coordinates  (Coordinate[])  - Posted outfits

    Social edges (follows, blocks, likes, comments, notifications) reference
    users by id and are removed by ON DELETE CASCADE.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 42                                                        │
│ name             │ "Aoi"                                                     │
│ email            │ "aoi@example.com"                                         │
│ picture          │ "/uploads/users/1f0c...png"                               │
│ admin            │ false                                                     │
│ password_hash    │ "$2b$12$..."                                              │
│ activated        │ true                                                      │
│ activated_at     │ 2026-01-01T00:00:00Z                                      │
│ reset_digest     │ null                                                      │
│ reset_sent_at    │ null                                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, IdMixin, TimestampMixin


if TYPE_CHECKING:
    from src.shared.models.item import Item
    from src.shared.models.coordinate import Coordinate


class User(Base, IdMixin, TimestampMixin):
    """
    User model.

    Attributes:
        name: Display name
        email: Login address (unique)
        picture: Avatar URL, empty when unset
        admin: Administrative flag
        password_hash: Bcrypt hash
        activated / activated_at: Account activation state
        reset_digest / reset_sent_at: Pending password reset
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE
    # ═══════════════════════════════════════════════════════════════════════════

    name: Mapped[str] = mapped_column(String(50), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    picture: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # AUTHENTICATION
    # ═══════════════════════════════════════════════════════════════════════════

    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    activated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    activated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # sha256 of the outstanding reset token
    reset_digest: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    reset_sent_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    items: Mapped[list["Item"]] = relationship(
        "Item",
        back_populates="user",
        passive_deletes=True,
    )

    coordinates: Mapped[list["Coordinate"]] = relationship(
        "Coordinate",
        back_populates="user",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
