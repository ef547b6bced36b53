"""
LikeCoordinate Entity Model

A user's like on a coordinate. At most one row per (user, coordinate); the
service pre-checks and the unique constraint catches concurrent duplicates.
"""

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base, IdMixin, TimestampMixin


class LikeCoordinate(Base, IdMixin, TimestampMixin):
    """Like edge: user → coordinate."""

    __tablename__ = "like_coordinates"

    __table_args__ = (
        UniqueConstraint("user_id", "coordinate_id", name="uq_like_user_coordinate"),
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    coordinate_id: Mapped[int] = mapped_column(
        ForeignKey("coordinates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<LikeCoordinate(user_id={self.user_id}, coordinate_id={self.coordinate_id})>"
