"""
Comment Entity Model

Free-text comment left by a user on a coordinate.

    User 1 ──── * Comment * ──── 1 Coordinate
"""

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base, IdMixin, TimestampMixin


class Comment(Base, IdMixin, TimestampMixin):
    """Comment on a coordinate (1-1000 characters)."""

    __tablename__ = "comments"

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

    comment: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, coordinate_id={self.coordinate_id})>"
