"""
Relationship Entity Model

Directed follow edge. A user cannot follow themself and there is at most
one edge per ordered (follower, followed) pair.

    follower ──follows──▶ followed
"""

from sqlalchemy import CheckConstraint, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base, IdMixin, TimestampMixin


class Relationship(Base, IdMixin, TimestampMixin):
    """Follow edge."""

    __tablename__ = "relationships"

    __table_args__ = (
        UniqueConstraint("follower_id", "followed_id", name="uq_relationship_pair"),
        CheckConstraint("follower_id <> followed_id", name="ck_relationship_not_self"),
    )

    follower_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    followed_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Relationship(follower_id={self.follower_id}, followed_id={self.followed_id})>"
