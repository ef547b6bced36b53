"""
Block Entity Model

Directed suppression edge. While present, the blocked user cannot follow
the blocker or comment on the blocker's coordinates, and the blocker's
timeline skips the blocked user. Existing follow edges are left untouched.

    blocker ──blocks──▶ blocked
"""

from sqlalchemy import CheckConstraint, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base, IdMixin, TimestampMixin


class Block(Base, IdMixin, TimestampMixin):
    """Block edge."""

    __tablename__ = "blocks"

    __table_args__ = (
        UniqueConstraint("blocker_id", "blocked_id", name="uq_block_pair"),
        CheckConstraint("blocker_id <> blocked_id", name="ck_block_not_self"),
    )

    blocker_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    blocked_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Block(blocker_id={self.blocker_id}, blocked_id={self.blocked_id})>"
