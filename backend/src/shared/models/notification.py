"""
Notification Entity Model

Persisted record of a social event, polled by the receiver.

SAMPLE NOTIFICATION RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                  │ 91                                                     │
│ sender_id           │ 7   (who liked)                                        │
│ receiver_id         │ 42  (coordinate owner)                                 │
│ action              │ "like"                                                 │
│ coordinate_id       │ 3                                                      │
│ comment_id          │ null                                                   │
│ like_coordinate_id  │ 15                                                     │
│ checked             │ false                                                  │
└──────────────────────────────────────────────────────────────────────────────┘

Which reference is set depends on the action:
    follow  → none
    like    → coordinate_id, like_coordinate_id
    comment → coordinate_id, comment_id
"""

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base, IdMixin, TimestampMixin


class Notification(Base, IdMixin, TimestampMixin):
    """Notification addressed to receiver_id."""

    __tablename__ = "notifications"

    sender_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    receiver_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    coordinate_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("coordinates.id", ondelete="CASCADE"),
        nullable=True,
    )

    comment_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    )

    like_coordinate_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("like_coordinates.id", ondelete="CASCADE"),
        nullable=True,
    )

    # NotificationAction value
    action: Mapped[str] = mapped_column(String(20), nullable=False)

    checked: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Notification(id={self.id}, action={self.action}, "
            f"receiver_id={self.receiver_id}, checked={self.checked})>"
        )
