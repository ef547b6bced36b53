"""
Base Model Classes

Declarative base and the shared timestamp mixin for all Speadwear models.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← created_at / updated_at on every entity

Usage:
======
    from src.shared.models.base import Base, TimestampMixin, IdMixin

    class Comment(Base, IdMixin, TimestampMixin):
        __tablename__ = "comments"
        comment: Mapped[str] = mapped_column(Text)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


class IdMixin:
    """Integer surrogate key, assigned by the store."""

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    Database Behavior:
    ==================
    - created_at: set on INSERT (application clock, database default as fallback)
    - updated_at: set on INSERT, refreshed by SQLAlchemy on every UPDATE

    Newest-first listings order by (created_at DESC, id DESC) so rows created
    within the same clock tick still come back in insertion order.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )
