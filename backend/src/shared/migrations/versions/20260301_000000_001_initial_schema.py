# pylint: skip-file
# ruff: noqa
"""Initial schema - create all tables

Revision ID: 001
Revises:
Create Date: 2026-03-01 00:00:00

Tables created:
- users: Accounts, activation and password reset state
- coordinates: Outfits
- items: Wardrobe items, optionally attached to one coordinate
- comments: Comments on coordinates
- like_coordinates: Likes (one per user and coordinate)
- relationships: Follow edges (one per ordered pair, never self)
- blocks: Block edges (one per ordered pair, never self)
- notifications: Follow / like / comment notifications
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def _fk(name: str, target: str, nullable: bool = False, ondelete: str = "CASCADE") -> sa.Column:
    return sa.Column(
        name,
        sa.Integer(),
        sa.ForeignKey(target, ondelete=ondelete),
        nullable=nullable,
    )


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "users",
        _id(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("picture", sa.String(500), nullable=False, server_default=""),
        sa.Column("admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("activated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("activated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reset_digest", sa.String(64), nullable=True),
        sa.Column("reset_sent_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "coordinates",
        _id(),
        _fk("user_id", "users.id"),
        sa.Column("season", sa.Integer(), nullable=False),
        sa.Column("tpo", sa.Integer(), nullable=False),
        sa.Column("picture", sa.String(500), nullable=False, server_default=""),
        sa.Column("si_top_length", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("si_top_sleeve", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("si_bottom_length", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("si_bottom_type", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("si_dress_length", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("si_dress_sleeve", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("si_outer_length", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("si_outer_sleeve", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("si_shoe_size", sa.Float(), nullable=False, server_default="0"),
        sa.Column("memo", sa.Text(), nullable=False, server_default=""),
        sa.Column("rating", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_coordinates_user_id", "coordinates", ["user_id"])

    op.create_table(
        "items",
        _id(),
        _fk("user_id", "users.id"),
        _fk("coordinate_id", "coordinates.id", nullable=True, ondelete="SET NULL"),
        sa.Column("super_item", sa.String(50), nullable=False),
        sa.Column("season", sa.Integer(), nullable=False),
        sa.Column("tpo", sa.Integer(), nullable=False),
        sa.Column("color", sa.Integer(), nullable=False),
        sa.Column("content", sa.String(255), nullable=False, server_default=""),
        sa.Column("memo", sa.Text(), nullable=False, server_default=""),
        sa.Column("picture", sa.String(500), nullable=False, server_default=""),
        sa.Column("rating", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_items_user_id", "items", ["user_id"])
    op.create_index("ix_items_coordinate_id", "items", ["coordinate_id"])

    op.create_table(
        "comments",
        _id(),
        _fk("user_id", "users.id"),
        _fk("coordinate_id", "coordinates.id"),
        sa.Column("comment", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_comments_user_id", "comments", ["user_id"])
    op.create_index("ix_comments_coordinate_id", "comments", ["coordinate_id"])

    op.create_table(
        "like_coordinates",
        _id(),
        _fk("user_id", "users.id"),
        _fk("coordinate_id", "coordinates.id"),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "coordinate_id", name="uq_like_user_coordinate"),
    )
    op.create_index("ix_like_coordinates_user_id", "like_coordinates", ["user_id"])
    op.create_index("ix_like_coordinates_coordinate_id", "like_coordinates", ["coordinate_id"])

    op.create_table(
        "relationships",
        _id(),
        _fk("follower_id", "users.id"),
        _fk("followed_id", "users.id"),
        *_timestamps(),
        sa.UniqueConstraint("follower_id", "followed_id", name="uq_relationship_pair"),
        sa.CheckConstraint("follower_id <> followed_id", name="ck_relationship_not_self"),
    )
    op.create_index("ix_relationships_follower_id", "relationships", ["follower_id"])
    op.create_index("ix_relationships_followed_id", "relationships", ["followed_id"])

    op.create_table(
        "blocks",
        _id(),
        _fk("blocker_id", "users.id"),
        _fk("blocked_id", "users.id"),
        *_timestamps(),
        sa.UniqueConstraint("blocker_id", "blocked_id", name="uq_block_pair"),
        sa.CheckConstraint("blocker_id <> blocked_id", name="ck_block_not_self"),
    )
    op.create_index("ix_blocks_blocker_id", "blocks", ["blocker_id"])
    op.create_index("ix_blocks_blocked_id", "blocks", ["blocked_id"])

    op.create_table(
        "notifications",
        _id(),
        _fk("sender_id", "users.id"),
        _fk("receiver_id", "users.id"),
        _fk("coordinate_id", "coordinates.id", nullable=True),
        _fk("comment_id", "comments.id", nullable=True),
        _fk("like_coordinate_id", "like_coordinates.id", nullable=True),
        sa.Column("action", sa.String(20), nullable=False),
        sa.Column("checked", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_notifications_receiver_id", "notifications", ["receiver_id"])
    op.create_index("ix_notifications_checked", "notifications", ["checked"])


def downgrade() -> None:
    """Downgrade database schema."""
    # Reverse dependency order
    op.drop_table("notifications")
    op.drop_table("blocks")
    op.drop_table("relationships")
    op.drop_table("like_coordinates")
    op.drop_table("comments")
    op.drop_table("items")
    op.drop_table("coordinates")
    op.drop_table("users")
