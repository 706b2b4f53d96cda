# @TASK S0-T0.5 - Initial news schema

"""Create users, menus, news and news_categories tables.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Apply schema migrations."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "menus",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("parent_id", sa.String(36), nullable=True),
        sa.Column("order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_public", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["parent_id"], ["menus.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_menus_slug", "menus", ["slug"], unique=True)
    op.create_index("ix_menus_parent_id", "menus", ["parent_id"], unique=False)

    op.create_table(
        "news",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(500), nullable=False, server_default=""),
        sa.Column("slug", sa.String(500), nullable=False),
        sa.Column("excerpt", sa.Text, nullable=True),
        sa.Column("content", sa.Text, nullable=False, server_default=""),
        sa.Column("cover_image", sa.String(1024), nullable=True),
        sa.Column("is_breaking", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("is_featured", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("is_published", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("view_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("likes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("author_id", sa.String(36), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_news_slug", "news", ["slug"], unique=True)
    op.create_index("ix_news_author_id", "news", ["author_id"], unique=False)
    op.create_index("idx_news_published_at", "news", ["published_at"], unique=False)
    op.create_index("idx_news_visibility", "news", ["is_published", "is_active"], unique=False)
    op.create_index("idx_news_view_count", "news", ["view_count"], unique=False)
    op.create_index("idx_news_likes", "news", ["likes"], unique=False)

    op.create_table(
        "news_categories",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("news_id", sa.String(36), nullable=False),
        sa.Column("menu_id", sa.String(36), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["news_id"], ["news.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["menu_id"], ["menus.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("news_id", "menu_id", name="uq_news_categories_news_menu"),
    )
    op.create_index("ix_news_categories_news_id", "news_categories", ["news_id"], unique=False)
    op.create_index("ix_news_categories_menu_id", "news_categories", ["menu_id"], unique=False)


def downgrade() -> None:
    """Drop all news search tables."""
    op.drop_table("news_categories")
    op.drop_table("news")
    op.drop_table("menus")
    op.drop_table("users")
