# @TASK S0-T0.5 - News, category and author schema

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    """Newsroom user; authors of news items."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Menu(Base):
    """Navigation menu entry, used as a news category.

    Menus form a tree through ``parent_id``. Search filters on a single menu
    and never expands to its children.
    """

    __tablename__ = "menus"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    parent_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("menus.id", ondelete="SET NULL"), nullable=True, index=True
    )
    order: Mapped[int] = mapped_column(Integer, default=0)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class News(Base):
    """A news article."""

    __tablename__ = "news"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(500), default="")
    slug: Mapped[str] = mapped_column(String(500), unique=True, index=True)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, default="")  # Plaintext body
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    is_breaking: Mapped[bool] = mapped_column(Boolean, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    view_count: Mapped[int] = mapped_column(Integer, default=0)
    likes: Mapped[int] = mapped_column(Integer, default=0)
    author_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    author: Mapped[User] = relationship(lazy="raise")
    categories: Mapped[list["NewsCategory"]] = relationship(
        back_populates="news", cascade="all, delete-orphan", lazy="raise"
    )

    __table_args__ = (
        Index("idx_news_published_at", "published_at"),
        Index("idx_news_visibility", "is_published", "is_active"),
        Index("idx_news_view_count", "view_count"),
        Index("idx_news_likes", "likes"),
    )


class NewsCategory(Base):
    """Link between a news item and a category menu."""

    __tablename__ = "news_categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    news_id: Mapped[str] = mapped_column(String(36), ForeignKey("news.id", ondelete="CASCADE"), index=True)
    menu_id: Mapped[str] = mapped_column(String(36), ForeignKey("menus.id", ondelete="CASCADE"), index=True)

    news: Mapped[News] = relationship(back_populates="categories")
    menu: Mapped[Menu] = relationship(lazy="joined")

    __table_args__ = (UniqueConstraint("news_id", "menu_id", name="uq_news_categories_news_menu"),)
