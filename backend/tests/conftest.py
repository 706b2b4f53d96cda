# @TASK S0-T0.7 - Test configuration
import os
from datetime import UTC, datetime

import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("DATABASE_URL", "postgresql+asyncpg://newsroom:newsroom@db:5432/newsroom_test")


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_quick_search_cache():
    """Each test starts with an empty autocomplete cache."""
    from app.services.quick_search_cache import clear_quick_search_cache

    clear_quick_search_cache()
    yield
    clear_quick_search_cache()


class _ScalarList:
    def __init__(self, values):
        self._values = values

    def all(self):
        return self._values

    def __iter__(self):
        return iter(self._values)


class FakeResult:
    """Stand-in for a SQLAlchemy Result holding one canned value."""

    def __init__(self, value):
        self._value = value

    def scalar_one(self):
        return self._value

    def scalar_one_or_none(self):
        return self._value

    def scalars(self):
        return _ScalarList(self._value)

    def all(self):
        return self._value


def make_news(
    *,
    news_id: str = "n1",
    title: str = "Untitled",
    excerpt: str | None = None,
    content: str = "",
    published_at: datetime | None = None,
    created_at: datetime | None = None,
    is_featured: bool = False,
    is_breaking: bool = False,
    view_count: int = 0,
    likes: int = 0,
    categories: list[tuple[str, str, str]] | None = None,
):
    """Build a transient News row with an author and category links."""
    from app.models import Menu, News, NewsCategory, User

    author = User(id="u1", username="jdoe", email="jdoe@example.com", first_name="Jane", last_name="Doe")
    links = [
        NewsCategory(id=f"nc-{menu_id}", menu_id=menu_id, menu=Menu(id=menu_id, name=name, slug=slug))
        for menu_id, name, slug in (categories or [])
    ]
    return News(
        id=news_id,
        title=title,
        slug=f"slug-{news_id}",
        excerpt=excerpt,
        content=content,
        cover_image=None,
        is_breaking=is_breaking,
        is_featured=is_featured,
        is_published=True,
        is_active=True,
        view_count=view_count,
        likes=likes,
        author_id=author.id,
        author=author,
        categories=links,
        published_at=published_at,
        created_at=created_at or datetime(2024, 1, 1, tzinfo=UTC),
    )
