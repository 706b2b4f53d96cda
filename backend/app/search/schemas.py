"""Pydantic models for news search requests and responses."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SortBy(StrEnum):
    """Result ordering modes."""

    RELEVANCE = "relevance"
    DATE = "date"
    VIEWS = "views"
    LIKES = "likes"


class SearchOptions(BaseModel):
    """Structured search request.

    Attributes:
        query: Free text, matched case-insensitively as a substring.
        category: Category (menu) slug to filter on.
        author_id: Exact author id filter.
        date_from: Inclusive lower bound on ``published_at``.
        date_to: Inclusive upper bound on ``published_at``.
        sort_by: Result ordering.
        page: 1-based page number.
        limit: Page size.
        include_content: Return and highlight the article body.
    """

    model_config = ConfigDict(frozen=True)

    query: str
    category: str | None = None
    author_id: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    sort_by: SortBy = SortBy.RELEVANCE
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    include_content: bool = False

    @field_validator("query")
    @classmethod
    def _strip_query(cls, value: str) -> str:
        return value.strip()


class SearchAuthor(BaseModel):
    id: str
    username: str
    first_name: str | None = None
    last_name: str | None = None


class SearchCategory(BaseModel):
    id: str
    name: str
    slug: str


class Highlights(BaseModel):
    """Plain-text snippets around query occurrences, at most 3 per field."""

    title: list[str] = []
    excerpt: list[str] = []
    content: list[str] = []


class SearchResult(BaseModel):
    """A single news item matched by a search."""

    id: str
    title: str
    slug: str
    excerpt: str | None = None
    content: str | None = None
    cover_image: str | None = None
    is_breaking: bool = False
    is_featured: bool = False
    view_count: int = 0
    likes: int = 0
    published_at: datetime | None = None
    created_at: datetime | None = None
    relevance_score: int = 0
    author: SearchAuthor | None = None
    categories: list[SearchCategory] = []
    highlights: Highlights = Field(default_factory=Highlights)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class SearchFilters(BaseModel):
    """Snapshot of the filters a search ran with."""

    category: str | None = None
    author_id: str | None = None
    date_from: str | None = None
    date_to: str | None = None


class SearchMeta(BaseModel):
    query: str
    filters: SearchFilters
    sort_by: SortBy
    execution_time_ms: int


class SearchResponse(BaseModel):
    """Paginated search results with metadata."""

    results: list[SearchResult]
    pagination: Pagination
    meta: SearchMeta


class QuickSearchItem(BaseModel):
    """Minimal autocomplete entry."""

    id: str
    title: str
    slug: str
    cover_image: str | None = None
    published_at: datetime | None = None
