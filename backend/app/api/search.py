# @TASK S4-T4.1 - News search API endpoint
# @TEST tests/test_api_search.py

"""News search API endpoint.

Provides:
- ``GET /news/search`` -- Full news search with filters, sorting and pagination.
- ``GET /news/search?quick=true`` -- Title-only autocomplete suggestions.

Query parameters are sanitised here (trimming, clamping, lenient date and
sort parsing) before the search engine sees them. The endpoint is public.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_db
from app.search.engine import NewsSearchEngine
from app.search.schemas import QuickSearchItem, SearchOptions, SortBy
from app.services.quick_search_cache import cached_quick_search
from app.utils.datetime_utils import datetime_from_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/news", tags=["search"])

MIN_QUERY_LENGTH = 2
CACHE_CONTROL = "public, s-maxage=60, stale-while-revalidate=120"


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class QuickSearchMeta(BaseModel):
    mode: str = "quick"
    query: str


class QuickSearchResponse(BaseModel):
    """Autocomplete response."""

    results: list[QuickSearchItem]
    meta: QuickSearchMeta


class ErrorResponse(BaseModel):
    """Error envelope returned for rejected or failed searches."""

    success: bool = False
    error: str
    message: str | None = None


# ---------------------------------------------------------------------------
# Engine factory (extracted for easy mocking in tests)
# ---------------------------------------------------------------------------


def _build_engine(session: AsyncSession) -> NewsSearchEngine:
    """Create a NewsSearchEngine instance.

    Extracted as a function to allow easy mocking in tests.
    """
    return NewsSearchEngine(session=session)


# ---------------------------------------------------------------------------
# Parameter helpers
# ---------------------------------------------------------------------------


def _clamp(value: int | None, default: int, low: int, high: int | None = None) -> int:
    """Clamp an optional integer into [low, high], using default when missing."""
    if value is None:
        return default
    value = max(value, low)
    if high is not None:
        value = min(value, high)
    return value


def _parse_sort(value: str | None) -> SortBy:
    """Parse a sort mode, falling back to relevance for unknown values."""
    if not value:
        return SortBy.RELEVANCE
    try:
        return SortBy(value)
    except ValueError:
        return SortBy.RELEVANCE


def _error(status_code: int, error: str, message: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------


@router.get("/search", response_model=None)
async def search_news(
    q: str | None = Query(None, description="Search query (min 2 characters)"),  # noqa: B008
    quick: bool = Query(False, description="Autocomplete mode"),  # noqa: B008
    category: str | None = Query(None, description="Category slug filter"),  # noqa: B008
    author_id: str | None = Query(None, alias="authorId", description="Author ID filter"),  # noqa: B008
    date_from: str | None = Query(None, alias="dateFrom", description="Start date (ISO 8601)"),  # noqa: B008
    date_to: str | None = Query(None, alias="dateTo", description="End date (ISO 8601)"),  # noqa: B008
    sort_by: str | None = Query(None, alias="sortBy", description="relevance|date|views|likes"),  # noqa: B008
    page: int | None = Query(None, description="Page number (min 1)"),  # noqa: B008
    limit: int | None = Query(None, description="Results per page"),  # noqa: B008
    include_content: bool = Query(False, alias="includeContent", description="Include full content"),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> JSONResponse:
    """Search published news.

    Args:
        q: The search query; trimmed, at least 2 characters.
        quick: Return title-only suggestions instead of a full search.
        category: Optional category slug; unknown slugs give an empty result.
        author_id: Optional author ID.
        date_from: Optional inclusive lower bound on the publish date.
        date_to: Optional inclusive upper bound on the publish date.
        sort_by: relevance (default), date, views or likes.
        page: Page number (default 1).
        limit: Page size (default 10, max 50; quick mode default 5, max 10).
        include_content: Return and highlight article bodies.
        db: Injected async database session.

    Returns:
        JSON search response, or an error envelope with status 400 or 500.
    """
    settings = get_settings()
    query = (q or "").strip()

    if len(query) < MIN_QUERY_LENGTH:
        return _error(400, f"Search query must be at least {MIN_QUERY_LENGTH} characters")

    if quick:
        quick_limit = _clamp(limit, settings.QUICK_SEARCH_DEFAULT_LIMIT, 1, settings.QUICK_SEARCH_MAX_LIMIT)
        logger.info("Quick search request: query=%r, limit=%d", query, quick_limit)
        try:
            items = await cached_quick_search(db, query, limit=quick_limit)
        except Exception as exc:
            logger.exception("Quick search failed: query=%r", query)
            return _error(500, "Failed to perform search", str(exc))

        body = QuickSearchResponse(results=items, meta=QuickSearchMeta(query=query))
        return JSONResponse(content=body.model_dump(mode="json"), headers={"Cache-Control": CACHE_CONTROL})

    options = SearchOptions(
        query=query,
        category=category or None,
        author_id=author_id or None,
        date_from=datetime_from_iso(date_from),
        date_to=datetime_from_iso(date_to),
        sort_by=_parse_sort(sort_by),
        page=_clamp(page, 1, 1),
        limit=_clamp(limit, settings.SEARCH_DEFAULT_LIMIT, 1, settings.SEARCH_MAX_LIMIT),
        include_content=include_content,
    )
    logger.info(
        "News search request: query=%r, category=%s, author=%s, sort_by=%s, page=%d, limit=%d",
        options.query,
        options.category,
        options.author_id,
        options.sort_by.value,
        options.page,
        options.limit,
    )

    try:
        response = await _build_engine(db).search(options)
    except Exception as exc:
        logger.exception("News search failed: query=%r", query)
        return _error(500, "Failed to perform search", str(exc))

    logger.info(
        "News search completed: query=%r, total=%d, returned=%d, elapsed_ms=%d",
        options.query,
        response.pagination.total,
        len(response.results),
        response.meta.execution_time_ms,
    )
    return JSONResponse(content=response.model_dump(mode="json"), headers={"Cache-Control": CACHE_CONTROL})
