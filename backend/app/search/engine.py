# @TASK S2-T2.1 - News search query planner
# @TASK S2-T2.3 - Quick search (autocomplete)
# @TEST tests/test_engine.py

"""News search engine.

Substring search over published news: case-insensitive ILIKE matching on
title, excerpt and content, with optional category, author and date filters.
Results are scored and highlighted in Python (see ``app.search.scoring``).

Relevance sorting re-orders only the fetched page. The store orders by
publication date before pagination, so page N of a relevance search is the
date-ordered window re-sorted by score, not the N-th slice of a global ranking.
"""

from __future__ import annotations

import math
import time
from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import ColumnElement, and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import defer, joinedload, selectinload

from app.models import Menu, News, NewsCategory
from app.search.schemas import (
    Highlights,
    Pagination,
    QuickSearchItem,
    SearchAuthor,
    SearchCategory,
    SearchFilters,
    SearchMeta,
    SearchOptions,
    SearchResponse,
    SearchResult,
    SortBy,
)
from app.search.scoring import score_record
from app.utils.datetime_utils import datetime_to_iso

QUICK_SEARCH_MIN_LENGTH = 2

_ORDERINGS: dict[SortBy, tuple] = {
    SortBy.RELEVANCE: (News.published_at.desc(),),
    SortBy.DATE: (News.published_at.desc(), News.created_at.desc()),
    SortBy.VIEWS: (News.view_count.desc(), News.published_at.desc()),
    SortBy.LIKES: (News.likes.desc(), News.published_at.desc()),
}


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the query is matched literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(column, query: str) -> ColumnElement[bool]:
    return column.ilike(f"%{_escape_like(query)}%", escape="\\")


def eligibility_clause(now: datetime) -> ColumnElement[bool]:
    """Published, active, and publicly visible at ``now``.

    Records without ``published_at`` fall back to ``created_at``.
    """
    return and_(
        News.is_published.is_(True),
        News.is_active.is_(True),
        or_(
            News.published_at <= now,
            and_(News.published_at.is_(None), News.created_at <= now),
        ),
    )


def text_clause(query: str) -> ColumnElement[bool]:
    """Case-insensitive substring match on title, excerpt or stored content."""
    return or_(
        _contains(News.title, query),
        _contains(News.excerpt, query),
        _contains(News.content, query),
    )


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    total_pages = math.ceil(total / limit)
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


class NewsSearchEngine:
    """Substring search over published news with Python-side relevance scoring.

    Args:
        session: An async SQLAlchemy session for database queries.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def search(self, options: SearchOptions) -> SearchResponse:
        """Run a filtered, paginated search.

        An unknown or non-public category slug yields an empty response
        rather than an error. Database errors propagate to the caller.
        """
        started = time.perf_counter()
        now = datetime.now(UTC)
        query = options.query
        query_lower = query.lower()

        conditions: list[ColumnElement[bool]] = [eligibility_clause(now), text_clause(query)]

        if options.category:
            menu_id = await self._resolve_category(options.category)
            if menu_id is None:
                return self._build_response(options, [], total=0, started=started)
            conditions.append(News.categories.any(NewsCategory.menu_id == menu_id))

        if options.author_id:
            conditions.append(News.author_id == options.author_id)

        if options.date_from is not None:
            conditions.append(News.published_at >= options.date_from)
        if options.date_to is not None:
            conditions.append(News.published_at <= options.date_to)

        count_stmt = select(func.count()).select_from(News).where(*conditions)
        total_result = await self._session.execute(count_stmt)
        total = int(total_result.scalar_one())

        stmt = (
            select(News)
            .where(*conditions)
            .options(
                selectinload(News.author),
                selectinload(News.categories).joinedload(NewsCategory.menu),
            )
            .order_by(*_ORDERINGS[options.sort_by])
            .offset((options.page - 1) * options.limit)
            .limit(options.limit)
        )
        if not options.include_content:
            stmt = stmt.options(defer(News.content))

        result = await self._session.execute(stmt)
        records = result.scalars().all()

        results = []
        for record in records:
            score, highlights = score_record(
                record,
                query,
                query_lower,
                include_content=options.include_content,
                now=now,
            )
            results.append(
                self._to_result(
                    record,
                    include_content=options.include_content,
                    relevance_score=score,
                    highlights=highlights,
                )
            )

        if options.sort_by == SortBy.RELEVANCE:
            # list.sort is stable: equal scores keep the store's date order
            results.sort(key=lambda r: r.relevance_score, reverse=True)

        return self._build_response(options, results, total=total, started=started)

    async def quick_search(self, query: str, limit: int = 5) -> list[QuickSearchItem]:
        """Title-only autocomplete lookup.

        Queries shorter than two characters (after stripping) return an
        empty list without touching the database.
        """
        stripped = query.strip()
        if len(stripped.lower()) < QUICK_SEARCH_MIN_LENGTH:
            return []

        now = datetime.now(UTC)
        stmt = (
            select(
                News.id,
                News.title,
                News.slug,
                News.cover_image,
                News.published_at,
            )
            .where(eligibility_clause(now), _contains(News.title, stripped))
            .order_by(News.published_at.desc(), News.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [
            QuickSearchItem(
                id=row.id,
                title=row.title,
                slug=row.slug,
                cover_image=row.cover_image,
                published_at=row.published_at,
            )
            for row in result.all()
        ]

    async def _resolve_category(self, slug: str) -> str | None:
        """Map a category slug to the id of a public, active menu."""
        stmt = select(Menu.id).where(
            Menu.slug == slug,
            Menu.is_public.is_(True),
            Menu.is_active.is_(True),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_result(
        record: News,
        *,
        include_content: bool,
        relevance_score: int,
        highlights: Highlights,
    ) -> SearchResult:
        author = record.author
        return SearchResult(
            id=record.id,
            title=record.title,
            slug=record.slug,
            excerpt=record.excerpt,
            content=record.content if include_content else None,
            cover_image=record.cover_image,
            is_breaking=bool(record.is_breaking),
            is_featured=bool(record.is_featured),
            view_count=record.view_count or 0,
            likes=record.likes or 0,
            published_at=record.published_at,
            created_at=record.created_at,
            relevance_score=relevance_score,
            author=SearchAuthor(
                id=author.id,
                username=author.username,
                first_name=author.first_name,
                last_name=author.last_name,
            )
            if author is not None
            else None,
            categories=[
                SearchCategory(id=link.menu.id, name=link.menu.name, slug=link.menu.slug)
                for link in record.categories
                if link.menu is not None
            ],
            highlights=highlights,
        )

    @staticmethod
    def _build_response(
        options: SearchOptions,
        results: Sequence[SearchResult],
        *,
        total: int,
        started: float,
    ) -> SearchResponse:
        return SearchResponse(
            results=list(results),
            pagination=build_pagination(options.page, options.limit, total),
            meta=SearchMeta(
                query=options.query,
                filters=SearchFilters(
                    category=options.category,
                    author_id=options.author_id,
                    date_from=datetime_to_iso(options.date_from),
                    date_to=datetime_to_iso(options.date_to),
                ),
                sort_by=options.sort_by,
                execution_time_ms=int((time.perf_counter() - started) * 1000),
            ),
        )
