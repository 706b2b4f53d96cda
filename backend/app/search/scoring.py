# @TASK S2-T2.2 - Relevance scoring and highlight extraction
# @TEST tests/test_scoring.py

"""Relevance scoring and highlight extraction for news search.

Scores are additive integers built from substring and whole-word matches,
editorial flags and publication recency. Highlights are plain substrings
around each query occurrence; no markup is added here.
"""

from __future__ import annotations

from datetime import UTC, datetime

from app.models import News
from app.search.params import get_search_params
from app.search.schemas import Highlights
from app.utils.datetime_utils import ensure_utc

_SECONDS_PER_DAY = 60 * 60 * 24


def calculate_relevance_score(
    title: str | None,
    excerpt: str | None,
    content: str | None,
    query_lower: str,
    *,
    is_featured: bool = False,
    is_breaking: bool = False,
    published_at: datetime | None = None,
    now: datetime | None = None,
) -> int:
    """Compute the relevance score of one record.

    Args:
        title: Record title.
        excerpt: Record excerpt, if any.
        content: Record body; pass None when it was not fetched.
        query_lower: Lowercased, stripped query.
        is_featured: Featured flag.
        is_breaking: Breaking flag.
        published_at: Publication time; None disables the recency boost.
        now: Reference time for recency (defaults to current UTC time).

    Returns:
        A non-negative integer; higher is more relevant.
    """
    params = get_search_params()
    score = 0
    title_lower = (title or "").lower()
    excerpt_lower = (excerpt or "").lower()
    content_lower = (content or "").lower()

    if title_lower == query_lower:
        score += params["exact_title_weight"]
    elif query_lower in title_lower:
        score += params["title_contains_weight"]

    title_words = title_lower.split()
    for word in query_lower.split():
        if word in title_words:
            score += params["title_word_weight"]

    if query_lower in excerpt_lower:
        score += params["excerpt_weight"]
    if query_lower in content_lower:
        score += params["content_weight"]

    if is_featured:
        score += params["featured_boost"]
    if is_breaking:
        score += params["breaking_boost"]

    if published_at is not None:
        reference = ensure_utc(now) if now is not None else datetime.now(UTC)
        age_days = (reference - ensure_utc(published_at)).total_seconds() / _SECONDS_PER_DAY
        if age_days < params["recent_week_days"]:
            score += params["recent_week_boost"]
        if age_days < params["recent_day_days"]:
            score += params["recent_day_boost"]

    return score


def highlight_text(text: str | None, query: str) -> list[str]:
    """Extract up to three snippets surrounding occurrences of ``query``.

    Each snippet spans 50 characters either side of the match, clamped to
    the text bounds. The scan resumes one character after each match start,
    so overlapping occurrences yield overlapping snippets.
    """
    if not text or not query:
        return []

    params = get_search_params()
    context = params["highlight_context_chars"]
    max_snippets = params["highlight_max_snippets"]

    text_lower = text.lower()
    query_lower = query.lower()
    snippets: list[str] = []

    index = text_lower.find(query_lower)
    while index != -1 and len(snippets) < max_snippets:
        start = max(0, index - context)
        end = min(len(text), index + len(query) + context)
        snippets.append(text[start:end])
        index = text_lower.find(query_lower, index + 1)

    return snippets


def score_record(
    record: News,
    query: str,
    query_lower: str,
    *,
    include_content: bool = False,
    now: datetime | None = None,
) -> tuple[int, Highlights]:
    """Score one fetched news record and extract its highlights.

    ``record.content`` is only read when ``include_content`` is set; it is
    deferred at the query level otherwise.
    """
    content = record.content if include_content else None

    score = calculate_relevance_score(
        record.title,
        record.excerpt,
        content,
        query_lower,
        is_featured=bool(record.is_featured),
        is_breaking=bool(record.is_breaking),
        published_at=record.published_at,
        now=now,
    )

    content_chars = get_search_params()["highlight_content_chars"]
    highlights = Highlights(
        title=highlight_text(record.title, query),
        excerpt=highlight_text(record.excerpt, query) if record.excerpt else [],
        content=highlight_text(content[:content_chars], query) if content else [],
    )
    return score, highlights
