"""Centralized search parameter management.

Relevance weights and highlight window sizes used by the news scorer.

Usage::

    from app.search.params import get_search_params
    params = get_search_params()
    if title_lower == query_lower:
        score += params["exact_title_weight"]
"""

from __future__ import annotations

from typing import Any

DEFAULT_SEARCH_PARAMS: dict[str, int] = {
    # Title
    "exact_title_weight": 100,
    "title_contains_weight": 50,
    "title_word_weight": 30,
    # Body
    "excerpt_weight": 20,
    "content_weight": 10,
    # Flags
    "featured_boost": 5,
    "breaking_boost": 5,
    # Recency (cumulative)
    "recent_week_boost": 5,
    "recent_day_boost": 10,
    "recent_week_days": 7,
    "recent_day_days": 1,
    # Highlights
    "highlight_context_chars": 50,
    "highlight_max_snippets": 3,
    "highlight_content_chars": 500,
}


def get_search_params() -> dict[str, Any]:
    """Return a copy of the scoring parameters."""
    return dict(DEFAULT_SEARCH_PARAMS)
