# @TASK S2-T2.1 - Search engine package

"""News search package: query planning, relevance scoring and highlighting."""

from app.search.engine import NewsSearchEngine
from app.search.schemas import (
    QuickSearchItem,
    SearchOptions,
    SearchResponse,
    SearchResult,
    SortBy,
)
from app.search.scoring import calculate_relevance_score, highlight_text, score_record

__all__ = [
    "NewsSearchEngine",
    "QuickSearchItem",
    "SearchOptions",
    "SearchResponse",
    "SearchResult",
    "SortBy",
    "calculate_relevance_score",
    "highlight_text",
    "score_record",
]
