"""Short-lived cache for autocomplete lookups."""

import logging
import time

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.search.engine import NewsSearchEngine
from app.search.schemas import QuickSearchItem

logger = logging.getLogger(__name__)

# (normalized query, limit) -> (stored_at, items)
_cache: dict[tuple[str, int], tuple[float, list[QuickSearchItem]]] = {}


def _cache_key(query: str, limit: int) -> tuple[str, int]:
    return query.strip().lower(), limit


async def cached_quick_search(db: AsyncSession, query: str, limit: int = 5) -> list[QuickSearchItem]:
    """Cached version of NewsSearchEngine.quick_search(). Uses QUICK_SEARCH_CACHE_TTL."""
    ttl = get_settings().QUICK_SEARCH_CACHE_TTL
    key = _cache_key(query, limit)
    now = time.monotonic()

    entry = _cache.get(key)
    if entry is not None and (now - entry[0]) < ttl:
        logger.debug("Quick search cache hit: %r", key)
        return entry[1]

    logger.debug("Quick search cache miss: %r", key)
    for stale in [k for k, (stored_at, _) in _cache.items() if (now - stored_at) >= ttl]:
        del _cache[stale]

    items = await NewsSearchEngine(db).quick_search(query, limit=limit)
    _cache[key] = (now, items)
    return items


def clear_quick_search_cache() -> None:
    """Drop every cached autocomplete entry."""
    _cache.clear()
