"""In-memory cache of translation status queries."""

from typing import Any, Awaitable, Callable, Dict, Hashable, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)

CacheKey = Tuple[Hashable, ...]

# Query keys shared by the dispatcher, the single-item manager and the CLI
TRANSLATIONS_KEY: CacheKey = ("translations",)


def status_key(content_id: str) -> CacheKey:
    return ("translation-status", content_id)


def content_translations_key(content_id: str) -> CacheKey:
    return ("content-translations", content_id)


class QueryCache:
    """
    Client-side cache of server query results.

    Several components read and invalidate the same keys without locking.
    Whichever write lands last wins; the server stays the source of truth.
    """

    def __init__(self):
        self._entries: Dict[CacheKey, Any] = {}

    def get(self, key: CacheKey) -> Optional[Any]:
        return self._entries.get(key)

    def set(self, key: CacheKey, value: Any) -> None:
        self._entries[key] = value

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    async def fetch(self, key: CacheKey, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value, loading and storing it on a miss."""
        if key in self._entries:
            return self._entries[key]
        value = await loader()
        self._entries[key] = value
        return value

    def invalidate(self, prefix: CacheKey = ()) -> int:
        """
        Drop every entry whose key starts with ``prefix``.

        An empty prefix clears the whole cache. Returns the number of
        entries removed.
        """
        stale = [key for key in self._entries if key[: len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug("cache_invalidated", prefix=prefix, removed=len(stale))
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
