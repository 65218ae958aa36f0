"""In-process LRU cache for symbol search results.

Alpha Vantage only allows a handful of ``SYMBOL_SEARCH`` calls per minute, so
successful lookups are kept for a short TTL. Each cache is an explicit
instance; there is no module-level cache.

Not thread-safe: callers sharing an instance across threads must serialize
access themselves.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from stockleague.core.config import settings
from stockleague.core.logging import get_logger
from stockleague.domain.symbol import SymbolSearchMatch

logger = get_logger("cache.symbol_search")

Clock = Callable[[], float]


def normalize_symbol_search_keyword(keyword: str) -> str:
    """Normalize a keyword into a cache key."""
    return keyword.strip().lower()


def _copy_matches(matches: Iterable[SymbolSearchMatch]) -> list[SymbolSearchMatch]:
    return [match.model_copy() for match in matches]


@dataclass
class _CacheEntry:
    matches: list[SymbolSearchMatch]
    expires_at: float
    last_accessed: int


class SymbolSearchCache:
    """
    Keyword -> matches cache with TTL expiry and LRU eviction.

    Recency is tracked with a per-cache sequence number rather than wall-clock
    time, so two operations within the same clock tick are still ordered.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        max_entries: Optional[int] = None,
        clock: Clock = time.time,
    ):
        """
        Initialize the cache.

        Args:
            ttl_seconds: Lifetime of an entry; non-positive values use the default
            max_entries: Capacity; 0 disables storage, negative values use the default
            clock: Source of "now" in seconds
        """
        self.ttl_seconds = (
            ttl_seconds
            if ttl_seconds is not None and ttl_seconds > 0
            else settings.symbol_search_cache_ttl
        )
        self.max_entries = (
            int(max_entries)
            if max_entries is not None and max_entries >= 0
            else settings.symbol_search_cache_max_entries
        )
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}
        self._access_sequence = 0

    def _next_sequence(self) -> int:
        self._access_sequence += 1
        return self._access_sequence

    def set(self, keyword: str, matches: Iterable[SymbolSearchMatch]) -> None:
        """Store a copy of ``matches``, evicting the least recently used entry if full."""
        if self.max_entries == 0:
            return

        key = normalize_symbol_search_keyword(keyword)
        if not key:
            return

        self._entries[key] = _CacheEntry(
            matches=_copy_matches(matches),
            expires_at=self._clock() + self.ttl_seconds,
            last_accessed=self._next_sequence(),
        )
        logger.debug(f"Symbol search cache set: {key}, TTL: {self.ttl_seconds}s")

        # One eviction per insert; an over-full cache after lowering max_entries is not trimmed
        if len(self._entries) > self.max_entries:
            oldest_key = min(self._entries, key=lambda k: self._entries[k].last_accessed)
            del self._entries[oldest_key]
            logger.debug(f"Symbol search cache evicted: {oldest_key}")

    def get(self, keyword: str) -> Optional[list[SymbolSearchMatch]]:
        """Return a copy of the cached matches, or None on miss or expiry."""
        key = normalize_symbol_search_keyword(keyword)
        if not key:
            return None

        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"Symbol search cache miss: {key}")
            return None

        if entry.expires_at <= self._clock():
            del self._entries[key]
            logger.debug(f"Symbol search cache expired: {key}")
            return None

        entry.last_accessed = self._next_sequence()
        logger.debug(f"Symbol search cache hit: {key}")
        return _copy_matches(entry.matches)

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def prune_expired(self, now: Optional[float] = None) -> int:
        """
        Remove entries expiring at or before ``now``.

        Meant for periodic sweeps; recency of surviving entries is untouched.

        Returns:
            Number of entries removed
        """
        current = self._clock() if now is None else now
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= current]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Symbol search cache pruned {len(expired)} expired entries")
        return len(expired)


def create_symbol_search_cache(
    ttl_seconds: Optional[float] = None,
    max_entries: Optional[int] = None,
    clock: Clock = time.time,
) -> SymbolSearchCache:
    """Create a new, independent symbol search cache."""
    return SymbolSearchCache(ttl_seconds=ttl_seconds, max_entries=max_entries, clock=clock)
