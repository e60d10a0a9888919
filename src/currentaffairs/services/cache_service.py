"""Time-boxed cache for extraction and classification results.

This module provides in-memory caching that:
1. Skips fetch and extraction for a (source, date) slot inside the source TTL
2. Skips reclassification of identical title+body content
3. Tracks hit/miss counts per cache type

The cache is the only mutable state shared between pipeline runs. Loads for
one key are serialized so concurrent callers trigger a single fetch.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Hashable, List, Optional, Tuple

from currentaffairs.core.article import Classification
from currentaffairs.utils.logging import get_logger
from currentaffairs.utils.text_utils import content_hash

logger = get_logger(__name__)

EXTRACTION = "extraction"
CLASSIFICATION = "classification"

# Expired entries are also swept while storing, at most once per interval
SWEEP_INTERVAL_SECONDS = 60.0

CacheKey = Tuple[str, Hashable]


@dataclass(frozen=True)
class _CacheEntry:
    value: Any
    expires_at: float


class CacheService:
    """In-memory TTL cache with an injectable monotonic clock."""

    def __init__(
        self,
        classification_ttl_minutes: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize cache service.

        Args:
            classification_ttl_minutes: Lifetime of cached classifications
            clock: Monotonic seconds source; tests pass a fake
        """
        self._clock = clock
        self._classification_ttl = classification_ttl_minutes * 60.0
        self._entries: Dict[CacheKey, _CacheEntry] = {}
        self._locks: Dict[CacheKey, asyncio.Lock] = {}
        self._next_sweep = clock() + SWEEP_INTERVAL_SECONDS
        self._stats: Dict[str, Dict[str, int]] = {
            EXTRACTION: {"hits": 0, "misses": 0},
            CLASSIFICATION: {"hits": 0, "misses": 0},
        }

    # Extraction Cache Methods

    async def get_or_load_extraction(
        self,
        source_id: str,
        window_key: str,
        ttl_minutes: int,
        loader: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Return the cached extraction for a slot or run ``loader`` once.

        Concurrent callers for the same slot wait on one lock; the first
        one loads, the rest read its result. Exceptions raised by
        ``loader`` propagate and nothing is cached, so a failed slot is
        retried on the next call.

        Args:
            source_id: Source identifier
            window_key: Date slot (ISO date) or "latest" for live feeds
            ttl_minutes: Lifetime of the entry
            loader: Coroutine factory performing fetch + extraction

        Returns:
            The cached or freshly loaded extraction result
        """
        key: CacheKey = (EXTRACTION, (source_id, window_key))

        entry = self._lookup(key)
        if entry is not None:
            self._track_cache_stat(EXTRACTION, hit=True)
            logger.debug("extraction_cache_hit", source_id=source_id, window=window_key)
            return entry.value

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            entry = self._lookup(key)
            if entry is not None:
                self._track_cache_stat(EXTRACTION, hit=True)
                return entry.value

            self._track_cache_stat(EXTRACTION, hit=False)
            value = await loader()
            self._store(key, value, ttl_minutes * 60.0)
            logger.debug("extraction_cached", source_id=source_id, window=window_key)
            return value

    # Classification Cache Methods

    def get_cached_classification(
        self, title: str, body: str, source_category: str = ""
    ) -> Optional[Classification]:
        """Get the cached classification for identical content from one source category.

        The category is part of the key because classifiers fall back to it
        when no category rule matches.

        Returns:
            Classification if cache hit, None if cache miss
        """
        key: CacheKey = (CLASSIFICATION, (content_hash(title, body), source_category))
        entry = self._lookup(key)

        if entry is None:
            self._track_cache_stat(CLASSIFICATION, hit=False)
            return None

        self._track_cache_stat(CLASSIFICATION, hit=True)
        logger.debug("classification_cache_hit", title=title[:50])
        return entry.value

    def cache_classification(
        self, title: str, body: str, result: Classification, source_category: str = ""
    ) -> None:
        """Cache a classification under the title+body fingerprint and source category."""
        key: CacheKey = (CLASSIFICATION, (content_hash(title, body), source_category))
        self._store(key, result, self._classification_ttl)

    # Cache Statistics Methods

    def get_cache_stats(self) -> Dict[str, Dict[str, Any]]:
        """Hit/miss counters and live entry counts per cache type."""
        now = self._clock()
        stats = {}
        for cache_type, counters in self._stats.items():
            requests = counters["hits"] + counters["misses"]
            entries = sum(
                1
                for (namespace, _), entry in self._entries.items()
                if namespace == cache_type and entry.expires_at > now
            )
            stats[cache_type] = {
                "requests": requests,
                "hits": counters["hits"],
                "misses": counters["misses"],
                "hit_rate": counters["hits"] / requests if requests else 0.0,
                "entries": entries,
            }
        return stats

    def cleanup_expired_cache(self) -> Dict[str, int]:
        """Remove expired entries.

        Returns:
            Number of entries deleted per cache type
        """
        deleted = self._remove_expired(self._clock())

        logger.info(
            "cache_cleanup_completed",
            extraction_deleted=deleted[EXTRACTION],
            classification_deleted=deleted[CLASSIFICATION],
        )
        return deleted

    def __len__(self) -> int:
        """Stored entries, expired ones included until evicted."""
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._locks.clear()

    # Private Helper Methods

    def _lookup(self, key: CacheKey) -> Optional[_CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            self._evict(key)
            return None
        return entry

    def _store(self, key: CacheKey, value: Any, ttl_seconds: float) -> None:
        now = self._clock()
        if now >= self._next_sweep:
            removed = self._remove_expired(now)
            self._next_sweep = now + SWEEP_INTERVAL_SECONDS
            logger.debug("cache_swept", **removed)
        self._entries[key] = _CacheEntry(value=value, expires_at=now + ttl_seconds)

    def _remove_expired(self, now: float) -> Dict[str, int]:
        expired: List[CacheKey] = [
            key for key, entry in self._entries.items() if entry.expires_at <= now
        ]

        deleted = {EXTRACTION: 0, CLASSIFICATION: 0}
        for key in expired:
            self._evict(key)
            deleted[key[0]] += 1
        return deleted

    def _evict(self, key: CacheKey) -> None:
        self._entries.pop(key, None)
        lock = self._locks.get(key)
        if lock is not None and not lock.locked():
            del self._locks[key]

    def _track_cache_stat(self, cache_type: str, hit: bool) -> None:
        self._stats[cache_type]["hits" if hit else "misses"] += 1
