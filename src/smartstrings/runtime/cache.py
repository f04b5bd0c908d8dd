"""Content-addressed LRU cache of parsed templates.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - LRU eviction via OrderedDict
    - Keys are (template text, parse-relevant settings), never arguments
    - Cleared whenever an extension is registered, because the set of
      formatter names changes how templates parse

Each entry also carries extension-private data (cached_objects) and the
reactive variables read during the latest evaluation (variable_triggers).

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from threading import RLock

from smartstrings.syntax.ast import Format

__all__ = ["FormatCache", "FormatCacheEntry"]

logger = logging.getLogger(__name__)

# Internal type alias for cache keys (prefixed with _ per naming convention)
type _CacheKey = tuple[str, tuple[object, ...]]


@dataclass(slots=True)
class FormatCacheEntry:
    """Parsed template plus evaluation-time side data.

    Attributes:
        format: Parsed tree, shared read-only by every evaluation
        cached_objects: Extension-private memo, e.g. resolved member names
        variable_triggers: Reactive variables read by the latest evaluation,
            in first-read order without duplicates
    """

    format: Format
    cached_objects: dict[Hashable, object] = field(default_factory=dict)
    variable_triggers: list[object] = field(default_factory=list)

    def add_trigger(self, variable: object) -> None:
        """Record variable once (identity comparison)."""
        if not any(existing is variable for existing in self.variable_triggers):
            self.variable_triggers.append(variable)


class FormatCache:
    """Thread-safe LRU cache of FormatCacheEntry objects.

    Attributes:
        maxsize: Maximum number of cache entries
        hits: Number of cache hits (for metrics)
        misses: Number of cache misses (for metrics)
    """

    __slots__ = ("_cache", "_hits", "_lock", "_maxsize", "_misses")

    def __init__(self, maxsize: int = 1000) -> None:
        """Initialize format cache.

        Args:
            maxsize: Maximum number of entries (default: 1000)
        """
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)
        self._cache: OrderedDict[_CacheKey, FormatCacheEntry] = OrderedDict()
        self._maxsize = maxsize
        self._lock = RLock()
        self._hits = 0
        self._misses = 0

    @property
    def maxsize(self) -> int:
        """Maximum number of entries."""
        return self._maxsize

    @property
    def hits(self) -> int:
        """Number of lookups served from the cache."""
        return self._hits

    @property
    def misses(self) -> int:
        """Number of lookups that had to parse."""
        return self._misses

    def get_or_parse(
        self, template: str, fingerprint: tuple[object, ...], parse: Callable[[], Format]
    ) -> FormatCacheEntry:
        """Return the entry for template, parsing on a miss.

        parse() runs outside the lock; a parse error propagates and
        nothing is stored.

        Args:
            template: Template text
            fingerprint: Parse-relevant settings (SmartSettings.parse_fingerprint)
            parse: Zero-argument callable producing the Format

        Returns:
            Cached or freshly inserted entry
        """
        key: _CacheKey = (template, fingerprint)
        with self._lock:
            entry = self._cache.get(key)
            if entry is not None:
                self._cache.move_to_end(key)
                self._hits += 1
                return entry
            self._misses += 1

        entry = FormatCacheEntry(parse())
        with self._lock:
            existing = self._cache.get(key)
            if existing is not None:
                return existing
            if len(self._cache) >= self._maxsize:
                self._cache.popitem(last=False)  # Remove first (oldest)
            self._cache[key] = entry
        return entry

    def clear(self) -> None:
        """Clear all cached entries and reset metrics."""
        with self._lock:
            dropped = len(self._cache)
            self._cache.clear()
            self._hits = 0
            self._misses = 0
        logger.debug("Format cache cleared (%d entries dropped)", dropped)

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Returns:
            Dict with keys:
            - size (int): Current number of cached entries
            - maxsize (int): Maximum cache capacity
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
            }

    def __len__(self) -> int:
        """Number of cached entries."""
        with self._lock:
            return len(self._cache)
