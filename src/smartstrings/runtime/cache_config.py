"""Cache configuration for SmartFormatter.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from smartstrings.constants import DEFAULT_CACHE_SIZE

__all__ = ["CacheConfig"]


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Immutable configuration for the parsed-format cache.

    Attributes:
        size: Maximum number of cached templates (default: 1000).
        enabled: Cache parsed formats at all (default: True). When False
            every format() call parses its template; format_with_cache()
            still returns a fresh entry per call.

    Example:
        >>> from smartstrings import SmartFormatter
        >>> formatter = SmartFormatter(cache=CacheConfig(size=200))
        >>> formatter.get_cache_stats()["maxsize"]
        200
    """

    size: int = DEFAULT_CACHE_SIZE
    enabled: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If size is not positive
        """
        if self.size <= 0:
            msg = "size must be positive"
            raise ValueError(msg)
