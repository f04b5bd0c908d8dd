"""Evaluation runtime.

Provides the SmartFormatter engine, the format cache, per-evaluation
context, and the CLDR-backed helpers used by the built-in formatters.
Depends on the syntax package for parsing.

Python 3.13+.
"""

from .cache import FormatCache, FormatCacheEntry
from .cache_config import CacheConfig
from .formatter import FormatResult, FormattingFailure, SmartFormatter
from .formatting_info import FormatDetails, FormattingInfo
from .plural_rules import select_plural_category
from .time_text import TimeSpanFormatOptions, format_timedelta
from .value_format import format_value

__all__ = [
    "CacheConfig",
    "FormatCache",
    "FormatCacheEntry",
    "FormatDetails",
    "FormatResult",
    "FormattingFailure",
    "FormattingInfo",
    "SmartFormatter",
    "TimeSpanFormatOptions",
    "format_timedelta",
    "format_value",
    "select_plural_category",
]
