"""Shared constants for SmartStrings.

This module provides centralized configuration constants used across
the syntax, runtime and extension packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for evaluation
- Cache limits: Memory bounds for the parsed-format cache
- Syntax: Brace, escape and separator characters
- Locale: Fallback language for plural and time rules

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Cache limits
    "DEFAULT_CACHE_SIZE",
    # Syntax
    "OPENING_BRACE",
    "CLOSING_BRACE",
    "DEFAULT_ESCAPE_CHAR",
    "SELECTOR_OPERATORS",
    "SELECTOR_EXTRA_CHARS",
    "SPLIT_CHAR",
    # Locale
    "DEFAULT_LANGUAGE",
    # Logging
    "LOG_TRUNCATE_WARNING",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting of evaluation (placeholder -> nested format -> placeholder).
# The parser itself is iterative and has no depth limit; evaluation recurses,
# so it is bounded here and clamped against sys.getrecursionlimit().
MAX_DEPTH: int = 100

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Default maximum number of parsed templates kept in the format cache.
# A typical UI has a few hundred distinct smart strings.
DEFAULT_CACHE_SIZE: int = 1000

# ============================================================================
# SYNTAX
# ============================================================================

OPENING_BRACE: str = "{"
CLOSING_BRACE: str = "}"

# Character literal escape (\n, \t, \{ ...) and default alternative brace escape.
DEFAULT_ESCAPE_CHAR: str = "\\"

# Characters that separate selectors inside a placeholder: {a.b[0]}
SELECTOR_OPERATORS: str = ".[]"

# Characters allowed in selector names in addition to letters and digits.
SELECTOR_EXTRA_CHARS: str = "_-"

# Separator for alternatives in conditional, plural, list and choose formats.
SPLIT_CHAR: str = "|"

# ============================================================================
# LOCALE
# ============================================================================

# Language used by plural and time rules when no culture is supplied.
DEFAULT_LANGUAGE: str = "en"

# ============================================================================
# LOGGING
# ============================================================================

# Warnings show up to 100 chars of a failing placeholder or message.
LOG_TRUNCATE_WARNING: int = 100
