"""Locale utilities for culture codes.

Cultures reach the engine as BCP-47 strings ("en-US"), POSIX strings
("en_US") or babel Locale objects. Everything is normalized here so cache
keys and Babel lookups stay consistent.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging

from babel import Locale
from babel.core import UnknownLocaleError

from smartstrings.constants import DEFAULT_LANGUAGE

__all__ = [
    "Culture",
    "get_babel_locale",
    "get_language",
    "normalize_locale",
    "resolve_locale",
]

logger = logging.getLogger(__name__)

type Culture = str | Locale


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    return Locale.parse(normalize_locale(locale_code))


def resolve_locale(culture: Culture | None) -> Locale | None:
    """Turn a culture argument into a Babel Locale.

    Unknown or malformed codes are logged and treated as "no culture".

    Args:
        culture: Locale, locale code or None

    Returns:
        Babel Locale, or None when no usable culture was given
    """
    if culture is None or isinstance(culture, Locale):
        return culture
    if not culture:
        return None
    try:
        return get_babel_locale(culture)
    except (UnknownLocaleError, ValueError):
        logger.warning("Unknown culture %r; using invariant formatting", culture)
        return None


def get_language(culture: Culture | None) -> str:
    """Two-letter language code of a culture.

    Example:
        >>> get_language("pt-BR")
        'pt'
        >>> get_language(None)
        'en'
    """
    if isinstance(culture, Locale):
        return culture.language
    if not culture:
        return DEFAULT_LANGUAGE
    return normalize_locale(culture).split("_", 1)[0].lower()
