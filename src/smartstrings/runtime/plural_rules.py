"""CLDR plural rules implementation using Babel.

Maps a number and a count of "|"-separated alternatives to the index of
the alternative to write.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from __future__ import annotations

import functools
import logging
from decimal import Decimal

from babel.core import UnknownLocaleError
from babel.plural import PluralRule

from smartstrings.constants import DEFAULT_LANGUAGE
from smartstrings.locale_utils import get_babel_locale

__all__ = [
    "PLURAL_CATEGORY_ORDER",
    "get_plural_categories",
    "select_plural_category",
    "select_plural_index",
]

logger = logging.getLogger(__name__)

# Order in which alternatives map to categories when their count equals
# the number of categories of the language.
PLURAL_CATEGORY_ORDER: tuple[str, ...] = ("zero", "one", "two", "few", "many", "other")


@functools.lru_cache(maxsize=128)
def _plural_rule(language: str) -> PluralRule:
    try:
        return get_babel_locale(language).plural_form
    except (UnknownLocaleError, ValueError):
        logger.warning("Unknown plural locale %r; using English rules", language)
        return get_babel_locale(DEFAULT_LANGUAGE).plural_form


def get_plural_categories(language: str) -> tuple[str, ...]:
    """Plural categories of a language in CLDR order.

    Example:
        >>> get_plural_categories("en")
        ('one', 'other')
        >>> get_plural_categories("ru")
        ('one', 'few', 'many', 'other')
    """
    tags = _plural_rule(language).tags | {"other"}
    return tuple(category for category in PLURAL_CATEGORY_ORDER if category in tags)


def select_plural_category(n: int | float | Decimal, language: str) -> str:
    """Select CLDR plural category for number using Babel's CLDR data.

    Args:
        n: Number to categorize
        language: Language or locale code (e.g., "lv", "en_US", "ar-SA")

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(1, "en")
        'one'
        >>> select_plural_category(5, "ru")
        'many'
    """
    if isinstance(n, float) and n.is_integer():
        # 1.0 counts as "one"; Babel would see a visible fraction digit
        n = int(n)
    return _plural_rule(language)(abs(n))


def select_plural_index(n: int | float | Decimal, language: str, count: int) -> int | None:
    """Index of the alternative for n among count alternatives.

    When count equals the language's number of categories, alternatives
    follow PLURAL_CATEGORY_ORDER. Otherwise the shorthand forms apply:
    2 is one|other, 3 is zero|one|other, 4 is negative|zero|one|other.

    Returns:
        Alternative index, or None when count fits neither rule

    Examples:
        >>> select_plural_index(1, "en", 2)
        0
        >>> select_plural_index(0, "en", 3)
        0
        >>> select_plural_index(-3, "en", 4)
        0
    """
    categories = get_plural_categories(language)
    category = select_plural_category(n, language)
    if count == len(categories):
        return categories.index(category)
    is_one = category == "one"
    match count:
        case 2:  # one | other
            return 0 if is_one else 1
        case 3:  # zero | one | other
            if n == 0:
                return 0
            return 1 if is_one else 2
        case 4:  # negative | zero | one | other
            if n < 0:
                return 0
            if n == 0:
                return 1
            return 2 if is_one else 3
    return None
