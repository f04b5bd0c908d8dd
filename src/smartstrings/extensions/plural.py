"""Plural formatter: picks a "|"-separated alternative by CLDR plural category.

    "{0} {0:p:item|items}"           0 -> "0 items", 1 -> "1 item"
    "{0:plural(ru):файл|файла|файлов|файла}"

The language comes from the formatter options, then the culture of the
call, then English. Sized collections are counted, so
"{Files:plural:one file|{Count} files}" works on a list.

Python 3.13+. Depends on Babel for CLDR data.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar

from smartstrings.constants import DEFAULT_LANGUAGE, SPLIT_CHAR
from smartstrings.diagnostics import FormatterEvaluationError
from smartstrings.diagnostics.templates import ErrorTemplate
from smartstrings.extensions.base import FormatterBase
from smartstrings.extensions.conditional import is_number
from smartstrings.locale_utils import get_language
from smartstrings.runtime.plural_rules import select_plural_index

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["PluralLocalizationFormatter"]


class PluralLocalizationFormatter(FormatterBase):
    """Chooses an alternative with the plural rules of a language.

    Attributes:
        default_language: Language used when neither options nor culture give one
    """

    DEFAULT_NAMES: ClassVar[tuple[str, ...]] = ("plural", "p", "")

    def __init__(
        self, names: tuple[str, ...] | None = None, *, default_language: str = DEFAULT_LANGUAGE
    ) -> None:
        """Initialize formatter.

        Args:
            names: Replacement for DEFAULT_NAMES
            default_language: Fallback language code
        """
        super().__init__(names)
        self.default_language = default_language

    def try_evaluate_format(self, info: FormattingInfo) -> bool:
        """Write the alternative for the value's plural category.

        Raises:
            FormatterEvaluationError: If the language has no rule for the
                number of alternatives given
        """
        fmt = info.format
        # A leading ":" hands the format to the conditional formatter
        if fmt is None or fmt.raw_text.startswith(":"):
            return False
        words = fmt.split(SPLIT_CHAR)
        if len(words) == 1:
            return False

        current = info.current_value
        value: int | float | Decimal
        if is_number(current):
            value = current  # type: ignore[assignment]
        elif isinstance(current, Collection) and not isinstance(current, (str, bytes, Mapping)):
            value = len(current)
        else:
            return False

        language = self._language(info)
        index = select_plural_index(value, language, len(words))
        if index is None:
            if not info.formatter_name:
                # Implicit call: leave the alternatives to the conditional formatter
                return False
            detail = f"{len(words)} alternatives do not fit the plural rules of '{language}'"
            raise FormatterEvaluationError(ErrorTemplate.invalid_format_options("plural", detail))
        info.write_format(words[index], current)
        return True

    def _language(self, info: FormattingInfo) -> str:
        if info.formatter_options:
            return get_language(info.formatter_options.strip())
        if info.culture is not None:
            return info.culture.language
        return self.default_language
