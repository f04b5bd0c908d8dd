"""Default formatter: the last resort for every placeholder.

    "{0}"            -> str(value), None -> ""
    "{0:N2}"         -> "1,234.50"          (Babel, culture-aware)
    "{0:d(EUR):C}"   -> "€5.00"             (currency from options)
    "{0:yyyy-MM-dd}" -> "2025-10-27"        (CLDR date pattern)
    "{0:{Name}!}"    -> nested format evaluated with the value as scope

See smartstrings.runtime.value_format for the specifier rules.

Python 3.13+. Uses Babel for number and date patterns.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from smartstrings.extensions.base import FormatterBase
from smartstrings.runtime.value_format import format_value

if TYPE_CHECKING:
    from babel import Locale

    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["DefaultFormatter", "FormatDelegate"]


@dataclass(frozen=True, slots=True)
class FormatDelegate:
    """Argument that renders itself from the placeholder's format text.

    Example:
        >>> shout = FormatDelegate(lambda text, culture: text.upper())
        >>> smart.format("{0:hello}", shout)
        'HELLO'

    Attributes:
        render: Called with (format text, culture of the call)
    """

    render: Callable[[str, Locale | None], str]

    def __format__(self, format_spec: str) -> str:
        """Render without a culture."""
        return self.render(format_spec, None)


class DefaultFormatter(FormatterBase):
    """Writes the value with its format specifier; never declines."""

    DEFAULT_NAMES: ClassVar[tuple[str, ...]] = ("default", "d", "")

    def try_evaluate_format(self, info: FormattingInfo) -> bool:
        """Write the value.

        Raises:
            ValueError: If the specifier does not apply to the value
            TypeError: If the value's __format__ rejects the specifier
        """
        fmt = info.format
        current = info.current_value

        if fmt is not None and fmt.has_nested:
            info.write_format(fmt, current)
            return True

        spec = fmt.get_literal_text() if fmt is not None else ""
        if isinstance(current, FormatDelegate):
            info.write(current.render(spec, info.culture))
            return True
        info.write(format_value(current, spec, info.culture, currency=info.formatter_options or None))
        return True
