"""Time formatter: humanizes elapsed time.

    "{0}"                           timedelta(hours=2, seconds=2) -> "2 hours 2 seconds"
    "{0:time(abbr hours noless)}"   datetime 12h in the future   -> "-12h"

timedelta values are written directly. datetime values are measured
against the clock (now - value), but only when the formatter is called
with options, so "{0}" on a datetime stays with the default formatter.
Options come from "(...)" or, failing that, the literal nested format:
"{0:hours minutes}". See TimeSpanFormatOptions for the tokens.

Python 3.13+. Depends on Babel for unit names.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, ClassVar

from smartstrings.constants import DEFAULT_LANGUAGE
from smartstrings.extensions.base import FormatterBase
from smartstrings.runtime.time_text import TimeSpanFormatOptions, format_timedelta

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["TimeFormatter"]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TimeFormatter(FormatterBase):
    """Writes a timedelta (or the time since a datetime) as text.

    Attributes:
        default_language: Language when the call has no culture
        clock: Returns the current time (aware); replaceable in tests
    """

    DEFAULT_NAMES: ClassVar[tuple[str, ...]] = ("timespan", "time", "t", "")

    def __init__(
        self,
        names: tuple[str, ...] | None = None,
        *,
        default_language: str = DEFAULT_LANGUAGE,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize formatter.

        Args:
            names: Replacement for DEFAULT_NAMES
            default_language: Fallback language code for unit names
            clock: Current time source for datetime values
        """
        super().__init__(names)
        self.default_language = default_language
        self.clock = clock

    def try_evaluate_format(self, info: FormattingInfo) -> bool:
        """Write the humanized duration; decline other values."""
        fmt = info.format
        if fmt is not None and fmt.has_nested:
            return False

        if info.formatter_options:
            options = info.formatter_options
        elif fmt is not None:
            options = fmt.get_literal_text()
        else:
            options = ""

        current = info.current_value
        match current:
            case timedelta():
                elapsed = current
            case datetime() if info.formatter_options:
                elapsed = self.clock().astimezone(UTC) - current.astimezone(UTC)
            case _:
                return False

        locale = info.culture if info.culture is not None else self.default_language
        info.write(format_timedelta(elapsed, TimeSpanFormatOptions.parse(options), locale))
        return True
