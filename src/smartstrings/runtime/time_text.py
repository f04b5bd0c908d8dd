"""Elapsed-time humanization using Babel unit data.

Turns a timedelta into text such as "1 day 1 hour", "3d 3s" or
"less than 1 second". Unit names and number formatting come from CLDR via
babel.units; only the "less than" phrase is kept here.

Python 3.13+. Depends on Babel for CLDR data.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from babel.units import format_unit

from smartstrings.constants import DEFAULT_LANGUAGE
from smartstrings.enums import TimeTruncation, TimeUnit
from smartstrings.locale_utils import get_language

if TYPE_CHECKING:
    from babel import Locale

__all__ = ["TimeSpanFormatOptions", "format_timedelta", "less_than_phrase"]

_MICROSECONDS: dict[TimeUnit, int] = {
    TimeUnit.MILLISECONDS: 1_000,
    TimeUnit.SECONDS: 1_000_000,
    TimeUnit.MINUTES: 60_000_000,
    TimeUnit.HOURS: 3_600_000_000,
    TimeUnit.DAYS: 86_400_000_000,
    TimeUnit.WEEKS: 604_800_000_000,
}

_CLDR_UNITS: dict[TimeUnit, str] = {
    TimeUnit.MILLISECONDS: "duration-millisecond",
    TimeUnit.SECONDS: "duration-second",
    TimeUnit.MINUTES: "duration-minute",
    TimeUnit.HOURS: "duration-hour",
    TimeUnit.DAYS: "duration-day",
    TimeUnit.WEEKS: "duration-week",
}

_UNIT_TOKENS: dict[str, TimeUnit] = {
    "ms": TimeUnit.MILLISECONDS,
    "millisecond": TimeUnit.MILLISECONDS,
    "milliseconds": TimeUnit.MILLISECONDS,
    "s": TimeUnit.SECONDS,
    "second": TimeUnit.SECONDS,
    "seconds": TimeUnit.SECONDS,
    "m": TimeUnit.MINUTES,
    "minute": TimeUnit.MINUTES,
    "minutes": TimeUnit.MINUTES,
    "h": TimeUnit.HOURS,
    "hour": TimeUnit.HOURS,
    "hours": TimeUnit.HOURS,
    "d": TimeUnit.DAYS,
    "day": TimeUnit.DAYS,
    "days": TimeUnit.DAYS,
    "w": TimeUnit.WEEKS,
    "week": TimeUnit.WEEKS,
    "weeks": TimeUnit.WEEKS,
}

_TRUNCATION_TOKENS: dict[str, TimeTruncation] = {
    "short": TimeTruncation.SHORTEST,
    "shortest": TimeTruncation.SHORTEST,
    "auto": TimeTruncation.AUTO,
    "fill": TimeTruncation.FILL,
    "full": TimeTruncation.FULL,
}

# "{0}" receives the unit text, e.g. "1 second"
_LESS_THAN: dict[str, str] = {
    "de": "weniger als {0}",
    "en": "less than {0}",
    "es": "menos de {0}",
    "fr": "moins de {0}",
    "it": "meno di {0}",
    "nl": "minder dan {0}",
    "pt": "menos de {0}",
    "sv": "mindre än {0}",
}


def less_than_phrase(language: str) -> str:
    """"less than {0}" pattern for a language, English when unknown."""
    return _LESS_THAN.get(language, _LESS_THAN[DEFAULT_LANGUAGE])


@dataclass(frozen=True, slots=True)
class TimeSpanFormatOptions:
    """Parsed time formatter options.

    Attributes:
        abbreviate: Narrow unit names ("3d") instead of long ones ("3 days")
        less_than: Round down and write "less than 1 <unit>" for sub-unit
            values; when False, round up and write "0 <units>"
        truncation: Which units inside the range are written
        range_max: Largest unit written
        range_min: Smallest unit written
    """

    abbreviate: bool = False
    less_than: bool = True
    truncation: TimeTruncation = TimeTruncation.AUTO
    range_max: TimeUnit = TimeUnit.DAYS
    range_min: TimeUnit = TimeUnit.SECONDS

    @classmethod
    def parse(cls, text: str) -> TimeSpanFormatOptions:
        """Parse whitespace-separated option tokens.

        Unit tokens set the range: the largest and smallest units named.
        Unknown tokens are ignored.

        Example:
            >>> TimeSpanFormatOptions.parse("abbr hours noless").range_max
            <TimeUnit.HOURS: 3>
        """
        abbreviate = False
        less_than = True
        truncation = TimeTruncation.AUTO
        units: list[TimeUnit] = []
        for token in text.lower().split():
            match token:
                case "abbr":
                    abbreviate = True
                case "noabbr":
                    abbreviate = False
                case "less":
                    less_than = True
                case "noless":
                    less_than = False
                case _ if token in _TRUNCATION_TOKENS:
                    truncation = _TRUNCATION_TOKENS[token]
                case _ if token in _UNIT_TOKENS:
                    units.append(_UNIT_TOKENS[token])
        if not units:
            return cls(abbreviate, less_than, truncation)
        return cls(abbreviate, less_than, truncation, max(units), min(units))


def format_timedelta(
    delta: timedelta,
    options: TimeSpanFormatOptions,
    locale: Locale | str = DEFAULT_LANGUAGE,
) -> str:
    """Humanize delta.

    Arithmetic is done in integer microseconds. Negative deltas write
    negative unit values ("-12h").

    Args:
        delta: Elapsed time
        options: Formatting options
        locale: Babel locale or code for unit names

    Returns:
        Units joined by spaces

    Example:
        >>> format_timedelta(timedelta(days=1, hours=1), TimeSpanFormatOptions())
        '1 day 1 hour'
    """
    total = delta // timedelta(microseconds=1)
    sign = -1 if total < 0 else 1
    total = abs(total)
    step = _MICROSECONDS[options.range_min]
    total = total // step * step if options.less_than else -(-total // step) * step

    length = "narrow" if options.abbreviate else "long"
    parts: list[str] = []
    started = False
    for unit in sorted(TimeUnit, reverse=True):
        if not options.range_min <= unit <= options.range_max:
            continue
        value, total = divmod(total, _MICROSECONDS[unit])
        match options.truncation:
            case TimeTruncation.SHORTEST:
                if started:
                    break
                display = value > 0
            case TimeTruncation.AUTO:
                display = value > 0
            case TimeTruncation.FILL:
                display = started or value > 0
            case TimeTruncation.FULL:
                display = True
        if unit == options.range_min and not started:
            if options.less_than and value < 1:
                unit_text = format_unit(1, _CLDR_UNITS[unit], length=length, locale=locale)
                parts.append(less_than_phrase(get_language(locale)).format(unit_text))
                break
            display = True
        if display:
            parts.append(format_unit(sign * value, _CLDR_UNITS[unit], length=length, locale=locale))
            started = True
    return " ".join(parts)
