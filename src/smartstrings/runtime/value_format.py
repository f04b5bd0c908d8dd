"""Culture-aware rendering of a single value with a format specifier.

Backs the default formatter. The specifier is the literal text of the
placeholder's nested format ("{0:N2}" -> "N2"):

    Numbers
        N, F, D, P, C, X, E, G with optional precision ("N2", "X8", "P0"),
        CLDR number patterns ("#,##0.00", "0.0%"), otherwise format().
    datetime, date, time
        "%" directives go to strftime; anything else is a Babel style
        ("short", "long") or CLDR pattern ("yyyy-MM-dd").
    str
        Written unchanged unless the specifier is a valid format() spec.
    Anything else
        format(value, spec).

Numbers and dates use Babel (thread-safe, CLDR-based), never the
process-wide locale module.

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from decimal import Decimal

from babel import Locale
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from smartstrings.constants import DEFAULT_LANGUAGE
from smartstrings.locale_utils import get_babel_locale

__all__ = ["format_number", "format_temporal", "format_value"]

# Letter and optional precision: "N", "N2", "x8"
_STANDARD_NUMBER = re.compile(r"([CcDdEeFfGgNnPpXx])([0-9]{1,2})?")

# "0.00", "#,##0.###", "0%" ...
_NUMBER_PATTERN = re.compile(r"[#0,.%‰;]*[#0][#0,.%‰;]*")

# Python format-spec mini-language
_FORMAT_SPEC = re.compile(
    r"(?:.?[<>=^])?[-+ ]?z?#?0?[0-9]*[_,]?(?:\.[0-9]+)?[bcdeEfFgGnosxX%]?", re.DOTALL
)

# ISO 4217 code for "no currency"
_NO_CURRENCY = "XXX"

_DEFAULT_PRECISION = {"N": 2, "F": 2, "P": 2, "C": 2, "E": 6}


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _fraction(digits: int) -> str:
    return "." + "0" * digits if digits > 0 else ""


def _require_integral(value: int | float | Decimal, letter: str) -> int:
    if isinstance(value, int) or (not isinstance(value, int) and value == int(value)):
        return int(value)
    msg = f"Format specifier '{letter}' requires an integral value, got {value}"
    raise ValueError(msg)


def _localize_point(text: str, locale: Locale) -> str:
    return text.replace(".", babel_numbers.get_decimal_symbol(locale))


def _default_currency(locale: Locale) -> str:
    if locale.territory:
        currencies = babel_numbers.get_territory_currencies(locale.territory)
        if currencies:
            return currencies[0]
    return _NO_CURRENCY


def format_number(
    value: int | float | Decimal,
    spec: str,
    locale: Locale,
    *,
    currency: str | None = None,
) -> str | None:
    """Render a number with a standard specifier or CLDR pattern.

    Args:
        value: Number to format
        spec: "N2", "P", "#,##0.00" ...
        locale: Babel locale for separators and symbols
        currency: ISO 4217 code for "C" (default: the locale's territory currency)

    Returns:
        Formatted text, or None when spec is neither form

    Raises:
        ValueError: "D" or "X" with a non-integral value

    Examples:
        >>> format_number(1234.5, "N2", Locale.parse("en_US"))
        '1,234.50'
        >>> format_number(1234.5, "N2", Locale.parse("de_DE"))
        '1.234,50'
    """
    match = _STANDARD_NUMBER.fullmatch(spec)
    if match is not None:
        letter, digits = match.group(1), match.group(2)
        kind = letter.upper()
        precision = int(digits) if digits is not None else _DEFAULT_PRECISION.get(kind, 0)
        match kind:
            case "N":
                return babel_numbers.format_decimal(
                    value, format="#,##0" + _fraction(precision), locale=locale
                )
            case "F":
                return babel_numbers.format_decimal(
                    value, format="0" + _fraction(precision), locale=locale
                )
            case "D":
                integral = _require_integral(value, letter)
                return babel_numbers.format_decimal(
                    integral, format="0" * max(precision, 1), locale=locale
                )
            case "P":
                return babel_numbers.format_percent(
                    value, format="#,##0" + _fraction(precision) + "%", locale=locale
                )
            case "C":
                code = currency or _default_currency(locale)
                if digits is None:
                    return babel_numbers.format_currency(value, code, locale=locale)
                return babel_numbers.format_currency(
                    value,
                    code,
                    format="¤#,##0" + _fraction(precision),
                    locale=locale,
                    currency_digits=False,
                )
            case "X":
                integral = _require_integral(value, letter)
                return format(integral, f"0{precision}{'X' if letter == 'X' else 'x'}")
            case "E":
                text = format(value, f".{precision}{letter}")
                mantissa, exponent = text.split(letter)
                # Three exponent digits: 1.234560E+003
                return _localize_point(mantissa, locale) + letter + exponent[0] + exponent[1:].zfill(3)
            case _:  # "G"
                text = str(value) if precision == 0 else format(value, f".{precision}G")
                return _localize_point(text, locale)

    if _NUMBER_PATTERN.fullmatch(spec) is not None:
        return babel_numbers.format_decimal(value, format=spec, locale=locale)
    return None


def format_temporal(value: datetime | date | time, spec: str, locale: Locale) -> str:
    """Render a date/time with strftime directives, a Babel style or a CLDR pattern.

    Examples:
        >>> format_temporal(date(2025, 10, 27), "%Y/%m", Locale.parse("en"))
        '2025/10'
        >>> format_temporal(date(2025, 10, 27), "yyyy-MM-dd", Locale.parse("en"))
        '2025-10-27'
    """
    if "%" in spec:
        return value.strftime(spec)
    style = spec or "medium"
    if isinstance(value, datetime):
        return babel_dates.format_datetime(value, format=style, locale=locale)
    if isinstance(value, date):
        return babel_dates.format_date(value, format=style, locale=locale)
    return babel_dates.format_time(value, format=style, locale=locale)


def format_value(
    value: object,
    spec: str,
    locale: Locale | None,
    *,
    currency: str | None = None,
) -> str:
    """Render value the way a plain "{0:spec}" placeholder does.

    Args:
        value: Value to render; None renders as ""
        spec: Format specifier ("" for the default rendering)
        locale: Culture of the call (None uses English CLDR data)
        currency: ISO 4217 code for the "C" specifier

    Raises:
        ValueError: If spec does not apply to the value
        TypeError: If the value's __format__ rejects spec
    """
    if value is None:
        return ""
    babel_locale = locale if locale is not None else get_babel_locale(DEFAULT_LANGUAGE)

    if isinstance(value, (datetime, date, time)):
        return format_temporal(value, spec, babel_locale)
    if _is_number(value):
        if not spec:
            if isinstance(value, int) or locale is None:
                return str(value)
            return _localize_point(str(value), babel_locale)
        text = format_number(value, spec, babel_locale, currency=currency)  # type: ignore[arg-type]
        if text is not None:
            return text
    if not spec:
        return str(value)
    if isinstance(value, str) and _FORMAT_SPEC.fullmatch(spec) is None:
        return value
    return format(value, spec)
