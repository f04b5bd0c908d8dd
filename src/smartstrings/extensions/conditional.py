"""Conditional formatter: picks one "|"-separated alternative by value.

Numbers:
    Complex conditions, tried left to right; the first true one wins and
    an alternative without a condition is the fallback:

        "{0:cond:>=55?senior|>=30?adult|young}"

    Conditions chain with "&" (and) or "/" (or): "{0:cond:>0&<10?digit|other}".
    Without conditions the value indexes the alternatives:
    min(floor(n), count - 1), and negative numbers pick the last one.

Other values:
    bool       True|False
    str        non-empty|empty
    datetime   past|present|future   (or past/present|future with 2)
    timedelta  negative|zero|positive   (or negative/zero|positive with 2)
    anything   not None|None

A nested format starting with ":" ("{0::a|b}") skips the plural
formatter and comes here with the ":" removed.

Python 3.13+.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar

from smartstrings.constants import SPLIT_CHAR
from smartstrings.extensions.base import FormatterBase

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo
    from smartstrings.syntax.ast import Format

__all__ = ["ConditionalFormatter", "is_number", "to_decimal"]

# One or more "[&/]<op><number>" terms followed by "?"
_COMPLEX_CONDITION = re.compile(r"(?:[&/]?[<>=!]=?[0-9.-]+)+\?")
_CONDITION_TERM = re.compile(r"([&/]?)([<>=!]=?)([0-9.-]+)")

_COMPARISONS: dict[str, Callable[[Decimal, Decimal], bool]] = {
    ">": lambda value, limit: value > limit,
    "<": lambda value, limit: value < limit,
    "=": lambda value, limit: value == limit,
    "==": lambda value, limit: value == limit,
    "<=": lambda value, limit: value <= limit,
    ">=": lambda value, limit: value >= limit,
    "!": lambda value, limit: value != limit,
    "!=": lambda value, limit: value != limit,
}


def is_number(value: object) -> bool:
    """int, float or Decimal, excluding bool."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def to_decimal(value: int | float | Decimal) -> Decimal:
    """Exact decimal for comparisons (floats via their shortest repr)."""
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ConditionalFormatter(FormatterBase):
    """Chooses an alternative from the value's sign, truth or threshold.

    Attributes:
        clock: Returns the current time (aware); replaceable in tests
    """

    DEFAULT_NAMES: ClassVar[tuple[str, ...]] = ("conditional", "cond", "")

    def __init__(
        self,
        names: tuple[str, ...] | None = None,
        *,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize formatter.

        Args:
            names: Replacement for DEFAULT_NAMES
            clock: Current time source for datetime values
        """
        super().__init__(names)
        self.clock = clock

    def try_evaluate_format(self, info: FormattingInfo) -> bool:
        """Write the selected alternative; decline when there is only one."""
        fmt = info.format
        if fmt is None:
            return False
        if fmt.raw_text.startswith(":"):
            fmt = fmt.substring(1)

        parameters = fmt.split(SPLIT_CHAR)
        if len(parameters) == 1:
            return False
        current = info.current_value

        if is_number(current):
            number = to_decimal(current)  # type: ignore[arg-type]
            has_conditions, chosen = self._evaluate_conditions(parameters, number)
            if has_conditions:
                if chosen is not None:
                    info.write_format(chosen, current)
                return True
            index = self._number_index(number, len(parameters))
        else:
            index = self._value_index(current, len(parameters))

        info.write_format(parameters[index], current)
        return True

    # ========================================================================
    # SELECTION
    # ========================================================================

    @staticmethod
    def _evaluate_conditions(
        parameters: tuple[Format, ...], number: Decimal
    ) -> tuple[bool, Format | None]:
        """Alternative chosen by complex conditions.

        Returns:
            (False, None) when the first alternative has no condition;
            otherwise (True, chosen alternative), where None means every
            condition was false and there is no fallback
        """
        for position, parameter in enumerate(parameters):
            parsed = _parse_condition(parameter, number)
            if parsed is None:
                if position == 0:
                    return False, None
                # Alternative without a condition is the fallback
                return True, parameter
            result, output = parsed
            if result:
                return True, output
        return True, None

    @staticmethod
    def _number_index(number: Decimal, count: int) -> int:
        if number < 0:
            return count - 1
        return min(math.floor(number), count - 1)

    def _value_index(self, current: object, count: int) -> int:
        match current:
            case bool():
                return 0 if current else 1
            case datetime():
                now = self.clock().astimezone(UTC)
                moment = current.astimezone(UTC)
                if count == 3 and moment.date() == now.date():
                    return 1
                return 0 if moment <= now else count - 1
            case date():
                today = self.clock().astimezone(UTC).date()
                if count == 3 and current == today:
                    return 1
                return 0 if current <= today else count - 1
            case timedelta():
                if count == 3 and not current:
                    return 1
                return 0 if current <= timedelta(0) else count - 1
            case str():
                return 0 if current else 1
            case None:
                return 1
        return 0


def _parse_condition(parameter: Format, number: Decimal) -> tuple[bool, Format] | None:
    """Evaluate the leading condition of an alternative.

    Returns:
        (condition result, alternative without its condition), or None
        when the alternative does not start with a condition
    """
    match = _COMPLEX_CONDITION.match(parameter.template, parameter.start, parameter.end)
    if match is None:
        return None
    result = False
    for position, term in enumerate(_CONDITION_TERM.finditer(match.group(0))):
        joiner, operator, limit = term.groups()
        outcome = _COMPARISONS[operator](number, Decimal(limit))
        if position == 0:
            result = outcome
        elif joiner == "/":
            result = result or outcome
        else:
            result = result and outcome
    return result, parameter.substring(match.end() - parameter.start)
