"""Enumerations for SmartStrings type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import IntEnum, StrEnum


class ErrorAction(StrEnum):
    """What to do when parsing or formatting a placeholder fails.

    StrEnum provides automatic string conversion: str(ErrorAction.IGNORE) == "ignore"
    """

    THROW_ERROR = "throw_error"
    """Raise a typed SmartFormatError to the caller."""

    OUTPUT_ERROR_IN_RESULT = "output_error_in_result"
    """Write the error message in place of the failed placeholder."""

    IGNORE = "ignore"
    """Write nothing for the failed placeholder."""

    MAINTAIN_TOKENS = "maintain_tokens"
    """Write the original placeholder source text verbatim: {Name}"""


class CaseSensitivity(StrEnum):
    """Comparison mode for selector, key and formatter name matching.

    StrEnum provides automatic string conversion:
    str(CaseSensitivity.CASE_SENSITIVE) == "case_sensitive"
    """

    CASE_SENSITIVE = "case_sensitive"
    """{Name} only matches Name."""

    CASE_INSENSITIVE = "case_insensitive"
    """{name} matches Name, NAME and name."""


class SubStringOutOfRangeBehavior(StrEnum):
    """How the substr formatter handles a length running past the end of the value."""

    RETURN_EMPTY_STRING = "return_empty_string"
    """substr(0,999) on "abc" writes ""."""

    RETURN_START_INDEX_TO_END_OF_STRING = "return_start_index_to_end_of_string"
    """substr(0,999) on "abc" writes "abc"."""

    THROW_EXCEPTION = "throw_exception"
    """substr(0,999) on "abc" fails the placeholder."""


class TimeTruncation(StrEnum):
    """Which units the time formatter writes inside its range."""

    SHORTEST = "short"
    """Only the largest non-zero unit: "2 hours"."""

    AUTO = "auto"
    """Every non-zero unit: "2 hours 2 seconds"."""

    FILL = "fill"
    """Every unit from the largest non-zero one down: "2 hours 0 minutes 2 seconds"."""

    FULL = "full"
    """Every unit of the range: "0 days 2 hours 0 minutes 2 seconds"."""


class TimeUnit(IntEnum):
    """Units of the time formatter, ordered smallest to largest."""

    MILLISECONDS = 0
    SECONDS = 1
    MINUTES = 2
    HOURS = 3
    DAYS = 4
    WEEKS = 5


__all__ = [
    "CaseSensitivity",
    "ErrorAction",
    "SubStringOutOfRangeBehavior",
    "TimeTruncation",
    "TimeUnit",
]
