"""IsMatch formatter: writes one of two alternatives by regex match.

    "{theKey:ismatch(^.+123.+$):Okay - {}|No match content}"

The value's str() is searched with the expression in the options. The
first alternative is written on a match, the second otherwise; both may
contain placeholders for the value.

Python 3.13+.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar

from smartstrings.constants import SPLIT_CHAR
from smartstrings.diagnostics import FormatterEvaluationError
from smartstrings.diagnostics.templates import ErrorTemplate
from smartstrings.extensions.base import FormatterBase

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["IsMatchFormatter"]


class IsMatchFormatter(FormatterBase):
    """Chooses between two alternatives with a regular expression.

    Attributes:
        regex_flags: Flags for re.compile, e.g. re.IGNORECASE
    """

    DEFAULT_NAMES: ClassVar[tuple[str, ...]] = ("ismatch",)

    def __init__(
        self, names: tuple[str, ...] | None = None, *, regex_flags: re.RegexFlag = re.NOFLAG
    ) -> None:
        """Initialize formatter.

        Args:
            names: Replacement for DEFAULT_NAMES
            regex_flags: Flags for every expression
        """
        super().__init__(names)
        self.regex_flags = regex_flags

    def try_evaluate_format(self, info: FormattingInfo) -> bool:
        """Write the match or no-match alternative.

        Raises:
            FormatterEvaluationError: Unless exactly 2 alternatives are given
            re.error: If the expression does not compile
        """
        formats = info.format.split(SPLIT_CHAR) if info.format is not None else ()
        if len(formats) != 2:
            raise FormatterEvaluationError(
                ErrorTemplate.invalid_format_options(
                    "ismatch", "Exactly 2 format options are required."
                )
            )
        pattern = re.compile(info.formatter_options, self.regex_flags)
        matched = pattern.search(str(info.current_value)) is not None
        info.write_format(formats[0] if matched else formats[1], info.current_value)
        return True
