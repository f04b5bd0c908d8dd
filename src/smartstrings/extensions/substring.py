"""Substring formatter.

    "{Name:substr(5)}"      "Long John" -> "John"
    "{Name:substr(-4,2)}"   "Long John" -> "Jo"
    "{Name:substr(-4,-1)}"  "Long John" -> "Joh"

A negative start counts from the end; a negative length leaves that many
characters off the end. A start past the end writes "". A length
running past the end is handled per out_of_range_behavior.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from smartstrings.diagnostics import FormatterEvaluationError
from smartstrings.diagnostics.templates import ErrorTemplate
from smartstrings.enums import SubStringOutOfRangeBehavior
from smartstrings.extensions.base import FormatterBase

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["SubStringFormatter"]


class SubStringFormatter(FormatterBase):
    """Writes part of the value's text.

    Attributes:
        parameter_delimiter: Separator of start and length in the options
        null_display_string: Written for None
        out_of_range_behavior: Handling of start + length past the end
    """

    DEFAULT_NAMES: ClassVar[tuple[str, ...]] = ("substr",)

    def __init__(
        self,
        names: tuple[str, ...] | None = None,
        *,
        parameter_delimiter: str = ",",
        null_display_string: str = "(null)",
        out_of_range_behavior: SubStringOutOfRangeBehavior = (
            SubStringOutOfRangeBehavior.RETURN_EMPTY_STRING
        ),
    ) -> None:
        """Initialize formatter.

        Args:
            names: Replacement for DEFAULT_NAMES
            parameter_delimiter: Separator of start and length
            null_display_string: Text for None
            out_of_range_behavior: Handling of a length past the end
        """
        super().__init__(names)
        self.parameter_delimiter = parameter_delimiter
        self.null_display_string = null_display_string
        self.out_of_range_behavior = out_of_range_behavior

    def try_evaluate_format(self, info: FormattingInfo) -> bool:
        """Write the substring; decline without options.

        Raises:
            ValueError: If start or length is not an integer
            FormatterEvaluationError: If the length runs past the end under
                THROW_EXCEPTION
        """
        if not info.formatter_options:
            return False
        parameters = info.formatter_options.split(self.parameter_delimiter)
        if info.current_value is None:
            info.write(self.null_display_string)
            return True

        text = str(info.current_value)
        start = int(parameters[0])
        length = int(parameters[1]) if len(parameters) > 1 else None

        if start < 0:
            start = max(len(text) + start, 0)
        start = min(start, len(text))
        if length is None:
            info.write(text[start:])
            return True

        if length < 0:
            length = max(len(text) - start + length, 0)
        if start + length > len(text):
            match self.out_of_range_behavior:
                case SubStringOutOfRangeBehavior.RETURN_EMPTY_STRING:
                    length = 0
                case SubStringOutOfRangeBehavior.RETURN_START_INDEX_TO_END_OF_STRING:
                    length = len(text) - start
                case SubStringOutOfRangeBehavior.THROW_EXCEPTION:
                    detail = f"start {start} plus length {length} exceeds the length {len(text)}"
                    raise FormatterEvaluationError(
                        ErrorTemplate.invalid_format_options("substr", detail)
                    )
        info.write(text[start : start + length])
        return True
