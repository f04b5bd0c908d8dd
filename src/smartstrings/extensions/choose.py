"""Choose formatter: maps discrete values to alternatives.

    "{0:choose(1|2|3):one|two|three|other}"

The value's str() is looked up among the "|"-separated options (None is
"null"); the alternative at the same position is written. One extra
alternative is the default for values not listed.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from smartstrings.constants import SPLIT_CHAR
from smartstrings.diagnostics import FormatterEvaluationError
from smartstrings.diagnostics.templates import ErrorTemplate
from smartstrings.extensions.base import FormatterBase

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo
    from smartstrings.syntax.ast import Format

__all__ = ["ChooseFormatter"]

_NULL_TEXT = "null"


class ChooseFormatter(FormatterBase):
    """Writes the alternative whose option equals the value.

    Attributes:
        split_char: Separator of options and alternatives
    """

    DEFAULT_NAMES: ClassVar[tuple[str, ...]] = ("choose", "c")

    def __init__(self, names: tuple[str, ...] | None = None, *, split_char: str = SPLIT_CHAR) -> None:
        """Initialize formatter.

        Args:
            names: Replacement for DEFAULT_NAMES
            split_char: Separator of options and alternatives
        """
        super().__init__(names)
        self.split_char = split_char

    def try_evaluate_format(self, info: FormattingInfo) -> bool:
        """Write the chosen alternative.

        Raises:
            FormatterEvaluationError: If the alternatives do not match the
                options, or the value is not an option and there is no default
        """
        if not info.formatter_options or info.format is None:
            return False
        options = info.formatter_options.split(self.split_char)
        choices = info.format.split(self.split_char)
        if len(choices) < 2:
            return False
        info.write_format(self._choose(info.current_value, choices, options), info.current_value)
        return True

    @staticmethod
    def _choose(value: object, choices: tuple[Format, ...], options: list[str]) -> Format:
        text = _NULL_TEXT if value is None else str(value)
        if len(choices) < len(options):
            detail = f"You must specify at least {len(options)} choices"
            raise FormatterEvaluationError(ErrorTemplate.invalid_format_options("choose", detail))
        if len(choices) > len(options) + 1:
            detail = f"You cannot specify more than {len(options) + 1} choices"
            raise FormatterEvaluationError(ErrorTemplate.invalid_format_options("choose", detail))
        if text in options:
            return choices[options.index(text)]
        if len(choices) == len(options):
            detail = f'"{text}" is not a valid choice, and a "default" choice was not supplied'
            raise FormatterEvaluationError(ErrorTemplate.invalid_format_options("choose", detail))
        return choices[-1]
