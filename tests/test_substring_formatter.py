"""Tests for SubStringFormatter.

Python 3.13+.
"""

from __future__ import annotations

import pytest

from smartstrings import SmartFormatter
from smartstrings.diagnostics import FormatterEvaluationError, FormatterNotFoundError
from smartstrings.enums import SubStringOutOfRangeBehavior
from smartstrings.extensions import SubStringFormatter

PERSON = {"Name": "Long John", "City": "New York"}


def _substring(smart: SmartFormatter) -> SubStringFormatter:
    formatter = smart.get_formatter_extension(SubStringFormatter)
    assert formatter is not None
    return formatter


class TestSubString:
    """Start and length options."""

    @pytest.mark.parametrize(
        ("template", "expected"),
        [
            ("{Name:substr(5)}", "John"),
            ("{City:substr(4)}", "York"),
            ("{Name:substr(0,4)}", "Long"),
            ("{Name:substr(-4)}", "John"),
            ("{Name:substr(-4,2)}", "Jo"),
            ("{Name:substr(-4,-1)}", "Joh"),
            ("{Name:substr(0,-5)}", "Long"),
            ("{Name:substr(20)}", ""),
            ("{Name:substr(-20,4)}", "Long"),
        ],
    )
    def test_table(self, smart: SmartFormatter, template: str, expected: str) -> None:
        """Negative starts count from the end; negative lengths trim the end."""
        assert smart.format(template, PERSON) == expected

    def test_none(self, smart: SmartFormatter) -> None:
        """None writes the null display string."""
        assert smart.format("{0:substr(1)}", None) == "(null)"

    def test_non_string_value(self, smart: SmartFormatter) -> None:
        """Other values are cut from their str()."""
        assert smart.format("{0:substr(0,3)}", 123456) == "123"

    def test_custom_delimiter(self, smart: SmartFormatter) -> None:
        """parameter_delimiter separates start and length."""
        _substring(smart).parameter_delimiter = ";"

        assert smart.format("{Name:substr(5;2)}", PERSON) == "Jo"

    def test_invalid_number(self, smart: SmartFormatter) -> None:
        """Non-integer options are reported by the formatter."""
        with pytest.raises(FormatterEvaluationError, match="invalid literal"):
            smart.format("{Name:substr(x)}", PERSON)

    def test_no_options_declines(self, smart: SmartFormatter) -> None:
        """"substr" without options is not a call."""
        with pytest.raises(FormatterNotFoundError):
            smart.format("{Name:substr()}", PERSON)


class TestOutOfRange:
    """Length running past the end of the text."""

    TEMPLATE = "{Name:substr(5,10)}"

    def test_return_empty_string(self, smart: SmartFormatter) -> None:
        """Default behavior."""
        assert smart.format(self.TEMPLATE, PERSON) == ""

    def test_return_to_end(self, smart: SmartFormatter) -> None:
        """The rest of the text from start."""
        _substring(smart).out_of_range_behavior = (
            SubStringOutOfRangeBehavior.RETURN_START_INDEX_TO_END_OF_STRING
        )

        assert smart.format(self.TEMPLATE, PERSON) == "John"

    def test_throw(self, smart: SmartFormatter) -> None:
        """An error naming the lengths."""
        _substring(smart).out_of_range_behavior = SubStringOutOfRangeBehavior.THROW_EXCEPTION

        with pytest.raises(FormatterEvaluationError, match="exceeds the length 9"):
            smart.format(self.TEMPLATE, PERSON)
