"""Tests for ListFormatter: spacers, item formats, nesting and the item index.

Python 3.13+.
"""

from __future__ import annotations

import pytest

from smartstrings import SmartFormatter
from smartstrings.extensions import current_collection_index


class TestSpacers:
    """Spacer, last spacer and two-item spacer."""

    @pytest.mark.parametrize(
        ("items", "expected"),
        [
            ([1, 2, 3], "1, 2, and 3"),
            ([1, 2], "1, and 2"),
            ([1], "1"),
            ([], ""),
        ],
    )
    def test_three_parameters(self, smart: SmartFormatter, items: list[int], expected: str) -> None:
        """The last spacer also joins two items when no two-item spacer is given."""
        assert smart.format("{0:list:{}|, |, and }", items) == expected

    @pytest.mark.parametrize(
        ("items", "expected"),
        [([1, 2, 3, 4], "1, 2, 3, and 4"), ([1, 2], "1 and 2")],
    )
    def test_four_parameters(self, smart: SmartFormatter, items: list[int], expected: str) -> None:
        """Two items use the fourth parameter."""
        assert smart.format("{0:list:{}|, |, and | and }", items) == expected

    def test_single_spacer(self, smart: SmartFormatter) -> None:
        """With two parameters every gap uses the spacer."""
        assert smart.format("{0:list:{}|/}", ["a", "b", "c"]) == "a/b/c"

    @pytest.mark.parametrize("name", ["list", "l"])
    def test_names(self, smart: SmartFormatter, name: str) -> None:
        """list and l are the same formatter."""
        template = "{0:" + name + ":+{}|, |, and }"

        assert smart.format(template, [1, 2, 3]) == "+1, +2, and +3"

    def test_implicit(self, smart: SmartFormatter) -> None:
        """Collections are listed without a formatter name."""
        assert smart.format("{0:{}|, }", (1, 2)) == "1, 2"

    def test_any_iterable(self, smart: SmartFormatter) -> None:
        """Iterables without len() are materialized first."""
        assert smart.format("{0:{}|-}", iter("abc")) == "a-b-c"

    def test_strings_are_not_lists(self, smart: SmartFormatter) -> None:
        """A string goes to the conditional formatter instead."""
        assert smart.format("{0:{}|, }", "ab") == "ab"


class TestItemFormats:
    """Plain and nested item formats."""

    def test_plain_item_format(self, smart: SmartFormatter) -> None:
        """A literal item format is the format specifier of each item."""
        assert smart.format("{0:list:N2|, }", [1, 2.5]) == "1.00, 2.50"

    def test_selectors_in_item_format(self, smart: SmartFormatter) -> None:
        """Items are the scope of the item format."""
        people = [{"Name": "Ann"}, {"Name": "Bob"}]

        assert smart.format("{0:{Name}|, }", people) == "Ann, Bob"

    def test_nested_lists(self, smart: SmartFormatter) -> None:
        """A list of lists formats each inner list with its own spacers."""
        assert smart.format("{0:list:{:list:{}|-}|, }", [[1, 2], [3]]) == "1-2, 3"

    def test_list_selector(self, smart: SmartFormatter) -> None:
        """A list reached through a selector chain."""
        data = {"Order": {"Items": ["tea", "milk"]}}

        assert smart.format("{Order.Items:{}| & }", data) == "tea & milk"


class TestCollectionIndex:
    """The index selector and current_collection_index()."""

    def test_index_written(self, smart: SmartFormatter) -> None:
        """{index} is zero-based."""
        assert smart.format("{0:{index}:{}|; }", ["a", "b", "c"]) == "0:a; 1:b; 2:c"

    def test_nested_index_is_innermost(self, smart: SmartFormatter) -> None:
        """Inner lists see their own index."""
        result = smart.format("{0:{:{index}|,}|; }", [["a", "b"], ["c"]])

        assert result == "0,1; 0"

    def test_index_restored(self, smart: SmartFormatter) -> None:
        """After formatting the index is back to -1."""
        smart.format("{0:{}|, }", [1, 2])

        assert current_collection_index() == -1
