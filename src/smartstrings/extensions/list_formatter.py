"""List source and formatter.

As a source, resolves "[n]" / ".n" against sequences and "index" to the
position of the item currently being written by an enclosing list
format. As a formatter, writes every item of a collection through an
item format, joined by spacers:

    item format | spacer | last spacer | two-item spacer

    "{0:list:{}|, |, and }"  with [1, 2, 3]  ->  "1, 2, and 3"
    "{0:list:{}|, |, and | and }" with [1, 2]  ->  "1 and 2"

The current item index lives in a ContextVar, so nested lists and
concurrent evaluations each see their own index.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from contextvars import ContextVar
from typing import TYPE_CHECKING, ClassVar

from smartstrings.constants import SPLIT_CHAR
from smartstrings.extensions.base import FormatterBase
from smartstrings.syntax.ast import Format, Placeholder

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["ListFormatter", "current_collection_index"]

# -1 outside any list format
_collection_index: ContextVar[int] = ContextVar("smartstrings_collection_index", default=-1)

_INDEX_SELECTOR = "index"

# item format, spacer, last spacer, two-item spacer
_MAX_SPLITS = 3


def current_collection_index() -> int:
    """Index of the item being written by the innermost list format (-1 when none)."""
    return _collection_index.get()


def _is_collection(value: object) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray, Mapping))


class ListFormatter(FormatterBase):
    """Sequence indexer (source) and joiner (formatter)."""

    DEFAULT_NAMES: ClassVar[tuple[str, ...]] = ("list", "l", "")

    # ========================================================================
    # SOURCE
    # ========================================================================

    def try_evaluate_selector(self, info: FormattingInfo) -> bool:
        """Resolve an item index or the "index" selector."""
        selector = info.selector
        if selector is None:
            return False
        current = info.current_value
        sequence = current if isinstance(current, Sequence) and not isinstance(current, str) else None

        is_absolute = selector.index == 0 and not selector.operator
        if (
            not is_absolute
            and sequence is not None
            and selector.text.isascii()
            and selector.text.isdigit()
        ):
            position = int(selector.text)
            if position < len(sequence):
                info.result = sequence[position]
                return True

        if selector.text.casefold() == _INDEX_SELECTOR:
            index = _collection_index.get()
            if selector.index == 0:
                info.result = index
                return True
            # "{List1:{List2.index}}" walks List2 in step with List1
            if sequence is not None and 0 <= index < len(sequence):
                info.result = sequence[index]
                return True
        return False

    # ========================================================================
    # FORMATTER
    # ========================================================================

    def try_evaluate_format(self, info: FormattingInfo) -> bool:
        """Write each item through the item format, separated by spacers."""
        fmt = info.format
        current = info.current_value
        if fmt is None or not _is_collection(current):
            return False

        parameters = fmt.split(SPLIT_CHAR, _MAX_SPLITS)
        if len(parameters) < 2:
            return False
        item_format = parameters[0]
        spacer = parameters[1].get_literal_text()
        last_spacer = parameters[2].get_literal_text() if len(parameters) > 2 else spacer
        two_spacer = parameters[3].get_literal_text() if len(parameters) > 3 else last_spacer

        if not item_format.has_nested:
            item_format = _wrap_item_format(item_format)

        items = current if isinstance(current, Sequence) else list(current)  # type: ignore[arg-type]
        count = len(items)
        token = _collection_index.set(-1)
        try:
            for index, item in enumerate(items):
                _collection_index.set(index)
                if index < count - 1:
                    if index:
                        info.write(spacer)
                elif index:
                    info.write(two_spacer if count == 2 else last_spacer)
                info.write_format(item_format, item)
        finally:
            _collection_index.reset(token)
        return True


def _wrap_item_format(item_format: Format) -> Format:
    """Turn a plain item format such as "N2" into "{:N2}"."""
    placeholder = Placeholder(
        selectors=(),
        alignment=0,
        formatter_name="",
        formatter_options="",
        format=item_format,
        template=item_format.template,
        start=item_format.start,
        end=item_format.end,
    )
    return Format((placeholder,), item_format.template, item_format.start, item_format.end)
