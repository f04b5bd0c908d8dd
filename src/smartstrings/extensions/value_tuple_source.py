"""Plain tuple lookup.

format("{Name} {Count}", ({"Name": "x"}, counter)) resolves each selector
against the tuple's items in order, through every other registered
source. Nested plain tuples are flattened. Named tuples are left to
attribute lookup.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from smartstrings.extensions.base import ExtensionBase

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["ValueTupleSource"]


def _is_value_tuple(value: object) -> bool:
    return isinstance(value, tuple) and not hasattr(value, "_fields")


def _flatten(items: tuple[object, ...]) -> Iterator[object]:
    for item in items:
        if _is_value_tuple(item):
            yield from _flatten(item)  # type: ignore[arg-type]
        else:
            yield item


class ValueTupleSource(ExtensionBase):
    """Tries the other sources against each item of a plain tuple."""

    def try_evaluate_selector(self, info: FormattingInfo) -> bool:
        """Set info.result from the first tuple item some source resolves."""
        current = info.current_value
        if not _is_value_tuple(current):
            return False

        sources = [source for source in self.smart_formatter.sources if source is not self]
        try:
            for item in _flatten(current):  # type: ignore[arg-type]
                info.current_value = item
                for source in sources:
                    if source.try_evaluate_selector(info):
                        return True
        finally:
            info.current_value = current
        return False
