"""Positional argument lookup.

Reproduces plain positional substitution: a first selector made of
digits, with no operator, indexes the arguments of the format() call.
Registered last so named lookups win.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from smartstrings.extensions.base import ExtensionBase

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["DefaultSource"]


class DefaultSource(ExtensionBase):
    """Resolves "{0}", "{1}" ... to the original arguments."""

    def try_evaluate_selector(self, info: FormattingInfo) -> bool:
        """Set info.result to the indexed argument."""
        selector = info.selector
        if selector is None:
            return False
        text = selector.text
        if selector.index != 0 or selector.operator or not (text.isascii() and text.isdigit()):
            return False
        args = info.details.original_args
        position = int(text)
        if position >= len(args):
            return False
        info.result = args[position]
        return True
