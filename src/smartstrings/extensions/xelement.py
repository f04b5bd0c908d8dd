"""ElementTree text formatter.

Writes the text content of an Element, or of the first Element of a
list (what XmlSource resolves to): "{book.title}" -> "Dune".

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar
from xml.etree.ElementTree import Element

from smartstrings.extensions.base import FormatterBase

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["XElementFormatter"]


class XElementFormatter(FormatterBase):
    """Writes element text, including the text of descendants."""

    DEFAULT_NAMES: ClassVar[tuple[str, ...]] = ("xelement", "xml", "x", "")

    def try_evaluate_format(self, info: FormattingInfo) -> bool:
        """Write "".join(element.itertext()); decline non-elements."""
        fmt = info.format
        if fmt is not None and fmt.has_nested:
            return False

        current = info.current_value
        if isinstance(current, list) and current and isinstance(current[0], Element):
            current = current[0]
        if not isinstance(current, Element):
            return False
        info.write("".join(current.itertext()))
        return True
