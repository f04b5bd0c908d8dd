"""ElementTree child lookup.

"{book.title}" against an xml.etree.ElementTree.Element resolves to the
list of child elements whose local tag name matches ("{ns}title" counts
as "title"). XElementFormatter writes the text of the first one.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element

from smartstrings.extensions.base import ExtensionBase

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["XmlSource", "local_name"]


def local_name(tag: str) -> str:
    """Tag without its "{namespace}" prefix."""
    return tag.rsplit("}", 1)[-1]


class XmlSource(ExtensionBase):
    """Resolves selectors to matching child elements."""

    def try_evaluate_selector(self, info: FormattingInfo) -> bool:
        """Set info.result to the non-empty list of matching children."""
        current = info.current_value
        if not isinstance(current, Element):
            return False
        selector = info.selector_text
        settings = self.settings
        matches = [
            child
            for child in current
            if isinstance(child.tag, str) and settings.names_equal(local_name(child.tag), selector)
        ]
        if not matches:
            return False
        info.result = matches
        return True
