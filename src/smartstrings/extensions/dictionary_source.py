"""Mapping key lookup.

"{Name}" against {"Name": ...} resolves to the value. Keys that are not
strings compare by their str() form, so {1: "a"} answers "{1}" when the
mapping is the current value. Case follows SmartSettings.case_sensitivity.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from smartstrings.extensions.base import ExtensionBase
from smartstrings.variables.base import VariableGroup

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["DictionarySource"]


class DictionarySource(ExtensionBase):
    """Resolves selectors against Mapping keys."""

    def try_evaluate_selector(self, info: FormattingInfo) -> bool:
        """Set info.result to the value of the matching key."""
        current = info.current_value
        # Variable groups are mappings too, but resolve through their variables
        if not isinstance(current, Mapping) or isinstance(current, VariableGroup):
            return False

        selector = info.selector_text
        if selector in current:
            info.result = current[selector]
            return True

        settings = self.settings
        for key, value in current.items():
            if settings.names_equal(key if isinstance(key, str) else str(key), selector):
                info.result = value
                return True
        return False
