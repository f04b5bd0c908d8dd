"""Attribute lookup.

"{person.Name}" reads the attribute Name; properties run as usual and a
bound method that takes no arguments is called, so "{Name.upper}" writes
the upper-cased name. Names starting with "_" are never resolved.

Methods of mutable containers (list, dict, set, deque, bytearray and
other MutableSequence/MutableMapping/MutableSet values) are never
called: "{0.pop}" or "{0.clear}" would change the caller's arguments.

With case-insensitive settings the attribute is found by scanning
dir(value). The name that matched is remembered per (type, selector) in
the cache entry of the template, so the scan runs once per template.

Python 3.13+.
"""

from __future__ import annotations

import inspect
from collections.abc import MutableMapping, MutableSequence, MutableSet
from typing import TYPE_CHECKING

from smartstrings.extensions.base import ExtensionBase
from smartstrings.variables.base import VariableGroup

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["ReflectionSource"]

_CACHE_TAG = "reflection"

# Values whose methods are never invoked from a selector
_MUTABLE_CONTAINERS = (MutableSequence, MutableMapping, MutableSet)


def _takes_no_arguments(func: object) -> bool:
    try:
        signature = inspect.signature(func)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False
    return all(
        parameter.default is not inspect.Parameter.empty
        or parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for parameter in signature.parameters.values()
    )


class ReflectionSource(ExtensionBase):
    """Resolves selectors to attributes and zero-argument methods."""

    def try_evaluate_selector(self, info: FormattingInfo) -> bool:
        """Set info.result to the attribute value or method result."""
        current = info.current_value
        selector = info.selector_text
        # Group members resolve as variables, never as mapping methods
        if current is None or selector.startswith("_") or isinstance(current, VariableGroup):
            return False

        name = self._find_member(info, current, selector)
        if name is None:
            return False
        member = getattr(current, name)
        if callable(member) and not isinstance(member, type):
            if isinstance(current, _MUTABLE_CONTAINERS) or not _takes_no_arguments(member):
                return False
            member = member()
        info.result = member
        return True

    def _find_member(self, info: FormattingInfo, current: object, selector: str) -> str | None:
        key = (_CACHE_TAG, type(current), selector)
        cached = info.cache.cached_objects.get(key)
        if isinstance(cached, str) and hasattr(current, cached):
            return cached

        name: str | None = None
        if hasattr(current, selector):
            name = selector
        elif not self.settings.case_sensitive:
            folded = selector.casefold()
            name = next(
                (
                    candidate
                    for candidate in dir(current)
                    if not candidate.startswith("_") and candidate.casefold() == folded
                ),
                None,
            )
        if name is not None:
            info.cache.cached_objects[key] = name
        return name
