"""Source for named variable groups that live outside the argument list.

    source = PersistentVariablesSource()
    source["global"] = VariablesGroup([("player-name", StringVariable("Ada"))])
    smart.add_source(source)
    smart.format("Hello {global.player-name}")   -> "Hello Ada"

A selector naming a group resolves to the group; a selector applied to a
group (or a NestedVariablesGroup's group) resolves to the variable's
value. Every observable variable read this way is recorded in the
template's cache entry, which format_with_cache() reports as triggers.

Not registered by create_default_smart_format(); the host appends it.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, MutableMapping
from typing import TYPE_CHECKING

from smartstrings.diagnostics import DuplicateKeyError
from smartstrings.diagnostics.templates import ErrorTemplate
from smartstrings.extensions.base import ExtensionBase
from smartstrings.variables.base import ObservableVariable, VariableGroup
from smartstrings.variables.group import normalize_variable_name

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["PersistentVariablesSource"]

logger = logging.getLogger(__name__)


class PersistentVariablesSource(ExtensionBase, MutableMapping[str, VariableGroup]):
    """Case-insensitive mapping of group names to variable groups.

    Group names follow the variable naming rules: whitespace runs become
    "-" and a name can be added only once.
    """

    def __init__(self) -> None:
        """Initialize with no groups."""
        super().__init__()
        # casefolded name -> (normalized name, group)
        self._groups: dict[str, tuple[str, VariableGroup]] = {}

    def add(self, name: str, group: VariableGroup) -> None:
        """Register group under name.

        Raises:
            ValueError: If name is empty
            TypeError: If group has no try_get_value()
            DuplicateKeyError: If the normalized name is already present
        """
        key = normalize_variable_name(name)
        if not isinstance(group, VariableGroup):
            msg = f"Expected a variable group with try_get_value(), got {type(group).__name__}"
            raise TypeError(msg)
        folded = key.casefold()
        if folded in self._groups:
            raise DuplicateKeyError(ErrorTemplate.duplicate_key(key), key=key)
        self._groups[folded] = (key, group)
        logger.debug("Added variables group %r", key)

    def try_get_value(self, name: str) -> VariableGroup | None:
        """Group named name, or None."""
        if not name:
            return None
        entry = self._groups.get(normalize_variable_name(name).casefold())
        return entry[1] if entry is not None else None

    def remove(self, name: str) -> bool:
        """Unregister the group named name.

        Returns:
            True if it was registered
        """
        try:
            del self[name]
        except KeyError:
            return False
        return True

    # ========================================================================
    # SOURCE
    # ========================================================================

    def try_evaluate_selector(self, info: FormattingInfo) -> bool:
        """Resolve a group member, or a group by name."""
        selector = info.selector_text
        current = info.current_value

        if isinstance(current, VariableGroup):
            variable = current.try_get_value(selector)
            if variable is not None:
                if isinstance(variable, ObservableVariable):
                    info.cache.add_trigger(variable)
                info.result = variable.get_source_value(info)
                return True

        group = self.try_get_value(selector)
        if group is None:
            return False
        info.result = group
        return True

    # ========================================================================
    # MutableMapping
    # ========================================================================

    def __getitem__(self, name: str) -> VariableGroup:
        """Group named name.

        Raises:
            KeyError: If there is no such group
        """
        group = self.try_get_value(name)
        if group is None:
            raise KeyError(name)
        return group

    def __setitem__(self, name: str, group: VariableGroup) -> None:
        """Same as add()."""
        self.add(name, group)

    def __delitem__(self, name: str) -> None:
        """Unregister the group named name.

        Raises:
            KeyError: If there is no such group
        """
        folded = normalize_variable_name(name).casefold() if name else ""
        if folded not in self._groups:
            raise KeyError(name)
        del self._groups[folded]

    def __iter__(self) -> Iterator[str]:
        """Normalized group names in insertion order."""
        return (key for key, _ in self._groups.values())

    def __len__(self) -> int:
        """Number of groups."""
        return len(self._groups)

    def __contains__(self, name: object) -> bool:
        """True when a group named name exists."""
        return isinstance(name, str) and self.try_get_value(name) is not None

    __eq__ = object.__eq__
    __hash__ = object.__hash__
