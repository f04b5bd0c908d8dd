"""Named collections of reactive variables.

    stats = VariablesGroup()
    stats["hit points"] = IntVariable(100)     # stored as "hit-points"
    source["player"] = stats
    smart.format("{player.hit-points}")        # "100"

Names cannot contain whitespace in a selector, so runs of whitespace
become "-" on insertion and lookup. Lookups ignore case. A name that is
already present is rejected with DuplicateKeyError; delete it first to
replace the variable.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, MutableMapping
from typing import TYPE_CHECKING

from smartstrings.diagnostics import DuplicateKeyError
from smartstrings.diagnostics.templates import ErrorTemplate
from smartstrings.variables.base import SourceVariable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["VariablesGroup", "normalize_variable_name"]

_WHITESPACE = re.compile(r"\s+")


def normalize_variable_name(name: str) -> str:
    """Replace each run of whitespace with "-".

    Raises:
        ValueError: If name is empty

    Examples:
        >>> normalize_variable_name(" my   Var    ")
        '-my-Var-'
    """
    if not name:
        raise ValueError(str(ErrorTemplate.invalid_variable_name(name)))
    return _WHITESPACE.sub("-", name)


class VariablesGroup(MutableMapping[str, SourceVariable]):
    """Case-insensitive mapping of names to variables.

    Iteration yields the normalized names in insertion order, with their
    original case.
    """

    __slots__ = ("_items",)

    def __init__(self, variables: Iterable[tuple[str, SourceVariable]] = ()) -> None:
        """Initialize group.

        Args:
            variables: Initial (name, variable) pairs

        Raises:
            DuplicateKeyError: If two initial names collide
        """
        # casefolded name -> (normalized name, variable)
        self._items: dict[str, tuple[str, SourceVariable]] = {}
        for name, variable in variables:
            self.add(name, variable)

    def add(self, name: str, variable: SourceVariable) -> None:
        """Insert variable under name.

        Raises:
            ValueError: If name is empty
            TypeError: If variable has no get_source_value()
            DuplicateKeyError: If the normalized name is already present
        """
        key = normalize_variable_name(name)
        if not isinstance(variable, SourceVariable):
            msg = f"Expected a variable with get_source_value(), got {type(variable).__name__}"
            raise TypeError(msg)
        folded = key.casefold()
        if folded in self._items:
            raise DuplicateKeyError(ErrorTemplate.duplicate_key(key), key=key)
        self._items[folded] = (key, variable)

    def try_get_value(self, name: str, *, case_sensitive: bool = False) -> SourceVariable | None:
        """Variable named name, or None.

        Args:
            name: Variable name (whitespace is normalized)
            case_sensitive: Also require the exact stored case
        """
        if not name:
            return None
        key = _WHITESPACE.sub("-", name)
        entry = self._items.get(key.casefold())
        if entry is None or (case_sensitive and entry[0] != key):
            return None
        return entry[1]

    def remove(self, name: str) -> bool:
        """Remove the variable named name.

        Returns:
            True if it was present
        """
        try:
            del self[name]
        except KeyError:
            return False
        return True

    def get_source_value(self, info: FormattingInfo | None) -> object:  # noqa: ARG002
        """The group itself, so selectors continue into it."""
        return self

    # ========================================================================
    # MutableMapping
    # ========================================================================

    def __getitem__(self, name: str) -> SourceVariable:
        """Variable named name.

        Raises:
            KeyError: If there is no such variable
        """
        variable = self.try_get_value(name)
        if variable is None:
            raise KeyError(name)
        return variable

    def __setitem__(self, name: str, variable: SourceVariable) -> None:
        """Same as add()."""
        self.add(name, variable)

    def __delitem__(self, name: str) -> None:
        """Remove the variable named name.

        Raises:
            KeyError: If there is no such variable
        """
        folded = _WHITESPACE.sub("-", name).casefold() if name else ""
        if folded not in self._items:
            raise KeyError(name)
        del self._items[folded]

    def __iter__(self) -> Iterator[str]:
        """Normalized names in insertion order."""
        return (key for key, _ in self._items.values())

    def __len__(self) -> int:
        """Number of variables."""
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        """True when a variable named name exists."""
        return isinstance(name, str) and self.try_get_value(name) is not None

    # Identity semantics; two groups with equal members are still different groups
    __eq__ = object.__eq__
    __hash__ = object.__hash__

    def __repr__(self) -> str:
        """Debug representation listing the names."""
        return f"VariablesGroup({list(self)!r})"
