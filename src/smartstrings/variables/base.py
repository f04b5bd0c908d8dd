"""Structural contracts of the reactive variable layer.

Anything stored in a VariablesGroup is a SourceVariable: it produces the
value a selector resolves to. ObservableVariable adds change
notification, which is what gets recorded as a refresh trigger.
VariableGroup is anything that looks names up, so a custom object can
take part in "{group.member}" traversal without being a mapping.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from smartstrings.core.events import Event
    from smartstrings.runtime.formatting_info import FormattingInfo

__all__ = ["ObservableVariable", "SourceVariable", "VariableGroup"]


@runtime_checkable
class SourceVariable(Protocol):
    """Value holder usable as a selector result."""

    def get_source_value(self, info: FormattingInfo | None) -> object:
        """Value the selector resolves to."""
        ...


@runtime_checkable
class ObservableVariable(SourceVariable, Protocol):
    """SourceVariable that announces value changes.

    value_changed receives the variable itself.
    """

    @property
    def value_changed(self) -> Event[[ObservableVariable]]:
        """Fired after the value changes (deferred while a batch is open)."""
        ...


@runtime_checkable
class VariableGroup(Protocol):
    """Name lookup used for "{group.member}" traversal."""

    def try_get_value(self, name: str) -> SourceVariable | None:
        """Variable named name, or None when there is none."""
        ...
