"""Reactive single-value variables.

A Variable holds one value. Assigning an unequal value fires
value_changed exactly once, or, while its update batch is open, records
the variable in the batch instead. Reading a variable through
"{group.name}" records it as a refresh trigger of the template.

    score = IntVariable(10)
    score.value_changed.connect(lambda variable: print(variable.value))
    score.value = 11    # prints 11
    score.value = 11    # equal: nothing fired

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from smartstrings.core.events import Event
from smartstrings.variables.batch import default_batch

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo
    from smartstrings.variables.batch import UpdateBatch
    from smartstrings.variables.group import VariablesGroup

__all__ = [
    "BoolVariable",
    "FloatVariable",
    "IntVariable",
    "NestedVariablesGroup",
    "ObjectVariable",
    "StringVariable",
    "Variable",
]


class Variable[T]:
    """Observable value usable as a selector result.

    Attributes:
        batch: Update batch that defers change notifications
    """

    __slots__ = ("_value", "_value_changed", "batch")

    def __init__(self, value: T, *, batch: UpdateBatch | None = None) -> None:
        """Initialize variable.

        Args:
            value: Initial value (no notification)
            batch: Update batch (default: the shared default batch)
        """
        self._value = value
        self._value_changed: Event[[Variable[T]]] = Event()
        self.batch = batch if batch is not None else default_batch()

    @property
    def value(self) -> T:
        """Current value. Assigning an unequal value notifies listeners."""
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        if value == self._value:
            return
        self._value = value
        self._send_value_changed()

    @property
    def value_changed(self) -> Event[[Variable[T]]]:
        """Fired with this variable after the value changes."""
        return self._value_changed

    def _send_value_changed(self) -> None:
        if self.batch.is_updating:
            self.batch.mark_changed(self)
        else:
            self._value_changed.emit(self)

    def get_source_value(self, info: FormattingInfo | None) -> object:  # noqa: ARG002
        """The current value."""
        return self._value

    def __repr__(self) -> str:
        """Debug representation with the current value."""
        return f"{type(self).__name__}({self._value!r})"

    def __str__(self) -> str:
        """str() of the current value."""
        return str(self._value)


class IntVariable(Variable[int]):
    """Variable holding an int."""

    __slots__ = ()

    def __init__(self, value: int = 0, *, batch: UpdateBatch | None = None) -> None:
        """Initialize with value (default 0)."""
        super().__init__(value, batch=batch)


class FloatVariable(Variable[float]):
    """Variable holding a float."""

    __slots__ = ()

    def __init__(self, value: float = 0.0, *, batch: UpdateBatch | None = None) -> None:
        """Initialize with value (default 0.0)."""
        super().__init__(value, batch=batch)


class StringVariable(Variable[str]):
    """Variable holding a str."""

    __slots__ = ()

    def __init__(self, value: str = "", *, batch: UpdateBatch | None = None) -> None:
        """Initialize with value (default "")."""
        super().__init__(value, batch=batch)


class BoolVariable(Variable[bool]):
    """Variable holding a bool."""

    __slots__ = ()

    def __init__(self, value: bool = False, *, batch: UpdateBatch | None = None) -> None:  # noqa: FBT001, FBT002
        """Initialize with value (default False)."""
        super().__init__(value, batch=batch)


class ObjectVariable(Variable[object]):
    """Variable holding any object; selectors continue into it."""

    __slots__ = ()

    def __init__(self, value: object = None, *, batch: UpdateBatch | None = None) -> None:
        """Initialize with value (default None)."""
        super().__init__(value, batch=batch)


class NestedVariablesGroup(Variable["VariablesGroup | None"]):
    """Variable whose value is another group: "{global.nested.name}".

    Replacing the group notifies listeners like any other variable.
    """

    __slots__ = ()

    def __init__(
        self, value: VariablesGroup | None = None, *, batch: UpdateBatch | None = None
    ) -> None:
        """Initialize with a group (default None)."""
        super().__init__(value, batch=batch)
