"""Refresh a formatted string when the variables it read change.

    result = smart.format_with_cache("{player.name} has {player.gold} gold")
    label.text = result.text
    subscription = RefreshSubscription(refresh, result.triggers)

refresh() runs once per change made outside an update scope, and once
per update scope that changed at least one trigger. Re-format and call
update_triggers() with the new triggers when the template's inputs may
have changed shape.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from smartstrings.variables.base import ObservableVariable
from smartstrings.variables.batch import default_batch

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import TracebackType

    from smartstrings.variables.batch import UpdateBatch

__all__ = ["RefreshSubscription"]


class RefreshSubscription:
    """Connects a callback to a set of observable variables.

    Objects in triggers without value_changed are ignored, so the
    triggers of a FormatResult can be passed as they are.

    Example:
        >>> calls = []
        >>> hp, mp = IntVariable(1), IntVariable(2)
        >>> with RefreshSubscription(lambda: calls.append(1), [hp, mp]):
        ...     with update_scope():
        ...         hp.value = 10
        ...         mp.value = 20
        >>> len(calls)
        1
    """

    __slots__ = ("_batch", "_callback", "_closed", "_triggers")

    def __init__(
        self,
        callback: Callable[[], object],
        triggers: Iterable[object] = (),
        *,
        batch: UpdateBatch | None = None,
    ) -> None:
        """Subscribe callback.

        Args:
            callback: Called with no arguments on each refresh
            triggers: Variables to observe
            batch: Update batch whose end_update is observed (default: shared batch)
        """
        self._callback = callback
        self._batch = batch if batch is not None else default_batch()
        self._triggers: tuple[ObservableVariable, ...] = ()
        self._closed = False
        self._batch.end_update.connect(self._on_end_update)
        self.update_triggers(triggers)

    @property
    def triggers(self) -> tuple[ObservableVariable, ...]:
        """Variables currently observed."""
        return self._triggers

    @property
    def closed(self) -> bool:
        """True after close()."""
        return self._closed

    def update_triggers(self, triggers: Iterable[object]) -> None:
        """Replace the observed variables.

        Raises:
            RuntimeError: If the subscription is closed
        """
        if self._closed:
            msg = "RefreshSubscription is closed"
            raise RuntimeError(msg)
        for variable in self._triggers:
            variable.value_changed.disconnect(self._on_value_changed)
        observed: list[ObservableVariable] = []
        for trigger in triggers:
            if isinstance(trigger, ObservableVariable) and not any(
                existing is trigger for existing in observed
            ):
                observed.append(trigger)
                trigger.value_changed.connect(self._on_value_changed)
        self._triggers = tuple(observed)

    def close(self) -> None:
        """Disconnect from every variable and from the batch. Idempotent."""
        if self._closed:
            return
        for variable in self._triggers:
            variable.value_changed.disconnect(self._on_value_changed)
        self._batch.end_update.disconnect(self._on_end_update)
        self._triggers = ()
        self._closed = True

    def _on_value_changed(self, variable: ObservableVariable) -> None:  # noqa: ARG002
        self._callback()

    def _on_end_update(self, changed: tuple[ObservableVariable, ...]) -> None:
        if any(variable is trigger for variable in changed for trigger in self._triggers):
            self._callback()

    def __enter__(self) -> RefreshSubscription:
        """Enter context: the subscription stays open."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context: close()."""
        self.close()
