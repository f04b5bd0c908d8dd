"""Update batching for reactive variables.

Changing several variables one after another would refresh every
dependent string once per change. Inside an update scope, variables
record themselves as changed instead of firing value_changed; when the
outermost scope exits, end_update fires once with every variable that
changed:

    with update_scope():
        hp.value = 50
        mp.value = 20
        gold.value = 7
    # end_update fired once with (hp, mp, gold)

Scopes nest; only the outermost exit flushes. The scope is released on
every exit path, including exceptions.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager, contextmanager
from typing import TYPE_CHECKING

from smartstrings.core.events import Event

if TYPE_CHECKING:
    from collections.abc import Generator

    from smartstrings.variables.base import ObservableVariable

__all__ = ["UpdateBatch", "default_batch", "update_scope"]

logger = logging.getLogger(__name__)


class UpdateBatch:
    """Reentrant begin/end counter that coalesces change notifications.

    Single-threaded: meant for the thread that owns the variables.

    Attributes:
        end_update: Fired at the outermost end() with the changed variables,
            in first-change order (possibly empty)

    Example:
        >>> batch = UpdateBatch()
        >>> batch.end_update.connect(lambda changed: print(len(changed)))
        >>> with batch.scope():
        ...     with batch.scope():
        ...         pass
        0
    """

    __slots__ = ("_changed", "_depth", "end_update")

    def __init__(self) -> None:
        """Initialize closed batch."""
        self._depth = 0
        self._changed: list[ObservableVariable] = []
        self.end_update: Event[[tuple[ObservableVariable, ...]]] = Event()

    @property
    def is_updating(self) -> bool:
        """True while at least one scope is open."""
        return self._depth > 0

    @property
    def depth(self) -> int:
        """Number of open scopes."""
        return self._depth

    def begin(self) -> None:
        """Open a scope. Prefer scope(), which always closes it."""
        self._depth += 1

    def end(self) -> None:
        """Close a scope; the outermost close fires end_update.

        An end() without a matching begin() is logged and ignored.
        """
        if self._depth == 0:
            logger.warning("UpdateBatch.end() called without a matching begin()")
            return
        self._depth -= 1
        if self._depth == 0:
            changed = tuple(self._changed)
            self._changed.clear()
            logger.debug("Update batch flushed (%d variables changed)", len(changed))
            self.end_update.emit(changed)

    def mark_changed(self, variable: ObservableVariable) -> None:
        """Record variable as changed in the open batch (once per batch)."""
        if not any(existing is variable for existing in self._changed):
            self._changed.append(variable)

    @contextmanager
    def scope(self) -> Generator[UpdateBatch]:
        """Open a scope for the duration of a with block.

        Yields:
            This batch
        """
        self.begin()
        try:
            yield self
        finally:
            self.end()


_DEFAULT_BATCH = UpdateBatch()


def default_batch() -> UpdateBatch:
    """Batch used by variables created without an explicit one."""
    return _DEFAULT_BATCH


def update_scope(batch: UpdateBatch | None = None) -> AbstractContextManager[UpdateBatch]:
    """Open a scope on batch (default: the shared default batch).

    Example:
        >>> with update_scope():
        ...     score.value += 10
        ...     lives.value -= 1
    """
    return (batch if batch is not None else _DEFAULT_BATCH).scope()
