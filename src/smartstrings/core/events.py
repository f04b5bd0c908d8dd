"""Synchronous notification hooks.

Used for the formatting/parsing failure hooks and for variable change
notifications. Handlers run in connection order on the caller's stack;
an exception raised by a handler propagates to whoever emitted.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable

__all__ = ["Event"]


class Event[**P]:
    """Ordered list of callbacks sharing one signature.

    Example:
        >>> changed: Event[[int]] = Event()
        >>> changed.connect(print)
        >>> changed.emit(3)
        3
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        """Initialize with no handlers."""
        self._handlers: list[Callable[P, object]] = []

    def connect(self, handler: Callable[P, object]) -> None:
        """Append handler; connecting the same handler twice calls it twice."""
        self._handlers.append(handler)

    def disconnect(self, handler: Callable[P, object]) -> bool:
        """Remove the first connection of handler.

        Returns:
            True if the handler was connected
        """
        try:
            self._handlers.remove(handler)
        except ValueError:
            return False
        return True

    def emit(self, *args: P.args, **kwargs: P.kwargs) -> None:
        """Call every handler in connection order.

        Iterates over a snapshot, so handlers may connect or disconnect
        during emission without affecting the current round.
        """
        for handler in tuple(self._handlers):
            handler(*args, **kwargs)

    def clear(self) -> None:
        """Disconnect all handlers."""
        self._handlers.clear()

    def __len__(self) -> int:
        """Number of connected handlers."""
        return len(self._handlers)

    def __bool__(self) -> bool:
        """True when at least one handler is connected."""
        return bool(self._handlers)
