"""Extension contracts for sources and formatters.

Source and Formatter are Protocols (structural typing): any object with
the right method can be registered. ExtensionBase and FormatterBase are
optional conveniences the built-ins derive from.

Contract:
    try_evaluate_selector / try_evaluate_format return False to decline,
    letting the next extension in registration order try. They raise only
    for genuine errors; the engine routes those through the configured
    ErrorAction.

Python 3.13+.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from smartstrings.runtime.formatter import SmartFormatter
    from smartstrings.runtime.formatting_info import FormattingInfo
    from smartstrings.settings import SmartSettings

__all__ = [
    "ExtensionBase",
    "Formatter",
    "FormatterBase",
    "Initializable",
    "Source",
]


@runtime_checkable
class Source(Protocol):
    """Resolves one selector against info.current_value.

    Example:
        >>> class UpperSource:
        ...     def try_evaluate_selector(self, info: FormattingInfo) -> bool:
        ...         if info.selector_text != "upper" or not isinstance(info.current_value, str):
        ...             return False
        ...         info.result = info.current_value.upper()
        ...         return True
    """

    def try_evaluate_selector(self, info: FormattingInfo) -> bool:
        """Set info.result and return True, or return False to decline."""
        ...


@runtime_checkable
class Formatter(Protocol):
    """Renders info.current_value into the output.

    names holds every name the formatter answers to; "" marks it as a
    candidate for placeholders without an explicit formatter name.
    """

    names: tuple[str, ...]

    def try_evaluate_format(self, info: FormattingInfo) -> bool:
        """Write output via info.write() and return True, or return False to decline."""
        ...


@runtime_checkable
class Initializable(Protocol):
    """Extension that needs its engine (settings, other sources) at registration."""

    def initialize(self, formatter: SmartFormatter) -> None:
        """Called once by SmartFormatter when the extension is registered."""
        ...


class ExtensionBase:
    """Remembers the engine it was registered with."""

    def __init__(self) -> None:
        """Initialize unregistered extension."""
        self._smart_formatter: SmartFormatter | None = None

    def initialize(self, formatter: SmartFormatter) -> None:
        """Bind to formatter."""
        self._smart_formatter = formatter

    @property
    def smart_formatter(self) -> SmartFormatter:
        """Engine the extension is registered with.

        Raises:
            RuntimeError: If the extension was never registered
        """
        if self._smart_formatter is None:
            msg = f"{type(self).__name__} is not registered with a SmartFormatter"
            raise RuntimeError(msg)
        return self._smart_formatter

    @property
    def settings(self) -> SmartSettings:
        """Settings of the engine the extension is registered with."""
        return self.smart_formatter.settings


class FormatterBase(ExtensionBase, ABC):
    """Base class for built-in formatters.

    Subclasses set DEFAULT_NAMES; instances may override names, e.g. to
    drop the implicit "" name so the formatter only runs when called
    explicitly.

    Attributes:
        names: Names this formatter answers to
    """

    DEFAULT_NAMES: ClassVar[tuple[str, ...]] = ()

    def __init__(self, names: tuple[str, ...] | None = None) -> None:
        """Initialize formatter.

        Args:
            names: Replacement for DEFAULT_NAMES
        """
        super().__init__()
        self.names: tuple[str, ...] = tuple(names) if names is not None else self.DEFAULT_NAMES

    @property
    def can_auto_detect(self) -> bool:
        """True when the formatter runs for placeholders without a name."""
        return "" in self.names

    @abstractmethod
    def try_evaluate_format(self, info: FormattingInfo) -> bool:
        """Write output via info.write() and return True, or return False to decline."""
