"""Per-evaluation context handed to sources and formatters.

FormatDetails is created once per format() call and shared by every
nested scope. FormattingInfo is created per format scope and per
placeholder; it forms a parent chain mirroring the nesting of the
template, which is what "{Name}" scoping walks when the current value
cannot resolve a selector.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from smartstrings.core.depth_guard import DepthGuard
from smartstrings.locale_utils import get_language

if TYPE_CHECKING:
    from babel import Locale

    from smartstrings.runtime.cache import FormatCacheEntry
    from smartstrings.runtime.formatter import SmartFormatter
    from smartstrings.settings import SmartSettings
    from smartstrings.syntax.ast import Format, Placeholder, Selector

__all__ = ["FormatDetails", "FormattingInfo"]


@dataclass(frozen=True, slots=True)
class FormatDetails:
    """State shared by every scope of one format() call.

    Attributes:
        formatter: Engine evaluating the template
        original_args: Positional arguments as passed by the caller
        culture: Babel locale, or None for invariant formatting
        cache: Cache entry of the template being evaluated
        depth_guard: Nesting limit for this call
    """

    formatter: SmartFormatter
    original_args: tuple[object, ...]
    culture: Locale | None
    cache: FormatCacheEntry
    depth_guard: DepthGuard

    @property
    def settings(self) -> SmartSettings:
        """Settings of the evaluating engine."""
        return self.formatter.settings

    @property
    def language(self) -> str:
        """Two-letter language code of the culture ("en" when none)."""
        return get_language(self.culture)


class FormattingInfo:
    """Evaluation scope: a format with its current value, or one placeholder.

    Selector stage (sources):
        selector is the selector being resolved, current_value the value
        it is resolved against; a source that handles it sets result.

    Format stage (formatters):
        current_value is the resolved value, format the nested format
        (None when absent), formatter_options the "(...)" text. Output
        goes through write() and write_format().

    Attributes:
        details: Per-call shared state
        format: Format being evaluated (scope) or the placeholder's nested format
        current_value: Value of this scope
        parent: Enclosing scope (None at the root)
        placeholder: Placeholder of this scope (None for a format scope)
        output: Sink that write() appends to
        selector: Selector being resolved (selector stage only)
        result: Value produced by the handling source
    """

    __slots__ = (
        "current_value",
        "details",
        "format",
        "output",
        "parent",
        "placeholder",
        "result",
        "selector",
    )

    def __init__(
        self,
        details: FormatDetails,
        format: Format | None,  # noqa: A002 - mirrors Placeholder.format
        current_value: object,
        *,
        parent: FormattingInfo | None = None,
        placeholder: Placeholder | None = None,
        output: list[str] | None = None,
    ) -> None:
        """Initialize scope.

        Args:
            details: Per-call shared state
            format: Format of this scope
            current_value: Value of this scope
            parent: Enclosing scope
            placeholder: Placeholder being evaluated, if any
            output: Sink to write to (a new list when omitted)
        """
        self.details = details
        self.format = format
        self.current_value = current_value
        self.parent = parent
        self.placeholder = placeholder
        self.output: list[str] = output if output is not None else []
        self.selector: Selector | None = None
        self.result: object = None

    # ------------------------------------------------------------------------
    # Placeholder properties
    # ------------------------------------------------------------------------

    @property
    def alignment(self) -> int:
        """Alignment of the placeholder (0 when none)."""
        return self.placeholder.alignment if self.placeholder is not None else 0

    @property
    def formatter_name(self) -> str:
        """Explicit formatter name of the placeholder ("" when implicit)."""
        return self.placeholder.formatter_name if self.placeholder is not None else ""

    @property
    def formatter_options(self) -> str:
        """Text between the formatter call's parentheses ("" when absent)."""
        return self.placeholder.formatter_options if self.placeholder is not None else ""

    @property
    def settings(self) -> SmartSettings:
        """Settings of the evaluating engine."""
        return self.details.formatter.settings

    @property
    def culture(self) -> Locale | None:
        """Culture of the format() call."""
        return self.details.culture

    @property
    def cache(self) -> FormatCacheEntry:
        """Cache entry of the template being evaluated."""
        return self.details.cache

    @property
    def selector_text(self) -> str:
        """Text of the selector being resolved ("" outside the selector stage)."""
        return self.selector.text if self.selector is not None else ""

    # ------------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------------

    def write(self, text: str) -> None:
        """Append text to the output."""
        self.output.append(text)

    def write_format(self, format: Format, value: object) -> None:  # noqa: A002
        """Evaluate format with value as its current value.

        The nested scope's parent is this scope, so unresolved first
        selectors fall back to enclosing values.

        Raises:
            DepthLimitExceededError: If nesting exceeds settings.max_depth
        """
        scope = FormattingInfo(self.details, format, value, parent=self, output=self.output)
        self.details.formatter.format_items(scope)

    def create_child(self, placeholder: Placeholder) -> FormattingInfo:
        """Scope for one placeholder of this format, writing to a fresh sink."""
        return FormattingInfo(
            self.details,
            placeholder.format,
            self.current_value,
            parent=self,
            placeholder=placeholder,
        )
