"""SmartFormatter: evaluation engine for smart string templates.

Architecture:
    format() looks up (or parses and inserts) the template's cache entry,
    then walks the Format tree. Literal items are copied to the output;
    each placeholder gets its own scope (FormattingInfo) and is evaluated
    in two stages:

    1. Selectors, left to right, through the registered sources. A first
       selector that the current value cannot resolve is retried against
       each enclosing scope's value, nearest first.
    2. Formatter dispatch: every formatter whose names contain the
       placeholder's formatter name ("" when none) is tried in
       registration order; the first to accept wins.

    A placeholder's output is collected in its own sink, so alignment
    pads the whole placeholder and a failed placeholder leaves nothing
    half-written. Failures are reported through on_formatting_failure and
    then handled per SmartSettings.format_error_action.

Thread Safety:
    Registration is configuration-time only. Concurrent format() calls are
    safe once extensions are registered: parsed Formats are immutable and
    the cache is locked. Trigger lists on a shared cache entry reflect the
    most recent evaluation.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from smartstrings.constants import LOG_TRUNCATE_WARNING
from smartstrings.core.depth_guard import DepthGuard
from smartstrings.core.events import Event
from smartstrings.diagnostics import (
    FormatterEvaluationError,
    FormatterNotFoundError,
    FormattingError,
    ResolutionFailureError,
)
from smartstrings.diagnostics.templates import ErrorTemplate
from smartstrings.enums import ErrorAction
from smartstrings.extensions.base import Formatter, Initializable, Source
from smartstrings.locale_utils import Culture, resolve_locale
from smartstrings.runtime.cache import FormatCache, FormatCacheEntry
from smartstrings.runtime.cache_config import CacheConfig
from smartstrings.runtime.formatting_info import FormatDetails, FormattingInfo
from smartstrings.settings import SmartSettings
from smartstrings.syntax.ast import LiteralText
from smartstrings.syntax.parser import Parser

if TYPE_CHECKING:
    from smartstrings.syntax.ast import Format, Placeholder

__all__ = ["FormatResult", "FormattingFailure", "SmartFormatter"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FormatResult:
    """Output of format_with_cache().

    Attributes:
        text: Formatted string
        triggers: Reactive variables read during this evaluation
        cache: Cache entry of the template (shared across calls)
    """

    text: str
    triggers: tuple[object, ...]
    cache: FormatCacheEntry


@dataclass(frozen=True, slots=True)
class FormattingFailure:
    """Payload of SmartFormatter.on_formatting_failure.

    Attributes:
        raw_text: Placeholder source text, e.g. "{0:ZZZZ}"
        position: Offset of the placeholder in its template
        error: The failure, before the error action is applied
    """

    raw_text: str
    position: int
    error: FormattingError


class SmartFormatter:
    """Template engine with ordered source and formatter pipelines.

    Use create_default_smart_format() for an engine with the built-in
    extensions registered.

    Attributes:
        settings: Shared configuration (parser and every extension see it)
        parser: Template parser bound to settings
        on_formatting_failure: Fired once per failed placeholder, before
            format_error_action is applied

    Example:
        >>> from smartstrings import create_default_smart_format
        >>> smart = create_default_smart_format()
        >>> smart.format("{0} {0:p:item|items}", 2)
        '2 items'
    """

    __slots__ = (
        "_cache",
        "_formatters",
        "_parse_count",
        "_sources",
        "on_formatting_failure",
        "parser",
        "settings",
    )

    def __init__(
        self, settings: SmartSettings | None = None, *, cache: CacheConfig | None = None
    ) -> None:
        """Initialize an engine without extensions.

        Args:
            settings: Configuration (default: SmartSettings())
            cache: Format cache configuration (default: CacheConfig())
        """
        self.settings = settings if settings is not None else SmartSettings()
        self.parser = Parser(self.settings)
        self.on_formatting_failure: Event[[FormattingFailure]] = Event()
        self._sources: list[Source] = []
        self._formatters: list[Formatter] = []
        config = cache if cache is not None else CacheConfig()
        self._cache: FormatCache | None = FormatCache(config.size) if config.enabled else None
        self._parse_count = 0

    # ========================================================================
    # REGISTRATION
    # ========================================================================

    @property
    def sources(self) -> tuple[Source, ...]:
        """Registered sources in evaluation order."""
        return tuple(self._sources)

    @property
    def formatters(self) -> tuple[Formatter, ...]:
        """Registered formatters in evaluation order."""
        return tuple(self._formatters)

    def add_source(self, *sources: Source) -> None:
        """Append sources to the selector pipeline.

        Clears the format cache. An extension registered both as source and
        formatter is initialized once.
        """
        for source in sources:
            self._initialize(source)
            self._sources.append(source)
            logger.debug("Registered source %s", type(source).__name__)
        self._invalidate()

    def add_formatter(self, *formatters: Formatter) -> None:
        """Append formatters to the dispatch pipeline.

        Clears the format cache, since formatter names change how
        templates parse.
        """
        for formatter in formatters:
            self._initialize(formatter)
            self._formatters.append(formatter)
            logger.debug(
                "Registered formatter %s with names %s", type(formatter).__name__, formatter.names
            )
        self._invalidate()

    def add_extensions(self, *extensions: Source | Formatter) -> None:
        """Register each extension as source, formatter, or both.

        Raises:
            TypeError: If an extension implements neither contract
        """
        for extension in extensions:
            is_source = isinstance(extension, Source)
            is_formatter = isinstance(extension, Formatter)
            if not (is_source or is_formatter):
                msg = f"{type(extension).__name__} is neither a Source nor a Formatter"
                raise TypeError(msg)
            if is_source:
                self.add_source(extension)  # type: ignore[arg-type]
            if is_formatter:
                self.add_formatter(extension)  # type: ignore[arg-type]

    def get_source_extension[S](self, cls: type[S]) -> S | None:
        """First registered source that is an instance of cls, or None."""
        for source in self._sources:
            if isinstance(source, cls):
                return source
        return None

    def get_formatter_extension[F](self, cls: type[F]) -> F | None:
        """First registered formatter that is an instance of cls, or None."""
        for formatter in self._formatters:
            if isinstance(formatter, cls):
                return formatter
        return None

    def get_formatter_names(self) -> frozenset[str]:
        """Explicit formatter names recognized by the parser (normalized).

        Read at parse time, so renaming a registered formatter affects
        templates parsed afterwards; call clear_cache() to reparse.
        """
        return frozenset(
            self.settings.normalize_formatter_name(name)
            for formatter in self._formatters
            for name in formatter.names
            if name
        )

    def _initialize(self, extension: object) -> None:
        if not isinstance(extension, Initializable):
            return
        # Extensions registered in both pipelines are bound once
        if any(existing is extension for existing in (*self._sources, *self._formatters)):
            return
        extension.initialize(self)

    def _invalidate(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    # ========================================================================
    # PARSING AND CACHE
    # ========================================================================

    @property
    def parse_count(self) -> int:
        """Number of templates actually parsed by this engine."""
        return self._parse_count

    def parse(self, template: str) -> Format:
        """Parse template with this engine's formatter names, bypassing the cache.

        Raises:
            ParseError: If malformed and settings.parse_error_action is THROW_ERROR
        """
        self._parse_count += 1
        return self.parser.parse(template, self.get_formatter_names())

    def get_cache_entry(self, template: str) -> FormatCacheEntry:
        """Cached entry for template, parsing on first use."""
        if self._cache is None:
            return FormatCacheEntry(self.parse(template))
        return self._cache.get_or_parse(
            template, self.settings.parse_fingerprint(), lambda: self.parse(template)
        )

    def get_cache_stats(self) -> dict[str, int | float]:
        """Format cache statistics plus the parse counter.

        Returns:
            Dict with size, maxsize, hits, misses, hit_rate and parses
            (size and maxsize are 0 when caching is disabled)
        """
        if self._cache is None:
            stats: dict[str, int | float] = {
                "size": 0,
                "maxsize": 0,
                "hits": 0,
                "misses": 0,
                "hit_rate": 0.0,
            }
        else:
            stats = self._cache.get_stats()
        stats["parses"] = self._parse_count
        return stats

    def clear_cache(self) -> None:
        """Drop every cached template."""
        if self._cache is not None:
            self._cache.clear()

    # ========================================================================
    # FORMATTING
    # ========================================================================

    def format(self, template: str, *args: object, culture: Culture | None = None) -> str:
        """Format template with positional arguments.

        Args:
            template: Template text
            *args: Arguments; the first is the root scope value
            culture: Locale or locale code for culture-aware formatters

        Returns:
            Formatted text

        Raises:
            ParseError: Malformed template under THROW_ERROR
            FormattingError: Failed placeholder under THROW_ERROR
        """
        return self.format_with_cache(template, *args, culture=culture).text

    def format_with_culture(self, culture: Culture | None, template: str, *args: object) -> str:
        """Format template for culture. Same as format(template, *args, culture=culture)."""
        return self.format_with_cache(template, *args, culture=culture).text

    def format_with_cache(
        self, template: str, *args: object, culture: Culture | None = None
    ) -> FormatResult:
        """Format template and report the reactive variables it read.

        The entry's variable_triggers list is reset before evaluation, so
        it always describes the latest call.

        Returns:
            FormatResult with text, triggers and the cache entry
        """
        entry = self.get_cache_entry(template)
        entry.variable_triggers.clear()
        text = self.format_entry(entry, args, culture=culture)
        return FormatResult(text, tuple(entry.variable_triggers), entry)

    def format_entry(
        self,
        entry: FormatCacheEntry,
        args: tuple[object, ...],
        *,
        culture: Culture | None = None,
    ) -> str:
        """Evaluate an already parsed cache entry."""
        details = FormatDetails(
            formatter=self,
            original_args=args,
            culture=resolve_locale(culture),
            cache=entry,
            depth_guard=DepthGuard(self.settings.max_depth),
        )
        root = FormattingInfo(details, entry.format, args[0] if args else None)
        self.format_items(root)
        return "".join(root.output)

    def format_items(self, info: FormattingInfo) -> None:
        """Write every item of info.format to info.output.

        Entry point for nested formats (FormattingInfo.write_format).

        Raises:
            DepthLimitExceededError: If nesting exceeds settings.max_depth
        """
        fmt = info.format
        if fmt is None:
            return
        with info.details.depth_guard:
            for item in fmt.items:
                if isinstance(item, LiteralText):
                    info.output.append(item.text)
                else:
                    self._format_placeholder(info, item)

    # ========================================================================
    # PLACEHOLDER EVALUATION
    # ========================================================================

    def _format_placeholder(self, scope: FormattingInfo, placeholder: Placeholder) -> None:
        child = scope.create_child(placeholder)
        try:
            self._evaluate_selectors(child, placeholder)
            self._evaluate_formatters(child, placeholder)
        except FormattingError as error:
            if error.placeholder:
                # Already reported by a nested placeholder (THROW_ERROR)
                raise
            self._handle_failure(scope, placeholder, error)
            return

        text = "".join(child.output)
        if placeholder.alignment > 0:
            text = text.rjust(placeholder.alignment)
        elif placeholder.alignment < 0:
            text = text.ljust(-placeholder.alignment)
        scope.output.append(text)

    def _evaluate_selectors(self, info: FormattingInfo, placeholder: Placeholder) -> None:
        if placeholder.selectors and not self._sources:
            raise ResolutionFailureError(ErrorTemplate.no_sources_registered())

        for selector in placeholder.selectors:
            info.selector = selector
            info.result = None
            handled = self._invoke_sources(info)
            if not handled and selector.index == 0:
                tried = info.current_value
                parent = info.parent
                while parent is not None and not handled:
                    if parent.current_value is not tried:
                        info.current_value = tried = parent.current_value
                        handled = self._invoke_sources(info)
                    parent = parent.parent
            if not handled:
                raise ResolutionFailureError(
                    ErrorTemplate.selector_not_resolved(selector.raw_text, placeholder.raw_text)
                )
            info.current_value = info.result

        info.selector = None

    def _invoke_sources(self, info: FormattingInfo) -> bool:
        for source in self._sources:
            try:
                if source.try_evaluate_selector(info):
                    return True
            except FormattingError:
                raise
            except Exception as exc:  # pylint: disable=broad-exception-caught
                raise ResolutionFailureError(str(exc)) from exc
        return False

    def _evaluate_formatters(self, info: FormattingInfo, placeholder: Placeholder) -> None:
        name = placeholder.formatter_name
        key = self.settings.normalize_formatter_name(name)
        candidates = [
            formatter
            for formatter in self._formatters
            if any(self.settings.normalize_formatter_name(n) == key for n in formatter.names)
        ]
        if not candidates and name:
            raise FormatterNotFoundError(
                ErrorTemplate.formatter_not_found(name, placeholder.raw_text)
            )

        for formatter in candidates:
            mark = len(info.output)
            try:
                if formatter.try_evaluate_format(info):
                    return
            except FormattingError:
                raise
            except Exception as exc:  # pylint: disable=broad-exception-caught
                raise FormatterEvaluationError(
                    ErrorTemplate.formatter_failed(str(exc), placeholder.raw_text)
                ) from exc
            # Declined: discard anything it wrote
            del info.output[mark:]

        raise FormatterNotFoundError(
            ErrorTemplate.no_suitable_formatter(
                name, type(info.current_value).__name__, placeholder.raw_text
            )
        )

    def _handle_failure(
        self, scope: FormattingInfo, placeholder: Placeholder, error: FormattingError
    ) -> None:
        error.placeholder = placeholder.raw_text
        error.position = placeholder.start
        logger.warning(
            "Formatting failed for %s: %s",
            placeholder.raw_text[:LOG_TRUNCATE_WARNING],
            str(error)[:LOG_TRUNCATE_WARNING],
        )
        self.on_formatting_failure.emit(
            FormattingFailure(placeholder.raw_text, placeholder.start, error)
        )

        match self.settings.format_error_action:
            case ErrorAction.THROW_ERROR:
                raise error
            case ErrorAction.OUTPUT_ERROR_IN_RESULT:
                scope.output.append(str(error))
            case ErrorAction.MAINTAIN_TOKENS:
                scope.output.append(placeholder.raw_text)
            case ErrorAction.IGNORE:
                pass
