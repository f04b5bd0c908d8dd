"""Smart string template parser.

Turns a template into an immutable Format tree.

Architecture:
    The parser is a single left-to-right scan with an explicit stack of
    open nested formats, so nesting depth is bounded only by memory.
    Placeholder headers (selectors, alignment, formatter call) never nest
    and are scanned in one pass by _scan_header.

    Every problem is recorded as a ParsingIssue and the scan continues, so
    one ParseError reports all issues of a template. What the caller gets
    back is decided by SmartSettings.parse_error_action.

Syntax summary:
    {0}  {Name.Sub[1]}  {Name,10}  {Name,-10}
    {Name:nested format}  {Name:plural:item|items}  {Name:substr(0,3)}
    {{ and }} are literal braces at every depth, so a nested format
    cannot end right before another "}" unless alternative escaping is
    on: "{0:{1:x}}" reads the final "}}" as a literal brace. With
    convert_character_string_literals, \\{ \\} \\n \\t \\uXXXX ... are decoded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from smartstrings.constants import CLOSING_BRACE, LOG_TRUNCATE_WARNING, OPENING_BRACE
from smartstrings.core.events import Event
from smartstrings.diagnostics import Diagnostic, ParseError, ParsingIssue
from smartstrings.diagnostics.templates import ErrorTemplate
from smartstrings.enums import CaseSensitivity, ErrorAction
from smartstrings.settings import SmartSettings
from smartstrings.syntax.ast import Format, FormatItem, LiteralText, Placeholder, Selector
from smartstrings.syntax.parser.primitives import (
    decode_char_literal,
    is_selector_char,
    match_formatter_call,
    parse_alignment,
)

__all__ = ["Parser"]

logger = logging.getLogger(__name__)

_BACKSLASH = "\\"


@dataclass(slots=True)
class _Header:
    """Placeholder whose nested format is still being scanned."""

    start: int
    selectors: tuple[Selector, ...]
    alignment: int
    formatter_name: str = ""
    formatter_options: str = ""


@dataclass(slots=True)
class _Frame:
    """Format under construction."""

    start: int
    header: _Header | None
    items: list[FormatItem] = field(default_factory=list)


class _Scan:
    """State of one parse() call."""

    __slots__ = (
        "alt_escape",
        "case_sensitive",
        "convert_literals",
        "formatter_names",
        "issues",
        "template",
        "text_start",
    )

    def __init__(
        self, template: str, settings: SmartSettings, formatter_names: frozenset[str]
    ) -> None:
        self.template = template
        self.formatter_names = formatter_names
        self.case_sensitive = (
            settings.formatter_name_case_sensitivity is CaseSensitivity.CASE_SENSITIVE
        )
        self.convert_literals = settings.convert_character_string_literals
        self.alt_escape: str | None = (
            settings.alternative_escape_char if settings.alternative_escaping else None
        )
        self.issues: list[ParsingIssue] = []
        self.text_start = 0

    def add_issue(self, diagnostic: Diagnostic, start: int, end: int) -> None:
        self.issues.append(ParsingIssue(diagnostic, start, end))

    # ------------------------------------------------------------------------
    # Literal text
    # ------------------------------------------------------------------------

    def flush_text(self, frame: _Frame, end: int) -> None:
        """Emit the pending plain-text run [text_start, end)."""
        if end > self.text_start:
            text = self.template[self.text_start : end]
            frame.items.append(LiteralText(text, self.template, self.text_start, end))

    def emit_escape(self, frame: _Frame, text: str, start: int, end: int) -> int:
        """Flush pending text, emit one escape item, return the resume offset."""
        self.flush_text(frame, start)
        frame.items.append(LiteralText(text, self.template, start, end))
        self.text_start = end
        return end

    # ------------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------------

    def run(self) -> Format:
        template = self.template
        length = len(template)
        doubled_braces = self.alt_escape is None
        frames = [_Frame(0, None)]
        pos = 0

        while pos < length:
            char = template[pos]
            frame = frames[-1]

            if char == OPENING_BRACE:
                if doubled_braces and template.startswith("{{", pos):
                    pos = self.emit_escape(frame, OPENING_BRACE, pos, pos + 2)
                    continue
                self.flush_text(frame, pos)
                pos = self._open_placeholder(frames, pos)
                self.text_start = pos
                continue

            if char == CLOSING_BRACE:
                # "}}" is a literal brace at every depth, checked before un-nesting
                if doubled_braces and template.startswith("}}", pos):
                    pos = self.emit_escape(frame, CLOSING_BRACE, pos, pos + 2)
                    continue
                if frame.header is not None:
                    self.flush_text(frame, pos)
                    frames.pop()
                    frames[-1].items.append(self._close_placeholder(frame, frame.header, pos))
                    pos += 1
                    self.text_start = pos
                    continue
                self.flush_text(frame, pos)
                self.add_issue(ErrorTemplate.too_many_closing_braces(pos), pos, pos + 1)
                pos += 1
                self.text_start = pos
                continue

            if char == self.alt_escape and pos + 1 < length and template[pos + 1] in "{}":
                pos = self.emit_escape(frame, template[pos + 1], pos, pos + 2)
                continue

            if char == _BACKSLASH and self.convert_literals:
                if pos + 1 >= length:
                    self.flush_text(frame, pos)
                    self.add_issue(ErrorTemplate.unterminated_escape(pos), pos, length)
                    pos = length
                    self.text_start = pos
                    continue
                decoded = decode_char_literal(template, pos)
                if decoded is not None:
                    pos = self.emit_escape(frame, decoded[0], pos, decoded[1])
                    continue
                # Unknown sequence: both characters stay in the text run
                pos += 2
                continue

            pos += 1

        self.flush_text(frames[-1], length)
        # Unclosed placeholders are dropped together with their partial content
        for unclosed in frames[1:]:
            if unclosed.header is not None:
                start = unclosed.header.start
                self.add_issue(ErrorTemplate.missing_closing_brace(start), start, length)
        self.issues.sort(key=lambda issue: issue.start)
        return Format(tuple(frames[0].items), template, 0, length)

    def _close_placeholder(self, frame: _Frame, header: _Header, pos: int) -> Placeholder:
        nested = Format(tuple(frame.items), self.template, frame.start, pos)
        return Placeholder(
            selectors=header.selectors,
            alignment=header.alignment,
            formatter_name=header.formatter_name,
            formatter_options=header.formatter_options,
            format=nested,
            template=self.template,
            start=header.start,
            end=pos + 1,
        )

    def _open_placeholder(self, frames: list[_Frame], start: int) -> int:
        """Scan a placeholder header at start ("{").

        Appends a finished Placeholder, pushes a frame for its nested
        format, or records an issue and skips the broken placeholder.

        Returns:
            Offset to resume scanning from
        """
        header, pos = self._scan_header(start)
        if header is None:
            return pos
        template = self.template
        if template[pos] == CLOSING_BRACE:
            frames[-1].items.append(self._finished(header, pos + 1))
            return pos + 1

        # template[pos] == ":"
        call = match_formatter_call(
            template, pos + 1, self.formatter_names, case_sensitive=self.case_sensitive
        )
        if call is None:
            frames.append(_Frame(pos + 1, header))
            return pos + 1
        header.formatter_name, header.formatter_options, resume, closed = call
        if closed:
            frames[-1].items.append(self._finished(header, resume))
        else:
            frames.append(_Frame(resume, header))
        return resume

    def _finished(self, header: _Header, end: int) -> Placeholder:
        return Placeholder(
            selectors=header.selectors,
            alignment=header.alignment,
            formatter_name=header.formatter_name,
            formatter_options=header.formatter_options,
            format=None,
            template=self.template,
            start=header.start,
            end=end,
        )

    # ------------------------------------------------------------------------
    # Placeholder header
    # ------------------------------------------------------------------------

    def _scan_header(self, start: int) -> tuple[_Header | None, int]:
        """Scan selectors and alignment.

        Returns:
            (header, offset of the terminating ':' or '}'), or
            (None, resume offset) when the header is broken
        """
        template = self.template
        length = len(template)
        selectors: list[Selector] = []
        # Operator for the next selector name; None right after "]"
        operator: str | None = ""
        in_brackets = False
        pos = name_start = start + 1

        while True:
            if pos >= length:
                self.add_issue(ErrorTemplate.missing_closing_brace(start), start, length)
                return None, length
            char = template[pos]
            if is_selector_char(char):
                pos += 1
                continue
            if char not in ".[],:}":
                self.add_issue(
                    ErrorTemplate.invalid_characters_in_selector(char, pos), pos, pos + 1
                )
                return None, self._skip_broken(pos)

            name = template[name_start:pos]
            if name and operator is None:
                self.add_issue(
                    ErrorTemplate.invalid_characters_in_selector(template[name_start], name_start),
                    name_start,
                    pos,
                )
                return None, self._skip_broken(pos)
            if (char == "]") != in_brackets or (in_brackets and not name):
                self.add_issue(
                    ErrorTemplate.invalid_characters_in_selector(char, pos), pos, pos + 1
                )
                return None, self._skip_broken(pos)
            if name:
                selectors.append(
                    Selector(name, operator or "", len(selectors), template, name_start, pos)
                )
            elif operator and selectors:
                # "a." or "a[" followed by another operator or the end of the chain
                self.add_issue(
                    ErrorTemplate.trailing_operators_in_selector(pos - 1), pos - 1, pos
                )
                return None, self._skip_broken(pos)

            pos += 1
            name_start = pos
            if char == "]":
                in_brackets = False
                operator = None
            elif char in ".[":
                in_brackets = char == "["
                operator = char
            else:
                break

        alignment = 0
        if char == ",":
            align_start = pos
            while pos < length and template[pos] not in ":}":
                pos += 1
            if pos >= length:
                self.add_issue(ErrorTemplate.missing_closing_brace(start), start, length)
                return None, length
            parsed = parse_alignment(template[align_start:pos])
            if parsed is None:
                self.add_issue(ErrorTemplate.invalid_alignment(align_start), align_start, pos)
                return None, self._skip_broken(pos)
            alignment = parsed
            pos += 1

        # pos is one past the terminator; hand back the terminator itself
        return _Header(start, tuple(selectors), alignment), pos - 1

    def _skip_broken(self, pos: int) -> int:
        """Offset after the next '}', or the end of the template."""
        found = self.template.find(CLOSING_BRACE, pos)
        return len(self.template) if found < 0 else found + 1


class Parser:
    """Template parser bound to one SmartSettings instance.

    Attributes:
        settings: Escape, literal and error-action configuration
        on_parsing_failure: Fired with the ParseError of every malformed
            template, before parse_error_action is applied

    Example:
        >>> parser = Parser()
        >>> fmt = parser.parse("Hello {Name}!")
        >>> [type(item).__name__ for item in fmt.items]
        ['LiteralText', 'Placeholder', 'LiteralText']
    """

    __slots__ = ("on_parsing_failure", "settings")

    def __init__(self, settings: SmartSettings | None = None) -> None:
        """Initialize parser.

        Args:
            settings: Shared settings (default: SmartSettings())
        """
        self.settings = settings if settings is not None else SmartSettings()
        self.on_parsing_failure: Event[[ParseError]] = Event()

    def parse(self, template: str, formatter_names: Iterable[str] = ()) -> Format:
        """Parse template into a Format tree.

        Args:
            template: Template text
            formatter_names: Names that may appear as ":name:" formatter calls

        Returns:
            Parsed Format; on parse issues, a Format chosen by
            settings.parse_error_action

        Raises:
            ParseError: If the template is malformed and parse_error_action
                is THROW_ERROR
        """
        settings = self.settings
        if self._is_plain(template):
            items = (LiteralText(template, template, 0, len(template)),) if template else ()
            return Format(items, template, 0, len(template))

        names = frozenset(settings.normalize_formatter_name(name) for name in formatter_names)
        scan = _Scan(template, settings, names)
        result = scan.run()
        if not scan.issues:
            return result

        error = ParseError(template, tuple(scan.issues))
        logger.warning("Template parse failed: %s", str(error)[:LOG_TRUNCATE_WARNING])
        self.on_parsing_failure.emit(error)

        match settings.parse_error_action:
            case ErrorAction.THROW_ERROR:
                raise error
            case ErrorAction.MAINTAIN_TOKENS:
                literal = LiteralText(template, template, 0, len(template))
            case ErrorAction.OUTPUT_ERROR_IN_RESULT:
                literal = LiteralText(str(error), template, 0, len(template))
            case ErrorAction.IGNORE:
                return result
        return Format((literal,), template, 0, len(template))

    def _is_plain(self, template: str) -> bool:
        """True when template cannot contain placeholders or escapes."""
        if OPENING_BRACE in template or CLOSING_BRACE in template:
            return False
        if self.settings.convert_character_string_literals and _BACKSLASH in template:
            return False
        return not (
            self.settings.alternative_escaping
            and self.settings.alternative_escape_char in template
        )
