"""Engine-wide settings consulted by the parser, sources and formatters.

One SmartSettings instance belongs to one SmartFormatter and is shared
with its Parser and every registered extension. Settings are mutable so a
host can switch error policy at runtime; changes to parse-relevant fields
take effect for new cache keys immediately (see parse_fingerprint).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from smartstrings.constants import CLOSING_BRACE, DEFAULT_ESCAPE_CHAR, MAX_DEPTH, OPENING_BRACE
from smartstrings.enums import CaseSensitivity, ErrorAction

__all__ = ["SmartSettings"]


@dataclass(slots=True)
class SmartSettings:
    """Mutable engine configuration.

    Attributes:
        format_error_action: What a failed placeholder writes (default: error message)
        parse_error_action: What a malformed template produces (default: error message)
        case_sensitivity: Selector, key and member matching
        formatter_name_case_sensitivity: Formatter name matching (default: insensitive)
        convert_character_string_literals: Unescape \\n, \\t, \\{ ... in literal text
        alternative_escaping: Escape braces with alternative_escape_char instead of doubling
        alternative_escape_char: Brace escape character when alternative_escaping is on
        max_depth: Maximum evaluation nesting depth

    Example:
        >>> settings = SmartSettings(format_error_action=ErrorAction.MAINTAIN_TOKENS)
        >>> settings.use_alternative_escape_char("\\\\")
        >>> settings.alternative_escaping
        True
    """

    format_error_action: ErrorAction = ErrorAction.OUTPUT_ERROR_IN_RESULT
    parse_error_action: ErrorAction = ErrorAction.OUTPUT_ERROR_IN_RESULT
    case_sensitivity: CaseSensitivity = CaseSensitivity.CASE_SENSITIVE
    formatter_name_case_sensitivity: CaseSensitivity = CaseSensitivity.CASE_INSENSITIVE
    convert_character_string_literals: bool = True
    alternative_escaping: bool = False
    alternative_escape_char: str = DEFAULT_ESCAPE_CHAR
    max_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If max_depth is not positive or the escape char is invalid
        """
        if self.max_depth <= 0:
            msg = "max_depth must be positive"
            raise ValueError(msg)
        self._check_escape_char(self.alternative_escape_char)

    @staticmethod
    def _check_escape_char(char: str) -> None:
        if len(char) != 1 or char in (OPENING_BRACE, CLOSING_BRACE):
            msg = "escape character must be a single character other than a brace"
            raise ValueError(msg)

    # ========================================================================
    # ESCAPING
    # ========================================================================

    def use_alternative_escape_char(self, char: str = DEFAULT_ESCAPE_CHAR) -> None:
        """Escape literal braces as char{ and char} instead of {{ and }}.

        Args:
            char: Escape character (default: backslash)

        Raises:
            ValueError: If char is not a single non-brace character
        """
        self._check_escape_char(char)
        self.alternative_escape_char = char
        self.alternative_escaping = True

    def use_brace_escaping(self) -> None:
        """Escape literal braces by doubling them: {{ and }}."""
        self.alternative_escaping = False

    # ========================================================================
    # NAME COMPARISON
    # ========================================================================

    @property
    def case_sensitive(self) -> bool:
        """True when selectors and keys match case-sensitively."""
        return self.case_sensitivity is CaseSensitivity.CASE_SENSITIVE

    def normalize_name(self, name: str) -> str:
        """Key used for selector and member comparison."""
        return name if self.case_sensitive else name.casefold()

    def names_equal(self, left: str, right: str) -> bool:
        """Compare two selector or key names per case_sensitivity."""
        if self.case_sensitive:
            return left == right
        return left.casefold() == right.casefold()

    def normalize_formatter_name(self, name: str) -> str:
        """Key used for formatter name comparison."""
        if self.formatter_name_case_sensitivity is CaseSensitivity.CASE_SENSITIVE:
            return name
        return name.casefold()

    def parse_fingerprint(self) -> tuple[object, ...]:
        """Settings that change the parse result of a template.

        Part of the format cache key, so editing these settings never
        serves a tree parsed under the old rules.
        """
        return (
            self.parse_error_action,
            self.formatter_name_case_sensitivity,
            self.convert_character_string_literals,
            self.alternative_escaping,
            self.alternative_escape_char,
        )
