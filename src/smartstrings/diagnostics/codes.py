"""Diagnostic codes and data structures.

Defines error codes, template positions, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Parse errors (malformed templates)
        2000-2999: Formatting errors (selector resolution, formatter dispatch)
        3000-3999: Variable errors (groups, update batches)
    """

    # Parse errors (1000-1999)
    TOO_MANY_CLOSING_BRACES = 1001
    TRAILING_OPERATORS_IN_SELECTOR = 1002
    INVALID_CHARACTERS_IN_SELECTOR = 1003
    MISSING_CLOSING_BRACE = 1004
    INVALID_ALIGNMENT = 1005
    UNTERMINATED_ESCAPE = 1006

    # Formatting errors (2000-2999)
    SELECTOR_NOT_RESOLVED = 2001
    FORMATTER_NOT_FOUND = 2002
    NO_SUITABLE_FORMATTER = 2003
    FORMATTER_FAILED = 2004
    MAX_DEPTH_EXCEEDED = 2005
    INVALID_FORMAT_OPTIONS = 2006
    NO_SOURCES_REGISTERED = 2007

    # Variable errors (3000-3999)
    DUPLICATE_KEY = 3001
    INVALID_VARIABLE_NAME = 3002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        position: Character offset in the template (None when not applicable)
        hint: Suggestion for fixing the error
        placeholder: Raw text of the placeholder being evaluated (format errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    position: int | None = None
    hint: str | None = None
    placeholder: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[MISSING_CLOSING_BRACE]: Format string is missing a closing brace
              --> position 12
              = help: Close every '{' with a matching '}'

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.position is not None:
            lines.append(f"  --> position {self.position}")
        if self.placeholder is not None:
            lines.append(f"  = placeholder: {self.placeholder}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
