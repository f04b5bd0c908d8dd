"""SmartStrings exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic object for rich error information.
The message of a formatting error is what OUTPUT_ERROR_IN_RESULT writes into
the result, so it is kept short and free of diagnostic decoration.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from .codes import Diagnostic


class SmartFormatError(Exception):
    """Base exception for all SmartStrings errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize SmartFormatError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


@dataclass(frozen=True, slots=True)
class ParsingIssue:
    """One problem found while parsing a template.

    Attributes:
        diagnostic: What went wrong
        start: Offset of the first offending character
        end: Offset after the last offending character
    """

    diagnostic: Diagnostic
    start: int
    end: int

    @property
    def reason(self) -> str:
        """Human-readable reason."""
        return self.diagnostic.message


class ParseError(SmartFormatError):
    """Malformed template.

    Raised only under ErrorAction.THROW_ERROR; all issues of the template are
    collected before raising.

    Attributes:
        template: The template that failed to parse
        issues: Every issue found, in source order
        position: Offset of the first issue
        reason: Reason of the first issue
    """

    def __init__(self, template: str, issues: tuple[ParsingIssue, ...]) -> None:
        """Initialize ParseError.

        Args:
            template: Raw template text
            issues: Non-empty tuple of parsing issues
        """
        first = issues[0]
        super().__init__(first.diagnostic)
        self.template = template
        self.issues = issues
        self.position = first.start
        self.reason = first.reason

    def __str__(self) -> str:
        """Summarize all issues: "The format string has 2 issues: ..."."""
        details = "; ".join(f"{issue.reason} at {issue.start}" for issue in self.issues)
        noun = "issue" if len(self.issues) == 1 else "issues"
        return f"The format string has {len(self.issues)} {noun}: {details}"


class FormattingError(SmartFormatError):
    """Failure while evaluating a placeholder.

    Attributes:
        placeholder: Raw text of the failed placeholder ("" when unknown)
        position: Offset of the failed item in its template (-1 when unknown)
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        placeholder: str = "",
        position: int = -1,
    ) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            placeholder: Raw text of the failed placeholder
            position: Offset of the failed item
        """
        super().__init__(message)
        self.placeholder = placeholder
        self.position = position


class ResolutionFailureError(FormattingError):
    """No source in the pipeline could resolve a selector.

    Example:
        {Missing} against an object without a "Missing" member.
    """


class FormatterNotFoundError(FormattingError):
    """No registered formatter accepted the placeholder.

    Covers both an explicitly named formatter that is not registered and
    a value no implicit formatter can render.
    """


class FormatterEvaluationError(FormattingError):
    """A formatter or source raised an unexpected exception.

    The original exception is chained as __cause__; the message is the
    original exception's message.
    """


class DuplicateKeyError(SmartFormatError, KeyError):
    """A variable group or source already holds the given name.

    Always propagates: it signals an authoring bug, not a runtime
    formatting condition.

    Attributes:
        key: The normalized name that collided
    """

    def __init__(self, message: str | Diagnostic, *, key: str = "") -> None:
        """Initialize DuplicateKeyError.

        Args:
            message: Error message string OR Diagnostic object
            key: The normalized name that collided
        """
        super().__init__(message)
        self.key = key

    def __str__(self) -> str:
        """Plain message (KeyError would otherwise repr-quote it)."""
        return str(self.args[0]) if self.args else ""


class DepthLimitExceededError(FormattingError):
    """Raised when maximum evaluation depth is exceeded.

    This error indicates either:
    - Adversarial input designed to cause stack overflow
    - A self-referencing template registered with the template formatter
    - Unintended deep nesting in authored content
    """


__all__ = [
    "DepthLimitExceededError",
    "DuplicateKeyError",
    "FormatterEvaluationError",
    "FormatterNotFoundError",
    "FormattingError",
    "ParseError",
    "ParsingIssue",
    "ResolutionFailureError",
    "SmartFormatError",
]
