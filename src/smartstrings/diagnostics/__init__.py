"""Diagnostic system for SmartStrings errors.

Provides structured error diagnostics with codes, positions and hints,
and the exception hierarchy routed through ErrorAction.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    DepthLimitExceededError,
    DuplicateKeyError,
    FormatterEvaluationError,
    FormatterNotFoundError,
    FormattingError,
    ParseError,
    ParsingIssue,
    ResolutionFailureError,
    SmartFormatError,
)
from .templates import ErrorTemplate

__all__ = [
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DuplicateKeyError",
    "ErrorTemplate",
    "FormatterEvaluationError",
    "FormatterNotFoundError",
    "FormattingError",
    "ParseError",
    "ParsingIssue",
    "ResolutionFailureError",
    "SmartFormatError",
]
