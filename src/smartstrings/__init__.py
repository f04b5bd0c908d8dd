"""SmartStrings - composable string templates with pluggable sources and formatters.

A superset of format-string templating: placeholders resolve member
paths against the arguments ("{Person.Address.City}"), and named
formatters pick plural forms, conditions, list joins and more
("{Files.Count:plural:one file|{} files}"). Parsed templates are cached;
reactive variables report which templates read them so hosts can
refresh text when values change.

Public API:
    SmartFormatter - Evaluation engine (register sources and formatters)
    create_default_smart_format - Engine with the built-in extensions
    SmartSettings - Error policy, case sensitivity and escaping
    ErrorAction, CaseSensitivity - Settings enumerations
    FormatDelegate - Argument that renders itself from the format text

Exceptions:
    SmartFormatError - Base exception class
    ParseError - Malformed template
    FormattingError - Placeholder could not be evaluated
    DuplicateKeyError - Variable or group name collision

Submodules:
    smartstrings.syntax - Parser and immutable AST
    smartstrings.extensions - Built-in sources and formatters
    smartstrings.variables - Reactive variables, groups and update batching
    smartstrings.diagnostics - Error types and structured diagnostics
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    DuplicateKeyError,
    FormattingError,
    ParseError,
    SmartFormatError,
)
from .enums import CaseSensitivity, ErrorAction
from .extensions import FormatDelegate
from .factory import create_default_smart_format
from .runtime import FormatResult, SmartFormatter
from .settings import SmartSettings

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("smartstrings")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CaseSensitivity",
    "DuplicateKeyError",
    "ErrorAction",
    "FormatDelegate",
    "FormatResult",
    "FormattingError",
    "ParseError",
    "SmartFormatError",
    "SmartFormatter",
    "SmartSettings",
    "__version__",
    "create_default_smart_format",
]
