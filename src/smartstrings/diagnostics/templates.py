"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps messages testable and consistent, and documents every error case
    in one place.
    """

    # ========================================================================
    # PARSE ERRORS
    # ========================================================================

    @staticmethod
    def too_many_closing_braces(position: int) -> Diagnostic:
        """Unmatched '}' at the top level of a template.

        Args:
            position: Offset of the stray brace

        Returns:
            Diagnostic for TOO_MANY_CLOSING_BRACES
        """
        return Diagnostic(
            code=DiagnosticCode.TOO_MANY_CLOSING_BRACES,
            message="Format string has too many closing braces",
            position=position,
            hint="Escape a literal brace as '}}'",
        )

    @staticmethod
    def trailing_operators_in_selector(position: int) -> Diagnostic:
        """Selector chain ends with '.' or '['.

        Args:
            position: Offset of the trailing operator

        Returns:
            Diagnostic for TRAILING_OPERATORS_IN_SELECTOR
        """
        return Diagnostic(
            code=DiagnosticCode.TRAILING_OPERATORS_IN_SELECTOR,
            message="There are illegal trailing operators in the selector",
            position=position,
            hint="Remove the trailing '.' or close the '[' indexer",
        )

    @staticmethod
    def invalid_characters_in_selector(char: str, position: int) -> Diagnostic:
        """Selector contains a character outside letters, digits, '_' and '-'.

        Args:
            char: The offending character
            position: Offset of the offending character

        Returns:
            Diagnostic for INVALID_CHARACTERS_IN_SELECTOR
        """
        msg = f"Invalid character '{char}' in the selector"
        return Diagnostic(
            code=DiagnosticCode.INVALID_CHARACTERS_IN_SELECTOR,
            message=msg,
            position=position,
            hint="Selectors may contain letters, digits, '_' and '-'",
        )

    @staticmethod
    def missing_closing_brace(position: int) -> Diagnostic:
        """Template ends inside an open placeholder.

        Args:
            position: Offset of the unclosed '{'

        Returns:
            Diagnostic for MISSING_CLOSING_BRACE
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_CLOSING_BRACE,
            message="Format string is missing a closing brace",
            position=position,
            hint="Close every '{' with a matching '}'",
        )

    @staticmethod
    def invalid_alignment(position: int) -> Diagnostic:
        """Alignment clause is not ',' followed by an optional sign and digits.

        Args:
            position: Offset of the alignment clause

        Returns:
            Diagnostic for INVALID_ALIGNMENT
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_ALIGNMENT,
            message="Alignment must be an integer such as ',10' or ',-10'",
            position=position,
        )

    @staticmethod
    def unterminated_escape(position: int) -> Diagnostic:
        """Escape character at the very end of the template.

        Args:
            position: Offset of the escape character

        Returns:
            Diagnostic for UNTERMINATED_ESCAPE
        """
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_ESCAPE,
            message="Unterminated escape sequence at the end of the format string",
            position=position,
            hint="Double the escape character to write it literally",
        )

    # ========================================================================
    # FORMATTING ERRORS
    # ========================================================================

    @staticmethod
    def selector_not_resolved(selector: str, placeholder: str) -> Diagnostic:
        """No source could evaluate a selector.

        Args:
            selector: Selector text
            placeholder: Raw placeholder text

        Returns:
            Diagnostic for SELECTOR_NOT_RESOLVED
        """
        msg = f'Could not evaluate the selector "{selector}"'
        return Diagnostic(
            code=DiagnosticCode.SELECTOR_NOT_RESOLVED,
            message=msg,
            placeholder=placeholder,
            hint="Check the argument has a key, attribute or index of that name",
        )

    @staticmethod
    def formatter_not_found(name: str, placeholder: str) -> Diagnostic:
        """Explicit formatter name is not registered.

        Args:
            name: Requested formatter name
            placeholder: Raw placeholder text

        Returns:
            Diagnostic for FORMATTER_NOT_FOUND
        """
        msg = f'Formatter named "{name}" could not be found'
        return Diagnostic(
            code=DiagnosticCode.FORMATTER_NOT_FOUND,
            message=msg,
            placeholder=placeholder,
            hint="Register the formatter with add_formatter() before formatting",
        )

    @staticmethod
    def no_suitable_formatter(name: str, value_type: str, placeholder: str) -> Diagnostic:
        """Every candidate formatter declined the value.

        Args:
            name: Requested formatter name ("" for implicit)
            value_type: Type name of the current value
            placeholder: Raw placeholder text

        Returns:
            Diagnostic for NO_SUITABLE_FORMATTER
        """
        if name:
            msg = f'Formatter named "{name}" cannot process a value of type {value_type}'
        else:
            msg = f"No suitable formatter could be found for a value of type {value_type}"
        return Diagnostic(
            code=DiagnosticCode.NO_SUITABLE_FORMATTER,
            message=msg,
            placeholder=placeholder,
        )

    @staticmethod
    def formatter_failed(message: str, placeholder: str) -> Diagnostic:
        """An extension raised while producing output.

        Args:
            message: Message of the original exception
            placeholder: Raw placeholder text

        Returns:
            Diagnostic for FORMATTER_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.FORMATTER_FAILED,
            message=message,
            placeholder=placeholder,
        )

    @staticmethod
    def max_depth_exceeded(max_depth: int) -> Diagnostic:
        """Evaluation nested deeper than the configured limit.

        Args:
            max_depth: The configured limit

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum evaluation depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Check for a template that includes itself",
        )

    @staticmethod
    def invalid_format_options(formatter: str, detail: str) -> Diagnostic:
        """Formatter options or alternatives do not fit the formatter.

        Args:
            formatter: Formatter name
            detail: What is wrong with the options

        Returns:
            Diagnostic for INVALID_FORMAT_OPTIONS
        """
        msg = f"{formatter}: {detail}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_FORMAT_OPTIONS,
            message=msg,
        )

    @staticmethod
    def no_sources_registered() -> Diagnostic:
        """Formatter created without any source.

        Returns:
            Diagnostic for NO_SOURCES_REGISTERED
        """
        return Diagnostic(
            code=DiagnosticCode.NO_SOURCES_REGISTERED,
            message="No sources are registered; selectors cannot be evaluated",
            hint="Use create_default_smart_format() or add_source()",
        )

    # ========================================================================
    # VARIABLE ERRORS
    # ========================================================================

    @staticmethod
    def duplicate_key(name: str) -> Diagnostic:
        """Name collision in a variable group or variables source.

        Args:
            name: Normalized name

        Returns:
            Diagnostic for DUPLICATE_KEY
        """
        msg = f"An item with the name '{name}' already exists"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_KEY,
            message=msg,
            hint="Names are compared after whitespace and case normalization",
        )

    @staticmethod
    def invalid_variable_name(name: str) -> Diagnostic:
        """Variable name is empty or contains characters selectors cannot express.

        Args:
            name: Rejected name

        Returns:
            Diagnostic for INVALID_VARIABLE_NAME
        """
        msg = f"'{name}' is not a valid variable name"
        return Diagnostic(
            code=DiagnosticCode.INVALID_VARIABLE_NAME,
            message=msg,
            hint="Use letters, digits, '_' and '-'; whitespace becomes '-'",
        )
