"""Template formatter: named, reusable sub-templates.

    templates = TemplateFormatter()
    smart.add_formatter(templates)
    templates.register("firstLast", "{First} {Last}")
    smart.format("{:template:firstLast}", person)   -> "Scott Rippey"
    smart.format("{:t(firstLast)}", person)         -> "Scott Rippey"

Templates are evaluated against the current value and may use other
templates. A template that includes itself stops at the depth limit.
Names compare per SmartSettings.case_sensitivity. Not registered by
create_default_smart_format().

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from smartstrings.diagnostics import FormatterEvaluationError
from smartstrings.diagnostics.templates import ErrorTemplate
from smartstrings.extensions.base import FormatterBase

if TYPE_CHECKING:
    from smartstrings.runtime.formatting_info import FormattingInfo
    from smartstrings.syntax.ast import Format

__all__ = ["TemplateFormatter"]

logger = logging.getLogger(__name__)


class TemplateFormatter(FormatterBase):
    """Registry of parsed templates callable by name."""

    DEFAULT_NAMES: ClassVar[tuple[str, ...]] = ("template", "t")

    def __init__(self, names: tuple[str, ...] | None = None) -> None:
        """Initialize with no templates."""
        super().__init__(names)
        self._templates: dict[str, Format] = {}

    def register(self, name: str, template: str) -> None:
        """Parse template and store it under name, replacing any previous one.

        Raises:
            RuntimeError: If the formatter is not registered with a SmartFormatter
            ParseError: If template is malformed and parse errors are thrown
        """
        self._templates[self.settings.normalize_name(name)] = self.smart_formatter.parse(template)
        logger.debug("Registered template %r", name)

    def remove(self, name: str) -> bool:
        """Drop the template named name.

        Returns:
            True if it was registered
        """
        return self._templates.pop(self.settings.normalize_name(name), None) is not None

    def clear(self) -> None:
        """Drop every template."""
        self._templates.clear()

    def __contains__(self, name: object) -> bool:
        """True when a template named name is registered."""
        return isinstance(name, str) and self.settings.normalize_name(name) in self._templates

    def __len__(self) -> int:
        """Number of registered templates."""
        return len(self._templates)

    def try_evaluate_format(self, info: FormattingInfo) -> bool:
        """Evaluate the named template against the current value.

        The name comes from "(name)", or from the nested format text.

        Raises:
            FormatterEvaluationError: If no template has that name
        """
        name = info.formatter_options
        if not name:
            fmt = info.format
            if fmt is not None and fmt.has_nested:
                return False
            name = fmt.raw_text if fmt is not None else ""

        template = self._templates.get(self.settings.normalize_name(name))
        if template is None:
            detail = f"no registered template named '{name}'"
            raise FormatterEvaluationError(
                ErrorTemplate.invalid_format_options(info.formatter_name or "template", detail)
            )
        info.write_format(template, info.current_value)
        return True
