"""Smart string template parser.

Module Organization:
- core.py: Parser class and the scanning state machine
- primitives.py: Selector characters, character-literal escapes, formatter call matching

Public API:
    Parser: Template parser bound to a SmartSettings instance
"""

from smartstrings.syntax.parser.core import Parser

__all__ = ["Parser"]
