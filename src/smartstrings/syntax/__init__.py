"""Smart string syntax package.

Provides the template parser and the immutable AST it produces.
Separate from runtime so templates can be parsed and inspected without
an evaluation engine.

Python 3.13+.
"""

from .ast import Format, FormatItem, LiteralText, Placeholder, Selector
from .parser import Parser

__all__ = [
    "Format",
    "FormatItem",
    "LiteralText",
    "Parser",
    "Placeholder",
    "Selector",
]
