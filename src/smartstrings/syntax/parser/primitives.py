"""Primitive parsing utilities for smart string templates.

Character classes for selectors, character-literal escapes and the
formatter call matcher. All functions are pure and work on offsets into
the template, never on slices of it.
"""

import re

from smartstrings.constants import CLOSING_BRACE, OPENING_BRACE, SELECTOR_EXTRA_CHARS

__all__ = [
    "decode_char_literal",
    "is_selector_char",
    "match_formatter_call",
    "parse_alignment",
]

# \uXXXX = 4 hex digits (BMP characters U+0000 to U+FFFF)
_UNICODE_ESCAPE_LEN: int = 4

_HEX_DIGITS: str = "0123456789abcdefABCDEF"

# Backslash sequences converted when convert_character_string_literals is on.
_CHAR_LITERALS: dict[str, str] = {
    "'": "'",
    '"': '"',
    "\\": "\\",
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    OPENING_BRACE: OPENING_BRACE,
    CLOSING_BRACE: CLOSING_BRACE,
}

# name, then optional "(options)" closed by the first ")" that is followed by ":" or "}"
_FORMATTER_CALL = re.compile(r"([A-Za-z0-9_-]+)(?:\((.*?)\)(?=[:}]))?", re.DOTALL)

_ALIGNMENT = re.compile(r"[+-]?[0-9]+")


def is_selector_char(char: str) -> bool:
    """Letters, digits, '_' and '-'."""
    return char.isalnum() or char in SELECTOR_EXTRA_CHARS


def decode_char_literal(template: str, pos: int) -> tuple[str, int] | None:
    """Decode the backslash sequence starting at pos.

    Args:
        template: Template text
        pos: Offset of the backslash; pos + 1 must be in range

    Returns:
        (decoded text, offset after the sequence), or None for an unknown
        sequence, which the caller keeps verbatim

    Example:
        >>> decode_char_literal(r"a\\nb", 1)
        ('\\n', 3)
    """
    char = template[pos + 1]
    if char in _CHAR_LITERALS:
        return _CHAR_LITERALS[char], pos + 2
    if char == "u":
        digits = template[pos + 2 : pos + 2 + _UNICODE_ESCAPE_LEN]
        if len(digits) == _UNICODE_ESCAPE_LEN and all(d in _HEX_DIGITS for d in digits):
            return chr(int(digits, 16)), pos + 2 + _UNICODE_ESCAPE_LEN
    return None


def match_formatter_call(
    template: str, pos: int, formatter_names: frozenset[str], *, case_sensitive: bool
) -> tuple[str, str, int, bool] | None:
    """Match "name:", "name(options):" or "name(options)}" at pos.

    Only registered names count; anything else is the start of a nested
    format.

    Args:
        template: Template text
        pos: Offset right after the ':' that ends the selector/alignment part
        formatter_names: Registered names, normalized per case_sensitive
        case_sensitive: Whether names compare case-sensitively

    Returns:
        (name, options, offset after the consumed delimiter, closed) where
        closed is True when the call ended the placeholder with "}";
        None when pos does not start a registered formatter call
    """
    match = _FORMATTER_CALL.match(template, pos)
    if match is None:
        return None
    name, options = match.group(1), match.group(2)
    end = match.end()
    if end >= len(template):
        return None
    delimiter = template[end]
    if delimiter == ":":
        closed = False
    elif delimiter == CLOSING_BRACE and options is not None:
        closed = True
    else:
        return None
    key = name if case_sensitive else name.casefold()
    if key not in formatter_names:
        return None
    return name, options or "", end + 1, closed


def parse_alignment(text: str) -> int | None:
    """Parse the text between ',' and ':' or '}'.

    Returns:
        Alignment width, or None when text is not a signed integer
    """
    if _ALIGNMENT.fullmatch(text) is None:
        return None
    return int(text)
