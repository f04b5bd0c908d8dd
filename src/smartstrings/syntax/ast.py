"""Smart string AST (Abstract Syntax Tree) node definitions.

A parsed template is a Format: an ordered tuple of LiteralText and
Placeholder items. Placeholders own their nested Format, so the tree has
no shared mutable state and can be reused across evaluations.

Every node keeps a reference to the full template plus its own offsets,
so raw_text is always the exact source slice.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Nodes
    "Format",
    "LiteralText",
    "Placeholder",
    "Selector",
    # Type aliases
    "FormatItem",
]

# ============================================================================
# SELECTORS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Selector:
    """One step of a placeholder's value path.

    Attributes:
        text: Selector name without operator ("Name", "0")
        operator: "" for the first selector, "." or "[" for later ones
        index: Position in the chain (0-based)
        template: Full template text
        start: Offset of the selector name
        end: Offset after the selector name

    Example:
        Template "{a.b[0]}" produces:
            Selector("a", "", 0, ...), Selector("b", ".", 1, ...),
            Selector("0", "[", 2, ...)
    """

    text: str
    operator: str
    index: int
    template: str
    start: int
    end: int

    @property
    def raw_text(self) -> str:
        """Selector name as written."""
        return self.template[self.start : self.end]


# ============================================================================
# FORMAT ITEMS
# ============================================================================


@dataclass(frozen=True, slots=True)
class LiteralText:
    """Literal segment, already unescaped.

    Escape sequences are kept as separate LiteralText items: text equals
    raw_text for plain runs and differs for escapes.

    Attributes:
        text: Text to write
        template: Full template text
        start: Offset of the first source character
        end: Offset after the last source character
    """

    text: str
    template: str
    start: int
    end: int

    @property
    def raw_text(self) -> str:
        """Source slice (escapes not converted)."""
        return self.template[self.start : self.end]

    @property
    def is_escape(self) -> bool:
        """True for an escape sequence such as {{ or \\n."""
        return self.text != self.raw_text

    @staticmethod
    def guard(item: object) -> TypeIs["LiteralText"]:
        """Type guard for LiteralText."""
        return isinstance(item, LiteralText)


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A {...} region.

    Attributes:
        selectors: Ordered selector chain (may be empty: "{}" is the current value)
        alignment: Column width; negative left-aligns, 0 means none
        formatter_name: Explicit formatter name, "" for implicit dispatch
        formatter_options: Text between parentheses, "" when absent
        format: Nested format after the last ':' (None when there is none)
        template: Full template text
        start: Offset of "{"
        end: Offset after "}"
    """

    selectors: tuple[Selector, ...]
    alignment: int
    formatter_name: str
    formatter_options: str
    format: "Format | None"
    template: str
    start: int
    end: int

    @property
    def raw_text(self) -> str:
        """Placeholder source including braces."""
        return self.template[self.start : self.end]

    @staticmethod
    def guard(item: object) -> TypeIs["Placeholder"]:
        """Type guard for Placeholder."""
        return isinstance(item, Placeholder)


# ============================================================================
# FORMAT
# ============================================================================


@dataclass(frozen=True, slots=True)
class Format:
    """Parsed template or nested sub-format.

    Attributes:
        items: Literal and placeholder items in source order
        template: Full template text
        start: Offset of the first character
        end: Offset after the last character
    """

    items: tuple["FormatItem", ...]
    template: str
    start: int
    end: int

    @property
    def raw_text(self) -> str:
        """Source slice of this format."""
        return self.template[self.start : self.end]

    @property
    def has_nested(self) -> bool:
        """True when any item is a placeholder."""
        return any(isinstance(item, Placeholder) for item in self.items)

    def get_literal_text(self) -> str:
        """Concatenated literal text, placeholders skipped."""
        return "".join(item.text for item in self.items if isinstance(item, LiteralText))

    def split(self, char: str, maxsplit: int = -1) -> tuple["Format", ...]:
        """Split on occurrences of char in top-level literal text.

        Occurrences inside nested placeholders and escape items are not
        split points. Always returns at least one Format.

        Args:
            char: Separator
            maxsplit: Maximum number of splits; negative means no limit

        Example:
            "one|{0:a|b}|three".split("|") -> 3 formats
        """
        parts: list[Format] = []
        current: list[FormatItem] = []
        part_start = self.start
        for item in self.items:
            if (
                isinstance(item, Placeholder)
                or item.is_escape
                or char not in item.text
                or len(parts) == maxsplit
            ):
                current.append(item)
                continue
            piece_start = item.start
            text = item.text
            while len(parts) != maxsplit and (found := text.find(char)) >= 0:
                if found:
                    current.append(
                        LiteralText(text[:found], self.template, piece_start, piece_start + found)
                    )
                split_at = piece_start + found
                parts.append(Format(tuple(current), self.template, part_start, split_at))
                current = []
                part_start = split_at + len(char)
                piece_start = part_start
                text = text[found + len(char) :]
            if text:
                current.append(LiteralText(text, self.template, piece_start, item.end))
        parts.append(Format(tuple(current), self.template, part_start, self.end))
        return tuple(parts)

    def substring(self, offset: int) -> "Format":
        """Format starting offset characters into this one.

        Literal items cut by the offset are trimmed; items before it are
        dropped.
        """
        start = min(self.start + offset, self.end)
        items: list[FormatItem] = []
        for item in self.items:
            if item.end <= start:
                continue
            if isinstance(item, LiteralText) and item.start < start and not item.is_escape:
                cut = start - item.start
                items.append(LiteralText(item.text[cut:], self.template, start, item.end))
            else:
                items.append(item)
        return Format(tuple(items), self.template, start, self.end)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type FormatItem = LiteralText | Placeholder
