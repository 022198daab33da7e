"""Character cursor over an in-memory markup string.

The scanner owns the input text and a forward-only cursor counted in code
points. It knows nothing about markup structure: the builder composes these
primitives into element, attribute, comment and text routines.

Reading past the end of input is never allowed. ``peek`` and ``next_char``
raise :class:`UnexpectedEOFError` instead of returning a sentinel.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Type, TypeVar

from strict_markup_parser.errors import InvalidTagError, ParseError, UnexpectedEOFError

E = TypeVar("E", bound=ParseError)


@dataclass(frozen=True)
class SourcePosition:
    """Position information for a cursor offset."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")


class Scanner:
    """Forward-only cursor over ``text``."""

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"Scanner input must be str, not {type(text).__name__}")
        self.text = text
        self.position = 0

    def eof(self) -> bool:
        """Check whether the cursor is at the end of input."""
        return self.position >= len(self.text)

    @property
    def remaining(self) -> str:
        """Unconsumed input."""
        return self.text[self.position:]

    def peek(self) -> str:
        """Return the next character without consuming it."""
        if self.eof():
            raise self.error(UnexpectedEOFError)
        return self.text[self.position]

    def next_char(self) -> str:
        """Consume and return one character."""
        char = self.peek()
        self.position += 1
        return char

    def starts_with(self, literal: str) -> bool:
        """Check whether the remaining input begins with ``literal``."""
        return self.text.startswith(literal, self.position)

    def consume_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume the maximal run of characters satisfying ``predicate``."""
        start = self.position
        end = len(self.text)
        while self.position < end and predicate(self.text[self.position]):
            self.position += 1
        return self.text[start:self.position]

    def consume_until(self, literal: str) -> str:
        """Consume characters until the remaining input starts with ``literal``.

        Stops at end of input when ``literal`` never appears.
        """
        start = self.position
        found = self.text.find(literal, self.position)
        self.position = len(self.text) if found == -1 else found
        return self.text[start:self.position]

    def consume_string(self, literal: str) -> None:
        """Consume exactly ``literal``.

        Raises:
            UnexpectedEOFError: If the input ends before ``literal`` could match
            InvalidTagError: If different text is found at the cursor
        """
        if self.starts_with(literal):
            self.position += len(literal)
            return
        if len(self.text) - self.position < len(literal) and literal.startswith(self.remaining):
            raise self.error(UnexpectedEOFError, f"expected {literal!r}")
        raise self.error(InvalidTagError, f"expected {literal!r}")

    def consume_whitespace(self) -> str:
        """Consume a run of whitespace."""
        return self.consume_while(str.isspace)

    def whitespace_end(self) -> int:
        """Offset of the first non-whitespace character at or after the cursor."""
        end = self.position
        while end < len(self.text) and self.text[end].isspace():
            end += 1
        return end

    def location(self, offset: Optional[int] = None) -> SourcePosition:
        """Compute the 1-based line and column of ``offset`` (default: cursor)."""
        if offset is None:
            offset = self.position
        offset = min(offset, len(self.text))
        line = self.text.count("\n", 0, offset) + 1
        line_start = self.text.rfind("\n", 0, offset) + 1
        return SourcePosition(line=line, column=offset - line_start + 1, offset=offset)

    def error(
        self,
        error_class: Type[E],
        detail: Optional[str] = None,
        offset: Optional[int] = None
    ) -> E:
        """Build a parse error positioned at ``offset`` (default: cursor)."""
        where = self.location(offset)
        return error_class(detail, where.offset, where.line, where.column)
