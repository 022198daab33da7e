"""Parse error taxonomy.

Every failure of the parser is one of the exceptions below. They all derive
from :class:`ParseError` and record where in the input the failure was
detected, both as a character offset and as a 1-based line and column.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ParseErrorKind(Enum):
    """Flat classification of parse failures."""

    INVALID_TAG = "Invalid HTML tag"
    UNEXPECTED_EOF = "Unexpected end of file"
    MISMATCHED_CLOSING_TAG = "Mismatched closing tag"
    INVALID_ATTRIBUTE_VALUE = "Invalid attribute value"
    NESTING_TOO_DEEP = "Nesting too deep"


class ParseError(Exception):
    """Base exception for all parse failures."""

    kind: ParseErrorKind

    def __init__(
        self,
        detail: Optional[str] = None,
        offset: int = 0,
        line: int = 1,
        column: int = 1
    ) -> None:
        self.detail = detail
        self.offset = offset
        self.line = line
        self.column = column
        message = self.kind.value
        if detail:
            message = f"{message}: {detail}"
        super().__init__(f"{message} at line {line}, column {column}")

    @property
    def position(self) -> Dict[str, int]:
        """Position of the failure as a plain mapping."""
        return {"offset": self.offset, "line": self.line, "column": self.column}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "kind": self.kind.name,
            "message": str(self),
            "detail": self.detail,
            **self.position,
        }


class InvalidTagError(ParseError):
    """A required literal marker was not found at the cursor."""

    kind = ParseErrorKind.INVALID_TAG


class UnexpectedEOFError(ParseError):
    """Input ended while a construct was still open."""

    kind = ParseErrorKind.UNEXPECTED_EOF


class MismatchedClosingTagError(ParseError):
    """A closing tag name differs from its opening tag name."""

    kind = ParseErrorKind.MISMATCHED_CLOSING_TAG

    def __init__(
        self,
        expected: str,
        found: str,
        offset: int = 0,
        line: int = 1,
        column: int = 1
    ) -> None:
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected </{expected}>, found </{found}>", offset, line, column
        )


class InvalidAttributeValueError(ParseError):
    """An attribute value was not introduced by a quote character."""

    kind = ParseErrorKind.INVALID_ATTRIBUTE_VALUE


class NestingDepthError(ParseError):
    """Element nesting exceeded the configured maximum depth."""

    kind = ParseErrorKind.NESTING_TOO_DEEP

    def __init__(
        self,
        max_depth: int,
        offset: int = 0,
        line: int = 1,
        column: int = 1
    ) -> None:
        self.max_depth = max_depth
        super().__init__(f"more than {max_depth} levels", offset, line, column)
