"""Scanner and recursive-descent builder for markup text."""

from .builder import Parser, parse_markup
from .scanner import Scanner, SourcePosition

__all__ = [
    "Parser",
    "parse_markup",
    "Scanner",
    "SourcePosition",
]
