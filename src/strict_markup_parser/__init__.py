"""Strict Markup Parser.

A fail-fast recursive-descent parser that turns a markup fragment into an
immutable tree of elements, text runs and comments.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file()
- Level 2: Configured parser - MarkupParser class
- Core: the single-use Parser and its Scanner
"""

__version__ = "0.1.0"
__author__ = "Strict Markup Parser Team"

from .api import InputTooLargeError, MarkupParser, parse, parse_file, parse_string
from .dom import Comment, Element, Node, Text, visit
from .errors import (
    InvalidAttributeValueError,
    InvalidTagError,
    MismatchedClosingTagError,
    NestingDepthError,
    ParseError,
    ParseErrorKind,
    UnexpectedEOFError,
)
from .parser import Parser
from .shared import ParserConfig, ParseResult

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_string",
    "parse_file",

    # Level 2: Configured parser and its settings
    "MarkupParser",
    "ParserConfig",
    "ParseResult",
    "InputTooLargeError",

    # Core parser
    "Parser",

    # Document model
    "Node",
    "Element",
    "Text",
    "Comment",
    "visit",

    # Errors
    "ParseError",
    "ParseErrorKind",
    "InvalidTagError",
    "UnexpectedEOFError",
    "MismatchedClosingTagError",
    "InvalidAttributeValueError",
    "NestingDepthError",
]
