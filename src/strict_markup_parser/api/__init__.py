"""Public API for strict markup parsing.

Level 1 functions (``parse``, ``parse_string``, ``parse_file``) cover one-off
parsing; ``MarkupParser`` adds reusable configuration and statistics.
"""

from .parser import (
    InputTooLargeError,
    MarkupParser,
    parse,
    parse_file,
    parse_string,
)

__all__ = [
    "InputTooLargeError",
    "MarkupParser",
    "parse",
    "parse_file",
    "parse_string",
]
