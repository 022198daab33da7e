"""Command-line interface for strict markup parsing.

Provides the ``strict-markup`` tool with parse, validate and profile
commands.
"""

from .main import main

__all__ = ["main"]
