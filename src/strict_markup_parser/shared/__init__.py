"""Shared utilities for strict markup parsing.

This module provides the configuration object, result and diagnostic types,
and logging helpers used across the parser, API and CLI layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseResult,
    PerformanceMetrics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "ParseResult",
    "PerformanceMetrics",
]
