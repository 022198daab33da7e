"""Public parsing API for strict markup parsing.

Two levels are offered:

- Module-level functions: :func:`parse` returns the node and raises on
  malformed input; :func:`parse_string` and :func:`parse_file` return a
  :class:`ParseResult` that records either the node or the error.
- :class:`MarkupParser`: a reusable, configured facade that keeps usage
  statistics across calls.

The core parser is fail-fast, so a :class:`ParseResult` never carries a
partial tree: ``success`` is True exactly when ``node`` is set.
"""

import time
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

from strict_markup_parser.dom import Node
from strict_markup_parser.errors import ParseError
from strict_markup_parser.parser import Parser
from strict_markup_parser.shared import (
    DiagnosticSeverity,
    ParserConfig,
    ParseResult,
    get_logger,
)

# Constants for API operations
PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000  # Milliseconds per second conversion


class InputTooLargeError(ValueError):
    """Input exceeds ``ParserConfig.max_input_length``."""

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"Input of {length} characters exceeds limit of {limit}")
        self.length = length
        self.limit = limit


def _check_input_length(text: str, config: ParserConfig) -> None:
    limit = config.max_input_length
    if limit is not None and len(text) > limit:
        raise InputTooLargeError(len(text), limit)


def _preview(text: str) -> str:
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


def parse(text: str, config: Optional[ParserConfig] = None) -> Node:
    """Parse markup text and return its root node.

    Args:
        text: Complete markup fragment
        config: Optional parser configuration

    Returns:
        The first node of ``text``

    Raises:
        ParseError: If the markup is malformed
        InputTooLargeError: If ``text`` is longer than the configured limit

    Examples:
        >>> parse('<ul><li>one</li><li>two</li></ul>').tag_name
        'ul'
    """
    config = config or ParserConfig()
    _check_input_length(text, config)
    return Parser(text, config).parse()


def parse_string(
    text: str,
    correlation_id: Optional[str] = None,
    config: Optional[ParserConfig] = None
) -> ParseResult:
    """Parse markup text into a :class:`ParseResult`.

    Parse errors do not propagate; they are stored on the result and
    reported as an ERROR diagnostic.

    Args:
        text: Complete markup fragment
        correlation_id: Optional correlation ID for request tracking
        config: Optional parser configuration

    Returns:
        ParseResult with the node or the error, plus timing metrics

    Examples:
        >>> result = parse_string('<a href="/">home</a>')
        >>> result.success
        True
        >>> parse_string('<a>').error.kind.name
        'UNEXPECTED_EOF'
    """
    config = config or ParserConfig()
    correlation_id = correlation_id or config.correlation_id
    logger = get_logger(__name__, correlation_id, "parse_string")
    start_time = time.time()

    logger.info(
        "Starting string parse operation",
        extra={"content_length": len(text), "preview": _preview(text)},
    )

    result = ParseResult(correlation_id=correlation_id)
    result.performance.characters_processed = len(text)

    try:
        _check_input_length(text, config)
    except InputTooLargeError as e:
        logger.warning("Input rejected", extra={"limit": e.limit, "length": e.length})
        if config.enable_diagnostics:
            result.add_diagnostic(
                DiagnosticSeverity.CRITICAL,
                str(e),
                "api_parser",
                details={"limit": e.limit, "length": e.length},
            )
        result.performance.characters_processed = 0
        return result

    parser = Parser(text, config, correlation_id)
    try:
        result.node = parser.parse()
        result.success = True
    except ParseError as e:
        result.error = e
        logger.warning(
            "Markup rejected",
            extra={"kind": e.kind.name, **e.position},
        )
        if config.enable_diagnostics:
            result.add_diagnostic(
                DiagnosticSeverity.ERROR,
                str(e),
                "parser",
                position=e.position,
                details={"kind": e.kind.name},
            )

    result.performance.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
    result.performance.nodes_created = parser.nodes_created
    result.performance.max_depth_reached = parser.max_depth_reached

    if result.success and parser.remaining.strip() and config.enable_diagnostics:
        result.add_diagnostic(
            DiagnosticSeverity.INFO,
            "Input continues after the parsed node",
            "parser",
            position=asdict(parser.scanner.location()),
            details={"unparsed_characters": len(parser.remaining)},
        )

    logger.info(
        "String parse completed",
        extra={
            "success": result.success,
            "processing_time_ms": result.performance.processing_time_ms,
            "nodes_created": result.performance.nodes_created,
        },
    )
    return result


def parse_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    correlation_id: Optional[str] = None,
    config: Optional[ParserConfig] = None
) -> ParseResult:
    """Read a whole file and parse it with :func:`parse_string`.

    Read and decode failures are reported as a CRITICAL diagnostic with
    ``success`` False and no ``error``.
    """
    path = Path(file_path)
    logger = get_logger(__name__, correlation_id, "parse_file")
    logger.info("Starting file parse operation", extra={"file_path": str(path)})

    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read input file", extra={"file_path": str(path)})
        result = ParseResult(correlation_id=correlation_id, source=str(path))
        result.add_diagnostic(
            DiagnosticSeverity.CRITICAL,
            f"Cannot read {path}: {e}",
            "api_parser",
            details={"error_type": type(e).__name__},
        )
        return result

    result = parse_string(text, correlation_id, config)
    result.source = str(path)
    return result


class MarkupParser:
    """Configured parser facade with usage statistics.

    A fresh core :class:`Parser` is created for every call, so one
    ``MarkupParser`` can be reused for any number of documents.

    Examples:
        >>> parser = MarkupParser(ParserConfig.strict())
        >>> parser.parse('<p>one</p>').success
        True
        >>> parser.statistics["total_parses"]
        1
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "markup_parser")

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

    def parse(self, text: str) -> ParseResult:
        """Parse markup text and record statistics."""
        return self._record(parse_string(text, self.correlation_id, self.config))

    def parse_file(self, file_path: Union[str, Path], encoding: str = "utf-8") -> ParseResult:
        """Parse a file and record statistics."""
        return self._record(
            parse_file(file_path, encoding, self.correlation_id, self.config)
        )

    def _record(self, result: ParseResult) -> ParseResult:
        self._parse_count += 1
        self._total_processing_time += result.processing_time_ms
        if result.success:
            self._successful_parses += 1
        return result

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the configuration used by later calls."""
        self.config = config
        self.logger.info("Parser reconfigured", extra={"config_name": config.name})

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0
        self.logger.info("Parser statistics reset")
