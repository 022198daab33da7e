"""Result objects and diagnostic types for strict markup parsing.

:class:`ParseResult` is the value-level counterpart of the exception-based
core: it holds either the parsed node or the :class:`ParseError` that aborted
the parse, together with diagnostics and timing information.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional

from strict_markup_parser.dom import Node
from strict_markup_parser.errors import ParseError


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()      # The input was rejected
    CRITICAL = auto()   # The input could not be read or scanned at all


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class PerformanceMetrics:
    """Performance metrics for a single parse operation."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    nodes_created: int = 0
    max_depth_reached: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms


@dataclass
class ParseResult:
    """Outcome of one parse: a node on success, the first error otherwise."""

    node: Optional[Node] = None
    error: Optional[ParseError] = None
    success: bool = False
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None
    source: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate that success and payload agree."""
        if self.success and self.node is None:
            raise ValueError("Successful result requires a node")
        if self.success and self.error is not None:
            raise ValueError("Successful result cannot carry an error")

    @property
    def processing_time_ms(self) -> float:
        """Get processing time in milliseconds."""
        return self.performance.processing_time_ms

    def unwrap(self) -> Node:
        """Return the parsed node or raise the error that aborted the parse.

        Raises:
            ParseError: The stored parse error
            RuntimeError: If the input never reached the parser (I/O failure,
                size limit), in which case only diagnostics are available
        """
        if self.success and self.node is not None:
            return self.node
        if self.error is not None:
            raise self.error
        messages = "; ".join(diag.message for diag in self.diagnostics)
        raise RuntimeError(messages or "Parse did not produce a result")

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                position=position,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diag in self.diagnostics
        )
