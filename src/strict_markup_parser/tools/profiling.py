"""Performance profiling tools for strict markup parsing.

Records wall-clock duration and resident memory around parse operations and
summarizes repeated runs into a :class:`PerformanceReport`.
"""

import statistics
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import psutil

from strict_markup_parser.api import parse_string
from strict_markup_parser.shared.config import ParserConfig
from strict_markup_parser.shared.logging import get_logger


@dataclass
class ProfilingSession:
    """Container for one profiled operation."""

    session_id: str
    start_time: float
    end_time: float = 0.0
    input_size: int = 0  # characters
    memory_start: int = 0  # bytes
    memory_end: int = 0  # bytes
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_duration_ms(self) -> float:
        """Total session duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000

    @property
    def memory_delta(self) -> int:
        """Resident memory change in bytes."""
        return self.memory_end - self.memory_start

    @property
    def throughput_chars_per_s(self) -> float:
        """Processing throughput in characters per second."""
        duration_s = self.end_time - self.start_time
        if duration_s <= 0:
            return 0.0
        return self.input_size / duration_s


@dataclass
class PerformanceReport:
    """Summary of a set of profiling sessions."""

    sessions: List[ProfilingSession]
    generation_time: float

    @property
    def session_count(self) -> int:
        """Total number of profiled sessions."""
        return len(self.sessions)

    @property
    def average_duration_ms(self) -> float:
        """Average processing duration across sessions."""
        if not self.sessions:
            return 0.0
        return statistics.mean(s.total_duration_ms for s in self.sessions)

    @property
    def median_duration_ms(self) -> float:
        """Median processing duration across sessions."""
        if not self.sessions:
            return 0.0
        return statistics.median(s.total_duration_ms for s in self.sessions)

    @property
    def average_throughput_chars_per_s(self) -> float:
        """Average throughput across sessions."""
        if not self.sessions:
            return 0.0
        return statistics.mean(s.throughput_chars_per_s for s in self.sessions)

    @property
    def peak_memory_delta(self) -> int:
        """Largest resident memory growth seen in any session."""
        return max((s.memory_delta for s in self.sessions), default=0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary representation."""
        return {
            "session_count": self.session_count,
            "average_duration_ms": self.average_duration_ms,
            "median_duration_ms": self.median_duration_ms,
            "average_throughput_chars_per_s": self.average_throughput_chars_per_s,
            "peak_memory_delta_bytes": self.peak_memory_delta,
        }


class PerformanceProfiler:
    """Profiler for parse operations.

    Examples:
        >>> profiler = PerformanceProfiler()
        >>> with profiler.profile_parsing("run1", input_size=12) as session:
        ...     result = parse_string("<p>hello</p>")
        >>> profiler.generate_report().session_count
        1
    """

    def __init__(self, enable_memory_tracking: bool = True):
        """Initialize performance profiler.

        Args:
            enable_memory_tracking: Whether to sample resident memory
        """
        self.enable_memory_tracking = enable_memory_tracking
        self.sessions: List[ProfilingSession] = []
        self._process = psutil.Process() if enable_memory_tracking else None
        self.logger = get_logger(__name__, None, "performance_profiler")

    def _rss(self) -> int:
        if self._process is None:
            return 0
        return self._process.memory_info().rss

    def start_session(self, session_id: str, input_size: int = 0) -> ProfilingSession:
        """Start a new profiling session."""
        session = ProfilingSession(
            session_id=session_id,
            start_time=time.perf_counter(),
            input_size=input_size,
            memory_start=self._rss(),
        )
        self.logger.debug("Started profiling session", extra={"session_id": session_id})
        return session

    def end_session(self, session: ProfilingSession) -> ProfilingSession:
        """Finish a session and keep it for reporting."""
        session.end_time = time.perf_counter()
        session.memory_end = self._rss()
        self.sessions.append(session)
        self.logger.debug(
            "Ended profiling session",
            extra={
                "session_id": session.session_id,
                "duration_ms": session.total_duration_ms,
            },
        )
        return session

    @contextmanager
    def profile_parsing(
        self,
        session_id: str,
        input_size: int = 0
    ) -> Iterator[ProfilingSession]:
        """Profile the enclosed block as one session."""
        session = self.start_session(session_id, input_size)
        try:
            yield session
        finally:
            self.end_session(session)

    def generate_report(self) -> PerformanceReport:
        """Summarize all sessions recorded so far."""
        return PerformanceReport(sessions=list(self.sessions), generation_time=time.time())

    def clear_sessions(self) -> None:
        """Drop all recorded sessions."""
        session_count = len(self.sessions)
        self.sessions.clear()
        self.logger.info(
            "Cleared profiling sessions",
            extra={"cleared_count": session_count}
        )


def profile_markup(
    text: str,
    iterations: int = 10,
    config: Optional[ParserConfig] = None,
    enable_memory_tracking: bool = True
) -> PerformanceReport:
    """Parse ``text`` repeatedly and report timing and memory.

    Args:
        text: Markup to parse
        iterations: Number of parses to run
        config: Optional parser configuration
        enable_memory_tracking: Whether to sample resident memory

    Returns:
        PerformanceReport covering every iteration
    """
    if iterations <= 0:
        raise ValueError("iterations must be > 0")

    profiler = PerformanceProfiler(enable_memory_tracking=enable_memory_tracking)
    for i in range(iterations):
        with profiler.profile_parsing(f"iteration_{i}", input_size=len(text)) as session:
            result = parse_string(text, config=config)
        session.metadata = {
            "iteration": i,
            "success": result.success,
            "nodes_created": result.performance.nodes_created,
        }
    return profiler.generate_report()
