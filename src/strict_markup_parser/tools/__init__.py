"""Developer tools for strict markup parsing."""

from .profiling import (
    PerformanceProfiler,
    PerformanceReport,
    ProfilingSession,
    profile_markup,
)

__all__ = [
    "PerformanceProfiler",
    "PerformanceReport",
    "ProfilingSession",
    "profile_markup",
]
