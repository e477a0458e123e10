"""
Module: derivation.timing

Purpose:
    Timing instrumentation for the derivation pipeline, used to find which
    phase dominates when large compositions are re-derived after an edit.

Key Classes:
    - TimingLog: Collects per-phase durations for one derivation

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - derivation.pipeline: Main derivation orchestrator
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional

logger = logging.getLogger(__name__)


@dataclass
class TimingLog:
    """
    Per-phase timing metrics for one derivation.

    Attributes:
        phase_timings: Dict of phase_name -> duration_seconds, in the order
            the phases ran

    Example:
        >>> log = TimingLog()
        >>> log.log_phase("expansion", 0.012)
        >>> log.total
        0.012
    """
    phase_timings: Dict[str, float] = field(default_factory=dict)

    def log_phase(self, phase: str, duration: float) -> None:
        """Log a phase timing, accumulating if the phase ran before."""
        self.phase_timings[phase] = self.phase_timings.get(phase, 0.0) + duration

    @property
    def total(self) -> float:
        """Total time across all phases."""
        return sum(self.phase_timings.values())

    def slowest_phase(self) -> Optional[str]:
        """Name of the slowest phase, or None if nothing was timed."""
        if not self.phase_timings:
            return None
        return max(self.phase_timings.items(), key=lambda x: x[1])[0]

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Derivation Timing Summary ==="]
        for phase, duration in self.phase_timings.items():
            lines.append(f"  {phase:25s} {duration:.3f}s")
        lines.append(f"  {'total':25s} {self.total:.3f}s")
        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Export timing data as dictionary."""
        return {
            "phase_timings": dict(self.phase_timings),
            "total": self.total,
            "slowest_phase": self.slowest_phase(),
        }


@contextmanager
def timed_phase(
    log: Optional[TimingLog],
    phase: str,
) -> Generator[None, None, None]:
    """
    Context manager for timing a pipeline phase.

    Passing ``log=None`` disables timing, so callers don't need to branch
    on whether instrumentation is enabled.

    Args:
        log: TimingLog instance to record metrics (or None)
        phase: Name of the phase being timed

    Example:
        >>> log = TimingLog()
        >>> with timed_phase(log, "false_groups"):
        ...     groups, count = generate_false_row_groups(flattened)
    """
    if log is None:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        log.log_phase(phase, elapsed)
        logger.debug(f"Phase {phase} took {elapsed:.4f}s")
