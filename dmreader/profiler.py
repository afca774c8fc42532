"""Per-stage timing for the codeword parser.

Pass a ParseProfiler to parse_codewords() to accumulate how long each stage
took across many parses; benchmark.py prints the result with --profile.
"""

from __future__ import annotations

import time
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass


@dataclass
class StageStats:
    total_seconds: float = 0.0
    call_count: int = 0

    @property
    def avg_ms(self) -> float:
        if self.call_count == 0:
            return 0.0
        return (self.total_seconds / self.call_count) * 1000


class ParseProfiler:
    """Accumulates wall time per parse stage; a no-op unless enabled."""

    # Pipeline order
    STAGES = (
        "geometry_lookup",
        "region_extraction",
        "codeword_traversal",
        "block_split",
    )

    def __init__(self, enabled: bool = False):
        self.enabled = enabled
        self._stats = {stage: StageStats() for stage in self.STAGES}

    def measure(self, stage: str):
        """Return a context manager that times *stage*."""
        if not self.enabled:
            return nullcontext()
        if stage not in self._stats:
            raise ValueError(f"Unknown parse stage: {stage!r}")
        return self._timed(self._stats[stage])

    @staticmethod
    @contextmanager
    def _timed(stats: StageStats):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            stats.total_seconds += time.perf_counter() - t0
            stats.call_count += 1

    def stats(self, stage: str) -> StageStats:
        return self._stats[stage]

    def to_dict(self) -> dict:
        """Timings of every stage that ran, in pipeline order."""
        return {
            stage: {
                "calls": s.call_count,
                "total_s": round(s.total_seconds, 6),
                "avg_ms": round(s.avg_ms, 4),
            }
            for stage, s in self._stats.items()
            if s.call_count
        }

    def summary(self) -> str:
        """One line per stage that ran, with its share of the total time."""
        timed = self.to_dict()
        total = sum(t["total_s"] for t in timed.values()) or 1e-9
        return "\n".join(
            f"  {stage:<20} {t['calls']:>7} calls {t['avg_ms']:>9.4f} ms avg "
            f"{t['total_s'] / total * 100:>5.1f}%"
            for stage, t in timed.items()
        )
