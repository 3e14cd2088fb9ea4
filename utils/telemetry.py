from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator


@dataclass
class TimingStats:
    """Running aggregate of one timer; constant size however often it fires."""

    count: int = 0
    total_ms: float = 0.0
    min_ms: float = 0.0
    max_ms: float = 0.0

    def add(self, ms: float) -> None:
        if self.count == 0:
            self.min_ms = self.max_ms = ms
        else:
            self.min_ms = min(self.min_ms, ms)
            self.max_ms = max(self.max_ms, ms)
        self.count += 1
        self.total_ms += ms

    def as_dict(self) -> Dict[str, float]:
        return {
            "count": float(self.count),
            "total_ms": round(self.total_ms, 3),
            "avg_ms": round(self.total_ms / self.count, 3) if self.count else 0.0,
            "min_ms": round(self.min_ms, 3),
            "max_ms": round(self.max_ms, 3),
        }


class Telemetry:
    """Request counters and evaluation timings for one service instance."""

    def __init__(self) -> None:
        self.counters: Dict[str, int] = {}
        self.timings: Dict[str, TimingStats] = {}

    def incr(self, name: str, value: int = 1) -> None:
        self.counters[name] = self.counters.get(name, 0) + value

    def observe_ms(self, name: str, ms: float) -> None:
        self.timings.setdefault(name, TimingStats()).add(ms)

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.observe_ms(name, (time.perf_counter() - start) * 1000.0)

    def summary(self) -> Dict[str, Dict[str, float]]:
        return {name: stats.as_dict() for name, stats in sorted(self.timings.items())}
