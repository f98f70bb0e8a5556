"""Millisecond timers and named time counters."""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass
class _Elapsed:
    last: float = 0.0
    total: float = 0.0

    def add(self, t: float) -> None:
        self.last = t
        self.total += t


class PerformanceEvaluator:
    """A stopwatch with a running total and a table of named timings (ms)."""

    def __init__(self) -> None:
        self._start = 0.0
        self._counter = _Elapsed()
        self._counters: dict[str, _Elapsed] = {}

    def start(self) -> None:
        """Start timing."""
        self._start = time.perf_counter()

    def stop(self) -> float:
        """Stop timing; return whole milliseconds elapsed since :meth:`start`."""
        elapsed = float(int((time.perf_counter() - self._start) * 1000))
        self._counter.add(elapsed)
        return elapsed

    def reset(self) -> None:
        """Zero the running total."""
        self._counter.total = 0.0

    def last(self) -> float:
        """Last measured time."""
        return self._counter.last

    def total(self) -> float:
        """Sum of measured times since the last reset."""
        return self._counter.total

    def store(self, name: str, time: float) -> None:  # noqa: A002
        """Record ``time`` milliseconds under ``name``."""
        self._counters.setdefault(name, _Elapsed()).add(time)

    def get(self, name: str) -> float:
        """Last time recorded under ``name``; KeyError if none."""
        return self._counters[name].last

    def find(self, name: str) -> bool:
        """Tell whether a time was recorded under ``name``."""
        return name in self._counters