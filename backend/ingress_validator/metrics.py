"""Metrics sink — counters incremented by the semantic checks.

For production with a real metrics backend, implement Metrics against it.
"""

import threading
from abc import ABC, abstractmethod
from collections import defaultdict


class Metrics(ABC):
    """Counter sink shared by all validator invocations. Must be thread-safe."""

    @abstractmethod
    def inc_counter_by(self, key: str, value: int) -> None:
        ...

    def inc_counter(self, key: str) -> None:
        self.inc_counter_by(key, 1)


class InMemoryMetrics(Metrics):
    """Lock-guarded in-process counters."""

    def __init__(self):
        self._lock = threading.Lock()
        self._counters: dict[str, int] = defaultdict(int)

    def inc_counter_by(self, key: str, value: int) -> None:
        with self._lock:
            self._counters[key] += value

    def get(self, key: str) -> int:
        with self._lock:
            return self._counters.get(key, 0)

    def snapshot(self) -> dict[str, int]:
        """Copy of all counters."""
        with self._lock:
            return dict(self._counters)

