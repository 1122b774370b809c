from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Dict, Iterator, List


class Telemetry:
    """Counters plus wall-clock samples for provider calls."""

    def __init__(self) -> None:
        self.counters: Dict[str, int] = {}
        self.samples_ms: Dict[str, List[float]] = {}

    def incr(self, name: str, value: int = 1) -> None:
        self.counters[name] = self.counters.get(name, 0) + value

    def observe_ms(self, name: str, ms: float) -> None:
        self.samples_ms.setdefault(name, []).append(ms)

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        except Exception:
            self.incr(f"{name}:errors")
            raise
        finally:
            self.observe_ms(name, (time.perf_counter() - start) * 1000.0)

    def summary(self) -> Dict[str, Dict[str, float]]:
        out: Dict[str, Dict[str, float]] = {}
        for name, samples in self.samples_ms.items():
            total = sum(samples)
            out[name] = {
                "count": float(len(samples)),
                "total_ms": total,
                "avg_ms": total / len(samples),
                "min_ms": min(samples),
                "max_ms": max(samples),
            }
        return out
