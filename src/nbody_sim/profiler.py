# MIT License (see LICENSE)
"""
Section timing for the stepping phases.

A Simulation with a Profiler attached records how long each compute and
commit phase takes, which is where the O(N²) cost shows up.

Example:
    profiler = Profiler()
    sim = Simulation(dt=1e-3, profiler=profiler)
    sim.run(100)
    print(profiler.stats.summary()["compute"]["mean_ms"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Raw timing samples, in seconds, grouped by section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, seconds: float) -> None:
        self.samples.setdefault(name, []).append(seconds)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Dict mapping section name to {'n', 'mean_ms', 'max_ms', 'total_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            total = sum(times)
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * total / len(times),
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * total,
            }
        return out

    def clear(self) -> None:
        self.samples.clear()


class Profiler:
    """Times named sections of code with time.perf_counter."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Record the wall time of the enclosed block under `name`."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
