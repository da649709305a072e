# MIT License (see LICENSE)
"""
Tick reporters: observers that receive the ensemble after a commit.

The engine has no presentation layer. Reporters turn committed ticks into
log lines, text, or recorded frames for whatever consumes them.
"""
from __future__ import annotations
import logging
import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TextIO

from ..types import Particle
from ..util import to_list

if TYPE_CHECKING:
    from ..simulation import Simulation

logger = logging.getLogger(__name__)


class TickReporter(ABC):
    """
    Abstract base class for tick observers.

    Usage:
        reporter.begin_tick(sim.tick, sim.time)
        for i, particle in enumerate(sim.particles):
            reporter.report_particle(i, particle)
        reporter.end_tick()

    Or use the convenience method:
        reporter.report_simulation(sim)
    """

    @abstractmethod
    def begin_tick(self, tick: int, time: float) -> None:
        """
        Start reporting a committed tick.

        Args:
            tick: Number of ticks committed so far.
            time: Simulated time in seconds.
        """
        ...

    @abstractmethod
    def report_particle(self, index: int, particle: Particle) -> None:
        """Report one particle, identified by its slot index."""
        ...

    @abstractmethod
    def end_tick(self) -> None:
        """Finish the current tick."""
        ...

    def report_simulation(self, sim: "Simulation") -> None:
        """Report every particle of a simulation at its current tick."""
        self.begin_tick(sim.tick, sim.time)
        for i, particle in enumerate(sim.particles):
            self.report_particle(i, particle)
        self.end_tick()


class LogReporter(TickReporter):
    """
    Sends each particle's debug_info() to the logging system.

    Example output (at DEBUG):
        nbody_sim.reporting.reporters - DEBUG - tick 3 t=0.003 [0] Proton at position: (-0.5, 0, 0)
    """

    def __init__(self, level: int = logging.DEBUG, log: logging.Logger | None = None):
        self.level = level
        self.log = log or logger
        self._prefix = ""

    def begin_tick(self, tick: int, time: float) -> None:
        self._prefix = f"tick {tick} t={time:.6g}"

    def report_particle(self, index: int, particle: Particle) -> None:
        self.log.log(self.level, "%s [%d] %s", self._prefix, index, particle.debug_info())

    def end_tick(self) -> None:
        self._prefix = ""


class StreamReporter(TickReporter):
    """
    Writes a plain-text block per tick to a stream (stdout by default).

    Output:
        === Tick 1 t=0.001 ===
        [0] Proton at position: (-0.5, 0, 0) v=(-6.9e-05, 0, 0)
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, include velocity.
        """
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_tick(self, tick: int, time: float) -> None:
        self.output.write(f"=== Tick {tick} t={time:.6g} ===\n")

    def report_particle(self, index: int, particle: Particle) -> None:
        line = f"[{index}] {particle.debug_info()}"
        if self.verbose:
            line += f" v={particle.velocity}"
        self.output.write(line + "\n")

    def end_tick(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullReporter(TickReporter):
    """Discards everything. Placeholder for benchmarks."""

    def begin_tick(self, tick: int, time: float) -> None:
        pass

    def report_particle(self, index: int, particle: Particle) -> None:
        pass

    def end_tick(self) -> None:
        pass


class BufferedReporter(TickReporter):
    """
    Records each reported tick as a plain dict for later inspection.

    Example:
        reporter = BufferedReporter()
        sim.run(100, reporter=reporter)
        for frame in reporter.frames:
            print(frame["tick"], frame["particles"][0]["position"])
    """

    def __init__(self) -> None:
        self.frames: list[dict[str, Any]] = []
        self._current: dict[str, Any] | None = None

    def begin_tick(self, tick: int, time: float) -> None:
        self._current = {"tick": tick, "time": time, "particles": []}

    def report_particle(self, index: int, particle: Particle) -> None:
        if self._current is None:
            return
        self._current["particles"].append({
            "index": index,
            "species": particle.species.label,
            "position": to_list(particle.position),
            "velocity": to_list(particle.velocity),
        })

    def end_tick(self) -> None:
        if self._current is not None:
            self.frames.append(self._current)
            self._current = None

    def clear(self) -> None:
        self.frames.clear()
