# MIT License (see LICENSE)
"""
The simulation driver.

Simulation owns the ensemble and is the only thing that advances it. It
exposes the two stepping phases as separate entry points so an external
scheduler can call them on its own timer:

    pending = sim.compute_phase()
    ...                       # anything that must not see tick N+1 yet
    sim.commit_phase(pending)

or simply sim.step() / sim.run(steps).

With workers > 1 the simulation keeps one thread pool for all its compute
phases. Use it as a context manager, or call close(), to shut the pool down:

    with Simulation(workers=4) as sim:
        sim.run(1000)

Structure:
    - User creates a Simulation.
    - User adds particles via add_particle().
    - User calls step() (or run()) in a loop.
"""
from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable

from .config import SimulationConfig
from .ensemble import Ensemble
from .profiler import Profiler
from .reporting import TickReporter
from .stepping import PendingTick, StaleTickError, commit_phase, compute_phase, validate_dt
from .types import Particle

logger = logging.getLogger(__name__)


@dataclass
class Simulation:
    """
    N-body simulation world.

    Attributes:
        dt: Default timestep in seconds (default: 1e-3).
        workers: Threads used by the compute phase (default: 1, inline).
        profiler: Optional Profiler timing the "compute" and "commit" phases.
        on_coincident: Optional callback receiving (a, b) for every pair of
            particles found at exactly the same position after a commit.
            This is a notification only; nothing is resolved.
        ensemble: The particles. Owned by this simulation.
        time: Simulated time elapsed, in seconds.
        tick: Number of committed ticks.
    """
    dt: float = 1e-3
    workers: int = 1
    profiler: Profiler | None = None
    on_coincident: Callable[[Particle, Particle], None] | None = None

    # Internal state
    ensemble: Ensemble = field(default_factory=Ensemble)
    time: float = 0.0
    tick: int = 0
    _executor: ThreadPoolExecutor | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.dt = validate_dt(self.dt)
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")

    @classmethod
    def from_config(cls, config: SimulationConfig, **kwargs) -> Simulation:
        """Create a simulation using the dt and workers of a config."""
        return cls(dt=config.dt, workers=config.workers, **kwargs)

    @property
    def particles(self) -> Ensemble:
        return self.ensemble

    def _pool(self) -> ThreadPoolExecutor | None:
        if self.workers == 1:
            return None
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="nbody-compute"
            )
            logger.debug("Started compute pool with %d threads", self.workers)
        return self._executor

    def close(self) -> None:
        """Shut down the compute thread pool, if one was started."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> Simulation:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def add_particle(self, particle: Particle) -> int:
        """
        Add a particle before or between ticks.

        A batch computed before the addition can no longer be committed.

        Returns:
            The particle's slot index.
        """
        return self.ensemble.add(particle)

    def compute_phase(self, dt: float | None = None) -> PendingTick:
        """
        Compute the next state of every particle without changing any.

        Args:
            dt: Timestep; defaults to self.dt.

        Returns:
            The complete batch for the current tick.
        """
        dt = self.dt if dt is None else dt
        pool = self._pool()
        if self.profiler:
            with self.profiler.section("compute"):
                return compute_phase(self.ensemble, dt, self.workers, self.tick, executor=pool)
        return compute_phase(self.ensemble, dt, self.workers, self.tick, executor=pool)

    def commit_phase(self, pending: PendingTick) -> None:
        """
        Commit a batch produced by compute_phase() for the current tick.

        Raises:
            StaleTickError: If the batch is from an earlier tick (including a
                batch that was already committed) or particles were added
                after it was computed.
        """
        if pending.tick != self.tick:
            raise StaleTickError(
                f"Pending batch belongs to tick {pending.tick}, simulation is at tick {self.tick}"
            )
        if self.profiler:
            with self.profiler.section("commit"):
                commit_phase(pending, self.ensemble)
        else:
            commit_phase(pending, self.ensemble)

        self.tick += 1
        self.time += pending.dt
        logger.debug("Tick %d committed, t=%g", self.tick, self.time)

        if self.on_coincident is not None:
            self._notify_coincident()

    def _notify_coincident(self) -> None:
        for i, j in self.ensemble.coincident_pairs():
            a, b = self.ensemble[i], self.ensemble[j]
            logger.debug("Coincident particles at tick %d: [%d] and [%d]", self.tick, i, j)
            self.on_coincident(a, b)

    def step(self, dt: float | None = None) -> None:
        """Advance the simulation by one tick (compute, then commit)."""
        self.commit_phase(self.compute_phase(dt))

    def run(
        self,
        steps: int,
        reporter: TickReporter | None = None,
        report_every: int = 1,
    ) -> None:
        """
        Advance `steps` ticks of self.dt.

        Args:
            steps: Number of ticks.
            reporter: Optional observer; receives the initial state and then
                every `report_every`-th committed tick.
            report_every: Reporting interval in ticks (0 disables reporting).
        """
        if steps < 0:
            raise ValueError(f"steps must be >= 0, got {steps}")

        logger.info(
            "Running %d ticks of dt=%g over %d particles (workers=%d)",
            steps, self.dt, len(self.ensemble), self.workers,
        )
        reporting = reporter is not None and report_every > 0
        if reporting:
            reporter.report_simulation(self)

        for _ in range(steps):
            self.step()
            if reporting and self.tick % report_every == 0:
                reporter.report_simulation(self)

        logger.info("Finished at tick %d, t=%g", self.tick, self.time)
