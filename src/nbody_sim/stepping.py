# MIT License (see LICENSE)
"""
Two-phase stepping: compute every next state, then commit them all.

Per tick, per particle: Idle -> Pending -> Committed -> Idle.

1. compute_phase reads a frozen snapshot of the ensemble and produces a
   PendingTick holding one KinematicState per slot. Nothing is mutated,
   so every particle sees tick-N state no matter the iteration order.
2. commit_phase writes the pending states back. It only accepts a complete
   PendingTick, so a partial commit cannot be expressed.

Updating in place in a single pass would let later particles see the
tick N+1 positions of earlier ones, making results depend on ensemble
order.

The compute phase is an embarrassingly parallel map over slots. With
workers > 1 it runs on a thread pool; each task writes only its own slot
of the result, and leaving the executor block is the barrier before commit.
"""
from __future__ import annotations
import logging
import math
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Sequence

from .ensemble import Ensemble
from .types import KinematicState, Particle

logger = logging.getLogger(__name__)


class StaleTickError(RuntimeError):
    """A pending batch no longer matches the ensemble it would be committed to."""


@dataclass(frozen=True)
class PendingTick:
    """
    The complete output of one compute phase.

    A batch can be committed once. When computed from an Ensemble it is
    also bound to that ensemble's generation, so a batch left over from an
    earlier tick is rejected even if it was never committed.

    Attributes:
        dt: Timestep the states were computed with.
        particles: The slots the states belong to, in order.
        states: Next state for each slot.
        tick: Tick counter of the driver that requested the batch.
        generation: Ensemble.generation at compute time (None for a plain
            sequence of particles).
        committed: Set once the batch has been applied.
    """
    dt: float
    particles: tuple[Particle, ...]
    states: tuple[KinematicState, ...]
    tick: int = 0
    generation: int | None = None
    committed: bool = field(default=False, init=False, compare=False)

    def __len__(self) -> int:
        return len(self.states)

    def _mark_committed(self) -> None:
        object.__setattr__(self, "committed", True)


def validate_dt(dt: float) -> float:
    """Return dt as a float; reject negative or non-finite values."""
    dt = float(dt)
    if not math.isfinite(dt) or dt < 0.0:
        raise ValueError(f"dt must be a finite number >= 0, got {dt}")
    return dt


def _particles_of(ensemble: Ensemble | Sequence[Particle]) -> tuple[Particle, ...]:
    if isinstance(ensemble, Ensemble):
        return ensemble.snapshot()
    return tuple(ensemble)


def compute_phase(
    ensemble: Ensemble | Sequence[Particle],
    dt: float,
    workers: int = 1,
    tick: int = 0,
    executor: Executor | None = None,
) -> PendingTick:
    """
    Compute the next state of every particle from the current snapshot.

    Args:
        ensemble: The particles at tick N.
        dt: Timestep in seconds (>= 0).
        workers: Threads used for the map. 1 runs inline.
        tick: Tick number recorded on the batch.
        executor: Pool to run the map on when workers > 1. Without one, a
            pool is created for this call and shut down before returning.

    Returns:
        A PendingTick with one state per slot, in slot order.
    """
    dt = validate_dt(dt)
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    snapshot = _particles_of(ensemble)

    def next_state(i: int) -> KinematicState:
        return snapshot[i].next_state(i, snapshot, dt)

    if workers == 1 or len(snapshot) < 2:
        states = tuple(next_state(i) for i in range(len(snapshot)))
    elif executor is not None:
        states = tuple(executor.map(next_state, range(len(snapshot))))
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            states = tuple(pool.map(next_state, range(len(snapshot))))

    generation = ensemble.generation if isinstance(ensemble, Ensemble) else None
    logger.debug("Computed %d pending states (dt=%g)", len(states), dt)
    return PendingTick(dt=dt, particles=snapshot, states=states, tick=tick, generation=generation)


def commit_phase(pending: PendingTick, ensemble: Ensemble | Sequence[Particle]) -> None:
    """
    Apply a pending batch to the ensemble it was computed from.

    Either every state is written or none is.

    Raises:
        StaleTickError: If the batch was already committed, another batch was
            committed to the ensemble since it was computed, particles were
            added since the compute phase, or the slots differ from the ones
            the batch was computed against.
        ValueError: If any pending state is non-finite.
    """
    if pending.committed:
        raise StaleTickError("Pending tick was already committed")
    if (
        isinstance(ensemble, Ensemble)
        and pending.generation is not None
        and pending.generation != ensemble.generation
    ):
        raise StaleTickError(
            f"Pending tick was computed at generation {pending.generation}; "
            f"the ensemble is at generation {ensemble.generation}"
        )
    current = _particles_of(ensemble)
    if len(current) != len(pending.particles) or any(
        a is not b for a, b in zip(current, pending.particles)
    ):
        raise StaleTickError(
            f"Pending tick was computed for {len(pending.particles)} particles; "
            f"the ensemble's {len(current)} slots no longer match"
        )

    for i, state in enumerate(pending.states):
        if not state.is_finite():
            raise ValueError(f"Non-finite pending state for slot {i}: {state}")

    for particle, state in zip(pending.particles, pending.states):
        particle.commit(state)
    pending._mark_committed()
    if isinstance(ensemble, Ensemble):
        ensemble.generation += 1
    logger.debug("Committed %d states", len(pending.states))


def step(ensemble: Ensemble | Sequence[Particle], dt: float, workers: int = 1) -> None:
    """Advance the ensemble by one tick: compute_phase, then commit_phase."""
    commit_phase(compute_phase(ensemble, dt, workers=workers), ensemble)
