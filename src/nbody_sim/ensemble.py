# MIT License (see LICENSE)
"""
The particle ensemble: an ordered, exclusively owned collection.

Slot order matters. It fixes the summation order of net forces (and so
the exact floating-point results), and a particle's slot index is how it
is excluded from its own force sum.
"""
from __future__ import annotations
from typing import Iterable, Iterator

import numpy as np

from .core.forces import compute_net_force
from .types import Particle, Vector3


class Ensemble:
    """
    Ordered collection of every particle in a simulation.

    Particles may be appended before or between ticks. Nothing is ever
    removed; the collection lives as long as its simulation.

    Attributes:
        generation: Number of batches committed to this ensemble. A pending
            batch is only valid for the generation it was computed at.
    """

    def __init__(self, particles: Iterable[Particle] = ()) -> None:
        self._particles: list[Particle] = []
        self.generation = 0
        self.extend(particles)

    def add(self, particle: Particle) -> int:
        """
        Append a particle.

        Args:
            particle: The particle to add. Must not already be in this ensemble.

        Returns:
            The slot index assigned to it.
        """
        if not isinstance(particle, Particle):
            raise TypeError(f"Expected Particle, got {type(particle).__name__}")
        if any(p is particle for p in self._particles):
            raise ValueError("Particle is already part of this ensemble")
        self._particles.append(particle)
        return len(self._particles) - 1

    def extend(self, particles: Iterable[Particle]) -> None:
        for p in particles:
            self.add(p)

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    def __getitem__(self, index: int) -> Particle:
        return self._particles[index]

    def snapshot(self) -> tuple[Particle, ...]:
        """The current slots as an immutable sequence."""
        return tuple(self._particles)

    def index_of(self, particle: Particle) -> int:
        """Slot of a particle, matched by identity rather than by state."""
        for i, p in enumerate(self._particles):
            if p is particle:
                return i
        raise ValueError("Particle is not part of this ensemble")

    def net_force(self, index: int) -> Vector3:
        """Net force on the particle in slot `index` (see compute_net_force)."""
        return compute_net_force(index, self._particles)

    def positions(self) -> np.ndarray:
        """All positions as an (N, 3) float64 array."""
        return np.array([tuple(p.position) for p in self._particles], dtype=np.float64).reshape(-1, 3)

    def velocities(self) -> np.ndarray:
        """All velocities as an (N, 3) float64 array."""
        return np.array([tuple(p.velocity) for p in self._particles], dtype=np.float64).reshape(-1, 3)

    def coincident_pairs(self) -> list[tuple[int, int]]:
        """
        Slot pairs (i, j), i < j, whose positions are exactly equal.

        These are the pairs for which the inverse-square laws fell back to
        zero force. O(N²).
        """
        pairs = []
        n = len(self._particles)
        for i in range(n):
            pi = self._particles[i].position
            for j in range(i + 1, n):
                if self._particles[j].position == pi:
                    pairs.append((i, j))
        return pairs

    def __repr__(self) -> str:
        return f"Ensemble(n={len(self._particles)}, generation={self.generation})"
