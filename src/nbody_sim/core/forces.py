# MIT License (see LICENSE)
"""
Pairwise force laws and net-force aggregation.

Each law is a pure function returning the force on the first particle due
to the second. They share one shape (radial, inverse-square, guarded at
zero separation) so an interaction is simply their vector sum.

Key concepts:
- Coincident particles (r = 0) exert no force on each other. This is a
  defined fallback, not an error.
- The strong term is a placeholder with a hard cutoff at
  STRONG_FORCE_RANGE; the weak term is always zero.
- compute_net_force is O(N) per particle, O(N²) per tick. There is no
  broad-phase acceleration.
"""
from __future__ import annotations
from typing import Callable, Sequence

from ..constants import G, K_COULOMB, STRONG_FORCE_CONSTANT, STRONG_FORCE_RANGE
from ..types import PhysicalProperties, Vector3, ZERO


def _inverse_square(strength: float, p1: Vector3, p2: Vector3) -> Vector3:
    """strength / r² along the unit vector from p1 to p2; zero when r² == 0."""
    d = p2 - p1
    r2 = d.magnitude_squared()
    if r2 == 0.0:
        return ZERO
    return d.normalized() * (strength / r2)


def gravitational_force(m1: float, m2: float, p1: Vector3, p2: Vector3) -> Vector3:
    """
    Newtonian gravity on body 1 due to body 2.

    Implements F = G * m1 * m2 / r², directed from p1 toward p2.

    Args:
        m1, m2: Masses in kg.
        p1, p2: Positions in m.

    Returns:
        Force on body 1 in N. Zero vector when the points coincide.
    """
    return _inverse_square(G * m1 * m2, p1, p2)


def electrostatic_force(q1: float, q2: float, p1: Vector3, p2: Vector3) -> Vector3:
    """
    Coulomb force on charge 1 due to charge 2.

    Implements F = k * q1 * q2 / r². Like charges (q1*q2 > 0) push body 1
    away from p2, unlike charges pull it toward p2.

    Args:
        q1, q2: Charges in C.
        p1, p2: Positions in m.

    Returns:
        Force on charge 1 in N. Zero vector when the points coincide.
    """
    return _inverse_square(-K_COULOMB * q1 * q2, p1, p2)


def strong_force(p1: Vector3, p2: Vector3) -> Vector3:
    """
    Short-range nuclear attraction placeholder.

    F = k_s / r² toward p2 for 0 < r <= STRONG_FORCE_RANGE, zero otherwise.
    The band is tested on r itself so the boundary at exactly
    STRONG_FORCE_RANGE is included.
    """
    d = p2 - p1
    r = d.magnitude()
    if r == 0.0 or r > STRONG_FORCE_RANGE:
        return ZERO
    return d.normalized() * (STRONG_FORCE_CONSTANT / (r * r))


def weak_force(p1: Vector3, p2: Vector3) -> Vector3:
    """Weak interaction placeholder. Always zero."""
    return ZERO


# Pairwise adapters over the capability surface, summed in this order.
PairForce = Callable[[PhysicalProperties, PhysicalProperties], Vector3]

FORCE_LAWS: tuple[PairForce, ...] = (
    lambda a, b: gravitational_force(a.mass, b.mass, a.position, b.position),
    lambda a, b: electrostatic_force(a.charge, b.charge, a.position, b.position),
    lambda a, b: strong_force(a.position, b.position),
    lambda a, b: weak_force(a.position, b.position),
)


def pairwise_force(a: PhysicalProperties, b: PhysicalProperties) -> Vector3:
    """Total force on a due to b: the sum of every law in FORCE_LAWS."""
    total = ZERO
    for law in FORCE_LAWS:
        total = total + law(a, b)
    return total


def compute_net_force(index: int, particles: Sequence[PhysicalProperties]) -> Vector3:
    """
    Net force on the particle in slot `index` from every other slot.

    The self-term is skipped by slot position, never by comparing state:
    two particles may share a position at some instant and still both
    count. Contributions are summed in ensemble order so identical runs
    give identical floating-point results.

    Args:
        index: Slot of the subject particle.
        particles: The ensemble (or a snapshot of it) at the current tick.

    Returns:
        Net force in N. Zero vector for a single-particle ensemble.

    Raises:
        IndexError: If index is not a valid slot.
    """
    n = len(particles)
    if not 0 <= index < n:
        raise IndexError(f"Particle slot {index} out of range for ensemble of {n}")

    subject = particles[index]
    total = ZERO
    for j in range(n):
        if j == index:
            continue
        total = total + pairwise_force(subject, particles[j])
    return total
