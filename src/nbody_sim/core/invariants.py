# MIT License (see LICENSE)
"""
Conserved quantities of a particle system.

Used for verifying simulation correctness. With only internal pairwise
forces, linear momentum is conserved exactly by the force laws (Newton's
third law) and approximately by the integrator; the centre of mass of an
isolated system moves at constant velocity.
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from ..types import PhysicalProperties


def kinetic_energy(particles: Iterable[PhysicalProperties]) -> float:
    """
    Total kinetic energy T = Σ 0.5 * m * v², in Joules.
    """
    ke = 0.0
    for p in particles:
        ke += 0.5 * p.mass * p.velocity.magnitude_squared()
    return ke


def linear_momentum(particles: Iterable[PhysicalProperties]) -> np.ndarray:
    """
    Total linear momentum P = Σ m * v, as [Px, Py, Pz] in kg·m/s.
    """
    p_total = np.zeros(3, dtype=np.float64)
    for p in particles:
        p_total += p.mass * p.velocity.to_array()
    return p_total


def center_of_mass(particles: Iterable[PhysicalProperties]) -> np.ndarray:
    """
    Mass-weighted mean position [x, y, z] in meters.

    Returns the origin for an empty collection.
    """
    weighted = np.zeros(3, dtype=np.float64)
    total_mass = 0.0
    for p in particles:
        weighted += p.mass * p.position.to_array()
        total_mass += p.mass
    if total_mass == 0.0:
        return weighted
    return weighted / total_mass
