# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Force laws: gravity, electrostatics, strong and weak placeholders.
    - Net-force aggregation over an ensemble.
    - The semi-implicit Euler update rule.
    - Conserved-quantity diagnostics.

Typical usage:
    from nbody_sim.core import compute_net_force, semi_implicit_euler

    force = compute_net_force(0, particles)
    state = semi_implicit_euler(particles[0].state, particles[0].mass, force, dt=1e-3)
"""
from .forces import (
    FORCE_LAWS,
    compute_net_force,
    electrostatic_force,
    gravitational_force,
    pairwise_force,
    strong_force,
    weak_force,
)
from .integrators import semi_implicit_euler
from .invariants import center_of_mass, kinetic_energy, linear_momentum

__all__ = [
    # Forces
    "FORCE_LAWS",
    "gravitational_force",
    "electrostatic_force",
    "strong_force",
    "weak_force",
    "pairwise_force",
    "compute_net_force",
    # Integrators
    "semi_implicit_euler",
    # Diagnostics
    "kinetic_energy",
    "linear_momentum",
    "center_of_mass",
]
