# MIT License (see LICENSE)
"""
nbody_sim - A 3D N-body simulation of electrons, protons and neutrons.

Particles interact through gravity, electrostatics and two short-range
nuclear placeholders. Every tick is advanced in two phases: all next states
are computed from the same snapshot, then committed together, so results
do not depend on the order of the ensemble.

Main entry points:
    - Simulation: Driver owning the ensemble (step, run, explicit phases).
    - Particle, Species: The simulated entities.
    - Vector3: Immutable 3D vector.
    - step, compute_net_force, debug_info: Core operations.

Submodules:
    - core: Force laws, integrator, invariants.
    - io: JSON scene serialization.
    - reporting: Tick observers for logging and recording.

Example:
    from nbody_sim import Simulation, Particle

    sim = Simulation(dt=1e-3)
    sim.add_particle(Particle.proton(position=(-0.5, 0, 0)))
    sim.add_particle(Particle.proton(position=(0.5, 0, 0)))
    sim.step()
"""
from .config import SimulationConfig
from .core.forces import compute_net_force
from .ensemble import Ensemble
from .simulation import Simulation
from .stepping import PendingTick, StaleTickError, commit_phase, compute_phase, step
from .types import KinematicState, Particle, PhysicalProperties, Species, Vector3, debug_info

__all__ = [
    # Simulation
    "Simulation",
    "SimulationConfig",
    "Ensemble",
    # Entities
    "Particle",
    "Species",
    "PhysicalProperties",
    "KinematicState",
    "Vector3",
    # Operations
    "step",
    "compute_phase",
    "commit_phase",
    "PendingTick",
    "StaleTickError",
    "compute_net_force",
    "debug_info",
]
