# MIT License (see LICENSE)
"""
Input/Output utilities for simulation scenes.

This subpackage provides:
    - JSON serialization: Save and load simulations to/from JSON files.
    - Round-trip support: A saved simulation loads back with identical state.

Typical usage:
    from nbody_sim.io import load_simulation, save_simulation

    sim = load_simulation("hydrogen.json")
    sim.run(1000)
    save_simulation(sim, "hydrogen_after.json")
"""
from .json_io import (
    load_config,
    load_scene_raw,
    load_simulation,
    simulation_from_json,
    save_simulation,
    simulation_to_json,
    particles_to_json,
    particle_to_json,
    particle_from_json,
)

__all__ = [
    # Loading
    "load_config",
    "load_scene_raw",
    "load_simulation",
    "simulation_from_json",
    # Saving
    "save_simulation",
    # Serialization
    "simulation_to_json",
    "particles_to_json",
    "particle_to_json",
    "particle_from_json",
]
