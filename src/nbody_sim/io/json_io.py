# MIT License (see LICENSE)
"""
JSON serialization and deserialization for simulation scenes.

A scene is the initial (or a saved intermediate) population plus the run
parameters. The format is human-readable and round-trips exactly: floats
are written with repr precision by the json module.

JSON Schema Overview:
---------------------
{
  "dt": float,                     # Timestep (sec), default: 1e-3
  "steps": int,                    # Ticks for a command line run, default: 1000
  "workers": int,                  # Compute-phase threads, default: 1
  "report_every": int,             # Optional, default: 0
  "time": float,                   # Simulated time already elapsed, default: 0
  "particles": [
    {
      "species": "electron" | "proton" | "neutron",   # Required
      "position": [x, y, z],       # Default: [0, 0, 0]
      "velocity": [vx, vy, vz]     # Default: [0, 0, 0]
    }
  ]
}
"""
from __future__ import annotations
import json
import logging
from typing import Any, Iterable

from ..config import SimulationConfig
from ..simulation import Simulation
from ..types import Particle, Species, Vector3
from ..util import to_list

logger = logging.getLogger(__name__)


def load_scene_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a scene file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.

    Returns:
        Dictionary containing the raw JSON data.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_config(path: str) -> SimulationConfig:
    """Read only the run parameters of a scene file."""
    return SimulationConfig.from_dict(load_scene_raw(path))


def simulation_from_json(data: dict[str, Any]) -> Simulation:
    """
    Construct a Simulation from parsed scene data.

    Raises:
        ValueError: If a particle definition is invalid.
    """
    config = SimulationConfig.from_dict(data)
    sim = Simulation.from_config(config)
    sim.time = float(data.get("time", 0.0))

    for i, particle_data in enumerate(data.get("particles", [])):
        try:
            sim.add_particle(particle_from_json(particle_data))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid particle definition at index {i}: {exc}") from exc

    return sim


def load_simulation(path: str) -> Simulation:
    """
    Load and construct a ready-to-run Simulation from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If a particle or parameter is invalid.
    """
    sim = simulation_from_json(load_scene_raw(path))
    logger.info("Loaded %d particles from %s", len(sim.ensemble), path)
    return sim


def particle_from_json(d: dict[str, Any]) -> Particle:
    """
    Parse a single particle definition.

    Args:
        d: Dictionary with "species" and optional "position"/"velocity".

    Returns:
        Initialized Particle.
    """
    if "species" not in d:
        raise ValueError("Particle definition missing required 'species' field.")

    species = Species.from_label(d["species"])
    position = _vector(d.get("position", [0.0, 0.0, 0.0]), "position")
    velocity = _vector(d.get("velocity", [0.0, 0.0, 0.0]), "velocity")
    return Particle(species, position, velocity)


def particle_to_json(particle: Particle) -> dict[str, Any]:
    """Serialize a Particle to a dictionary (round-trip compatible)."""
    return {
        "species": particle.species.label,
        "position": to_list(particle.position),
        "velocity": to_list(particle.velocity),
    }


def particles_to_json(particles: Iterable[Particle]) -> list[dict[str, Any]]:
    """Serialize particles to a JSON-compatible list, preserving slot order."""
    return [particle_to_json(p) for p in particles]


def simulation_to_json(sim: Simulation, steps: int | None = None) -> dict[str, Any]:
    """
    Serialize a Simulation to a dictionary.

    Captures the run parameters, elapsed time and every particle's state.
    """
    result: dict[str, Any] = {
        "dt": sim.dt,
        "particles": particles_to_json(sim.particles),
    }
    if steps is not None:
        result["steps"] = steps
    if sim.workers != 1:
        result["workers"] = sim.workers
    if sim.time != 0.0:
        result["time"] = sim.time
    return result


def save_simulation(sim: Simulation, path: str, indent: int = 2, steps: int | None = None) -> None:
    """Save a Simulation to a JSON file on disk."""
    data = simulation_to_json(sim, steps=steps)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)
    logger.info("Saved %d particles to %s", len(sim.ensemble), path)


def _vector(value: Any, name: str) -> Vector3:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(f"'{name}' must be a list of 3 numbers, got {value!r}")
    return Vector3.of([float(v) for v in value])
