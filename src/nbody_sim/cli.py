# MIT License (see LICENSE)
"""
Command line entry point.

    nbody-sim scene.json --steps 1000 --dt 1e-6 --output after.json

Flow:
  1) Parse arguments and set up logging.
  2) Load the scene; command line flags override its run parameters.
  3) Run, reporting through the log every --report-every ticks.
  4) Log conserved-quantity drift and optionally save the final scene.
"""
from __future__ import annotations
import argparse
import logging
from typing import Sequence

import numpy as np

from .config import SimulationConfig
from .core.invariants import kinetic_energy, linear_momentum
from .io import load_scene_raw, save_simulation, simulation_from_json
from .logging_config import setup_logging
from .profiler import Profiler
from .reporting import LogReporter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="nbody-sim",
        description="Electron/proton/neutron N-body simulator (two-phase semi-implicit Euler)",
    )
    p.add_argument("scene", type=str,
                   help="JSON scene file with the initial particles.")
    p.add_argument("--steps", type=int, default=None,
                   help="Number of ticks to run (overrides the scene file).")
    p.add_argument("--dt", type=float, default=None,
                   help="Timestep in seconds (overrides the scene file).")
    p.add_argument("--workers", type=int, default=None,
                   help="Threads for the compute phase (overrides the scene file).")
    p.add_argument("--report-every", type=int, default=None,
                   help="Log every particle's position every N ticks (0 = never).")
    p.add_argument("--log-level", type=str, default=None,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging level for the nbody_sim logger.")
    p.add_argument("--log-file", type=str, default=None,
                   help="Also write the log to this file.")
    p.add_argument("--output", type=str, default=None,
                   help="Write the final scene to this JSON file.")
    p.add_argument("--profile", action="store_true",
                   help="Log per-phase timing after the run.")
    return p


def resolve_config(args: argparse.Namespace, scene: dict) -> SimulationConfig:
    """Merge scene-file parameters with command line overrides."""
    overrides = {
        "dt": args.dt,
        "steps": args.steps,
        "workers": args.workers,
        "report_every": args.report_every,
        "log_level": args.log_level,
    }
    merged = dict(scene)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return SimulationConfig.from_dict(merged)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    scene = load_scene_raw(args.scene)
    config = resolve_config(args, scene)
    setup_logging(config.level, args.log_file)

    sim = simulation_from_json({**scene, **config.to_dict()})
    if args.profile:
        sim.profiler = Profiler()

    ke0 = kinetic_energy(sim.particles)
    p0 = linear_momentum(sim.particles)

    with sim:
        sim.run(config.steps, reporter=LogReporter(level=logging.INFO), report_every=config.report_every)

    ke1 = kinetic_energy(sim.particles)
    p1 = linear_momentum(sim.particles)
    logger.info("Kinetic energy: %.6e J -> %.6e J", ke0, ke1)
    logger.info("Momentum drift |dP|: %.6e kg·m/s", float(np.linalg.norm(p1 - p0)))

    if sim.profiler:
        for name, stats in sim.profiler.stats.summary().items():
            logger.info("%s: n=%d mean=%.3f ms max=%.3f ms",
                        name, stats["n"], stats["mean_ms"], stats["max_ms"])

    if args.output:
        save_simulation(sim, args.output, steps=config.steps)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
