# MIT License (see LICENSE)
"""
Run configuration.

SimulationConfig gathers the numeric parameters of a run in one frozen
object. Scene files carry the same keys at top level; command line flags
override them.
"""
from __future__ import annotations
import logging
import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class SimulationConfig:
    """
    Attributes:
        dt: Timestep in seconds (>= 0).
        steps: Number of ticks to run.
        workers: Threads for the compute phase (1 = inline).
        report_every: Report particle states every N ticks; 0 disables.
        log_level: Name of the logging level for the nbody_sim logger.
    """
    dt: float = 1e-3
    steps: int = 1000
    workers: int = 1
    report_every: int = 0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ValueError for any out-of-range field."""
        if not math.isfinite(self.dt) or self.dt < 0:
            raise ValueError(f"dt must be a finite number >= 0, got {self.dt}")
        if self.steps < 0:
            raise ValueError(f"steps must be >= 0, got {self.steps}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.report_every < 0:
            raise ValueError(f"report_every must be >= 0, got {self.report_every}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: '{self.log_level}'")

    @property
    def level(self) -> int:
        """log_level as a logging module constant."""
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SimulationConfig:
        """Build from a mapping, ignoring keys that are not config fields."""
        casts = {"dt": float, "steps": int, "workers": int, "report_every": int, "log_level": str}
        kwargs = {
            f.name: casts[f.name](data[f.name])
            for f in fields(cls)
            if f.name in data and data[f.name] is not None
        }
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
