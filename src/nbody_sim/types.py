# MIT License (see LICENSE)
"""
Core type definitions for the N-body simulation.

Defines the fundamental data structures:
- Vector3: immutable 3-component double-precision vector.
- Species: the closed set of particle kinds and their fixed constants.
- PhysicalProperties: the read-only surface force laws are written against.
- KinematicState: a (position, velocity) pair produced by integration.
- Particle: the simulation entity, a species tag plus mutable kinematics.

Equations of motion (Newtonian, point masses):
  - dx/dt = v
  - dv/dt = F/m
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Protocol, Sequence

import numpy as np

from .constants import (
    ELECTRON_MASS,
    ELEMENTARY_CHARGE,
    NEUTRON_MASS,
    PROTON_MASS,
)
from .util import f64

if TYPE_CHECKING:
    from .ensemble import Ensemble


# =============================================================================
# Vector3
# =============================================================================

@dataclass(frozen=True)
class Vector3:
    """
    Immutable 3D vector of doubles.

    Every operation returns a new value. Equality is exact per component;
    use isclose() when comparing results of floating-point arithmetic.

    Attributes:
        x, y, z: Components (position in m, velocity in m/s, force in N).
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def of(cls, v: Vector3 | Sequence[float] | np.ndarray) -> Vector3:
        """Build a Vector3 from another Vector3 or any length-3 sequence."""
        if isinstance(v, Vector3):
            return v
        arr = f64(v)
        if arr.shape != (3,):
            raise ValueError(f"Expected 3 components, got shape {arr.shape}")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    @classmethod
    def zero(cls) -> Vector3:
        return cls(0.0, 0.0, 0.0)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, s: float) -> Vector3:
        return Vector3(self.x * s, self.y * s, self.z * s)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> Vector3:
        return Vector3(self.x / s, self.y / s, self.z / s)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def magnitude_squared(self) -> float:
        """Squared length. Avoids sqrt where only comparisons are needed."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_squared())

    def normalized(self) -> Vector3:
        """
        Unit vector in the same direction.

        Returns the zero vector for a zero-length input instead of dividing
        by zero.
        """
        n = self.magnitude()
        if n == 0.0:
            return ZERO
        return Vector3(self.x / n, self.y / n, self.z / n)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def isclose(self, other: Vector3, rel_tol: float = 1e-9, abs_tol: float = 0.0) -> bool:
        """Component-wise math.isclose."""
        return all(
            math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
            for a, b in zip(self, other)
        )

    def to_array(self) -> np.ndarray:
        """Return the vector as a float64 numpy array of shape (3,)."""
        return f64(self)

    def __str__(self) -> str:
        return f"({self.x:.6g}, {self.y:.6g}, {self.z:.6g})"


ZERO = Vector3(0.0, 0.0, 0.0)


# =============================================================================
# Species and capability surface
# =============================================================================

class Species(Enum):
    """
    Closed set of particle kinds.

    Each member carries its display label, rest mass (kg) and charge (C).
    These are fixed for the lifetime of every particle of that kind.
    """
    ELECTRON = ("electron", ELECTRON_MASS, -ELEMENTARY_CHARGE)
    PROTON = ("proton", PROTON_MASS, ELEMENTARY_CHARGE)
    NEUTRON = ("neutron", NEUTRON_MASS, 0.0)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def mass(self) -> float:
        return self.value[1]

    @property
    def charge(self) -> float:
        return self.value[2]

    @classmethod
    def from_label(cls, label: str) -> Species:
        """Parse a species label such as "proton" (case-insensitive)."""
        key = str(label).strip().lower()
        for member in cls:
            if member.label == key:
                return member
        raise ValueError(f"Unknown species: '{label}'")


class PhysicalProperties(Protocol):
    """What force laws may ask of a particle. Nothing else is needed."""

    @property
    def mass(self) -> float: ...

    @property
    def charge(self) -> float: ...

    @property
    def position(self) -> Vector3: ...

    @property
    def velocity(self) -> Vector3: ...


@dataclass(frozen=True)
class KinematicState:
    """Position and velocity of one particle at one tick."""
    position: Vector3
    velocity: Vector3

    def is_finite(self) -> bool:
        return self.position.is_finite() and self.velocity.is_finite()


# =============================================================================
# Particle
# =============================================================================

@dataclass(eq=False)
class Particle:
    """
    A point particle of a fixed species.

    Mass and charge are read from the species and cannot be reassigned.
    Position and velocity change once per tick, through commit(), when the
    stepping protocol applies a computed KinematicState. Every assignment to
    them is coerced to Vector3 and must be finite.

    Equality is identity: two particles that happen to share a state are
    still different slots of the ensemble.

    Attributes:
        species: Which kind of particle this is.
        position: Position [x, y, z] in meters.
        velocity: Velocity [vx, vy, vz] in m/s.
    """
    species: Species
    position: Vector3 = ZERO
    velocity: Vector3 = ZERO

    def __post_init__(self) -> None:
        """Validate the species tag."""
        if not isinstance(self.species, Species):
            raise TypeError(f"species must be a Species, got {type(self.species).__name__}")

    def __setattr__(self, name: str, value) -> None:
        if name in ("position", "velocity"):
            value = Vector3.of(value)
            if not value.is_finite():
                raise ValueError(f"Non-finite {name}: {value}")
        super().__setattr__(name, value)

    @classmethod
    def electron(cls, position=ZERO, velocity=ZERO) -> Particle:
        return cls(Species.ELECTRON, position, velocity)

    @classmethod
    def proton(cls, position=ZERO, velocity=ZERO) -> Particle:
        return cls(Species.PROTON, position, velocity)

    @classmethod
    def neutron(cls, position=ZERO, velocity=ZERO) -> Particle:
        return cls(Species.NEUTRON, position, velocity)

    @property
    def mass(self) -> float:
        return self.species.mass

    @property
    def charge(self) -> float:
        return self.species.charge

    @property
    def state(self) -> KinematicState:
        return KinematicState(self.position, self.velocity)

    def next_state(
        self,
        index: int,
        snapshot: Sequence[PhysicalProperties] | Ensemble,
        dt: float,
    ) -> KinematicState:
        """
        Compute this particle's state one tick ahead.

        Args:
            index: This particle's slot in the snapshot (excluded from the sum).
            snapshot: All particles as they are at the current tick.
            dt: Timestep in seconds.

        Returns:
            The next KinematicState. The particle itself is not modified.
        """
        # Import locally to avoid circular import (forces imports types)
        from .core.forces import compute_net_force
        from .core.integrators import semi_implicit_euler

        net_force = compute_net_force(index, snapshot)
        return semi_implicit_euler(self.state, self.mass, net_force, dt)

    def commit(self, state: KinematicState) -> None:
        """Replace the current kinematics. Only the stepping protocol calls this."""
        if not state.is_finite():
            raise ValueError(f"Non-finite state for {self.species.label}: {state}")
        self.position = state.position
        self.velocity = state.velocity

    def debug_info(self) -> str:
        """Human-readable snapshot, e.g. 'Proton at position: (0, 0, 0)'."""
        return f"{self.species.label.capitalize()} at position: {self.position}"


def debug_info(particle: Particle) -> str:
    """Function form of Particle.debug_info, for logging and telemetry hooks."""
    return particle.debug_info()
