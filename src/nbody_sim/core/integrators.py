# MIT License (see LICENSE)
"""
Time integration for point particles.

Solves dx/dt = v, dv/dt = F/m with the semi-implicit (symplectic) Euler
scheme:
    v(t+dt) = v(t) + a(t) * dt
    x(t+dt) = x(t) + v(t+dt) * dt

The position update uses the new velocity, not the old one. That ordering
is what separates it from explicit Euler and keeps orbits bounded for
small dt.

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations

from ..types import KinematicState, Vector3


def semi_implicit_euler(
    state: KinematicState,
    mass: float,
    net_force: Vector3,
    dt: float,
) -> KinematicState:
    """
    Advance one particle's kinematics by dt under a constant force.

    The arithmetic is performed in a fixed order (scale by 1/m, then by dt)
    so results are reproducible bit-for-bit.

    Args:
        state: Current position and velocity.
        mass: Particle mass in kg. Always positive for a valid species.
        net_force: Force held constant over the step, in N.
        dt: Timestep in seconds.

    Returns:
        The state at t + dt.
    """
    acceleration = net_force * (1.0 / mass)
    new_velocity = state.velocity + acceleration * dt
    new_position = state.position + new_velocity * dt
    return KinematicState(new_position, new_velocity)
