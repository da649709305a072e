import math

import pytest
from nbody_sim.constants import ELECTRON_MASS, ELEMENTARY_CHARGE, NEUTRON_MASS, PROTON_MASS
from nbody_sim.core.forces import compute_net_force
from nbody_sim.types import KinematicState, Particle, Species, Vector3, debug_info

def test_species_constants():
    e, p, n = Particle.electron(), Particle.proton(), Particle.neutron()

    assert e.mass == ELECTRON_MASS and e.charge == -ELEMENTARY_CHARGE
    assert p.mass == PROTON_MASS and p.charge == ELEMENTARY_CHARGE
    assert n.mass == NEUTRON_MASS and n.charge == 0.0
    for particle in (e, p, n):
        assert particle.mass > 0

def test_species_constants_are_read_only():
    p = Particle.proton()
    with pytest.raises(AttributeError):
        p.mass = 1.0
    with pytest.raises(AttributeError):
        p.charge = 0.0
    with pytest.raises(AttributeError):
        Species.PROTON.mass = 0.0
    with pytest.raises(AttributeError):
        Species.ELECTRON.charge = 0.0
    with pytest.raises(AttributeError):
        Species.NEUTRON.label = "muon"
    assert Particle.proton().mass == PROTON_MASS

def test_construction_fails_fast_on_invalid_input():
    with pytest.raises(TypeError):
        Particle("proton")
    with pytest.raises(ValueError):
        Particle.proton(position=(math.nan, 0.0, 0.0))
    with pytest.raises(ValueError):
        Particle.electron(velocity=(0.0, math.inf, 0.0))

def test_kinematics_are_coerced_to_vector3():
    p = Particle.neutron(position=[1, 2, 3], velocity=(4.0, 5.0, 6.0))
    assert p.position == Vector3(1.0, 2.0, 3.0)
    assert p.velocity == Vector3(4.0, 5.0, 6.0)
    assert p.state == KinematicState(Vector3(1.0, 2.0, 3.0), Vector3(4.0, 5.0, 6.0))

def test_kinematics_assignment_is_validated():
    p = Particle.proton()
    p.position = (1, 2, 3)
    assert p.position == Vector3(1.0, 2.0, 3.0)

    with pytest.raises(ValueError):
        p.velocity = (math.nan, 0.0, 0.0)
    with pytest.raises(ValueError):
        p.position = (1.0, 2.0)
    assert p.position == Vector3(1.0, 2.0, 3.0)
    assert p.velocity == Vector3(0.0, 0.0, 0.0)

def test_equality_is_identity():
    """Two particles in the same state are still two different slots."""
    a = Particle.proton(position=(1.0, 0.0, 0.0))
    b = Particle.proton(position=(1.0, 0.0, 0.0))
    assert a != b
    assert a == a

def test_species_from_label():
    assert Species.from_label("proton") is Species.PROTON
    assert Species.from_label(" Electron ") is Species.ELECTRON
    with pytest.raises(ValueError):
        Species.from_label("muon")

def test_debug_info():
    assert debug_info(Particle.proton(position=(1.0, 2.0, 3.0))) == "Proton at position: (1, 2, 3)"
    assert Particle.electron().debug_info().startswith("Electron at position:")
    assert Particle.neutron().debug_info().startswith("Neutron at position:")

def test_next_state_is_semi_implicit_euler_bit_for_bit():
    """
    v' = v + (F/m) dt, then x' = x + v' dt using the new velocity.
    Reproduced here with the same operations in the same order.
    """
    nucleus = Particle.proton()
    e = Particle.electron(position=(1e-9, 0.0, 0.0), velocity=(0.0, 1e3, 0.0))
    snapshot = (nucleus, e)
    dt = 1e-15

    state = e.next_state(1, snapshot, dt)

    force = compute_net_force(1, snapshot)
    acceleration = force * (1.0 / e.mass)
    v_new = e.velocity + acceleration * dt
    x_new = e.position + v_new * dt
    assert state.velocity == v_new
    assert state.position == x_new

    # Explicit Euler would have used the old velocity for the position
    assert state.position != e.position + e.velocity * dt

def test_next_state_does_not_mutate():
    a = Particle.proton(position=(-0.5, 0.0, 0.0))
    b = Particle.proton(position=(0.5, 0.0, 0.0))
    before = a.state
    a.next_state(0, (a, b), 1e-3)
    assert a.state == before

def test_commit_replaces_kinematics():
    p = Particle.neutron()
    p.commit(KinematicState(Vector3(1.0, 1.0, 1.0), Vector3(2.0, 2.0, 2.0)))
    assert p.position == Vector3(1.0, 1.0, 1.0)
    assert p.velocity == Vector3(2.0, 2.0, 2.0)
    assert p.species is Species.NEUTRON

def test_commit_rejects_non_finite_state():
    p = Particle.neutron(position=(1.0, 0.0, 0.0))
    with pytest.raises(ValueError):
        p.commit(KinematicState(Vector3(2.0, 0.0, 0.0), Vector3(0.0, math.inf, 0.0)))
    assert p.state == KinematicState(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0))
