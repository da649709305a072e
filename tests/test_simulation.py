import logging

import pytest
from nbody_sim.config import SimulationConfig
from nbody_sim.profiler import Profiler
from nbody_sim.reporting import BufferedReporter
from nbody_sim.simulation import Simulation
from nbody_sim.stepping import StaleTickError
from nbody_sim.types import Particle

def two_protons(**kwargs) -> Simulation:
    sim = Simulation(**kwargs)
    sim.add_particle(Particle.proton(position=(-0.5, 0.0, 0.0)))
    sim.add_particle(Particle.proton(position=(0.5, 0.0, 0.0)))
    return sim

def test_step_advances_time_and_tick():
    sim = two_protons(dt=1e-3)
    sim.step()
    sim.step(2e-3)
    assert sim.tick == 2
    assert sim.time == pytest.approx(3e-3)
    assert sim.particles[0].position.x < -0.5

def test_explicit_phases_match_step():
    stepped = two_protons(dt=1e-3)
    phased = two_protons(dt=1e-3)

    stepped.step()
    pending = phased.compute_phase()
    assert phased.particles[0].position.x == -0.5  # not yet committed
    phased.commit_phase(pending)

    for a, b in zip(stepped.particles, phased.particles):
        assert a.state == b.state

def test_threaded_simulation_keeps_one_pool():
    with two_protons(workers=3) as sim:
        sim.step()
        pool = sim._executor
        assert pool is not None
        sim.run(3)
        assert sim._executor is pool
    assert sim._executor is None

def test_inline_simulation_starts_no_pool():
    sim = two_protons(workers=1)
    sim.run(2)
    assert sim._executor is None
    sim.close()
    assert phased.tick == 1

def test_batch_cannot_be_committed_twice():
    sim = two_protons()
    pending = sim.compute_phase()
    sim.commit_phase(pending)
    state = sim.particles[0].state

    with pytest.raises(StaleTickError):
        sim.commit_phase(pending)
    assert sim.tick == 1
    assert sim.particles[0].state == state

def test_adding_a_particle_invalidates_pending_batch():
    sim = two_protons()
    pending = sim.compute_phase()
    sim.add_particle(Particle.electron(position=(0.0, 1.0, 0.0)))

    with pytest.raises(StaleTickError):
        sim.commit_phase(pending)
    assert sim.tick == 0
    assert sim.time == 0.0

    # a fresh batch includes the new particle
    sim.commit_phase(sim.compute_phase())
    assert sim.tick == 1

def test_run_reports_every_n_ticks():
    sim = two_protons(dt=1e-3)
    reporter = BufferedReporter()
    sim.run(4, reporter=reporter, report_every=2)

    assert [f["tick"] for f in reporter.frames] == [0, 2, 4]
    assert len(reporter.frames[-1]["particles"]) == 2
    assert reporter.frames[-1]["particles"][1]["species"] == "proton"

def test_run_with_reporting_disabled():
    sim = two_protons()
    reporter = BufferedReporter()
    sim.run(3, reporter=reporter, report_every=0)
    assert reporter.frames == []
    assert sim.tick == 3

def test_coincident_particles_are_reported_not_resolved():
    seen = []
    sim = Simulation(dt=1e-3, on_coincident=lambda a, b: seen.append((a, b)))
    a = sim.ensemble[sim.add_particle(Particle.neutron(position=(1.0, 1.0, 1.0)))]
    b = sim.ensemble[sim.add_particle(Particle.neutron(position=(1.0, 1.0, 1.0)))]

    sim.step()

    assert seen == [(a, b)]
    # zero-distance fallback: no force, nobody moves
    assert a.position == b.position
    assert a.velocity.magnitude() == 0.0

def test_profiler_records_both_phases():
    prof = Profiler()
    sim = two_protons(profiler=prof)
    sim.run(5)
    summary = prof.stats.summary()
    assert summary["compute"]["n"] == 5
    assert summary["commit"]["n"] == 5
    assert summary["compute"]["max_ms"] >= summary["compute"]["mean_ms"] >= 0.0

def test_threaded_simulation_matches_inline():
    inline = two_protons(workers=1)
    with two_protons(workers=3) as threaded:
        inline.run(10)
        threaded.run(10)
    for a, b in zip(inline.particles, threaded.particles):
        assert a.state == b.state

def test_from_config():
    sim = Simulation.from_config(SimulationConfig(dt=2e-3, workers=2))
    assert sim.dt == 2e-3
    assert sim.workers == 2

@pytest.mark.parametrize("kwargs", [{"dt": -1.0}, {"workers": 0}])
def test_invalid_parameters(kwargs):
    with pytest.raises(ValueError):
        Simulation(**kwargs)

def test_run_logs_start_and_end(caplog):
    caplog.set_level(logging.INFO, logger="nbody_sim")
    two_protons().run(2)
    assert "Running 2 ticks" in caplog.text
    assert "Finished at tick 2" in caplog.text
