# Drive the two phases separately, as an external scheduler would.
from nbody_sim import Simulation, Particle
from nbody_sim.reporting import StreamReporter

reporter = StreamReporter()
with Simulation(dt=1e-3, workers=4) as sim:
    sim.add_particle(Particle.proton(position=(0.0, 0.0, 0.0)))
    sim.add_particle(Particle.electron(position=(1.0, 0.0, 0.0)))
    sim.add_particle(Particle.neutron(position=(0.0, 1.0, 0.0)))

    for _ in range(3):
        pending = sim.compute_phase()   # nobody moves yet
        sim.commit_phase(pending)       # everybody moves together
        reporter.report_simulation(sim)
