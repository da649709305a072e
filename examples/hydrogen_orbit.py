from nbody_sim import Simulation, Particle
from nbody_sim.core.invariants import kinetic_energy, center_of_mass

# Classical Bohr-model electron on a circular orbit; period ~1.5e-16 s.
BOHR_RADIUS = 5.29177e-11
ORBITAL_SPEED = 2.18769e6

sim = Simulation(dt=1e-19)
nucleus = Particle.proton()
electron = Particle.electron(position=(BOHR_RADIUS, 0.0, 0.0), velocity=(0.0, ORBITAL_SPEED, 0.0))
sim.add_particle(nucleus); sim.add_particle(electron)

ke0 = kinetic_energy(sim.particles)
for _ in range(1520):   # about one orbit
    sim.step()

print("electron:", electron.debug_info())
print("radius:", (electron.position - nucleus.position).magnitude(), "expected", BOHR_RADIUS)
print("KE drift:", kinetic_energy(sim.particles) / ke0 - 1.0)
print("centre of mass:", center_of_mass(sim.particles))
