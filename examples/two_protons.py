# examples/two_protons.py
from nbody_sim import Simulation, Particle

sim = Simulation(dt=1e-3)

a = Particle.proton(position=(-0.5, 0.0, 0.0))
b = Particle.proton(position=(+0.5, 0.0, 0.0))
sim.add_particle(a); sim.add_particle(b)

for _ in range(1000):
    sim.step()

print("t:", sim.time)
print(a.debug_info(), "v", a.velocity)
print(b.debug_info(), "v", b.velocity)
print("separation:", (b.position - a.position).magnitude())
