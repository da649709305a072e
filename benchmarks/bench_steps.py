"""
Microbenchmark: time per tick vs number of particles (O(N²) force sum).
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from nbody_sim import Simulation, Particle, Species
from nbody_sim.profiler import Profiler

SPECIES = [Species.PROTON, Species.NEUTRON, Species.ELECTRON]

def run(n: int, steps: int = 20, workers: int = 1):
    prof = Profiler()
    sim = Simulation(dt=1e-12, workers=workers, profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    for k in range(n):
        pos = rng.uniform(-1e-9, 1e-9, size=3)
        sim.add_particle(Particle(SPECIES[k % 3], position=pos))

    # warmup
    sim.step()

    t0 = time.perf_counter()
    for _ in range(steps):
        sim.step()
    t1 = time.perf_counter()

    sim.close()
    per_step = (t1 - t0) / steps
    return per_step, prof.stats.summary()

if __name__ == "__main__":
    for n in [10, 50, 100, 200]:
        for workers in [1, 4]:
            per_step, summary = run(n, workers=workers)
            print(f"N={n:4d} workers={workers}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
            for k in ["compute", "commit"]:
                if k in summary:
                    print(" ", k, summary[k])
        print()
