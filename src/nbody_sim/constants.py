# MIT License (see LICENSE)
"""
Physical constants used throughout the simulation.

All values are SI. The species constants follow CODATA 2014, the nuclear
force constants are illustrative placeholders rather than measured values.
"""
from __future__ import annotations

# Newtonian constant of gravitation, N·m²/kg²
# Reference: https://physics.nist.gov/cgi-bin/cuu/Value?bg
G: float = 6.67430e-11

# Coulomb's constant, k = 1/(4πε₀), N·m²/C²
# Reference: https://physics.nist.gov/cgi-bin/cuu/Value?k
K_COULOMB: float = 8.9875517923e9

# Strong-force placeholder: F = k_s / r² inside the range, zero outside.
# Not derived from any potential.
STRONG_FORCE_CONSTANT: float = 1.0

# Upper bound (inclusive) of the strong-force band, in position units (m).
STRONG_FORCE_RANGE: float = 1e-15

# Elementary charge, C
ELEMENTARY_CHARGE: float = 1.60217662e-19

# Rest masses, kg
ELECTRON_MASS: float = 9.10938356e-31
PROTON_MASS: float = 1.6726219e-27
NEUTRON_MASS: float = 1.674927471e-27
