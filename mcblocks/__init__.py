"""Building blocks for Monte Carlo particle transport: geometry, Doppler weights, matrix exponential, point kinetics and fission yields."""

__version__ = "0.1.0"