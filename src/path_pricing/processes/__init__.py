"""
Stochastic processes for path simulation.

Provides:
- StochasticProcess1D protocol (x0, evolve)
- Black-Scholes-Merton process with exact log-normal stepping
"""

from path_pricing.processes.base import StochasticProcess1D
from path_pricing.processes.black_scholes import BlackScholesProcess

__all__ = [
    "BlackScholesProcess",
    "StochasticProcess1D",
]
