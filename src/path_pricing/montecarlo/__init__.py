"""
Monte Carlo path construction.

Provides:
- TimeGrid discretization with mandatory fixing times
- Path values aligned to a grid
- Brownian-bridge reordering of Gaussian draws
- PathGenerator: one path per call, with antithetic reuse
"""

from path_pricing.montecarlo.brownian_bridge import BrownianBridge
from path_pricing.montecarlo.path import Path
from path_pricing.montecarlo.path_generator import PathGenerator
from path_pricing.montecarlo.time_grid import TimeGrid

__all__ = [
    "BrownianBridge",
    "Path",
    "PathGenerator",
    "TimeGrid",
]
