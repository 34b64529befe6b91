"""
path-pricing: Monte Carlo path simulation for path-dependent option pricing.

Quick Start
-----------
>>> from path_pricing import (
...     ArithmeticAPOPathPricer, BlackScholesProcess, OptionType, PathGenerator,
...     PseudoRandomSequenceGenerator, TimeGrid,
... )
>>> process = BlackScholesProcess(spot=100.0, rate=0.05, dividend=0.0, volatility=0.20)
>>> grid = TimeGrid.from_mandatory_times([0.2, 0.4, 0.6, 0.8, 1.0])
>>> generator = PathGenerator(process, grid, PseudoRandomSequenceGenerator(5, seed=42))
>>> pricer = ArithmeticAPOPathPricer(OptionType.CALL, strike=100.0, discount=0.95)
>>> payoff = pricer(generator.next())
>>> payoff_antithetic = pricer(generator.antithetic())

Averaging many payoffs into a price estimate is left to the caller.

Version: 0.1.0
"""

__version__ = "0.1.0"

# =============================================================================
# Errors
# =============================================================================
from path_pricing.errors import (
    ConstructionError,
    EvaluationError,
    PathPricingError,
    SamplingError,
)

# =============================================================================
# Random Sequences
# =============================================================================
from path_pricing.rng import (
    PseudoRandomSequenceGenerator,
    RandomSequenceBuffer,
    SequenceGenerator,
    SequenceSample,
    SobolSequenceGenerator,
)

# =============================================================================
# Path Construction
# =============================================================================
from path_pricing.montecarlo import BrownianBridge, Path, PathGenerator, TimeGrid
from path_pricing.processes import BlackScholesProcess, StochasticProcess1D

# =============================================================================
# Pricers
# =============================================================================
from path_pricing.pricers import (
    ArithmeticAPOPathPricer,
    GeometricAPOPathPricer,
    OptionType,
    PlainVanillaPayoff,
    discrete_geometric_average_price,
)

# =============================================================================
# Configuration
# =============================================================================
from path_pricing.config.settings import SETTINGS

__all__ = [
    "__version__",
    # Errors
    "ConstructionError",
    "EvaluationError",
    "PathPricingError",
    "SamplingError",
    # Random sequences
    "PseudoRandomSequenceGenerator",
    "RandomSequenceBuffer",
    "SequenceGenerator",
    "SequenceSample",
    "SobolSequenceGenerator",
    # Path construction
    "BlackScholesProcess",
    "BrownianBridge",
    "Path",
    "PathGenerator",
    "StochasticProcess1D",
    "TimeGrid",
    # Pricers
    "ArithmeticAPOPathPricer",
    "GeometricAPOPathPricer",
    "OptionType",
    "PlainVanillaPayoff",
    "discrete_geometric_average_price",
    # Configuration
    "SETTINGS",
]
