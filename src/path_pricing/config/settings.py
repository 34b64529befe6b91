"""
Centralized configuration for path-pricing.

All defaults are frozen dataclasses; import the SETTINGS singleton rather than
instantiating sub-configs in library code.

See: config/tolerances.py for numerical tolerances
"""

from dataclasses import dataclass

from path_pricing.config.tolerances import ANTI_PATTERN_TOLERANCE
from path_pricing.errors import ConstructionError


# =============================================================================
# Simulation Configuration
# =============================================================================

@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable path simulation configuration.

    Attributes
    ----------
    buffer_block_size : int
        Number of sequences pre-drawn per buffer refill
    default_seed : int
        Random seed for reproducible examples and tests
    use_brownian_bridge : bool
        Default for the Brownian-bridge flag of path generators
    normal_clip : float
        Distance from 0 and 1 at which uniforms are clipped before the
        inverse normal CDF (quasi-random generators)
    sobol_max_dimension : int
        Largest dimension supported by scipy's Sobol direction numbers
    sobol_initial_chunk : int
        First power-of-two chunk drawn from a Sobol sampler
    """

    buffer_block_size: int = 50
    default_seed: int = 42
    use_brownian_bridge: bool = True
    normal_clip: float = 1e-10
    sobol_max_dimension: int = 21201
    sobol_initial_chunk: int = 64

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.buffer_block_size <= 0:
            raise ConstructionError(
                f"CRITICAL: buffer_block_size must be > 0, got {self.buffer_block_size}"
            )
        if not 0.0 < self.normal_clip < 0.5:
            raise ConstructionError(
                f"CRITICAL: normal_clip must be in (0, 0.5), got {self.normal_clip}"
            )
        chunk = self.sobol_initial_chunk
        if chunk <= 0 or chunk & (chunk - 1) != 0:
            raise ConstructionError(
                f"CRITICAL: sobol_initial_chunk must be a power of two, got {chunk}"
            )


# =============================================================================
# Pricing Configuration
# =============================================================================

@dataclass(frozen=True)
class PricingConfig:
    """
    Immutable path pricer configuration.

    Attributes
    ----------
    default_discount : float
        Discount factor used when none is supplied
    fixing_time_tolerance : float
        Absolute tolerance when matching grid times to fixing times
    """

    default_discount: float = 1.0
    fixing_time_tolerance: float = ANTI_PATTERN_TOLERANCE


# =============================================================================
# Master Configuration
# =============================================================================

@dataclass(frozen=True)
class Settings:
    """
    Master frozen configuration combining all sub-configs.

    Usage
    -----
    >>> from path_pricing.config.settings import SETTINGS
    >>> SETTINGS.simulation.buffer_block_size
    50
    """

    simulation: SimulationConfig = SimulationConfig()
    pricing: PricingConfig = PricingConfig()


# Singleton instance - import this
SETTINGS = Settings()
