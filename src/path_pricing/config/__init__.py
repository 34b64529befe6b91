"""Configuration and tolerances for path-pricing."""

from path_pricing.config.settings import (
    PricingConfig,
    SETTINGS,
    Settings,
    SimulationConfig,
)
from path_pricing.config.tolerances import get_tolerance, mc_tolerance

__all__ = [
    "PricingConfig",
    "SETTINGS",
    "Settings",
    "SimulationConfig",
    "get_tolerance",
    "mc_tolerance",
]
