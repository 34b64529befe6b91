"""
Numerical tolerances for path simulation and path pricing.

Two tiers, each tied to an error source rather than tuned to make tests pass:

    Tier 1 (Deterministic): float64 round-off in recurrences and closed forms
    Tier 2 (Stochastic): sampling error of Monte Carlo averages, from the CLT

References:
    [T1] Higham (2002) "Accuracy and Stability of Numerical Algorithms"
    [T1] Glasserman (2003) Ch. 3-4 - Monte Carlo error bounds
"""

from typing import Final

import numpy as np

# =============================================================================
# Tier 1: Deterministic Tolerances
# =============================================================================
# machine_epsilon (~2.2e-16) times the number of accumulated operations,
# with headroom for paths of a few hundred steps.

#: Hard invariants: non-negative payoffs, grid-time matching
ANTI_PATTERN_TOLERANCE: Final[float] = 1e-10

#: Same draw through the same evolve() recurrence
PATH_RECURRENCE_TOLERANCE: Final[float] = 1e-12

#: Bridge increments re-summed to W(T) = sqrt(T) * z[0]
BRIDGE_RECONSTRUCTION_TOLERANCE: Final[float] = 1e-10


# =============================================================================
# Tier 2: Stochastic Tolerances
# =============================================================================
# A seeded estimate over N paths sits within k standard errors of the
# true value with CLT probability; k = 3 leaves ~0.3% of seeds failing.


def mc_tolerance(n_paths: int, sigma: float = 0.20, confidence: float = 3.0) -> float:
    """
    Half-width of a CLT confidence band for an N-path average.

    [T1] tolerance = confidence · σ / √N

    Parameters
    ----------
    n_paths : int
        Number of simulated paths (> 0)
    sigma : float, default 0.20
        Standard deviation of one path's payoff, relative to notional
    confidence : float, default 3.0
        Band width in standard errors

    Returns
    -------
    float
        Absolute tolerance on the path average

    Examples
    --------
    >>> round(mc_tolerance(10_000), 6)
    0.006
    """
    if n_paths <= 0:
        raise ValueError(f"CRITICAL: n_paths must be > 0, got {n_paths}")
    return confidence * sigma / np.sqrt(n_paths)


#: mc_tolerance(10_000) with the defaults
MC_10K_TOLERANCE: Final[float] = 0.006

#: Relative gap allowed between a simulated average-price and its closed form
BS_MC_CONVERGENCE_TOLERANCE: Final[float] = 0.01


# =============================================================================
# Lookup by name
# =============================================================================

TOLERANCE_REGISTRY: dict[str, float] = {
    "anti_pattern": ANTI_PATTERN_TOLERANCE,
    "path_recurrence": PATH_RECURRENCE_TOLERANCE,
    "bridge_reconstruction": BRIDGE_RECONSTRUCTION_TOLERANCE,
    "mc_10k": MC_10K_TOLERANCE,
    "bs_mc_convergence": BS_MC_CONVERGENCE_TOLERANCE,
}


def get_tolerance(name: str) -> float:
    """
    Look up a tolerance by registry name.

    Raises
    ------
    KeyError
        If ``name`` is not registered; the message lists the valid names
    """
    try:
        return TOLERANCE_REGISTRY[name]
    except KeyError:
        available = ", ".join(sorted(TOLERANCE_REGISTRY))
        raise KeyError(f"Unknown tolerance '{name}'. Available: {available}") from None
