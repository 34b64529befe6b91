"""
Centralized pytest fixtures for the path-pricing test suite.

This module provides shared fixtures used across all test categories:
- unit/
- properties/
- validation/

Fixture Categories:
1. Market Parameters - Standard market conditions for path simulation
2. Time Grids - Uniform and fixing-date grids
3. Test Doubles - Deterministic sequence generators and processes
"""

from dataclasses import dataclass

import numpy as np
import pytest

from path_pricing.montecarlo.time_grid import TimeGrid
from path_pricing.processes.black_scholes import BlackScholesProcess
from path_pricing.rng.sequences import SequenceSample


# =============================================================================
# TOLERANCE TIERS
# =============================================================================

@dataclass(frozen=True)
class ToleranceTiers:
    """
    Tiered tolerance framework for different test types.

    Derived from precision requirements, not ad hoc.
    """

    # Deterministic recurrences and closed forms
    analytical: float = 1e-10

    # Monte Carlo vs closed form, relative
    mc_relative: float = 0.02


TOLERANCES = ToleranceTiers()


@pytest.fixture(scope="session")
def tolerances() -> ToleranceTiers:
    """Provide tiered tolerance settings for all tests."""
    return TOLERANCES


# =============================================================================
# MARKET PARAMETERS
# =============================================================================

@dataclass(frozen=True)
class MarketParams:
    """Standard market parameters for path simulation tests."""

    spot: float = 100.0
    strike: float = 100.0
    rate: float = 0.05
    dividend: float = 0.0
    volatility: float = 0.20
    time_to_expiry: float = 1.0


@pytest.fixture
def market_params() -> MarketParams:
    """Standard ATM market parameters."""
    return MarketParams()


@pytest.fixture
def bs_process(market_params: MarketParams) -> BlackScholesProcess:
    """Black-Scholes process on the standard market."""
    return BlackScholesProcess(
        spot=market_params.spot,
        rate=market_params.rate,
        dividend=market_params.dividend,
        volatility=market_params.volatility,
    )


# =============================================================================
# TIME GRIDS
# =============================================================================

@pytest.fixture
def uniform_grid() -> TimeGrid:
    """Five monthly-ish steps over one year, no fixing at t=0."""
    return TimeGrid.uniform(1.0, 5)


@pytest.fixture
def fixing_grid() -> TimeGrid:
    """Grid whose first mandatory time is 0 (initial value is a fixing)."""
    return TimeGrid.from_mandatory_times([0.0, 0.25, 0.5, 0.75, 1.0])


# =============================================================================
# TEST DOUBLES
# =============================================================================

class FixedSequenceGenerator:
    """Returns the same vector on every draw and counts calls."""

    def __init__(self, values):
        self.values = np.array(values, dtype=float)
        self.calls = 0

    @property
    def dimension(self) -> int:
        return self.values.shape[0]

    def next_sequence(self) -> SequenceSample:
        self.calls += 1
        return SequenceSample(value=self.values)


class CountingSequenceGenerator:
    """Returns (k, k, ..., k) on the k-th draw (k from 0)."""

    def __init__(self, dimension: int):
        self._dimension = dimension
        self.calls = 0

    @property
    def dimension(self) -> int:
        return self._dimension

    def next_sequence(self) -> SequenceSample:
        value = np.full(self._dimension, float(self.calls))
        self.calls += 1
        return SequenceSample(value=value)


class ArithmeticProcess:
    """x(t+dt) = x + mu*dt + sigma*sqrt(dt)*dw, with a call log."""

    def __init__(self, x0: float = 1.0, mu: float = 0.1, sigma: float = 0.5):
        self._x0 = x0
        self.mu = mu
        self.sigma = sigma
        self.calls: list[tuple[float, float, float, float]] = []

    def x0(self) -> float:
        return self._x0

    def evolve(self, t: float, x: float, dt: float, dw: float) -> float:
        self.calls.append((t, x, dt, dw))
        return x + self.mu * dt + self.sigma * np.sqrt(dt) * dw


class TwoFactorProcess:
    """Multi-dimensional process: no one-dimensional evolve()."""

    size = 2

    def initial_values(self) -> np.ndarray:
        return np.array([100.0, 0.04])


@pytest.fixture
def fixed_generator_factory():
    """Build FixedSequenceGenerator instances."""
    return FixedSequenceGenerator


@pytest.fixture
def counting_generator_factory():
    """Build CountingSequenceGenerator instances."""
    return CountingSequenceGenerator


@pytest.fixture
def arithmetic_process() -> ArithmeticProcess:
    """Deterministic additive process with a recorded call log."""
    return ArithmeticProcess()


@pytest.fixture
def two_factor_process() -> TwoFactorProcess:
    """Process without the one-dimensional diffusion capability."""
    return TwoFactorProcess()
