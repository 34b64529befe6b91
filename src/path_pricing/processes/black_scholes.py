"""
Black-Scholes-Merton process with flat parameters.

[T1] SDE: dS = (r - q) S dt + σ S dW

Discretized with the exact log-normal step, so paths carry no
discretization bias regardless of step size:

    S(t+dt) = S(t) * exp((r - q - σ²/2) dt + σ √dt Z)

See: Glasserman (2003) Section 3.2
"""

from dataclasses import dataclass

import numpy as np

from path_pricing.errors import ConstructionError


@dataclass(frozen=True)
class BlackScholesProcess:
    """
    Geometric Brownian motion under the risk-neutral measure.

    Attributes
    ----------
    spot : float
        Initial value S(0)
    rate : float
        Risk-free rate (annualized, continuously compounded)
    dividend : float
        Dividend yield (annualized, continuously compounded)
    volatility : float
        Volatility (annualized)

    Examples
    --------
    >>> process = BlackScholesProcess(spot=100.0, rate=0.05, dividend=0.0, volatility=0.20)
    >>> process.evolve(0.0, 100.0, 1.0, 0.0) > 100.0
    True
    """

    spot: float
    rate: float
    dividend: float
    volatility: float

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.spot <= 0:
            raise ConstructionError(f"CRITICAL: spot must be > 0, got {self.spot}")
        if self.volatility < 0:
            raise ConstructionError(
                f"CRITICAL: volatility must be >= 0, got {self.volatility}"
            )

    @property
    def drift(self) -> float:
        """Log drift: r - q - σ²/2."""
        return self.rate - self.dividend - 0.5 * self.volatility**2

    def x0(self) -> float:
        return self.spot

    def diffusion(self, t: float, x: float) -> float:
        """Diffusion coefficient σ S."""
        return self.volatility * x

    def expectation(self, t: float, x: float, dt: float) -> float:
        """[T1] E[S(t+dt) | S(t)=x] = x exp((r - q) dt)."""
        return x * np.exp((self.rate - self.dividend) * dt)

    def std_deviation(self, t: float, x: float, dt: float) -> float:
        """[T1] Std of S(t+dt) given S(t)=x: E · sqrt(exp(σ² dt) - 1)."""
        return self.expectation(t, x, dt) * np.sqrt(np.expm1(self.volatility**2 * dt))

    def forward(self, time: float) -> float:
        """Forward price: S * exp((r-q)*T)."""
        return self.spot * np.exp((self.rate - self.dividend) * time)

    def evolve(self, t: float, x: float, dt: float, dw: float) -> float:
        return x * np.exp(self.drift * dt + self.volatility * np.sqrt(dt) * dw)
