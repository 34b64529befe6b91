"""
Stochastic process interface consumed by path generators.

Path generators only need the one-dimensional diffusion capability: an
initial value and a discretization step. Anything exposing both can be
simulated, including test doubles.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class StochasticProcess1D(Protocol):
    """Protocol for one-dimensional diffusions."""

    def x0(self) -> float:
        """Initial value of the process."""
        ...

    def evolve(self, t: float, x: float, dt: float, dw: float) -> float:
        """
        Value after one step.

        Parameters
        ----------
        t : float
            Start time of the step
        x : float
            Process value at ``t``
        dt : float
            Step length
        dw : float
            Standard normal driving the step (not scaled by sqrt(dt))

        Returns
        -------
        float
            Process value at ``t + dt``
        """
        ...
