"""
Path generation from a Gaussian sequence generator.

Builds one simulated path per call by feeding a buffered Gaussian draw,
optionally reordered through a Brownian bridge, into a one-dimensional
process's discretization step.

[T1] S(t_i) = evolve(t_{i-1}, S(t_{i-1}), dt_{i-1}, Z_{i-1}),  S(t_0) = x0

The recurrence is strictly sequential: step i reads the value produced by
step i-1. Parallelize across independent generators (one per worker), never
across the steps of one path.

See: Glasserman (2003) Ch. 3 - Generating sample paths
"""

import logging

import numpy as np

from path_pricing.config.settings import SETTINGS
from path_pricing.errors import ConstructionError, SamplingError
from path_pricing.montecarlo.brownian_bridge import BrownianBridge
from path_pricing.montecarlo.path import Path
from path_pricing.montecarlo.time_grid import TimeGrid
from path_pricing.processes.base import StochasticProcess1D
from path_pricing.rng.buffer import RandomSequenceBuffer
from path_pricing.rng.sequences import SequenceGenerator, SequenceSample

logger = logging.getLogger(__name__)


def _require_process_1d(process: object) -> StochasticProcess1D:
    if process is None:
        raise ConstructionError("CRITICAL: process cannot be null")
    if not (
        isinstance(process, StochasticProcess1D)
        and callable(process.x0)
        and callable(process.evolve)
    ):
        raise ConstructionError(
            f"CRITICAL: process must be one-dimensional (x0, evolve), "
            f"got {type(process).__name__}"
        )
    return process


class PathGenerator:
    """
    Random path generator.

    Owns a RandomSequenceBuffer wrapped around the supplied generator; holds a
    shared reference to the process. Not thread-safe.

    Parameters
    ----------
    process : StochasticProcess1D
        Process to simulate (exposes x0() and evolve(t, x, dt, dw))
    time_grid : TimeGrid
        Simulation grid with N steps
    generator : SequenceGenerator
        Gaussian sequence generator of dimension N
    use_bridge : bool, optional
        Reorder draws through a Brownian bridge
        (default: SETTINGS.simulation.use_brownian_bridge)

    Raises
    ------
    ConstructionError
        If the process is not one-dimensional or the generator dimension
        differs from the number of steps

    Examples
    --------
    >>> from path_pricing.processes import BlackScholesProcess
    >>> from path_pricing.rng import PseudoRandomSequenceGenerator
    >>> process = BlackScholesProcess(spot=100.0, rate=0.05, dividend=0.0, volatility=0.2)
    >>> grid = TimeGrid.uniform(1.0, 12)
    >>> generator = PathGenerator(process, grid, PseudoRandomSequenceGenerator(12, seed=42))
    >>> path = generator.next()
    >>> len(path), path.front
    (13, 100.0)
    """

    def __init__(
        self,
        process: StochasticProcess1D,
        time_grid: TimeGrid,
        generator: SequenceGenerator,
        use_bridge: bool | None = None,
    ):
        self._process = _require_process_1d(process)
        dimension = time_grid.size - 1
        if dimension <= 0:
            raise ConstructionError(f"CRITICAL: timeSteps must be positive, got {dimension}")
        if generator.dimension != dimension:
            raise ConstructionError(
                f"CRITICAL: sequence generator dimensionality ({generator.dimension}) "
                f"!= timeSteps ({dimension})"
            )
        if use_bridge is None:
            use_bridge = SETTINGS.simulation.use_brownian_bridge

        self._dimension = dimension
        self._time_grid = time_grid
        self._use_bridge = bool(use_bridge)
        self._bridge = BrownianBridge(time_grid)
        self._buffer = RandomSequenceBuffer(generator, dimension)
        self._has_drawn = False

        logger.info(
            f"Path generator ready: {dimension} steps to T={time_grid.back}, "
            f"brownian_bridge={self._use_bridge}"
        )

    @classmethod
    def from_length(
        cls,
        process: StochasticProcess1D,
        length: float,
        time_steps: int,
        generator: SequenceGenerator,
        use_bridge: bool | None = None,
    ) -> "PathGenerator":
        """
        Build a generator on a uniform grid over [0, length].

        Parameters
        ----------
        length : float
            Simulation horizon (years)
        time_steps : int
            Number of steps (> 0); also the required generator dimension
        """
        if time_steps <= 0:
            raise ConstructionError(f"CRITICAL: timeSteps must be positive, got {time_steps}")
        return cls(process, TimeGrid.uniform(length, time_steps), generator, use_bridge)

    @property
    def size(self) -> int:
        """Number of time steps (dimension of each draw)."""
        return self._dimension

    @property
    def time_grid(self) -> TimeGrid:
        return self._time_grid

    @property
    def use_bridge(self) -> bool:
        return self._use_bridge

    @property
    def process(self) -> StochasticProcess1D:
        return self._process

    @property
    def buffer(self) -> RandomSequenceBuffer:
        """Underlying sequence buffer (for diagnostics)."""
        return self._buffer

    def next(self) -> Path:
        """
        Draw fresh randomness and build a path.

        Consumes one sequence from the buffer.

        Returns
        -------
        Path
            Simulated path on the generator's grid
        """
        sample = self._buffer.next_sequence()
        self._has_drawn = True
        return self._build(sample, antithetic=False)

    def antithetic(self) -> Path:
        """
        Build the antithetic path of the last draw.

        Reuses the sequence behind the most recent next() with every
        increment negated; no new randomness is consumed.

        Raises
        ------
        SamplingError
            If next() has not been called on this generator
        """
        if not self._has_drawn:
            raise SamplingError(
                "CRITICAL: antithetic() requires a prior next() on the same generator"
            )
        return self._build(self._buffer.last_sequence(), antithetic=True)

    def _build(self, sample: SequenceSample, antithetic: bool) -> Path:
        if self._use_bridge:
            increments = self._bridge.transform(sample.value)
        else:
            increments = np.array(sample.value, dtype=float)
        if antithetic:
            increments = -increments

        grid = self._time_grid
        process = self._process
        values = np.empty(grid.size)
        values[0] = process.x0()
        for i in range(1, grid.size):
            values[i] = process.evolve(grid[i - 1], values[i - 1], grid.dt(i - 1), increments[i - 1])

        return Path(time_grid=grid, values=values, weight=sample.weight)
