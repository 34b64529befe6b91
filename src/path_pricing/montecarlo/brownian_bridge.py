"""
Brownian-bridge path construction.

Maps D independent standard normals to D normalized Brownian increments on a
fixed grid. The first input fixes W(T), the second the point nearest the middle
of [0, T], and so on by bisection. The leading inputs therefore carry most of
the path variance, which is what makes the construction pay off with
low-discrepancy sequences and under dimension truncation.

[T1] Conditional on W(t_j) and W(t_k), W(t_l) for t_j < t_l < t_k is normal with
     mean ((t_k - t_l) W(t_j) + (t_l - t_j) W(t_k)) / (t_k - t_j)
     and variance (t_l - t_j)(t_k - t_l) / (t_k - t_j).

See: Glasserman (2003) Section 3.1
"""

import logging
from collections.abc import Iterable

import numpy as np

from path_pricing.errors import ConstructionError, SamplingError
from path_pricing.montecarlo.time_grid import TimeGrid

logger = logging.getLogger(__name__)


class BrownianBridge:
    """
    Brownian-bridge transform over a fixed time grid.

    Immutable after construction: transform() is a pure function of its input,
    so one instance can serve several generators sharing the same grid.

    Parameters
    ----------
    grid : TimeGrid or Iterable[float]
        Either a TimeGrid (its non-zero times are used) or the strictly
        increasing positive times t_1 < ... < t_D directly

    Examples
    --------
    >>> bridge = BrownianBridge(TimeGrid.uniform(1.0, 4))
    >>> bridge.size
    4
    """

    def __init__(self, grid: TimeGrid | Iterable[float]):
        if isinstance(grid, TimeGrid):
            times = np.array(grid.times[1:], dtype=float)
        else:
            times = np.array([float(t) for t in grid], dtype=float)

        if times.size == 0:
            raise ConstructionError("CRITICAL: Brownian bridge needs at least one time")
        if times[0] <= 0.0 or np.any(np.diff(times) <= 0.0):
            raise ConstructionError(
                "CRITICAL: Brownian bridge times must be positive and strictly increasing"
            )

        self._times = times
        self._size = times.size
        self._sqrt_dt = np.sqrt(np.diff(times, prepend=0.0))
        self._initialize()
        logger.debug(f"Brownian bridge built over {self._size} times (T={times[-1]})")

    def _initialize(self) -> None:
        size = self._size
        t = self._times

        bridge_index = np.zeros(size, dtype=int)
        left_index = np.zeros(size, dtype=int)
        right_index = np.zeros(size, dtype=int)
        left_weight = np.zeros(size)
        right_weight = np.zeros(size)
        std_dev = np.zeros(size)

        # point_map[k] != 0 once W(t_k) has been constructed
        point_map = np.zeros(size, dtype=int)

        point_map[size - 1] = 1
        bridge_index[0] = size - 1
        std_dev[0] = np.sqrt(t[size - 1])

        j = 0
        for i in range(1, size):
            # first unconstructed point
            while point_map[j]:
                j += 1
            # next constructed point to its right
            k = j
            while not point_map[k]:
                k += 1
            # midpoint of the unconstructed run [j, k-1]
            l = j + ((k - 1 - j) >> 1)
            point_map[l] = i

            bridge_index[i] = l
            left_index[i] = j
            right_index[i] = k
            if j != 0:
                span = t[k] - t[j - 1]
                left_weight[i] = (t[k] - t[l]) / span
                right_weight[i] = (t[l] - t[j - 1]) / span
                std_dev[i] = np.sqrt((t[l] - t[j - 1]) * (t[k] - t[l]) / span)
            else:
                left_weight[i] = (t[k] - t[l]) / t[k]
                right_weight[i] = t[l] / t[k]
                std_dev[i] = np.sqrt(t[l] * (t[k] - t[l]) / t[k])

            j = k + 1
            if j >= size:
                j = 0

        for arr in (bridge_index, left_index, right_index, left_weight, right_weight, std_dev):
            arr.flags.writeable = False

        self._bridge_index = bridge_index
        self._left_index = left_index
        self._right_index = right_index
        self._left_weight = left_weight
        self._right_weight = right_weight
        self._std_dev = std_dev

    @property
    def size(self) -> int:
        """Number of increments D."""
        return self._size

    @property
    def times(self) -> np.ndarray:
        """Positive bridge times t_1 .. t_D."""
        return self._times

    @property
    def bridge_index(self) -> np.ndarray:
        """Grid point built by the i-th input."""
        return self._bridge_index

    @property
    def std_deviation(self) -> np.ndarray:
        """Conditional standard deviation applied to the i-th input."""
        return self._std_dev

    def transform(self, variates: Iterable[float]) -> np.ndarray:
        """
        Turn independent normals into normalized path increments.

        Parameters
        ----------
        variates : Iterable[float]
            D independent standard normals

        Returns
        -------
        np.ndarray
            (W(t_i) - W(t_{i-1})) / sqrt(t_i - t_{i-1}) for i = 1..D;
            again D standard normals, independent across i

        Raises
        ------
        SamplingError
            If the input does not have D components
        """
        z = np.asarray(variates, dtype=float)
        if z.shape != (self._size,):
            raise SamplingError(
                f"CRITICAL: Brownian bridge expects {self._size} variates, got shape {z.shape}"
            )

        w = np.empty(self._size)
        w[self._size - 1] = self._std_dev[0] * z[0]
        # each point reads points built by earlier inputs
        for i in range(1, self._size):
            j = self._left_index[i]
            k = self._right_index[i]
            l = self._bridge_index[i]
            if j != 0:
                w[l] = (
                    self._left_weight[i] * w[j - 1]
                    + self._right_weight[i] * w[k]
                    + self._std_dev[i] * z[i]
                )
            else:
                w[l] = self._right_weight[i] * w[k] + self._std_dev[i] * z[i]

        return np.diff(w, prepend=0.0) / self._sqrt_dt
